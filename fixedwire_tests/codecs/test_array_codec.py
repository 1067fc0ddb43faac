import pytest

from fixedwire.codecs import ArrayCodec, TupleCodec, decode, encode, make_codec, size_of
from fixedwire.serialization import BufferOverflowError, BytesDeserializer, InvalidSchemaError
from fixedwire.types import F32, I8, U8, U16, U32, Array


@pytest.mark.parametrize('length', [1, 2, 16, 31, 32])
def test_array_lengths(length: int) -> None:
    type_ = Array[U16, length]
    assert size_of(type_) == 2 * length
    value = tuple(range(length))
    data = encode(type_, value)
    assert len(data) == 2 * length
    assert decode(type_, data) == value


def test_array_layout() -> None:
    assert encode(Array[U16, 3], (1, 2, 3)).hex() == '010002000300'
    assert encode(Array[I8, 2], [-1, 1]).hex() == 'ff01'


def test_array_of_arrays() -> None:
    type_ = Array[Array[U8, 2], 3]
    assert size_of(type_) == 6
    assert decode(type_, bytes(range(6))) == ((0, 1), (2, 3), (4, 5))


def test_array_codec_class() -> None:
    codec = make_codec(Array[U32, 4])
    assert isinstance(codec, ArrayCodec)
    assert codec.length == 4
    assert codec.size == 16


def test_array_above_maximum_length() -> None:
    with pytest.raises(InvalidSchemaError, match='above the maximum of 32'):
        make_codec(Array[U8, 33])


def test_array_invalid_length_parameter() -> None:
    with pytest.raises(TypeError):
        Array[U8, 0]
    with pytest.raises(TypeError):
        Array[U8, -1]
    with pytest.raises(TypeError):
        Array[U8, True]
    with pytest.raises(TypeError):
        Array[U8, '2']
    with pytest.raises(TypeError):
        Array[U8]


def test_array_is_annotation_only() -> None:
    with pytest.raises(TypeError):
        Array()


@pytest.mark.parametrize('value', [(1, 2), (1, 2, 3, 4), []])
def test_array_wrong_length(value) -> None:
    with pytest.raises(ValueError):
        encode(Array[U8, 3], value)


def test_array_wrong_type() -> None:
    with pytest.raises(TypeError):
        encode(Array[U8, 2], b'\x01\x02')
    with pytest.raises(TypeError):
        encode(Array[U8, 2], {1, 2})


def test_array_invalid_item() -> None:
    codec = make_codec(Array[U8, 2])
    with pytest.raises(ValueError):
        codec.check_value((1, 256))


def test_array_truncated_input_stops_at_item() -> None:
    de = BytesDeserializer(b'\x01\x00\x02')
    with pytest.raises(BufferOverflowError):
        de.read_type(Array[U16, 2])
    # the first item was decoded before the failure
    assert de.cur_pos() == 2


def test_tuple_codec() -> None:
    type_ = tuple[U8, F32, Array[I8, 2]]
    codec = make_codec(type_)
    assert isinstance(codec, TupleCodec)
    assert codec.size == 1 + 4 + 2
    value = (7, 0.5, (-1, -2))
    data = encode(type_, value)
    assert data.hex() == '07' '0000003f' 'fffe'
    assert decode(type_, data) == value


def test_empty_tuple_is_unit() -> None:
    assert size_of(tuple[()]) == 0
    assert encode(tuple[()], ()) == b''
    assert decode(tuple[()], b'') == ()


def test_tuple_wrong_length() -> None:
    with pytest.raises(ValueError):
        encode(tuple[U8, U8], (1,))


@pytest.mark.parametrize('type_', [tuple[U8, ...], tuple])
def test_variable_tuple_rejected(type_) -> None:
    with pytest.raises(InvalidSchemaError):
        make_codec(type_)
