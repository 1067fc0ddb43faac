from enum import Enum, auto

import pytest

from fixedwire.codecs import EnumCodec, decode, encode, make_codec, size_of
from fixedwire.serialization import BytesDeserializer, InvalidSchemaError, InvalidVariantError
from fixedwire.types import I8, I16, U8, U32, U64, TaggedEnum, TaggedIntEnum, tag_type


@tag_type(I8)
class Ordinal(TaggedEnum):
    FIRST = 1
    SECOND = 2
    THIRD = 3


@tag_type(U32)
class Sparse(TaggedIntEnum):
    LOW = 0
    MID = 70000
    HIGH = 4294967295


@tag_type(I16)
class Signed(TaggedEnum):
    NEGATIVE = -300
    ZERO = 0


@tag_type(U8)
class WithAlias(TaggedEnum):
    ON = 1
    OFF = 0
    ENABLED = 1


def test_enum_variant_encoding() -> None:
    assert encode(Ordinal, Ordinal.SECOND) == b'\x02'
    assert decode(Ordinal, b'\x02') is Ordinal.SECOND


def test_enum_invalid_variant() -> None:
    de = BytesDeserializer(b'\x09\x01')
    with pytest.raises(InvalidVariantError) as exc_info:
        de.read_type(Ordinal)
    assert exc_info.value.enum_class is Ordinal
    assert exc_info.value.value == 9
    assert '9 is not a valid discriminant for Ordinal' in str(exc_info.value)
    # the tag stays consumed
    assert de.cur_pos() == 1
    assert de.read_type(Ordinal) is Ordinal.FIRST


def test_enum_size_is_tag_size() -> None:
    assert size_of(Ordinal) == 1
    assert size_of(Sparse) == 4
    assert size_of(Signed) == 2
    for variant in Sparse:
        assert len(encode(Sparse, variant)) == 4


def test_enum_wide_tag() -> None:
    assert encode(Sparse, Sparse.MID).hex() == '70110100'
    assert decode(Sparse, bytes.fromhex('ffffffff')) is Sparse.HIGH


def test_enum_negative_discriminant() -> None:
    assert encode(Signed, Signed.NEGATIVE).hex() == 'd4fe'
    assert decode(Signed, bytes.fromhex('d4fe')) is Signed.NEGATIVE
    with pytest.raises(InvalidVariantError):
        decode(Signed, bytes.fromhex('0100'))


def test_enum_aliases_decode_to_canonical_member() -> None:
    assert WithAlias.ENABLED is WithAlias.ON
    assert encode(WithAlias, WithAlias.ENABLED) == b'\x01'
    assert decode(WithAlias, b'\x01') is WithAlias.ON


def test_enum_wrong_value_type() -> None:
    with pytest.raises(TypeError):
        encode(Ordinal, 2)
    with pytest.raises(TypeError):
        encode(Ordinal, Signed.ZERO)


def test_enum_codec_class() -> None:
    codec = make_codec(Ordinal)
    assert isinstance(codec, EnumCodec)
    assert codec.enum_class is Ordinal


def test_enum_without_tag_type() -> None:
    class Untagged(TaggedEnum):
        A = 1

    with pytest.raises(InvalidSchemaError, match='has no tag type'):
        make_codec(Untagged)


def test_enum_with_non_integer_tag_type() -> None:
    @tag_type(float)
    class FloatTagged(TaggedEnum):
        A = 1

    with pytest.raises(InvalidSchemaError, match='fixed width integer'):
        make_codec(FloatTagged)


@pytest.mark.parametrize('value', ['a', (1, 2), 2.5, None, b'\x02'])
def test_enum_variant_without_int_discriminant(value) -> None:
    @tag_type(U8)
    class CarriesData(TaggedEnum):
        A = 1
        B = value

    with pytest.raises(InvalidSchemaError, match='CarriesData.B'):
        make_codec(CarriesData)


def test_enum_discriminant_out_of_tag_range() -> None:
    @tag_type(U8)
    class TooBig(TaggedEnum):
        A = 256

    @tag_type(U64)
    class Negative(TaggedEnum):
        A = -1

    with pytest.raises(InvalidSchemaError, match='does not fit in U8'):
        make_codec(TooBig)
    with pytest.raises(InvalidSchemaError, match='does not fit in U64'):
        make_codec(Negative)


def test_enum_without_variants() -> None:
    @tag_type(U8)
    class Nothing(TaggedEnum):
        pass

    assert size_of(Nothing) == 1
    with pytest.raises(InvalidVariantError):
        decode(Nothing, b'\x00')


def test_enum_bool_discriminant() -> None:
    @tag_type(U8)
    class Flagged(TaggedEnum):
        YES = True

    with pytest.raises(InvalidSchemaError):
        make_codec(Flagged)


def test_enum_needs_tagged_base() -> None:
    @tag_type(U8)
    class Plain(Enum):
        A = auto()

    with pytest.raises(InvalidSchemaError, match='must derive from TaggedEnum'):
        make_codec(Plain)


@pytest.mark.parametrize('base', [TaggedEnum, TaggedIntEnum])
def test_enum_implicit_discriminant(base) -> None:
    with pytest.raises(InvalidSchemaError, match='B needs an explicit discriminant'):
        @tag_type(U8)
        class Implicit(base):
            A = 1
            B = auto()
