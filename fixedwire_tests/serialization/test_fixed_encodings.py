import math
import struct

import pytest


def _test_bounds_struct_pack(fmt: str, lower_bound: int, upper_bound: int) -> None:
    struct.pack(fmt, lower_bound)
    with pytest.raises(struct.error):
        struct.pack(fmt, lower_bound - 1)
    struct.pack(fmt, upper_bound)
    with pytest.raises(struct.error):
        struct.pack(fmt, upper_bound + 1)


@pytest.mark.parametrize(
    ['codec_name', 'fmt', 'lower_bound', 'upper_bound'],
    [
        ('I8Codec', 'b', -128, 127),
        ('U8Codec', 'B', 0, 255),
        ('I16Codec', 'h', -32768, 32767),
        ('U16Codec', 'H', 0, 65535),
        ('I32Codec', 'i', -2147483648, 2147483647),
        ('U32Codec', 'I', 0, 4294967295),
        ('I64Codec', 'q', -9223372036854775808, 9223372036854775807),
        ('U64Codec', 'Q', 0, 18446744073709551615),
    ]
)
def test_sized_int_bounds(codec_name: str, fmt: str, lower_bound: int, upper_bound: int) -> None:
    from fixedwire import codecs
    codec_class = getattr(codecs, codec_name)

    assert codec_class.lower_bound_value() == lower_bound
    assert codec_class.upper_bound_value() == upper_bound
    assert codec_class().size == struct.calcsize(fmt)

    _test_bounds_struct_pack(fmt, lower_bound, upper_bound)


@pytest.mark.parametrize(['length', 'signed'], [(1, True), (2, False), (4, True), (8, False)])
def test_int_encoding_matches_struct(length: int, signed: bool) -> None:
    from fixedwire.serialization import Deserializer, Serializer
    from fixedwire.serialization.encoding.int import decode_int, encode_int
    fmt = '<' + {1: 'b', 2: 'h', 4: 'i', 8: 'q'}[length]
    if not signed:
        fmt = fmt.upper()
    value = 1 if not signed else -(2 ** (length * 8 - 1))
    se = Serializer.build_bytes_serializer()
    encode_int(se, value, length=length, signed=signed)
    encoded = bytes(se.finalize())
    assert encoded == struct.pack(fmt, value)
    assert decode_int(Deserializer.build_bytes_deserializer(encoded), length=length, signed=signed) == value


def test_int_encoding_out_of_range() -> None:
    from fixedwire.serialization import Serializer
    from fixedwire.serialization.encoding.int import encode_int
    se = Serializer.build_bytes_serializer()
    with pytest.raises(ValueError, match='does not fit in 1 bytes'):
        encode_int(se, 256, length=1, signed=False)
    with pytest.raises(ValueError):
        encode_int(se, -1, length=4, signed=False)
    assert se.cur_pos() == 0


def test_float_encoding_special_values() -> None:
    from fixedwire.serialization import Deserializer, Serializer
    from fixedwire.serialization.encoding.float import decode_float, encode_float
    se = Serializer.build_bytes_serializer()
    encode_float(se, math.inf, length=4)
    encode_float(se, -0.0, length=8)
    encode_float(se, math.nan, length=8)
    de = Deserializer.build_bytes_deserializer(se.finalize())
    assert decode_float(de, length=4) == math.inf
    negative_zero = decode_float(de, length=8)
    assert negative_zero == 0.0 and math.copysign(1.0, negative_zero) == -1.0
    assert math.isnan(decode_float(de, length=8))


def test_float_encoding_invalid_length() -> None:
    from fixedwire.serialization import Serializer
    from fixedwire.serialization.encoding.float import encode_float
    with pytest.raises(ValueError, match='unsupported float length'):
        encode_float(Serializer.build_bytes_serializer(), 1.0, length=2)


def test_encode_array_wrong_length() -> None:
    from fixedwire.serialization import Serializer
    from fixedwire.serialization.encoding.int import encode_int
    from fixedwire.serialization.compound_encoding.array import encode_array

    def encode_u8(serializer, value):
        encode_int(serializer, value, length=1, signed=False)

    with pytest.raises(ValueError, match='expected 3 elements, got 2'):
        encode_array(Serializer.build_bytes_serializer(), [1, 2], encode_u8, length=3)
