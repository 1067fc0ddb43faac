import pytest

from fixedwire.serialization import BufferOverflowError, Deserializer, Serializer
from fixedwire.serialization.adapters import MaxBytesExceededError
from fixedwire.types import U8, U16, U32


def test_max_bytes_serializer() -> None:
    se = Serializer.build_bytes_serializer()
    limited = se.with_max_bytes(3)
    limited.write_type(U16, 1)
    with pytest.raises(MaxBytesExceededError):
        limited.write_type(U16, 2)
    # the failed write didn't reach the inner serializer
    assert se.data() == b'\x01\x00'


def test_max_bytes_serializer_write_at_counts_growth_only() -> None:
    se = Serializer.build_bytes_serializer()
    limited = se.with_max_bytes(4)
    limited.write_type(U32, 0)
    # overwriting doesn't grow the buffer
    limited.write_type_at(U16, 0xFFFF, 0)
    with pytest.raises(MaxBytesExceededError):
        limited.write_type_at(U16, 0xFFFF, 3)
    assert se.data() == b'\xff\xff\x00\x00'


def test_max_bytes_serializer_failed_write_keeps_budget() -> None:
    se = Serializer.build_bytes_serializer()
    limited = se.with_max_bytes(1)
    with pytest.raises(ValueError):
        limited.write_byte(256)
    limited.write_byte(255)
    assert se.data() == b'\xff'


def test_optional_max_bytes() -> None:
    se = Serializer.build_bytes_serializer()
    assert se.with_optional_max_bytes(None) is se
    de = Deserializer.build_bytes_deserializer(b'')
    assert de.with_optional_max_bytes(None) is de


def test_max_bytes_deserializer() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x00\x02\x00')
    limited = de.with_max_bytes(3)
    assert limited.read_type(U16) == 1
    with pytest.raises(MaxBytesExceededError):
        limited.read_type(U16)
    assert de.cur_pos() == 2


def test_max_bytes_deserializer_read_all() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02\x03')
    with pytest.raises(MaxBytesExceededError):
        de.with_max_bytes(2).read_all()

    de = Deserializer.build_bytes_deserializer(b'\x01\x02\x03')
    assert bytes(de.with_max_bytes(3).read_all()) == b'\x01\x02\x03'


def test_max_bytes_deserializer_failed_read_keeps_budget() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02\x03')
    limited = de.with_max_bytes(4)
    with pytest.raises(BufferOverflowError):
        limited.read_type(U32)
    assert limited.cur_pos() == 0
    # the failed read didn't spend any of the 4 bytes
    assert bytes(limited.read_bytes(3)) == b'\x01\x02\x03'
    with pytest.raises(MaxBytesExceededError):
        limited.read_bytes(2)


def test_max_bytes_deserializer_random_access() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02\x03\x04')
    limited = de.with_max_bytes(2)
    assert limited.read_type_at(U16, 2) == 0x0403
    assert limited.cur_pos() == 0
    assert limited.remaining() == 4


def test_max_bytes_deserializer_limits_random_access() -> None:
    de = Deserializer.build_bytes_deserializer(bytes(range(8)))
    limited = de.with_max_bytes(1)
    with pytest.raises(MaxBytesExceededError):
        limited.read_type_at(U32, 0)
    assert limited.read_type(U8) == 0
    # the fork gets only what is left of the budget
    with pytest.raises(MaxBytesExceededError):
        limited.read_type_at(U8, 4)
