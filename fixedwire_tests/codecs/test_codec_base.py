import unittest
from unittest.mock import patch

from typing_extensions import override

from fixedwire.codecs import Codec, U8Codec, make_codec
from fixedwire.serialization import BytesSerializer, Deserializer, Serializer
from fixedwire.types import U8, Array


class ShortWriteCodec(Codec[int]):
    """Claims a size of 2 but only writes 1 byte."""

    def __init__(self) -> None:
        self.size = 2

    @override
    def _check_value(self, value: int, /, *, deep: bool) -> None:
        if not isinstance(value, int):
            raise TypeError('expected int')

    @override
    def _serialize(self, serializer: Serializer, value: int, /) -> None:
        serializer.write_byte(value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> int:
        return deserializer.read_byte()


class CodecBaseTestCase(unittest.TestCase):
    def test_size_mismatch_is_detected(self) -> None:
        codec = ShortWriteCodec()
        with self.assertRaises(AssertionError):
            codec.serialize(BytesSerializer(), 1)

    def test_size_check_can_be_disabled(self) -> None:
        from fixedwire.conf import get_settings
        from fixedwire.conf.settings import CodecSettings

        metadata = get_settings._SettingsMetadata(source=None, settings=CodecSettings(CHECK_ENCODED_SIZE=False))
        with patch.object(get_settings, '_settings_singleton', metadata), \
                patch.dict('os.environ', clear=False) as environ:
            environ.pop(get_settings.CONFIG_YAML_ENV_VAR, None)
            se = BytesSerializer()
            ShortWriteCodec().serialize(se, 1)
            self.assertEqual(se.data(), b'\x01')

    def test_size_check_setting_is_read_once_per_call(self) -> None:
        import fixedwire.conf

        codec = make_codec(Array[U8, 4])
        with patch.object(fixedwire.conf, 'get_global_settings', wraps=fixedwire.conf.get_global_settings) as mocked:
            codec.serialize(BytesSerializer(), (1, 2, 3, 4))
            codec.serialize(BytesSerializer(), (5, 6, 7, 8))
        # once for each outermost call, none for the array items
        self.assertEqual(mocked.call_count, 2)

    def test_local_codec_is_not_usable_in_type_map(self) -> None:
        with self.assertRaises(TypeError):
            ShortWriteCodec._from_type(int, type_map=Codec.TypeMap({}, {}))

    def test_check_value_does_not_write(self) -> None:
        codec = U8Codec()
        with self.assertRaises(ValueError):
            codec.check_value(300)
        se = BytesSerializer()
        with self.assertRaises(ValueError):
            codec.serialize(se, 300)
        self.assertEqual(se.cur_pos(), 0)

    def test_deserialize_checks_produced_value(self) -> None:
        class BrokenCodec(U8Codec):
            @override
            def _deserialize(self, deserializer: Deserializer, /) -> int:
                deserializer.read_byte()
                return 1000

        with self.assertRaises(AssertionError):
            BrokenCodec().from_bytes(b'\x00')
