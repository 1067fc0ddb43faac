from pathlib import Path

import pytest
from pydantic import ValidationError

from fixedwire.codecs import make_codec
from fixedwire.conf import CodecSettings, get_global_settings
from fixedwire.conf import get_settings
from fixedwire.conf.utils import load_yaml_settings
from fixedwire.serialization import InvalidSchemaError
from fixedwire.serialization.adapters import MaxBytesExceededError
from fixedwire.types import U8, U32, Array

FIXTURES_DIR = Path(__file__).parent / 'fixtures'


def test_default_settings() -> None:
    settings = CodecSettings()
    assert settings.MAX_ARRAY_LENGTH == 32
    assert settings.MAX_WRITE_BYTES is None
    assert settings.MAX_READ_BYTES is None
    assert settings.CHECK_ENCODED_SIZE is True


def test_settings_are_frozen() -> None:
    settings = CodecSettings()
    with pytest.raises(ValidationError):
        settings.MAX_ARRAY_LENGTH = 4


def test_valid_settings_from_yaml() -> None:
    filepath = str(FIXTURES_DIR / 'valid_codec_settings_fixture.yml')
    expected = CodecSettings(MAX_ARRAY_LENGTH=8, MAX_WRITE_BYTES=64, CHECK_ENCODED_SIZE=False)
    assert load_yaml_settings(CodecSettings, filepath=filepath) == expected
    assert CodecSettings.from_yaml(filepath=filepath) == expected


def test_extended_settings_from_yaml() -> None:
    filepath = str(FIXTURES_DIR / 'extended_codec_settings_fixture.yml')
    assert CodecSettings.from_yaml(filepath=filepath) == CodecSettings(
        MAX_ARRAY_LENGTH=8,
        MAX_WRITE_BYTES=64,
        MAX_READ_BYTES=16,
        CHECK_ENCODED_SIZE=True,
    )


@pytest.mark.parametrize(
    ['filename', 'error'],
    [
        ('invalid_codec_settings_fixture.yml', 'MAX_ARRAY_LENGTH must be at least 1, got 0'),
        ('unknown_key_codec_settings_fixture.yml', 'Extra inputs are not permitted'),
    ]
)
def test_invalid_settings_from_yaml(filename: str, error: str) -> None:
    with pytest.raises(ValidationError) as e:
        CodecSettings.from_yaml(filepath=str(FIXTURES_DIR / filename))
    assert error in str(e.value)


def test_missing_settings_file() -> None:
    with pytest.raises(ValueError, match='is not a file'):
        CodecSettings.from_yaml(filepath=str(FIXTURES_DIR / 'missing.yml'))


def test_negative_byte_limit() -> None:
    with pytest.raises(ValidationError):
        CodecSettings(MAX_READ_BYTES=-1)


def test_global_settings_from_env(monkeypatch) -> None:
    filepath = str(FIXTURES_DIR / 'valid_codec_settings_fixture.yml')
    monkeypatch.setattr(get_settings, '_settings_singleton', None)
    monkeypatch.setenv(get_settings.CONFIG_YAML_ENV_VAR, filepath)

    settings = get_global_settings()
    assert settings.MAX_ARRAY_LENGTH == 8
    assert get_global_settings() is settings
    assert get_settings.get_settings_source() == filepath

    monkeypatch.setenv(get_settings.CONFIG_YAML_ENV_VAR, str(FIXTURES_DIR / 'extended_codec_settings_fixture.yml'))
    with pytest.raises(Exception, match='loading config twice with a different file'):
        get_global_settings()


def test_max_array_length_setting(codec_settings) -> None:
    codec_settings(MAX_ARRAY_LENGTH=4)
    assert make_codec(Array[U8, 4]).size == 4
    with pytest.raises(InvalidSchemaError, match='above the maximum of 4'):
        make_codec(Array[U8, 5])


def test_max_write_bytes_setting(codec_settings) -> None:
    codec_settings(MAX_WRITE_BYTES=3)
    codec = make_codec(U32)
    with pytest.raises(MaxBytesExceededError):
        codec.to_bytes(1)
    assert make_codec(Array[U8, 3]).to_bytes((1, 2, 3)) == b'\x01\x02\x03'


def test_max_read_bytes_setting(codec_settings) -> None:
    codec_settings(MAX_READ_BYTES=2)
    with pytest.raises(MaxBytesExceededError):
        make_codec(U32).from_bytes(b'\x00\x00\x00\x00')
    assert make_codec(U8).from_bytes(b'\x07') == 7
