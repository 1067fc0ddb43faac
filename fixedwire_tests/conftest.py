import os
import sys

import pytest
import structlog
from hypothesis import settings

from fixedwire.conf import get_settings

# Default profile: balanced speed and coverage
settings.register_profile('default', max_examples=100, deadline=None)

# CI profile: more thorough testing
settings.register_profile('ci', max_examples=500, deadline=None)

# Dev profile: fast iteration
settings.register_profile('dev', max_examples=10, deadline=None)

settings.load_profile(os.environ.get('HYPOTHESIS_PROFILE', 'default'))

# Send structlog output to stderr so log events don't leak into doctest output
structlog.configure(logger_factory=structlog.PrintLoggerFactory(sys.stderr))


@pytest.fixture
def codec_settings(monkeypatch):
    """Replace the global settings for the duration of a test, returns a function that takes the new values."""
    from fixedwire.codecs import _make_cached_codec
    from fixedwire.conf.settings import CodecSettings

    monkeypatch.delenv(get_settings.CONFIG_YAML_ENV_VAR, raising=False)

    def _set(**kwargs):
        new_settings = CodecSettings(**kwargs)
        monkeypatch.setattr(
            get_settings,
            '_settings_singleton',
            get_settings._SettingsMetadata(source=None, settings=new_settings),
        )
        _make_cached_codec.cache_clear()
        return new_settings

    yield _set
    _make_cached_codec.cache_clear()
