import pytest

from propguard.config import Settings, get_settings
from propguard.logging_config import configure_logging

configure_logging(Settings(LOG_LEVEL="debug"))


@pytest.fixture
def fresh_settings(monkeypatch):
    """Clear the cached settings around a test that patches the environment."""
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
