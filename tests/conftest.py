"""Root conftest — shared test configuration."""

import os

import pytest

from apitime.config import get_settings

# Ensure tests never pick up a developer's real framework settings
os.environ.setdefault("APITIME_LOG_FORMAT", "text")
os.environ.setdefault("APITIME_CONFIGURATIONS", "{}")


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
