"""Root conftest — shared test configuration.

Invariants:
    - Tests never reach the network or spawn the real validator
    - Settings cache cleared around every test so env overrides apply
"""

import os

import pytest

# Plain-text logs keep pytest's captured output readable
os.environ.setdefault("LOG_FORMAT", "text")

from ampcheck.config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
