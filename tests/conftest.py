"""Shared fixtures."""

import pytest

from param_emitter.config.settings import get_settings
from param_emitter.emitter import EventEmitter, get_emitter


@pytest.fixture(autouse=True)
def _reset_caches():
    """Drop cached settings and the default emitter between tests."""
    get_settings.cache_clear()
    get_emitter.cache_clear()
    yield
    get_settings.cache_clear()
    get_emitter.cache_clear()


@pytest.fixture
def emitter() -> EventEmitter:
    return EventEmitter(sort_keys=False)
