"""Shared pytest fixtures for all test suites."""

from collections.abc import Iterator

import pytest

from itinerator.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    """Drop cached settings so environment changes in a test take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
