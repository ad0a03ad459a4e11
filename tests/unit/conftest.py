"""Shared fixtures for unit tests."""

from collections.abc import Generator

import pytest

from src.core.config import Settings, get_settings
from src.core.context import RequestContext
from src.decoding import RequestDecoder


@pytest.fixture
def mock_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Provide a real Settings object built from test environment values.

    Returns:
        Settings: Settings with test defaults.
    """
    monkeypatch.setenv("APP_NAME", "TestApp")
    monkeypatch.setenv("APP_VERSION", "1.0.0")
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("API_PORT", "3000")
    return Settings()


@pytest.fixture
def decoder() -> RequestDecoder:
    """Decoder with default settings: UTF-8 bodies, 32-bit integers."""
    return RequestDecoder()


@pytest.fixture(autouse=True)
def clean_lru_cache() -> Generator[None]:
    """Clear the settings cache before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_context() -> Generator[None]:
    """Clear the request context before and after each test."""
    RequestContext.clear()
    yield
    RequestContext.clear()
