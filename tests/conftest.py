"""Root conftest.py for the Bindery test suite."""

from collections.abc import Callable, Mapping, Sequence

import pytest

from src.decoding import RequestPayload

type PayloadFactory = Callable[..., RequestPayload]


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that test the HTTP surface"
    )


@pytest.fixture
def make_payload() -> PayloadFactory:
    """Build RequestPayload objects with keyword shortcuts.

    Returns:
        PayloadFactory: Callable taking params, body and content_type.
    """

    def _make(
        params: Mapping[str, str | Sequence[str]] | None = None,
        body: bytes | str | None = None,
        content_type: str | None = None,
    ) -> RequestPayload:
        raw = body.encode() if isinstance(body, str) else body
        return RequestPayload(params, body=raw, content_type=content_type)

    return _make
