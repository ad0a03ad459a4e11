"""Request context management for correlation and request IDs."""

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


class RequestContext:
    """Async-safe storage of request-scoped identifiers.

    Correlation IDs may be supplied by the caller and span several
    services; request IDs are minted here, one per inbound request.
    """

    @staticmethod
    def set_correlation_id(correlation_id: str) -> None:
        """Set the correlation ID for the current context."""
        _correlation_id_var.set(correlation_id)

    @staticmethod
    def get_correlation_id() -> str | None:
        """Get the correlation ID from the current context."""
        return _correlation_id_var.get()

    @staticmethod
    def set_request_id(request_id: str) -> None:
        """Set the request ID for the current context."""
        _request_id_var.set(request_id)

    @staticmethod
    def get_request_id() -> str | None:
        """Get the request ID from the current context."""
        return _request_id_var.get()

    @staticmethod
    def clear() -> None:
        """Clear all context variables."""
        _correlation_id_var.set(None)
        _request_id_var.set(None)


@contextmanager
def request_scope(
    correlation_id: str | None = None, request_id: str | None = None
) -> Iterator[tuple[str, str]]:
    """Bind correlation and request IDs for the duration of a block.

    Missing identifiers are generated. The previous values are restored on
    exit, so nested scopes behave like a stack.

    Args:
        correlation_id: Correlation ID supplied by the caller, if any.
        request_id: Request ID supplied by the caller, if any.

    Yields:
        tuple[str, str]: The correlation ID and request ID in effect.
    """
    correlation_id = correlation_id or generate_correlation_id()
    request_id = request_id or generate_request_id()
    correlation_token = _correlation_id_var.set(correlation_id)
    request_token = _request_id_var.set(request_id)
    try:
        yield correlation_id, request_id
    finally:
        _request_id_var.reset(request_token)
        _correlation_id_var.reset(correlation_token)


def generate_correlation_id() -> str:
    """Generate a unique correlation ID (a UUID4 string).

    Examples:
        >>> len(generate_correlation_id())
        36
    """
    return str(uuid.uuid4())


def generate_request_id() -> str:
    """Generate a unique request ID in the format 'req-<uuid4>'.

    Examples:
        >>> generate_request_id().startswith('req-')
        True
    """
    return f"req-{uuid.uuid4()}"
