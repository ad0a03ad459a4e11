"""Request context middleware for correlation and request IDs.

Every request runs inside a request scope: the correlation ID comes from
the ``X-Correlation-ID`` header when the caller sends one, the request ID
is always fresh. Both are bound to Loguru for the duration of the request
and echoed back in the response headers.
"""

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.api.constants import CORRELATION_ID_HEADER, REQUEST_ID_HEADER
from src.core.context import request_scope


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware to manage request context and correlation IDs."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process the request inside a request scope.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint.

        Returns:
            Response: Response with correlation and request ID headers.
        """
        supplied_id = request.headers.get(CORRELATION_ID_HEADER) or None

        with (
            request_scope(correlation_id=supplied_id) as (correlation_id, request_id),
            logger.contextualize(
                correlation_id=correlation_id, request_id=request_id
            ),
        ):
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = correlation_id
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
