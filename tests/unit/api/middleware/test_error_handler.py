"""Unit tests for src/api/middleware/error_handler.py."""

import orjson
import pytest
from starlette.exceptions import HTTPException
from starlette.requests import Request

from src.api.middleware.error_handler import (
    bindery_error_handler,
    generic_exception_handler,
    get_service_info,
    http_exception_handler,
)
from src.core.config import Settings
from src.core.context import RequestContext
from src.core.exceptions import BinderyError, ErrorCode, RequestDecodingError, Severity
from src.decoding import DecodeFailure


def make_request(path: str = "/request-param-v3") -> Request:
    """Build a bare GET request for handler calls."""
    return Request(
        {"type": "http", "method": "GET", "path": path, "headers": [], "query_string": b""}
    )


def body_of(response: object) -> dict:
    """Parse a handler response body."""
    return orjson.loads(response.body)  # type: ignore[attr-defined]


@pytest.mark.unit
class TestBinderyErrorHandler:
    """Test the handler for application errors."""

    async def test_decode_failure_is_bad_request(self) -> None:
        """Test decoding errors answer 400 with field and kind details."""
        RequestContext.set_correlation_id("corr-1")
        RequestContext.set_request_id("req-1")
        error = DecodeFailure.type_mismatch("age", "not a number").to_error()

        response = await bindery_error_handler(make_request(), error)

        assert response.status_code == 400
        body = body_of(response)
        assert body["error_code"] == "TYPE_MISMATCH"
        assert body["message"] == "not a number"
        assert body["details"] == {"field": "age", "kind": "TypeMismatch"}
        assert body["correlation_id"] == "corr-1"
        assert body["request_id"] == "req-1"
        assert body["severity"] == "LOW"
        assert body["service_info"]["name"] == "Bindery"

    async def test_debug_info_in_development(self) -> None:
        """Test development responses include debug information."""
        cause = ValueError("invalid literal")
        error = RequestDecodingError(
            "bad", ErrorCode.TYPE_MISMATCH, field="age", cause=cause
        )

        body = body_of(await bindery_error_handler(make_request(), error))

        assert body["debug_info"]["exception_type"] == "RequestDecodingError"
        assert body["debug_info"]["cause"] == {
            "type": "ValueError",
            "message": "invalid literal",
        }

    async def test_no_debug_info_in_production(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test production responses leave debug information out."""
        monkeypatch.setenv("ENVIRONMENT", "production")
        error = DecodeFailure.malformed_body("empty").to_error()

        body = body_of(await bindery_error_handler(make_request(), error))

        assert body["debug_info"] is None
        assert body["details"] == {"kind": "MalformedBody"}

    async def test_other_errors_are_server_errors(self) -> None:
        """Test non-validation errors answer 500."""
        error = BinderyError(ErrorCode.INTERNAL_ERROR, "broken", Severity.HIGH)

        response = await bindery_error_handler(make_request(), error)

        assert response.status_code == 500
        assert body_of(response)["details"] is None

    async def test_generates_request_id_outside_scope(self) -> None:
        """Test a request ID is minted when none is bound."""
        error = DecodeFailure.missing_required("username").to_error()

        body = body_of(await bindery_error_handler(make_request(), error))

        assert body["request_id"].startswith("req-")
        assert body["correlation_id"] is None

    async def test_rejects_other_exceptions(self) -> None:
        """Test the handler only accepts application errors."""
        with pytest.raises(TypeError, match="Expected BinderyError"):
            await bindery_error_handler(make_request(), ValueError("x"))


@pytest.mark.unit
class TestHttpExceptionHandler:
    """Test the handler for framework HTTP errors."""

    @pytest.mark.parametrize(
        ("status_code", "error_code", "severity"),
        [
            (400, "VALIDATION_ERROR", "LOW"),
            (404, "NOT_FOUND", "LOW"),
            (405, "INTERNAL_ERROR", "MEDIUM"),
            (503, "INTERNAL_ERROR", "HIGH"),
        ],
    )
    async def test_status_mapping(
        self, status_code: int, error_code: str, severity: str
    ) -> None:
        """Test status codes map to error codes and severities."""
        exc = HTTPException(status_code=status_code, detail="nope")

        response = await http_exception_handler(make_request(), exc)

        assert response.status_code == status_code
        body = body_of(response)
        assert body["error_code"] == error_code
        assert body["severity"] == severity
        assert body["message"] == "nope"

    async def test_headers_are_kept(self) -> None:
        """Test exception headers reach the response."""
        exc = HTTPException(status_code=405, headers={"Allow": "GET, POST"})

        response = await http_exception_handler(make_request(), exc)

        assert response.headers["allow"] == "GET, POST"

    async def test_rejects_other_exceptions(self) -> None:
        """Test the handler only accepts HTTP exceptions."""
        with pytest.raises(TypeError, match="Expected HTTPException"):
            await http_exception_handler(make_request(), ValueError("x"))


@pytest.mark.unit
class TestGenericExceptionHandler:
    """Test the fallback handler."""

    async def test_development_shows_details(self) -> None:
        """Test development responses name the exception."""
        response = await generic_exception_handler(make_request(), KeyError("age"))

        assert response.status_code == 500
        body = body_of(response)
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["message"] == "Internal server error: KeyError"
        assert body["details"]["type"] == "KeyError"
        assert body["severity"] == "CRITICAL"

    async def test_production_hides_details(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test production responses carry a generic message only."""
        monkeypatch.setenv("ENVIRONMENT", "production")

        body = body_of(await generic_exception_handler(make_request(), KeyError("x")))

        assert body["message"] == "An internal server error occurred"
        assert body["details"] is None
        assert body["debug_info"] is None


@pytest.mark.unit
def test_get_service_info(mock_settings: Settings) -> None:
    """Test service info is taken from settings."""
    info = get_service_info(mock_settings)

    assert (info.name, info.version, info.environment) == (
        "TestApp",
        "1.0.0",
        "development",
    )
