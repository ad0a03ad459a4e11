"""Integration tests for the error response format."""

from datetime import datetime

import pytest
import pytest_check
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.api.constants import CORRELATION_ID_HEADER, REQUEST_ID_HEADER
from src.api.main import create_app
from src.core.config import Settings

ERROR_FIELDS = {
    "error_code",
    "message",
    "details",
    "correlation_id",
    "timestamp",
    "severity",
    "service_info",
    "request_id",
    "debug_info",
}


@pytest.mark.integration
class TestDecodeErrorResponses:
    """Test 400 responses for decode failures."""

    async def test_response_shape(self, client: AsyncClient) -> None:
        """Test the error body carries every standard field."""
        response = await client.get(
            "/request-param-v3?username=kim&age=abc",
            headers={CORRELATION_ID_HEADER: "trace-me"},
        )

        assert response.status_code == 400
        assert response.headers["content-type"] == "application/json"
        body = response.json()
        with pytest_check.check:
            assert set(body) == ERROR_FIELDS
        with pytest_check.check:
            assert body["error_code"] == "TYPE_MISMATCH"
        with pytest_check.check:
            assert body["message"].startswith("Failed to convert value of 'age'")
        with pytest_check.check:
            assert body["details"] == {"field": "age", "kind": "TypeMismatch"}
        with pytest_check.check:
            assert body["severity"] == "LOW"
        with pytest_check.check:
            assert body["service_info"]["name"] == "Bindery"
        with pytest_check.check:
            assert datetime.fromisoformat(body["timestamp"]).tzinfo is not None

    async def test_ids_match_headers(self, client: AsyncClient) -> None:
        """Test the body repeats the correlation and request IDs."""
        response = await client.get(
            "/request-param-v3", headers={CORRELATION_ID_HEADER: "trace-me"}
        )

        body = response.json()
        assert body["correlation_id"] == "trace-me"
        assert response.headers[CORRELATION_ID_HEADER] == "trace-me"
        assert body["request_id"] == response.headers[REQUEST_ID_HEADER]

    async def test_debug_info_in_development(self, client: AsyncClient) -> None:
        """Test development responses include debug information."""
        response = await client.get("/request-param-v3")

        debug_info = response.json()["debug_info"]
        assert debug_info["exception_type"] == "RequestDecodingError"
        assert debug_info["error_context"] == {
            "field": "username",
            "kind": "MissingRequired",
        }

    async def test_production_hides_debug_info(
        self, production_env: None, client: AsyncClient
    ) -> None:
        """Test production responses keep details but drop debug information."""
        response = await client.get("/request-param-v3")

        body = response.json()
        assert response.status_code == 400
        assert body["debug_info"] is None
        assert body["details"] == {"field": "username", "kind": "MissingRequired"}
        assert body["service_info"]["environment"] == "production"


@pytest.mark.integration
class TestFrameworkErrors:
    """Test framework and unexpected errors."""

    async def test_unknown_path(self, client: AsyncClient) -> None:
        """Test unknown paths answer 404 in the standard format."""
        response = await client.get("/does-not-exist")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "NOT_FOUND"
        assert body["message"] == "Not Found"

    async def test_method_not_allowed(self, client: AsyncClient) -> None:
        """Test wrong methods answer 405 with the allowed methods."""
        response = await client.put("/request-param-v1")

        assert response.status_code == 405
        assert "GET" in response.headers["allow"]

    async def test_unhandled_exception(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test unexpected exceptions answer 500 in the standard format."""
        # Debug mode would render the framework traceback page instead
        monkeypatch.setenv("DEBUG", "false")
        app: FastAPI = create_app(Settings())

        @app.get("/explode")
        async def explode() -> None:
            raise RuntimeError("kaboom")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/explode")

        assert response.status_code == 500
        body = response.json()
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["severity"] == "CRITICAL"
        assert body["details"] == {"error": "kaboom", "type": "RuntimeError"}
