"""Standardized error response schemas.

Every error leaves the API in the ``ErrorResponse`` shape. For decode
failures ``details`` names the offending ``field`` (when there is one) and
the decoder's failure ``kind``.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


class ServiceInfo(BaseModel):
    """Service information for error context."""

    name: str = Field(
        ...,
        description="Name of the service",
        examples=["Bindery"],
    )

    version: str = Field(
        ...,
        description="Version of the service",
        examples=["0.1.0"],
    )

    environment: str = Field(
        ...,
        description="Environment where the service is running",
        examples=["development", "staging", "production"],
    )


class ErrorResponse(BaseModel):
    """Standardized error response model for API errors."""

    error_code: str = Field(
        ...,
        description="Unique error code identifying the error type",
        examples=["MISSING_REQUIRED", "TYPE_MISMATCH", "MALFORMED_BODY"],
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Required parameter 'username' is not present"],
    )

    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional error details (offending field, failure kind)",
        examples=[{"field": "age", "kind": "TypeMismatch"}],
    )

    correlation_id: str | None = Field(
        default=None,
        description="Request correlation ID for tracing and debugging",
        examples=["550e8400-e29b-41d4-a716-446655440000"],
    )

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Timestamp when the error occurred (with timezone)",
        examples=["2024-06-14T12:00:00+00:00"],
    )

    severity: str | None = Field(
        default=None,
        description="Error severity level (LOW, MEDIUM, HIGH, CRITICAL)",
        examples=["LOW", "CRITICAL"],
    )

    service_info: ServiceInfo | None = Field(
        default=None,
        description="Information about the service that generated the error",
    )

    request_id: str | None = Field(
        default=None,
        description="Unique request identifier",
        examples=["req-550e8400-e29b-41d4-a716-446655440000"],
    )

    debug_info: dict[str, Any] | None = Field(
        default=None,
        description="Debug information (only populated in development environments)",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error_code": "TYPE_MISMATCH",
                    "message": (
                        "Failed to convert value of 'age' to integer: "
                        "'abc' is not a decimal integer"
                    ),
                    "details": {"field": "age", "kind": "TypeMismatch"},
                    "correlation_id": "550e8400-e29b-41d4-a716-446655440000",
                    "request_id": "req-660e8400-e29b-41d4-a716-446655440000",
                    "timestamp": "2024-06-14T12:00:00+00:00",
                    "severity": "LOW",
                    "service_info": {
                        "name": "Bindery",
                        "version": "0.1.0",
                        "environment": "production",
                    },
                },
                {
                    "error_code": "MALFORMED_BODY",
                    "message": "Request body is not valid JSON",
                    "details": {"kind": "MalformedBody"},
                    "timestamp": "2024-06-14T12:00:01+00:00",
                    "severity": "LOW",
                },
            ]
        }
    }
