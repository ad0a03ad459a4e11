"""Structured exception hierarchy for consistent error handling.

This module defines the exception system of the Bindery service. Request
decoding itself never raises for bad input: it returns a failure value.
The HTTP boundary converts that value into one of the exceptions below so
the registered handlers can answer with a uniform error body.

Key components:
- **ErrorCode enum**: Standardized error identifiers for programmatic handling
- **Severity enum**: Error classification for monitoring and alerting
- **BinderyError**: Base exception with rich context and fingerprinting
- **ValidationError**: Input that does not meet the expected shape
- **RequestDecodingError**: A decode failure surfaced at the HTTP boundary
"""

import hashlib
import traceback
from enum import Enum

from src.core.types import ErrorContext


class ErrorCode(Enum):
    """Standardized error codes for the Bindery service."""

    # System errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred in the system."""

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Input validation failed due to invalid or malformed data."""

    # Decoding errors
    MISSING_REQUIRED = "MISSING_REQUIRED"
    """A required request value was not supplied and has no default."""

    TYPE_MISMATCH = "TYPE_MISMATCH"
    """A request value could not be converted to the declared field type."""

    MALFORMED_BODY = "MALFORMED_BODY"
    """The request body could not be read as text or parsed as JSON."""

    # Resource errors
    NOT_FOUND = "NOT_FOUND"
    """The requested resource could not be found."""


class Severity(Enum):
    """Severity levels for errors in the Bindery service."""

    LOW = "LOW"
    """Low severity errors that don't significantly impact functionality."""

    MEDIUM = "MEDIUM"
    """Medium severity errors that may affect some features but not critical ops."""

    HIGH = "HIGH"
    """High severity errors impacting critical functionality."""

    CRITICAL = "CRITICAL"
    """Critical errors requiring immediate attention."""


class BinderyError(Exception):
    """Base exception class for all Bindery application exceptions.

    Args:
        error_code: Unique identifier for the error type (string or ErrorCode enum)
        message: Human-readable error message
        severity: Severity level of the error (defaults to MEDIUM)
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        error_code: str | ErrorCode,
        message: str,
        severity: Severity = Severity.MEDIUM,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )
        self.message = message
        self.severity = severity
        self.context = context or {}
        self.cause = cause

        # Capture stack trace at creation time, without this frame
        self.stack_trace = traceback.format_stack()[:-1]
        self.fingerprint = self._generate_fingerprint()

        super().__init__(message)
        if cause:
            self.__cause__ = cause

    def _generate_fingerprint(self) -> str:
        """Generate a fingerprint for error grouping.

        Returns:
            str: A hash string built from the error type, code and the
                project frames closest to where the error was created.
        """
        max_frames = 5
        relevant_frames = self.stack_trace[-max_frames:]

        fingerprint_data = f"{self.__class__.__name__}:{self.error_code}"
        for frame in relevant_frames:
            if "site-packages" not in frame and "src/" in frame:
                first_line = frame.strip().split("\n")[0]
                fingerprint_data += f":{first_line}"

        return hashlib.sha256(fingerprint_data.encode()).hexdigest()[:16]

    @property
    def is_expected(self) -> bool:
        """Whether this error is part of normal operation (LOW or MEDIUM)."""
        return self.severity in (Severity.LOW, Severity.MEDIUM)

    @property
    def should_alert(self) -> bool:
        """Whether this error should trigger alerts (HIGH or CRITICAL)."""
        return self.severity in (Severity.HIGH, Severity.CRITICAL)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        context_str = f", context={self.context}" if self.context else ""
        return (
            f"{class_name}(error_code='{self.error_code}', "
            f"message='{self.message}', severity={self.severity.value}{context_str})"
        )


class ValidationError(BinderyError):
    """Exception raised when input validation fails.

    Args:
        message: Description of the validation failure
        error_code: Error code (defaults to VALIDATION_ERROR)
        context: Additional context information about the error
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.VALIDATION_ERROR,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.LOW, context, cause)


class RequestDecodingError(ValidationError):
    """Exception raised at the HTTP boundary when a request cannot be decoded.

    The decoder reports problems as values; this exception carries one of
    them to the exception handlers, which answer with a 400 response.

    Args:
        message: Description of the decoding failure
        error_code: One of MISSING_REQUIRED, TYPE_MISMATCH or MALFORMED_BODY
        field: Name of the offending field, if the failure concerns one
        kind: Name of the failure kind as reported by the decoder
        cause: The original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.VALIDATION_ERROR,
        field: str | None = None,
        kind: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        context: ErrorContext = {}
        if field is not None:
            context["field"] = field
        if kind is not None:
            context["kind"] = kind
        super().__init__(message, error_code, context, cause)
        self.field = field
        self.kind = kind
