"""Decode failures: typed, recoverable signals returned by the decoder."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from src.core.exceptions import ErrorCode, RequestDecodingError


class FailureKind(Enum):
    """Why a payload could not be decoded."""

    MISSING_REQUIRED = "MissingRequired"
    TYPE_MISMATCH = "TypeMismatch"
    MALFORMED_BODY = "MalformedBody"


_ERROR_CODES: dict[FailureKind, ErrorCode] = {
    FailureKind.MISSING_REQUIRED: ErrorCode.MISSING_REQUIRED,
    FailureKind.TYPE_MISMATCH: ErrorCode.TYPE_MISMATCH,
    FailureKind.MALFORMED_BODY: ErrorCode.MALFORMED_BODY,
}


class DecodeFailure(BaseModel):
    """A payload that could not be converted to the target shape.

    Attributes:
        kind: The failure category.
        field: Name of the offending field, when the failure concerns one.
        detail: Human-readable explanation.
    """

    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    field: str | None = None
    detail: str

    @classmethod
    def missing_required(cls, field: str) -> "DecodeFailure":
        return cls(
            kind=FailureKind.MISSING_REQUIRED,
            field=field,
            detail=f"Required parameter '{field}' is not present",
        )

    @classmethod
    def type_mismatch(cls, field: str | None, detail: str) -> "DecodeFailure":
        return cls(kind=FailureKind.TYPE_MISMATCH, field=field, detail=detail)

    @classmethod
    def malformed_body(cls, detail: str) -> "DecodeFailure":
        return cls(kind=FailureKind.MALFORMED_BODY, detail=detail)

    @property
    def error_code(self) -> ErrorCode:
        return _ERROR_CODES[self.kind]

    def to_error(self, cause: Exception | None = None) -> RequestDecodingError:
        """Convert this failure into the exception raised at the HTTP boundary.

        Args:
            cause: The exception that produced the failure, if any.

        Returns:
            RequestDecodingError: Exception carrying the failure's code,
                field and kind.
        """
        return RequestDecodingError(
            self.detail,
            error_code=self.error_code,
            field=self.field,
            kind=self.kind.value,
            cause=cause,
        )

    def __str__(self) -> str:
        target = f"(field={self.field})" if self.field else ""
        return f"{self.kind.value}{target}: {self.detail}"
