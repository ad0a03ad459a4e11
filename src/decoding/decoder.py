"""The request decoder.

``RequestDecoder.decode`` turns a ``RequestPayload`` into a typed value in
one synchronous pass. Bad input never raises: the result carries a
``DecodeFailure`` instead, and the caller decides how to answer.

Modes:
- **RAW_BODY**: the body as one string, no field coercion
- **STRUCTURED_BODY**: the body parsed as JSON into the schema's shape
- **PARAMETERS**: one value per field from query/form parameters
- **MODEL_ATTRIBUTE**: every schema field bound from parameters by name,
  unmatched fields left at their zero value
"""

from collections.abc import Callable
from enum import Enum
from typing import Any

import orjson
import pydantic
from loguru import logger

from src.core.config import Settings
from src.core.constants import DEFAULT_BODY_ENCODING, DEFAULT_INTEGER_BITS
from src.core.types import JsonValue
from src.decoding.coercion import (
    CoercionError,
    FieldType,
    ValueSource,
    coerce,
    zero_value,
)
from src.decoding.failures import DecodeFailure
from src.decoding.payload import BodyAlreadyConsumedError, RequestPayload
from src.decoding.schema import FieldSpec, MapStyle, TargetSchema


class DecodeMode(Enum):
    """How the payload is interpreted."""

    RAW_BODY = "raw_body"
    STRUCTURED_BODY = "structured_body"
    PARAMETERS = "parameters"
    MODEL_ATTRIBUTE = "model_attribute"


class DecodeResult:
    """Outcome of a decode: exactly one of a value or a failure."""

    __slots__ = ("_failure", "_value")

    def __init__(
        self,
        value: Any = None,  # noqa: ANN401 - decoded values have no fixed type
        failure: DecodeFailure | None = None,
    ) -> None:
        self._value = value
        self._failure = failure

    @classmethod
    def success(cls, value: Any) -> "DecodeResult":  # noqa: ANN401
        return cls(value=value)

    @classmethod
    def failed(cls, failure: DecodeFailure) -> "DecodeResult":
        return cls(failure=failure)

    @property
    def ok(self) -> bool:
        return self._failure is None

    @property
    def failure(self) -> DecodeFailure | None:
        return self._failure

    @property
    def value(self) -> Any:  # noqa: ANN401
        """The decoded value.

        Raises:
            RequestDecodingError: If the decode failed.
        """
        if self._failure is not None:
            raise self._failure.to_error()
        return self._value

    def unwrap(self) -> Any:  # noqa: ANN401
        """Alias of ``value`` for call sites that read better as a verb."""
        return self.value

    def __repr__(self) -> str:
        if self._failure is not None:
            return f"DecodeResult(failure={self._failure})"
        return f"DecodeResult(value={self._value!r})"


class _DecodeAbortedError(Exception):
    """Unwinds a decode pass; always caught inside ``decode``."""

    def __init__(self, failure: DecodeFailure) -> None:
        super().__init__(str(failure))
        self.failure = failure


class RequestDecoder:
    """Decodes request payloads against target schemas.

    The decoder holds configuration only, so a single instance can serve
    concurrent requests.

    Args:
        body_encoding: Character encoding for raw bodies.
        integer_bits: Width of the signed range accepted for integers.
    """

    def __init__(
        self,
        *,
        body_encoding: str = DEFAULT_BODY_ENCODING,
        integer_bits: int = DEFAULT_INTEGER_BITS,
    ) -> None:
        self.body_encoding = body_encoding
        self.integer_bits = integer_bits
        self._handlers: dict[
            DecodeMode, Callable[[RequestPayload, TargetSchema | None], Any]
        ] = {
            DecodeMode.RAW_BODY: self._decode_raw_body,
            DecodeMode.STRUCTURED_BODY: self._decode_structured_body,
            DecodeMode.PARAMETERS: self._decode_parameters,
            DecodeMode.MODEL_ATTRIBUTE: self._decode_model_attribute,
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> "RequestDecoder":
        return cls(
            body_encoding=settings.decoder_config.body_encoding,
            integer_bits=settings.decoder_config.integer_bits,
        )

    def decode(
        self,
        payload: RequestPayload,
        schema: TargetSchema | None = None,
        mode: DecodeMode = DecodeMode.PARAMETERS,
    ) -> DecodeResult:
        """Decode ``payload`` into the shape described by ``schema``.

        Args:
            payload: The request input. Body modes consume its body.
            schema: Target shape. Ignored in RAW_BODY mode, required
                otherwise.
            mode: How to interpret the payload.

        Returns:
            DecodeResult: The decoded value, or the failure.

        Raises:
            ValueError: If a schema is required by ``mode`` but missing.
        """
        if schema is None and mode is not DecodeMode.RAW_BODY:
            msg = f"Decode mode {mode.value} requires a target schema"
            raise ValueError(msg)

        try:
            value = self._handlers[mode](payload, schema)
        except _DecodeAbortedError as e:
            logger.debug(
                "Decoding failed: {}",
                e.failure,
                decode_mode=mode.value,
                failure_kind=e.failure.kind.value,
                field=e.failure.field,
            )
            return DecodeResult.failed(e.failure)

        logger.debug(
            "Decoded {} using {} mode",
            schema.name if schema else "body",
            mode.value,
        )
        return DecodeResult.success(value)

    # Body modes

    def _read_body(self, payload: RequestPayload) -> bytes | None:
        try:
            return payload.consume_body()
        except BodyAlreadyConsumedError as e:
            raise _DecodeAbortedError(DecodeFailure.malformed_body(str(e))) from e

    def _decode_raw_body(
        self, payload: RequestPayload, _schema: TargetSchema | None
    ) -> str:
        body = self._read_body(payload)
        if not body:
            return ""
        try:
            return body.decode(self.body_encoding)
        except UnicodeDecodeError as e:
            raise _DecodeAbortedError(
                DecodeFailure.malformed_body(
                    f"Request body is not valid {self.body_encoding} text"
                )
            ) from e

    def _decode_structured_body(
        self, payload: RequestPayload, schema: TargetSchema | None
    ) -> Any:  # noqa: ANN401
        assert schema is not None  # noqa: S101 - checked in decode()
        if payload.media_type is not None and not payload.is_json:
            raise _DecodeAbortedError(
                DecodeFailure.malformed_body(
                    f"Unsupported content type for a JSON body: {payload.media_type}"
                )
            )

        body = self._read_body(payload)
        if not body:
            raise _DecodeAbortedError(
                DecodeFailure.malformed_body("Required request body is missing")
            )
        try:
            document = orjson.loads(body)
        except orjson.JSONDecodeError as e:
            raise _DecodeAbortedError(
                DecodeFailure.malformed_body(f"Request body is not valid JSON: {e}")
            ) from e

        if not isinstance(document, dict):
            raise _DecodeAbortedError(
                DecodeFailure.type_mismatch(
                    None, "Request body must be a JSON object"
                )
            )

        values: dict[str, Any] = {}
        for spec in schema:
            if spec.is_map:
                values[spec.name] = dict(document)
                continue
            raw: JsonValue = document.get(spec.binding_name)
            if raw is None or (raw == "" and spec.has_default):
                values[spec.name] = self._absent_value(spec, zero_fill=True)
            else:
                values[spec.name] = self._coerce(raw, spec, ValueSource.JSON)
        return self._build(schema, values)

    # Parameter modes

    def _decode_parameters(
        self, payload: RequestPayload, schema: TargetSchema | None
    ) -> Any:  # noqa: ANN401
        assert schema is not None  # noqa: S101 - checked in decode()
        return self._bind_parameters(payload, schema, zero_fill=False)

    def _decode_model_attribute(
        self, payload: RequestPayload, schema: TargetSchema | None
    ) -> Any:  # noqa: ANN401
        assert schema is not None  # noqa: S101 - checked in decode()
        return self._bind_parameters(payload, schema, zero_fill=True)

    def _bind_parameters(
        self, payload: RequestPayload, schema: TargetSchema, *, zero_fill: bool
    ) -> Any:  # noqa: ANN401
        values: dict[str, Any] = {}
        for spec in schema:
            if spec.is_map:
                values[spec.name] = self._collect_map(payload, spec)
                continue
            raw = payload.first(spec.binding_name)
            if raw is None or (raw == "" and spec.has_default):
                values[spec.name] = self._absent_value(spec, zero_fill=zero_fill)
            else:
                values[spec.name] = self._coerce(raw, spec, ValueSource.PARAMETER)
        return self._build(schema, values)

    @staticmethod
    def _collect_map(
        payload: RequestPayload, spec: FieldSpec
    ) -> dict[str, str] | dict[str, list[str]]:
        params = payload.params
        if spec.map_style is MapStyle.ALL:
            return params
        return {name: values[0] for name, values in params.items() if values}

    # Shared rules

    def _absent_value(self, spec: FieldSpec, *, zero_fill: bool) -> str | int | None:
        """Resolve a field with no usable input: default, then required check."""
        if spec.has_default:
            return self._coerce_default(spec)
        if spec.required:
            raise _DecodeAbortedError(DecodeFailure.missing_required(spec.binding_name))
        if zero_fill:
            return zero_value(spec.field_type)
        if spec.field_type is FieldType.INTEGER:
            raise _DecodeAbortedError(
                DecodeFailure.type_mismatch(
                    spec.binding_name,
                    f"Optional parameter '{spec.binding_name}' is absent but its "
                    "integer type cannot hold a missing value; declare it "
                    "optional<integer> or give it a default",
                )
            )
        return None

    def _coerce_default(self, spec: FieldSpec) -> str | int | None:
        try:
            return spec.resolved_default(self.integer_bits)
        except CoercionError as e:
            raise _DecodeAbortedError(
                DecodeFailure.type_mismatch(spec.binding_name, e.detail)
            ) from e

    def _coerce(
        self, raw: JsonValue, spec: FieldSpec, source: ValueSource
    ) -> str | int | None:
        try:
            return coerce(
                raw,
                spec.field_type,
                field=spec.binding_name,
                source=source,
                integer_bits=self.integer_bits,
            )
        except CoercionError as e:
            raise _DecodeAbortedError(
                DecodeFailure.type_mismatch(
                    spec.binding_name,
                    f"Failed to convert value of '{spec.binding_name}' to "
                    f"{spec.field_type.value}: {e.detail}",
                )
            ) from e

    @staticmethod
    def _build(schema: TargetSchema, values: dict[str, Any]) -> Any:  # noqa: ANN401
        try:
            return schema.build(values)
        except pydantic.ValidationError as e:
            errors = e.errors()
            location = errors[0]["loc"] if errors else ()
            field = str(location[0]) if location else None
            raise _DecodeAbortedError(
                DecodeFailure.type_mismatch(
                    field, f"Decoded values do not fit {schema.name}"
                )
            ) from e


_default_decoder = RequestDecoder()


def decode(
    payload: RequestPayload,
    schema: TargetSchema | None = None,
    mode: DecodeMode = DecodeMode.PARAMETERS,
) -> DecodeResult:
    """Decode with the default decoder settings (UTF-8, 32-bit integers)."""
    return _default_decoder.decode(payload, schema, mode)
