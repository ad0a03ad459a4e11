"""Value coercion for decoded fields.

All conversion from raw request values to field types happens in
``coerce``. Parameter values are always strings and are parsed; JSON
values already carry a type and are only checked.
"""

import re
from enum import Enum
from typing import Final

from src.core.constants import DEFAULT_INTEGER_BITS
from src.core.types import JsonValue

_DECIMAL_INTEGER: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")


class FieldType(Enum):
    """Closed set of value types a field can be decoded to."""

    STRING = "string"
    INTEGER = "integer"
    OPTIONAL_INTEGER = "optional<integer>"


class ValueSource(Enum):
    """Where a raw value came from."""

    PARAMETER = "parameter"
    JSON = "json"


class CoercionError(ValueError):
    """A raw value could not be converted to a field type.

    Args:
        field: Name of the field being decoded.
        detail: What was wrong with the value.
    """

    def __init__(self, field: str, detail: str) -> None:
        super().__init__(f"{field}: {detail}")
        self.field = field
        self.detail = detail


def integer_bounds(bits: int = DEFAULT_INTEGER_BITS) -> tuple[int, int]:
    """Inclusive bounds of a signed integer of the given width."""
    limit = 1 << (bits - 1)
    return -limit, limit - 1


def _checked_range(value: int, field: str, bits: int) -> int:
    low, high = integer_bounds(bits)
    if not low <= value <= high:
        raise CoercionError(field, f"integer {value} is out of range [{low}, {high}]")
    return value


def _parse_decimal(raw: str, field: str, bits: int) -> int:
    if not _DECIMAL_INTEGER.fullmatch(raw):
        raise CoercionError(field, f"'{raw}' is not a decimal integer")
    low, high = integer_bounds(bits)
    # int() refuses very long digit strings, so oversized input is rejected first
    digits = raw.lstrip("+-").lstrip("0")
    if len(digits) > len(str(high)):
        raise CoercionError(
            field, f"integer with {len(digits)} digits is out of range [{low}, {high}]"
        )
    return _checked_range(int(raw), field, bits)


def coerce(
    value: JsonValue,
    field_type: FieldType,
    *,
    field: str,
    source: ValueSource = ValueSource.PARAMETER,
    integer_bits: int = DEFAULT_INTEGER_BITS,
) -> str | int | None:
    """Convert a raw value to ``field_type``.

    Args:
        value: The raw value. A string for parameters, any JSON value for
            bodies.
        field_type: Target type.
        field: Field name reported on failure.
        source: Where the value came from.
        integer_bits: Width of the accepted signed integer range.

    Returns:
        str | int | None: The converted value. ``None`` only for optional
            integers given an empty parameter or a JSON null.

    Raises:
        CoercionError: If the value does not fit the type.

    Examples:
        >>> coerce("42", FieldType.INTEGER, field="age")
        42
        >>> coerce("", FieldType.OPTIONAL_INTEGER, field="age") is None
        True
    """
    if source is ValueSource.PARAMETER:
        if not isinstance(value, str):
            raise CoercionError(field, f"expected a string, got {type(value).__name__}")
        if field_type is FieldType.STRING:
            return value
        if field_type is FieldType.OPTIONAL_INTEGER and value == "":
            return None
        return _parse_decimal(value, field, integer_bits)

    if field_type is FieldType.STRING:
        if not isinstance(value, str):
            raise CoercionError(
                field, f"expected a JSON string, got {_json_type_name(value)}"
            )
        return value

    if value is None and field_type is FieldType.OPTIONAL_INTEGER:
        return None
    # bool is a subclass of int but never a JSON number
    if not isinstance(value, int) or isinstance(value, bool):
        raise CoercionError(
            field, f"expected a JSON integer, got {_json_type_name(value)}"
        )
    return _checked_range(value, field, integer_bits)


def zero_value(field_type: FieldType) -> int | None:
    """Value of an unbound field: ``0`` for integers, ``None`` otherwise."""
    if field_type is FieldType.INTEGER:
        return 0
    return None


def _json_type_name(value: JsonValue) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"
