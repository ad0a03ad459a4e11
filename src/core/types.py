"""Type aliases for dynamic data structures throughout the application.

This module centralizes type definitions for data that cannot be statically
typed. Request data arrives as strings or as parsed JSON, so these aliases
describe those two shapes before any field coercion happens.
"""

from typing import Any

# JSON-compatible type that represents any valid JSON value
type JsonValue = (
    dict[str, "JsonValue"] | list["JsonValue"] | str | int | float | bool | None
)

# Query/form parameters: every name maps to the values in arrival order
type ParamValues = dict[str, list[str]]

# Context dictionary for error details and debugging information
type ErrorContext = dict[str, Any]
