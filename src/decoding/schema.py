"""Target schemas: the declared shape a request is decoded into.

A schema is an ordered set of field descriptors, built once per route when
the module defining the route is imported. Nothing is discovered from
handler signatures at request time.
"""

from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from types import NoneType, UnionType
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.core.constants import DEFAULT_INTEGER_BITS
from src.decoding.coercion import CoercionError, FieldType, ValueSource, coerce


class MapStyle(Enum):
    """How a map-style field collects the payload's parameters."""

    FIRST = "first"
    """One string per name: the first value supplied."""

    ALL = "all"
    """Every value supplied for a name, in arrival order."""


class FieldSpec(BaseModel):
    """Descriptor of one field of a target schema.

    Attributes:
        name: Name of the decoded value (the target variable).
        field_type: Value type the raw input is coerced to.
        required: Whether absence without a default is a failure.
        default: Value substituted when the input is absent or empty.
            Strings are coerced through ``field_type``.
        binding: Payload key to read. Falls back to ``name``.
        map_style: When set, the field collects every payload parameter
            into an untyped mapping instead of binding one value.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    field_type: FieldType = FieldType.STRING
    required: bool = True
    default: str | int | None = None
    binding: str | None = None
    map_style: MapStyle | None = None

    @model_validator(mode="after")
    def check_default(self) -> "FieldSpec":
        """Reject defaults that cannot be coerced to the field type."""
        if self.default is not None and self.map_style is None:
            try:
                self.resolved_default()
            except CoercionError as e:
                msg = f"Default for field '{self.name}' is invalid: {e.detail}"
                raise ValueError(msg) from e
        return self

    def resolved_default(
        self, integer_bits: int = DEFAULT_INTEGER_BITS
    ) -> str | int | None:
        """Return the default coerced to the field type.

        Raises:
            CoercionError: If the default does not fit the field type.
        """
        if self.default is None:
            return None
        source = (
            ValueSource.PARAMETER if isinstance(self.default, str) else ValueSource.JSON
        )
        return coerce(
            self.default,
            self.field_type,
            field=self.name,
            source=source,
            integer_bits=integer_bits,
        )

    @property
    def binding_name(self) -> str:
        """Payload key for this field, inferred from the name when unset."""
        return self.binding if self.binding is not None else self.name

    @property
    def has_default(self) -> bool:
        return self.default is not None

    @property
    def is_map(self) -> bool:
        return self.map_style is not None


def _field_type_for(annotation: Any) -> FieldType:  # noqa: ANN401 - any annotation
    """Map a model field annotation to a field type.

    Raises:
        TypeError: If the annotation is not str, int or their optional forms.
    """
    if annotation is str:
        return FieldType.STRING
    if annotation is int:
        return FieldType.INTEGER

    if get_origin(annotation) in (Union, UnionType):
        members = set(get_args(annotation)) - {NoneType}
        if members == {str}:
            return FieldType.STRING
        if members == {int}:
            return FieldType.OPTIONAL_INTEGER

    msg = f"Unsupported field annotation: {annotation!r}"
    raise TypeError(msg)


class TargetSchema:
    """Ordered set of field descriptors plus an optional target model.

    Args:
        fields: Field descriptors in declaration order.
        model: Pydantic model the decoded values are loaded into. A plain
            dict is produced when omitted.
        name: Label used in log messages.

    Raises:
        ValueError: If two fields share a name.
    """

    def __init__(
        self,
        fields: Iterable[FieldSpec],
        model: type[BaseModel] | None = None,
        name: str | None = None,
    ) -> None:
        self.fields: tuple[FieldSpec, ...] = tuple(fields)
        self.model = model
        self.name = name or (model.__name__ if model else "schema")

        seen: set[str] = set()
        for spec in self.fields:
            if spec.name in seen:
                msg = f"Duplicate field name in schema '{self.name}': {spec.name}"
                raise ValueError(msg)
            seen.add(spec.name)

    @classmethod
    def from_model(cls, model: type[BaseModel]) -> "TargetSchema":
        """Build a schema from a pydantic model's declared fields.

        Every field is bound under its own name and is not required, so
        unmatched fields fall back to the type's zero value.

        Args:
            model: The pydantic model to describe.

        Returns:
            TargetSchema: A schema producing instances of ``model``.
        """
        fields = [
            FieldSpec(
                name=field_name,
                field_type=_field_type_for(info.annotation),
                required=False,
            )
            for field_name, info in model.model_fields.items()
        ]
        return cls(fields, model=model)

    def build(self, values: Mapping[str, Any]) -> Any:  # noqa: ANN401 - model or dict
        """Create the target value from decoded field values."""
        if self.model is None:
            return dict(values)
        return self.model.model_validate(dict(values))

    def field(self, name: str) -> FieldSpec:
        """Return the field descriptor with the given name.

        Raises:
            KeyError: If no field has that name.
        """
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __repr__(self) -> str:
        names = ", ".join(spec.name for spec in self.fields)
        return f"TargetSchema(name='{self.name}', fields=[{names}])"
