"""Declarative record schemas driving extraction and constraint enforcement.

A `SchemaDescription` is an ordered, immutable set of `FieldSpec` entries.
The binder walks it field by field, so supporting a new record shape means
declaring a new description, never writing a new code path.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import TYPE_CHECKING, Any

from chatbind.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterator


class FieldKind(str, Enum):
    """Value kinds a field may declare."""

    TEXT = "text"
    INTEGER = "integer"
    TEXT_LIST = "list-of-text"


@dataclasses.dataclass(frozen=True)
class FieldSpec:
    """One field of a target record.

    Attributes:
        name: Key expected in the model's JSON object.
        kind: Value kind, see `FieldKind`.
        required: Documentation of intent; missing keys still degrade to defaults.
        max_length: Limit for a text value, or for each element of a text list.
            ``None`` leaves the value unbounded.
        max_items: Limit on the number of elements of a text list.
        description: Short prompt-facing description of the field.
    """

    name: str
    kind: FieldKind
    required: bool = True
    max_length: int | None = None
    max_items: int | None = None
    description: str = ""

    def __post_init__(self) -> None:
        """Validate the declaration at construction time."""
        if not self.name or not isinstance(self.name, str):
            raise ConfigurationError(
                f"Field name must be a non-empty string, got {self.name!r}"
            )
        try:
            kind = FieldKind(self.kind)
        except ValueError as e:
            raise ConfigurationError(
                f"Field {self.name}: unknown kind {self.kind!r}",
                hint="Use one of: " + ", ".join(k.value for k in FieldKind),
            ) from e
        object.__setattr__(self, "kind", kind)

        if kind is FieldKind.INTEGER and (
            self.max_length is not None or self.max_items is not None
        ):
            raise ConfigurationError(
                f"Field {self.name}: integer fields take no length limits"
            )
        if kind is FieldKind.TEXT and self.max_items is not None:
            raise ConfigurationError(
                f"Field {self.name}: max_items only applies to list-of-text fields"
            )
        limits = (("max_length", self.max_length), ("max_items", self.max_items))
        for label, limit in limits:
            if limit is not None and (isinstance(limit, bool) or limit < 1):
                raise ConfigurationError(
                    f"Field {self.name}: {label} must be >= 1, got {limit!r}"
                )

    # --- Convenience constructors ---

    @classmethod
    def text(
        cls,
        name: str,
        max_length: int | None = None,
        *,
        required: bool = True,
        description: str = "",
    ) -> FieldSpec:
        """Declare a text field."""
        return cls(
            name,
            FieldKind.TEXT,
            required=required,
            max_length=max_length,
            description=description,
        )

    @classmethod
    def integer(
        cls, name: str, *, required: bool = True, description: str = ""
    ) -> FieldSpec:
        """Declare an integer field."""
        return cls(name, FieldKind.INTEGER, required=required, description=description)

    @classmethod
    def text_list(
        cls,
        name: str,
        max_items: int | None = None,
        max_length: int | None = None,
        *,
        required: bool = True,
        description: str = "",
    ) -> FieldSpec:
        """Declare a list-of-text field with per-element ``max_length``."""
        return cls(
            name,
            FieldKind.TEXT_LIST,
            required=required,
            max_length=max_length,
            max_items=max_items,
            description=description,
        )

    def default(self) -> Any:
        """Return the value used when the key is absent or unusable."""
        match self.kind:
            case FieldKind.TEXT:
                return ""
            case FieldKind.INTEGER:
                return 0
            case FieldKind.TEXT_LIST:
                return []

    def json_schema(self) -> dict[str, Any]:
        """Render this field as a JSON Schema property."""
        prop: dict[str, Any]
        match self.kind:
            case FieldKind.TEXT:
                prop = {"type": "string"}
                if self.max_length is not None:
                    prop["maxLength"] = self.max_length
            case FieldKind.INTEGER:
                prop = {"type": "integer"}
            case FieldKind.TEXT_LIST:
                items: dict[str, Any] = {"type": "string"}
                if self.max_length is not None:
                    items["maxLength"] = self.max_length
                prop = {"type": "array", "items": items}
                if self.max_items is not None:
                    prop["maxItems"] = self.max_items
        if self.description:
            prop["description"] = self.description
        return prop


@dataclasses.dataclass(frozen=True)
class SchemaDescription:
    """Immutable description of a target record shape.

    Attributes:
        name: Identifier, also used as the function name in requests.
        fields: Ordered field declarations.
        description: Prompt-facing summary of what the record holds.
    """

    name: str
    fields: tuple[FieldSpec, ...]
    description: str = ""

    def __post_init__(self) -> None:
        """Validate the description and freeze ``fields`` into a tuple."""
        if not self.name or not isinstance(self.name, str):
            raise ConfigurationError(
                f"Schema name must be a non-empty string, got {self.name!r}"
            )
        fields = tuple(self.fields)
        if not fields:
            raise ConfigurationError(f"Schema {self.name}: at least one field required")
        seen: set[str] = set()
        for spec in fields:
            if not isinstance(spec, FieldSpec):
                raise ConfigurationError(
                    f"Schema {self.name}: expected FieldSpec, got {type(spec).__name__}"
                )
            if spec.name in seen:
                raise ConfigurationError(
                    f"Schema {self.name}: duplicate field {spec.name!r}"
                )
            seen.add(spec.name)
        object.__setattr__(self, "fields", fields)

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    @property
    def required_names(self) -> frozenset[str]:
        return frozenset(spec.name for spec in self.fields if spec.required)

    def field(self, name: str) -> FieldSpec:
        """Return the field declared as ``name``."""
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def to_json_schema(self) -> dict[str, Any]:
        """Render the description as a JSON Schema object."""
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {spec.name: spec.json_schema() for spec in self.fields},
            "required": [spec.name for spec in self.fields if spec.required],
            "additionalProperties": False,
        }
        if self.description:
            schema["description"] = self.description
        return schema

    def function_definition(self) -> dict[str, Any]:
        """Return a chat-completion function definition carrying this schema."""
        definition: dict[str, Any] = {
            "name": self.name,
            "parameters": self.to_json_schema(),
        }
        if self.description:
            definition["description"] = self.description
        return definition
