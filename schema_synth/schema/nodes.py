"""
Schema node definitions.

A `Schema` describes the shape, constraints and metadata of one type or
property. `Definitions` maps schema names to the top-level schemas
accumulated over a whole scan.
"""

from __future__ import annotations

import re
from dataclasses import MISSING, dataclass, field, fields
from typing import Any

from ..errors import ReferenceConstructionError

DEFINITIONS_PREFIX = "#/definitions/"

# Characters allowed in a URI fragment, minus the JSON pointer separators
_REF_NAME_PATTERN = re.compile(r"^[A-Za-z0-9\-._!$&'()*+,;=:@%\u00a0-\uffff]+$")


def make_ref(name: str) -> str:
    """Build the `#/definitions/<name>` reference for an external name."""
    if not name or not _REF_NAME_PATTERN.match(name):
        raise ReferenceConstructionError(f"cannot build a reference for schema name {name!r}")
    return DEFINITIONS_PREFIX + name


@dataclass
class Schema:
    """The synthesized description of one type or property."""

    type: str | None = None
    format: str = ""
    title: str = ""
    description: str = ""
    ref: str | None = None

    properties: dict[str, Schema] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)
    items: Schema | None = None
    additional_properties: Schema | None = None
    all_of: list[Schema] = field(default_factory=list)

    # Validation constraints
    maximum: float | None = None
    exclusive_maximum: bool = False
    minimum: float | None = None
    exclusive_minimum: bool = False
    multiple_of: float | None = None
    max_length: int | None = None
    min_length: int | None = None
    pattern: str | None = None
    max_items: int | None = None
    min_items: int | None = None
    unique_items: bool = False
    read_only: bool = False

    # x-* extensions (origin name, origin package)
    extensions: dict[str, Any] = field(default_factory=dict)

    def typed(self, type_name: str, format_name: str = "") -> Schema:
        self.type = type_name
        self.format = format_name
        return self

    def set_ref(self, ref: str) -> None:
        """Turn this schema into a reference, dropping any inline content."""
        for f in fields(self):
            if f.name == "extensions":
                continue
            setattr(self, f.name, f.default_factory() if f.default_factory is not MISSING else f.default)
        self.ref = ref

    def add_extension(self, key: str, value: Any) -> None:
        self.extensions[key] = value

    @property
    def is_ref(self) -> bool:
        return self.ref is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert the schema to its JSON document form."""
        if self.ref is not None:
            out: dict[str, Any] = {"$ref": self.ref}
            out.update(self.extensions)
            return out

        out = {}
        if self.type:
            out["type"] = self.type
        if self.format:
            out["format"] = self.format
        if self.title:
            out["title"] = self.title
        if self.description:
            out["description"] = self.description
        if self.all_of:
            out["allOf"] = [member.to_dict() for member in self.all_of]
        if self.required:
            out["required"] = list(self.required)
        if self.properties:
            out["properties"] = {name: prop.to_dict() for name, prop in self.properties.items()}
        if self.items is not None:
            out["items"] = self.items.to_dict()
        if self.additional_properties is not None:
            out["additionalProperties"] = self.additional_properties.to_dict()

        if self.maximum is not None:
            out["maximum"] = self.maximum
            if self.exclusive_maximum:
                out["exclusiveMaximum"] = True
        if self.minimum is not None:
            out["minimum"] = self.minimum
            if self.exclusive_minimum:
                out["exclusiveMinimum"] = True
        for key, value in (
            ("multipleOf", self.multiple_of),
            ("maxLength", self.max_length),
            ("minLength", self.min_length),
            ("pattern", self.pattern),
            ("maxItems", self.max_items),
            ("minItems", self.min_items),
        ):
            if value is not None:
                out[key] = value
        if self.unique_items:
            out["uniqueItems"] = True
        if self.read_only:
            out["readOnly"] = True

        out.update(self.extensions)
        return out


Definitions = dict[str, Schema]


def definitions_to_dict(definitions: Definitions) -> dict[str, Any]:
    """Convert a definitions map to plain dictionaries, sorted by name."""
    return {name: definitions[name].to_dict() for name in sorted(definitions)}
