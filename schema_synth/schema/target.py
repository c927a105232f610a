"""
Property targets.

A target is the handle the type mapper writes through: either a schema's
own type and reference, or (via `items()`) its array element schema, so
nested arrays and arrays of primitives share the same code path.
"""

from __future__ import annotations

from dataclasses import dataclass

from .nodes import Schema


@dataclass
class SchemaTarget:
    """Writes type information into a schema."""

    schema: Schema

    def typed(self, type_name: str, format_name: str = "") -> None:
        self.schema.typed(type_name, format_name)

    def set_ref(self, ref: str) -> None:
        self.schema.set_ref(ref)

    def items(self) -> SchemaTarget:
        """Mark the schema as an array and return a target for its elements."""
        if self.schema.items is None:
            self.schema.items = Schema()
        self.schema.typed("array")
        return SchemaTarget(self.schema.items)


@dataclass
class SchemaValidations:
    """Setters for the validation constraints of one schema."""

    current: Schema

    def set_maximum(self, value: float, exclusive: bool) -> None:
        self.current.maximum = value
        self.current.exclusive_maximum = exclusive

    def set_minimum(self, value: float, exclusive: bool) -> None:
        self.current.minimum = value
        self.current.exclusive_minimum = exclusive

    def set_multiple_of(self, value: float) -> None:
        self.current.multiple_of = value

    def set_min_items(self, value: int) -> None:
        self.current.min_items = value

    def set_max_items(self, value: int) -> None:
        self.current.max_items = value

    def set_min_length(self, value: int) -> None:
        self.current.min_length = value

    def set_max_length(self, value: int) -> None:
        self.current.max_length = value

    def set_pattern(self, value: str) -> None:
        self.current.pattern = value

    def set_unique(self, value: bool) -> None:
        self.current.unique_items = value
