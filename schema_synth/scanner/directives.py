"""
Field directive application.

Looks up a setter for each parsed directive keyword and applies it to the
property schema, to its array items, or to the owning schema (`required`).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..schema.nodes import Schema
from ..schema.target import SchemaValidations
from .annotations import ITEMS_KEYWORDS, Directive

logger = logging.getLogger(__name__)

VALIDATION_SETTERS: dict[str, Callable[[SchemaValidations, Any], None]] = {
    "maximum": lambda v, value: v.set_maximum(*value),
    "minimum": lambda v, value: v.set_minimum(*value),
    "multipleOf": SchemaValidations.set_multiple_of,
    "minLength": SchemaValidations.set_min_length,
    "maxLength": SchemaValidations.set_max_length,
    "pattern": SchemaValidations.set_pattern,
    "minItems": SchemaValidations.set_min_items,
    "maxItems": SchemaValidations.set_max_items,
    "unique": SchemaValidations.set_unique,
}


def _plain_keyword(items_keyword: str) -> str:
    """itemsMaxLength -> maxLength"""
    rest = items_keyword[len("items") :]
    return rest[0].lower() + rest[1:]


def set_required(owner: Schema, name: str, required: bool) -> None:
    if required:
        if name not in owner.required:
            owner.required.append(name)
    elif name in owner.required:
        owner.required.remove(name)


def apply_field_directives(
    directives: list[Directive],
    owner: Schema,
    name: str,
    prop: Schema,
    items: Schema | None = None,
) -> None:
    """
    Apply the directives of one field in order; a repeated keyword ends up with its last value.

    Args:
        directives: Directives parsed from the field documentation
        owner: Schema owning the property (receives `required`)
        name: External property name
        prop: The property schema
        items: Item schema of an array of primitives, which accepts the
            items-prefixed directives; None disables them
    """
    for directive in directives:
        keyword = directive.keyword

        if keyword == "required":
            set_required(owner, name, directive.value)
        elif keyword == "readOnly":
            prop.read_only = directive.value
        elif keyword in ITEMS_KEYWORDS:
            if items is None:
                logger.debug("ignoring %r on %s: not an array of primitives", directive.line, name)
                continue
            VALIDATION_SETTERS[_plain_keyword(keyword)](SchemaValidations(items), directive.value)
        elif keyword in VALIDATION_SETTERS:
            VALIDATION_SETTERS[keyword](SchemaValidations(prop), directive.value)


def apply_reference_directives(directives: list[Directive], owner: Schema, name: str) -> None:
    """References accept `required` only; everything else would become sibling content."""
    for directive in directives:
        if directive.keyword == "required":
            set_required(owner, name, directive.value)
