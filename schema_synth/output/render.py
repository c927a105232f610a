"""
Definitions renderers.

Renders the definitions map as a JSON document or as a Markdown summary
built from the jinja2 templates shipped with the package.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jinja2

from ..config import OutputFormat, ScanConfig
from ..schema.nodes import DEFINITIONS_PREFIX, Definitions, Schema, definitions_to_dict

CURRENT_DIR = Path(__file__).parent.parent


def definitions_document(definitions: Definitions, generated_by: str | None = None) -> dict[str, Any]:
    document: dict[str, Any] = {}
    if generated_by:
        document["x-generated-by"] = generated_by
    document["definitions"] = definitions_to_dict(definitions)
    return document


def render_json(definitions: Definitions, indent: int = 2, generated_by: str | None = None) -> str:
    return json.dumps(definitions_document(definitions, generated_by), indent=indent, ensure_ascii=False) + "\n"


def describe_type(schema: Schema) -> str:
    """Short human-readable type of a property, e.g. `[]string (date-time)`."""
    if schema.ref is not None:
        return schema.ref.removeprefix(DEFINITIONS_PREFIX)
    if schema.type == "array" and schema.items is not None:
        return "[]" + describe_type(schema.items)
    if schema.type == "object" and schema.additional_properties is not None:
        return "map[string]" + describe_type(schema.additional_properties)
    type_name = schema.type or "any"
    if schema.format:
        return f"{type_name} ({schema.format})"
    return type_name


_NON_CONSTRAINT_KEYS = {
    "type",
    "format",
    "title",
    "description",
    "$ref",
    "properties",
    "required",
    "items",
    "additionalProperties",
    "allOf",
}


def describe_constraints(schema: Schema) -> str:
    """Comma-separated validation constraints of a property."""
    constraints = {key: value for key, value in schema.to_dict().items() if key not in _NON_CONSTRAINT_KEYS and not key.startswith("x-")}
    return ", ".join(f"{key}={value}" for key, value in constraints.items())


def table_cell(text: str) -> str:
    """Make text safe for one Markdown table cell."""
    return text.replace("|", "\\|").replace("\n", " ")


def render_markdown(definitions: Definitions, generated_by: str | None = None) -> str:
    env = jinja2.Environment(lstrip_blocks=True, trim_blocks=True, keep_trailing_newline=True)
    env.filters["describe_type"] = describe_type
    env.filters["describe_constraints"] = describe_constraints
    env.filters["table_cell"] = table_cell
    env.filters["ref_name"] = lambda ref: ref.removeprefix(DEFINITIONS_PREFIX)
    with open(CURRENT_DIR / "templates" / "definitions.md.jinja2", encoding="utf-8") as f:
        template = env.from_string(f.read())
    return template.render(
        definitions=[(name, definitions[name]) for name in sorted(definitions)],
        generated_by=generated_by,
    )


def render(definitions: Definitions, config: ScanConfig, generated_by: str | None = None) -> str:
    """Render definitions in the configured output format."""
    if not config.add_generation_comment:
        generated_by = None
    if config.output.format == OutputFormat.MARKDOWN:
        return render_markdown(definitions, generated_by)
    return render_json(definitions, config.output.indent, generated_by)
