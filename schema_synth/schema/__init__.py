"""
Schema module.

Contains the schema node definitions and the targets the mapper writes through.
"""

from __future__ import annotations

from .nodes import DEFINITIONS_PREFIX, Definitions, Schema, definitions_to_dict, make_ref
from .target import SchemaTarget, SchemaValidations

__all__ = [
    "DEFINITIONS_PREFIX",
    "Definitions",
    "Schema",
    "SchemaTarget",
    "SchemaValidations",
    "definitions_to_dict",
    "make_ref",
]
