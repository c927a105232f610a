"""
Program model module.

Contains the declaration tree node definitions and the manifest loader.
"""

from __future__ import annotations

from .loader import ProgramLoader, load_program, parse_type_expr
from .nodes import (
    ArrayType,
    Decl,
    Field,
    Ident,
    Import,
    InterfaceType,
    MapType,
    OtherDecl,
    OtherType,
    Package,
    Pointer,
    Program,
    Selector,
    SourceFile,
    StructType,
    TypeDecl,
    TypeExpr,
    TypeSpec,
)

__all__ = [
    "TypeExpr",
    "Ident",
    "Pointer",
    "ArrayType",
    "MapType",
    "StructType",
    "Selector",
    "InterfaceType",
    "OtherType",
    "Field",
    "TypeSpec",
    "Decl",
    "TypeDecl",
    "OtherDecl",
    "Import",
    "SourceFile",
    "Package",
    "Program",
    "ProgramLoader",
    "load_program",
    "parse_type_expr",
]
