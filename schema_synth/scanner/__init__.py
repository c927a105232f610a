"""
Scanner module.

Contains the documentation parser, declaration collector, cross-package
resolver, property type mapper, synthesizer and the scan driver.
"""

from __future__ import annotations

from .annotations import Annotation, Directive, ParsedDoc, parse_doc
from .context import ScanContext
from .declarations import SchemaDecl, collect_declarations
from .properties import PropertyMapper
from .resolver import PackageResolver, ResolvedType
from .scanner import SchemaScanner, scan_program
from .synthesizer import SchemaSynthesizer, StructFlattener
from .tags import SerializedName, StructTag, serialized_name, unquote_tag

__all__ = [
    "Annotation",
    "Directive",
    "ParsedDoc",
    "parse_doc",
    "ScanContext",
    "SchemaDecl",
    "collect_declarations",
    "PropertyMapper",
    "PackageResolver",
    "ResolvedType",
    "SchemaScanner",
    "scan_program",
    "SchemaSynthesizer",
    "StructFlattener",
    "SerializedName",
    "StructTag",
    "serialized_name",
    "unquote_tag",
]
