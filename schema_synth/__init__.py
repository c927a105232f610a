"""Schema Synth

A Python package for synthesizing API schema definitions from the annotated
type declarations of a program, without executing it. Walks struct
declarations, resolves field types across files and packages, flattens
embedded types and applies documentation directives as validations.
"""

__version__ = "1.0.0"

from .config import LanguageBinding, OutputConfig, OutputFormat, OutputMode, ScanConfig
from .errors import (
    MalformedTagError,
    ManifestError,
    ReferenceConstructionError,
    ScanError,
    UnresolvedImportError,
    UnresolvedTypeError,
    UnsupportedConstructError,
)
from .program import Program, load_program
from .scanner import SchemaScanner, scan_program
from .schema import Definitions, Schema

__all__ = [
    "SchemaScanner",
    "scan_program",
    "ScanConfig",
    "LanguageBinding",
    "OutputConfig",
    "OutputFormat",
    "OutputMode",
    "Program",
    "load_program",
    "Definitions",
    "Schema",
    "ScanError",
    "UnresolvedTypeError",
    "UnresolvedImportError",
    "UnsupportedConstructError",
    "MalformedTagError",
    "ReferenceConstructionError",
    "ManifestError",
]
