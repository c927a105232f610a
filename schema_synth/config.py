"""
Configuration for the schema scanner.

Holds the source-language binding (visibility, primitive types,
extension names) together with scanning and output options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite the existing file


class OutputFormat(str, Enum):
    """Rendering format for the definitions document."""

    JSON = "json"
    MARKDOWN = "markdown"


# Builtin type name -> (schema type, format)
GO_PRIMITIVE_TYPES: dict[str, tuple[str, str]] = {
    "bool": ("boolean", ""),
    "string": ("string", ""),
    "rune": ("string", ""),
    "byte": ("integer", "uint8"),
    "int": ("integer", "int64"),
    "int8": ("integer", "int8"),
    "int16": ("integer", "int16"),
    "int32": ("integer", "int32"),
    "int64": ("integer", "int64"),
    "uint": ("integer", "uint64"),
    "uint8": ("integer", "uint8"),
    "uint16": ("integer", "uint16"),
    "uint32": ("integer", "uint32"),
    "uint64": ("integer", "uint64"),
    "float32": ("number", "float"),
    "float64": ("number", "double"),
}


@dataclass
class LanguageBinding:
    """Source-language conventions the scanner is parameterized by.

    Attributes:
        name: Name of the source language
        extension_prefix: Prefix for the origin extensions (e.g. "x-go")
        serialization_tag: Struct tag key holding the serialized field name
        primitive_types: Builtin type names mapped to (type, format)
        string_key_types: Map key type names that serialize as strings
    """

    name: str = "go"
    extension_prefix: str = "x-go"
    serialization_tag: str = "json"
    primitive_types: dict[str, tuple[str, str]] = field(default_factory=lambda: dict(GO_PRIMITIVE_TYPES))
    string_key_types: list[str] = field(default_factory=lambda: ["string"])

    @property
    def name_extension(self) -> str:
        return f"{self.extension_prefix}-name"

    @property
    def package_extension(self) -> str:
        return f"{self.extension_prefix}-package"

    def is_exported(self, identifier: str) -> bool:
        """Check whether an identifier is visible outside its package."""
        return bool(identifier) and identifier[0].isupper()

    def is_builtin(self, type_name: str) -> bool:
        return type_name in self.primitive_types

    def primitive(self, type_name: str) -> tuple[str, str] | None:
        return self.primitive_types.get(type_name)

    @staticmethod
    def from_dict(d: dict) -> LanguageBinding:
        binding = LanguageBinding()
        for k, v in d.items():
            if k == "primitive_types" and isinstance(v, dict):
                binding.primitive_types.update({name: (pair[0], pair[1] if len(pair) > 1 else "") for name, pair in v.items()})
            elif hasattr(binding, k):
                setattr(binding, k, v)
        return binding

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "extension_prefix": self.extension_prefix,
            "serialization_tag": self.serialization_tag,
            "primitive_types": {k: list(v) for k, v in self.primitive_types.items()},
            "string_key_types": self.string_key_types,
        }


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        format: Rendering format of the definitions document
        indent: JSON indentation
        validate_before_write: Whether to validate the rendered document before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    format: OutputFormat = OutputFormat.JSON
    indent: int = 2
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class ScanConfig:
    """Configuration options for schema synthesis."""

    # Only collect declarations annotated as models (others are reached by reference)
    annotated_only: bool = False

    # External schema names to skip during collection
    ignore_types: list[str] = field(default_factory=list)

    # "<import path>.<Name>" -> [type, format] for types outside the program
    well_known_types: dict[str, list[str]] = field(default_factory=lambda: {"time.Time": ["string", "date-time"]})

    # Add the invoking command line to the rendered document
    add_generation_comment: bool = True

    binding: LanguageBinding = field(default_factory=LanguageBinding)

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> ScanConfig:
        """Create a config from a dictionary."""
        config = ScanConfig()
        for k, v in d.items():
            if k == "binding" and isinstance(v, dict):
                config.binding = LanguageBinding.from_dict(v)
            elif k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                fmt = v.get("format", OutputFormat.JSON)
                if isinstance(fmt, str):
                    fmt = OutputFormat(fmt)
                config.output = OutputConfig(
                    mode=mode,
                    format=fmt,
                    indent=v.get("indent", 2),
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "annotated_only": self.annotated_only,
            "ignore_types": self.ignore_types,
            "well_known_types": self.well_known_types,
            "add_generation_comment": self.add_generation_comment,
            "binding": self.binding.to_dict(),
            "output": {
                "mode": self.output.mode.value,
                "format": self.output.format.value,
                "indent": self.output.indent,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
