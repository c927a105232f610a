"""
Error taxonomy for schema synthesis.

Every hard error aborts the synthesis of the enclosing declaration and
propagates up to the driver, which stops the whole run.
"""

from __future__ import annotations


class ScanError(Exception):
    """Base class for all errors raised while synthesizing schemas."""

    pass


class UnresolvedTypeError(ScanError):
    """Raised when a named type cannot be found in any reachable package.

    Callers decide whether this is fatal (embedded structs, nested
    resolution) or recoverable (a top-level identifier degrades to an
    assumed primitive).
    """

    def __init__(self, type_name: str, package_path: str):
        super().__init__(f"unable to find {type_name} in {package_path}")
        self.type_name = type_name
        self.package_path = package_path


class UnresolvedImportError(ScanError):
    """Raised when a selector references an unknown import alias or package."""

    pass


class UnsupportedConstructError(ScanError):
    """Raised when a type expression shape is not supported for a schema."""

    pass


class MalformedTagError(ScanError):
    """Raised when a field's serialization tag is not validly quoted or cannot apply to the field."""

    pass


class ReferenceConstructionError(ScanError):
    """Raised when an external name cannot be turned into a reference path."""

    pass


class ManifestError(ScanError):
    """Raised when a program manifest cannot be loaded."""

    pass


class OutputWriteError(ScanError):
    """Raised when rendered output fails validation before it is written."""

    pass
