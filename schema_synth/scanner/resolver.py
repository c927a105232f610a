"""
Cross-package resolver.

Locates packages through a file's import table and, inside a package,
the declaration matching a type name (or a `+swagger:strfmt` name).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..errors import UnresolvedImportError, UnresolvedTypeError
from ..program.nodes import Package, Program, SourceFile, TypeDecl, TypeSpec
from .annotations import parse_doc

logger = logging.getLogger(__name__)


@dataclass
class ResolvedType:
    """A type declaration found in a package."""

    file: SourceFile
    decl: TypeDecl
    spec: TypeSpec
    strfmt: str | None = None  # Format name when the type is a string format alias


class PackageResolver:
    """Resolves packages and type names across the program."""

    def __init__(self, program: Program):
        """
        Initialize the resolver.

        Args:
            program: The loaded program
        """
        self.program = program
        self._type_cache: dict[str, list[ResolvedType]] = {}

    def _declarations(self, pkg: Package) -> list[ResolvedType]:
        """All type declarations of a package in file order, cached by package path."""
        if pkg.path not in self._type_cache:
            found = []
            for source in pkg.files:
                for decl in source.decls:
                    if not isinstance(decl, TypeDecl):
                        continue
                    strfmt = parse_doc(decl.doc).strfmt_name
                    for spec in decl.specs:
                        found.append(ResolvedType(source, decl, spec, strfmt))
            self._type_cache[pkg.path] = found
        return self._type_cache[pkg.path]

    def package_for_file(self, source: SourceFile) -> Package:
        pkg = self.program.package_for_file(source)
        if pkg is None:
            raise UnresolvedImportError(f"unable to determine package for {source.path}")
        return pkg

    def import_path(self, source: SourceFile, alias: str) -> str:
        """Return the import path a selector prefix refers to in a file."""
        imp = source.lookup_import(alias)
        if imp is None:
            raise UnresolvedImportError(f"no import found for {alias}")
        return imp.path

    def package_for_selector(self, source: SourceFile, alias: str) -> Package:
        path = self.import_path(source, alias)
        pkg = self.program.package(path)
        if pkg is None:
            raise UnresolvedImportError(f"no package found for {path}")
        return pkg

    def find(self, pkg: Package, type_name: str) -> ResolvedType:
        """
        Find the declaration of a type in a package.

        Args:
            pkg: Package to search, every file in order
            type_name: Identifier, or string format name, to look for

        Returns:
            ResolvedType for the first matching declaration

        Raises:
            UnresolvedTypeError: If no file of the package declares the name
        """
        for resolved in self._declarations(pkg):
            if resolved.spec.name == type_name or resolved.strfmt == type_name:
                return resolved
        raise UnresolvedTypeError(type_name, pkg.path)
