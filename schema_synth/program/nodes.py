"""
Declaration tree node definitions.

These nodes represent an already-parsed program: packages, their files,
the import table of each file and the top-level declarations with their
documentation text attached. The scanner only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TypeExpr:
    """Base class for all type expression nodes."""

    pass


@dataclass
class Ident(TypeExpr):
    """A bare type name, e.g. `string` or `Pet`."""

    name: str = ""


@dataclass
class Pointer(TypeExpr):
    """A pointer to another type (`*T`); denotes optionality."""

    elem: TypeExpr | None = None


@dataclass
class ArrayType(TypeExpr):
    """A slice (`[]T`) or fixed-length array (`[N]T`)."""

    elem: TypeExpr | None = None
    length: int | None = None


@dataclass
class MapType(TypeExpr):
    """A map type (`map[K]V`)."""

    key: TypeExpr | None = None
    value: TypeExpr | None = None


@dataclass
class StructType(TypeExpr):
    """An inline struct literal with its fields in declaration order."""

    fields: list[Field] = field(default_factory=list)


@dataclass
class Selector(TypeExpr):
    """A qualified reference into another package (`pkg.Name`)."""

    package: str = ""  # Import alias or inferred package name
    name: str = ""


@dataclass
class InterfaceType(TypeExpr):
    """An interface type."""

    pass


@dataclass
class OtherType(TypeExpr):
    """Any other type shape (function, channel, ...)."""

    kind: str = ""


@dataclass
class Field:
    """A struct field. An empty `names` list marks an embedded field."""

    names: list[str] = field(default_factory=list)
    type: TypeExpr | None = None
    tag: str | None = None  # Raw tag literal, still quoted
    doc: str | None = None

    @property
    def is_embedded(self) -> bool:
        return not self.names


@dataclass
class TypeSpec:
    """One named type inside a type declaration."""

    name: str = ""
    type: TypeExpr | None = None


@dataclass
class Decl:
    """Base class for top-level declarations."""

    doc: str | None = None


@dataclass
class TypeDecl(Decl):
    """A type declaration; may group several type specs under one doc comment."""

    specs: list[TypeSpec] = field(default_factory=list)


@dataclass
class OtherDecl(Decl):
    """A non-type declaration (function, variable, constant)."""

    kind: str = ""
    name: str = ""


@dataclass
class Import:
    """An entry of a file's import table."""

    path: str = ""
    alias: str | None = None

    @property
    def name(self) -> str:
        """The name the import is referred to by inside the file."""
        if self.alias:
            return self.alias
        return self.path.rstrip("/").split("/")[-1]


@dataclass(eq=False)
class SourceFile:
    """A parsed source file."""

    path: str = ""
    package_name: str = ""
    imports: list[Import] = field(default_factory=list)
    decls: list[Decl] = field(default_factory=list)

    def lookup_import(self, name: str) -> Import | None:
        for imp in self.imports:
            if imp.name == name:
                return imp
        return None


@dataclass(eq=False)
class Package:
    """A package and its files."""

    path: str = ""
    name: str = ""
    files: list[SourceFile] = field(default_factory=list)
    importable: bool = True


@dataclass
class Program:
    """Root of the loaded program: every package reachable by the scanner."""

    packages: list[Package] = field(default_factory=list)

    def package(self, path: str) -> Package | None:
        for pkg in self.packages:
            if pkg.path == path:
                return pkg
        return None

    def package_for_file(self, source: SourceFile) -> Package | None:
        for pkg in self.packages:
            if any(f is source for f in pkg.files):
                return pkg
        return None

    def importable_packages(self) -> list[Package]:
        return [pkg for pkg in self.packages if pkg.importable]
