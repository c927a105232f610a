"""
Declaration collector.

Finds the type declarations of a file and computes their names: the
internal identifier and the external schema name, which defaults to the
identifier and can be overridden once by a `+swagger:model <name>` line.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..program.nodes import SourceFile, TypeDecl, TypeSpec
from .annotations import parse_doc


@dataclass(eq=False)
class SchemaDecl:
    """A type declaration paired with its internal and external names."""

    file: SourceFile
    decl: TypeDecl
    spec: TypeSpec
    internal_name: str = ""
    name: str = ""

    def infer_names(self) -> tuple[str, str]:
        """Compute (internal name, external name); computed once, cached afterwards."""
        if self.internal_name:
            return self.internal_name, self.name

        internal_name = self.spec.name
        name = parse_doc(self.decl.doc).model_name or internal_name
        self.internal_name = internal_name
        self.name = name
        return internal_name, name

    @property
    def is_model(self) -> bool:
        """Whether the declaration carries a `+swagger:model` annotation."""
        return parse_doc(self.decl.doc).annotation("model") is not None

    @property
    def key(self) -> tuple[str, str]:
        return self.file.path, self.spec.name


def collect_declarations(source: SourceFile) -> list[SchemaDecl]:
    """Return the type declarations of a file in declaration order, with names inferred."""
    found = []
    for decl in source.decls:
        if not isinstance(decl, TypeDecl):
            continue
        for spec in decl.specs:
            schema_decl = SchemaDecl(source, decl, spec)
            schema_decl.infer_names()
            found.append(schema_decl)
    return found
