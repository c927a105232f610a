"""
Property type mapper.

Maps the type expression of a field to a schema fragment. Named struct
types become `#/definitions/<name>` references and their declarations
are queued for independent synthesis, which keeps recursive type graphs
finite.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors import UnresolvedImportError, UnresolvedTypeError, UnsupportedConstructError
from ..program.nodes import (
    ArrayType,
    Ident,
    InterfaceType,
    MapType,
    Pointer,
    Selector,
    SourceFile,
    StructType,
    TypeExpr,
)
from ..schema.nodes import Schema, make_ref
from ..schema.target import SchemaTarget
from .context import ScanContext
from .declarations import SchemaDecl
from .resolver import ResolvedType

if TYPE_CHECKING:
    from .synthesizer import StructFlattener

logger = logging.getLogger(__name__)


class PropertyMapper:
    """Maps type expressions to schema fragments."""

    def __init__(self, context: ScanContext, flattener: StructFlattener):
        """
        Initialize the mapper.

        Args:
            context: The scan context (definitions, worklist, resolver)
            flattener: Struct parser used for inline struct literals
        """
        self.context = context
        self.flattener = flattener

    @property
    def binding(self):
        return self.context.binding

    def map_type(self, source: SourceFile, expr: TypeExpr | None, target: SchemaTarget) -> None:
        """
        Map a type expression into a target.

        Args:
            source: File the expression appears in (for import and package lookup)
            expr: The type expression
            target: Where the resulting type information is written

        Raises:
            UnsupportedConstructError: For shapes that cannot be expressed as a schema
            UnresolvedImportError: For selectors naming an unknown import or package
        """
        if isinstance(expr, Ident):
            self._map_ident(source, expr, target)

        elif isinstance(expr, Pointer):
            # Pointers only denote optionality
            self.map_type(source, expr.elem, target)

        elif isinstance(expr, ArrayType):
            self.map_type(source, expr.elem, target.items())

        elif isinstance(expr, StructType):
            if target.schema is None:
                raise UnsupportedConstructError("inline struct has no owning schema")
            self.flattener.parse_struct(source, target.schema, expr, set())

        elif isinstance(expr, Selector):
            self._map_selector(source, expr, target)

        elif isinstance(expr, MapType):
            self._map_map(source, expr, target)

        elif isinstance(expr, InterfaceType):
            logger.debug("skipping interface type in %s", source.path)

        else:
            raise UnsupportedConstructError(f"{expr!r} is unsupported for a schema")

    def map_primitive(self, type_name: str, target: SchemaTarget) -> None:
        """Best-effort mapping of a name assumed to be a builtin type."""
        primitive = self.binding.primitive(type_name)
        if primitive is None:
            logger.debug("no schema type known for %s", type_name)
            return
        target.typed(*primitive)

    def _map_ident(self, source: SourceFile, expr: Ident, target: SchemaTarget) -> None:
        resolver = self.context.resolver
        try:
            pkg = resolver.package_for_file(source)
            resolved = resolver.find(pkg, expr.name)
        except (UnresolvedImportError, UnresolvedTypeError) as e:
            logger.debug("%s, assuming a builtin type", e)
            self.map_primitive(expr.name, target)
            return
        self._map_resolved(resolved, target)

    def _map_selector(self, source: SourceFile, expr: Selector, target: SchemaTarget) -> None:
        resolver = self.context.resolver
        path = resolver.import_path(source, expr.package)

        known = self.context.config.well_known_types.get(f"{path}.{expr.name}")
        if known:
            target.typed(*known)
            return

        pkg = resolver.package_for_selector(source, expr.package)
        try:
            resolved = resolver.find(pkg, expr.name)
        except UnresolvedTypeError as e:
            logger.debug("%s, assuming a builtin type", e)
            self.map_primitive(expr.name, target)
            return
        self._map_resolved(resolved, target)

    def _map_resolved(self, resolved: ResolvedType, target: SchemaTarget) -> None:
        """Map a named type found in some package."""
        underlying = resolved.spec.type

        if resolved.strfmt:
            if isinstance(underlying, ArrayType) and not isinstance(underlying.elem, Ident):
                target.items().typed("string", resolved.strfmt)
            else:
                # Byte slices and other aliases serialize as formatted strings
                target.typed("string", resolved.strfmt)
            return

        if isinstance(underlying, StructType):
            decl = SchemaDecl(resolved.file, resolved.decl, resolved.spec)
            decl.infer_names()
            target.set_ref(make_ref(decl.name))
            self.context.enqueue(decl)
            return

        self.map_type(resolved.file, underlying, target)

    def _map_map(self, source: SourceFile, expr: MapType, target: SchemaTarget) -> None:
        key = expr.key
        if isinstance(key, Ident) and key.name in self.binding.string_key_types:
            value_schema = Schema()
            self.map_type(source, expr.value, SchemaTarget(value_schema))
            target.schema.additional_properties = value_schema
        else:
            # Only string keys can be expressed as additional properties
            logger.debug("skipping additional properties for map with key %r in %s", key, source.path)
        target.typed("object")
