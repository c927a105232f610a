"""
Schema synthesizer and embedded-type flattener.

Builds the schema of one type declaration: title and description from its
documentation, fields of embedded types merged in embedding order, then the
struct's own exported fields applied on top (last writer wins per property).
"""

from __future__ import annotations

import logging

from ..errors import MalformedTagError, UnsupportedConstructError
from ..program.nodes import (
    ArrayType,
    Field,
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
from .annotations import parse_doc
from .context import ScanContext
from .declarations import SchemaDecl
from .directives import apply_field_directives, apply_reference_directives, set_required
from .properties import PropertyMapper
from .resolver import ResolvedType
from .tags import serialized_name

logger = logging.getLogger(__name__)

# Underlying shapes of non-struct declarations that are mapped like a property
_MAPPABLE_ALIASES = (Ident, Pointer, ArrayType, MapType, Selector)


class StructFlattener:
    """Writes the fields of a struct, including embedded ones, into a schema."""

    def __init__(self, context: ScanContext):
        self.context = context
        self.mapper = PropertyMapper(context, self)

    def parse_struct(self, source: SourceFile, schema: Schema, struct: StructType, seen: set[str]) -> None:
        """
        Merge the fields of a struct into a schema.

        Args:
            source: File declaring the struct
            schema: Schema receiving the properties
            struct: The struct type
            seen: Property names written so far along the embedding chain;
                properties of the schema outside this set are pruned
        """
        schema.typed("object")

        # Embedded types first, in order of embedding
        for fld in struct.fields:
            if fld.is_embedded:
                self.parse_embedded(source, schema, fld, seen)

        # Then own fields, possibly overriding embedded ones
        for fld in struct.fields:
            if fld.is_embedded:
                continue
            for identifier in fld.names:
                if self.context.binding.is_exported(identifier):
                    self.parse_field(source, schema, fld, identifier, seen)

        for name in list(schema.properties):
            if name not in seen:
                del schema.properties[name]
        schema.required = [name for name in schema.required if name in seen]

    def parse_embedded(self, source: SourceFile, schema: Schema, fld: Field, seen: set[str]) -> None:
        resolved = self._resolve_embedded(source, fld.type)

        if parse_doc(fld.doc).is_all_of_member:
            self._add_all_of_member(schema, resolved)
            return

        if not isinstance(resolved.spec.type, StructType):
            raise UnsupportedConstructError(f"unable to resolve embedded struct for {fld.type!r}: {resolved.spec.name} is not a struct")
        self.parse_struct(resolved.file, schema, resolved.spec.type, seen)

    def _resolve_embedded(self, source: SourceFile, expr: TypeExpr | None) -> ResolvedType:
        resolver = self.context.resolver
        if isinstance(expr, Pointer):
            expr = expr.elem

        if isinstance(expr, Ident):
            pkg = resolver.package_for_file(source)
            return resolver.find(pkg, expr.name)
        if isinstance(expr, Selector):
            pkg = resolver.package_for_selector(source, expr.package)
            return resolver.find(pkg, expr.name)
        raise UnsupportedConstructError(f"unable to resolve embedded struct for {expr!r}")

    def _add_all_of_member(self, schema: Schema, resolved: ResolvedType) -> None:
        """Reference an embedded type as an allOf member instead of flattening it."""
        decl = SchemaDecl(resolved.file, resolved.decl, resolved.spec)
        decl.infer_names()
        ref = make_ref(decl.name)
        if all(member.ref != ref for member in schema.all_of):
            member = Schema()
            member.set_ref(ref)
            schema.all_of.append(member)
        self.context.enqueue(decl)

    def parse_field(self, source: SourceFile, schema: Schema, fld: Field, identifier: str, seen: set[str]) -> None:
        binding = self.context.binding
        name = identifier

        serialized = serialized_name(fld.tag, binding.serialization_tag)
        if serialized is not None:
            if serialized.is_skipped:
                return
            if serialized.name:
                if len(fld.names) > 1:
                    raise MalformedTagError(f"tag on {', '.join(fld.names)} names a single property for several fields")
                name = serialized.name

        field_type = fld.type.elem if isinstance(fld.type, Pointer) else fld.type
        if isinstance(field_type, InterfaceType):
            logger.debug("skipping interface field %s in %s", identifier, source.path)
            return

        prop = Schema()
        self.mapper.map_type(source, fld.type, SchemaTarget(prop))

        # An overridden embedded property keeps none of its required state
        if name in seen:
            set_required(schema, name, False)

        doc = parse_doc(fld.doc, with_title=False)
        if prop.is_ref:
            apply_reference_directives(doc.directives, schema, name)
        else:
            prop.description = doc.description
            items = prop.items if self._is_primitive_array(fld.type, prop) else None
            apply_field_directives(doc.directives, schema, name, prop, items)

        if name != identifier:
            prop.add_extension(binding.name_extension, identifier)

        seen.add(name)
        schema.properties[name] = prop

    def _is_primitive_array(self, expr: TypeExpr | None, prop: Schema) -> bool:
        return (
            isinstance(expr, ArrayType)
            and isinstance(expr.elem, Ident)
            and self.context.binding.is_builtin(expr.elem.name)
            and prop.items is not None
            and not prop.items.is_ref
        )


class SchemaSynthesizer:
    """Synthesizes the schema of one declaration into the definitions map."""

    def __init__(self, context: ScanContext):
        self.context = context
        self.flattener = StructFlattener(context)

    def synthesize(self, decl: SchemaDecl) -> Schema:
        """
        Synthesize a declaration and store it under its external name.

        An existing schema with the same name is updated in place.

        Args:
            decl: The declaration to synthesize

        Returns:
            The stored schema
        """
        internal_name, name = decl.infer_names()
        binding = self.context.binding
        logger.debug("synthesizing %s from %s", name, decl.file.path)

        schema = self.context.definitions.get(name) or Schema()

        doc = parse_doc(decl.decl.doc)
        schema.title = doc.title
        schema.description = doc.description

        underlying = decl.spec.type
        if isinstance(underlying, StructType):
            schema.all_of = []
            self.flattener.parse_struct(decl.file, schema, underlying, set())
        elif doc.strfmt_name:
            schema.typed("string", doc.strfmt_name)
        elif isinstance(underlying, _MAPPABLE_ALIASES):
            self.flattener.mapper.map_type(decl.file, underlying, SchemaTarget(schema))

        if name != internal_name:
            schema.add_extension(binding.name_extension, internal_name)
        pkg = self.context.program.package_for_file(decl.file)
        if pkg is not None and pkg.importable:
            schema.add_extension(binding.package_extension, pkg.path)

        self.context.definitions[name] = schema
        self.context.mark_synthesized(decl)
        return schema
