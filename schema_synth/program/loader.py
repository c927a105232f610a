"""
Program manifest loader.

Builds the immutable declaration tree from the JSON manifest produced by
an external source indexer. Type expressions may be written as objects or
in a compact textual form (`*T`, `[]T`, `map[K]V`, `pkg.Name`, ...).
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from ..errors import ManifestError
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

logger = logging.getLogger(__name__)

_TOKEN_PATTERN = re.compile(r"\s*(?:(?P<name>[^\W\d]\w*)|(?P<number>\d+)|(?P<punct>[\[\]{}*.(),]))")


class TypeExprParser:
    """Recursive-descent parser for the compact type expression syntax."""

    def __init__(self, text: str):
        self.text = text
        self.tokens = self._tokenize(text)
        self.pos = 0

    def _tokenize(self, text: str) -> list[str]:
        tokens = []
        pos = 0
        text = text.rstrip()
        while pos < len(text):
            match = _TOKEN_PATTERN.match(text, pos)
            if not match or match.end() == pos:
                raise ManifestError(f"invalid type expression {text!r} at offset {pos}")
            tokens.append(match.group(match.lastgroup))
            pos = match.end()
        return tokens

    def _peek(self) -> str | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _next(self) -> str:
        token = self._peek()
        if token is None:
            raise ManifestError(f"unexpected end of type expression {self.text!r}")
        self.pos += 1
        return token

    def _expect(self, token: str) -> None:
        found = self._next()
        if found != token:
            raise ManifestError(f"expected {token!r} but found {found!r} in type expression {self.text!r}")

    def parse(self) -> TypeExpr:
        expr = self._parse_expr()
        if self._peek() is not None:
            raise ManifestError(f"trailing input {self._peek()!r} in type expression {self.text!r}")
        return expr

    def _parse_expr(self) -> TypeExpr:
        token = self._next()
        if token == "*":
            return Pointer(elem=self._parse_expr())
        if token == "[":
            length = None
            if self._peek() != "]":
                length_token = self._next()
                if not length_token.isdigit():
                    raise ManifestError(f"invalid array length {length_token!r} in type expression {self.text!r}")
                length = int(length_token)
            self._expect("]")
            return ArrayType(elem=self._parse_expr(), length=length)
        if token == "map":
            self._expect("[")
            key = self._parse_expr()
            self._expect("]")
            return MapType(key=key, value=self._parse_expr())
        if token == "interface":
            self._expect("{")
            self._expect("}")
            return InterfaceType()
        if token in ("func", "chan"):
            # Signatures are not modelled, the remaining tokens are discarded
            self.pos = len(self.tokens)
            return OtherType(kind=token)
        if not (token[0].isalpha() or token[0] == "_"):
            raise ManifestError(f"unexpected {token!r} in type expression {self.text!r}")
        if self._peek() == ".":
            self._next()
            return Selector(package=token, name=self._next())
        return Ident(name=token)


def parse_type_expr(text: str) -> TypeExpr:
    """Parse a compact type expression such as `map[string][]*models.Pet`."""
    return TypeExprParser(text).parse()


class ProgramLoader:
    """Loads a `Program` from a manifest dictionary."""

    def load(self, manifest: dict[str, Any]) -> Program:
        """
        Build the declaration tree from a manifest.

        Args:
            manifest: The decoded manifest document

        Returns:
            Program with every package, file and declaration
        """
        if not isinstance(manifest, dict) or not isinstance(manifest.get("packages"), list):
            raise ManifestError("manifest must be an object with a 'packages' list")
        program = Program()
        for pkg_data in manifest["packages"]:
            program.packages.append(self._load_package(pkg_data))
        logger.debug("loaded %d packages", len(program.packages))
        return program

    def _load_package(self, data: dict[str, Any]) -> Package:
        path = self._require(data, "path", "package")
        name = data.get("name") or path.rstrip("/").split("/")[-1]
        pkg = Package(path=path, name=name, importable=data.get("importable", True))
        for file_data in data.get("files", []):
            pkg.files.append(self._load_file(file_data, name))
        return pkg

    def _load_file(self, data: dict[str, Any], package_name: str) -> SourceFile:
        source = SourceFile(path=self._require(data, "path", "file"), package_name=package_name)
        for imp in data.get("imports", []):
            if isinstance(imp, str):
                source.imports.append(Import(path=imp))
            else:
                source.imports.append(Import(path=self._require(imp, "path", "import"), alias=imp.get("alias")))
        for decl_data in data.get("decls", []):
            source.decls.append(self._load_decl(decl_data))
        return source

    def _load_decl(self, data: dict[str, Any]) -> Decl:
        self._expect_object(data, "declaration")
        kind = data.get("kind", "type")
        if kind != "type":
            return OtherDecl(doc=data.get("doc"), kind=kind, name=data.get("name", ""))

        decl = TypeDecl(doc=data.get("doc"))
        if "specs" in data:
            specs = data["specs"]
        else:
            # Single-spec shorthand: {"name": ..., "type": ...}
            specs = [{"name": data.get("name"), "type": data.get("type")}]
        for spec_data in specs:
            decl.specs.append(
                TypeSpec(
                    name=self._require(spec_data, "name", "type spec"),
                    type=self._load_type(spec_data.get("type")),
                )
            )
        return decl

    def _load_field(self, data: dict[str, Any]) -> Field:
        self._expect_object(data, "field")
        if "names" in data:
            if not isinstance(data["names"], list):
                raise ManifestError(f"field names must be a list: {data!r}")
            names = list(data["names"])
        elif data.get("name"):
            names = [data["name"]]
        else:
            names = []
        return Field(
            names=names,
            type=self._load_type(data.get("type")),
            tag=data.get("tag"),
            doc=data.get("doc"),
        )

    def _load_type(self, data: Any) -> TypeExpr:
        if isinstance(data, str):
            return parse_type_expr(data)
        if not isinstance(data, dict) or len(data) != 1:
            raise ManifestError(f"invalid type expression: {data!r}")

        kind, value = next(iter(data.items()))
        if kind == "ident":
            return Ident(name=value)
        if kind == "pointer":
            return Pointer(elem=self._load_type(value))
        if kind == "array":
            if isinstance(value, dict) and "elem" in value:
                return ArrayType(elem=self._load_type(value["elem"]), length=value.get("length"))
            return ArrayType(elem=self._load_type(value))
        if kind == "map":
            if not isinstance(value, dict):
                raise ManifestError(f"map type needs key and value: {value!r}")
            return MapType(key=self._load_type(value.get("key")), value=self._load_type(value.get("value")))
        if kind == "struct":
            if not isinstance(value, list):
                raise ManifestError(f"struct type needs a list of fields: {value!r}")
            return StructType(fields=[self._load_field(f) for f in value])
        if kind == "selector":
            package, _, name = value.partition(".")
            if not name:
                raise ManifestError(f"selector must be qualified: {value!r}")
            return Selector(package=package, name=name)
        if kind == "interface":
            return InterfaceType()
        return OtherType(kind=kind)

    @staticmethod
    def _expect_object(data: Any, what: str) -> None:
        if not isinstance(data, dict):
            raise ManifestError(f"{what} entry must be an object: {data!r}")

    @staticmethod
    def _require(data: dict[str, Any], key: str, what: str) -> Any:
        if not isinstance(data, dict) or not data.get(key):
            raise ManifestError(f"{what} entry is missing '{key}': {data!r}")
        return data[key]


def load_program(path: str | Path) -> Program:
    """Load a program manifest from a JSON file."""
    try:
        with open(path, encoding="utf-8") as f:
            manifest = json.load(f)
    except json.JSONDecodeError as e:
        raise ManifestError(f"manifest {path} is not valid JSON: {e}") from e
    return ProgramLoader().load(manifest)
