"""
Documentation block parser.

Splits the documentation attached to a declaration or field into a title,
a description, single-line directives (`maximum: 10`, `required`, ...)
and `+swagger:` annotations (`+swagger:model pet`, `+swagger:strfmt date`).
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..utils import cleanup_lines, ends_with_punctuation, join_lines

_SP = r"[^\S\r\n]*"
_NUMBER = r"([+-]?(?:\d+\.)?\d+)"
_INTEGER = r"(\d+)"
_FLAG = rf"(?:{_SP}:{_SP}(true|false))?"
_ITEMS_PREFIX = r"[Ii]tems(?:\.|[^\S\r\n])*"

_ANNOTATION_PATTERN = re.compile(rf"^\+{_SP}swagger:([\w\-]+){_SP}(.*)$")
_NAME_PATTERN = re.compile(r"^[^\W\d_][\w\-]*$")

# Bodies of the directive grammar, without the optional items prefix
_MAXIMUM = rf"[Mm]ax(?:imum)?{_SP}:{_SP}(<=?|=)?{_SP}{_NUMBER}$"
_MINIMUM = rf"[Mm]in(?:imum)?{_SP}:{_SP}(>=?|=)?{_SP}{_NUMBER}$"
_MULTIPLE_OF = rf"[Mm]ultiple{_SP}[Oo]f{_SP}:{_SP}{_NUMBER}$"
_MAX_LENGTH = rf"[Mm]ax(?:imum)?(?:{_SP}[\-_]?[Ll]en(?:gth)?){_SP}:{_SP}{_INTEGER}$"
_MIN_LENGTH = rf"[Mm]in(?:imum)?(?:{_SP}[\-_]?[Ll]en(?:gth)?){_SP}:{_SP}{_INTEGER}$"
_PATTERN = rf"[Pp]attern{_SP}:{_SP}(.*)$"
_MAX_ITEMS = rf"[Mm]ax(?:imum)?(?:{_SP}|[\-_]|\.)?[Ii]tems{_SP}:{_SP}{_INTEGER}$"
_MIN_ITEMS = rf"[Mm]in(?:imum)?(?:{_SP}|[\-_]|\.)?[Ii]tems{_SP}:{_SP}{_INTEGER}$"
_UNIQUE = rf"[Uu]nique{_FLAG}$"
_REQUIRED = rf"[Rr]equired{_FLAG}$"
_READ_ONLY = rf"[Rr]ead(?:{_SP}|[\-_])?[Oo]nly{_FLAG}$"


def _bound(match: re.Match) -> tuple[float, bool]:
    operator, number = match.group(1), match.group(2)
    return float(number), operator in ("<", ">")


def _number(match: re.Match) -> float:
    return float(match.group(1))


def _integer(match: re.Match) -> int:
    return int(match.group(1))


def _text(match: re.Match) -> str:
    return match.group(1).strip()


def _flag(match: re.Match) -> bool:
    return match.group(1) in (None, "true")


@dataclass
class DirectiveSpec:
    """One keyword of the directive grammar."""

    keyword: str
    pattern: re.Pattern
    convert: Callable[[re.Match], Any]

    def match(self, line: str) -> Any | None:
        found = self.pattern.match(line)
        if found is None:
            return None
        return self.convert(found)


def _spec(keyword: str, body: str, convert: Callable[[re.Match], Any], prefix: str = "") -> DirectiveSpec:
    return DirectiveSpec(keyword, re.compile(f"^{prefix}{body}"), convert)


_VALIDATIONS = [
    ("maximum", _MAXIMUM, _bound),
    ("minimum", _MINIMUM, _bound),
    ("multipleOf", _MULTIPLE_OF, _number),
    ("minLength", _MIN_LENGTH, _integer),
    ("maxLength", _MAX_LENGTH, _integer),
    ("pattern", _PATTERN, _text),
    ("minItems", _MIN_ITEMS, _integer),
    ("maxItems", _MAX_ITEMS, _integer),
    ("unique", _UNIQUE, _flag),
]

# Items-prefixed variants come first so they win over the plain keywords
DIRECTIVE_SPECS: list[DirectiveSpec] = (
    [_spec("items" + kw[0].upper() + kw[1:], body, convert, _ITEMS_PREFIX) for kw, body, convert in _VALIDATIONS]
    + [_spec(kw, body, convert) for kw, body, convert in _VALIDATIONS]
    + [
        _spec("required", _REQUIRED, _flag),
        _spec("readOnly", _READ_ONLY, _flag),
    ]
)

ITEMS_KEYWORDS = frozenset(spec.keyword for spec in DIRECTIVE_SPECS[: len(_VALIDATIONS)])


@dataclass
class Directive:
    """A parsed directive line."""

    keyword: str
    value: Any
    line: str = ""


@dataclass
class Annotation:
    """A `+swagger:<name> [argument]` line."""

    name: str
    argument: str = ""


@dataclass
class ParsedDoc:
    """Structured form of a documentation block."""

    title: str = ""
    description: str = ""
    directives: list[Directive] = field(default_factory=list)
    annotations: list[Annotation] = field(default_factory=list)

    def directive(self, keyword: str) -> Directive | None:
        """Return the directive for a keyword; a repeated keyword resolves to its last occurrence."""
        found = None
        for directive in self.directives:
            if directive.keyword == keyword:
                found = directive
        return found

    def annotation(self, name: str) -> Annotation | None:
        for annotation in self.annotations:
            if annotation.name == name:
                return annotation
        return None

    @property
    def model_name(self) -> str | None:
        """External schema name from the first `+swagger:model <name>` line carrying one."""
        for annotation in self.annotations:
            if annotation.name == "model" and _NAME_PATTERN.match(annotation.argument):
                return annotation.argument
        return None

    @property
    def strfmt_name(self) -> str | None:
        annotation = self.annotation("strfmt")
        if annotation and _NAME_PATTERN.match(annotation.argument):
            return annotation.argument
        return None

    @property
    def is_all_of_member(self) -> bool:
        return self.annotation("allOf") is not None


def match_directive(line: str) -> Directive | None:
    """Match one cleaned line against the directive grammar; first matching keyword wins."""
    stripped = line.strip()
    for spec in DIRECTIVE_SPECS:
        value = spec.match(stripped)
        if value is not None:
            return Directive(spec.keyword, value, stripped)
    return None


def split_title_description(lines: list[str]) -> tuple[list[str], list[str]]:
    """
    Split header lines into title and description.

    The first paragraph is the title when a blank line follows it; a
    single-paragraph header only has a title when its first line ends
    with punctuation.
    """
    for idx, line in enumerate(lines):
        if not line.strip():
            return lines[:idx], lines[idx + 1 :]
    if lines and ends_with_punctuation(lines[0]):
        return lines[:1], lines[1:]
    return [], lines


def parse_doc(doc: str | None, with_title: bool = True) -> ParsedDoc:
    """
    Parse a documentation block.

    Lines before the first directive or annotation form the header; the
    header is split into title and description (or used entirely as the
    description when `with_title` is False).

    Args:
        doc: Documentation text attached to a declaration or field
        with_title: Whether to extract a title from the header

    Returns:
        ParsedDoc with title, description, directives and annotations
    """
    parsed = ParsedDoc()
    if not doc:
        return parsed

    header: list[str] = []
    seen_tag = False
    for line in cleanup_lines(doc.splitlines()):
        annotation = _ANNOTATION_PATTERN.match(line.strip())
        if annotation:
            parsed.annotations.append(Annotation(annotation.group(1), annotation.group(2).strip()))
            seen_tag = True
            continue
        directive = match_directive(line)
        if directive:
            parsed.directives.append(directive)
            seen_tag = True
            continue
        if not seen_tag:
            header.append(line)

    header = cleanup_lines(header)
    if with_title:
        title, description = split_title_description(header)
    else:
        title, description = [], header
    parsed.title = join_lines(title)
    parsed.description = join_lines(cleanup_lines(description))
    return parsed
