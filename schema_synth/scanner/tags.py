"""
Struct tag grammar.

A raw tag literal is a quoted string (backquoted or double-quoted) whose
content is a sequence of `key:"value"` pairs. The serialization value
itself follows the `name[,flag,...]` grammar.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from ..errors import MalformedTagError


def unquote_tag(raw: str) -> str:
    """
    Remove the quotes around a raw tag literal.

    Args:
        raw: Tag literal as written in the source, e.g. `` `json:"name"` ``

    Returns:
        The tag content

    Raises:
        MalformedTagError: If the literal is not validly quoted
    """
    text = raw.strip()
    if len(text) >= 2 and text[0] == text[-1] == "`":
        inner = text[1:-1]
        if "`" in inner:
            raise MalformedTagError(f"invalid raw string tag: {raw}")
        return inner
    if len(text) >= 2 and text[0] == text[-1] == '"':
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedTagError(f"invalid quoted tag: {raw}") from e
    raise MalformedTagError(f"tag is not a quoted string: {raw}")


@dataclass
class StructTag:
    """The content of a struct tag: `key:"value" key2:"value2"`."""

    content: str = ""

    def lookup(self, key: str) -> str | None:
        """Return the value stored under key, or None when the key is absent or the tag is ill-formed."""
        tag = self.content
        while tag:
            tag = tag.lstrip(" ")
            if not tag:
                break

            i = 0
            while i < len(tag) and tag[i] > " " and tag[i] not in ':"\x7f':
                i += 1
            if i == 0 or i + 1 >= len(tag) or tag[i] != ":" or tag[i + 1] != '"':
                break
            name = tag[:i]
            tag = tag[i + 1 :]

            # Scan the quoted value, honouring escapes
            i = 1
            while i < len(tag) and tag[i] != '"':
                if tag[i] == "\\":
                    i += 1
                i += 1
            if i >= len(tag):
                break
            quoted = tag[: i + 1]
            tag = tag[i + 1 :]

            if name == key:
                try:
                    return json.loads(quoted)
                except json.JSONDecodeError:
                    return None
        return None

    def get(self, key: str) -> str:
        return self.lookup(key) or ""


@dataclass
class SerializedName:
    """A serialization tag value: `name[,flag,...]`."""

    name: str = ""
    flags: list[str] = field(default_factory=list)
    raw: str = ""

    @staticmethod
    def parse(value: str) -> SerializedName:
        name, *flags = value.split(",")
        return SerializedName(name=name.strip(), flags=[f.strip() for f in flags if f.strip()], raw=value)

    @property
    def is_skipped(self) -> bool:
        """A name of "-" excludes the field from serialization."""
        return self.raw == "-"

    def has_flag(self, flag: str) -> bool:
        return flag in self.flags


def serialized_name(raw_tag: str | None, tag_key: str) -> SerializedName | None:
    """
    Extract the serialization name from a raw field tag.

    Args:
        raw_tag: The quoted tag literal, or None
        tag_key: The tag key carrying the serialized name (e.g. "json")

    Returns:
        SerializedName if the tag holds a non-empty value for the key, else None
    """
    if raw_tag is None or not raw_tag.strip():
        return None
    content = unquote_tag(raw_tag)
    if not content.strip():
        return None
    value = StructTag(content).get(tag_key)
    if not value:
        return None
    return SerializedName.parse(value)
