"""
Utility functions for documentation text handling.
"""

import re
import unicodedata

# Comment markers and list bullets left over from the source comment syntax
_UNCOMMENT_PATTERN = re.compile(r"^[\s\t/*-]*\|?")


def _strip_comment_markers(line: str) -> str:
    """Remove leading comment markers from one line."""
    return _UNCOMMENT_PATTERN.sub("", line, count=1).rstrip()


def cleanup_lines(lines: list[str]) -> list[str]:
    """Strip comment markers and drop leading and trailing blank lines.

    Examples:
        ["// Pet is a pet.", "//", ""] -> ["Pet is a pet."]
        ["  * first", " *", " * second"] -> ["first", "", "second"]

    Args:
        lines: Raw documentation lines

    Returns:
        Cleaned lines with inner blank lines preserved
    """
    cleaned = [_strip_comment_markers(line) for line in lines]
    start = 0
    while start < len(cleaned) and not cleaned[start].strip():
        start += 1
    end = len(cleaned)
    while end > start and not cleaned[end - 1].strip():
        end -= 1
    return cleaned[start:end]


def join_lines(lines: list[str]) -> str:
    """Join documentation lines, dropping trailing blank lines."""
    end = len(lines)
    while end > 0 and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[:end])


def ends_with_punctuation(line: str) -> bool:
    """Check whether a line ends with sentence punctuation (e.g. "." or "!")."""
    stripped = line.rstrip()
    return bool(stripped) and unicodedata.category(stripped[-1]) == "Po"
