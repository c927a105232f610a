"""
Output module.

Renders synthesized definitions and writes them to disk atomically.
"""

from __future__ import annotations

from .render import definitions_document, render, render_json, render_markdown
from .writer import AtomicWriter

__all__ = [
    "AtomicWriter",
    "definitions_document",
    "render",
    "render_json",
    "render_markdown",
]
