"""
Scan context.

The mutable state of one synthesis run: the definitions map and the
worklist of declarations discovered through references.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field

from ..config import LanguageBinding, ScanConfig
from ..program.nodes import Program
from ..schema.nodes import Definitions
from .declarations import SchemaDecl
from .resolver import PackageResolver

logger = logging.getLogger(__name__)


@dataclass
class ScanContext:
    """State owned by one scan, passed to every component."""

    program: Program
    config: ScanConfig = field(default_factory=ScanConfig)
    definitions: Definitions = field(default_factory=dict)
    worklist: deque[SchemaDecl] = field(default_factory=deque)
    synthesized: set[tuple[str, str]] = field(default_factory=set)
    resolver: PackageResolver | None = None

    def __post_init__(self):
        if self.resolver is None:
            self.resolver = PackageResolver(self.program)

    @property
    def binding(self) -> LanguageBinding:
        return self.config.binding

    def enqueue(self, decl: SchemaDecl) -> None:
        """Queue a referenced declaration for later synthesis."""
        logger.debug("queued %s (%s) for synthesis", decl.name, decl.file.path)
        self.worklist.append(decl)

    def mark_synthesized(self, decl: SchemaDecl) -> None:
        self.synthesized.add(decl.key)

    def is_synthesized(self, decl: SchemaDecl) -> bool:
        return decl.key in self.synthesized
