"""
Scan driver.

Feeds the declarations of every file to the synthesizer, then drains the
worklist of referenced declarations until it is empty.
"""

from __future__ import annotations

import logging

from ..config import ScanConfig
from ..program.nodes import Program, SourceFile
from ..schema.nodes import Definitions
from .context import ScanContext
from .declarations import SchemaDecl, collect_declarations
from .synthesizer import SchemaSynthesizer

logger = logging.getLogger(__name__)


class SchemaScanner:
    """Synthesizes the definitions of a whole program."""

    def __init__(self, program: Program, config: ScanConfig | None = None):
        """
        Initialize the scanner.

        Args:
            program: The loaded program
            config: Scan configuration (defaults apply when None)
        """
        self.config = config or ScanConfig()
        self.context = ScanContext(program=program, config=self.config)
        self.synthesizer = SchemaSynthesizer(self.context)

    @property
    def definitions(self) -> Definitions:
        return self.context.definitions

    def scan(self) -> Definitions:
        """
        Scan every file of every importable package.

        Returns:
            The definitions map. After an error the map is incomplete and
            must be discarded.
        """
        for pkg in self.context.program.importable_packages():
            for source in pkg.files:
                self.scan_file(source)
        self.drain()
        logger.info("synthesized %d definitions", len(self.definitions))
        return self.definitions

    def scan_file(self, source: SourceFile) -> None:
        """Synthesize the collectable type declarations of one file."""
        for decl in collect_declarations(source):
            if self._skip(decl):
                continue
            self.synthesizer.synthesize(decl)

    def drain(self) -> None:
        """Synthesize queued declarations, including the ones queued while draining."""
        worklist = self.context.worklist
        while worklist:
            decl = worklist.popleft()
            if self.context.is_synthesized(decl):
                continue
            self.synthesizer.synthesize(decl)

    def _skip(self, decl: SchemaDecl) -> bool:
        if decl.name in self.config.ignore_types:
            logger.debug("ignoring %s", decl.name)
            return True
        if self.config.annotated_only and not decl.is_model:
            return True
        return False


def scan_program(program: Program, config: ScanConfig | None = None) -> Definitions:
    """Synthesize the definitions of a program."""
    return SchemaScanner(program, config).scan()
