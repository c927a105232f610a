"""
Atomic file writer for rendered definitions.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import json
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..config import OutputFormat
from ..errors import OutputWriteError


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def __init__(
        self,
        validate_json: Callable[[str], None] | None = None,
        validate_markdown: Callable[[str], None] | None = None,
    ):
        """Initialize the atomic writer.

        Args:
            validate_json: Optional validation function for JSON documents
            validate_markdown: Optional validation function for Markdown summaries
        """
        self._validate_json = validate_json or self._default_validate_json
        self._validate_markdown = validate_markdown or self._default_validate_markdown

    def write(
        self,
        path: Path,
        content: str,
        output_format: OutputFormat,
        validate: bool = True,
    ) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            output_format: Format used to pick the validation
            validate: Whether to validate before finalizing

        Raises:
            OutputWriteError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self._validate_content(content, output_format)

            temp_path.replace(path)

        except Exception:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass  # Best effort cleanup
            raise

    def write_if_not_exists(
        self,
        path: Path,
        content: str,
        output_format: OutputFormat,
        validate: bool = True,
    ) -> bool:
        """Write content only if the file doesn't exist.

        Raises:
            FileExistsError: If the file already exists
            OutputWriteError: If validation fails
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")

        self.write(path, content, output_format, validate)
        return True

    def _validate_content(self, content: str, output_format: OutputFormat) -> None:
        if output_format == OutputFormat.JSON:
            self._validate_json(content)
        elif output_format == OutputFormat.MARKDOWN:
            self._validate_markdown(content)

    def _default_validate_json(self, content: str) -> None:
        """Default JSON validation.

        Raises:
            OutputWriteError: If the document is not JSON or has no definitions
        """
        try:
            document = json.loads(content)
        except json.JSONDecodeError as e:
            raise OutputWriteError(f"Rendered document is not valid JSON: {e}") from e

        if not isinstance(document, dict) or not isinstance(document.get("definitions"), dict):
            raise OutputWriteError("Rendered document has no definitions object")

    def _default_validate_markdown(self, content: str) -> None:
        if "# Definitions" not in content:
            raise OutputWriteError("Rendered summary is missing the definitions heading")
