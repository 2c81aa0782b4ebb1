"""
Atomic file writer for safe code generation.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import logging
import re
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..errors import OutputValidationError

logger = logging.getLogger(__name__)

PACKAGE_CLAUSE = re.compile(r"^package [A-Za-z_][A-Za-z0-9_]*$", re.MULTILINE)
LINE_COMMENT = re.compile(r"//.*")


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def __init__(self, validate: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate: Optional validation function for Go code
        """
        self._validate = validate or validate_go

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            OutputValidationError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory keeps the final rename on one filesystem
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
                self._validate(content)

            temp_path.replace(path)
            logger.debug("wrote %s", path)

        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

    def write_if_not_exists(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content only if the file doesn't exist.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            FileExistsError: If the file already exists
            OutputValidationError: If validation fails
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use --force to overwrite.")

        self.write(path, content, validate)


def validate_go(content: str) -> None:
    """Basic structural checks of a generated Go file.

    Args:
        content: Go code to validate

    Raises:
        OutputValidationError: If validation fails
    """
    if not PACKAGE_CLAUSE.search(content):
        raise OutputValidationError("Generated Go code is missing a package clause")

    code = LINE_COMMENT.sub("", content)
    open_braces = code.count("{")
    close_braces = code.count("}")
    if open_braces != close_braces:
        raise OutputValidationError(f"Generated Go code has unbalanced braces: {open_braces} open, {close_braces} close")
