"""
gofmt formatter for Go code.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

from ..config import FormatterConfig
from ..errors import OutputValidationError
from .base import Formatter

logger = logging.getLogger(__name__)


class GofmtFormatter(Formatter):
    """Formatter piping Go code through gofmt."""

    def is_available(self, config: FormatterConfig) -> bool:
        """Check if the gofmt executable can be found."""
        return shutil.which(config.command) is not None

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format Go code using gofmt.

        gofmt also parses the code, so a failing run means the generated
        code is not valid Go.

        Args:
            code: Go source code to format
            config: Formatter configuration

        Returns:
            Formatted code, or the code unchanged if gofmt is not installed

        Raises:
            OutputValidationError: If gofmt rejects the code
        """
        if not self.is_available(config):
            logger.warning("%s not found, leaving generated code unformatted", config.command)
            return code

        try:
            result = subprocess.run(
                [config.command],
                input=code,
                capture_output=True,
                text=True,
                timeout=30,
            )
        except subprocess.SubprocessError as exc:
            raise OutputValidationError(f"{config.command} failed: {exc}") from exc

        if result.returncode != 0:
            raise OutputValidationError(f"{config.command} rejected the generated code: {result.stderr.strip()}")
        return result.stdout
