"""
Base class for code generation backends.

Defines the interface that the Go backend implements.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ..analyzer.type_nodes import GoType
from ..analyzer.type_registry import TypeRegistry


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, registry: TypeRegistry):
        """
        Initialize the backend.

        Args:
            registry: Registry of the generation run, records emitted declarations
        """
        self.registry = registry
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )

        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.struct_template = self.jinja_env.get_template(f"struct.{self.FILE_EXTENSION}.jinja2")
        self.resource_template = self.jinja_env.get_template(f"resource.{self.FILE_EXTENSION}.jinja2")

    @abstractmethod
    def emit(self, kind: str, spec_type: GoType, status_type: GoType, list_kind: str = "") -> str:
        """
        Emit the declarations of a resource kind.

        Args:
            kind: The resource kind name
            spec_type: Type of the Spec field
            status_type: Type of the Status field
            list_kind: Name of the list type, <kind>List if empty

        Returns:
            Generated declarations as a string
        """

    @abstractmethod
    def translate_type(self, go_type: GoType) -> str:
        """
        Translate a type to a type reference string.

        Args:
            go_type: The type

        Returns:
            Language-specific type string
        """
