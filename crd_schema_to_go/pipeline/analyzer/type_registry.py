"""
Type registry for deduplicating Go types and resolving their names.

The registry maps type signatures and names to the Go type owning them,
for a whole generation run. A struct shaped like an already registered
type is bound to that type; otherwise it receives a free name, prefixed
with as many ancestor names as needed to make it unique.

A registry is not meant to be shared between concurrent generation runs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ...utils import exported_name, is_exported
from ..errors import NameExhaustedError
from .type_nodes import GoField, GoType, new_opaque

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Registers Go types by signature and by name."""

    def __init__(self, renames: dict[str, str] | None = None, types: Iterable[GoType] = ()):
        """
        Initialize the registry.

        Args:
            renames: Explicit type name overrides (generated name -> wanted name)
            types: Types to preload, e.g. the known reference types
        """
        self.by_signature: dict[str, GoType] = {}
        self.by_name: dict[str, GoType] = {}
        self.generated: set[str] = set()
        self.renames: dict[str, str] = dict(renames or {})
        self.add_all(types)

    def has(self, go_type: GoType) -> bool:
        """Check if a type with the same shape is registered."""
        return go_type.signature() in self.by_signature

    def get(self, name: str) -> GoType | None:
        """Look a type up by its Go name."""
        return self.by_name.get(name)

    def add(self, go_type: GoType) -> None:
        """
        Register a type under its signature and its name.

        A signature already registered keeps its first type.

        Raises:
            ValueError: If the type name is not an exported Go name
        """
        if not is_exported(go_type.name):
            raise ValueError(f"type name {go_type.name!r} is not exported")
        self.by_signature.setdefault(go_type.signature(), go_type)
        self.by_name[go_type.name] = go_type

    def add_all(self, types: Iterable[GoType]) -> None:
        for go_type in types:
            self.add(go_type)

    def reserve(self, name: str) -> GoType:
        """Reserve a name so that no generated type can take it."""
        placeholder = new_opaque(name)
        self.add(placeholder)
        return placeholder

    def is_reserved(self, name: str) -> bool:
        """Check that a name is held by a bare placeholder, not by a real type."""
        go_type = self.by_name.get(name)
        return go_type is not None and go_type.is_opaque and go_type.import_info is None

    def rename(self, name: str) -> str:
        """Apply the explicit rename overrides."""
        return self.renames.get(name, name)

    def resolve_field_type(self, go_field: GoField, ancestors: list[str]) -> None:
        """
        Deduplicate or name the type held by a field.

        For arrays and maps the held element type is resolved, and the field
        keeps its container around the resolved element.

        Args:
            go_field: Field whose type was freshly built
            ancestors: Enclosing type names, farthest first

        Raises:
            NameExhaustedError: If no free name could be found
        """
        if go_field.go_type is None:
            raise ValueError(f"field {go_field.name} has no type")
        base = go_field.go_type.base_type()
        resolved = self.resolve_type(base, ancestors, field_name=go_field.name)
        if resolved is not base:
            go_field.go_type = replace_base(go_field.go_type, resolved)

    def resolve_type(self, go_type: GoType, ancestors: list[str], field_name: str = "") -> GoType:
        """
        Return the registered type to use in place of a freshly built one.

        Primitive and opaque types are returned as is. A registered type with
        the same signature is reused. Otherwise the type is renamed to a free
        name and registered.

        Args:
            go_type: Freshly built type
            ancestors: Enclosing type names, farthest first
            field_name: Name of the field holding the type, for error messages

        Returns:
            The type to bind to, either go_type itself or a registered one

        Raises:
            NameExhaustedError: If no free name could be found
        """
        if go_type.is_primitive or go_type.is_opaque:
            return go_type

        existing = self.by_signature.get(go_type.signature())
        if existing is not None:
            if existing is not go_type:
                logger.debug("type %s deduplicated as %s", go_type.name, existing.name)
            return existing

        candidate = self.rename(exported_name(go_type.name))
        imported = self.by_name.get(candidate)
        if imported is not None and imported.is_opaque and imported.import_info is not None:
            logger.debug("type %s bound to imported %s.%s", go_type.name, imported.import_info.alias, imported.name)
            return imported

        for ancestor in reversed(ancestors):
            if candidate not in self.by_name:
                break
            candidate = f"{exported_name(ancestor)}{candidate}"

        if candidate in self.by_name:
            raise NameExhaustedError(field_name or go_type.name, go_type.name, ancestors)

        if candidate != go_type.name:
            logger.debug("type %s renamed to %s", go_type.name, candidate)
        go_type.name = candidate
        self.add(go_type)
        return go_type

    def mark_generated(self, go_type: GoType) -> None:
        """Record that the declaration of a type was emitted."""
        if go_type.name not in self.by_name:
            self.add(go_type)
        self.generated.add(go_type.name)

    def was_generated(self, go_type: GoType) -> bool:
        return go_type.name in self.generated


def replace_base(go_type: GoType, base: GoType) -> GoType:
    """Swap the innermost element of nested arrays and maps."""
    if not go_type.is_container or go_type.element is None:
        return base
    go_type.element = replace_base(go_type.element, base)
    return go_type
