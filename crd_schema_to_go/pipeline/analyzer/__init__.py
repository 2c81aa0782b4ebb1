"""
Analyzer module.

Contains the Go type graph, the type registry and the builder turning
schema nodes into Go types.
"""

from __future__ import annotations

from .builder import TypeBuilder, resource_root
from .known_types import known_types, new_registry, type_from_existing
from .type_nodes import GoField, GoType, TypeKind
from .type_registry import TypeRegistry

__all__ = [
    "GoField",
    "GoType",
    "TypeKind",
    "TypeRegistry",
    "TypeBuilder",
    "resource_root",
    "type_from_existing",
    "known_types",
    "new_registry",
]
