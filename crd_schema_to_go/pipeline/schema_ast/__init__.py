"""
Schema AST module.

Contains the schema node definitions and the CRD parser.
"""

from __future__ import annotations

from .nodes import ResourceSchema, SchemaKind, SchemaNode, VersionedResource
from .parser import CRDParser, select_version

__all__ = [
    "SchemaKind",
    "SchemaNode",
    "VersionedResource",
    "ResourceSchema",
    "CRDParser",
    "select_version",
]
