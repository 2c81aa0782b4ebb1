"""
Node definitions for parsed CRD schemas.

These nodes represent the parsed structure of a CRD before any Go type
is derived from it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ...utils import kind_to_filename


class SchemaKind(Enum):
    """Supported OpenAPI v3 schema types."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"

    @classmethod
    def from_type_name(cls, type_name: str) -> SchemaKind | None:
        """Map a raw schema type to its kind, or None when unsupported."""
        try:
            return cls(type_name)
        except ValueError:
            return None


@dataclass(frozen=True)
class SchemaNode:
    """One node of a CRD OpenAPI v3 schema."""

    # Raw "type" value, kept for error messages on unsupported kinds
    type_name: str = ""
    kind: SchemaKind | None = None

    # Object properties, ordered by key
    properties: dict[str, SchemaNode] = field(default_factory=dict)
    required: frozenset[str] = frozenset()

    # Array item schema
    items: SchemaNode | None = None

    # additionalProperties: is_dict marks a map, additional_properties is its value schema (if any)
    is_dict: bool = False
    additional_properties: SchemaNode | None = None

    # Object without properties preserving unknown fields
    free_form: bool = False

    # x-kubernetes-int-or-string
    int_or_string: bool = False

    format: str = ""
    description: str = ""

    # Original location in the document (for error messages)
    source_path: str = ""


@dataclass(frozen=True)
class VersionedResource:
    """A resource kind paired with one of its declared versions."""

    kind: str = ""
    version: str = ""
    group: str = ""
    plural: str = ""
    list_kind: str = ""
    spec: SchemaNode | None = None
    status: SchemaNode | None = None

    @property
    def list_typename(self) -> str:
        return self.list_kind or f"{self.kind}List"

    @property
    def spec_typename(self) -> str:
        return f"{self.kind}Spec"

    @property
    def status_typename(self) -> str:
        return f"{self.kind}Status"

    @property
    def gvr(self) -> str:
        """group/version/plural of the resource."""
        return f"{self.group}/{self.version}/{self.plural}".lstrip("/")

    @property
    def filename(self) -> str:
        return kind_to_filename(self.kind)


@dataclass
class ResourceSchema:
    """Root of one parsed CRD document."""

    kind: str = ""
    group: str = ""
    plural: str = ""
    list_kind: str = ""
    versions: list[VersionedResource] = field(default_factory=list)
