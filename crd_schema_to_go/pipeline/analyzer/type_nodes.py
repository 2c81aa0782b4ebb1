"""
Go type graph definitions.

These nodes represent the Go types derived from a CRD schema, ready for
code generation. Types are compared by a name independent signature so
that identical shapes can be declared only once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..config import ImportInfo


class TypeKind(Enum):
    """Kind of Go type."""

    STRUCT = "struct"
    ARRAY = "array"  # []T
    MAP = "map"  # map[string]T
    PRIMITIVE = "primitive"  # string, int, float64, bool
    OPAQUE = "opaque"  # Declared elsewhere, e.g. metav1.Time


# Primitive Go type names
STRING = "string"
INT = "int"
FLOAT = "float64"
BOOL = "bool"

# Shape family of primitive names: int and int64 fields hold the same shape
PRIMITIVE_FAMILIES = {
    "string": "string",
    "int": "int",
    "int8": "int",
    "int16": "int",
    "int32": "int",
    "int64": "int",
    "uint": "int",
    "uint8": "int",
    "uint16": "int",
    "uint32": "int",
    "uint64": "int",
    "float32": "float",
    "float64": "float",
    "bool": "bool",
}


@dataclass
class GoField:
    """A field of a Go struct."""

    name: str = ""  # Exported Go name
    key: str = ""  # Original schema property name
    go_type: GoType | None = None
    required: bool = False
    comment: str = ""

    # Embedded fields render without a name, e.g. metav1.TypeMeta
    embedded: bool = False

    # Explicit json tag, overrides key/required
    tag: str | None = None

    @property
    def json_tag(self) -> str:
        if self.tag is not None:
            return self.tag
        if self.required:
            return self.key
        return f"{self.key},omitempty"

    def signature(self) -> str:
        type_signature = self.go_type.signature() if self.go_type else "nil"
        return f"{self.name}:{type_signature}"


@dataclass
class GoType:
    """A Go type: struct, array, map, primitive or opaque."""

    name: str = ""
    kind: TypeKind = TypeKind.PRIMITIVE

    # For structs
    fields: list[GoField] = field(default_factory=list)

    # For arrays and maps
    element: GoType | None = None

    # For types declared in another package
    import_info: ImportInfo | None = None

    @property
    def is_primitive(self) -> bool:
        return self.kind == TypeKind.PRIMITIVE

    @property
    def is_opaque(self) -> bool:
        return self.kind == TypeKind.OPAQUE

    @property
    def is_container(self) -> bool:
        return self.kind in (TypeKind.ARRAY, TypeKind.MAP)

    def signature(self) -> str:
        """Name independent fingerprint of the shape of this type."""
        if self.kind == TypeKind.STRUCT:
            field_signatures = sorted(f.signature() for f in self.fields)
            return "{" + ",".join(field_signatures) + "}"
        if self.kind == TypeKind.ARRAY:
            return f"[{self._element_signature()}]"
        if self.kind == TypeKind.MAP:
            return f"map[{self._element_signature()}]"
        if self.kind == TypeKind.PRIMITIVE:
            return PRIMITIVE_FAMILIES.get(self.name, self.name)
        return f"{self.name}(opaque)"

    def _element_signature(self) -> str:
        return self.element.signature() if self.element else "nil"

    def base_type(self) -> GoType:
        """Unwrap arrays and maps down to the type they hold."""
        if self.is_container and self.element is not None:
            return self.element.base_type()
        return self


def new_primitive(name: str) -> GoType:
    return GoType(name=name, kind=TypeKind.PRIMITIVE)


def new_array(element: GoType) -> GoType:
    return GoType(name="array", kind=TypeKind.ARRAY, element=element)


def new_map(element: GoType) -> GoType:
    return GoType(name="map", kind=TypeKind.MAP, element=element)


def new_struct(name: str, fields: list[GoField]) -> GoType:
    """Create a struct type with its fields ordered by source key."""
    return GoType(name=name, kind=TypeKind.STRUCT, fields=sorted(fields, key=lambda f: f.key))


def new_opaque(name: str, import_info: ImportInfo | None = None) -> GoType:
    return GoType(name=name, kind=TypeKind.OPAQUE, import_info=import_info)
