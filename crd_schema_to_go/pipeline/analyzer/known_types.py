"""
Known types seeded into the registry before any schema is processed.

Types that already exist in Go (cross namespace references, local
references, status conditions) are described here as dataclasses and
translated to Go types by introspection. Schema nodes shaped like one of
them are then bound to the existing Go type instead of being declared
again.
"""

from __future__ import annotations

import dataclasses
import typing
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ...utils import exported_name
from ..config import ImportedTypeConfig, ImportInfo
from ..errors import UnsupportedShapeError
from .type_nodes import BOOL, FLOAT, INT, STRING, GoField, GoType, new_array, new_opaque, new_primitive, new_struct
from .type_registry import TypeRegistry

K8S_IMPORT = ImportInfo(alias="k8s", path="github.com/crd2go/crd2go/k8s")
METAV1_IMPORT = ImportInfo(alias="metav1", path="k8s.io/apimachinery/pkg/apis/meta/v1")
APIEXTENSIONSV1_IMPORT = ImportInfo(alias="apiextensionsv1", path="k8s.io/apiextensions-apiserver/pkg/apis/apiextensions/v1")
INTSTR_IMPORT = ImportInfo(alias="intstr", path="k8s.io/apimachinery/pkg/util/intstr")


class IntOrString:
    """Stand-in for intstr.IntOrString."""


# Built-in opaque types, never expanded field by field
TIME_TYPE = new_opaque("Time", METAV1_IMPORT)
JSON_TYPE = new_opaque("JSON", APIEXTENSIONSV1_IMPORT)
INT_OR_STRING_TYPE = new_opaque("IntOrString", INTSTR_IMPORT)
TYPE_META_TYPE = new_opaque("TypeMeta", METAV1_IMPORT)
OBJECT_META_TYPE = new_opaque("ObjectMeta", METAV1_IMPORT)

BUILTIN_OVERRIDES: dict[Any, GoType] = {
    datetime: TIME_TYPE,
    Any: JSON_TYPE,
    dict: JSON_TYPE,
    IntOrString: INT_OR_STRING_TYPE,
}

# Schema formats -> canonical format
FORMAT_ALIASES = {
    "date-time": "date-time",
    "datetime": "date-time",
}

FORMAT_TO_BUILTIN = {
    "date-time": TIME_TYPE,
}


@dataclass
class LocalReference:
    """Reference to a resource in the same namespace."""

    name: str


@dataclass
class Reference:
    """Reference to a resource in any namespace."""

    name: str
    namespace: str


@dataclass
class Condition:
    """metav1.Condition, as found in resource status."""

    type: str = field(metadata={"required": True})
    status: str = field(metadata={"required": True})
    observed_generation: int = field(metadata={"json": "observedGeneration"})
    last_transition_time: datetime = field(metadata={"json": "lastTransitionTime"})
    reason: str
    message: str


KNOWN_TYPES: tuple[tuple[type, ImportInfo], ...] = (
    (LocalReference, K8S_IMPORT),
    (Reference, K8S_IMPORT),
    (Condition, METAV1_IMPORT),
)


def builtin_for_format(fmt: str) -> GoType | None:
    """Built-in type for a schema format, if any."""
    return FORMAT_TO_BUILTIN.get(FORMAT_ALIASES.get(fmt, ""))


def type_from_existing(existing: Any, import_info: ImportInfo | None = None) -> GoType:
    """
    Translate an existing type description to a Go type.

    Args:
        existing: A dataclass, list[...] alias, primitive Python type or built-in override
        import_info: Import binding of the Go package declaring the type

    Returns:
        The Go type

    Raises:
        UnsupportedShapeError: For any shape that is not a struct, array or primitive
    """
    override = _builtin_override(existing)
    if override is not None:
        return override

    if isinstance(existing, type) and dataclasses.is_dataclass(existing):
        return _struct_from(existing, import_info)

    if typing.get_origin(existing) is list:
        args = typing.get_args(existing)
        if len(args) != 1:
            raise UnsupportedShapeError(existing)
        return new_array(type_from_existing(args[0], import_info))

    # bool is a subclass of int, check it first
    if existing is bool:
        return new_primitive(BOOL)
    if existing is int:
        return new_primitive(INT)
    if existing is float:
        return new_primitive(FLOAT)
    if existing is str:
        return new_primitive(STRING)

    raise UnsupportedShapeError(existing)


def _builtin_override(existing: Any) -> GoType | None:
    if typing.get_origin(existing) is dict:
        return JSON_TYPE
    try:
        return BUILTIN_OVERRIDES.get(existing)
    except TypeError:  # unhashable
        return None


def _struct_from(cls: type, import_info: ImportInfo | None) -> GoType:
    hints = typing.get_type_hints(cls)
    fields = []
    for f in dataclasses.fields(cls):
        key = f.metadata.get("json", f.name)
        fields.append(
            GoField(
                name=exported_name(key),
                key=key,
                go_type=type_from_existing(hints[f.name], import_info),
                required=f.metadata.get("required", False),
            )
        )
    go_type = new_struct(exported_name(cls.__name__), fields)
    go_type.import_info = import_info
    return go_type


def known_types() -> list[GoType]:
    """Fresh Go types for all the known type descriptions."""
    return [type_from_existing(cls, import_info) for cls, import_info in KNOWN_TYPES]


def new_registry(
    renames: dict[str, str] | None = None,
    reserved: Iterable[str] = (),
    imports: Iterable[ImportedTypeConfig] = (),
    use_known_types: bool = True,
) -> TypeRegistry:
    """
    Create a registry seeded for a generation run.

    Args:
        renames: Explicit type name overrides
        reserved: Names generated types must not take
        imports: Types to import instead of generate, bound by name
        use_known_types: Whether to seed the known reference and condition types

    Returns:
        The seeded TypeRegistry
    """
    registry = TypeRegistry(renames, known_types() if use_known_types else ())
    for name in reserved:
        registry.reserve(name)
    for imported in imports:
        registry.add(new_opaque(imported.name, imported.import_info))
    return registry
