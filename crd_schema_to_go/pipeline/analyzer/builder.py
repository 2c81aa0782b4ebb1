"""
Builder turning schema nodes into Go types.

Phase 2 of the pipeline: walk a SchemaNode tree, build the matching Go
types and hand every struct to the type registry so that repeated shapes
are declared once and colliding names are disambiguated.
"""

from __future__ import annotations

import logging

from ...utils import exported_name, is_exported
from ..errors import DecodeError, MissingItemsError, TypeNameConflictError, UnsupportedKindError
from ..schema_ast.nodes import SchemaKind, SchemaNode, VersionedResource
from .known_types import INT_OR_STRING_TYPE, JSON_TYPE, OBJECT_META_TYPE, TYPE_META_TYPE, builtin_for_format
from .type_nodes import BOOL, FLOAT, INT, STRING, GoField, GoType, TypeKind, new_array, new_map, new_primitive, new_struct
from .type_registry import TypeRegistry, replace_base

logger = logging.getLogger(__name__)

PRIMITIVE_NAMES = {
    SchemaKind.STRING: STRING,
    SchemaKind.INTEGER: INT,
    SchemaKind.NUMBER: FLOAT,
    SchemaKind.BOOLEAN: BOOL,
}


class TypeBuilder:
    """Builds Go types from schema nodes against a type registry."""

    def __init__(self, registry: TypeRegistry):
        """
        Initialize the builder.

        Args:
            registry: Registry shared by the whole generation run
        """
        self.registry = registry

    def build_resource(self, versioned: VersionedResource) -> GoType:
        """
        Build the root type of a resource kind.

        The root struct embeds the Kubernetes type and object metadata and
        holds the <Kind>Spec and <Kind>Status types. An absent spec or status
        schema gives an empty struct.

        Args:
            versioned: The resource kind at the selected version

        Returns:
            The root struct type

        Raises:
            TypeNameConflictError: If a root type name is held by another type
        """
        kind = versioned.kind
        for name in resource_type_names(kind, versioned.list_kind):
            if self.registry.get(name) is None:
                self.registry.reserve(name)
            elif not self.registry.is_reserved(name):
                raise TypeNameConflictError(name, kind)
        spec = self._build_root_part(versioned.spec, versioned.spec_typename, kind)
        status = self._build_root_part(versioned.status, versioned.status_typename, kind)
        return resource_root(kind, spec, status)

    def reserve_resource_names(self, kind: str, list_kind: str = "") -> None:
        """Reserve the fixed type names of a kind generated later in the run."""
        for name in resource_type_names(kind, list_kind):
            if self.registry.get(name) is None:
                self.registry.reserve(name)

    def _build_root_part(self, node: SchemaNode | None, name: str, kind: str) -> GoType:
        """Build the spec or status type, registered under its fixed name."""
        if node is None:
            go_type = new_struct(name, [])
        else:
            go_type = self.build_type(node, name, [kind])
        if go_type.kind == TypeKind.STRUCT:
            go_type.name = name
            self.registry.add(go_type)
        elif go_type.is_container:
            base = self.registry.resolve_type(go_type.base_type(), [kind], field_name=name)
            go_type = replace_base(go_type, base)
        logger.debug("built %s as %s", name, go_type.signature())
        return go_type

    def build_type(self, node: SchemaNode, name: str, ancestors: list[str]) -> GoType:
        """
        Build the Go type for a schema node.

        Args:
            node: The schema node
            name: Candidate name for the type, if it turns out to be a struct
            ancestors: Enclosing type names, farthest first

        Returns:
            A struct, array, map, primitive or opaque Go type

        Raises:
            MissingItemsError: If an array has no items schema
            UnsupportedKindError: If the node kind is not supported
        """
        if node.int_or_string:
            return INT_OR_STRING_TYPE
        if node.kind == SchemaKind.OBJECT:
            return self._build_object(node, name, ancestors)
        if node.kind == SchemaKind.ARRAY:
            return self._build_array(node, name, ancestors)
        if node.kind in PRIMITIVE_NAMES:
            return self._build_primitive(node)
        raise UnsupportedKindError(node.type_name, node.source_path)

    def _build_object(self, node: SchemaNode, name: str, ancestors: list[str]) -> GoType:
        """Build unstructured JSON, a map or a struct."""
        if node.free_form:
            return JSON_TYPE
        if node.is_dict:
            return self._build_map(node, name, ancestors)
        return self._build_struct(node, name, ancestors)

    def _build_struct(self, node: SchemaNode, name: str, ancestors: list[str]) -> GoType:
        fields_ancestors = [*ancestors, name]
        fields = []
        keys_by_field: dict[str, str] = {}
        for key, prop in node.properties.items():
            field_name = exported_name(key)
            location = node.source_path or ".".join(fields_ancestors)
            if not is_exported(field_name):
                raise DecodeError(f"property {key!r} of {location} does not map to an exported Go field name")
            if field_name in keys_by_field:
                raise DecodeError(
                    f"properties {keys_by_field[field_name]!r} and {key!r} of {location} both map to field {field_name}"
                )
            keys_by_field[field_name] = key

            field_type = self.build_type(prop, field_name, fields_ancestors)
            go_field = GoField(
                name=field_name,
                key=key,
                go_type=field_type,
                required=key in node.required,
                comment=prop.description,
            )
            self.registry.resolve_field_type(go_field, fields_ancestors)
            fields.append(go_field)
        return new_struct(name, fields)

    def _build_map(self, node: SchemaNode, name: str, ancestors: list[str]) -> GoType:
        if node.additional_properties is None:
            return new_map(JSON_TYPE)
        element = self.build_type(node.additional_properties, name, ancestors)
        return new_map(element)

    def _build_array(self, node: SchemaNode, name: str, ancestors: list[str]) -> GoType:
        if node.items is None:
            raise MissingItemsError(node.source_path or name)
        element = self.build_type(node.items, name, ancestors)
        if element.is_container:
            # Nested arrays resolve their own element, maps are resolved by the holding field
            return new_array(element)
        return new_array(self.registry.resolve_type(element, ancestors, field_name=name))

    def _build_primitive(self, node: SchemaNode) -> GoType:
        builtin = builtin_for_format(node.format)
        if builtin is not None:
            return builtin
        return new_primitive(PRIMITIVE_NAMES[node.kind])


def resource_type_names(kind: str, list_kind: str = "") -> tuple[str, ...]:
    """Fixed names of the root, list, spec and status types of a kind."""
    return kind, list_kind or f"{kind}List", f"{kind}Spec", f"{kind}Status"


def resource_root(kind: str, spec: GoType, status: GoType) -> GoType:
    """Root struct of a resource kind, holding its Kubernetes metadata, spec and status."""
    return GoType(
        name=kind,
        kind=TypeKind.STRUCT,
        fields=[
            GoField(name="TypeMeta", go_type=TYPE_META_TYPE, embedded=True, tag=",inline"),
            GoField(name="ObjectMeta", go_type=OBJECT_META_TYPE, embedded=True, tag="metadata,omitempty"),
            GoField(name="Spec", key="spec", go_type=spec, tag="spec,omitempty"),
            GoField(name="Status", key="status", go_type=status, tag="status,omitempty"),
        ],
    )
