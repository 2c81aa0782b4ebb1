"""
CRD parser that builds schema nodes.

Phase 1 of the pipeline: decode CRD documents from a YAML stream and parse
their OpenAPI v3 schemas into SchemaNode trees, without deriving any Go type.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import IO, Any

import yaml

from ..errors import DecodeError, NoVersionsError, VersionNotFoundError
from .nodes import ResourceSchema, SchemaKind, SchemaNode, VersionedResource

logger = logging.getLogger(__name__)

CRD_KIND = "CustomResourceDefinition"

PRESERVE_UNKNOWN_FIELDS = "x-kubernetes-preserve-unknown-fields"
INT_OR_STRING = "x-kubernetes-int-or-string"


class CRDParser:
    """Parses CustomResourceDefinition documents into schema nodes."""

    def iter_documents(self, stream: str | IO[str]) -> Iterator[dict[str, Any]]:
        """
        Decode every document of a multi-document YAML stream.

        Empty documents are skipped. Decoding is lazy, so a malformed
        document only fails once the iteration reaches it.

        Raises:
            DecodeError: If a document is not well formed YAML or not a mapping
        """
        documents = yaml.safe_load_all(stream)
        index = 0
        while True:
            try:
                document = next(documents)
            except StopIteration:
                return
            except yaml.YAMLError as exc:
                raise DecodeError(f"failed to decode document #{index}: {exc}") from exc
            index += 1
            if document is None:
                continue
            if not isinstance(document, dict):
                raise DecodeError(f"document #{index - 1} is not a mapping but {type(document).__name__}")
            yield document

    def parse_stream(self, stream: str | IO[str]) -> Iterator[ResourceSchema]:
        """Parse every CRD of a YAML stream, skipping other kinds of documents."""
        for document in self.iter_documents(stream):
            doc_kind = document.get("kind")
            if doc_kind is not None and doc_kind != CRD_KIND:
                logger.warning("skipping document of kind %s: not a %s", doc_kind, CRD_KIND)
                continue
            yield self.parse(document)

    def parse(self, document: dict[str, Any]) -> ResourceSchema:
        """
        Parse one CRD document.

        Args:
            document: The decoded CRD

        Returns:
            ResourceSchema with one VersionedResource per declared version

        Raises:
            DecodeError: If the document does not have a CRD structure
        """
        if not isinstance(document, dict):
            raise DecodeError(f"CRD document must be a mapping, got {type(document).__name__}")
        spec = self._mapping(document.get("spec"), "spec")
        names = self._mapping(spec.get("names"), "spec.names")
        kind = names.get("kind")
        if not kind or not isinstance(kind, str):
            raise DecodeError("CRD document has no spec.names.kind")

        resource = ResourceSchema(
            kind=kind,
            group=str(spec.get("group") or ""),
            plural=str(names.get("plural") or ""),
            list_kind=str(names.get("listKind") or f"{kind}List"),
        )
        versions = spec.get("versions") or []
        if not isinstance(versions, list):
            raise DecodeError(f"spec.versions of {kind} must be a list")
        for i, version in enumerate(versions):
            resource.versions.append(self._parse_version(resource, version, f"spec.versions[{i}]"))

        logger.debug("parsed CRD %s with versions %s", kind, [v.version for v in resource.versions])
        return resource

    def _parse_version(self, resource: ResourceSchema, version: Any, path: str) -> VersionedResource:
        """Parse one entry of spec.versions."""
        version = self._mapping(version, path)
        name = version.get("name")
        if not name or not isinstance(name, str):
            raise DecodeError(f"{path} of {resource.kind} has no name")

        schema = version.get("schema") or {}
        root = self._mapping(schema, f"{path}.schema").get("openAPIV3Schema") or {}
        root_properties = self._mapping(root, f"{path}.schema.openAPIV3Schema").get("properties") or {}
        root_properties = self._mapping(root_properties, f"{path}.schema.openAPIV3Schema.properties")

        spec_node = None
        status_node = None
        if "spec" in root_properties:
            spec_node = self._parse_schema_node(root_properties["spec"], f"{resource.kind}.{name}.spec")
        if "status" in root_properties:
            status_node = self._parse_schema_node(root_properties["status"], f"{resource.kind}.{name}.status")

        return VersionedResource(
            kind=resource.kind,
            version=name,
            group=resource.group,
            plural=resource.plural,
            list_kind=resource.list_kind,
            spec=spec_node,
            status=status_node,
        )

    def _parse_schema_node(self, schema: Any, path: str) -> SchemaNode:
        """
        Parse a schema node recursively.

        Args:
            schema: The schema dictionary
            path: Current path in schema (for error messages)

        Returns:
            The parsed SchemaNode
        """
        schema = self._mapping(schema, path)

        type_name = schema.get("type") or ""
        if not isinstance(type_name, str):
            raise DecodeError(f"type at {path} must be a string, got {type_name!r}")

        preserve_unknown = schema.get(PRESERVE_UNKNOWN_FIELDS) is True
        int_or_string = schema.get(INT_OR_STRING) is True

        # Untyped objects are common in CRDs produced by hand
        if not type_name and not int_or_string:
            if "properties" in schema or "additionalProperties" in schema or preserve_unknown:
                type_name = "object"

        properties = self._parse_properties(schema, path)
        required = self._parse_required(schema, path)
        items = self._parse_items(schema, path)
        is_dict, additional_properties = self._parse_additional_properties(schema, path)

        kind = SchemaKind.from_type_name(type_name)
        return SchemaNode(
            type_name=type_name,
            kind=kind,
            properties=properties,
            required=required,
            items=items,
            is_dict=is_dict,
            additional_properties=additional_properties,
            free_form=kind == SchemaKind.OBJECT and preserve_unknown and not properties,
            int_or_string=int_or_string,
            format=str(schema.get("format") or ""),
            description=str(schema.get("description") or ""),
            source_path=path,
        )

    def _parse_properties(self, schema: dict[str, Any], path: str) -> dict[str, SchemaNode]:
        """Parse object properties, ordered by key."""
        raw = self._mapping(schema.get("properties") or {}, f"{path}.properties")
        return {key: self._parse_schema_node(raw[key], f"{path}.{key}") for key in sorted(raw)}

    def _parse_required(self, schema: dict[str, Any], path: str) -> frozenset[str]:
        required = schema.get("required") or []
        if not isinstance(required, list):
            raise DecodeError(f"required at {path} must be a list")
        return frozenset(str(name) for name in required)

    def _parse_items(self, schema: dict[str, Any], path: str) -> SchemaNode | None:
        items = schema.get("items")
        if items is None:
            return None
        if isinstance(items, list):
            raise DecodeError(f"tuple items at {path} are not supported")
        return self._parse_schema_node(items, f"{path}[]")

    def _parse_additional_properties(self, schema: dict[str, Any], path: str) -> tuple[bool, SchemaNode | None]:
        """Parse additionalProperties into (is_dict, value schema)."""
        value = schema.get("additionalProperties")
        if value is None or value is False:
            return False, None
        if value is True:
            return True, None
        return True, self._parse_schema_node(value, f"{path}{{}}")

    def _mapping(self, value: Any, path: str) -> dict[str, Any]:
        if not isinstance(value, dict):
            raise DecodeError(f"{path} must be a mapping, got {type(value).__name__}")
        return value


def select_version(resource: ResourceSchema, requested: str = "") -> VersionedResource:
    """
    Select the version to generate code for.

    Args:
        resource: The parsed CRD
        requested: Version name, empty for the first declared version

    Raises:
        NoVersionsError: If the CRD declares no version
        VersionNotFoundError: If no version is named as requested
    """
    if not resource.versions:
        raise NoVersionsError(resource.kind)
    if not requested:
        return resource.versions[0]
    for version in resource.versions:
        if version.version == requested:
            return version
    raise VersionNotFoundError(resource.kind, requested)
