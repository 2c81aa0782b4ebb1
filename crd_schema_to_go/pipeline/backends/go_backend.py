"""
Go code generation backend.

Renders Go struct declarations from the type graph using Jinja2 templates.
"""

from __future__ import annotations

import logging
from typing import Any

from ..analyzer.builder import resource_root
from ..analyzer.known_types import METAV1_IMPORT
from ..analyzer.type_nodes import GoField, GoType, TypeKind, new_opaque
from ..config import ImportInfo
from ..errors import TypeNameConflictError
from .base import CodeBackend

logger = logging.getLogger(__name__)


class GoBackend(CodeBackend):
    """Go code generation backend."""

    TEMPLATE_LANG = "go"
    FILE_EXTENSION = "go"

    def __init__(self, registry):
        super().__init__(registry)
        # Import bindings referenced by the emitted code
        self.imports: set[ImportInfo] = set()

    def emit(self, kind: str, spec_type: GoType, status_type: GoType, list_kind: str = "") -> str:
        """Emit the root declaration of a kind followed by every struct it reaches."""
        return self.emit_root(resource_root(kind, spec_type, status_type), list_kind)

    def emit_root(self, root: GoType, list_kind: str = "") -> str:
        """
        Emit the declarations of a resource from its root struct.

        The root is rendered with its kubebuilder markers and list
        declaration, then every struct type reachable from it, depth first,
        unless already emitted earlier in the run.

        Args:
            root: Root struct, as built by TypeBuilder.build_resource
            list_kind: Name of the list type, <Kind>List if empty

        Returns:
            The declarations, separated by blank lines

        Raises:
            TypeNameConflictError: If the root or list type was already emitted
        """
        list_type = new_opaque(list_kind or f"{root.name}List")
        for go_type in (root, list_type):
            if self.registry.was_generated(go_type):
                raise TypeNameConflictError(go_type.name, root.name)

        self.imports.add(METAV1_IMPORT)
        declaration = self._render_struct(root)
        self.registry.mark_generated(root)
        self.registry.mark_generated(list_type)
        sections = [
            self.resource_template.render(
                name=root.name,
                list_name=list_type.name,
                declaration=declaration,
                meta_alias=METAV1_IMPORT.alias,
            )
        ]
        for go_field in root.fields:
            self._emit_nested(go_field.go_type, sections)
        return "\n\n".join(sections)

    def _emit_nested(self, go_type: GoType | None, sections: list[str]) -> None:
        if go_type is None:
            return
        if go_type.is_container:
            self._emit_nested(go_type.element, sections)
            return
        if go_type.kind != TypeKind.STRUCT or go_type.import_info is not None:
            return
        if self.registry.was_generated(go_type):
            return
        sections.append(self._render_struct(go_type))
        self.registry.mark_generated(go_type)
        logger.debug("emitted type %s", go_type.name)
        for go_field in go_type.fields:
            self._emit_nested(go_field.go_type, sections)

    def _render_struct(self, go_type: GoType) -> str:
        fields = [self._prepare_field_context(f) for f in go_type.fields]
        return self.struct_template.render(name=go_type.name, fields=fields)

    def _prepare_field_context(self, go_field: GoField) -> dict[str, Any]:
        type_ref = self.translate_type(go_field.go_type)
        tag = f'`json:"{go_field.json_tag}"`'
        if go_field.embedded:
            declaration = f"{type_ref} {tag}"
        else:
            declaration = f"{go_field.name} {type_ref} {tag}"
        return {
            "name": go_field.name,
            "type": type_ref,
            "declaration": declaration,
            "comment_lines": comment_lines(go_field.comment),
        }

    def translate_type(self, go_type: GoType | None) -> str:
        """Translate a Go type to its reference in the generated package."""
        if go_type is None:
            raise ValueError("cannot translate a missing type")
        if go_type.kind == TypeKind.ARRAY:
            return f"[]{self.translate_type(go_type.element)}"
        if go_type.kind == TypeKind.MAP:
            return f"map[string]{self.translate_type(go_type.element)}"
        if go_type.import_info is not None:
            self.imports.add(go_type.import_info)
            return f"{go_type.import_info.alias}.{go_type.name}"
        return go_type.name

    def render_file(self, package: str, sections: list[str], generation_comment: str = "") -> str:
        """
        Wrap emitted declarations into a complete Go file.

        Args:
            package: Package clause name
            sections: Emitted declarations, one entry per resource kind
            generation_comment: Header comment, without the leading slashes

        Returns:
            The Go source file
        """
        prefix = self.prefix_template.render(
            generation_comment=generation_comment,
            package=package,
            imports=sorted(self.imports, key=lambda i: (i.path, i.alias)),
        )
        body = "\n\n".join(section.strip("\n") for section in sections if section.strip())
        if not body:
            return prefix.rstrip("\n") + "\n"
        return prefix.rstrip("\n") + "\n\n" + body + "\n"


def comment_lines(text: str) -> list[str]:
    """Split a description into Go line comments."""
    if not text:
        return []
    return [f"// {line}".rstrip() for line in text.strip().splitlines()]
