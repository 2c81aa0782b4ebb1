"""
Errors raised while generating Go types from CRD schemas.

Every error is terminal for the document being processed: the generator
does not retry nor recover a partial result.
"""

from __future__ import annotations


class CodeGenerationError(Exception):
    """Base class for all generation failures."""


class DecodeError(CodeGenerationError):
    """The input is not a well formed CRD document."""


class NoVersionsError(CodeGenerationError):
    """The CRD does not declare any version."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"no versions to generate code from in {kind}")


class VersionNotFoundError(CodeGenerationError):
    """The requested version is not declared by the CRD."""

    def __init__(self, kind: str, version: str):
        self.kind = kind
        self.version = version
        super().__init__(f"no version {version!r} to generate code from in {kind}")


class MissingItemsError(CodeGenerationError):
    """An array schema has no items schema."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"array {name} has no items schema")


class UnsupportedKindError(CodeGenerationError):
    """A schema node type is outside the supported set."""

    def __init__(self, kind: str, source_path: str = ""):
        self.kind = kind
        self.source_path = source_path
        location = f" at {source_path}" if source_path else ""
        super().__init__(f"unsupported schema kind {kind!r}{location}")


class UnsupportedShapeError(CodeGenerationError):
    """A known type has a shape that cannot be translated."""

    def __init__(self, shape: object):
        self.shape = shape
        super().__init__(f"unsupported shape {shape!r} for a known type")


class NameExhaustedError(CodeGenerationError):
    """No free type name was found after walking the whole ancestor chain."""

    def __init__(self, field_name: str, type_name: str, ancestors: list[str]):
        self.field_name = field_name
        self.type_name = type_name
        self.ancestors = list(ancestors)
        chain = ".".join(self.ancestors) or "<root>"
        super().__init__(f"failed to find a free type name for field {field_name} ({type_name}) under {chain}")


class TypeNameConflictError(CodeGenerationError):
    """A fixed resource type name is already held by another type."""

    def __init__(self, name: str, kind: str):
        self.name = name
        self.kind = kind
        super().__init__(f"type name {name} of resource {kind} is already taken by another type")


class OutputValidationError(CodeGenerationError):
    """Generated output failed validation or formatting before being written."""
