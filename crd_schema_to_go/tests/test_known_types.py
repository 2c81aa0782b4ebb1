"""Tests for the known types seeded into the registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import pytest

from crd_schema_to_go.pipeline.analyzer import TypeKind, known_types, new_registry, type_from_existing
from crd_schema_to_go.pipeline.analyzer.known_types import (
    JSON_TYPE,
    K8S_IMPORT,
    METAV1_IMPORT,
    TIME_TYPE,
    Condition,
    LocalReference,
    Reference,
)
from crd_schema_to_go.pipeline.config import ImportedTypeConfig
from crd_schema_to_go.pipeline.errors import UnsupportedShapeError


@dataclass
class Sample:
    names: list[str]
    ratio: float
    enabled: bool
    count: int = field(metadata={"json": "totalCount"})


class TestTypeFromExisting:
    def test_reference(self):
        go_type = type_from_existing(Reference, K8S_IMPORT)
        assert go_type.kind == TypeKind.STRUCT
        assert go_type.name == "Reference"
        assert go_type.import_info == K8S_IMPORT
        assert [(f.name, f.key, f.go_type.name) for f in go_type.fields] == [
            ("Name", "name", "string"),
            ("Namespace", "namespace", "string"),
        ]

    def test_condition(self):
        go_type = type_from_existing(Condition, METAV1_IMPORT)
        fields = {f.key: f for f in go_type.fields}
        assert sorted(fields) == ["lastTransitionTime", "message", "observedGeneration", "reason", "status", "type"]
        assert fields["lastTransitionTime"].go_type is TIME_TYPE
        assert fields["observedGeneration"].go_type.name == "int"
        assert fields["type"].required
        assert not fields["reason"].required

    def test_primitives_and_lists(self):
        go_type = type_from_existing(Sample)
        fields = {f.key: f.go_type for f in go_type.fields}
        assert fields["names"].kind == TypeKind.ARRAY
        assert fields["names"].element.name == "string"
        assert fields["ratio"].name == "float64"
        assert fields["enabled"].name == "bool"
        assert fields["totalCount"].name == "int"

    def test_builtin_overrides(self):
        assert type_from_existing(datetime) is TIME_TYPE
        assert type_from_existing(Any) is JSON_TYPE
        assert type_from_existing(dict[str, str]) is JSON_TYPE

    def test_unsupported_shape(self):
        with pytest.raises(UnsupportedShapeError):
            type_from_existing(complex)

    def test_unsupported_tuple(self):
        with pytest.raises(UnsupportedShapeError):
            type_from_existing(tuple[int, str])


class TestSeededRegistry:
    def test_known_types(self):
        names = [t.name for t in known_types()]
        assert names == ["LocalReference", "Reference", "Condition"]

    def test_known_types_are_fresh(self):
        assert known_types()[0] is not known_types()[0]

    def test_registry_finds_known_shapes(self):
        registry = new_registry()
        local_reference = type_from_existing(LocalReference)
        assert registry.has(local_reference)
        assert registry.get("LocalReference").import_info == K8S_IMPORT

    def test_registry_without_known_types(self):
        registry = new_registry(use_known_types=False)
        assert registry.by_name == {}

    def test_reserved_and_imports(self):
        registry = new_registry(
            reserved=["Settings"],
            imports=[ImportedTypeConfig(name="Notifier", path="example.com/notify/v1")],
        )
        assert registry.get("Settings").kind == TypeKind.OPAQUE
        notifier = registry.get("Notifier")
        assert notifier.import_info.alias == "v1"
        assert notifier.import_info.path == "example.com/notify/v1"
