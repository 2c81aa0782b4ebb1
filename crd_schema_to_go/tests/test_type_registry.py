"""Tests for type deduplication and name synthesis in the type registry."""

from __future__ import annotations

import pytest

from crd_schema_to_go.pipeline.analyzer import GoField, TypeRegistry
from crd_schema_to_go.pipeline.analyzer.type_nodes import new_array, new_map, new_opaque, new_primitive, new_struct
from crd_schema_to_go.pipeline.config import ImportInfo
from crd_schema_to_go.pipeline.errors import NameExhaustedError


def _key_value(name="Tags"):
    return new_struct(
        name,
        [
            GoField(name="Key", key="key", go_type=new_primitive("string")),
            GoField(name="Value", key="value", go_type=new_primitive("string")),
        ],
    )


def _single(name, field_name, type_name="string"):
    key = field_name[:1].lower() + field_name[1:]
    return new_struct(name, [GoField(name=field_name, key=key, go_type=new_primitive(type_name))])


class TestSignature:
    def test_signature_ignores_type_name(self):
        assert _key_value("Tags").signature() == _key_value("Labels").signature()

    def test_signature_ignores_field_order(self):
        reordered = new_struct(
            "Tags",
            [
                GoField(name="Value", key="value", go_type=new_primitive("string")),
                GoField(name="Key", key="key", go_type=new_primitive("string")),
            ],
        )
        assert reordered.signature() == _key_value().signature()

    def test_signature_of_containers(self):
        assert new_array(new_primitive("string")).signature() == "[string]"
        assert new_map(new_primitive("bool")).signature() == "map[bool]"

    def test_int_family(self):
        assert _single("A", "Count", "int64").signature() == _single("B", "Count", "int").signature()

    def test_different_primitives_differ(self):
        assert _single("A", "Count", "string").signature() != _single("A", "Count", "int").signature()


class TestTypeRegistry:
    def test_add_and_get(self):
        registry = TypeRegistry()
        tags = _key_value()
        registry.add(tags)
        assert registry.get("Tags") is tags
        assert registry.has(_key_value("Other"))

    def test_add_rejects_unexported_name(self):
        with pytest.raises(ValueError):
            TypeRegistry().add(_key_value("tags"))

    def test_rename(self):
        registry = TypeRegistry(renames={"Cond": "Condition"})
        assert registry.rename("Cond") == "Condition"
        assert registry.rename("Other") == "Other"

    def test_reuses_same_shape(self):
        registry = TypeRegistry()
        first = registry.resolve_type(_key_value("Tags1"), ["Group", "Spec"])
        second = registry.resolve_type(_key_value("Tags2"), ["Group", "Spec"])
        assert second is first
        assert first.name == "Tags1"

    def test_free_name_kept(self):
        registry = TypeRegistry()
        resolved = registry.resolve_type(_single("Entry", "Name"), ["Group", "Spec"])
        assert resolved.name == "Entry"
        assert registry.get("Entry") is resolved

    def test_prefixes_nearest_ancestor_first(self):
        registry = TypeRegistry()
        registry.resolve_type(_single("Entry", "Name"), ["Group", "Spec"])
        resolved = registry.resolve_type(_single("Entry", "Id"), ["Group", "Spec"])
        assert resolved.name == "SpecEntry"

    def test_prefixes_accumulate(self):
        registry = TypeRegistry()
        registry.resolve_type(_single("Tags", "A"), [])
        registry.resolve_type(_single("EntryTags", "B"), [])
        resolved = registry.resolve_type(_single("Tags", "C"), ["Spec", "Entry"])
        assert resolved.name == "SpecEntryTags"

    def test_name_exhausted(self):
        registry = TypeRegistry()
        registry.resolve_type(_single("Tags", "A"), [])
        registry.resolve_type(_single("EntryTags", "B"), [])
        with pytest.raises(NameExhaustedError) as exc_info:
            registry.resolve_type(_single("Tags", "C"), ["Entry"], field_name="Tags")
        assert exc_info.value.ancestors == ["Entry"]
        assert "Tags" in str(exc_info.value)

    def test_reserved_name_forces_prefix(self):
        registry = TypeRegistry()
        registry.reserve("Group")
        resolved = registry.resolve_type(_single("Group", "Id"), ["Project", "Spec"])
        assert resolved.name == "SpecGroup"

    def test_is_reserved(self):
        registry = TypeRegistry(types=[_key_value("Tags"), new_opaque("Notifier", ImportInfo(alias="notify", path="example.com/notify"))])
        registry.reserve("Group")
        assert registry.is_reserved("Group")
        assert not registry.is_reserved("Tags")
        assert not registry.is_reserved("Notifier")
        assert not registry.is_reserved("Missing")

    def test_rename_applied_before_lookup(self):
        registry = TypeRegistry(renames={"Tags": "Tag"})
        assert registry.resolve_type(_key_value("Tags"), []).name == "Tag"

    def test_binds_to_imported_placeholder(self):
        notifier = new_opaque("Notifier", ImportInfo(alias="notify", path="example.com/notify"))
        registry = TypeRegistry(renames={"Notification": "Notifier"}, types=[notifier])
        assert registry.resolve_type(_single("Notification", "Channel"), ["Spec"]) is notifier

    def test_primitives_not_registered(self):
        registry = TypeRegistry()
        string = new_primitive("string")
        assert registry.resolve_type(string, ["Spec"]) is string
        assert registry.by_name == {}

    def test_resolve_field_type_inside_array(self):
        registry = TypeRegistry()
        registry.add(_key_value("Tags"))
        go_field = GoField(name="Labels", key="labels", go_type=new_array(_key_value("Labels")))
        registry.resolve_field_type(go_field, ["Spec"])
        assert go_field.go_type.element is registry.get("Tags")

    def test_resolve_field_type_inside_map_of_arrays(self):
        registry = TypeRegistry()
        go_field = GoField(name="Groups", key="groups", go_type=new_map(new_array(_key_value("Groups"))))
        registry.resolve_field_type(go_field, ["Spec"])
        assert go_field.go_type.element.element is registry.get("Groups")

    def test_generated_tracking(self):
        registry = TypeRegistry()
        tags = registry.resolve_type(_key_value(), [])
        assert not registry.was_generated(tags)
        registry.mark_generated(tags)
        assert registry.was_generated(tags)

    def test_mark_generated_registers_unknown_type(self):
        registry = TypeRegistry()
        tags = _key_value()
        registry.mark_generated(tags)
        assert registry.get("Tags") is tags

    def test_by_name_never_holds_two_types(self):
        registry = TypeRegistry()
        shapes = [_single("Entry", name) for name in ("A", "B", "C")]
        resolved = [registry.resolve_type(shape, ["Group", "Spec"]) for shape in shapes]
        assert [t.name for t in resolved] == ["Entry", "SpecEntry", "GroupSpecEntry"]
        assert len({id(t) for t in registry.by_name.values()}) == len(registry.by_name)
