import pytest

from crd_schema_to_go.utils import exported_name, is_exported, kind_to_filename


@pytest.mark.parametrize(
    "text, expected",
    [
        ("name", "Name"),
        ("orgId", "OrgId"),
        ("clusterID", "ClusterID"),
        ("v20231115", "V20231115"),
        ("x-kubernetes-group", "XKubernetesGroup"),
        ("with.dots and spaces", "WithDotsAndSpaces"),
        ("Spec", "Spec"),
        ("", ""),
    ],
)
def test_exported_name(text, expected):
    assert exported_name(text) == expected


def test_is_exported():
    assert is_exported("GroupSpec")
    assert not is_exported("groupSpec")
    assert not is_exported("Group-Spec")
    assert not is_exported("")
    assert not is_exported("1st")
    assert not is_exported("_Private")


def test_kind_to_filename():
    assert kind_to_filename("AtlasProject") == "atlasproject.go"
