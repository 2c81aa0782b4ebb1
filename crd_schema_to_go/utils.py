"""
Utility functions for the CRD schema to Go generator.
"""

import re

# Runs of characters that cannot appear in a Go identifier
_SEPARATOR_PATTERN = re.compile(r"[^0-9A-Za-z_]+")

# Exported Go identifier, restricted to ASCII
_EXPORTED_PATTERN = re.compile(r"[A-Z][0-9A-Za-z_]*")


def _split_into_words(text: str) -> list[str]:
    """Split text on anything that is not valid inside a Go identifier."""
    return [word for word in _SEPARATOR_PATTERN.split(text) if word]


def _capitalize_first(word: str) -> str:
    """Upper-case the first letter only, keeping the rest of the word as is."""
    return word[:1].upper() + word[1:]


def exported_name(text: str) -> str:
    """Convert a schema property key or type name to an exported Go identifier.

    Unlike a PascalCase conversion, inner casing is kept so that acronyms
    survive untouched.

    Examples:
        "orgId" -> "OrgId"
        "clusterID" -> "ClusterID"
        "v20231115" -> "V20231115"
        "x-kubernetes-group" -> "XKubernetesGroup"
        "Spec" -> "Spec"

    Args:
        text: The key or name to convert

    Returns:
        The identifier, which is not exported when text starts with a digit or "_"
    """
    if not text:
        return ""
    return "".join(_capitalize_first(word) for word in _split_into_words(text))


def is_exported(name: str) -> bool:
    """Check that a name is a valid exported Go identifier."""
    return _EXPORTED_PATTERN.fullmatch(name) is not None


def kind_to_filename(kind: str) -> str:
    """Name of the Go file holding the declarations of a resource kind."""
    return f"{kind.lower()}.go"
