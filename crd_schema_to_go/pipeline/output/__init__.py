"""
Output handling for generated files.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter, validate_go

__all__ = [
    "AtomicWriter",
    "validate_go",
]
