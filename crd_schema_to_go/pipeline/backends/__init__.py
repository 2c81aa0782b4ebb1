"""
Code generation backends.

Contains the Go code generator.
"""

from __future__ import annotations

from .base import CodeBackend
from .go_backend import GoBackend

__all__ = [
    "CodeBackend",
    "GoBackend",
]
