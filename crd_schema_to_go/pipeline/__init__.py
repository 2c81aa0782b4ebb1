"""
Pipeline - CRD schema to Go types generator.

This module provides a multi-phase architecture for generating Go
types from Kubernetes CustomResourceDefinition schemas:

1. Phase 1 (Parser): Parse CRD documents into schema nodes
2. Phase 2 (Analyzer): Build Go types, deduplicated and named by the type registry
3. Phase 3 (Backend): Emit Go declarations through Jinja2 templates
4. Phase 4 (Formatter): Optional post-processing with gofmt
5. Phase 5 (Output): Validate and write the Go file atomically
"""

from __future__ import annotations

from .config import FormatterConfig, GeneratorConfig, ImportedTypeConfig, OutputConfig, OutputMode, load_config
from .errors import CodeGenerationError, DecodeError, OutputValidationError
from .generator import GeneratedResource, PipelineGenerator, default_generation_comment
from .output import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "GeneratedResource",
    "default_generation_comment",
    "GeneratorConfig",
    "FormatterConfig",
    "ImportedTypeConfig",
    "OutputConfig",
    "OutputMode",
    "load_config",
    "CodeGenerationError",
    "DecodeError",
    "OutputValidationError",
    "AtomicWriter",
]
