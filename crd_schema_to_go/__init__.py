"""CRD Schema to Go Generator

A Python package for generating Go types from Kubernetes
CustomResourceDefinition schemas, with structural type deduplication,
collision-free naming and atomic output.
"""

__version__ = "0.1.0"

from .pipeline import (  # noqa: E402
    AtomicWriter,
    CodeGenerationError,
    DecodeError,
    FormatterConfig,
    GeneratedResource,
    GeneratorConfig,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
)

__all__ = [
    "PipelineGenerator",
    "GeneratedResource",
    "GeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "CodeGenerationError",
    "DecodeError",
    "AtomicWriter",
]
