"""
Configuration for the CRD to Go generator pipeline.

A configuration file may be written in YAML or JSON; both are read
through PyYAML.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import yaml

from .errors import DecodeError


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to check the Go code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for the gofmt post-processing step."""

    # Whether formatting is enabled
    enabled: bool = False

    # gofmt executable, looked up in $PATH when not absolute
    command: str = "gofmt"


@dataclass(frozen=True)
class ImportInfo:
    """Go import binding of a type declared outside the generated code."""

    alias: str = ""
    path: str = ""


@dataclass
class ImportedTypeConfig:
    """A type to be imported instead of generated, e.g. metav1.Condition."""

    name: str = ""
    alias: str = ""
    path: str = ""

    @property
    def import_info(self) -> ImportInfo:
        alias = self.alias or self.path.rstrip("/").split("/")[-1]
        return ImportInfo(alias=alias, path=self.path)


@dataclass
class GeneratorConfig:
    """Configuration options for code generation."""

    # CRD version to generate (empty = first declared version)
    version: str = ""

    # Go package clause of the generated file
    package_name: str = "v1"

    # Explicit type name overrides: generated name -> wanted name
    renames: dict[str, str] = field(default_factory=dict)

    # Resource kinds to skip in the input stream
    skip_list: list[str] = field(default_factory=list)

    # Type names that generated types must never take
    reserved: list[str] = field(default_factory=list)

    # Types to import instead of generate
    imports: list[ImportedTypeConfig] = field(default_factory=list)

    # Add "Code generated ... DO NOT EDIT." header at top of file
    add_generation_comment: bool = True

    # Seed the registry with the known reference and condition types
    use_known_types: bool = True

    # Formatter configuration
    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    # Output configuration
    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """
        Create a config from a dictionary.

        Unknown top level keys are ignored.

        Raises:
            DecodeError: If a nested section has an unknown key or an invalid value
        """
        config = GeneratorConfig()
        for k, v in d.items():
            try:
                if k == "formatter" and isinstance(v, dict):
                    config.formatter = FormatterConfig(**v)
                elif k == "output" and isinstance(v, dict):
                    mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                    if isinstance(mode, str):
                        mode = OutputMode(mode)
                    config.output = OutputConfig(
                        mode=mode,
                        validate_before_write=v.get("validate_before_write", True),
                        atomic_write=v.get("atomic_write", True),
                    )
                elif k == "imports" and isinstance(v, list):
                    config.imports = [
                        item if isinstance(item, ImportedTypeConfig) else ImportedTypeConfig(**item) for item in v
                    ]
                elif hasattr(config, k):
                    setattr(config, k, v)
            except (TypeError, ValueError) as exc:
                raise DecodeError(f"invalid configuration {k!r}: {exc}") from exc
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "version": self.version,
            "package_name": self.package_name,
            "renames": dict(self.renames),
            "skip_list": list(self.skip_list),
            "reserved": list(self.reserved),
            "imports": [{"name": i.name, "alias": i.alias, "path": i.path} for i in self.imports],
            "add_generation_comment": self.add_generation_comment,
            "use_known_types": self.use_known_types,
            "formatter": {
                "enabled": self.formatter.enabled,
                "command": self.formatter.command,
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }


def load_config(path: Path | str) -> GeneratorConfig:
    """Load a generator configuration from a YAML or JSON file."""
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise DecodeError(f"failed to load configuration {path}: {exc}") from exc
    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise DecodeError(f"configuration {path} must be a mapping")
    return GeneratorConfig.from_dict(data)
