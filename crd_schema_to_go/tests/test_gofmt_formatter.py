"""Tests for the gofmt formatter."""

from __future__ import annotations

import shutil

import pytest

from crd_schema_to_go.pipeline.config import FormatterConfig
from crd_schema_to_go.pipeline.errors import OutputValidationError
from crd_schema_to_go.pipeline.formatters import GofmtFormatter

requires_gofmt = pytest.mark.skipif(shutil.which("gofmt") is None, reason="gofmt not installed")

CODE = "package v1\n\ntype A struct {\n\tName string `json:\"name\"`\n\tLongerName int `json:\"longerName\"`\n}\n"


def test_unavailable_formatter_returns_code(caplog):
    config = FormatterConfig(enabled=True, command="gofmt-not-installed")
    formatter = GofmtFormatter()

    assert not formatter.is_available(config)
    with caplog.at_level("WARNING"):
        assert formatter.format(CODE, config) == CODE
    assert "gofmt-not-installed" in caplog.text


@requires_gofmt
def test_format_aligns_fields():
    formatted = GofmtFormatter().format(CODE, FormatterConfig(enabled=True))
    assert "\tName       string `json:\"name\"`\n" in formatted


@requires_gofmt
def test_invalid_code_rejected():
    with pytest.raises(OutputValidationError):
        GofmtFormatter().format("package v1\n\ntype A struct {\n", FormatterConfig(enabled=True))
