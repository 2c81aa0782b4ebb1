#!/usr/bin/env python3

import click
import pytest
from click.testing import CliRunner

from crd_schema_to_go.cli_utils import reconstruct_command_line
from crd_schema_to_go.crd_schema_to_go import crd_schema_to_go


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        """Without an active Click context the program name is returned"""
        assert reconstruct_command_line(crd_schema_to_go) == "crd_schema_to_go"

    def test_reconstruct_command_line_with_context(self, tmp_path):
        """Arguments come first, then options that differ from their defaults"""
        crd = tmp_path / "group.crd.yaml"
        crd.write_text("")

        @click.command()
        @click.option("--package", default="v1")
        @click.option("--version", default=None)
        @click.option("--force", is_flag=True, default=False)
        @click.argument("input_path", type=click.Path(exists=True))
        def command(package, version, force, input_path):
            click.echo(reconstruct_command_line(command))

        result = CliRunner().invoke(command, [str(crd), "--package", "atlas", "--force"])

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "crd_schema_to_go group.crd.yaml --package atlas"


if __name__ == "__main__":
    pytest.main([__file__])
