import logging
from pathlib import Path

import click

from .cli_utils import configure_logging, reconstruct_command_line
from .pipeline import (
    AtomicWriter,
    CodeGenerationError,
    GeneratorConfig,
    OutputMode,
    PipelineGenerator,
    default_generation_comment,
    load_config,
)
from .pipeline.formatters import GofmtFormatter
from .pipeline.output import validate_go

logger = logging.getLogger(__name__)


@click.command()
@click.option("--version", "-v", "version", default=None, type=str, help="CRD version to generate, defaults to the first declared one")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--package", "-p", "package", default=None, type=str, help="Go package name of the generated file")
@click.option("--format/--no-format", "format_code", default=None, help="Run gofmt on the generated file")
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite the output file if it exists")
@click.option("--verbose", is_flag=True, default=False, help="Log debug information")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", type=click.Path(dir_okay=False, resolve_path=True))
def crd_schema_to_go(version, config, package, format_code, force, verbose, input_path, output):
    """Generate Go types from the CRDs in INPUT_PATH into OUTPUT."""
    configure_logging(verbose)

    try:
        config = load_config(config) if config is not None else GeneratorConfig()
    except (CodeGenerationError, OSError) as exc:
        raise click.ClickException(str(exc)) from exc

    # Command line flags override the config file
    if version is not None:
        config.version = version
    if package is not None:
        config.package_name = package
    if format_code is not None:
        config.formatter.enabled = format_code
    if force:
        config.output.mode = OutputMode.FORCE

    try:
        with open(input_path, encoding="utf-8") as f:
            codegen = PipelineGenerator(config)
            generated = codegen.generate_stream(f)

        command_line = reconstruct_command_line(crd_schema_to_go)
        out = codegen.render(generated, default_generation_comment(command_line))

        if config.formatter.enabled:
            out = GofmtFormatter().format(out, config.formatter)

        write_output(Path(output), out, config)
    except (CodeGenerationError, OSError) as exc:
        raise click.ClickException(str(exc)) from exc

    logger.info("generated %s into %s", ", ".join(g.kind for g in generated), output)


def write_output(path: Path, content: str, config: GeneratorConfig) -> None:
    """Write the generated file according to the output configuration."""
    output_config = config.output
    validate = output_config.validate_before_write

    if not output_config.atomic_write:
        if output_config.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use --force to overwrite.")
        if validate:
            validate_go(content)
        path.write_text(content, encoding="utf-8")
        return

    writer = AtomicWriter()
    if output_config.mode == OutputMode.FORCE:
        writer.write(path, content, validate)
    else:
        writer.write_if_not_exists(path, content, validate)
