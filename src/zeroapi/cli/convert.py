"""
Conversion command: API file in, normalized JSON out.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from pathlib import Path

import typer

from zeroapi.cli.utils import (
    configure_logging,
    print_human_error,
    print_vscode_error,
    version_callback,
)
from zeroapi.core.errors import EncodeError, ParseError, ZeroApiError
from zeroapi.core.normalizer import normalize
from zeroapi.core.parser import parse_file
from zeroapi.core.serializer import dump_json, dump_yaml
from zeroapi.core.settings import load_settings

logger = logging.getLogger(__name__)


class OutputFormat(StrEnum):
    """Serialization of the normalized spec."""

    JSON = "json"
    YAML = "yaml"


class ErrorFormat(StrEnum):
    """How diagnostics are printed."""

    HUMAN = "human"
    VSCODE = "vscode"


def _report(label: str, error: ZeroApiError, error_format: ErrorFormat) -> None:
    if error_format == ErrorFormat.VSCODE:
        print_vscode_error(error, Path.cwd())
    else:
        print_human_error(label, error)


def convert_command(
    file: Path = typer.Argument(  # noqa: B008
        ...,
        help="API file (.api source or .json goctl parse-tree dump)",
        show_default=False,
    ),
    output_format: OutputFormat | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (default: json)",
    ),
    compact: bool | None = typer.Option(
        None,
        "--compact/--pretty",
        help="Compact single-line JSON or indented output (default: pretty)",
    ),
    indent: int | None = typer.Option(
        None,
        "--indent",
        min=0,
        help="Spaces per indentation level for pretty output",
    ),
    output: Path | None = typer.Option(  # noqa: B008
        None,
        "--output",
        "-o",
        help="Output file (default: stdout)",
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Config file (default: ./zeroapi.toml if present)",
    ),
    error_format: ErrorFormat = typer.Option(
        ErrorFormat.HUMAN,
        "--error-format",
        help="Diagnostic format",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """
    Convert a go-zero API file into normalized JSON.

    Examples:
        zeroapi user.api                 # Pretty JSON to stdout
        zeroapi user.api --compact       # Single-line JSON
        zeroapi user.api -o user.json    # Save to file
        zeroapi user.api -f yaml         # YAML instead of JSON
        zeroapi dump.json                # Normalize a goctl parse-tree dump
    """
    try:
        settings = load_settings(config)
    except ZeroApiError as e:
        print_human_error("Config error", e)
        raise typer.Exit(code=1)

    configure_logging(logging.DEBUG if verbose else settings.log_level_value)
    if settings.source:
        logger.debug("Loaded settings from %s", settings.source)

    if compact is True:
        settings.indent = None
    elif indent is not None:
        settings.indent = indent
    elif compact is False and settings.indent is None:
        settings.indent = 2

    try:
        document = parse_file(file)
    except ParseError as e:
        _report("Parse error", e, error_format)
        raise typer.Exit(code=1)

    spec = normalize(document)

    try:
        if (output_format or settings.output_format) == OutputFormat.YAML:
            content = dump_yaml(spec).rstrip("\n")
        else:
            content = dump_json(spec, indent=settings.indent, ensure_ascii=settings.ensure_ascii)
    except EncodeError as e:
        _report("Encode error", e, error_format)
        raise typer.Exit(code=1)

    if output:
        try:
            output.write_text(content + "\n", encoding="utf-8")
        except OSError as e:
            print_human_error("Output error", ZeroApiError(f"Cannot write {output}: {e}"))
            raise typer.Exit(code=1)
        logger.info("Normalized spec written to %s", output)
    else:
        typer.echo(content)
