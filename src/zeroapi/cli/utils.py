"""
zeroapi CLI Utilities.

Shared helpers for version output, logging setup and error reporting.
"""

import logging
import platform
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from zeroapi._version import get_version
from zeroapi.core.errors import ZeroApiError

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"zeroapi version {get_version()}")
        typer.echo(f"Python {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


def configure_logging(level: int) -> None:
    """Send log records to stderr so stdout carries only JSON."""
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("zeroapi").setLevel(level)


def print_human_error(label: str, error: ZeroApiError) -> None:
    """Print an error with its location block, if any."""
    err_console.print(f"[red]{label}:[/red] {escape(str(error))}", soft_wrap=True, highlight=False)


def print_vscode_error(error: ZeroApiError, root: Path) -> None:
    """Print an error in VS Code format: file:line:col: error: message"""
    if error.context:
        try:
            rel_path = Path(error.context.file).relative_to(root)
        except ValueError:
            rel_path = Path(error.context.file)
        typer.echo(
            f"{rel_path}:{error.context.line}:{error.context.column}: error: {error.message}",
            err=True,
        )
    else:
        typer.echo(f"::error: {error.message}", err=True)
