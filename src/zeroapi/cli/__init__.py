"""
zeroapi CLI Package.

- convert.py: the conversion command (the whole CLI surface)
- utils.py: version output, logging setup and diagnostics
"""

import typer

from zeroapi.cli.convert import convert_command
from zeroapi.cli.utils import configure_logging, version_callback

app = typer.Typer(
    help="zeroapi – normalized JSON for go-zero API files",
    add_completion=False,
)

app.command(name="convert")(convert_command)


def main() -> None:
    app()


__all__ = [
    "app",
    "main",
    "convert_command",
    "configure_logging",
    "version_callback",
]
