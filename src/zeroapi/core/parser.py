"""
Parse facade: read an API document from disk, or several of them.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from . import ir
from .api_parser_impl import parse_api
from .dump_loader import load_dump
from .errors import ParseError, ZeroApiError
from .normalizer import normalize

logger = logging.getLogger(__name__)

# Suffixes read as go-zero parse-tree dumps rather than .api source
DUMP_SUFFIXES = {".json"}


def parse_file(path: Path) -> ir.Document:
    """
    Parse an API document from disk.

    ``.api`` source (or any other suffix) goes through the API parser;
    ``.json`` files are read as go-zero parse-tree dumps.

    Args:
        path: File to read

    Returns:
        Parsed Document

    Raises:
        ParseError: If the file is missing, unreadable or malformed
    """
    path = Path(path)
    if not path.is_file():
        raise ParseError(f"API file not found: {path}")

    if path.suffix.lower() in DUMP_SUFFIXES:
        return load_dump(path)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Cannot read {path}: {e}") from e

    return parse_api(text, path)


def parse_files(paths: Iterable[Path]) -> dict[Path, ir.NormalizedSpec | ZeroApiError]:
    """
    Parse and normalize several files independently.

    A file that fails does not stop the others; its entry holds the error
    instead of a spec.

    Args:
        paths: Files to read, in order

    Returns:
        Mapping of each path to its normalized spec or its error
    """
    results: dict[Path, ir.NormalizedSpec | ZeroApiError] = {}
    for path in map(Path, paths):
        try:
            results[path] = normalize(parse_file(path))
        except ZeroApiError as e:
            logger.warning("Skipping %s: %s", path, e.message)
            results[path] = e
    return results


__all__ = ["parse_file", "parse_files", "parse_api", "load_dump"]
