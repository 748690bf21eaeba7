"""
zeroapi - normalized JSON for go-zero API description files.

Parses ``.api`` files (or goctl parse-tree dumps) and projects them into a
stable, version-independent JSON schema for code generators, editor
tooling and documentation builders.
"""

from __future__ import annotations

# Re-export commonly used types for convenience
from ._version import __version__
from .core import ir
from .core.errors import EncodeError, ParseError, ZeroApiError
from .core.normalizer import normalize
from .core.parser import parse_file, parse_files
from .core.serializer import dump_json, load_json

__all__ = [
    "__version__",
    "ir",
    "ZeroApiError",
    "ParseError",
    "EncodeError",
    "parse_file",
    "parse_files",
    "normalize",
    "dump_json",
    "load_json",
]
