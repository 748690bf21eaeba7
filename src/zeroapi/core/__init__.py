"""Core zeroapi functionality: IR, lexer, parser, dump loader, normalizer, serializer, settings."""

from . import ir
from .errors import EncodeError, ErrorContext, ParseError, ZeroApiError
from .normalizer import normalize
from .parser import parse_api, parse_file, parse_files
from .serializer import dump_json, dump_yaml, load_json
from .settings import Settings, load_settings

__all__ = [
    "ir",
    "ZeroApiError",
    "ParseError",
    "EncodeError",
    "ErrorContext",
    "parse_file",
    "parse_files",
    "parse_api",
    "normalize",
    "dump_json",
    "dump_yaml",
    "load_json",
    "Settings",
    "load_settings",
]
