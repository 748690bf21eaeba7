"""
JSON (and YAML) encoding of normalized specs.
"""

from __future__ import annotations

import json

import yaml
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from . import ir
from .errors import EncodeError

DEFAULT_INDENT = 2


def dump_json(
    spec: ir.NormalizedSpec,
    indent: int | None = DEFAULT_INDENT,
    ensure_ascii: bool = False,
) -> str:
    """
    Serialize a normalized spec.

    Args:
        spec: Spec to encode
        indent: Spaces per level; None for compact single-line output
        ensure_ascii: Escape non-ASCII characters

    Returns:
        JSON text

    Raises:
        EncodeError: If a value cannot be represented in JSON
    """
    try:
        data = spec.model_dump(mode="json")
        separators = (",", ":") if indent is None else None
        return json.dumps(data, indent=indent, ensure_ascii=ensure_ascii, separators=separators)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise EncodeError(f"Failed to encode spec: {e}") from e


def load_json(text: str) -> ir.NormalizedSpec:
    """
    Decode JSON produced by :func:`dump_json`.

    Raises:
        EncodeError: If the text is not valid JSON or does not match the schema
    """
    try:
        return ir.NormalizedSpec.model_validate_json(text)
    except ValidationError as e:
        raise EncodeError(f"Invalid normalized spec: {e}") from e


def dump_yaml(spec: ir.NormalizedSpec) -> str:
    """
    Serialize a normalized spec as YAML, keeping key order.

    Raises:
        EncodeError: If a value cannot be represented
    """
    try:
        return yaml.safe_dump(
            spec.model_dump(mode="json"),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    except (PydanticSerializationError, yaml.YAMLError) as e:
        raise EncodeError(f"Failed to encode spec: {e}") from e
