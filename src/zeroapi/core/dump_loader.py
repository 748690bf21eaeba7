"""
Loader for go-zero parse-tree dumps.

goctl's parser can dump its ``*spec.ApiSpec`` with ``json.Marshal``. The
result uses Go field names (``Info.Title``, ``Service.Groups[].Routes``)
and encodes every type as an object carrying ``RawName`` plus
variant-specific keys (``Members``, ``Key``/``Value``, ``Type``). This
module turns such a dump into a Document so it can be normalized like a
parsed .api file.

Older dumps predate ``Info.Properties``; for those the info block only has
the single-valued fields.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from . import ir
from .errors import ParseError, make_parse_error

logger = logging.getLogger(__name__)


def load_dump(path: Path) -> ir.Document:
    """
    Read a parse-tree dump from disk.

    Args:
        path: JSON file written from a go-zero ApiSpec

    Returns:
        Document built from the dump

    Raises:
        ParseError: If the file is not valid JSON or not an ApiSpec object
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Cannot read {path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise make_parse_error(f"Invalid JSON: {e.msg}", path, e.lineno, e.colno) from e

    return document_from_dump(data, source=path)


def document_from_dump(data: Any, source: Path | None = None) -> ir.Document:
    """
    Build a Document from decoded dump data.

    Args:
        data: Decoded JSON object
        source: Originating file, if any

    Returns:
        Document built from the dump

    Raises:
        ParseError: If ``data`` does not look like an ApiSpec
    """
    if not isinstance(data, dict):
        raise ParseError(f"{source or '<dump>'}: expected a JSON object at top level")

    try:
        document = ir.Document(
            syntax=ir.SyntaxDecl(version=_dict(data.get("Syntax")).get("Version") or ""),
            info=_info(_dict(data.get("Info"))),
            imports=[ir.ImportDecl(value=item.get("Value") or "") for item in _dicts(data.get("Imports"))],
            types=[_type_decl(item) for item in _dicts(data.get("Types"))],
            service=_service(_dict(data.get("Service"))),
            source=source,
        )
    except (TypeError, ValueError) as e:
        raise ParseError(f"{source or '<dump>'}: malformed ApiSpec dump: {e}") from e

    logger.debug(
        "Loaded dump %s: %d types, %d route groups",
        source,
        len(document.types),
        len(document.service.groups),
    )
    return document


def _dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _dicts(value: Any) -> list[dict[str, Any]]:
    return [item for item in value if isinstance(item, dict)] if isinstance(value, list) else []


def _strings(value: Any) -> list[str]:
    return [str(item) for item in value] if isinstance(value, list) else []


def _info(data: dict[str, Any]) -> ir.InfoBlock:
    return ir.InfoBlock(
        title=data.get("Title") or "",
        desc=data.get("Desc") or "",
        author=data.get("Author") or "",
        version=data.get("Version") or "",
        email=data.get("Email") or "",
        properties=_dict(data.get("Properties")),
    )


def _type_expr(data: dict[str, Any]) -> ir.TypeExpr:
    raw_name = data.get("RawName") or ""
    if "Key" in data and "Value" in data:
        return ir.MapType(raw_name=raw_name, key=data["Key"], value=_type_expr(_dict(data["Value"])))
    if "Value" in data:
        return ir.ArrayType(raw_name=raw_name, value=_type_expr(_dict(data["Value"])))
    if "Type" in data:
        return ir.PointerType(raw_name=raw_name, type=_type_expr(_dict(data["Type"])))
    if "Members" in data:
        return ir.NamedType(raw_name=raw_name)
    if raw_name in ("interface{}", "any"):
        return ir.InterfaceType(raw_name=raw_name)
    if raw_name in ir.PRIMITIVE_TYPES:
        return ir.PrimitiveType(raw_name=raw_name)
    return ir.NamedType(raw_name=raw_name)


def _member(data: dict[str, Any]) -> ir.Member:
    return ir.Member(
        name=data.get("Name") or "",
        type=_type_expr(_dict(data.get("Type"))),
        tag=data.get("Tag") or "",
        comment=data.get("Comment") or "",
        docs=_strings(data.get("Docs")),
        is_inline=bool(data.get("IsInline")),
    )


def _type_decl(data: dict[str, Any]) -> ir.TypeDecl:
    raw_name = data.get("RawName") or ""
    docs = _strings(data.get("Docs"))
    if "Members" in data:
        members = [_member(m) for m in _dicts(data.get("Members"))]
        return ir.DefineStruct(raw_name=raw_name, members=members, docs=docs)
    return ir.AliasType(raw_name=raw_name, target=_type_expr(data), docs=docs)


def _annotation(data: Any) -> ir.Annotation | None:
    properties = _dict(data).get("Properties")
    if properties is None:
        return None
    return ir.Annotation(properties=_dict(properties))


def _route(data: dict[str, Any]) -> ir.Route:
    at_doc = _dict(data.get("AtDoc"))
    doc_properties = at_doc.get("Properties")
    request = data.get("RequestType")
    response = data.get("ResponseType")
    return ir.Route(
        handler=data.get("Handler") or "",
        method=data.get("Method") or "",
        path=data.get("Path") or "",
        request_type=_type_expr(request) if isinstance(request, dict) else None,
        response_type=_type_expr(response) if isinstance(response, dict) else None,
        at_doc=ir.AtDoc(
            properties=_dict(doc_properties) if doc_properties is not None else None,
            text=at_doc.get("Text") or "",
        ),
        docs=_strings(data.get("Docs")),
        at_server_annotation=_annotation(data.get("AtServerAnnotation")),
    )


def _service(data: dict[str, Any]) -> ir.ServiceDecl:
    groups = [
        ir.RouteGroup(
            annotation=_annotation(group.get("Annotation")),
            routes=[_route(r) for r in _dicts(group.get("Routes"))],
        )
        for group in _dicts(data.get("Groups"))
    ]
    return ir.ServiceDecl(name=data.get("Name") or "", groups=groups)
