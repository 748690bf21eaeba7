"""
Normalizer: Document -> NormalizedSpec.

A pure structural transform. It reads the parse tree and builds fresh
normalized records; it performs no I/O and raises no errors of its own.

Compatibility rules applied here:

- Info: when the info block has properties, the named metadata fields are
  looked up from them; otherwise the single-valued legacy fields are used
  (``date`` has no legacy counterpart). The two sources are never merged.
- ``@server`` on a route group replaces the service's server block, so the
  last annotated group wins.
- ``auth`` falls back to ``jwt``.
- ``@doc`` free text becomes the ``summary`` key, overriding a ``summary``
  property.
"""

from __future__ import annotations

import logging

from . import ir

logger = logging.getLogger(__name__)

# Metadata fields looked up from info properties
INFO_PROPERTY_KEYS = ("title", "desc", "author", "date", "version", "email")

# Checked in order, first non-empty value wins
AUTH_KEYS = ("auth", "jwt")


def normalize(document: ir.Document) -> ir.NormalizedSpec:
    """
    Project a parsed Document into a NormalizedSpec.

    Args:
        document: Parsed API document

    Returns:
        Normalized spec with exactly one service
    """
    spec = ir.NormalizedSpec(
        syntax=document.syntax.version,
        info=normalize_info(document.info),
        imports=[normalize_import(imp) for imp in document.imports],
        types=[normalize_struct(decl) for decl in document.types if decl.is_struct],
        services=[normalize_service(document.service)],
    )
    logger.debug(
        "Normalized %s: %d types (%d skipped), %d routes",
        document.source or "<document>",
        len(spec.types),
        len(document.types) - len(spec.types),
        len(spec.services[0].routes),
    )
    return spec


def normalize_info(info: ir.InfoBlock) -> ir.Metadata:
    """Reconcile property-based and legacy info blocks."""
    if info.properties:
        return ir.Metadata(
            **{key: info.properties.get(key, "") for key in INFO_PROPERTY_KEYS},
            properties=dict(info.properties),
        )

    return ir.Metadata(
        title=info.title,
        desc=info.desc,
        author=info.author,
        version=info.version,
        email=info.email,
    )


def normalize_import(imp: ir.ImportDecl) -> ir.ImportRef:
    return ir.ImportRef(value=imp.value)


def normalize_struct(struct: ir.DefineStruct) -> ir.TypeDef:
    """Project a struct declaration and its members."""
    return ir.TypeDef(
        name=struct.name,
        raw_name=struct.raw_name,
        fields=[normalize_member(member) for member in struct.members],
        docs=list(struct.docs),
    )


def normalize_member(member: ir.Member) -> ir.FieldDef:
    return ir.FieldDef(
        name=member.name,
        type=member.type.name,
        tag=member.tag,
        comment=member.comment,
        docs=list(member.docs),
        is_inline=member.is_inline,
        optional=member.is_optional(),
    )


def resolve_auth(annotation: ir.Annotation) -> str:
    """Return the first non-empty of ``auth``/``jwt``."""
    for key in AUTH_KEYS:
        value = annotation.get(key)
        if value:
            return value
    return ""


def split_middleware(value: str) -> list[str]:
    """Split ``"Log, Trace"`` into ``["Log", "Trace"]``."""
    return [name.strip() for name in value.split(",") if name.strip()]


def normalize_server(annotation: ir.Annotation) -> ir.ServerAnnotation:
    return ir.ServerAnnotation(
        group=annotation.get("group"),
        prefix=annotation.get("prefix"),
        auth=resolve_auth(annotation),
        middleware=split_middleware(annotation.get("middleware")),
        timeout=annotation.get("timeout"),
    )


def normalize_doc(at_doc: ir.AtDoc) -> dict[str, str]:
    """Flatten ``@doc`` into one mapping; free text is stored as ``summary``."""
    doc = dict(at_doc.properties or {})
    if at_doc.text:
        doc["summary"] = at_doc.text
    return doc


def normalize_route(route: ir.Route) -> ir.RouteDef:
    at_server = route.at_server_annotation
    return ir.RouteDef(
        handler=route.handler,
        method=route.method,
        path=route.path,
        request_type=route.request_type_name(),
        response_type=route.response_type_name(),
        doc=normalize_doc(route.at_doc),
        docs=list(route.docs),
        at_server_annotation=dict(at_server.properties) if at_server is not None else {},
    )


def normalize_service(service: ir.ServiceDecl) -> ir.ServiceDef:
    """
    Merge every route group into one service.

    Routes keep source order across groups. Each group carrying an
    ``@server`` block replaces the server settings outright.
    """
    server = ir.ServerAnnotation()
    routes: list[ir.RouteDef] = []

    for group in service.groups:
        if group.annotation is not None:
            if server != ir.ServerAnnotation():
                logger.debug("Group @server block replaces earlier server settings")
            server = normalize_server(group.annotation)
        routes.extend(normalize_route(route) for route in group.routes)

    return ir.ServiceDef(name=service.name, server=server, routes=routes)
