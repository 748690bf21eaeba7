"""
Parse-tree types for an API document.

A Document is what the parser (or the dump loader) produces. It mirrors the
structure of the source file: syntax, info block, imports, type
declarations and one service split into route groups.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .types import TypeDecl, TypeExpr


class SyntaxDecl(BaseModel):
    """``syntax = "v1"``."""

    version: str = ""

    model_config = ConfigDict(frozen=True)


class InfoBlock(BaseModel):
    """
    The ``info (...)`` block.

    ``properties`` holds every key/value pair as written. The single-valued
    fields are the older representation and are what pre-property parse
    trees expose.
    """

    title: str = ""
    desc: str = ""
    author: str = ""
    version: str = ""
    email: str = ""
    properties: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class ImportDecl(BaseModel):
    """A single imported file."""

    value: str

    model_config = ConfigDict(frozen=True)


class Annotation(BaseModel):
    """Key/value properties of an ``@server(...)`` block."""

    properties: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def get(self, key: str) -> str:
        return self.properties.get(key, "")


class AtDoc(BaseModel):
    """``@doc "text"`` or ``@doc(key: value ...)``."""

    properties: dict[str, str] | None = None
    text: str = ""

    model_config = ConfigDict(frozen=True)


class Route(BaseModel):
    """
    A single route inside a service block.

    Attributes:
        handler: Handler name from ``@handler``
        method: Lowercase HTTP method
        path: Route path as written
        request_type: Request body type, None if absent
        response_type: Response body type, None if absent
        at_doc: ``@doc`` annotation
        docs: Comment lines above the route
        comment: Trailing comment on the route line
        at_server_annotation: Route-level ``@server`` block
    """

    handler: str = ""
    method: str = ""
    path: str = ""
    request_type: TypeExpr | None = None
    response_type: TypeExpr | None = None
    at_doc: AtDoc = Field(default_factory=AtDoc)
    docs: list[str] = Field(default_factory=list)
    comment: str = ""
    at_server_annotation: Annotation | None = None

    model_config = ConfigDict(frozen=True)

    def request_type_name(self) -> str:
        return self.request_type.name if self.request_type is not None else ""

    def response_type_name(self) -> str:
        return self.response_type.name if self.response_type is not None else ""


class RouteGroup(BaseModel):
    """One ``service`` block and the ``@server`` annotation above it."""

    annotation: Annotation | None = None
    routes: list[Route] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ServiceDecl(BaseModel):
    """All route groups of the document's service."""

    name: str = ""
    groups: list[RouteGroup] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class Document(BaseModel):
    """
    A parsed API document.

    Attributes:
        syntax: Syntax version declaration
        info: Info block
        imports: Imported files in declaration order
        types: Type declarations in declaration order
        service: The document's service
        source: File the document was read from, if any
    """

    syntax: SyntaxDecl = Field(default_factory=SyntaxDecl)
    info: InfoBlock = Field(default_factory=InfoBlock)
    imports: list[ImportDecl] = Field(default_factory=list)
    types: list[TypeDecl] = Field(default_factory=list)
    service: ServiceDecl = Field(default_factory=ServiceDecl)
    source: Path | None = None

    model_config = ConfigDict(frozen=True)
