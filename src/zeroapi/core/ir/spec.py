"""
Normalized spec types.

These are the stable, serialization-ready records produced by the
normalizer. Field names are the JSON keys. A few fields are left out of
the JSON when empty; each model lists them in ``omit_if_empty``.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer


class SpecModel(BaseModel):
    """Base for normalized records: immutable, drops empty optional keys on dump."""

    omit_if_empty: ClassVar[frozenset[str]] = frozenset()

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_serializer(mode="wrap")
    def _drop_empty(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for key in self.omit_if_empty:
            if key in data and not data[key]:
                del data[key]
        return data


class Metadata(SpecModel):
    """
    Document metadata.

    The six named fields come either from ``properties`` or, when there are
    no properties, from the legacy single-valued info fields.
    """

    title: str = ""
    desc: str = ""
    author: str = ""
    date: str = ""
    version: str = ""
    email: str = ""
    properties: dict[str, str] = Field(default_factory=dict)


class FieldDef(SpecModel):
    """A struct field."""

    omit_if_empty: ClassVar[frozenset[str]] = frozenset({"tag", "comment", "docs"})

    name: str
    type: str
    tag: str = ""
    comment: str = ""
    docs: list[str] = Field(default_factory=list)
    is_inline: bool = False
    optional: bool = False


class TypeDef(SpecModel):
    """A struct type definition."""

    omit_if_empty: ClassVar[frozenset[str]] = frozenset(
        {"package", "type_name", "raw_name", "docs", "enums"}
    )

    name: str
    package: str = ""
    type_name: str = ""
    raw_name: str = ""
    fields: list[FieldDef] = Field(default_factory=list)
    docs: list[str] = Field(default_factory=list)
    enums: dict[str, str] = Field(default_factory=dict)


class ImportRef(SpecModel):
    """An imported file. ``types`` is reserved for nested resolution."""

    omit_if_empty: ClassVar[frozenset[str]] = frozenset({"as_package", "types"})

    value: str
    as_package: str = ""
    types: list[TypeDef] = Field(default_factory=list)


class ServerAnnotation(SpecModel):
    """Group-level ``@server`` settings."""

    group: str = ""
    prefix: str = ""
    auth: str = ""
    middleware: list[str] = Field(default_factory=list)
    timeout: str = ""


class RouteDef(SpecModel):
    """A route, flattened out of its group."""

    omit_if_empty: ClassVar[frozenset[str]] = frozenset({"docs", "at_server_annotation"})

    handler: str = ""
    method: str = ""
    path: str = ""
    request_type: str = ""
    response_type: str = ""
    doc: dict[str, str] = Field(default_factory=dict)
    docs: list[str] = Field(default_factory=list)
    at_server_annotation: dict[str, str] = Field(default_factory=dict)


class ServiceDef(SpecModel):
    """The document's service with all routes from all groups."""

    name: str = ""
    server: ServerAnnotation = Field(default_factory=ServerAnnotation)
    routes: list[RouteDef] = Field(default_factory=list)


class NormalizedSpec(SpecModel):
    """Root of the normalized output."""

    syntax: str = ""
    info: Metadata = Field(default_factory=Metadata)
    imports: list[ImportRef] = Field(default_factory=list)
    types: list[TypeDef] = Field(default_factory=list)
    services: list[ServiceDef] = Field(default_factory=list)
