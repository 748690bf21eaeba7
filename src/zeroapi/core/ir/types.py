"""
Type-system definitions for the API parse tree.

Every type carries its ``raw_name``, the type expression as written in the
source (``string``, ``[]*User``, ``map[string]int``). Type expressions used
by members and route bodies form one tagged union; top-level declarations
(structs and aliases) form another.
"""

from __future__ import annotations

import re
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

PRIMITIVE_TYPES = frozenset(
    {
        "bool",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "int8",
        "int16",
        "int32",
        "int64",
        "float32",
        "float64",
        "complex64",
        "complex128",
        "string",
        "int",
        "uint",
        "uintptr",
        "byte",
        "rune",
    }
)

# Tag keys whose "optional" option marks a member optional
OPTIONAL_TAG_KEYS = ("json", "form")

_TAG_PAIR = re.compile(r'([A-Za-z_][\w-]*):"((?:[^"\\]|\\.)*)"')


class PrimitiveType(BaseModel):
    """A builtin scalar such as ``string`` or ``int64``."""

    kind: Literal["primitive"] = "primitive"
    raw_name: str

    model_config = ConfigDict(frozen=True)

    @property
    def name(self) -> str:
        return self.raw_name


class NamedType(BaseModel):
    """A reference to a type declared elsewhere (``User``)."""

    kind: Literal["named"] = "named"
    raw_name: str

    model_config = ConfigDict(frozen=True)

    @property
    def name(self) -> str:
        return self.raw_name


class InterfaceType(BaseModel):
    """``interface{}`` or ``any``."""

    kind: Literal["interface"] = "interface"
    raw_name: str = "interface{}"

    model_config = ConfigDict(frozen=True)

    @property
    def name(self) -> str:
        return self.raw_name


class ArrayType(BaseModel):
    """Slices and fixed arrays: ``[]T``, ``[4]T``."""

    kind: Literal["array"] = "array"
    raw_name: str
    value: TypeExpr

    model_config = ConfigDict(frozen=True)

    @property
    def name(self) -> str:
        return self.raw_name


class MapType(BaseModel):
    """``map[K]V``."""

    kind: Literal["map"] = "map"
    raw_name: str
    key: str
    value: TypeExpr

    model_config = ConfigDict(frozen=True)

    @property
    def name(self) -> str:
        return self.raw_name


class PointerType(BaseModel):
    """``*T``."""

    kind: Literal["pointer"] = "pointer"
    raw_name: str
    type: TypeExpr

    model_config = ConfigDict(frozen=True)

    @property
    def name(self) -> str:
        return self.raw_name


TypeExpr = Annotated[
    PrimitiveType | NamedType | InterfaceType | ArrayType | MapType | PointerType,
    Field(discriminator="kind"),
]


class MemberTag(BaseModel):
    """One ``key:"name,opt1,opt2"`` entry of a struct tag."""

    key: str
    name: str
    options: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


def parse_tag(tag: str) -> list[MemberTag]:
    """
    Split a raw struct tag into its entries.

    Args:
        tag: Raw tag, with or without surrounding backticks

    Returns:
        Tag entries in source order
    """
    tags: list[MemberTag] = []
    for key, value in _TAG_PAIR.findall(tag.strip("`")):
        name, *options = value.split(",")
        tags.append(MemberTag(key=key, name=name, options=[o.strip() for o in options]))
    return tags


class Member(BaseModel):
    """
    A struct member.

    Attributes:
        name: Member name (empty for inline members)
        type: Member type expression
        tag: Raw tag including backticks
        comment: Trailing comment on the member line
        docs: Comment lines directly above the member
        is_inline: True for embedded members (``Base`` or ``*Base``)
    """

    name: str = ""
    type: TypeExpr
    tag: str = ""
    comment: str = ""
    docs: list[str] = Field(default_factory=list)
    is_inline: bool = False

    model_config = ConfigDict(frozen=True)

    def tags(self) -> list[MemberTag]:
        return parse_tag(self.tag)

    def is_optional(self) -> bool:
        """Check if a ``json`` or ``form`` tag carries the ``optional`` option."""
        return any(
            "optional" in t.options for t in self.tags() if t.key in OPTIONAL_TAG_KEYS
        )


class DefineStruct(BaseModel):
    """A struct declaration: ``type User { ... }``."""

    kind: Literal["struct"] = "struct"
    raw_name: str
    members: list[Member] = Field(default_factory=list)
    docs: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def name(self) -> str:
        return self.raw_name

    @property
    def is_struct(self) -> bool:
        return True


class AliasType(BaseModel):
    """A non-struct declaration: ``type Gender = int`` or ``type Gender int``."""

    kind: Literal["alias"] = "alias"
    raw_name: str
    target: TypeExpr | None = None
    docs: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def name(self) -> str:
        return self.raw_name

    @property
    def is_struct(self) -> bool:
        return False


TypeDecl = Annotated[DefineStruct | AliasType, Field(discriminator="kind")]


ArrayType.model_rebuild()
MapType.model_rebuild()
PointerType.model_rebuild()
Member.model_rebuild()
AliasType.model_rebuild()
