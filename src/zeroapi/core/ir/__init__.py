"""
zeroapi Intermediate Representation (IR) types.

Two layers live here:

- The parse tree (``Document`` and the type-system variants) produced by
  the parser or the dump loader.
- The normalized spec (``NormalizedSpec`` and its records) produced by the
  normalizer and written out as JSON.

All types are re-exported from this package.
"""

# Parse tree
from .document import (
    Annotation,
    AtDoc,
    Document,
    ImportDecl,
    InfoBlock,
    Route,
    RouteGroup,
    ServiceDecl,
    SyntaxDecl,
)

# Normalized spec
from .spec import (
    FieldDef,
    ImportRef,
    Metadata,
    NormalizedSpec,
    RouteDef,
    ServerAnnotation,
    ServiceDef,
    SpecModel,
    TypeDef,
)

# Type system
from .types import (
    PRIMITIVE_TYPES,
    AliasType,
    ArrayType,
    DefineStruct,
    InterfaceType,
    MapType,
    Member,
    MemberTag,
    NamedType,
    PointerType,
    PrimitiveType,
    TypeDecl,
    TypeExpr,
    parse_tag,
)

__all__ = [
    # Parse tree
    "Annotation",
    "AtDoc",
    "Document",
    "ImportDecl",
    "InfoBlock",
    "Route",
    "RouteGroup",
    "ServiceDecl",
    "SyntaxDecl",
    # Type system
    "PRIMITIVE_TYPES",
    "AliasType",
    "ArrayType",
    "DefineStruct",
    "InterfaceType",
    "MapType",
    "Member",
    "MemberTag",
    "NamedType",
    "PointerType",
    "PrimitiveType",
    "TypeDecl",
    "TypeExpr",
    "parse_tag",
    # Normalized spec
    "FieldDef",
    "ImportRef",
    "Metadata",
    "NormalizedSpec",
    "RouteDef",
    "ServerAnnotation",
    "ServiceDef",
    "SpecModel",
    "TypeDef",
]
