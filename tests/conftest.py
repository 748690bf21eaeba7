"""Shared pytest fixtures for zeroapi tests."""

from pathlib import Path

import pytest

from zeroapi.core import ir


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def api_fixtures_dir(fixtures_dir: Path) -> Path:
    """Return path to .api fixtures directory."""
    return fixtures_dir / "api"


@pytest.fixture
def dump_fixtures_dir(fixtures_dir: Path) -> Path:
    """Return path to parse-tree dump fixtures directory."""
    return fixtures_dir / "dumps"


@pytest.fixture
def user_api(api_fixtures_dir: Path) -> Path:
    """Return path to the sample user API."""
    return api_fixtures_dir / "user.api"


@pytest.fixture
def simple_struct() -> ir.DefineStruct:
    """Return a struct with a required, an optional and an inline member."""
    return ir.DefineStruct(
        raw_name="CreateUserReq",
        docs=["// Create a user"],
        members=[
            ir.Member(
                name="Name",
                type=ir.PrimitiveType(raw_name="string"),
                tag='`json:"name"`',
            ),
            ir.Member(
                name="Age",
                type=ir.PrimitiveType(raw_name="int"),
                tag='`json:"age,optional"`',
                comment="// years",
            ),
            ir.Member(type=ir.NamedType(raw_name="Base"), is_inline=True),
        ],
    )


@pytest.fixture
def simple_document(simple_struct: ir.DefineStruct) -> ir.Document:
    """Return a Document with one struct, one alias and one route group."""
    return ir.Document(
        syntax=ir.SyntaxDecl(version="v1"),
        info=ir.InfoBlock(
            title="Users",
            properties={"title": "Users", "author": "zero"},
        ),
        imports=[ir.ImportDecl(value="base.api")],
        types=[
            simple_struct,
            ir.AliasType(raw_name="Gender", target=ir.PrimitiveType(raw_name="int")),
        ],
        service=ir.ServiceDecl(
            name="user-api",
            groups=[
                ir.RouteGroup(
                    annotation=ir.Annotation(properties={"group": "user", "prefix": "/v1"}),
                    routes=[
                        ir.Route(
                            handler="createUser",
                            method="post",
                            path="/users",
                            request_type=ir.NamedType(raw_name="CreateUserReq"),
                        )
                    ],
                )
            ],
        ),
    )
