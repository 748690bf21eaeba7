"""Tests for the Document -> NormalizedSpec projection."""

from pathlib import Path

import pytest

from zeroapi.core import ir
from zeroapi.core.dump_loader import load_dump
from zeroapi.core.normalizer import (
    normalize,
    normalize_doc,
    normalize_info,
    normalize_server,
    normalize_service,
    split_middleware,
)
from zeroapi.core.parser import parse_file


def make_route(handler: str) -> ir.Route:
    return ir.Route(handler=handler, method="get", path=f"/{handler}")


def make_group(annotation: dict[str, str] | None, *handlers: str) -> ir.RouteGroup:
    return ir.RouteGroup(
        annotation=ir.Annotation(properties=annotation) if annotation is not None else None,
        routes=[make_route(h) for h in handlers],
    )


class TestInfoNormalization:
    """Tests for metadata reconciliation."""

    def test_properties_win(self):
        info = ir.InfoBlock(
            title="legacy title",
            properties={"title": "User API", "date": "2024-01-02", "team": "core"},
        )

        metadata = normalize_info(info)

        assert metadata.title == "User API"
        assert metadata.date == "2024-01-02"
        assert metadata.author == ""
        assert metadata.desc == ""
        assert metadata.properties == {"title": "User API", "date": "2024-01-02", "team": "core"}

    def test_legacy_fields_without_properties(self):
        info = ir.InfoBlock(
            title="Legacy",
            desc="old",
            author="zero",
            version="0.9",
            email="a@example.com",
        )

        metadata = normalize_info(info)

        assert metadata == ir.Metadata(
            title="Legacy",
            desc="old",
            author="zero",
            version="0.9",
            email="a@example.com",
        )
        assert metadata.date == ""
        assert metadata.properties == {}


class TestServerNormalization:
    """Tests for @server annotation projection."""

    def test_auth_takes_precedence_over_jwt(self):
        server = normalize_server(ir.Annotation(properties={"auth": "jwt-custom", "jwt": "other"}))

        assert server.auth == "jwt-custom"

    def test_jwt_alias(self):
        server = normalize_server(ir.Annotation(properties={"jwt": "x"}))

        assert server.auth == "x"

    def test_empty_auth_falls_through(self):
        server = normalize_server(ir.Annotation(properties={"auth": "", "jwt": "x"}))

        assert server.auth == "x"

    def test_all_fields(self):
        server = normalize_server(
            ir.Annotation(
                properties={
                    "group": "user",
                    "prefix": "/v1",
                    "middleware": "Log, Trace",
                    "timeout": "3s",
                }
            )
        )

        assert server == ir.ServerAnnotation(
            group="user",
            prefix="/v1",
            middleware=["Log", "Trace"],
            timeout="3s",
        )

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("", []),
            ("Log", ["Log"]),
            ("Log,Trace", ["Log", "Trace"]),
            (" Log , , Trace ", ["Log", "Trace"]),
        ],
    )
    def test_split_middleware(self, value: str, expected: list[str]):
        assert split_middleware(value) == expected


class TestServiceNormalization:
    """Tests for route flattening."""

    def test_routes_flattened_in_order(self):
        service = ir.ServiceDecl(
            name="a",
            groups=[
                make_group({"group": "first"}, "one", "two"),
                make_group({"group": "second"}, "three", "four", "five"),
            ],
        )

        result = normalize_service(service)

        assert result.name == "a"
        assert [r.handler for r in result.routes] == ["one", "two", "three", "four", "five"]

    def test_last_server_annotation_wins(self):
        service = ir.ServiceDecl(
            groups=[
                make_group({"group": "first", "jwt": "Auth"}, "one", "two"),
                make_group({"group": "second"}, "three", "four", "five"),
            ],
        )

        server = normalize_service(service).server

        assert server.group == "second"
        assert server.auth == ""

    def test_single_annotated_group(self):
        service = ir.ServiceDecl(
            groups=[
                make_group({"group": "first"}, "one", "two"),
                make_group(None, "three", "four", "five"),
            ],
        )

        assert normalize_service(service).server.group == "first"

    def test_no_annotation(self):
        service = ir.ServiceDecl(groups=[make_group(None, "one")])

        assert normalize_service(service).server == ir.ServerAnnotation()


class TestRouteNormalization:
    """Tests for per-route projection."""

    def test_doc_summary_merge(self):
        doc = normalize_doc(ir.AtDoc(properties={"desc": "x"}, text="hello"))

        assert doc == {"desc": "x", "summary": "hello"}

    def test_doc_text_overrides_summary_property(self):
        doc = normalize_doc(ir.AtDoc(properties={"summary": "old"}, text="new"))

        assert doc == {"summary": "new"}

    def test_empty_doc(self):
        assert normalize_doc(ir.AtDoc()) == {}

    def test_route_fields(self):
        route = ir.Route(
            handler="getUser",
            method="get",
            path="/users/:id",
            request_type=ir.NamedType(raw_name="GetReq"),
            response_type=ir.ArrayType(
                raw_name="[]User",
                value=ir.NamedType(raw_name="User"),
            ),
            docs=["// fetch"],
            at_server_annotation=ir.Annotation(properties={"handler": "getUser"}),
        )
        service = ir.ServiceDecl(groups=[ir.RouteGroup(routes=[route])])

        (result,) = normalize_service(service).routes

        assert result.request_type == "GetReq"
        assert result.response_type == "[]User"
        assert result.docs == ["// fetch"]
        assert result.at_server_annotation == {"handler": "getUser"}


class TestNormalize:
    """Tests for the whole-document projection."""

    def test_aliases_skipped(self, simple_document: ir.Document):
        spec = normalize(simple_document)

        assert [t.name for t in spec.types] == ["CreateUserReq"]

    def test_fields(self, simple_document: ir.Document):
        spec = normalize(simple_document)

        name, age, base = spec.types[0].fields
        assert name == ir.FieldDef(name="Name", type="string", tag='`json:"name"`')
        assert age.optional
        assert age.comment == "// years"
        assert base.is_inline
        assert base.name == ""
        assert base.type == "Base"

    def test_type_def(self, simple_document: ir.Document):
        type_def = normalize(simple_document).types[0]

        assert type_def.raw_name == "CreateUserReq"
        assert type_def.docs == ["// Create a user"]
        assert type_def.enums == {}

    def test_exactly_one_service(self):
        spec = normalize(ir.Document())

        assert len(spec.services) == 1
        assert spec.services[0] == ir.ServiceDef()

    def test_imports(self, simple_document: ir.Document):
        assert normalize(simple_document).imports == [ir.ImportRef(value="base.api")]

    def test_sample_file(self, user_api: Path):
        spec = normalize(parse_file(user_api))

        assert spec.syntax == "v1"
        assert spec.info.title == "User API"
        assert spec.info.date == "2024-01-02"
        assert spec.info.properties["team"] == "platform"
        assert [i.value for i in spec.imports] == ["common.api", "order.api"]
        assert [t.name for t in spec.types] == ["Base", "LoginReq", "LoginResp", "User"]

        (service,) = spec.services
        assert service.name == "user-api"
        assert service.server == ir.ServerAnnotation(
            group="user",
            prefix="/v1/users",
            auth="Auth",
            middleware=["Log", "Trace"],
            timeout="3s",
        )
        assert [r.handler for r in service.routes] == [
            "login",
            "refresh",
            "getUser",
            "deleteUser",
            "listUsers",
        ]

        login, refresh, get_user, delete_user, list_users = service.routes
        assert login.doc == {"summary": "Log in"}
        assert refresh.request_type == ""
        assert refresh.doc == {"summary": "Refresh token", "deprecated": "true"}
        assert get_user.docs == ["// Fetch one user"]
        assert delete_user.response_type == ""
        assert list_users.response_type == "[]User"

    def test_sample_file_fields(self, user_api: Path):
        types = {t.name: t for t in normalize(parse_file(user_api)).types}

        assert not types["Base"].fields[0].optional  # header tags do not mark members optional
        base, username, password, remember = types["LoginReq"].fields
        assert base.is_inline and base.type == "Base"
        assert not username.optional
        assert password.comment == "// plain text"
        assert remember.optional
        assert [f.type for f in types["LoginResp"].fields] == [
            "string",
            "int64",
            "[]string",
            "map[string]string",
            "*User",
        ]

    def test_legacy_dump(self, dump_fixtures_dir: Path):
        spec = normalize(load_dump(dump_fixtures_dir / "legacy.json"))

        assert spec.info.title == "Legacy API"
        assert spec.info.date == ""
        assert spec.info.properties == {}
        assert [t.name for t in spec.types] == ["PingReq"]
        assert spec.services[0].server.auth == "Auth"
        (route,) = spec.services[0].routes
        assert route.doc == {"summary": "health check"}
        assert route.at_server_annotation == {}
