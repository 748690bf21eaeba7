"""Tests for loading goctl parse-tree dumps."""

import json
from pathlib import Path

import pytest

from zeroapi.core import ir
from zeroapi.core.dump_loader import document_from_dump, load_dump
from zeroapi.core.errors import ParseError


@pytest.fixture
def legacy_dump(dump_fixtures_dir: Path) -> Path:
    return dump_fixtures_dir / "legacy.json"


class TestLoadDump:
    """Tests for reading dump files."""

    def test_legacy_info(self, legacy_dump: Path):
        document = load_dump(legacy_dump)

        assert document.info.properties == {}
        assert document.info.title == "Legacy API"
        assert document.info.email == "legacy@example.com"

    def test_types(self, legacy_dump: Path):
        document = load_dump(legacy_dump)

        ping, status = document.types
        assert isinstance(ping, ir.DefineStruct)
        assert isinstance(status, ir.AliasType)

        name, tags = ping.members
        assert name.type == ir.PrimitiveType(raw_name="string")
        assert name.is_optional()
        assert isinstance(tags.type, ir.ArrayType)
        assert tags.type.value == ir.PrimitiveType(raw_name="string")
        assert tags.docs == ["// tag list"]
        assert tags.comment == "// labels"

    def test_service(self, legacy_dump: Path):
        document = load_dump(legacy_dump)

        assert document.service.name == "legacy-api"
        (group,) = document.service.groups
        assert group.annotation.get("jwt") == "Auth"
        (route,) = group.routes
        assert route.handler == "ping"
        assert route.request_type_name() == "PingReq"
        assert route.response_type is None
        assert route.at_server_annotation is None
        assert route.at_doc.text == "health check"

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text('{"Syntax": ')

        with pytest.raises(ParseError) as exc_info:
            load_dump(path)

        assert "Invalid JSON" in str(exc_info.value)
        assert exc_info.value.context.file == path


class TestDocumentFromDump:
    """Tests for building Documents from decoded data."""

    def test_rejects_non_object(self):
        with pytest.raises(ParseError, match="expected a JSON object"):
            document_from_dump([1, 2, 3])

    def test_empty_object(self):
        document = document_from_dump({})

        assert document.syntax.version == ""
        assert document.types == []
        assert document.service.groups == []

    def test_nested_type_shapes(self):
        data = {
            "Types": [
                {
                    "RawName": "Bag",
                    "Members": [
                        {
                            "Name": "Lookup",
                            "Type": {
                                "RawName": "map[string]*Item",
                                "Key": "string",
                                "Value": {"RawName": "*Item", "Type": {"RawName": "Item"}},
                            },
                        },
                        {"Name": "Any", "Type": {"RawName": "interface{}"}},
                    ],
                }
            ]
        }

        document = document_from_dump(data)

        lookup, anything = document.types[0].members
        assert isinstance(lookup.type, ir.MapType)
        assert lookup.type.key == "string"
        assert isinstance(lookup.type.value, ir.PointerType)
        assert lookup.type.value.type == ir.NamedType(raw_name="Item")
        assert isinstance(anything.type, ir.InterfaceType)

    def test_doc_properties(self):
        data = {
            "Service": {
                "Name": "a",
                "Groups": [
                    {
                        "Annotation": {"Properties": None},
                        "Routes": [
                            {
                                "Handler": "ping",
                                "Method": "get",
                                "Path": "/ping",
                                "AtDoc": {"Properties": {"summary": "Ping"}, "Text": ""},
                            }
                        ],
                    }
                ],
            }
        }

        document = document_from_dump(json.loads(json.dumps(data)))

        group = document.service.groups[0]
        assert group.annotation is None
        assert group.routes[0].at_doc.properties == {"summary": "Ping"}

    def test_malformed_values(self):
        data = {"Info": {"Properties": {"title": ["not", "a", "string"]}}}

        with pytest.raises(ParseError, match="malformed ApiSpec dump"):
            document_from_dump(data)
