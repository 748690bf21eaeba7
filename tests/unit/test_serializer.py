"""Tests for normalized spec serialization."""

import json

import pytest
import yaml

from zeroapi.core import ir
from zeroapi.core.errors import EncodeError
from zeroapi.core.normalizer import normalize
from zeroapi.core.serializer import dump_json, dump_yaml, load_json


@pytest.fixture
def spec(simple_document: ir.Document) -> ir.NormalizedSpec:
    return normalize(simple_document)


class TestDumpJson:
    """Tests for JSON output."""

    def test_top_level_keys(self, spec: ir.NormalizedSpec):
        data = json.loads(dump_json(spec))

        assert list(data) == ["syntax", "info", "imports", "types", "services"]
        assert data["info"]["desc"] == ""
        assert data["services"][0]["server"]["middleware"] == []

    def test_pretty_by_default(self, spec: ir.NormalizedSpec):
        text = dump_json(spec)

        assert text.startswith('{\n  "syntax": "v1"')

    def test_compact(self, spec: ir.NormalizedSpec):
        text = dump_json(spec, indent=None)

        assert "\n" not in text
        assert text.startswith('{"syntax":"v1","info":{')

    def test_empty_optional_keys_omitted(self, spec: ir.NormalizedSpec):
        data = json.loads(dump_json(spec))

        name, age, _ = data["types"][0]["fields"]
        assert "comment" not in name
        assert "docs" not in name
        assert age["comment"] == "// years"
        assert age["optional"] is True

        type_def = data["types"][0]
        assert "package" not in type_def
        assert "enums" not in type_def
        assert type_def["raw_name"] == "CreateUserReq"

        route = data["services"][0]["routes"][0]
        assert "at_server_annotation" not in route
        assert route["doc"] == {}
        assert route["response_type"] == ""

        assert data["imports"] == [{"value": "base.api"}]

    def test_non_ascii_kept(self):
        spec = ir.NormalizedSpec(info=ir.Metadata(title="用户"))

        assert '"title": "用户"' in dump_json(spec)
        assert "\\u7528" in dump_json(spec, ensure_ascii=True)


class TestLoadJson:
    """Tests for decoding serialized specs."""

    def test_round_trip(self, spec: ir.NormalizedSpec):
        assert load_json(dump_json(spec)) == spec

    def test_round_trip_compact(self, spec: ir.NormalizedSpec):
        assert load_json(dump_json(spec, indent=None)) == spec

    def test_invalid_json(self):
        with pytest.raises(EncodeError, match="Invalid normalized spec"):
            load_json("{not json")

    def test_unknown_key_rejected(self):
        with pytest.raises(EncodeError):
            load_json('{"syntax": "v1", "bogus": 1}')


class TestDumpYaml:
    """Tests for YAML output."""

    def test_yaml_matches_json(self, spec: ir.NormalizedSpec):
        assert yaml.safe_load(dump_yaml(spec)) == json.loads(dump_json(spec))

    def test_key_order_kept(self, spec: ir.NormalizedSpec):
        assert dump_yaml(spec).startswith("syntax: v1\ninfo:\n")
