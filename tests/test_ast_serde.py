"""
Tests for AST serialization.
"""

from suo.parser import parse_source
from suo.parser.ast_serde import count_ast_nodes, deserialize_ast, node_to_dict, serialize_ast


class TestNodeToDict:

    def test_locations_included(self):
        data = node_to_dict(parse_source('hideall "a"'))
        stmt = data["body"][0]
        assert stmt["range"] == [0, 11]
        assert stmt["loc"] == {"start": {"line": 1, "column": 0}, "end": {"line": 1, "column": 11}}
        assert stmt["name"]["raw"] == '"a"'

    def test_optional_fields_skipped(self):
        stmt = node_to_dict(parse_source('1 "a" window 2'), include_location=False)["body"][0]
        assert set(stmt) == {"type", "time", "name", "window"}
        assert stmt["window"] == {"type": "WindowStatement", "before": {"type": "NumericLiteral", "value": 2.0}}

    def test_net_sync_fields(self):
        source = '1 "a" Ability { id: "1", count: 2 }'
        sync = node_to_dict(parse_source(source), include_location=False)["body"][0]["sync"]
        assert sync["sync_type"] == "Ability"
        assert sync["fields"] == [
            {"key": "id", "value": {"type": "StringLiteral", "value": "1"}},
            {"key": "count", "value": {"type": "NumericLiteral", "value": 2.0}},
        ]

    def test_program_keys(self):
        data = node_to_dict(parse_source('hideall "a"'), include_location=False)
        assert set(data) == {"type", "body", "comments", "source_file", "source_type"}

    def test_formatting_insensitive(self):
        a = parse_source('1 "a"   jump 2')
        b = parse_source('1.0  "a"\njump 2.0')
        assert node_to_dict(a, False)["body"] == node_to_dict(b, False)["body"]


class TestSerialize:

    def test_bytes_round_trip(self):
        program = parse_source('hideall "é"\n# note')
        data = serialize_ast(program)
        assert isinstance(data, bytes)
        assert deserialize_ast(data) == node_to_dict(program)
        assert deserialize_ast(data.decode("utf-8"))["comments"][0]["value"] == " note"

    def test_count_nodes(self):
        assert count_ast_nodes(deserialize_ast(serialize_ast(parse_source('hideall "a"')))) == 3

    def test_count_net_sync_nodes(self):
        data = node_to_dict(parse_source('1 "a" Ability { id: "1" }'))
        # Program, Entry, time, name, sync, id value
        assert count_ast_nodes(data) == 6
