"""
Tests for the timeline parser.
"""

import pytest

from suo.parser import (
    AlertAllStatement,
    DefineStatement,
    Entry,
    HideAllStatement,
    LexicalError,
    Lexer,
    NetSyncStatement,
    NodeType,
    Parser,
    SyncStatement,
    TimelineSyntaxError,
    parse_source,
)


class TestStatements:
    """Test the top-level statement kinds."""

    def test_empty_source(self):
        program = parse_source("")
        assert program.body == ()
        assert program.comments == ()

    def test_whitespace_only(self):
        assert parse_source("  \n\t\n").body == ()

    def test_hideall(self):
        program = parse_source('hideall "--sync--"')
        assert len(program.body) == 1
        stmt = program.body[0]
        assert isinstance(stmt, HideAllStatement)
        assert stmt.node_type == NodeType.HIDE_ALL
        assert stmt.name.value == "--sync--"
        assert stmt.name.raw == '"--sync--"'
        assert stmt.span.range == (0, 18)

    def test_alertall(self):
        stmt = parse_source('alertall "name" before 1 sound "file"').body[0]
        assert isinstance(stmt, AlertAllStatement)
        assert stmt.name.value == "name"
        assert stmt.before.time.value == 1
        assert stmt.sound.file.value == "file"

    def test_alertall_modifiers_any_order(self):
        stmt = parse_source('alertall "x" sound "f" before 2.5').body[0]
        assert stmt.before.time.value == 2.5
        assert stmt.sound.file.value == "f"

    def test_alertall_without_modifiers(self):
        stmt = parse_source('alertall "x"').body[0]
        assert stmt.before is None
        assert stmt.sound is None

    def test_alertall_leaves_other_statements(self):
        program = parse_source('alertall "x" sound "s"\nhideall "y"')
        assert [s.node_type for s in program.body] == [NodeType.ALERT_ALL, NodeType.HIDE_ALL]

    def test_define(self):
        stmt = parse_source('define alertsound "name" "file"').body[0]
        assert isinstance(stmt, DefineStatement)
        assert stmt.define_type == "alertsound"
        assert stmt.name.value == "name"
        assert stmt.file.value == "file"

    def test_define_rejects_other_types(self):
        with pytest.raises(TimelineSyntaxError):
            parse_source('define alarmsound "name" "file"')

    def test_define_requires_identifier(self):
        with pytest.raises(TimelineSyntaxError):
            parse_source('define "name" "file"')

    def test_statements_in_order(self):
        program = parse_source('hideall "a"\n1 "b"\nhideall "c"')
        assert [s.node_type for s in program.body] == [
            NodeType.HIDE_ALL, NodeType.ENTRY, NodeType.HIDE_ALL,
        ]
        assert program.body[1].span.line == 2
        assert program.body[2].span.line == 3


class TestEntries:
    """Test timeline entries and their modifiers."""

    def test_full_entry(self, reset_entry):
        program = parse_source(reset_entry)
        stmt = program.body[0]
        assert isinstance(stmt, Entry)
        assert stmt.time.value == 0
        assert stmt.name.value == "--Reset--"
        assert isinstance(stmt.sync, SyncStatement)
        assert stmt.sync.regex.pattern == " 00:0839:.*is no longer sealed"
        assert stmt.duration.time.value == 5
        assert stmt.window.before.value == 10000
        assert stmt.window.after is None
        assert stmt.jump.time.value == 0
        assert stmt.span.range == (0, len(reset_entry))

    def test_bare_entry(self):
        stmt = parse_source('12 "Cast"').body[0]
        assert stmt.time.value == 12.0
        assert stmt.time.raw == "12"
        assert stmt.sync is None
        assert stmt.window is None
        assert stmt.duration is None
        assert stmt.jump is None

    def test_leading_dot_time(self):
        assert parse_source('.5 "a"').body[0].time.value == 0.5

    def test_asymmetric_window(self):
        stmt = parse_source('1 "a" window 1,2').body[0]
        assert stmt.window.before.value == 1
        assert stmt.window.after.value == 2

    def test_last_modifier_wins(self):
        stmt = parse_source('1 "a" jump 1 jump 2').body[0]
        assert stmt.jump.time.value == 2

    def test_modifiers_span_lines(self):
        stmt = parse_source('1 "a"\n  window 5\n  jump 0').body[0]
        assert stmt.window.before.value == 5
        assert stmt.jump.time.value == 0

    def test_net_sync(self):
        stmt = parse_source('0.0 "name" Ability { id: "1000", name: "name" } window 10').body[0]
        assert isinstance(stmt.sync, NetSyncStatement)
        assert stmt.sync.sync_type == "Ability"
        assert [key for key, _ in stmt.sync.fields] == ["id", "name"]
        assert stmt.sync.get("id").value == "1000"
        assert stmt.sync.get("missing") is None
        assert stmt.window.before.value == 10

    def test_net_sync_numeric_and_trailing_comma(self):
        stmt = parse_source('5 "a" StartsUsing { id: 12, }').body[0]
        assert stmt.sync.get("id").node_type == NodeType.NUMERIC_LITERAL
        assert stmt.sync.get("id").value == 12

    def test_net_sync_empty(self):
        stmt = parse_source('5 "a" InCombat {}').body[0]
        assert stmt.sync.fields == ()

    def test_net_sync_replaces_regex_sync(self):
        stmt = parse_source('5 "a" sync /x/ Ability { id: "1" }').body[0]
        assert stmt.sync.node_type == NodeType.NET_SYNC

    def test_net_sync_unterminated(self):
        with pytest.raises(TimelineSyntaxError):
            parse_source('5 "a" Ability { id: "1"')

    def test_net_sync_bad_value(self):
        with pytest.raises(TimelineSyntaxError):
            parse_source('5 "a" Ability { id: sync }')

    def test_configured_log_types(self):
        stmt = parse_source('5 "a" Foo { }', log_types=("Foo",)).body[0]
        assert stmt.sync.sync_type == "Foo"


class TestComments:
    """Test comment collection."""

    def test_comments_collected_separately(self):
        source = '# header\nhideall "a" # trailing\n0 "b" # between\n  jump 3'
        program = parse_source(source)
        assert len(program.body) == 2
        assert program.body[1].jump.time.value == 3
        assert [c.value for c in program.comments] == [" header", " trailing", " between"]
        assert all(c.node_type == NodeType.COMMENT_LINE for c in program.comments)

    def test_comment_only(self):
        program = parse_source("# just a note")
        assert program.body == ()
        assert program.comments[0].raw == "# just a note"


class TestErrors:
    """Test that malformed input aborts the parse."""

    def test_hideall_requires_string(self):
        with pytest.raises(TimelineSyntaxError) as exc:
            parse_source("hideall 5")
        assert exc.value.token.value == "5"
        assert exc.value.line == 1
        assert exc.value.column == 8

    def test_unterminated_string(self):
        with pytest.raises(LexicalError):
            parse_source('hideall "abc')

    def test_unterminated_regex(self):
        with pytest.raises(LexicalError):
            parse_source('0 "a" sync /abc')

    def test_sync_at_end_of_input(self):
        with pytest.raises(TimelineSyntaxError):
            parse_source('0 "a" sync')

    def test_entry_requires_name(self):
        with pytest.raises(TimelineSyntaxError):
            parse_source("0 jump 1")

    def test_stray_keyword(self):
        with pytest.raises(TimelineSyntaxError):
            parse_source("jump 5")

    def test_unknown_character(self):
        with pytest.raises(LexicalError) as exc:
            parse_source('hideall "a"\n@')
        assert exc.value.line == 2

    def test_window_comma_requires_number(self):
        with pytest.raises(TimelineSyntaxError):
            parse_source('0 "a" window 1,')


class TestProgram:
    """Test Program metadata."""

    def test_program_span(self):
        source = 'hideall "a"\n'
        program = parse_source(source)
        assert program.span.range == (0, len(source))
        assert program.span.loc.end.line == 2

    def test_source_file(self):
        program = Parser(Lexer('hideall "a"', "raid.txt")).parse()
        assert program.source_file == "raid.txt"
        assert program.source_type == "module"

    def test_entries_helper(self):
        program = parse_source('hideall "a"\n1 "b"')
        assert [e.name.value for e in program.entries()] == ["b"]

    def test_nodes_are_immutable(self):
        stmt = parse_source('hideall "a"').body[0]
        with pytest.raises(AttributeError):
            stmt.name = None
