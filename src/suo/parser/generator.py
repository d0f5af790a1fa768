"""
Timeline Generator

Walks a Program and emits canonical timeline text, one statement per line.
Only the statement body is rendered; comments are not re-emitted.

Supported statements: Entry and HideAllStatement. Everything else raises
UnsupportedNodeError instead of being dropped.
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Dict, Optional, Union

from suo.parser.errors import UnsupportedNodeError
from suo.parser.nodes import (
    ASTNode,
    Entry,
    HideAllStatement,
    NetSyncStatement,
    NodeType,
    NumericLiteral,
    Program,
    StringLiteral,
    SyncStatement,
    WindowStatement,
)

TARGETS = ("cactbot",)

_NAME_ESCAPES = {'"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}
_NAME_ESCAPE_RE = re.compile('["\n\r\t]')
# A backslash pair passes through untouched; a bare "/" gets escaped
_REGEX_SLASH_RE = re.compile(r"\\.|/")


@dataclass
class GeneratorOptions:
    """Configuration for the generator."""
    target: str = "cactbot"   # Output dialect; only cactbot exists

    @classmethod
    def coerce(cls, options: Union["GeneratorOptions", Dict[str, Any], None]) -> "GeneratorOptions":
        """Accept GeneratorOptions, a plain dict, or None."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls(**options)


def escape_string(value: str) -> str:
    """Escape a string for use between double quotes."""
    return _NAME_ESCAPE_RE.sub(lambda m: _NAME_ESCAPES[m.group(0)], value)


def escape_regex(pattern: str) -> str:
    """Escape unescaped forward slashes so the pattern fits between / /."""
    return _REGEX_SLASH_RE.sub(lambda m: "\\/" if m.group(0) == "/" else m.group(0), pattern)


def _plain(value: float) -> str:
    # repr() gives the shortest round-tripping digits; Decimal drops the exponent
    return format(Decimal(repr(float(value))), "f")


def format_number(value: float) -> str:
    """Integers without a fraction, everything else in shortest form."""
    if float(value).is_integer():
        return str(int(value))
    return _plain(value)


def format_time(value: float) -> str:
    """
    Entry times always carry a fractional part: 0.0, 12.0, 12.5.

    Times with more than one fractional digit keep them (12.25 stays 12.25)
    rather than being cut to one digit; a rounded time would not parse back
    to the same value.
    """
    if float(value).is_integer():
        return f"{value:.1f}"
    return _plain(value)


class Generator:
    """
    Emits canonical timeline text for a Program.

    Usage:
        text = Generator(program).generate()
    """

    def __init__(self, program: Program, options: Optional[GeneratorOptions] = None):
        self.program = program
        self.options = GeneratorOptions.coerce(options)
        if self.options.target not in TARGETS:
            raise ValueError(f"Unsupported generator target: {self.options.target!r}")

        self._statement_handlers: Dict[NodeType, Callable[[Any], str]] = {
            NodeType.ENTRY: self.generate_entry,
            NodeType.HIDE_ALL: self.generate_hideall,
        }

    def generate(self) -> str:
        if getattr(self.program, "node_type", None) != NodeType.PROGRAM:
            raise UnsupportedNodeError(f"Invalid AST root: {type(self.program).__name__}", self.program)
        return "\n".join(self.generate_statement(stmt) for stmt in self.program.body)

    def generate_statement(self, stmt: ASTNode) -> str:
        node_type = getattr(stmt, "node_type", None)
        handler = self._statement_handlers.get(node_type)
        if handler is None:
            name = node_type.value if node_type else type(stmt).__name__
            raise UnsupportedNodeError(f"Unsupported statement type: {name}", stmt)
        return handler(stmt)

    def generate_hideall(self, stmt: HideAllStatement) -> str:
        return f'hideall "{self._string(stmt.name)}"'

    def generate_entry(self, stmt: Entry) -> str:
        parts = [f'{format_time(stmt.time.value)} "{self._string(stmt.name)}"']

        if stmt.sync is not None:
            parts.append(self._sync(stmt.sync))
        if stmt.duration is not None:
            parts.append(f"duration {format_number(stmt.duration.time.value)}")
        if stmt.window is not None:
            parts.append(self._window(stmt.window))
        if stmt.jump is not None:
            parts.append(f"jump {format_number(stmt.jump.time.value)}")

        return " ".join(parts)

    @staticmethod
    def _string(literal: StringLiteral) -> str:
        return escape_string(literal.value)

    def _sync(self, sync: Union[SyncStatement, NetSyncStatement]) -> str:
        if sync.node_type == NodeType.SYNC:
            return f"sync /{escape_regex(sync.regex.pattern)}/"
        if sync.node_type == NodeType.NET_SYNC:
            if not sync.fields:
                return f"{sync.sync_type} {{}}"
            fields = ", ".join(f"{key}: {self._field_value(value)}" for key, value in sync.fields)
            return f"{sync.sync_type} {{ {fields} }}"
        raise UnsupportedNodeError(f"Unsupported sync type: {sync.node_type.value}", sync)

    def _field_value(self, value: Union[StringLiteral, NumericLiteral]) -> str:
        if value.node_type == NodeType.NUMERIC_LITERAL:
            return format_number(value.value)
        return f'"{self._string(value)}"'

    @staticmethod
    def _window(window: WindowStatement) -> str:
        before = window.before.value
        if window.after is not None and window.after.value != before:
            return f"window {format_number(before)},{format_number(window.after.value)}"
        return f"window {format_number(before)}"


def generate(program: Program, options: Union[GeneratorOptions, Dict[str, Any], None] = None) -> str:
    """Convenience function to render a Program."""
    return Generator(program, GeneratorOptions.coerce(options)).generate()
