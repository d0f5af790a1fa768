"""
Timeline AST node types.

Every node is an immutable dataclass carrying the Span it was parsed from.
The concrete kind is exposed as the class-level `node_type` discriminant,
which the generator and the serializer dispatch on.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union

from suo.parser.location import Span


class NodeType(Enum):
    """Types of AST nodes. Values match the node type names of the format."""
    PROGRAM = "Program"
    COMMENT_LINE = "CommentLine"
    STRING_LITERAL = "StringLiteral"
    NUMERIC_LITERAL = "NumericLiteral"
    REGEXP_LITERAL = "RegExpLiteral"
    HIDE_ALL = "HideAllStatement"
    ALERT_ALL = "AlertAllStatement"
    DEFINE = "DefineStatement"
    SYNC = "SyncStatement"
    NET_SYNC = "NetSyncStatement"
    WINDOW = "WindowStatement"
    JUMP = "JumpStatement"
    DURATION = "DurationStatement"
    BEFORE = "BeforeStatement"
    SOUND = "SoundStatement"
    ENTRY = "Entry"


@dataclass(frozen=True)
class ASTNode:
    """Base class for AST nodes."""
    node_type: ClassVar[NodeType]
    span: Span


@dataclass(frozen=True)
class CommentLine(ASTNode):
    """A `# ...` comment; value excludes the leading `#`."""
    node_type: ClassVar[NodeType] = NodeType.COMMENT_LINE
    value: str
    raw: str


@dataclass(frozen=True)
class StringLiteral(ASTNode):
    node_type: ClassVar[NodeType] = NodeType.STRING_LITERAL
    value: str
    raw: str


@dataclass(frozen=True)
class NumericLiteral(ASTNode):
    node_type: ClassVar[NodeType] = NodeType.NUMERIC_LITERAL
    value: float
    raw: str


@dataclass(frozen=True)
class RegExpLiteral(ASTNode):
    node_type: ClassVar[NodeType] = NodeType.REGEXP_LITERAL
    pattern: str
    raw: str
    flags: str = ""


@dataclass(frozen=True)
class SyncStatement(ASTNode):
    """sync /regex/"""
    node_type: ClassVar[NodeType] = NodeType.SYNC
    regex: RegExpLiteral


@dataclass(frozen=True)
class NetSyncStatement(ASTNode):
    """<LogType> { key: value, ... } - a structured sync on a log line type."""
    node_type: ClassVar[NodeType] = NodeType.NET_SYNC
    sync_type: str
    fields: Tuple[Tuple[str, Union[StringLiteral, NumericLiteral]], ...] = ()

    def get(self, key: str) -> Optional[Union[StringLiteral, NumericLiteral]]:
        """Value literal for a field key, last occurrence wins."""
        found = None
        for name, value in self.fields:
            if name == key:
                found = value
        return found


@dataclass(frozen=True)
class WindowStatement(ASTNode):
    """window <before>[,<after>]; after is None when the window is symmetric."""
    node_type: ClassVar[NodeType] = NodeType.WINDOW
    before: NumericLiteral
    after: Optional[NumericLiteral] = None


@dataclass(frozen=True)
class JumpStatement(ASTNode):
    node_type: ClassVar[NodeType] = NodeType.JUMP
    time: NumericLiteral


@dataclass(frozen=True)
class DurationStatement(ASTNode):
    node_type: ClassVar[NodeType] = NodeType.DURATION
    time: NumericLiteral


@dataclass(frozen=True)
class BeforeStatement(ASTNode):
    node_type: ClassVar[NodeType] = NodeType.BEFORE
    time: NumericLiteral


@dataclass(frozen=True)
class SoundStatement(ASTNode):
    node_type: ClassVar[NodeType] = NodeType.SOUND
    file: StringLiteral


@dataclass(frozen=True)
class HideAllStatement(ASTNode):
    """hideall "<name>" - suppress display for the named entries."""
    node_type: ClassVar[NodeType] = NodeType.HIDE_ALL
    name: StringLiteral


@dataclass(frozen=True)
class AlertAllStatement(ASTNode):
    """alertall "<name>" [before <n>] [sound "<file>"]"""
    node_type: ClassVar[NodeType] = NodeType.ALERT_ALL
    name: StringLiteral
    before: Optional[BeforeStatement] = None
    sound: Optional[SoundStatement] = None


@dataclass(frozen=True)
class DefineStatement(ASTNode):
    """define alertsound "<name>" "<file>" - only alertsound exists."""
    node_type: ClassVar[NodeType] = NodeType.DEFINE
    name: StringLiteral
    file: StringLiteral
    define_type: str = "alertsound"


@dataclass(frozen=True)
class Entry(ASTNode):
    """
    A timed event: at `time`, the event `name` happens.

    Each modifier is optional and appears at most once; sync holds either a
    regex SyncStatement or a NetSyncStatement.
    """
    node_type: ClassVar[NodeType] = NodeType.ENTRY
    time: NumericLiteral
    name: StringLiteral
    sync: Optional[Union[SyncStatement, NetSyncStatement]] = None
    window: Optional[WindowStatement] = None
    duration: Optional[DurationStatement] = None
    jump: Optional[JumpStatement] = None


Statement = Union[HideAllStatement, AlertAllStatement, DefineStatement, Entry]


@dataclass(frozen=True)
class Program(ASTNode):
    """Root of the AST. Comments are kept apart from the statement body."""
    node_type: ClassVar[NodeType] = NodeType.PROGRAM
    body: Tuple[Statement, ...] = ()
    comments: Tuple[CommentLine, ...] = ()
    source_file: str = ""
    source_type: str = "module"

    def __repr__(self):
        return f"Program({self.source_file or '<unknown>'}, {len(self.body)} statements)"

    def entries(self):
        """All timeline entries in source order."""
        return [s for s in self.body if s.node_type == NodeType.ENTRY]
