"""
Timeline Script Parser

Converts the lexer's token stream into a Program AST. Dispatch looks at a
single token (peek) and never backtracks; the first structural mismatch
aborts the whole parse.
"""

import logging
from typing import List, Optional, Tuple, Union

from suo.parser.errors import LexicalError, TimelineSyntaxError
from suo.parser.lexer import Lexer, Token, TokenType
from suo.parser.location import Position, SourceLocation, Span
from suo.parser.nodes import (
    AlertAllStatement,
    BeforeStatement,
    CommentLine,
    DefineStatement,
    DurationStatement,
    Entry,
    HideAllStatement,
    JumpStatement,
    NetSyncStatement,
    NumericLiteral,
    Program,
    RegExpLiteral,
    SoundStatement,
    Statement,
    StringLiteral,
    SyncStatement,
    WindowStatement,
)

logger = logging.getLogger(__name__)


def _describe(token: Token) -> str:
    if token.type == TokenType.EOF:
        return "end of file"
    return f"{token.type.name} {token.raw!r}"


class Parser:
    """
    Parser for timeline scripts.

    Usage:
        parser = Parser(Lexer(source_text))
        program = parser.parse()
    """

    ENTRY_MODIFIERS = ("sync", "window", "jump", "duration")

    def __init__(self, lexer: Lexer, source_file: Optional[str] = None, source_type: str = "module"):
        self.lexer = lexer
        self.source_file = source_file if source_file is not None else lexer.filename
        self.source_type = source_type
        self.log_types = frozenset(lexer.log_types)

        self.statements: List[Statement] = []
        self.comments: List[CommentLine] = []

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _comment(token: Token) -> CommentLine:
        return CommentLine(span=token.span, value=token.value, raw=token.raw)

    def _peek(self) -> Token:
        """Peek the next token, moving any comments in the way to self.comments."""
        token = self.lexer.peek_token()
        while token.type == TokenType.COMMENT:
            self.comments.append(self._comment(self.lexer.next_token()))
            token = self.lexer.peek_token()
        return token

    def _advance(self) -> Token:
        self._peek()
        return self.lexer.next_token()

    def _expect(self, token_type: TokenType, message: str = None) -> Token:
        """Consume the next token, raise if it is not of token_type."""
        token = self._advance()
        if token.type == TokenType.UNKNOWN:
            raise LexicalError(f"Unrecognized input {token.raw[:20]!r}", token)
        if token.type != token_type:
            raise TimelineSyntaxError(
                message or f"Expected {token_type.name}, got {_describe(token)}",
                token,
            )
        return token

    def _expect_value(self, token_type: TokenType, value: str) -> Token:
        token = self._expect(token_type, f"Expected {value!r}")
        if token.value != value:
            raise TimelineSyntaxError(f"Expected {value!r}, got {token.raw!r}", token)
        return token

    @staticmethod
    def _string(token: Token) -> StringLiteral:
        return StringLiteral(span=token.span, value=token.value, raw=token.raw)

    @staticmethod
    def _number(token: Token) -> NumericLiteral:
        return NumericLiteral(span=token.span, value=float(token.value), raw=token.raw)

    # ------------------------------------------------------------------
    # Program
    # ------------------------------------------------------------------

    def parse(self) -> Program:
        """Parse the whole token stream into a Program."""
        while self.lexer.has_next_token():
            stmt = self.parse_statement()
            if stmt is None:
                token = self.lexer.peek_token()
                if token.type == TokenType.EOF:
                    break
                raise TimelineSyntaxError(f"Unexpected {_describe(token)}", token)
            if isinstance(stmt, CommentLine):
                self.comments.append(stmt)
            else:
                self.statements.append(stmt)

        end = Position(self.lexer.line, self.lexer.column)
        logger.debug(
            f"Parsed {self.source_file}: {len(self.statements)} statements, {len(self.comments)} comments"
        )
        return Program(
            span=Span(0, self.lexer.pos, SourceLocation(Position(1, 0), end)),
            body=tuple(self.statements),
            comments=tuple(self.comments),
            source_file=self.source_file,
            source_type=self.source_type,
        )

    def parse_statement(self) -> Optional[Union[Statement, CommentLine]]:
        """
        Parse one top-level statement.

        Returns None when the next token cannot start a statement; the caller
        decides whether that is an error.
        """
        token = self.lexer.peek_token()

        if token.type == TokenType.COMMENT:
            return self._comment(self.lexer.next_token())

        if token.type == TokenType.UNKNOWN:
            raise LexicalError(f"Unrecognized input {token.raw[:20]!r}", token)

        if token.type == TokenType.KEYWORD:
            if token.value == "hideall":
                return self.parse_hideall_statement()
            if token.value == "alertall":
                return self.parse_alertall_statement()
            if token.value == "define":
                return self.parse_define_statement()
            return None

        if token.type == TokenType.NUMERIC_LITERAL:
            return self.parse_entry()

        return None

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def parse_hideall_statement(self) -> HideAllStatement:
        keyword = self._expect_value(TokenType.KEYWORD, "hideall")
        name = self._expect(TokenType.STRING_LITERAL, "hideall must be followed by a string")
        return HideAllStatement(span=keyword.span.to(name.span), name=self._string(name))

    def parse_alertall_statement(self) -> AlertAllStatement:
        keyword = self._expect_value(TokenType.KEYWORD, "alertall")
        name = self._expect(TokenType.STRING_LITERAL, "alertall must be followed by a string")
        last = name

        before = None
        sound = None
        while True:
            token = self._peek()
            if token.type != TokenType.KEYWORD or token.value not in ("before", "sound"):
                break
            self._advance()
            if token.value == "before":
                value = self._expect(TokenType.NUMERIC_LITERAL, "before must be followed by a number")
                before = BeforeStatement(span=token.span.to(value.span), time=self._number(value))
            else:
                value = self._expect(TokenType.STRING_LITERAL, "sound must be followed by a string")
                sound = SoundStatement(span=token.span.to(value.span), file=self._string(value))
            last = value

        return AlertAllStatement(
            span=keyword.span.to(last.span),
            name=self._string(name),
            before=before,
            sound=sound,
        )

    def parse_define_statement(self) -> DefineStatement:
        keyword = self._expect_value(TokenType.KEYWORD, "define")
        define_type = self._expect(TokenType.IDENTIFIER, "define must be followed by alertsound")
        if define_type.value != "alertsound":
            raise TimelineSyntaxError(
                f"Unsupported define type {define_type.value!r}, expected 'alertsound'",
                define_type,
            )
        name = self._expect(TokenType.STRING_LITERAL, "define alertsound expects a name string")
        file = self._expect(TokenType.STRING_LITERAL, "define alertsound expects a file string")
        return DefineStatement(
            span=keyword.span.to(file.span),
            name=self._string(name),
            file=self._string(file),
            define_type=define_type.value,
        )

    def parse_entry(self) -> Entry:
        time = self._expect(TokenType.NUMERIC_LITERAL, "Entry must start with a time")
        name = self._expect(TokenType.STRING_LITERAL, "Entry time must be followed by a name string")
        span = time.span.to(name.span)

        modifiers = {}
        while True:
            token = self._peek()
            if token.type != TokenType.KEYWORD:
                break
            if token.value in self.log_types:
                stmt = self.parse_net_sync_statement()
                modifiers["sync"] = stmt
            elif token.value == "sync":
                stmt = self.parse_sync_statement()
                modifiers["sync"] = stmt
            elif token.value == "window":
                stmt = self.parse_window_statement()
                modifiers["window"] = stmt
            elif token.value == "jump":
                stmt = self.parse_jump_statement()
                modifiers["jump"] = stmt
            elif token.value == "duration":
                stmt = self.parse_duration_statement()
                modifiers["duration"] = stmt
            else:
                break
            span = span.to(stmt.span)

        return Entry(span=span, time=self._number(time), name=self._string(name), **modifiers)

    # ------------------------------------------------------------------
    # Entry modifiers
    # ------------------------------------------------------------------

    def parse_sync_statement(self) -> SyncStatement:
        keyword = self._expect_value(TokenType.KEYWORD, "sync")
        regex = self._expect(TokenType.REGULAR_EXPRESSION, "sync must be followed by a /regex/")
        return SyncStatement(
            span=keyword.span.to(regex.span),
            regex=RegExpLiteral(span=regex.span, pattern=regex.value, raw=regex.raw),
        )

    def parse_net_sync_statement(self) -> NetSyncStatement:
        """<LogType> { key: "value", key: 123 }"""
        keyword = self._expect(TokenType.KEYWORD)
        if keyword.value not in self.log_types:
            raise TimelineSyntaxError(f"Unknown log line type {keyword.value!r}", keyword)
        self._expect_value(TokenType.BRACE, "{")

        fields: List[Tuple[str, Union[StringLiteral, NumericLiteral]]] = []
        while True:
            token = self._peek()
            if token.type == TokenType.IDENTIFIER:
                key = self._advance()
                self._expect_value(TokenType.PUNCTUATOR, ":")
                value = self._advance()
                if value.type == TokenType.STRING_LITERAL:
                    fields.append((key.value, self._string(value)))
                elif value.type == TokenType.NUMERIC_LITERAL:
                    fields.append((key.value, self._number(value)))
                elif value.type == TokenType.UNKNOWN:
                    raise LexicalError(f"Unrecognized input {value.raw[:20]!r}", value)
                else:
                    raise TimelineSyntaxError(
                        f"Expected string or number for field {key.value!r}, got {_describe(value)}",
                        value,
                    )

            token = self._advance()
            if token.type == TokenType.BRACE and token.value == "}":
                break
            if token.type == TokenType.PUNCTUATOR and token.value == ",":
                continue
            if token.type == TokenType.UNKNOWN:
                raise LexicalError(f"Unrecognized input {token.raw[:20]!r}", token)
            raise TimelineSyntaxError(f"Expected ',' or '}}', got {_describe(token)}", token)

        return NetSyncStatement(
            span=keyword.span.to(token.span),
            sync_type=keyword.value,
            fields=tuple(fields),
        )

    def parse_window_statement(self) -> WindowStatement:
        keyword = self._expect_value(TokenType.KEYWORD, "window")
        before = self._expect(TokenType.NUMERIC_LITERAL, "window must be followed by a number")

        after = None
        token = self._peek()
        if token.type == TokenType.PUNCTUATOR and token.value == ",":
            self._advance()
            after = self._expect(TokenType.NUMERIC_LITERAL, "window ',' must be followed by a number")

        return WindowStatement(
            span=keyword.span.to((after or before).span),
            before=self._number(before),
            after=self._number(after) if after else None,
        )

    def parse_jump_statement(self) -> JumpStatement:
        keyword = self._expect_value(TokenType.KEYWORD, "jump")
        time = self._expect(TokenType.NUMERIC_LITERAL, "jump must be followed by a number")
        return JumpStatement(span=keyword.span.to(time.span), time=self._number(time))

    def parse_duration_statement(self) -> DurationStatement:
        keyword = self._expect_value(TokenType.KEYWORD, "duration")
        time = self._expect(TokenType.NUMERIC_LITERAL, "duration must be followed by a number")
        return DurationStatement(span=keyword.span.to(time.span), time=self._number(time))


def parse_source(source: str, filename: str = "<unknown>", **lexer_kwargs) -> Program:
    """
    Parse timeline text into a Program.

    Args:
        source: Timeline text
        filename: For error messages and Program.source_file
        lexer_kwargs: keywords / log_types tables for the Lexer

    Raises:
        LexicalError, TimelineSyntaxError
    """
    lexer = Lexer(source, filename, **lexer_kwargs)
    return Parser(lexer).parse()


def parse_file(filepath: str, **lexer_kwargs) -> Program:
    """Parse a UTF-8 timeline file (a leading BOM is dropped)."""
    with open(filepath, "r", encoding="utf-8-sig") as f:
        source = f.read()
    return parse_source(source, str(filepath), **lexer_kwargs)
