"""
Timeline Script Lexer (Tokenizer)

Converts raw timeline text into a stream of tokens.
Handles: whitespace, comments, punctuators, braces, numbers, strings,
regular expressions, keywords, identifiers.

Classification is table driven: at each offset the rules are tried in
order and the first match wins. Order is the tie-break, so the more
specific rules come first.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Iterable, Iterator, List, Optional, Pattern, Tuple

from suo.log_types import DEFAULT_KEYWORDS, LOG_LINE_TYPES
from suo.parser.location import Position, SourceLocation, Span


class TokenType(Enum):
    """Types of tokens in a timeline script."""
    EOF = auto()                 # End of input, returned repeatedly
    KEYWORD = auto()             # sync, window, hideall, Ability, ...
    IDENTIFIER = auto()          # alertsound, id, source
    STRING_LITERAL = auto()      # "quoted" or 'quoted'
    NUMERIC_LITERAL = auto()     # 0, 12, 10.5, .5
    PUNCTUATOR = auto()          # , :
    BRACE = auto()               # { }
    COMMENT = auto()             # # comment to end of line
    REGULAR_EXPRESSION = auto()  # /pattern/
    WHITESPACE = auto()          # spaces, tabs, newlines
    UNKNOWN = auto()             # no rule matched; terminal


@dataclass(frozen=True)
class Token:
    """A single token from the lexer."""
    type: TokenType
    value: str
    span: Span
    raw: str

    @property
    def start(self) -> int:
        return self.span.start

    @property
    def end(self) -> int:
        return self.span.end

    @property
    def line(self) -> int:
        return self.span.loc.start.line

    @property
    def column(self) -> int:
        return self.span.loc.start.column

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, L{self.line}:{self.column})"


_STRING_ESCAPES = {'"': '"', "'": "'", "n": "\n", "t": "\t", "r": "\r"}
_STRING_ESCAPE_RE = re.compile(r"""\\(["'ntr])""")
_REGEX_ESCAPE_RE = re.compile(r"\\(.)")


def _decode_string(match) -> str:
    """Strip the delimiter quotes and decode the supported escapes."""
    body = match.group(0)[1:-1]
    return _STRING_ESCAPE_RE.sub(lambda m: _STRING_ESCAPES[m.group(1)], body)


def _decode_regex(match) -> str:
    """Pattern text without slashes; only the delimiter escape is removed."""
    return _REGEX_ESCAPE_RE.sub(
        lambda m: "/" if m.group(1) == "/" else m.group(0), match.group(1)
    )


def _lexeme(match) -> str:
    return match.group(0)


Rule = Tuple[Pattern, TokenType, Callable]

# Keywords are inserted between the regex rule and the identifier rule
# per Lexer instance, since the keyword table is configurable.
_RULES_BEFORE_KEYWORDS: List[Rule] = [
    (re.compile(r"[ \t\n]+"), TokenType.WHITESPACE, _lexeme),
    (re.compile(r"#([^\n]*)"), TokenType.COMMENT, lambda m: m.group(1)),
    (re.compile(r"[,:]"), TokenType.PUNCTUATOR, _lexeme),
    (re.compile(r"[{}]"), TokenType.BRACE, _lexeme),
    (re.compile(r"[1-9][0-9]*(?:\.[0-9]+)?|0?\.[0-9]+|0"), TokenType.NUMERIC_LITERAL, _lexeme),
    (re.compile(r"""".*?(?<!\\)"|'.*?(?<!\\)'"""), TokenType.STRING_LITERAL, _decode_string),
    (
        re.compile(r"/((?![*+?])(?:[^\r\n\[/\\]|\\.|\[(?:[^\r\n\]\\]|\\.)*\])+)/"),
        TokenType.REGULAR_EXPRESSION,
        _decode_regex,
    ),
]

_IDENTIFIER_RULE: Rule = (re.compile(r"\w+"), TokenType.IDENTIFIER, _lexeme)


def _keyword_pattern(words: Iterable[str]) -> Pattern:
    # Longest first so a prefix never shadows a longer keyword
    ordered = sorted(set(words), key=len, reverse=True)
    return re.compile("(?:" + "|".join(re.escape(w) for w in ordered) + r")\b")


class Lexer:
    """
    Tokenizer for timeline scripts.

    The keyword table and the log line type table are configuration; log
    line types are recognized as keywords too.

    Usage:
        lexer = Lexer(source_text)
        while lexer.has_next_token():
            token = lexer.next_token()
    """

    def __init__(self, source: str, filename: str = "<unknown>",
                 keywords: Iterable[str] = DEFAULT_KEYWORDS,
                 log_types: Iterable[str] = LOG_LINE_TYPES):
        if source.startswith("\ufeff"):
            source = source[1:]
        self.source = re.sub(r"\r\n?", "\n", source)
        self.filename = filename
        self.keywords = tuple(keywords)
        self.log_types = tuple(log_types)
        self.pos = 0
        self.line = 1
        self.column = 0
        self.length = len(self.source)

        self._pending: Optional[Token] = None
        self._rules: List[Rule] = list(_RULES_BEFORE_KEYWORDS)
        # An empty alternation would match zero characters at every word boundary
        if self.keywords or self.log_types:
            self._rules.append(
                (_keyword_pattern(self.keywords + self.log_types), TokenType.KEYWORD, _lexeme)
            )
        self._rules.append(_IDENTIFIER_RULE)

    def _position(self) -> Position:
        return Position(self.line, self.column)

    def _scan(self) -> Token:
        """Match one token at the current offset and advance past it."""
        if self.pos >= self.length:
            here = self._position()
            return Token(TokenType.EOF, "", Span(self.pos, self.pos, SourceLocation(here, here)), "")

        for pattern, token_type, decode in self._rules:
            match = pattern.match(self.source, self.pos)
            if not match:
                continue

            text = match.group(0)
            start = self._position()
            newlines = text.count("\n")
            if newlines:
                self.line += newlines
                self.column = len(text) - text.rfind("\n") - 1
            else:
                self.column += len(text)
            span = Span(self.pos, self.pos + len(text), SourceLocation(start, self._position()))
            self.pos += len(text)
            return Token(token_type, decode(match), span, text)

        # Zero width: the lexer cannot make progress past this point
        here = self._position()
        return Token(
            TokenType.UNKNOWN, "",
            Span(self.pos, self.pos, SourceLocation(here, here)),
            self.source[self.pos:],
        )

    def next_token_with_whitespace(self) -> Token:
        """Return the next token, including whitespace tokens."""
        if self._pending is not None:
            token = self._pending
            self._pending = None
            return token
        return self._scan()

    def next_token(self) -> Token:
        """Return the next non-whitespace token (comments included)."""
        token = self.next_token_with_whitespace()
        while token.type == TokenType.WHITESPACE:
            token = self.next_token_with_whitespace()
        return token

    def peek_token(self) -> Token:
        """Return the next non-whitespace token without consuming it."""
        if self._pending is None:
            self._pending = self.next_token()
        return self._pending

    def has_next_token(self) -> bool:
        if self._pending is not None and self._pending.type != TokenType.EOF:
            return True
        return self.pos < self.length

    def all_tokens(self) -> List[Token]:
        """Every token of the input, whitespace included, EOF excluded."""
        if self.pos != 0 or self.line != 1 or self.column != 0 or self._pending is not None:
            raise RuntimeError("Lexer is not at the beginning of the source")
        tokens = []
        while self.has_next_token():
            token = self.next_token_with_whitespace()
            tokens.append(token)
            if token.type == TokenType.UNKNOWN:
                break
        return tokens

    def tokenize(self, include_comments: bool = True, include_whitespace: bool = False) -> Iterator[Token]:
        """
        Generate tokens up to and including EOF.

        Stops after an UNKNOWN token, which never advances the offset.

        Args:
            include_comments: If True, emit COMMENT tokens. Otherwise skip them.
            include_whitespace: If True, emit WHITESPACE tokens. Otherwise skip them.
        """
        while True:
            if include_whitespace:
                token = self.next_token_with_whitespace()
            else:
                token = self.next_token()

            if token.type == TokenType.COMMENT and not include_comments:
                continue

            yield token
            if token.type in (TokenType.EOF, TokenType.UNKNOWN):
                break

    def tokenize_all(self, include_comments: bool = True, include_whitespace: bool = False) -> List[Token]:
        """Convenience method to get all tokens as a list."""
        return list(self.tokenize(include_comments, include_whitespace))


def tokenize_file(filepath: str, **kwargs) -> List[Token]:
    """Tokenize a UTF-8 file (a leading BOM is dropped) and return all tokens."""
    lexer_kwargs = {k: kwargs.pop(k) for k in ("keywords", "log_types") if k in kwargs}
    with open(filepath, "r", encoding="utf-8-sig") as f:
        source = f.read()

    lexer = Lexer(source, filename=str(filepath), **lexer_kwargs)
    return lexer.tokenize_all(**kwargs)
