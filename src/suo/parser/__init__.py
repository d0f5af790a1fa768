"""
suo.parser - Timeline Script Parser

Lexer, parser and generator for raid timeline scripts.
Converts timeline text into an Abstract Syntax Tree (AST) and back.
"""

from suo.parser.errors import TimelineError, LexicalError, TimelineSyntaxError, UnsupportedNodeError
from suo.parser.lexer import Lexer, Token, TokenType, tokenize_file
from suo.parser.location import Position, SourceLocation, Span
from suo.parser.parser import Parser, parse_source, parse_file
from suo.parser.generator import Generator, GeneratorOptions, generate
from suo.parser.nodes import (
    # AST Node types
    ASTNode,
    NodeType,
    Program,
    CommentLine,
    StringLiteral,
    NumericLiteral,
    RegExpLiteral,
    HideAllStatement,
    AlertAllStatement,
    DefineStatement,
    SyncStatement,
    NetSyncStatement,
    WindowStatement,
    JumpStatement,
    DurationStatement,
    BeforeStatement,
    SoundStatement,
    Entry,
)

__all__ = [
    # Errors
    "TimelineError",
    "LexicalError",
    "TimelineSyntaxError",
    "UnsupportedNodeError",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "tokenize_file",
    "Position",
    "SourceLocation",
    "Span",
    # Parser
    "Parser",
    "parse_source",
    "parse_file",
    # Generator
    "Generator",
    "GeneratorOptions",
    "generate",
    # AST Nodes
    "ASTNode",
    "NodeType",
    "Program",
    "CommentLine",
    "StringLiteral",
    "NumericLiteral",
    "RegExpLiteral",
    "HideAllStatement",
    "AlertAllStatement",
    "DefineStatement",
    "SyncStatement",
    "NetSyncStatement",
    "WindowStatement",
    "JumpStatement",
    "DurationStatement",
    "BeforeStatement",
    "SoundStatement",
    "Entry",
]
