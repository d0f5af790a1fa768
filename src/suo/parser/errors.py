"""
Errors raised by the timeline lexer, parser and generator.

All of them are fatal: there is no recovery and no partial result.
"""


class TimelineError(Exception):
    """Base class for every timeline pipeline error."""
    line: int = 0
    column: int = 0
    message: str = ""


class LexicalError(TimelineError):
    """No lexer rule matched the remaining input."""
    def __init__(self, message: str, token=None):
        self.token = token
        self.message = message
        self.line = token.line if token else 0
        self.column = token.column if token else 0
        super().__init__(f"Lexer error at line {self.line}, column {self.column}: {message}")


class TimelineSyntaxError(TimelineError):
    """A required token had the wrong kind or value."""
    def __init__(self, message: str, token=None):
        self.token = token
        self.message = message
        if token:
            self.line = token.line
            self.column = token.column
            super().__init__(f"Parse error at line {token.line}, column {token.column}: {message}")
        else:
            super().__init__(f"Parse error: {message}")


class UnsupportedNodeError(TimelineError):
    """The generator was asked to render a node kind it does not implement."""
    def __init__(self, message: str, node=None):
        self.node = node
        self.message = message
        span = getattr(node, "span", None)
        if span is not None:
            self.line = span.line
            self.column = span.column
        super().__init__(message)
