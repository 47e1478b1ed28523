"""
Parse Errors
Typed failures raised by the httpd.conf parser. Every error carries a
message and, where it can be determined, a 1-based line/column locator.
"""

from typing import Optional


class ParseError(ValueError):
    """Base class for all httpd.conf parse failures."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        if self.column is None:
            return f"{self.message} (line {self.line})"
        return f"{self.message} (line {self.line}, column {self.column})"

    def to_dict(self) -> dict:
        return {
            "type": type(self).__name__,
            "message": self.message,
            "line": self.line,
            "column": self.column,
        }


class MalformedDirective(ParseError):
    """A directive name without arguments, or an argument that cannot be tokenized."""


class MalformedBlockHeader(ParseError):
    """Opening tag attributes do not match the header grammar of the block kind."""


class UnterminatedBlock(ParseError):
    """An opening tag with no closing tag before end of input."""


class UnexpectedToken(ParseError):
    """No alternative of the entry grammar matches at this position."""
