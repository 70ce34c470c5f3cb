"""
Error taxonomy for the documentation extractor.

Every parse error is terminal for the file being parsed.  Declaration
sub-parsers raise without a location; :class:`~gddoc.parser.document_parser.DocumentParser`
attaches the file name and 1-based line number via :meth:`GdDocError.locate`
before re-raising.
"""
from __future__ import annotations

from typing import Optional


class GdDocError(Exception):
    """Base class for all errors raised by gddoc."""

    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        lineno: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.filename = filename
        self.lineno = lineno

    def locate(self, filename: str, lineno: int) -> GdDocError:
        """Fill in the location unless one is already known."""
        if self.filename is None:
            self.filename = filename
        if self.lineno is None:
            self.lineno = lineno
        return self

    def __str__(self) -> str:
        if self.filename is None:
            return self.message
        if self.lineno is None:
            return f"Failed to parse {self.filename}: {self.message}"
        return f"Failed to parse {self.filename}, line {self.lineno}: {self.message}"


class BracketMismatchError(GdDocError):
    """A closing bracket does not match the innermost opener, or has none."""


class UnterminatedContinuationError(GdDocError):
    """End of input while a ``\\`` continuation still expects a line."""


class IndentationExpectedError(GdDocError):
    """A block body is not indented deeper than its header."""


class InvalidDeclarationSyntaxError(GdDocError):
    """A declaration header does not match its grammar."""


class ParserInternalError(GdDocError):
    """The mode stack reached a shape the state machine never builds."""


class ConfigError(GdDocError):
    """Invalid configuration file or option value."""
