"""Error types for errtax with source location context."""

from __future__ import annotations


class ErrtaxError(Exception):
    """Base error with optional source location."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.message = message
        self.line = line
        self.column = column
        loc = ""
        if line is not None:
            loc = f" (line {line}"
            if column is not None:
                loc += f", col {column}"
            loc += ")"
        super().__init__(f"{message}{loc}")


class ParseError(ErrtaxError):
    """Raised when a taxonomy source cannot be parsed."""


class MalformedEntry(ParseError):
    """A single list entry does not match the grammar.

    ``expected`` names the construct the parser was looking for when it
    hit the offending token.
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        expected: str | None = None,
    ):
        self.expected = expected
        super().__init__(message, line=line, column=column)


class MalformedKindEntry(MalformedEntry):
    """Raised for a kind entry that is not ``Name = ("msg", code, "desc")``."""


class MalformedErrorEntry(MalformedEntry):
    """Raised for an error entry that is not ``Name = kind.path``."""


class ValidationError(ErrtaxError):
    """A lint finding on a parsed taxonomy."""


class CompileError(ErrtaxError):
    """Raised when emitting or loading generated code fails."""


class ConversionError(ErrtaxError):
    """Raised when an error cannot be serialized into an ``origin`` detail."""
