"""
plclex Error Hierarchy
======================

This module defines the exception hierarchy for plclex. All exceptions
inherit from PlcError, allowing callers to catch every library error with
a single except clause if desired.

Exception Hierarchy
-------------------
PlcError (base)
├── LexError - malformed input found while lexing
│   ├── UnterminatedLiteralError - string/character literal never closed
│   ├── InvalidEscapeSequenceError - backslash followed by an unknown letter
│   ├── UnexpectedCharacterError - character that no token rule accepts
│   └── EmptyLiteralError - character literal with nothing between quotes
└── UnknownPatternError - lookup of an unknown validation pattern

Error Message Format
--------------------
Lexical errors carry the 0-based offset of the first offending character
(the source length when the input ended too early) and format as:

    filename:line:column: error: description
        source_line_text
                ^ (pointer to error location)
    hint: suggestion for fixing
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class PlcError(Exception):
    """
    Base exception for all plclex errors.

        try:
            tokens = lex(source)
        except PlcError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source text for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"

    @classmethod
    def from_offset(
        cls,
        source: str,
        offset: int,
        filename: str = "<input>",
    ) -> "SourceLocation":
        """
        Convert a 0-based character offset into a line/column location.

        Only newline characters start a new line. An offset equal to the
        source length (end of input) is valid and points just past the
        last character.
        """
        offset = max(0, min(offset, len(source)))
        line = source.count("\n", 0, offset) + 1
        line_start = source.rfind("\n", 0, offset) + 1
        return cls(filename, line, offset - line_start + 1)


def source_line_at(source: str, offset: int) -> str:
    """Return the text of the line containing offset, without its newline."""
    offset = max(0, min(offset, len(source)))
    line_start = source.rfind("\n", 0, offset) + 1
    line_end = source.find("\n", offset)
    if line_end == -1:
        line_end = len(source)
    return source[line_start:line_end].rstrip("\r")


# =============================================================================
# Lexical Errors
# =============================================================================

class LexError(PlcError):
    """
    Malformed input found while lexing.

    Attributes:
        message: The error description
        offset: Index of the first offending character in the source
        location: Line/column form of offset (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text of the offending line (optional)
    """

    def __init__(
        self,
        message: str,
        offset: int,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.offset = offset
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            prog.plc:2:7: error: unterminated string literal
                print("hello
                            ^
            hint: add a closing '"' to complete the string
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message} (at offset {self.offset})")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnterminatedLiteralError(LexError):
    """
    String or character literal not closed.

    Raised when a literal reaches the end of input, or meets a raw line
    terminator, before its closing delimiter.

    Attributes:
        literal_start: Offset of the literal's opening quote
    """

    def __init__(
        self,
        kind: str,
        offset: int,
        literal_start: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.literal_start = literal_start
        quote = '"' if kind == "string" else "'"
        super().__init__(
            f"unterminated {kind} literal",
            offset,
            location=location,
            hint=f"add a closing {quote!r} to complete the {kind} "
                 f"(opened at offset {literal_start})",
            source_line=source_line,
        )


class InvalidEscapeSequenceError(LexError):
    """
    Backslash followed by a character outside the escape set.

    The offset points at the character after the backslash.
    """

    def __init__(
        self,
        escape: str,
        offset: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.escape = escape
        super().__init__(
            f"invalid escape sequence '\\{escape}'",
            offset,
            location=location,
            hint="valid escapes are \\b \\n \\r \\t \\' \\\" and \\\\",
            source_line=source_line,
        )


class UnexpectedCharacterError(LexError):
    """Character that no token rule accepts at this position."""

    def __init__(
        self,
        char: str,
        offset: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        context: Optional[str] = None,
    ):
        self.char = char
        message = f"unexpected character {char!r} (0x{ord(char):02X})"
        if context:
            message = f"{message} {context}"
        super().__init__(
            message,
            offset,
            location=location,
            source_line=source_line,
        )


class EmptyLiteralError(LexError):
    """Character literal with no character between the quotes."""

    def __init__(
        self,
        offset: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "empty character literal",
            offset,
            location=location,
            hint="a character literal holds exactly one character or escape",
            source_line=source_line,
        )


# =============================================================================
# Pattern Errors
# =============================================================================

class UnknownPatternError(PlcError):
    """Lookup of a validation pattern that does not exist."""

    def __init__(self, name: str, known: list[str]):
        self.name = name
        self.known = known
        super().__init__(
            f"unknown pattern '{name}' (known: {', '.join(known)})"
        )
