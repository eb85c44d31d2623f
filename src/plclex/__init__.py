"""
plclex - Lexer for a Small Teaching Language
============================================

This package turns raw source text into a flat list of classified tokens
for a downstream parser: identifiers, integer and decimal literals,
character and string literals, and operators.

Main Components
---------------
- **lexer**: Lexer, LexerOptions and the lex() entry point
- **cursor**: CharacterCursor, the scan state behind the lexer
- **tokens**: Token and TokenKind
- **errors**: error hierarchy with offset and line/column locations
- **patterns**: standalone regular expressions for string validation

Quick Start
-----------
    >>> from plclex import lex, LexerOptions
    >>> lex("x == -5")
    [Token(IDENTIFIER, 'x', @0), Token(OPERATOR, '==', @2), Token(INTEGER, '-5', @5)]

Lenient mode accepts malformed literals instead of raising:
    >>> lex('"oops', LexerOptions(strict=False))
    [Token(STRING, '"oop', @0), Token(IDENTIFIER, 's', @4)]

Or use the command-line tool:
    $ plclex tokens program.plc
    $ plclex match decimal 1.5 01.5
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from plclex.cursor import CharacterCursor
from plclex.errors import (
    PlcError,
    SourceLocation,
    LexError,
    UnterminatedLiteralError,
    InvalidEscapeSequenceError,
    UnexpectedCharacterError,
    EmptyLiteralError,
    UnknownPatternError,
)
from plclex.lexer import Lexer, LexerOptions, lex
from plclex.tokens import Token, TokenKind

__all__ = [
    "__version__",
    # Lexing
    "lex",
    "Lexer",
    "LexerOptions",
    "CharacterCursor",
    "Token",
    "TokenKind",
    # Errors
    "PlcError",
    "SourceLocation",
    "LexError",
    "UnterminatedLiteralError",
    "InvalidEscapeSequenceError",
    "UnexpectedCharacterError",
    "EmptyLiteralError",
    "UnknownPatternError",
]
