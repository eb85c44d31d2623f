"""
Token Definitions
=================

Tokens are the lexer's sole output: a classified lexeme plus the offset
of its first character in the source text.

Token Kinds
-----------
| Kind       | Example          |
|------------|------------------|
| IDENTIFIER | getName, @x, a-b |
| INTEGER    | 0, 42, -5        |
| DECIMAL    | 0.5, -1.25       |
| CHARACTER  | 'c', '\\n'        |
| STRING     | "hello\\n"        |
| OPERATOR   | !=, &&, (, ;     |

Lexemes are kept exactly as they appear in the source, quotes and escape
sequences included. Decoding literal values is left to the parser.
"""

from dataclasses import dataclass
from enum import Enum, auto

from plclex.errors import SourceLocation


class TokenKind(Enum):
    """Closed set of token classes produced by the lexer."""

    IDENTIFIER = auto()
    INTEGER = auto()
    DECIMAL = auto()
    CHARACTER = auto()
    STRING = auto()
    OPERATOR = auto()


@dataclass(frozen=True)
class Token:
    """
    A single token from source text.

    Attributes:
        kind: The TokenKind classification
        lexeme: The exact source substring this token covers
        start_offset: Index of the lexeme's first character in the source
    """
    kind: TokenKind
    lexeme: str
    start_offset: int

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.lexeme!r}, @{self.start_offset})"

    @property
    def end_offset(self) -> int:
        """Index one past the lexeme's last character."""
        return self.start_offset + len(self.lexeme)

    def location(self, source: str, filename: str = "<input>") -> SourceLocation:
        """Return the line/column location of this token within source."""
        return SourceLocation.from_offset(source, self.start_offset, filename)
