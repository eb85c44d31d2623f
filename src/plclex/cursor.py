"""
Character Cursor
================

Scan state shared by the lexer's sub-scanners: the immutable source text,
the current index, and the length of the lexeme accumulated since the
last emit or skip.

    cursor = CharacterCursor("ab cd")
    cursor.advance()
    cursor.advance()
    cursor.emit(TokenKind.IDENTIFIER)   # Token(IDENTIFIER, 'ab', @0)
    cursor.advance()
    cursor.skip()                       # drop the space

The cursor never looks at what it consumes; classification and bounds
guards belong to the lexer.
"""

from plclex.tokens import Token, TokenKind


class CharacterCursor:
    """
    Forward-only cursor over a source string.

    Invariants:
        0 <= index <= len(source)
        index - pending is the start offset of the pending lexeme
    """

    def __init__(self, source: str):
        self._source = source
        self._index = 0
        self._pending = 0

    @property
    def source(self) -> str:
        return self._source

    @property
    def index(self) -> int:
        return self._index

    @property
    def pending(self) -> int:
        """Number of characters advanced since the last emit or skip."""
        return self._pending

    def remaining(self) -> int:
        """Number of characters not yet advanced past."""
        return len(self._source) - self._index

    def has(self, offset: int = 0) -> bool:
        """Return True if a character exists at index + offset."""
        return self._index + offset < len(self._source)

    def peek(self, offset: int = 0) -> str:
        """
        Return the character at index + offset without advancing.

        Callers must check has(offset) first; reading past the end raises
        IndexError.
        """
        return self._source[self._index + offset]

    def advance(self) -> None:
        """Move past the current character, adding it to the pending lexeme."""
        if self._index < len(self._source):
            self._index += 1
            self._pending += 1

    def skip(self) -> None:
        """Discard the pending lexeme without producing a token."""
        self._pending = 0

    def emit(self, kind: TokenKind) -> Token:
        """Turn the pending lexeme into a Token and start a new one."""
        start = self._index - self._pending
        self._pending = 0
        return Token(kind, self._source[start:self._index], start)
