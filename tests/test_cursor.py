# =============================================================================
# test_cursor.py - CharacterCursor Unit Tests
# =============================================================================
# Tests for the scan state behind the lexer: bounded lookahead, advancing,
# skipping whitespace and emitting tokens from the pending span.
# =============================================================================

import pytest

from plclex.cursor import CharacterCursor
from plclex.tokens import Token, TokenKind


class TestLookahead:
    """Test has() and peek()."""

    def test_has_within_bounds(self):
        cursor = CharacterCursor("abc")
        assert cursor.has(0)
        assert cursor.has(2)
        assert not cursor.has(3)

    def test_has_on_empty_source(self):
        assert not CharacterCursor("").has(0)

    def test_peek_does_not_advance(self):
        cursor = CharacterCursor("abc")
        assert cursor.peek() == "a"
        assert cursor.peek(2) == "c"
        assert cursor.index == 0

    def test_peek_past_end_raises(self):
        """Unguarded reads past the end are caller errors."""
        cursor = CharacterCursor("a")
        with pytest.raises(IndexError):
            cursor.peek(1)


class TestAdvanceAndEmit:
    """Test advance(), skip() and emit()."""

    def test_advance_grows_pending(self):
        cursor = CharacterCursor("abc")
        cursor.advance()
        cursor.advance()
        assert cursor.index == 2
        assert cursor.pending == 2
        assert cursor.remaining() == 1

    def test_emit_pending_span(self):
        cursor = CharacterCursor("abc")
        cursor.advance()
        cursor.advance()
        token = cursor.emit(TokenKind.IDENTIFIER)
        assert token == Token(TokenKind.IDENTIFIER, "ab", 0)
        assert cursor.pending == 0
        assert cursor.index == 2

    def test_emit_nothing_pending(self):
        """Emitting with no pending characters gives an empty lexeme."""
        cursor = CharacterCursor("abc")
        cursor.advance()
        cursor.skip()
        assert cursor.emit(TokenKind.OPERATOR) == Token(TokenKind.OPERATOR, "", 1)

    def test_skip_moves_start(self):
        """Skipped characters are not part of the next lexeme."""
        cursor = CharacterCursor("a bc")
        cursor.advance()
        cursor.emit(TokenKind.IDENTIFIER)
        cursor.advance()
        cursor.skip()
        cursor.advance()
        cursor.advance()
        assert cursor.emit(TokenKind.IDENTIFIER) == Token(TokenKind.IDENTIFIER, "bc", 2)

    def test_advance_stops_at_end(self):
        """The index never moves past the end of the source."""
        cursor = CharacterCursor("a")
        cursor.advance()
        cursor.advance()
        assert cursor.index == 1
        assert cursor.pending == 1
        assert cursor.remaining() == 0

    def test_source_is_kept(self):
        assert CharacterCursor("xyz").source == "xyz"
