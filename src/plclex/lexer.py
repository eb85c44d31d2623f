"""
Lexer (Tokenizer)
=================

This module converts source text into a flat list of tokens for a
downstream parser. The lexer classifies each token from one or two
characters of lookahead and hands it to a sub-scanner that consumes it.

Token Grammar
-------------
| Kind       | Rule                                         |
|------------|----------------------------------------------|
| IDENTIFIER | [@A-Za-z] [A-Za-z0-9_-]*                     |
| INTEGER    | '0' or '-'? [0-9]+                           |
| DECIMAL    | '-'? [0-9]+ '.' [0-9]+                       |
| CHARACTER  | ['] ([^'\\n\\r\\\\] or escape) [']             |
| STRING     | '"' ([^"\\n\\r\\\\] or escape)* '"'            |
| OPERATOR   | != == && || or any other single character    |

Escapes are \\b \\n \\r \\t \\' \\" and \\\\. Only space and tab are skipped
between tokens by default; a newline is lexed as an OPERATOR token.

A leading zero always forms a one-character INTEGER unless a '.' follows,
so "007" lexes as 0, 0, 7.

Strict and Lenient Modes
------------------------
Strict mode (the default) raises a LexError at the first offending
character of any malformed literal. Lenient mode keeps the historical
behaviour of the lexer: malformed literals are cut short or closed
silently, and each error strict mode would have raised is kept in
Lexer.diagnostics instead.

Example Usage
-------------
>>> from plclex import lex
>>> lex('x != "hi"')
[Token(IDENTIFIER, 'x', @0), Token(OPERATOR, '!=', @2), Token(STRING, '"hi"', @5)]
"""

import logging
import os
import string
from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Optional

from plclex.cursor import CharacterCursor
from plclex.errors import (
    EmptyLiteralError,
    InvalidEscapeSequenceError,
    LexError,
    SourceLocation,
    UnexpectedCharacterError,
    UnterminatedLiteralError,
    source_line_at,
)
from plclex.tokens import Token, TokenKind

logger = logging.getLogger(__name__)


# =============================================================================
# Character Classes
# =============================================================================

LETTERS = frozenset(string.ascii_letters)
DIGITS = frozenset(string.digits)
ALPHANUMERIC = LETTERS | DIGITS

IDENT_START = LETTERS | {"@"}
IDENT_CHARS = ALPHANUMERIC | {"_", "-"}

ESCAPE_LETTERS = frozenset("bnrt'\"\\")
LINE_TERMINATORS = frozenset("\n\r")
CONTROL_CHARS = frozenset("\n\r\t\b\f")
CHARACTER_EXCLUDED = frozenset("'\n\r\\")

# Operators that may double up with a fixed second character
OPERATOR_PAIRS = {
    "!": "=",
    "=": "=",
    "&": "&",
    "|": "|",
}

# Characters that start a token and so may not be treated as whitespace
TOKEN_STARTS = IDENT_START | DIGITS | {"-", "'", '"'}

DEFAULT_WHITESPACE = " \t"


# =============================================================================
# Configuration
# =============================================================================

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be one of {_TRUE_VALUES + _FALSE_VALUES}, got {value!r}")


def _decode_whitespace(value: str) -> str:
    return value.replace("\\n", "\n").replace("\\r", "\r").replace("\\t", "\t")


@dataclass
class LexerOptions:
    """
    Lexer configuration options.

    Attributes:
        strict: Raise a LexError on malformed literals. When False the
                lexer accepts them with its historical behaviour and
                records the errors in Lexer.diagnostics.
        whitespace: Characters skipped between tokens. Must contain the
                    space character and no character that starts a token.
                    Add "\\n" and "\\r" to stop newlines becoming tokens.
    """
    strict: bool = True
    whitespace: str = DEFAULT_WHITESPACE

    def __post_init__(self):
        if " " not in self.whitespace:
            raise ValueError("whitespace must include the space character")
        clash = sorted(set(self.whitespace) & TOKEN_STARTS)
        if clash:
            raise ValueError(
                f"whitespace may not contain token start characters: {''.join(clash)!r}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LexerOptions":
        """
        Build options from environment variables.

        PLCLEX_STRICT: 1/true/yes/on or 0/false/no/off
        PLCLEX_WHITESPACE: skipped characters; \\n, \\r and \\t are decoded

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        strict = True
        whitespace = DEFAULT_WHITESPACE

        if "PLCLEX_STRICT" in env:
            strict = _parse_bool("PLCLEX_STRICT", env["PLCLEX_STRICT"])
        if "PLCLEX_WHITESPACE" in env:
            whitespace = _decode_whitespace(env["PLCLEX_WHITESPACE"])

        return cls(strict=strict, whitespace=whitespace)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes source text.

    Lexer instances are single-use: create one per source string.

    The mode changes classification as well as error reporting. In strict
    mode a '-' not followed by a digit is an OPERATOR, where lenient mode
    sends it to the number scanner as an INTEGER, and a lone trailing "'"
    goes to the character scanner (and raises) instead of becoming an
    OPERATOR. A '.' after an integer also needs a following digit.

    Usage:
        lexer = Lexer(source_text, LexerOptions(strict=False))
        tokens = lexer.lex()
        for problem in lexer.diagnostics:
            print(problem)

    Attributes:
        source: The text being tokenized
        filename: Name used in error locations
        options: Active LexerOptions
        diagnostics: Errors accepted in lenient mode, in source order
    """

    def __init__(
        self,
        source: str,
        options: Optional[LexerOptions] = None,
        filename: str = "<input>",
    ):
        self.source = source
        self.filename = filename
        self.options = options or LexerOptions()
        self.diagnostics: list[LexError] = []
        self._chars = CharacterCursor(source)

    def lex(self) -> list[Token]:
        """
        Lex the whole source.

        Returns:
            Tokens in source order

        Raises:
            LexError: In strict mode, on the first malformed token
        """
        tokens = list(self.tokenize())
        logger.debug(f"Lexed {len(tokens)} tokens from {self.filename}")
        if self.diagnostics:
            logger.debug(f"{len(self.diagnostics)} malformed literals accepted in {self.filename}")
        return tokens

    def tokenize(self) -> Iterator[Token]:
        """Generate tokens, skipping whitespace between them."""
        whitespace = self.options.whitespace
        while self._chars.has(0):
            if self._chars.peek() in whitespace:
                self._chars.advance()
                self._chars.skip()
                continue
            yield self._scan_token()

    # =========================================================================
    # Lookahead Helpers
    # =========================================================================

    def peek(self, *charsets: Iterable[str]) -> bool:
        """
        Return True if the next characters fall in the given charsets.

        peek("a", DIGITS) is True when the next character is 'a' and the one
        after it is a digit. Never advances.
        """
        for offset, charset in enumerate(charsets):
            if not self._chars.has(offset) or self._chars.peek(offset) not in charset:
                return False
        return True

    def match(self, *charsets: Iterable[str]) -> bool:
        """Like peek(), but also advances past the characters on success."""
        matched = self.peek(*charsets)
        if matched:
            for _ in charsets:
                self._chars.advance()
        return matched

    # =========================================================================
    # Classification
    # =========================================================================

    def _scan_token(self) -> Token:
        """
        Classify the next token and dispatch to its sub-scanner.

        Classification only looks ahead; the sub-scanner does all advancing.
        """
        strict = self.options.strict

        if self.peek(IDENT_START):
            return self._scan_identifier()

        if self.peek(DIGITS) or self.peek("-", DIGITS) or (not strict and self.peek("-")):
            if self.peek("0", "."):
                return self._scan_number()
            if self.peek("0") and self._chars.has(1):
                self._chars.advance()
                return self._chars.emit(TokenKind.INTEGER)
            return self._scan_number()

        if self.peek("'") and (strict or self._chars.has(1)):
            return self._scan_character()

        if self.peek('"'):
            return self._scan_string()

        char = self._chars.peek()
        if char in OPERATOR_PAIRS or (char not in ALPHANUMERIC and char != " "):
            return self._scan_operator()

        raise self._unexpected(self._chars.index, "with no matching token rule")

    # =========================================================================
    # Sub-scanners
    # =========================================================================

    def _scan_identifier(self) -> Token:
        """Scan '@' or a letter followed by letters, digits, '_' and '-'."""
        self._chars.advance()
        while self.match(IDENT_CHARS):
            pass
        return self._chars.emit(TokenKind.IDENTIFIER)

    def _scan_number(self) -> Token:
        """
        Scan an integer or decimal with an optional leading minus.

        A '.' needs a following character to be consumed; strict mode also
        requires that character to be a digit. Only one fractional run is
        taken, so "1.2.3" stops after "1.2".
        """
        self.match("-")
        while self.match(DIGITS):
            pass

        if self.peek(".") and self._chars.has(1):
            if self.options.strict and self._chars.peek(1) not in DIGITS:
                return self._chars.emit(TokenKind.INTEGER)
            self._chars.advance()
            while self.match(DIGITS):
                pass
            return self._chars.emit(TokenKind.DECIMAL)

        return self._chars.emit(TokenKind.INTEGER)

    def _scan_character(self) -> Token:
        """Scan a single-quoted character literal."""
        if self.options.strict:
            return self._scan_character_strict()
        return self._scan_character_lenient()

    def _scan_character_strict(self) -> Token:
        chars = self._chars
        start = chars.index
        chars.advance()  # opening '

        if not chars.has(0):
            raise self._unterminated("character", len(self.source), start)

        char = chars.peek()
        if char == "'":
            raise self._empty(chars.index)
        if char in LINE_TERMINATORS:
            raise self._unterminated("character", chars.index, start)
        if char in CONTROL_CHARS:
            raise self._unexpected(chars.index, "in character literal (use an escape)")

        if char == "\\":
            self._scan_escape("character", start)
        else:
            chars.advance()

        if not chars.has(0):
            raise self._unterminated("character", len(self.source), start)
        if not self.match("'"):
            raise self._unterminated("character", chars.index, start)

        return chars.emit(TokenKind.CHARACTER)

    def _scan_character_lenient(self) -> Token:
        chars = self._chars
        start = chars.index
        chars.advance()  # opening '
        body_start = chars.index
        problem: Optional[LexError] = None

        if not chars.has(1):
            problem = self._unterminated("character", len(self.source), start)
            return self._emit_lenient(TokenKind.CHARACTER, problem)

        if self.match("\\"):
            if not self.match(ESCAPE_LETTERS):
                problem = self._invalid_escape(chars.index)
            if not self.match("'") and problem is None:
                problem = self._unterminated("character", chars.index, start)
            return self._emit_lenient(TokenKind.CHARACTER, problem)

        if self.peek(CONTROL_CHARS):
            if chars.peek() in LINE_TERMINATORS:
                problem = self._unterminated("character", chars.index, start)
            else:
                problem = self._unexpected(chars.index, "in character literal (use an escape)")
            chars.advance()

        if chars.has(1) and chars.peek() not in CHARACTER_EXCLUDED:
            chars.advance()

        if self.peek("'"):
            if chars.index == body_start and problem is None:
                problem = self._empty(chars.index)
            chars.advance()
        elif problem is None:
            offset = chars.index if chars.has(0) else len(self.source)
            problem = self._unterminated("character", offset, start)

        return self._emit_lenient(TokenKind.CHARACTER, problem)

    def _scan_string(self) -> Token:
        """Scan a double-quoted string literal."""
        if self.options.strict:
            return self._scan_string_strict()
        return self._scan_string_lenient()

    def _scan_string_strict(self) -> Token:
        chars = self._chars
        start = chars.index
        chars.advance()  # opening "

        while chars.has(0):
            char = chars.peek()
            if char == '"':
                chars.advance()
                return chars.emit(TokenKind.STRING)
            if char in LINE_TERMINATORS:
                raise self._unterminated("string", chars.index, start)
            if char == "\\":
                self._scan_escape("string", start)
            else:
                chars.advance()

        raise self._unterminated("string", len(self.source), start)

    def _scan_string_lenient(self) -> Token:
        chars = self._chars
        start = chars.index
        chars.advance()  # opening "
        problem: Optional[LexError] = None

        while chars.has(0):
            if self.match("\\"):
                if not self.match(ESCAPE_LETTERS):
                    # Invalid escape closes the string before the bad character
                    if chars.has(0):
                        problem = problem or self._invalid_escape(chars.index)
                    else:
                        problem = problem or self._unterminated("string", len(self.source), start)
                    return self._emit_lenient(TokenKind.STRING, problem)

            if self.match('"'):
                return self._emit_lenient(TokenKind.STRING, problem)

            # Last character is left for the next token
            if not chars.has(1):
                problem = problem or self._unterminated("string", len(self.source), start)
                return self._emit_lenient(TokenKind.STRING, problem)

            # The character after an escape is taken as is, even a backslash
            char = chars.peek()
            if problem is None:
                if char in LINE_TERMINATORS:
                    problem = self._unterminated("string", chars.index, start)
                elif char == "\\" and chars.peek(1) not in ESCAPE_LETTERS:
                    problem = self._invalid_escape(chars.index + 1)
            chars.advance()

        problem = problem or self._unterminated("string", len(self.source), start)
        return self._emit_lenient(TokenKind.STRING, problem)

    def _scan_escape(self, kind: str, literal_start: int) -> None:
        """Consume a backslash escape, raising on a bad or missing letter."""
        self._chars.advance()  # backslash
        if not self._chars.has(0):
            raise self._unterminated(kind, len(self.source), literal_start)
        if not self.match(ESCAPE_LETTERS):
            raise self._invalid_escape(self._chars.index)

    def _scan_operator(self) -> Token:
        """Scan !, !=, =, ==, &, &&, |, || or any other single character."""
        first = self._chars.peek()
        self._chars.advance()
        second = OPERATOR_PAIRS.get(first)
        if second is not None:
            self.match(second)
        return self._chars.emit(TokenKind.OPERATOR)

    # =========================================================================
    # Error Reporting
    # =========================================================================

    def _emit_lenient(self, kind: TokenKind, problem: Optional[LexError]) -> Token:
        """Emit the pending lexeme, keeping any accepted error as a diagnostic."""
        if problem is not None:
            self.diagnostics.append(problem)
            logger.warning(f"{problem.location}: accepted malformed input: {problem.message}")
        return self._chars.emit(kind)

    def _location(self, offset: int) -> SourceLocation:
        return SourceLocation.from_offset(self.source, offset, self.filename)

    def _unterminated(self, kind: str, offset: int, literal_start: int) -> UnterminatedLiteralError:
        return UnterminatedLiteralError(
            kind,
            offset,
            literal_start,
            location=self._location(offset),
            source_line=source_line_at(self.source, offset),
        )

    def _invalid_escape(self, offset: int) -> InvalidEscapeSequenceError:
        return InvalidEscapeSequenceError(
            self.source[offset],
            offset,
            location=self._location(offset),
            source_line=source_line_at(self.source, offset),
        )

    def _unexpected(self, offset: int, context: Optional[str] = None) -> UnexpectedCharacterError:
        return UnexpectedCharacterError(
            self.source[offset],
            offset,
            location=self._location(offset),
            source_line=source_line_at(self.source, offset),
            context=context,
        )

    def _empty(self, offset: int) -> EmptyLiteralError:
        return EmptyLiteralError(
            offset,
            location=self._location(offset),
            source_line=source_line_at(self.source, offset),
        )


def lex(
    source: str,
    options: Optional[LexerOptions] = None,
    filename: str = "<input>",
) -> list[Token]:
    """
    Lex source text into tokens.

    Args:
        source: The full source text
        options: Lexer configuration (strict defaults if None)
        filename: Name used in error locations

    Raises:
        LexError: In strict mode, on the first malformed token
    """
    return Lexer(source, options, filename).lex()
