"""
String Validation Patterns
==========================

Precompiled regular expressions for ad-hoc string validation. They are
independent of the lexer and share no state with it; every pattern is
meant to match a whole string.

Patterns
--------
| Name           | Matches                                     | Example          |
|----------------|---------------------------------------------|------------------|
| EMAIL          | name@domain.tld with a 3-letter lowercase tld | abc@gmail.com  |
| ODD_STRINGS    | any string of odd length from 11 to 19      | "hello world"    |
| CHARACTER_LIST | bracketed list of single-quoted characters  | ['a', 'b','c']   |
| DECIMAL        | decimal with digits on both sides of '.'    | -1.5, 10.0100    |
| STRING         | double-quoted string with valid escapes     | "Hello,\\nWorld" |

Decimals have no leading zeros apart from a lone integer zero ("0.5" is
valid, "01.5" is not). List items are separated by a comma and at most
one space; an empty list "[]" is valid and a trailing comma is not.
"""

import re

from plclex.errors import UnknownPatternError


EMAIL = re.compile(r"[A-Za-z0-9._]{2,}@[A-Za-z0-9~]+\.([A-Za-z0-9-]+\.)*[a-z]{3}")

ODD_STRINGS = re.compile(r"(?:.{2}){5,9}.", re.DOTALL)

_LIST_ITEM = r"'[^'\n\r\\]'"
CHARACTER_LIST = re.compile(rf"\[(?:{_LIST_ITEM}(?:, ?{_LIST_ITEM})*)?\]")

DECIMAL = re.compile(r"-?(?:0|[1-9][0-9]*)\.[0-9]+")

STRING = re.compile(r"\"(?:[^\"\\\n\r]|\\[bnrt'\"\\])*\"")

PATTERNS: dict[str, re.Pattern] = {
    "EMAIL": EMAIL,
    "ODD_STRINGS": ODD_STRINGS,
    "CHARACTER_LIST": CHARACTER_LIST,
    "DECIMAL": DECIMAL,
    "STRING": STRING,
}


def get_pattern(name: str) -> re.Pattern:
    """
    Look up a pattern by name (case-insensitive, '-' treated as '_').

    Raises:
        UnknownPatternError: If no pattern has that name
    """
    key = name.strip().upper().replace("-", "_")
    try:
        return PATTERNS[key]
    except KeyError:
        raise UnknownPatternError(name, sorted(PATTERNS)) from None


def matches(name: str, text: str) -> bool:
    """Return True if text matches the named pattern in full."""
    return get_pattern(name).fullmatch(text) is not None
