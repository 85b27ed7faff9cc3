"""Scanning primitives shared by every parse level.

All functions take the remaining input as an immutable str and return the
unconsumed rest. A failed match returns None and leaves the caller's text
untouched, so the caller can try another alternative from the same offset.
"""

from __future__ import annotations

from typing import Callable, Optional

CharPredicate = Callable[[str], bool]

_NUMERAL_CHARS = frozenset("0123456789.-")


def is_numeral_char(c: str) -> bool:
    """Digits, the decimal point and the minus sign."""
    return c in _NUMERAL_CHARS


def char_is(expected: str) -> CharPredicate:
    """Predicate matching exactly one character."""
    return lambda c: c == expected


def match_char(predicate: CharPredicate, text: str) -> Optional[tuple[str, str]]:
    """Match the first character of text.

    Returns (char, rest), or None if text is empty or the first character
    does not satisfy predicate.
    """
    if text and predicate(text[0]):
        return text[0], text[1:]
    return None


def match_run(predicate: CharPredicate, text: str) -> Optional[tuple[str, str]]:
    """Match the longest non-empty prefix whose characters satisfy predicate.

    Returns (matched, rest), or None if not even one character matches.
    """
    end = 0
    while end < len(text) and predicate(text[end]):
        end += 1
    if end == 0:
        return None
    return text[:end], text[end:]


def skip_spaces(text: str) -> str:
    # ASCII space only; tabs and newlines are significant
    return text.lstrip(" ")
