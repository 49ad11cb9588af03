"""String helpers with C-locale character semantics."""

from __future__ import annotations

from itertools import zip_longest
from typing import Iterable, Optional

_WHITESPACE = " \t\r\n\v"
_LOWER_TABLE = {ord(c): ord(c) + 32 for c in "ABCDEFGHIJKLMNOPQRSTUVWXYZ"}
_UPPER_TABLE = {ord(c): ord(c) - 32 for c in "abcdefghijklmnopqrstuvwxyz"}
_HASH_MASK = 0xFFFFFFFFFFFFFFFF
_HASH_FACTOR = 16807


def _pairs(a: str, b: str, length: Optional[int]):
    pairs = zip_longest(a, b, fillvalue="\0")
    if length is None:
        return pairs
    return (pair for pair, _ in zip(pairs, range(length)))


def _compare(a: str, b: str, length: Optional[int], fold) -> int:
    for c1, c2 in _pairs(a, b, length):
        c1, c2 = fold(c1), fold(c2)
        if c1 != c2:
            return ord(c1) - ord(c2)
        if c1 == "\0":
            return 0
    return 0


def compare(a: str, b: str, length: Optional[int] = None) -> int:
    """Compare like ``strcmp`` (or ``strncmp`` when ``length`` is given).

    Returns a negative, zero or positive number: the difference of the first
    differing characters.
    """
    return _compare(a, b, length, lambda c: c)


def compare_ignore_case(a: str, b: str, length: Optional[int] = None) -> int:
    """Compare like :func:`compare`, folding ASCII letters to lower case."""
    return _compare(a, b, length, to_lower_case)


def equals_ignore_case(a: str, b: str) -> bool:
    """Return whether both strings are equal apart from ASCII letter case."""
    return len(a) == len(b) and compare_ignore_case(a, b) == 0


def to_lower_case(c: str) -> str:
    """Lower-case ASCII letters; every other character is left alone."""
    return c.translate(_LOWER_TABLE)


def to_upper_case(c: str) -> str:
    """Upper-case ASCII letters; every other character is left alone."""
    return c.translate(_UPPER_TABLE)


def is_space(c: str) -> bool:
    """Return whether ``c`` is a C-locale white-space character."""
    return len(c) == 1 and (9 <= ord(c) <= 13 or c == " ")


def find(text: str, needle: str) -> Optional[int]:
    """Return the index of the first ``needle`` in ``text``, or None."""
    index = text.find(needle)
    return None if index < 0 else index


def find_last(text: str, needle: str) -> Optional[int]:
    """Return the index of the last ``needle`` in ``text``, or None."""
    index = text.rfind(needle)
    return None if index < 0 else index


def find_one_of(text: str, chars: str) -> Optional[int]:
    """Return the index of the first character of ``text`` found in ``chars``."""
    return next((i for i, c in enumerate(text) if c in chars), None)


def find_last_of(text: str, chars: str) -> Optional[int]:
    """Return the index of the last character of ``text`` found in ``chars``."""
    return next(
        (i for i in reversed(range(len(text))) if text[i] in chars), None
    )


def substr(text: str, start: int, length: int = -1) -> str:
    """Return a clamped substring.

    A negative ``start`` counts from the end; a negative ``length`` means
    "up to the end".  Out-of-range values are clamped, never raised.
    """
    size = len(text)
    if start < 0:
        start = max(size + start, 0)
    else:
        start = min(start, size)
    end = size if length < 0 else min(start + length, size)
    return text[start:end]


def starts_with(text: str, prefix: str) -> bool:
    """Return whether ``text`` begins with ``prefix``."""
    return text.startswith(prefix)


def ends_with(text: str, suffix: str) -> bool:
    """Return whether ``text`` ends with ``suffix``."""
    return text.endswith(suffix)


def trim(text: str, chars: str = _WHITESPACE) -> str:
    """Strip ``chars`` from both ends of ``text``."""
    return text.strip(chars)


def to_bool(text: str) -> bool:
    """Interpret a string as a boolean.

    Empty strings, ``"false"`` (any case) and zero numbers such as ``"0"``,
    ``"0."``, ``".0"`` or ``"00.00"`` are false; everything else is true.
    """
    if not text or equals_ignore_case(text, "false") or text == "0":
        return False
    stripped = text.lstrip("0")
    if stripped.startswith("."):
        fraction = stripped[1:]
        if fraction.strip("0") == "":
            last = text[-1]
            if last == "0" or text[0] == "0":
                return False
    return True


def from_bool(value: object) -> str:
    """Return ``"true"`` or ``"false"`` for the truth value of ``value``."""
    return str(bool(value)).lower()


def join(tokens: Iterable[str], separator: str) -> str:
    """Join ``tokens`` with ``separator`` between them."""
    return separator.join(tokens)


def string_hash(text: str) -> int:
    """Return a 64-bit hash built from the length and three sample characters."""
    size = len(text)

    def char_at(index: int) -> int:
        return ord(text[index]) if index < size else 0

    code = size
    for index in (0, size // 2, size - (size != 0)):
        code = (code * _HASH_FACTOR) & _HASH_MASK
        code ^= char_at(index)
    return code