"""Offset helpers for skipping and trimming runs of characters."""

from __future__ import annotations

import string

_PUNCTUATION = frozenset(string.punctuation)
_COMMENT_CHARS = frozenset("/*")


def is_ident_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def skip_space(text: str, start: int, end: int) -> int:
    """Advance past whitespace; never returns more than ``end``."""
    pos = start
    while pos < end and text[pos].isspace():
        pos += 1
    return pos


def trim_space(text: str, end: int, start: int) -> int:
    """Move ``end`` back past whitespace; never returns less than ``start``."""
    pos = end
    while pos > start and text[pos - 1].isspace():
        pos -= 1
    return pos


def skip_comment(text: str, start: int, end: int) -> int:
    """Advance past whitespace and comment punctuation (``/`` and ``*``)."""
    pos = start
    while pos < end and (text[pos].isspace() or text[pos] in _COMMENT_CHARS):
        pos += 1
    return pos


def trim_comment(text: str, end: int, start: int) -> int:
    pos = end
    while pos > start and (text[pos - 1].isspace() or text[pos - 1] in _COMMENT_CHARS):
        pos -= 1
    return pos


def skip_punct(text: str, start: int, end: int) -> int:
    """Advance past whitespace and ASCII punctuation."""
    pos = start
    while pos < end and (text[pos].isspace() or text[pos] in _PUNCTUATION):
        pos += 1
    return pos


def strip_comment(text: str) -> str:
    """Return the body of a comment without delimiters or surrounding blanks."""
    start = skip_comment(text, 0, len(text))
    end = trim_comment(text, len(text), start)
    return text[start:end]
