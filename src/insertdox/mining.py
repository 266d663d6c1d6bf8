"""Mine function bodies for todo/note comments and return values."""

from __future__ import annotations

from typing import Optional, Tuple

from insertdox.textranges import is_ident_char, skip_punct, skip_space, trim_comment, trim_space

TODO_PREFIXES = ("todo", "fixme", "fix-me")
NOTE_PREFIXES = ("note", "nb")

_RETURN = "return"


def mine_comment(text: str) -> Optional[Tuple[str, str]]:
    """Classify a comment found inside a function body.

    Returns ``("todo", remark)`` or ``("note", remark)`` when the comment
    starts with one of the marker words, ``None`` otherwise. ``text`` is the
    raw comment including its opening delimiter.
    """
    end = len(text)
    start = skip_punct(text, 0, end)
    lowered = text.lower()
    for kind, prefixes in (("todo", TODO_PREFIXES), ("note", NOTE_PREFIXES)):
        for prefix in prefixes:
            if lowered.startswith(prefix, start):
                remark_start = skip_punct(text, start + len(prefix), end)
                remark_end = trim_comment(text, end, start)
                return kind, text[remark_start:remark_end]
    return None


def mine_statement(text: str) -> Optional[str]:
    """Return the value of a ``return`` statement, or ``None``.

    ``text`` runs from the first character of the statement up to, not
    including, its terminator. One redundant pair of outer parentheses is
    removed, but only when the expression holds a single ``(``, so that
    ``(a)+(b)`` is kept as written.
    """
    if not text.startswith(_RETURN):
        return None
    end = len(text)
    start = len(_RETURN)
    if start < end and is_ident_char(text[start]):
        return None
    start = skip_space(text, start, end)
    end = trim_space(text, end, start)
    if start < end and text[start] == "(":
        if text.count("(", start, end) == 1 and text[end - 1] == ")":
            start = skip_space(text, start + 1, end - 1)
            end = trim_space(text, end - 1, start)
    value = text[start:end]
    return value or None
