"""Heuristic classification of C declarators.

A declarator such as ``const char ** name[]`` is reduced to its trailing
identifier plus a readable type phrase ("a pointer to a pointer to an
array of const char"). The direction guess (``in_only``) treats anything
const, or passed by value, as input only. Typedef'd pointers and
qualifiers hidden behind macros fool it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from insertdox.textranges import is_ident_char, skip_space, trim_space

DEFAULT_TYPE_CAPACITY = 200

_QUALIFIERS = ("static", "const")


class BoundedText:
    """String builder that silently truncates once ``capacity`` is reached."""

    def __init__(self, capacity: int) -> None:
        self.capacity = max(capacity, 0)
        self._parts: List[str] = []
        self._length = 0

    @property
    def remaining(self) -> int:
        return self.capacity - self._length

    def append(self, text: str) -> None:
        piece = text[: self.remaining]
        if piece:
            self._parts.append(piece)
            self._length += len(piece)

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        return "".join(self._parts)


@dataclass(frozen=True)
class Declarator:
    name: str
    name_span: Tuple[int, int]
    phrase: str
    is_static: bool = False
    is_const: bool = False
    pointer_depth: int = 0
    is_array: bool = False

    @property
    def in_only(self) -> bool:
        return self.is_const or (self.pointer_depth == 0 and not self.is_array)

    @property
    def direction(self) -> str:
        return "in" if self.in_only else "in,out"


def classify_declarator(text: str, capacity: int = DEFAULT_TYPE_CAPACITY) -> Declarator:
    start = skip_space(text, 0, len(text))
    end = trim_space(text, len(text), start)

    is_array = False
    if end > start and text[end - 1] == "]":
        is_array = True
        bracket = text.rfind("[", start, end - 1)
        end = trim_space(text, max(bracket, start), start)

    name_end = end
    name_start = name_end
    while name_start > start and is_ident_char(text[name_start - 1]):
        name_start -= 1

    is_static = False
    is_const = False
    base_start = start
    while True:
        keyword = _leading_keyword(text, base_start, name_start)
        if keyword is None:
            break
        if keyword == "static":
            is_static = True
        else:
            is_const = True
        base_start = skip_space(text, base_start + len(keyword), name_start)

    base_end = trim_space(text, name_start, base_start)
    pointer_depth = 0
    while base_end > base_start and text[base_end - 1] == "*":
        pointer_depth += 1
        base_end = trim_space(text, base_end - 1, base_start)

    phrase = BoundedText(capacity)
    for _ in range(pointer_depth):
        phrase.append("a pointer to ")
    if is_array:
        phrase.append("an array of ")
    if is_const:
        phrase.append("const ")
    phrase.append(text[base_start:base_end])

    return Declarator(
        name=text[name_start:name_end],
        name_span=(name_start, name_end),
        phrase=str(phrase),
        is_static=is_static,
        is_const=is_const,
        pointer_depth=pointer_depth,
        is_array=is_array,
    )


def split_arguments(arglist: str) -> List[str]:
    """Split ``(type a, type b)`` into its parameter declarators.

    Nested parentheses are not tracked, so function pointer parameters come
    apart at their inner ``)``.
    """
    pos = 0
    end = len(arglist)
    while pos < end and (arglist[pos].isspace() or arglist[pos] == "("):
        pos += 1
    arguments: List[str] = []
    start = pos
    for index in range(pos, end):
        if arglist[index] in ",)":
            arguments.append(arglist[start:index])
            start = index + 1
    return arguments


def _leading_keyword(text: str, start: int, limit: int) -> Optional[str]:
    for keyword in _QUALIFIERS:
        stop = start + len(keyword)
        if stop > limit or not text.startswith(keyword, start):
            continue
        if stop < limit and is_ident_char(text[stop]):
            continue
        return keyword
    return None
