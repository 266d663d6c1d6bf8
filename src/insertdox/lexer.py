"""Character level state machine for C-like sources.

The scanner sees one character at a time plus one character of lookahead.
``transition`` is a pure function: it returns the next ``LexState`` and the
``Marker``s the annotator must apply for the current character. Markers
refer to the position the current character will occupy in the
accumulation buffer; ``Marker.flush`` happens before that character is
stored, ``Marker.flush_after`` once it has been stored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)

NEWLINES = ("\n", "\r")
_LINE_PAIRS = {("\r", "\n"), ("\n", "\r")}


class LexMode(str, Enum):
    normal = "normal"
    escape = "escape"
    block_comment = "block_comment"
    line_comment = "line_comment"
    directive = "directive"
    char_literal = "char_literal"
    string_literal = "string_literal"


COMMENT_MODES = (LexMode.block_comment, LexMode.line_comment)


class Marker(str, Enum):
    flush = "flush"
    flush_after = "flush_after"
    file_comment = "file_comment"
    file_header = "file_header"
    description_start = "description_start"
    description_end = "description_end"
    description_end_after = "description_end_after"
    description_discard = "description_discard"
    comment_start = "comment_start"
    mine_comment = "mine_comment"
    statement_start = "statement_start"
    mine_statement = "mine_statement"
    function_start = "function_start"
    arglist_start = "arglist_start"
    arglist_end = "arglist_end"
    body_start = "body_start"
    body_end = "body_end"


@dataclass(frozen=True)
class LexState:
    mode: LexMode = LexMode.normal
    # where an escape or a comment hands control back to
    resume: LexMode = LexMode.normal
    curly: int = 0
    round: int = 0
    between: bool = True
    line_start: bool = True
    file_start: bool = True
    header_comment: bool = False
    # the second character of a comment opener is still to come
    opening: bool = False
    star: bool = False


Changes = Dict[str, object]


def transition(state: LexState, char: str, lookahead: str) -> Tuple[LexState, Tuple[Marker, ...]]:
    """Advance ``state`` by one character.

    ``lookahead`` is the following character, or ``""`` at end of input.
    """
    changes: Changes = {}
    markers: List[Marker] = []

    mode = state.mode
    if mode is LexMode.escape:
        _escape(state, char, lookahead, changes)
    elif mode is LexMode.block_comment:
        _block_comment(state, char, changes, markers)
    elif mode is LexMode.line_comment:
        _line_comment(state, char, changes, markers)
    elif mode is LexMode.directive:
        _directive(state, char, lookahead, changes, markers)
    elif mode in (LexMode.char_literal, LexMode.string_literal):
        _literal(state, char, changes)
    else:
        _normal(state, char, lookahead, changes, markers)

    if state.file_start and not char.isspace():
        changes["file_start"] = False
        if changes.get("mode", mode) in COMMENT_MODES:
            changes["header_comment"] = True
            markers.append(Marker.file_comment)
        else:
            markers.append(Marker.file_header)

    if not char.isspace():
        changes["line_start"] = False

    if Marker.flush in markers or Marker.flush_after in markers:
        changes.setdefault("header_comment", False)
        changes.setdefault("between", True)

    return replace(state, **changes), tuple(markers)


def _escape(state: LexState, char: str, lookahead: str, changes: Changes) -> None:
    # a CR/LF pair counts as one logical character
    if (char, lookahead) not in _LINE_PAIRS:
        changes["mode"] = state.resume


def _enter_comment(
    state: LexState, lookahead: str, changes: Changes, markers: List[Marker]
) -> None:
    changes["mode"] = LexMode.block_comment if lookahead == "*" else LexMode.line_comment
    changes["resume"] = state.mode
    changes["opening"] = True
    changes["star"] = False
    if state.curly == 0:
        markers.append(Marker.flush)
        markers.append(Marker.description_start)
    else:
        markers.append(Marker.comment_start)


def _block_comment(
    state: LexState, char: str, changes: Changes, markers: List[Marker]
) -> None:
    if state.opening:
        changes["opening"] = False
        return
    if state.star and char == "/":
        changes["mode"] = state.resume
        changes["star"] = False
        if state.curly == 0:
            markers.append(Marker.description_end_after)
            if state.header_comment:
                markers.append(Marker.flush_after)
        else:
            markers.append(Marker.mine_comment)
        return
    changes["star"] = char == "*"


def _line_comment(
    state: LexState, char: str, changes: Changes, markers: List[Marker]
) -> None:
    if state.opening:
        changes["opening"] = False
        return
    if char not in NEWLINES:
        return
    # the newline ends a directive the comment trails as well
    changes["mode"] = LexMode.normal
    changes["line_start"] = True
    if state.curly == 0:
        markers.append(Marker.description_end)
        if state.resume is LexMode.directive:
            markers.append(Marker.flush_after)
        elif state.header_comment:
            markers.append(Marker.flush)
    else:
        markers.append(Marker.mine_comment)


def _directive(
    state: LexState, char: str, lookahead: str, changes: Changes, markers: List[Marker]
) -> None:
    if char == "\\":
        changes["mode"] = LexMode.escape
        changes["resume"] = LexMode.directive
    elif char in NEWLINES:
        changes["mode"] = LexMode.normal
        changes["line_start"] = True
        if state.curly == 0:
            markers.append(Marker.flush_after)
    elif char == "/" and lookahead in ("*", "/"):
        _enter_comment(state, lookahead, changes, markers)


def _literal(state: LexState, char: str, changes: Changes) -> None:
    if char == "\\":
        changes["mode"] = LexMode.escape
        changes["resume"] = state.mode
    elif (char == "'" and state.mode is LexMode.char_literal) or (
        char == '"' and state.mode is LexMode.string_literal
    ):
        changes["mode"] = LexMode.normal


def _normal(
    state: LexState, char: str, lookahead: str, changes: Changes, markers: List[Marker]
) -> None:
    curly = state.curly
    if char == "\\":
        changes["mode"] = LexMode.escape
        changes["resume"] = LexMode.normal
    elif char == "/":
        if lookahead in ("*", "/"):
            _enter_comment(state, lookahead, changes, markers)
    elif char == "#":
        if state.line_start:
            if curly == 0:
                markers.append(Marker.description_discard)
            changes["mode"] = LexMode.directive
    elif char == "'":
        changes["mode"] = LexMode.char_literal
    elif char == '"':
        changes["mode"] = LexMode.string_literal
    elif char == "(":
        if curly == 0 and state.round == 0:
            markers.append(Marker.arglist_start)
        changes["round"] = state.round + 1
    elif char == ")":
        if state.round > 0:
            changes["round"] = state.round - 1
            if curly == 0 and state.round == 1:
                markers.append(Marker.arglist_end)
    elif char == "{":
        if curly == 0:
            markers.append(Marker.body_start)
        else:
            markers.append(Marker.mine_statement)
        changes["curly"] = curly + 1
        changes["between"] = True
    elif char == "}":
        if curly == 0:
            logger.debug("Unbalanced '}' at top level")
            markers.append(Marker.flush_after)
        elif curly == 1:
            markers.append(Marker.body_end)
            markers.append(Marker.flush_after)
        else:
            markers.append(Marker.mine_statement)
        changes["curly"] = max(curly - 1, 0)
        changes["between"] = True
    elif char == ";":
        if curly == 0:
            markers.append(Marker.flush_after)
        else:
            markers.append(Marker.mine_statement)
        changes["between"] = True
    elif char in NEWLINES:
        changes["line_start"] = True
    elif state.between and not char.isspace():
        markers.append(Marker.function_start if curly == 0 else Marker.statement_start)
        changes["between"] = False
