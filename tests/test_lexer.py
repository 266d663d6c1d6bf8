from __future__ import annotations

from typing import List, Tuple

from insertdox.lexer import LexMode, LexState, Marker, transition


def _scan(text: str, state: LexState = LexState()) -> Tuple[LexState, List[Tuple[str, Tuple[Marker, ...]]]]:
    steps = []
    for index, char in enumerate(text):
        lookahead = text[index + 1] if index + 1 < len(text) else ""
        state, markers = transition(state, char, lookahead)
        steps.append((char, markers))
    return state, steps


def _markers(steps) -> List[Marker]:
    return [marker for _char, markers in steps for marker in markers]


def test_function_definition_markers_in_order() -> None:
    state, steps = _scan("int f(int a) { return a; }")
    markers = [m for m in _markers(steps) if m is not Marker.file_header]
    assert markers == [
        Marker.function_start,
        Marker.arglist_start,
        Marker.arglist_end,
        Marker.body_start,
        Marker.statement_start,
        Marker.mine_statement,
        Marker.body_end,
        Marker.flush_after,
    ]
    assert state.curly == 0
    assert state.round == 0
    assert state.between


def test_first_character_decides_file_header() -> None:
    _state, steps = _scan("  int x;")
    assert Marker.file_header in _markers(steps)

    state, steps = _scan("/* header */\nint x;")
    markers = _markers(steps)
    assert Marker.file_comment in markers
    assert Marker.file_header not in markers
    assert not state.header_comment


def test_block_comment_at_top_level_flushes_and_captures_description() -> None:
    state, steps = _scan("/* a */", LexState(file_start=False))
    assert steps[0][1] == (Marker.flush, Marker.description_start)
    assert steps[-1][1] == (Marker.description_end_after,)
    assert state.mode is LexMode.normal


def test_comment_opener_does_not_close_itself() -> None:
    state, _steps = _scan("/*/ still inside", LexState(file_start=False))
    assert state.mode is LexMode.block_comment


def test_comment_inside_body_is_mined() -> None:
    state, steps = _scan("{ // todo: x\n", LexState(file_start=False))
    markers = _markers(steps)
    assert Marker.comment_start in markers
    assert Marker.mine_comment in markers
    assert Marker.description_start not in markers
    assert state.mode is LexMode.normal
    assert state.curly == 1


def test_directive_discards_description_and_flushes_at_newline() -> None:
    state, steps = _scan("#define X 1\n", LexState(file_start=False))
    assert steps[0][1] == (Marker.description_discard,)
    assert steps[-1][1] == (Marker.flush_after,)
    assert state.mode is LexMode.normal


def test_hash_not_at_line_start_is_not_a_directive() -> None:
    state, _steps = _scan("x # y", LexState(file_start=False))
    assert state.mode is LexMode.normal


def test_line_continuation_keeps_directive_open() -> None:
    for ending in ("\n", "\r", "\r\n", "\n\r"):
        state, steps = _scan(f"#define X \\{ending} 1", LexState(file_start=False))
        assert state.mode is LexMode.directive, repr(ending)
        assert Marker.flush_after not in _markers(steps)


def test_line_continuation_in_statement_does_not_terminate() -> None:
    state, _steps = _scan("{ x = a \\\r\n", LexState(file_start=False))
    assert state.mode is LexMode.normal
    assert not state.between


def test_escaped_quote_does_not_close_string() -> None:
    state, _steps = _scan('"a \\" b', LexState(file_start=False))
    assert state.mode is LexMode.string_literal
    state, _steps = _scan('"a \\" b"', LexState(file_start=False))
    assert state.mode is LexMode.normal


def test_braces_inside_strings_are_ignored() -> None:
    state, steps = _scan('{ s = "}"; c = \'{\'; ', LexState(file_start=False))
    assert state.curly == 1
    assert Marker.body_end not in _markers(steps)


def test_stray_closing_brace_stays_at_top_level() -> None:
    state, steps = _scan("}", LexState(file_start=False))
    assert state.curly == 0
    assert _markers(steps) == [Marker.flush_after]


def test_nested_parentheses_capture_one_arglist() -> None:
    state, steps = _scan("int f(int (*cb)(int))", LexState(file_start=False))
    markers = _markers(steps)
    assert markers.count(Marker.arglist_start) == 1
    assert markers.count(Marker.arglist_end) == 1
    assert state.round == 0


def test_header_line_comment_flushes_before_newline() -> None:
    _state, steps = _scan("// header\n")
    assert steps[-1][1] == (Marker.description_end, Marker.flush)
