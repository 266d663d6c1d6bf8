"""Flush control and Doxygen comment synthesis.

The annotator accumulates the scanned text, records the range markers the
lexer reports, and on every construct boundary decides what was
accumulated: the file header comment, a function definition, or anything
else. Functions and file headers are written out behind a generated
comment block; everything else passes through untouched.
"""

from __future__ import annotations

import io
import logging
from typing import Iterable, List, Optional, TextIO

from insertdox.boilerplate import Boilerplate
from insertdox.buffer import AccumulationBuffer
from insertdox.config import AnnotateOptions
from insertdox.declarators import classify_declarator, split_arguments
from insertdox.lexer import LexState, Marker, transition
from insertdox.mining import mine_comment, mine_statement
from insertdox.textranges import strip_comment

logger = logging.getLogger(__name__)

UNKNOWN_FILENAME = "<unknown>"
FILE_PLACEHOLDER = "Put a description of the file here."
FILE_REMINDER = "@todo Edit file comment (automatically generated by insertdox)"
BRIEF_PLACEHOLDER = "Brief description needed.\n\n\tFollowed by a more complete description."
FUNCTION_REMINDER = "@todo edit me (automatically generated by insertdox)"
VARIADIC = "..."


class Annotator:
    def __init__(self, output: TextIO, options: Optional[AnnotateOptions] = None) -> None:
        self.output = output
        self.options = options or AnnotateOptions()
        self.buffer = AccumulationBuffer(capacity=self.options.buffer_capacity)
        self.boilerplate: Optional[Boilerplate] = None
        if self.options.boilerplate:
            self.boilerplate = Boilerplate(self.options.boilerplate, self.options.encoding)

    def feed(self, char: str, markers: Iterable[Marker]) -> None:
        """Apply the markers for ``char``, store it, and flush if asked to."""
        flush_after = False
        for marker in markers:
            if marker is Marker.flush_after:
                flush_after = True
            else:
                self._apply(marker)
        if self.buffer.append(char):
            logger.debug("Accumulation buffer full at %d characters, flushing", len(self.buffer))
            flush_after = True
        if flush_after:
            self.flush()

    def finish(self) -> None:
        self.flush()

    def flush(self) -> None:
        buf = self.buffer
        if len(buf):
            if buf.file_comment:
                logger.debug("Flushing file header comment")
                self._render_file_comment()
            elif buf.function.captured_once and buf.arglist.captured_once and buf.body.captured_once:
                self._render_function()
            elif not self.options.prototypes_only:
                buf.emit(self.output)
        buf.reset()

    def _apply(self, marker: Marker) -> None:
        buf = self.buffer
        pos = len(buf)
        if marker is Marker.flush:
            self.flush()
        elif marker is Marker.file_comment:
            buf.file_comment = True
        elif marker is Marker.file_header:
            self._render_file_header()
        elif marker is Marker.description_start:
            buf.description.mark_start(pos)
        elif marker is Marker.description_end:
            buf.description.capture(pos)
        elif marker is Marker.description_end_after:
            buf.description.capture(pos + 1)
        elif marker is Marker.description_discard:
            buf.description.discard()
        elif marker is Marker.comment_start:
            buf.comment_start = pos
        elif marker is Marker.mine_comment:
            self._mine_comment(pos)
        elif marker is Marker.statement_start:
            buf.statement_start = pos
        elif marker is Marker.mine_statement:
            self._mine_statement(pos)
        elif marker is Marker.function_start:
            buf.function.mark_start(pos)
        elif marker is Marker.arglist_start:
            buf.function.capture(pos)
            buf.arglist.mark_start(pos)
        elif marker is Marker.arglist_end:
            buf.arglist.capture(pos + 1)
        elif marker is Marker.body_start:
            buf.body.mark_start(pos)
        elif marker is Marker.body_end:
            buf.body.capture(pos + 1)

    def _mine_comment(self, pos: int) -> None:
        buf = self.buffer
        if buf.comment_start is None:
            return
        found = mine_comment(buf.text(buf.comment_start, pos))
        buf.comment_start = None
        if found is None:
            return
        kind, remark = found
        if kind == "todo":
            buf.todos.append(remark)
        else:
            buf.notes.append(remark)

    def _mine_statement(self, pos: int) -> None:
        buf = self.buffer
        if buf.statement_start is None:
            return
        value = mine_statement(buf.text(buf.statement_start, pos))
        buf.statement_start = None
        if value is not None:
            buf.retvals.append(value)

    def _mined(self, entries: List[str]) -> List[str]:
        if self.options.mined_order == "reverse":
            return list(reversed(entries))
        return list(entries)

    def _write_boilerplate(self) -> None:
        if self.boilerplate is not None:
            self.boilerplate.copy_to(self.output)

    def _render_file_header(self) -> None:
        filename = self.options.filename or UNKNOWN_FILENAME
        out = self.output
        out.write(f"/**\n\t@file {filename}\n\n\t{FILE_PLACEHOLDER}\n")
        self._write_boilerplate()
        out.write(f"\n\t{FILE_REMINDER}\n*/\n\n")

    def _render_file_comment(self) -> None:
        text = strip_comment(self.buffer.text())
        out = self.output
        out.write(f"/**\n\t{text}\n")
        if self.boilerplate is not None and not self.boilerplate.contained_in(text):
            self.boilerplate.copy_to(out)
        out.write("*/")

    def _render_function(self) -> None:
        buf = self.buffer
        options = self.options
        declarator = classify_declarator(
            buf.text(buf.function.start, buf.function.end), options.type_capacity
        )
        logger.debug("Annotating function %s", declarator.name)

        existing = buf.description.count > 0
        closer = "\n*/"
        if existing:
            desc_start, desc_end = buf.description.start, buf.description.end
        else:
            # the character before the declarator moves below the new block
            desc_start = desc_end = max(buf.function.start - 1, 0)
            if buf.function.start == 0:
                closer = "\n*/\n"

        tags: List[str] = []
        params = self._param_lines(buf.text(buf.arglist.start, buf.arglist.end))
        if params:
            tags.append("".join(f"\n\t{line}" for line in params) + "\n")
        generated = list(params)

        if declarator.phrase != "void":
            lines = [f"@return {declarator.phrase}"]
            lines.extend(f"@retval {value}" for value in self._mined(buf.retvals))
            tags.append("".join(f"\n\t{line}" for line in lines) + "\n")
            generated.extend(lines)

        lines = []
        if options.emit_notes:
            lines.extend(f"@note {note}" for note in self._mined(buf.notes))
        lines.extend(f"@todo {todo}" for todo in self._mined(buf.todos))
        lines.append(FUNCTION_REMINDER)
        tags.append("".join(f"\n\t{line}" for line in lines))
        generated.extend(lines)

        if declarator.is_static:
            generated.append("@internal")

        description = ""
        if existing:
            original = strip_comment(buf.text(desc_start, desc_end))
            description = _drop_generated(original, generated)

        out = self.output
        buf.emit(out, 0, desc_start)
        out.write("/**\n" if existing else "\n/**\n")
        if declarator.is_static:
            out.write("\t@internal\n\n")
        out.write(f"\t{description or BRIEF_PLACEHOLDER}\n")
        out.write("".join(tags))
        out.write(closer)
        if options.prototypes_only:
            buf.emit(out, desc_end, buf.arglist.end)
            out.write(";\n\n")
        else:
            buf.emit(out, desc_end)

    def _param_lines(self, arglist: str) -> List[str]:
        lines: List[str] = []
        for argument in split_arguments(arglist):
            param = classify_declarator(argument, self.options.type_capacity)
            if param.name == "void" or not (param.name or param.phrase):
                continue
            if not param.name and param.phrase == VARIADIC:
                lines.append(f"@param[in] \t{VARIADIC} \tvariable arguments")
                continue
            lines.append(f"@param[{param.direction}] \t{param.name} \t{param.phrase}")
        return lines


def _drop_generated(description: str, generated: List[str]) -> str:
    """Remove lines of a reused comment that are about to be generated again."""
    wanted = {line.strip() for line in generated}
    kept = [line for line in description.split("\n") if line.strip() not in wanted]
    return "\n".join(kept).strip()


def annotate_stream(output: TextIO, source: TextIO, options: Optional[AnnotateOptions] = None) -> None:
    """Annotate ``source`` into ``output`` in a single forward pass."""
    annotator = Annotator(output, options)
    state = LexState()
    char = source.read(1)
    while char:
        lookahead = source.read(1)
        state, markers = transition(state, char, lookahead)
        annotator.feed(char, markers)
        char = lookahead
    annotator.finish()


def annotate_text(text: str, options: Optional[AnnotateOptions] = None) -> str:
    output = io.StringIO(newline="")
    annotate_stream(output, io.StringIO(text, newline=""), options)
    return output.getvalue()
