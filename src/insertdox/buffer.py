"""Accumulation buffer and the ranges captured while scanning."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, TextIO

DEFAULT_BUFFER_CAPACITY = 1 << 20


@dataclass
class Range:
    """A ``[start, end)`` span of the accumulation buffer.

    ``count`` records whether the span was captured in the current cycle.
    It never goes past 1; a second capture sets ``repeated`` instead.
    """

    start: int = 0
    end: int = 0
    count: int = 0
    repeated: bool = False

    def mark_start(self, pos: int) -> None:
        self.start = pos
        self.end = pos

    def capture(self, end: int) -> None:
        self.end = max(end, self.start)
        if self.count:
            self.repeated = True
        else:
            self.count = 1

    def discard(self) -> None:
        self.start = 0
        self.end = 0
        self.count = 0
        self.repeated = False

    @property
    def captured_once(self) -> bool:
        return self.count == 1 and not self.repeated


@dataclass
class AccumulationBuffer:
    """Growable text storage plus the ranges and mined lists of one cycle."""

    capacity: int = DEFAULT_BUFFER_CAPACITY
    function: Range = field(default_factory=Range)
    arglist: Range = field(default_factory=Range)
    body: Range = field(default_factory=Range)
    description: Range = field(default_factory=Range)
    comment_start: Optional[int] = None
    statement_start: Optional[int] = None
    file_comment: bool = False
    todos: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    retvals: List[str] = field(default_factory=list)
    _chars: List[str] = field(default_factory=list, repr=False)

    def __len__(self) -> int:
        return len(self._chars)

    def append(self, char: str) -> bool:
        """Store ``char``; return True once the buffer is full and must be flushed."""
        self._chars.append(char)
        return len(self._chars) >= self.capacity

    def text(self, start: int = 0, end: Optional[int] = None) -> str:
        size = len(self._chars)
        if end is None or end > size:
            end = size
        start = min(max(start, 0), end)
        return "".join(self._chars[start:end])

    def emit(self, output: TextIO, start: int = 0, end: Optional[int] = None) -> None:
        chunk = self.text(start, end)
        if chunk:
            output.write(chunk)

    def reset(self) -> None:
        self._chars.clear()
        for span in (self.function, self.arglist, self.body, self.description):
            span.discard()
        self.comment_start = None
        self.statement_start = None
        self.file_comment = False
        self.todos = []
        self.notes = []
        self.retvals = []
