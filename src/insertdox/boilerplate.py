"""Boilerplate text injected into file header comments."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, TextIO

from insertdox.errors import BoilerplateError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 32768


class Boilerplate:
    """A file copied verbatim, in fixed-size chunks, into header comments."""

    def __init__(self, path: str, encoding: str = "utf-8") -> None:
        self.path = Path(path).expanduser()
        self.encoding = encoding
        self._text: Optional[str] = None

    def _open(self) -> TextIO:
        try:
            return self.path.open("r", encoding=self.encoding, errors="surrogateescape", newline="")
        except OSError as exc:
            raise BoilerplateError(f"unable to open '{self.path}' to read") from exc

    def copy_to(self, output: TextIO) -> None:
        """Write the boilerplate to ``output``, ending it with a newline."""
        last = "\n"
        with self._open() as handle:
            while True:
                chunk = handle.read(CHUNK_SIZE)
                if not chunk:
                    break
                output.write(chunk)
                last = chunk[-1]
        if last not in ("\n", "\r"):
            output.write("\n")

    def contained_in(self, text: str) -> bool:
        if self._text is None:
            with self._open() as handle:
                self._text = handle.read()
        needle = self._text.strip()
        return bool(needle) and needle in text
