"""A printf target that prefixes each line with a tag."""

from __future__ import annotations

from typing import Protocol

from mcuasync.printf import Printf


class _Writer(Protocol):
    def write(self, text: str) -> object: ...


class Log(Printf):
    """Writes formatted text to ``output``, starting every line with ``[tag] ``."""

    def __init__(self, output: _Writer, tag: str) -> None:
        self._output = output
        self.tag = tag
        self._at_line_start = True

    def write_char(self, c: str) -> None:
        if self._at_line_start:
            self._at_line_start = False
            self._output.write(f"[{self.tag}] ")
        if c == "\n":
            self._at_line_start = True
        self._output.write(c)