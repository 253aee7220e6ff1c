"""A minimal scanf that reads its input one character at a time."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Iterator, Union

Value = Union[int, float, str]

_DIGITS = frozenset("0123456789")
_SPACE = frozenset(" \t\n\v\f\r")


def _is_digit(c: str) -> bool:
    return c in _DIGITS


class Scanf(ABC):
    """Scanner base class; subclasses supply the characters.

    Supported conversions are ``%d``, ``%f`` and ``%s``; any other conversion
    character is skipped without consuming input. Every other character in the
    format must match the next input character exactly, otherwise scanning
    stops. A conversion consumes the character that ends it.
    """

    @abstractmethod
    def read_char(self) -> str:
        """Return the next input character, or an empty string at end of input."""

    def scanf(self, fmt: str) -> list[Value]:
        """Scan input according to ``fmt``; return the values matched so far."""
        readers: dict[str, Callable[[], Value | None]] = {
            "d": self._read_int,
            "f": self._read_float,
            "s": self._read_str,
        }
        values: list[Value] = []
        chars = iter(fmt)
        for ch in chars:
            if ch != "%":
                if self.read_char() != ch:
                    return values
                continue
            reader = readers.get(next(chars, ""))
            if reader is None:
                continue
            value = reader()
            if value is None:
                return values
            values.append(value)
        return values

    def _read_int(self) -> int | None:
        c = self.read_char()
        negative = c == "-"
        if negative:
            c = self.read_char()
        if not _is_digit(c):
            return None
        value = 0
        while _is_digit(c):
            value = value * 10 + int(c)
            c = self.read_char()
        return -value if negative else value

    def _read_float(self) -> float:
        c = self.read_char()
        negative = c == "-"
        if negative:
            c = self.read_char()
        value = 0.0
        decimal_found = False
        frac_factor = 0.1
        while _is_digit(c) or c == ".":
            if c == ".":
                decimal_found = True
            elif not decimal_found:
                value = value * 10 + int(c)
            else:
                value += int(c) * frac_factor
                frac_factor /= 10.0
            c = self.read_char()
        return -value if negative else value

    def _read_str(self) -> str:
        chars: list[str] = []
        while True:
            c = self.read_char()
            if c in ("", "\0") or c in _SPACE:
                return "".join(chars)
            chars.append(c)


class _StringScanner(Scanf):
    def __init__(self, text: str) -> None:
        self._chars: Iterator[str] = iter(text)

    def read_char(self) -> str:
        return next(self._chars, "")


def scan_string(text: str, fmt: str) -> list[Value]:
    """Scan ``text`` according to ``fmt``."""
    return _StringScanner(text).scanf(fmt)