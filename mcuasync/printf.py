"""A small printf engine that emits formatted output one character at a time."""

from __future__ import annotations

import enum
import operator
from abc import ABC, abstractmethod
from typing import Any, Callable, Sequence

_NTOA_BUFSIZ = 32
_FTOA_BUFSIZ = 32
_THRES_MAX = float(0x7FFFFFFF)
_POW10 = tuple(10.0 ** i for i in range(10))
_DIGITS = "0123456789"
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF
_POINTER_WIDTH = 16


class _Flag(enum.IntFlag):
    NONE = 0
    ZEROPAD = 1 << 0
    LEFT = 1 << 1
    PLUS = 1 << 2
    SPACE = 1 << 3
    HASH = 1 << 4
    UPPERCASE = 1 << 5
    CHAR = 1 << 6
    SHORT = 1 << 7
    LONG = 1 << 8
    LONG_LONG = 1 << 9
    PRECISION = 1 << 10


_FLAG_CHARS = {
    "0": _Flag.ZEROPAD,
    "-": _Flag.LEFT,
    "+": _Flag.PLUS,
    " ": _Flag.SPACE,
    "#": _Flag.HASH,
}


def _to_signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _sign_char(negative: bool, flags: _Flag) -> str:
    if negative:
        return "-"
    if flags & _Flag.PLUS:
        return "+"
    if flags & _Flag.SPACE:
        return " "
    return ""


class Printf(ABC):
    """Formatter base class; subclasses decide where each character goes."""

    @abstractmethod
    def write_char(self, c: str) -> None:
        """Emit a single character."""

    def _emit(self, text: str) -> int:
        for ch in text:
            self.write_char(ch)
        return len(text)

    def _finish(self, buf: list[str], width: int, flags: _Flag) -> int:
        nput = 0
        if not (flags & _Flag.LEFT) and not (flags & _Flag.ZEROPAD):
            nput += self._emit(" " * (width - len(buf)))
        nput += self._emit("".join(reversed(buf)))
        if flags & _Flag.LEFT and nput < width:
            nput += self._emit(" " * (width - nput))
        return nput

    def _ntoa(self, buf: list[str], negative: bool, base: int, prec: int,
              width: int, flags: _Flag) -> int:
        if not flags & _Flag.LEFT:
            while len(buf) < prec and len(buf) < _NTOA_BUFSIZ:
                buf.append("0")
            while flags & _Flag.ZEROPAD and len(buf) < width and len(buf) < _NTOA_BUFSIZ:
                buf.append("0")
        if flags & _Flag.HASH:
            if (not flags & _Flag.PRECISION and buf
                    and (len(buf) == prec or len(buf) == width)):
                buf.pop()
                if buf and base == 16:
                    buf.pop()
            if len(buf) < _NTOA_BUFSIZ:
                if base == 16:
                    buf.append("X" if flags & _Flag.UPPERCASE else "x")
                elif base == 2:
                    buf.append("b")
            if len(buf) < _NTOA_BUFSIZ:
                buf.append("0")
        sign = _sign_char(negative, flags)
        if buf and len(buf) == width and sign:
            buf.pop()
        if len(buf) < _NTOA_BUFSIZ and sign:
            buf.append(sign)
        return self._finish(buf, width, flags)

    def _itoa(self, value: int, negative: bool, base: int, prec: int,
              width: int, flags: _Flag) -> int:
        buf: list[str] = []
        if not value:
            flags &= ~_Flag.HASH
        if not flags & _Flag.PRECISION or value:
            alpha = ord("A") if flags & _Flag.UPPERCASE else ord("a")
            while True:
                digit = value % base
                buf.append(chr(48 + digit) if digit < 10 else chr(alpha + digit - 10))
                value //= base
                if not value or len(buf) >= _NTOA_BUFSIZ:
                    break
        return self._ntoa(buf, negative, base, prec, width, flags)

    def _ftoa(self, value: float, prec: int, width: int, flags: _Flag) -> int:
        buf: list[str] = []
        negative = value < 0
        if negative:
            value = -value
        if not flags & _Flag.PRECISION:
            prec = 6
        while len(buf) < _FTOA_BUFSIZ and prec > 9:
            buf.append("0")
            prec -= 1
        # Values beyond the fixed-point range (and NaN) produce no output.
        if value != value or value > _THRES_MAX:
            return 0

        whole = int(value)
        tmp = (value - whole) * _POW10[prec]
        frac = int(tmp)
        diff = tmp - frac
        if diff > 0.5:
            frac += 1
            if frac >= _POW10[prec]:
                frac = 0
                whole += 1
        elif diff == 0.5 and (frac == 0 or frac & 1):
            frac += 1

        if prec == 0:
            diff = value - whole
            if diff > 0.5:
                whole += 1
            elif diff == 0.5 and whole & 1:
                whole += 1
        else:
            count = prec
            while len(buf) < _FTOA_BUFSIZ:
                count -= 1
                buf.append(chr(48 + frac % 10))
                frac //= 10
                if not frac:
                    break
            while len(buf) < _FTOA_BUFSIZ and count > 0:
                count -= 1
                buf.append("0")
            if len(buf) < _FTOA_BUFSIZ:
                buf.append(".")

        while len(buf) < _FTOA_BUFSIZ:
            buf.append(chr(48 + whole % 10))
            whole //= 10
            if not whole:
                break

        if not flags & _Flag.LEFT and flags & _Flag.ZEROPAD:
            while len(buf) < width and len(buf) < _FTOA_BUFSIZ:
                buf.append("0")
        sign = _sign_char(negative, flags)
        if len(buf) == width and sign:
            buf.pop()
        if len(buf) < _FTOA_BUFSIZ and sign:
            buf.append(sign)
        return self._finish(buf, width, flags)

    def vprintf(self, fmt: str, args: Sequence[Any]) -> int:
        """Format ``args`` according to ``fmt``; return the count the engine reports."""
        if not fmt:
            return 0
        arg_iter = iter(args)

        def next_arg() -> Any:
            try:
                return next(arg_iter)
            except StopIteration:
                raise TypeError("not enough arguments for format string") from None

        nput = 0
        i = 0
        n = len(fmt)
        while i < n:
            if fmt[i] != "%":
                self.write_char(fmt[i])
                nput += 1
                i += 1
                continue
            i += 1

            flags = _Flag.NONE
            while i < n and fmt[i] in _FLAG_CHARS:
                flags |= _FLAG_CHARS[fmt[i]]
                i += 1

            width = 0
            if i < n and fmt[i] in _DIGITS:
                start = i
                while i < n and fmt[i] in _DIGITS:
                    i += 1
                width = int(fmt[start:i])
            elif i < n and fmt[i] == "*":
                w = operator.index(next_arg())
                if w < 0:
                    flags |= _Flag.LEFT
                    width = -w
                else:
                    width = w
                i += 1

            precision = 0
            if i < n and fmt[i] == ".":
                flags |= _Flag.PRECISION
                i += 1
                if i < n and fmt[i] in _DIGITS:
                    start = i
                    while i < n and fmt[i] in _DIGITS:
                        i += 1
                    precision = int(fmt[start:i])
                elif i < n and fmt[i] == "*":
                    precision = max(operator.index(next_arg()), 0)
                    i += 1

            if fmt.startswith("ll", i):
                flags |= _Flag.LONG | _Flag.LONG_LONG
                i += 2
            elif fmt.startswith("l", i):
                flags |= _Flag.LONG
                i += 1
            elif fmt.startswith("hh", i):
                flags |= _Flag.SHORT | _Flag.CHAR
                i += 2
            elif fmt.startswith("h", i):
                flags |= _Flag.SHORT
                i += 1
            elif i < n and fmt[i] in "tjz":
                flags |= _Flag.LONG
                i += 1

            if i >= n:
                break
            spec = fmt[i]
            handler = self._handlers().get(spec)
            if handler is not None:
                nput += handler(spec, flags, width, precision, next_arg)
            else:
                # Unknown conversions echo the character and skip the one after it.
                self.write_char(spec)
                nput += 1
                i += 1
            i += 1
        return nput

    def _handlers(self) -> dict[str, Callable[..., int]]:
        table: dict[str, Callable[..., int]] = {c: self._conv_int for c in "diuxXob"}
        table.update({"f": self._conv_float, "F": self._conv_float,
                      "c": self._conv_char, "s": self._conv_str,
                      "p": self._conv_pointer, "%": self._conv_percent})
        return table

    def _conv_int(self, spec, flags, width, precision, next_arg) -> int:
        if spec in "xX":
            base = 16
        elif spec == "o":
            base = 8
        elif spec == "b":
            base = 2
        else:
            base = 10
            flags &= ~_Flag.HASH
        if spec == "X":
            flags |= _Flag.UPPERCASE
        if spec not in "di":
            flags &= ~(_Flag.PLUS | _Flag.SPACE)
        if flags & _Flag.PRECISION:
            flags &= ~_Flag.ZEROPAD
        wide = bool(flags & (_Flag.LONG | _Flag.LONG_LONG))
        value = operator.index(next_arg())
        if spec in "di":
            value = _to_signed(value, 64 if wide else 32)
            self._itoa(abs(value), value < 0, base, precision, width, flags)
        else:
            value &= _MASK64 if wide else _MASK32
            self._itoa(value, False, base, precision, width, flags)
        return 0

    def _conv_float(self, spec, flags, width, precision, next_arg) -> int:
        self._ftoa(float(next_arg()), precision, width, flags)
        return 0

    def _conv_char(self, spec, flags, width, precision, next_arg) -> int:
        arg = next_arg()
        ch = arg[:1] if isinstance(arg, str) else chr(operator.index(arg) & 0xFF)
        pad = " " * (width - 1)
        nput = 0
        if not flags & _Flag.LEFT:
            nput += self._emit(pad)
        nput += self._emit(ch)
        if flags & _Flag.LEFT:
            nput += self._emit(pad)
        return nput

    def _conv_str(self, spec, flags, width, precision, next_arg) -> int:
        arg = next_arg()
        text = "(null)" if arg is None else str(arg)
        if flags & _Flag.PRECISION:
            text = text[:precision]
        pad = " " * (width - len(text))
        nput = 0
        if not flags & _Flag.LEFT:
            nput += self._emit(pad)
        nput += self._emit(text)
        if flags & _Flag.LEFT:
            nput += self._emit(pad)
        return nput

    def _conv_pointer(self, spec, flags, width, precision, next_arg) -> int:
        flags |= _Flag.ZEROPAD | _Flag.UPPERCASE
        nput = self._emit("0x")
        value = operator.index(next_arg()) & _MASK64
        self._itoa(value, False, 16, precision, _POINTER_WIDTH, flags)
        return nput

    def _conv_percent(self, spec, flags, width, precision, next_arg) -> int:
        return self._emit("%")

    def printf(self, fmt: str, *args: Any) -> int:
        """Format and emit ``args`` according to ``fmt``."""
        return self.vprintf(fmt, args)

    def println(self, fmt: str, *args: Any) -> int:
        """Like :meth:`printf`, followed by a newline."""
        n = self.vprintf(fmt, args)
        self.write_char("\n")
        return n + 1


class _StringPrinter(Printf):
    def __init__(self) -> None:
        self.chars: list[str] = []

    def write_char(self, c: str) -> None:
        self.chars.append(c)


def format_printf(fmt: str, *args: Any) -> str:
    """Return the text that :meth:`Printf.printf` would emit."""
    printer = _StringPrinter()
    printer.vprintf(fmt, args)
    return "".join(printer.chars)