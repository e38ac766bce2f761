"""Formatted output into character sinks.

A `Printer` turns a printf-style format and its arguments into a stream of
character codes handed to `putc`. Supported conversions are `d i u x X p s c`
plus `C`, which sets the printer's color instead of printing. Flags
`# 0 - space + '`, field widths, precisions (both possibly `*`) and the
length modifiers `l t z h` are understood. Integer arguments without a
length modifier are treated as 32-bit values, with one as 64-bit values.
"""

from __future__ import annotations

import abc
from collections.abc import Iterator
from typing import Any

COLOR_GRAY = 0x0700

_ALT = 1 << 0
_ZERO = 1 << 1
_LEFTJUSTIFY = 1 << 2
_SPACEPOSITIVE = 1 << 3
_PLUSPOSITIVE = 1 << 4
_THOUSANDS = 1 << 5
_NUMERIC = 1 << 6
_SIGNED = 1 << 7
_NEGATIVE = 1 << 8
_ALT2 = 1 << 9

_FLAG_BITS = {
    "#": _ALT,
    "0": _ZERO,
    "-": _LEFTJUSTIFY,
    " ": _SPACEPOSITIVE,
    "+": _PLUSPOSITIVE,
    "'": _THOUSANDS,
}

_UPPER_DIGITS = "0123456789ABCDEF"
_LOWER_DIGITS = "0123456789abcdef"
_NUMBUF_SIZE = 32
_MASK32 = (1 << 32) - 1
_MASK64 = (1 << 64) - 1


def _wrap_signed(x: int, bits: int) -> int:
    x &= (1 << bits) - 1
    return x - (1 << bits) if x >> (bits - 1) else x


def _print_number(val: int, base: int, flags: int) -> str:
    """Render `val`; a negative `base` selects lower-case hex digits."""
    digits = _UPPER_DIGITS
    if base < 0:
        digits = _LOWER_DIGITS
        base = -base
    group = 3 if base == 10 else 4
    separator = "," if base == 10 else "'"
    out: list[str] = []
    run = 0
    while True:
        if flags & _THOUSANDS and run == group:
            out.append(separator)
            run = 0
        else:
            val, digit = divmod(val, base)
            out.append(digits[digit])
            run += 1
        if val == 0 or len(out) == _NUMBUF_SIZE - 1:
            break
    return "".join(reversed(out))


def _as_text(arg: Any) -> str:
    if isinstance(arg, (bytes, bytearray, memoryview)):
        text = bytes(arg).decode("latin-1")
    else:
        text = str(arg)
    return text.split("\0", 1)[0]


def _as_char(arg: Any) -> str:
    if isinstance(arg, str):
        if len(arg) != 1:
            raise ValueError("%c expects a single character")
        code = ord(arg)
    else:
        code = int(arg) & 0xFF
    return chr(code) if code else ""


class Printer(abc.ABC):
    """Formats text and hands each resulting character code to `putc`."""

    def __init__(self) -> None:
        self.color = COLOR_GRAY

    @abc.abstractmethod
    def putc(self, c: int) -> None:
        """Emit one character code."""

    def printf(self, format: str, *args: Any) -> None:
        """Format `args` according to `format` and emit the result."""
        arg_iter: Iterator[Any] = iter(args)

        def next_arg() -> Any:
            try:
                return next(arg_iter)
            except StopIteration:
                raise TypeError("not enough arguments for format string") from None

        n = len(format)

        def peek(i: int) -> str:
            return format[i] if i < n else ""

        i = 0
        while i < n:
            ch = format[i]
            if ch != "%":
                self.putc(ord(ch))
                i += 1
                continue
            i += 1

            flags = 0
            while peek(i) in _FLAG_BITS and peek(i):
                flags |= _FLAG_BITS[format[i]]
                i += 1

            width = -1
            c = peek(i)
            if c and "1" <= c <= "9":
                width = 0
                while peek(i).isdigit() and peek(i).isascii():
                    width = 10 * width + int(format[i])
                    i += 1
            elif c == "*":
                width = int(next_arg())
                i += 1

            precision = -1
            if peek(i) == ".":
                i += 1
                c = peek(i)
                if c and c.isascii() and c.isdigit():
                    precision = 0
                    while peek(i).isdigit() and peek(i).isascii():
                        precision = 10 * precision + int(format[i])
                        i += 1
                elif c == "*":
                    precision = int(next_arg())
                    i += 1
                precision = max(precision, 0)

            length = 0
            c = peek(i)
            if c and c in "ltz":
                length = 1
                i += 1
            elif c == "h":
                i += 1

            conv = peek(i)
            if conv:
                i += 1
            base = 10
            num = 0
            data = ""
            if conv in ("d", "i"):
                x = _wrap_signed(int(next_arg()), 64 if length else 32)
                if x < 0:
                    flags |= _NEGATIVE
                    num = -x
                else:
                    num = x
                flags |= _NUMERIC | _SIGNED
            elif conv in ("u", "x", "X"):
                num = int(next_arg()) & (_MASK64 if length else _MASK32)
                base = {"u": 10, "x": -16, "X": 16}[conv]
                flags |= _NUMERIC
            elif conv == "p":
                num = int(next_arg()) & _MASK64
                base = -16
                flags |= _ALT | _ALT2 | _NUMERIC
            elif conv == "s":
                data = _as_text(next_arg())
            elif conv == "C":
                self.color = int(next_arg())
                continue
            elif conv == "c":
                data = _as_char(next_arg())
            else:
                data = conv or "%"

            if flags & _NUMERIC:
                data = _print_number(num, base, flags)

            prefix = ""
            if flags & _NUMERIC and flags & _SIGNED:
                if flags & _NEGATIVE:
                    prefix = "-"
                elif flags & _PLUSPOSITIVE:
                    prefix = "+"
                elif flags & _SPACEPOSITIVE:
                    prefix = " "
            elif (
                flags & _NUMERIC
                and flags & _ALT
                and base in (16, -16)
                and (num or flags & _ALT2)
            ):
                prefix = "0x" if base == -16 else "0X"

            if precision >= 0 and not flags & _NUMERIC:
                datalen = min(len(data), precision)
            else:
                datalen = len(data)

            if flags & _NUMERIC and precision >= 0:
                zeros = max(precision - datalen, 0)
            elif (
                flags & _NUMERIC
                and flags & _ZERO
                and not flags & _LEFTJUSTIFY
                and datalen + len(prefix) < width
            ):
                zeros = width - datalen - len(prefix)
            else:
                zeros = 0

            width -= datalen + zeros + len(prefix)
            if not flags & _LEFTJUSTIFY:
                while width > 0:
                    self.putc(ord(" "))
                    width -= 1
            for out in prefix + "0" * zeros + data[:datalen]:
                self.putc(ord(out))
            while width > 0:
                self.putc(ord(" "))
                width -= 1


class StringPrinter(Printer):
    """Collects output in a buffer of `size` characters, NUL included.

    Characters past the buffer are counted but dropped. `size` of None
    means unbounded.
    """

    def __init__(self, size: int | None = None) -> None:
        super().__init__()
        if size is not None and size < 0:
            raise ValueError("size must be non-negative")
        self._size = size
        self._chars: list[str] = []
        self._count = 0

    @property
    def count(self) -> int:
        """Number of characters produced, including those dropped."""
        return self._count

    def putc(self, c: int) -> None:
        if self._size is None or len(self._chars) < self._size:
            self._chars.append(chr(c))
        self._count += 1

    def getvalue(self) -> str:
        """Return the buffer's contents as a terminated string would read."""
        if self._size is None:
            return "".join(self._chars)
        if self._size == 0:
            return ""
        return "".join(self._chars[: self._size - 1])


def snprintf(size: int, format: str, *args: Any) -> tuple[str, int]:
    """Format into a buffer of `size` characters.

    Returns the text that fits (at most `size - 1` characters) and the
    length the full output would have had.
    """
    printer = StringPrinter(size)
    printer.printf(format, *args)
    return printer.getvalue(), printer.count


def sprintf(format: str, *args: Any) -> str:
    """Return the formatted text in full."""
    printer = StringPrinter()
    printer.printf(format, *args)
    return printer.getvalue()