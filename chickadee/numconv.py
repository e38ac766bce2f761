"""Integer parsing and formatting with error detection."""

from __future__ import annotations

from chickadee.errors import ChickadeeError, Errno
from chickadee.text import isspace

ULONG_MAX = (1 << 64) - 1
LONG_MIN = -(1 << 63)
_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _check_base(base: int) -> None:
    if not 2 <= base <= 36:
        raise ValueError(f"unsupported base {base}")


def _char(s: str, i: int) -> str:
    return s[i] if i < len(s) else "\0"


def _digit(ch: str, base: int) -> int | None:
    o = ord(ch)
    if ord("0") <= o < ord("0") + base:
        return o - ord("0")
    if ord("a") <= o < ord("a") + base - 10:
        return o - ord("a") + 10
    if ord("A") <= o < ord("A") + base - 10:
        return o - ord("A") + 10
    return None


def _parse_unsigned(s: str, start: int, base: int) -> tuple[int, int, bool]:
    """Scan digits from `start`; return (value, end, overflowed)."""
    x = 0
    overflow = False
    pos = start
    while pos < len(s):
        digit = _digit(s[pos], base)
        if digit is None:
            break
        if x > (ULONG_MAX - digit) // base:
            overflow = True
        else:
            x = x * base + digit
        pos += 1
    return x, pos, overflow


def _as_str(s: str | bytes | bytearray) -> str:
    return s if isinstance(s, str) else bytes(s).decode("latin-1")


def from_chars(s: str | bytes, base: int = 10, signed: bool = False) -> tuple[int, int]:
    """Parse an integer from the start of `s`.

    Returns the value and the index just past the digits. Raises
    ChickadeeError with E_INVAL if no digits are present and with E_RANGE if
    the value does not fit in 64 bits (63 bits plus sign when `signed`).
    """
    _check_base(base)
    text = _as_str(s)
    negative = signed and text.startswith("-")
    start = 1 if negative else 0
    x, end, overflow = _parse_unsigned(text, start, base)
    if end == start:
        raise ChickadeeError(Errno.E_INVAL, "no digits to parse")
    if overflow:
        raise ChickadeeError(Errno.E_RANGE, "value out of range")
    if signed:
        bound = (1 << 63) - (0 if negative else 1)
        if x > bound:
            raise ChickadeeError(Errno.E_RANGE, "value out of range")
        return (-x if negative else x), end
    return x, end


def to_chars(value: int, base: int = 10, size: int | None = None) -> str:
    """Format `value` in `base` with lower-case digits.

    Raises ChickadeeError with E_OVERFLOW if the result needs more than
    `size` characters.
    """
    _check_base(base)
    if size is not None and size < 0:
        raise ValueError("size must be non-negative")
    if size == 0:
        raise ChickadeeError(Errno.E_OVERFLOW, "no room for digits")
    if value < 0:
        if value < LONG_MIN:
            raise ValueError("value does not fit in a signed 64-bit integer")
        return "-" + to_chars(-value, base, None if size is None else size - 1)
    if value > ULONG_MAX:
        raise ValueError("value does not fit in an unsigned 64-bit integer")
    digits = []
    while True:
        value, digit = divmod(value, base)
        digits.append(_DIGITS[digit])
        if not value:
            break
    if size is not None and len(digits) > size:
        raise ChickadeeError(Errno.E_OVERFLOW, "value does not fit")
    return "".join(reversed(digits))


def _prepare(s: str, base: int) -> tuple[bool, int, int]:
    """Skip space and sign and detect the base prefix; return (negative, pos, base)."""
    pos = 0
    while pos < len(s) and isspace(s[pos]):
        pos += 1
    negative = _char(s, pos) == "-"
    if negative or _char(s, pos) == "+":
        pos += 1
    c0, c1 = _char(s, pos), _char(s, pos + 1)
    if base == 0:
        if c0 == "0":
            if c1 in "xX":
                base, pos = 16, pos + 2
            elif c1 in "oO":
                base, pos = 8, pos + 2
            elif c1 in "bB":
                base, pos = 2, pos + 2
            else:
                base = 8
        else:
            base = 10
    elif base == 16 and c0 == "0" and c1 in "xX":
        pos += 2
    _check_base(base)
    return negative, pos, base


def strtoul(s: str | bytes, base: int = 0) -> tuple[int, int]:
    """Parse an unsigned integer the way C `strtoul` does.

    Returns the value and the index where parsing stopped (0 when nothing
    was parsed). Out-of-range values saturate; a leading minus negates
    modulo 2**64.
    """
    text = _as_str(s)
    negative, pos, base = _prepare(text, base)
    x, end, overflow = _parse_unsigned(text, pos, base)
    if end == pos:
        return 0, 0
    if overflow:
        x = ULONG_MAX
    return ((-x) & ULONG_MAX if negative else x), end


def strtol(s: str | bytes, base: int = 0) -> tuple[int, int]:
    """Parse a signed integer the way C `strtol` does, saturating on overflow."""
    text = _as_str(s)
    negative, pos, base = _prepare(text, base)
    x, end, overflow = _parse_unsigned(text, pos, base)
    if end == pos:
        return 0, 0
    bound = (1 << 63) - (0 if negative else 1)
    if overflow or x > bound:
        x = bound
    return (-x if negative else x), end