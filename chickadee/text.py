"""Character classification and C-style string comparison helpers.

String arguments may be `str` or bytes-like. A NUL character ends a string
early, as it would in a NUL-terminated buffer. Comparisons work on
character codes and return -1, 0 or 1.
"""

from __future__ import annotations

from typing import Union

Char = Union[int, str]
Text = Union[str, bytes, bytearray, memoryview]


def _code(c: Char) -> int:
    if isinstance(c, str):
        if len(c) != 1:
            raise ValueError("expected a single character")
        return ord(c)
    return int(c)


def _like(original: Char, code: int) -> Char:
    return chr(code) if isinstance(original, str) else code


def _cstr(s: Text) -> list[int]:
    """Return the character codes of `s` up to, not including, the first NUL."""
    codes = [ord(ch) for ch in s] if isinstance(s, str) else list(bytes(s))
    try:
        return codes[: codes.index(0)]
    except ValueError:
        return codes


def _cmp(x: int, y: int) -> int:
    return (x > y) - (x < y)


def isspace(c: Char) -> bool:
    """Return True for tab, newline, vertical tab, form feed, return and space."""
    code = _code(c)
    return 9 <= code <= 13 or code == 32


def isdigit(c: Char) -> bool:
    return 0 <= _code(c) - ord("0") < 10


def islower(c: Char) -> bool:
    return 0 <= _code(c) - ord("a") < 26


def isupper(c: Char) -> bool:
    return 0 <= _code(c) - ord("A") < 26


def isalpha(c: Char) -> bool:
    return 0 <= (_code(c) | 0x20) - ord("a") < 26


def isalnum(c: Char) -> bool:
    return isalpha(c) or isdigit(c)


def tolower(c: Char) -> Char:
    """Return the ASCII lower-case form of `c`, in the same form as given."""
    code = _code(c)
    return _like(c, code + 32 if isupper(code) else code)


def toupper(c: Char) -> Char:
    """Return the ASCII upper-case form of `c`, in the same form as given."""
    code = _code(c)
    return _like(c, code - 32 if islower(code) else code)


def strnlen(s: Text, maxlen: int) -> int:
    """Return the length of `s`, but at most `maxlen`."""
    return min(len(_cstr(s)), maxlen)


def _compare(a: list[int], b: list[int], limit: int | None, fold: bool) -> int:
    i = 0
    while True:
        if limit is not None and i >= limit:
            return 0
        ac = a[i] if i < len(a) else 0
        bc = b[i] if i < len(b) else 0
        if fold:
            ac = int(tolower(ac))
            bc = int(tolower(bc))
        if ac == 0 or bc == 0 or ac != bc:
            return _cmp(ac, bc)
        i += 1


def strcmp(a: Text, b: Text) -> int:
    return _compare(_cstr(a), _cstr(b), None, False)


def strncmp(a: Text, b: Text, n: int) -> int:
    return _compare(_cstr(a), _cstr(b), n, False)


def strcasecmp(a: Text, b: Text) -> int:
    return _compare(_cstr(a), _cstr(b), None, True)


def strncasecmp(a: Text, b: Text, n: int) -> int:
    return _compare(_cstr(a), _cstr(b), n, True)


def strchr(s: Text, c: Char) -> int | None:
    """Return the index of the first `c` in `s`, or None.

    Searching for the NUL character finds the end of the string.
    """
    codes = _cstr(s)
    target = _code(c) & 0xFF if not isinstance(c, str) else _code(c)
    if target == 0:
        return len(codes)
    try:
        return codes.index(target)
    except ValueError:
        return None


def strstr(haystack: Text, needle: Text) -> int | None:
    """Return the index of the first occurrence of `needle`, or None."""
    hs = _cstr(haystack)
    ns = _cstr(needle)
    if not ns:
        return 0
    for i in range(len(hs) - len(ns) + 1):
        if hs[i : i + len(ns)] == ns:
            return i
    return None


def memcmp(a: bytes | bytearray | memoryview, b: bytes | bytearray | memoryview, n: int) -> int:
    """Compare the first `n` bytes of `a` and `b`."""
    if n < 0 or len(a) < n or len(b) < n:
        raise ValueError("buffers are shorter than the requested length")
    for x, y in zip(bytes(a[:n]), bytes(b[:n])):
        if x != y:
            return _cmp(x, y)
    return 0


def strlcpy(src: Text, maxlen: int) -> tuple[Text, int]:
    """Copy `src` into a buffer of `maxlen` characters, NUL included.

    Returns the copied text (at most `maxlen - 1` characters) and the full
    length of `src`, which exceeds the copy's length when it was truncated.
    """
    if maxlen < 0:
        raise ValueError("maxlen must be non-negative")
    codes = _cstr(src)
    keep = min(len(codes), maxlen - 1) if maxlen else 0
    if isinstance(src, str):
        copied: Text = "".join(map(chr, codes[:keep]))
    else:
        copied = bytes(codes[:keep])
    return copied, len(codes)