"""Bit arithmetic helpers and a mutable view over an array of 64-bit words."""

from __future__ import annotations

from collections.abc import MutableSequence

_WORD_BITS = 64
_WORD_MASK = (1 << _WORD_BITS) - 1


def msb(x: int) -> int:
    """Return the index of the most significant one bit of `x`, plus one (0 for 0)."""
    if x < 0:
        raise ValueError("msb requires a non-negative integer")
    return x.bit_length()


def lsb(x: int) -> int:
    """Return the index of the least significant one bit of `x`, plus one (0 for 0)."""
    return (x & -x).bit_length()


def _check_unsigned(x: int, m: int) -> None:
    if x < 0:
        raise ValueError("value must be non-negative")
    if m <= 0:
        raise ValueError("multiple must be positive")


def round_down(x: int, m: int) -> int:
    """Return the largest multiple of `m` that is <= `x`."""
    _check_unsigned(x, m)
    return x - x % m


def round_up(x: int, m: int) -> int:
    """Return the smallest multiple of `m` that is >= `x`."""
    _check_unsigned(x, m)
    return round_down(x + m - 1, m)


def round_down_pow2(x: int) -> int:
    """Return the largest power of 2 that is <= `x` (0 for 0)."""
    return 1 << (msb(x) - 1) if x else 0


def round_up_pow2(x: int) -> int:
    """Return the smallest power of 2 that is >= `x` (0 for 0)."""
    if x < 0:
        raise ValueError("round_up_pow2 requires a non-negative integer")
    return 1 << msb(x - 1) if x else 0


class BitsetView:
    """A view of the first `n` bits stored in a mutable sequence of 64-bit words.

    Bit `i` lives in word `i // 64` at position `i % 64`. Assignments modify
    the underlying words in place.
    """

    def __init__(self, words: MutableSequence[int], n: int) -> None:
        if n < 0 or n > len(words) * _WORD_BITS:
            raise ValueError("bit count does not fit in the given words")
        self._words = words
        self._n = n

    @property
    def words(self) -> MutableSequence[int]:
        """The underlying word storage."""
        return self._words

    def __len__(self) -> int:
        return self._n

    def _check_index(self, i: int) -> None:
        if not 0 <= i < self._n:
            raise IndexError(f"bit index {i} out of range")

    def __getitem__(self, i: int) -> bool:
        self._check_index(i)
        word, off = divmod(i, _WORD_BITS)
        return bool((self._words[word] >> off) & 1)

    def __setitem__(self, i: int, value: bool) -> None:
        self._check_index(i)
        word, off = divmod(i, _WORD_BITS)
        if value:
            self._words[word] |= 1 << off
        else:
            self._words[word] &= ~(1 << off) & _WORD_MASK

    def _find(self, i: int, n: int | None, ones: bool) -> int:
        if not 0 <= i <= self._n:
            raise IndexError(f"bit index {i} out of range")
        if n is None or n < 0:
            limit = self._n
        else:
            limit = min(self._n - i, n) + i
        pos = i
        while pos < limit:
            word_index, off = divmod(pos, _WORD_BITS)
            word = self._words[word_index] & _WORD_MASK
            if not ones:
                word = ~word & _WORD_MASK
            word >>= off
            if word:
                return min(limit, pos + lsb(word) - 1)
            pos = (word_index + 1) * _WORD_BITS
        return limit

    def find_lsb(self, i: int = 0, n: int | None = None) -> int:
        """Return the lowest index >= `i` of a set bit, examining at most `n` bits.

        Returns the search limit when no such bit exists.
        """
        return self._find(i, n, True)

    def find_lsz(self, i: int = 0, n: int | None = None) -> int:
        """Return the lowest index >= `i` of a clear bit, examining at most `n` bits.

        Returns the search limit when no such bit exists.
        """
        return self._find(i, n, False)