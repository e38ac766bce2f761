"""Type information for contiguous ranges of an address space."""

from __future__ import annotations

import bisect
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class MemRange:
    """A half-open address range [`first`, `last`) of a single type."""

    first: int
    last: int
    type: int

    @property
    def size(self) -> int:
        return self.last - self.first


class MemRangeSetFull(Exception):
    """Raised when an assignment would need more ranges than are allowed."""


class MemRangeSet:
    """Maps every address in [0, limit) to a small integer type.

    Adjacent ranges always have different types, and at most `maxsize`
    ranges are stored.
    """

    def __init__(self, limit: int, maxsize: int) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self._maxsize = maxsize
        # _addrs has one more entry than _types: the final entry is the limit.
        self._addrs = [0, limit]
        self._types = [0]

    @property
    def maxsize(self) -> int:
        return self._maxsize

    def limit(self) -> int:
        """Return the end of the covered address space."""
        return self._addrs[-1]

    def __len__(self) -> int:
        return len(self._types)

    def _range(self, i: int) -> MemRange:
        return MemRange(self._addrs[i], self._addrs[i + 1], self._types[i])

    def __iter__(self) -> Iterator[MemRange]:
        for i in range(len(self._types)):
            yield self._range(i)

    def find(self, addr: int) -> MemRange | None:
        """Return the range containing `addr`, or None if `addr` is past the limit."""
        if addr < 0:
            raise ValueError("address must be non-negative")
        i = bisect.bisect_right(self._addrs, addr) - 1
        if i >= len(self._types):
            return None
        return self._range(i)

    def type(self, addr: int) -> int:
        """Return the type of `addr`, which must lie in [0, limit)."""
        if not 0 <= addr < self.limit():
            raise ValueError(f"address {addr:#x} outside [0, {self.limit():#x})")
        found = self.find(addr)
        assert found is not None
        return found.type

    def _split(self, i: int, addr: int) -> None:
        self._addrs.insert(i + 1, addr)
        self._types.insert(i + 1, self._types[i])

    def set(self, first: int, last: int, type: int) -> None:
        """Assign `type` to the addresses [`first`, `last`).

        Raises MemRangeSetFull, leaving the set unchanged, if the result
        would need more than `maxsize` ranges.
        """
        if not 0 <= type <= 0xFF:
            raise ValueError("type must fit in one byte")
        if not 0 <= first <= last <= self.limit():
            raise ValueError(
                f"invalid range [{first:#x}, {last:#x}) for limit {self.limit():#x}"
            )
        if first == last:
            return

        addrs, types = self._addrs, self._types
        n = len(types)

        # lower bound of the insertion position
        i = 0
        while first >= addrs[i + 1]:
            i += 1
        # consolidate with the range on the left
        if first == addrs[i] and i > 0 and types[i - 1] == type:
            i -= 1
        if types[i] == type:
            first = addrs[i]

        # upper bound of the insertion position
        j = i
        while j < n and last >= addrs[j + 1]:
            j += 1
        if j < n and types[j] == type:
            j += 1
            last = addrs[j]
        elif j > i and first == addrs[i]:
            addrs[j] = last

        needed = n + (first != addrs[i]) + (last != addrs[j])
        if needed > self._maxsize:
            raise MemRangeSetFull(
                f"assignment needs {needed} ranges, at most {self._maxsize} allowed"
            )
        if first != addrs[i]:
            self._split(i, first)
            i += 1
            j += 1
        if last != addrs[j]:
            self._split(j, last)
            j += 1

        types[i] = type
        if i + 1 < j:
            del addrs[i + 1 : j]
            del types[i + 1 : j]

    def validate(self) -> None:
        """Check the structure's invariants, raising ValueError on a violation."""
        n = len(self._types)
        if not 0 < n <= self._maxsize:
            raise ValueError(f"bad range count {n}")
        if self._addrs[0] != 0:
            raise ValueError("first range does not start at 0")
        for i in range(n):
            if self._addrs[i] >= self._addrs[i + 1]:
                raise ValueError(f"range {i} is empty or out of order")
            if i > 0 and self._types[i] == self._types[i - 1]:
                raise ValueError(f"ranges {i - 1} and {i} share a type")

    def log_lines(self, prefix: str = "") -> list[str]:
        """Return one descriptive line per range."""
        return [
            f"{prefix}[{i}]: [{r.first:#x},{r.last:#x})={r.type}"
            for i, r in enumerate(self)
        ]