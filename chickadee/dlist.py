"""Intrusive doubly linked lists.

Items carry their own `ListLinks` in an attribute; a `LinkedList` is told
the attribute's name and threads items together through it.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


class ListLinks:
    """The link fields an item needs to be a member of one list."""

    __slots__ = ("_next", "_prev", "_owner")

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Mark these links as not belonging to any list."""
        self._next: ListLinks | None = None
        self._prev: ListLinks | None = None
        self._owner: Any = None

    def is_linked(self) -> bool:
        """Return True if these links are part of some list."""
        return self._next is not None

    def _erase(self) -> None:
        if self._next is None or self._prev is None:
            raise ValueError("item is not in a list")
        if self._next._prev is not self or self._prev._next is not self:
            raise RuntimeError("list links are corrupted")
        self._prev._next = self._next
        self._next._prev = self._prev
        self.reset()

    def _insert_before(self, position: ListLinks, owner: Any) -> None:
        if position._next is None or position._prev is None:
            raise ValueError("position is not in a list")
        if self.is_linked():
            raise ValueError("item is already in a list")
        self._prev = position._prev
        self._next = position
        self._owner = owner
        position._prev._next = self
        position._prev = self


class LinkedList:
    """A doubly linked list of items linked through their `member` attribute."""

    def __init__(self, member: str = "links") -> None:
        self._member = member
        self._head = ListLinks()
        self.reset()

    @property
    def member(self) -> str:
        return self._member

    def reset(self) -> None:
        """Make the list empty, ignoring its current contents."""
        self._head._next = self._head
        self._head._prev = self._head

    def _links(self, x: Any) -> ListLinks:
        return getattr(x, self._member)

    def __bool__(self) -> bool:
        return self._head._next is not self._head

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __iter__(self) -> Iterator[Any]:
        node = self._head._next
        while node is not self._head:
            following = node._next
            yield node._owner
            node = following

    def front(self) -> Any:
        """Return the first item, or None if the list is empty."""
        return self._head._next._owner if self else None

    def back(self) -> Any:
        """Return the last item, or None if the list is empty."""
        return self._head._prev._owner if self else None

    def _linked(self, x: Any) -> ListLinks:
        links = self._links(x)
        if not links.is_linked():
            raise ValueError("item is not in a list")
        return links

    def next(self, x: Any) -> Any:
        """Return the item after `x`, or None if `x` is last."""
        following = self._linked(x)._next
        return None if following is self._head else following._owner

    def prev(self, x: Any) -> Any:
        """Return the item before `x`, or None if `x` is first."""
        preceding = self._linked(x)._prev
        return None if preceding is self._head else preceding._owner

    def push_front(self, x: Any) -> None:
        self._links(x)._insert_before(self._head._next, x)

    def pop_front(self) -> Any:
        """Remove and return the first item, or return None if empty."""
        x = self.front()
        if x is not None:
            self.erase(x)
        return x

    def push_back(self, x: Any) -> None:
        self._links(x)._insert_before(self._head, x)

    def pop_back(self) -> Any:
        """Remove and return the last item, or return None if empty."""
        x = self.back()
        if x is not None:
            self.erase(x)
        return x

    def erase(self, x: Any) -> None:
        """Remove `x` from the list."""
        self._links(x)._erase()

    def insert(self, position: Any, x: Any) -> None:
        """Insert `x` before `position`, or at the tail if `position` is None."""
        target = self._head if position is None else self._linked(position)
        self._links(x)._insert_before(target, x)

    def swap(self, other: LinkedList) -> None:
        """Exchange the contents of this list with those of `other`."""
        if other._member != self._member:
            raise ValueError("lists link through different members")
        self._head, other._head = other._head, self._head