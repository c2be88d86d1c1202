"""A singly ordered sequence with head and tail operations and lookup by key."""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")


class LinkedList(Generic[T]):
    """Ordered collection supporting insertion and removal at both ends.

    When ``key`` is given, lookups compare ``key(item)`` with the searched
    value; otherwise items are compared directly.
    """

    def __init__(
        self,
        items: Iterable[T] = (),
        key: Optional[Callable[[T], Any]] = None,
    ) -> None:
        self._items: deque[T] = deque(items)
        self._key = key

    def _matches(self, item: T, value: Any) -> bool:
        return (self._key(item) if self._key is not None else item) == value

    def append(self, value: T) -> None:
        """Add ``value`` at the tail."""
        self._items.append(value)

    def appendleft(self, value: T) -> None:
        """Add ``value`` at the head."""
        self._items.appendleft(value)

    def popleft(self) -> T:
        """Remove and return the head item."""
        if not self._items:
            raise IndexError("cannot remove from an empty list")
        return self._items.popleft()

    def pop(self) -> T:
        """Remove and return the tail item."""
        if not self._items:
            raise IndexError("cannot remove from an empty list")
        return self._items.pop()

    def remove(self, value: Any) -> None:
        """Remove the first item matching ``value``."""
        if not self._items:
            raise ValueError("cannot remove from an empty list")
        for index, item in enumerate(self._items):
            if self._matches(item, value):
                del self._items[index]
                return
        raise ValueError(f"{value!r} is not in the list")

    def find(self, value: Any) -> Optional[T]:
        """Return the first item matching ``value``, or None."""
        return next((item for item in self._items if self._matches(item, value)), None)

    def clear(self) -> None:
        """Remove every item."""
        self._items.clear()

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, value: object) -> bool:
        return any(self._matches(item, value) for item in self._items)

    def __repr__(self) -> str:
        return f"LinkedList({list(self._items)!r})"