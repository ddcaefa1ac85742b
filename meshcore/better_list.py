"""A growable list with explicit capacity management."""

from __future__ import annotations

from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar("T")

_MIN_GROWTH = 32


class BetterList(Generic[T]):
    """A list whose backing capacity grows by doubling, at least to 32.

    ``capacity`` reserves room up front. With ``seek_to_end`` the list
    starts out holding ``capacity`` elements, each produced by calling
    ``default`` (or ``None`` when no factory is given).
    """

    def __init__(
        self,
        capacity: int = 0,
        seek_to_end: bool = False,
        default: Callable[[], T] | None = None,
    ) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._capacity = capacity
        self._items: list[T] = []
        if seek_to_end and capacity > 0:
            self._items = [
                default() if default is not None else None  # type: ignore[misc]
                for _ in range(capacity)
            ]

    def _check_index(self, index: int) -> int:
        if not isinstance(index, int):
            raise TypeError("BetterList indices must be integers")
        if index < 0 or index >= len(self._items):
            raise IndexError("BetterList index out of range")
        return index

    def __getitem__(self, index: int) -> T:
        return self._items[self._check_index(index)]

    def __setitem__(self, index: int, value: T) -> None:
        self._items[self._check_index(index)] = value

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __repr__(self) -> str:
        return f"BetterList({self._items!r}, capacity={self._capacity})"

    def capacity(self) -> int:
        """Number of elements the list can hold before it grows."""
        return self._capacity

    def to_list(self) -> list[T]:
        """A plain-list copy of the elements."""
        return list(self._items)

    def clear(self) -> None:
        """Drop all elements but keep the reserved capacity."""
        self._items.clear()

    def release(self) -> None:
        """Drop all elements and the reserved capacity."""
        self._items.clear()
        self._capacity = 0

    def _grow_if_full(self) -> None:
        if len(self._items) == self._capacity:
            self._capacity = max(self._capacity * 2, _MIN_GROWTH)

    def add(self, item: T) -> None:
        """Append an element."""
        self._grow_if_full()
        self._items.append(item)

    def insert(self, index: int, item: T) -> None:
        """Insert before index; an index at or past the end appends."""
        if index < 0:
            raise IndexError("BetterList index out of range")
        self._grow_if_full()
        if index < len(self._items):
            self._items.insert(index, item)
        else:
            self._items.append(item)

    def remove(self, item: T) -> None:
        """Remove the first element equal to item."""
        try:
            self._items.remove(item)
        except ValueError:
            raise ValueError("item is not in the BetterList") from None

    def remove_at(self, index: int) -> None:
        """Remove the element at index, shifting later ones down."""
        del self._items[self._check_index(index)]

    def pop(self) -> T:
        """Remove and return the last element."""
        if not self._items:
            raise IndexError("Better list is empty, nothing pop")
        return self._items.pop()