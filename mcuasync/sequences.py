"""Fixed-size arrays and linked-list style sequences with helper methods."""

from __future__ import annotations

import functools
import heapq
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")
R = TypeVar("R")


@functools.total_ordering
class Array(Generic[T]):
    """A sequence whose length is fixed when it is created.

    ``values`` fill the slots from the front (extra values are dropped) and
    any remaining slots take ``default``.
    """

    def __init__(self, size: int, values: Iterable[T] = (), default: Any = None) -> None:
        if size < 0:
            raise ValueError("array size must not be negative")
        items = list(values)[:size]
        items.extend([default] * (size - len(items)))
        self._items: list[T] = items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __reversed__(self) -> Iterator[T]:
        return reversed(self._items)

    def __getitem__(self, pos: int) -> T:
        return self._items[pos]

    def __setitem__(self, pos: int, value: T) -> None:
        if isinstance(pos, slice):
            raise TypeError("slice assignment would change the array size")
        self._items[pos] = value

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        return self._items == other._items

    def __lt__(self, other: Array[T]) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        return self._items < other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Array({len(self._items)}, {self._items!r})"

    def at(self, pos: int) -> T:
        """The element at ``pos``; IndexError outside ``0 <= pos < len``."""
        if not 0 <= pos < len(self._items):
            raise IndexError(f"array index {pos} out of range")
        return self._items[pos]

    def fill(self, value: T) -> None:
        self._items = [value] * len(self._items)

    def contains(self, value: T) -> bool:
        return value in self._items

    def index_of(self, value: T) -> int:
        """Index of the first element equal to ``value``, or -1."""
        return next((i for i, item in enumerate(self._items) if item == value), -1)

    def to_list(self) -> list[T]:
        return list(self._items)

    def filter(self, predicate: Callable[[T], bool]) -> list[T]:
        return [item for item in self._items if predicate(item)]

    def map(self, mapper: Callable[[T], R]) -> list[R]:
        return [mapper(item) for item in self._items]

    def sort(self, key: Callable[[T], Any] | None = None) -> None:
        self._items.sort(key=key)

    def reverse(self) -> None:
        self._items.reverse()

    def count_if(self, value_or_predicate: T | Callable[[T], bool]) -> int:
        """Count elements matching a predicate, or equal to a value."""
        if callable(value_or_predicate):
            predicate = value_or_predicate
            return sum(1 for item in self._items if predicate(item))
        return self._items.count(value_or_predicate)


def make_array(*args: T) -> Array[T]:
    """An Array sized to hold exactly ``args``."""
    return Array(len(args), args)


@functools.total_ordering
class List(Generic[T]):
    """A growable sequence with positional insert, splice and merge."""

    def __init__(self, values: Iterable[T] = ()) -> None:
        self._items: list[T] = list(values)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __reversed__(self) -> Iterator[T]:
        return reversed(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, List):
            return NotImplemented
        return self._items == other._items

    def __lt__(self, other: List[T]) -> bool:
        if not isinstance(other, List):
            return NotImplemented
        return self._items < other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"List({self._items!r})"

    def append(self, value: T) -> None:
        self._items.append(value)

    def prepend(self, value: T) -> None:
        self._items.insert(0, value)

    def at(self, index: int) -> T:
        """The element at ``index``; IndexError outside ``0 <= index < len``."""
        if not 0 <= index < len(self._items):
            raise IndexError(f"list index {index} out of range")
        return self._items[index]

    def insert_at(self, index: int, value: T) -> None:
        """Insert ``value`` before position ``index`` (``len`` appends)."""
        if not 0 <= index <= len(self._items):
            raise IndexError(f"list index {index} out of range")
        self._items.insert(index, value)

    def erase_at(self, index: int) -> T:
        """Remove and return the element at ``index``."""
        if not 0 <= index < len(self._items):
            raise IndexError(f"list index {index} out of range")
        return self._items.pop(index)

    def remove(self, value: T) -> int:
        """Remove every element equal to ``value``; return how many went."""
        before = len(self._items)
        self._items = [item for item in self._items if item != value]
        return before - len(self._items)

    def contains(self, value: T) -> bool:
        return value in self._items

    def sort(self, key: Callable[[T], Any] | None = None) -> None:
        self._items.sort(key=key)

    def reverse(self) -> None:
        self._items.reverse()

    def unique(self) -> None:
        """Collapse each run of consecutive equal elements into one."""
        result: list[T] = []
        for item in self._items:
            if not result or result[-1] != item:
                result.append(item)
        self._items = result

    def merge(self, other: List[T]) -> None:
        """Merge the sorted ``other`` into this sorted list, emptying ``other``.

        Equal elements keep their order, with this list's first.
        """
        if other is self:
            return
        self._items = list(heapq.merge(self._items, other._items))
        other._items = []

    def splice(self, pos: int, other: List[T], first: int | None = None,
               last: int | None = None) -> None:
        """Move elements of ``other`` into this list before index ``pos``.

        With neither ``first`` nor ``last`` all of ``other`` moves; with only
        ``first`` the single element there moves; with both, ``[first, last)``.
        """
        src_len = len(other._items)
        if first is None:
            if other is self:
                return
            first, last = 0, src_len
        elif last is None:
            if not 0 <= first < src_len:
                raise IndexError(f"splice position {first} out of range")
            last = first + 1
        if not 0 <= first <= last <= src_len:
            raise IndexError("splice range out of bounds")
        if not 0 <= pos <= len(self._items):
            raise IndexError(f"list index {pos} out of range")
        moved = other._items[first:last]
        if other is self:
            if first < pos < last:
                raise ValueError("splice position lies inside the moved range")
            if pos >= last:
                pos -= last - first
        del other._items[first:last]
        self._items[pos:pos] = moved

    def filter(self, predicate: Callable[[T], bool]) -> List[T]:
        return List(item for item in self._items if predicate(item))

    def map(self, mapper: Callable[[T], R]) -> List[R]:
        return List(mapper(item) for item in self._items)

    def to_list(self) -> list[T]:
        return list(self._items)