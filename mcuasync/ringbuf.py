"""A fixed-size ring buffer with one slot kept free to tell full from empty."""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")


class RingBuffer(Generic[T]):
    """Single-producer, single-consumer circular buffer.

    ``size`` slots are allocated; at most ``size - 1`` items are held.
    """

    def __init__(self, size: int) -> None:
        if size <= 1:
            raise ValueError("ring buffer size must be greater than 1")
        self._size = size
        self._slots: list[T | None] = [None] * size
        self._head = 0  # write position
        self._tail = 0  # read position

    @property
    def capacity(self) -> int:
        """Maximum number of items the buffer holds."""
        return self._size - 1

    def __len__(self) -> int:
        return (self._head - self._tail) % self._size

    def __iter__(self) -> Iterator[T]:
        return iter(self.peek())

    def is_empty(self) -> bool:
        return self._tail == self._head

    def is_full(self) -> bool:
        return (self._head + 1) % self._size == self._tail

    def front(self) -> T:
        """Return the oldest item without removing it."""
        if self.is_empty():
            raise IndexError("front of empty ring buffer")
        return self._slots[self._tail]  # type: ignore[return-value]

    def pop(self, n: int = 1) -> int:
        """Drop up to ``n`` oldest items; return how many were dropped."""
        count = min(n, len(self))
        if count > 0:
            self._tail = (self._tail + count) % self._size
            return count
        return 0

    def push(self, value: T) -> bool:
        """Append ``value``; return False if the buffer is full."""
        nxt = (self._head + 1) % self._size
        if nxt == self._tail:
            return False
        self._slots[self._head] = value
        self._head = nxt
        return True

    def push_many(self, values: Iterable[T]) -> int:
        """Append items until one does not fit; return how many went in."""
        pushed = 0
        for value in values:
            if not self.push(value):
                break
            pushed += 1
        return pushed

    def clear(self) -> None:
        self._tail = self._head

    def is_continuous(self) -> bool:
        """True when the stored items occupy one unbroken run of slots."""
        if self.is_empty():
            return True
        return self._tail < self._head

    def peek(self, n: int | None = None) -> list[T]:
        """Return up to ``n`` oldest items (all when ``n`` is None) without removing them."""
        count = len(self) if n is None else max(0, min(n, len(self)))
        return [self._slots[(self._tail + i) % self._size] for i in range(count)]  # type: ignore[misc]