"""Sorted maps and sets with convenience helpers."""

from __future__ import annotations

import functools
from typing import (
    Any,
    Callable,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    Mapping,
    TypeVar,
    Union,
)

from sortedcontainers import SortedDict, SortedSet

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
T = TypeVar("T", bound=Hashable)
R = TypeVar("R", bound=Hashable)

KeyFunc = Callable[[Any], Any]


@functools.total_ordering
class Map(Generic[K, V]):
    """A mapping kept in key order.

    ``key`` orders the keys the way ``sorted(..., key=key)`` would. When
    ``default_factory`` is given, reading a missing key stores and returns
    ``default_factory()``; otherwise it raises KeyError.
    """

    def __init__(
        self,
        items: Union[Mapping[K, V], Iterable[tuple[K, V]]] = (),
        key: KeyFunc | None = None,
        default_factory: Callable[[], V] | None = None,
    ) -> None:
        self._data: SortedDict = SortedDict(key) if key is not None else SortedDict()
        self._data.update(items)
        self.default_factory = default_factory

    @property
    def key(self) -> KeyFunc | None:
        """The ordering function for keys, or None for natural order."""
        return self._data.key

    def _empty_like(self) -> Map[K, Any]:
        return Map(key=self.key)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[K]:
        return iter(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __getitem__(self, key: K) -> V:
        try:
            return self._data[key]
        except KeyError:
            if self.default_factory is None:
                raise
        value = self.default_factory()
        self._data[key] = value
        return value

    def __setitem__(self, key: K, value: V) -> None:
        self._data[key] = value

    def __delitem__(self, key: K) -> None:
        """Remove ``key``; a missing key raises KeyError."""
        self._data.pop(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Map):
            return NotImplemented
        return list(self._data.items()) == list(other._data.items())

    def __lt__(self, other: Map[K, V]) -> bool:
        if not isinstance(other, Map):
            return NotImplemented
        return list(self._data.items()) < list(other._data.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Map({dict(self._data.items())!r})"

    def items(self) -> list[tuple[K, V]]:
        """All (key, value) pairs in key order."""
        return list(self._data.items())

    def get(self, key: K, default: V | None = None) -> V | None:
        return self._data.get(key, default)

    def clear(self) -> None:
        self._data.clear()

    def put(self, key: K, value: V) -> None:
        """Set ``key`` to ``value``, replacing any previous value."""
        self._data[key] = value

    def remove(self, key: K) -> None:
        """Drop ``key`` if present; a missing key is ignored."""
        self._data.pop(key, None)

    def contains(self, key: K) -> bool:
        return key in self._data

    def keys(self) -> list[K]:
        """All keys in order."""
        return list(self._data.keys())

    def values(self) -> list[V]:
        """All values, in key order."""
        return list(self._data.values())

    def filter(self, predicate: Callable[[K, V], bool]) -> Map[K, V]:
        """A new map with the pairs for which ``predicate(key, value)`` holds."""
        result: Map[K, V] = self._empty_like()
        for k, v in self._data.items():
            if predicate(k, v):
                result.put(k, v)
        return result

    def map_values(self, mapper: Callable[[V], R]) -> Map[K, R]:
        """A new map with the same keys and ``mapper(value)`` as values."""
        result: Map[K, R] = self._empty_like()
        for k, v in self._data.items():
            result.put(k, mapper(v))
        return result


@functools.total_ordering
class Set(Generic[T]):
    """A set kept in sorted order; comparisons are lexicographic over elements."""

    def __init__(self, values: Iterable[T] = (), key: KeyFunc | None = None) -> None:
        self._data: SortedSet = SortedSet(values, key=key)

    @property
    def key(self) -> KeyFunc | None:
        """The ordering function, or None for natural order."""
        return self._data.key

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[T]:
        return iter(self._data)

    def __reversed__(self) -> Iterator[T]:
        return reversed(self._data)

    def __contains__(self, value: object) -> bool:
        return value in self._data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Set):
            return NotImplemented
        return list(self._data) == list(other._data)

    def __lt__(self, other: Set[T]) -> bool:
        if not isinstance(other, Set):
            return NotImplemented
        return list(self._data) < list(other._data)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Set({list(self._data)!r})"

    def clear(self) -> None:
        self._data.clear()

    def add(self, value: T) -> None:
        """Insert ``value``; an element already present is left as is."""
        self._data.add(value)

    def remove(self, value: T) -> None:
        """Drop ``value`` if present; a missing value is ignored."""
        self._data.discard(value)

    def contains(self, value: T) -> bool:
        return value in self._data

    def union_with(self, other: Set[T]) -> Set[T]:
        result = Set(self._data, key=self.key)
        result._data.update(other._data)
        return result

    def intersection_with(self, other: Set[T]) -> Set[T]:
        return Set((item for item in self._data if other.contains(item)), key=self.key)

    def difference_with(self, other: Set[T]) -> Set[T]:
        """Elements of this set that are not in ``other``."""
        return Set((item for item in self._data if not other.contains(item)), key=self.key)

    def is_subset_of(self, other: Set[T]) -> bool:
        if len(self) > len(other):
            return False
        return all(other.contains(item) for item in self._data)

    def is_superset_of(self, other: Set[T]) -> bool:
        return other.is_subset_of(self)

    def to_list(self) -> list[T]:
        """The elements in order."""
        return list(self._data)

    def filter(self, predicate: Callable[[T], bool]) -> Set[T]:
        return Set((item for item in self._data if predicate(item)), key=self.key)

    def map(self, mapper: Callable[[T], R]) -> Set[R]:
        """A new set, in natural order, of ``mapper(element)`` for each element."""
        return Set(mapper(item) for item in self._data)