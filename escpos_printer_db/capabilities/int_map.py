"""Sorted integer-keyed maps for per-profile capability tables.

Printer capabilities stored in these maps are addressed by the byte sent to
the printer in a command. Selecting "font D" sends ``ESC M 3``, so
``profile.fonts.get(3)`` describes font D, if the printer has one.

Entries live in one contiguous tuple ordered by key and are found by binary
search, which keeps the tables small and their iteration order fixed.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Iterator
from operator import itemgetter
from typing import Any, Generic, TypeVar

from ..const import MAX_KEY, MIN_KEY

T = TypeVar("T")

_key = itemgetter(0)


def _check_key(key: Any) -> int:
    if isinstance(key, bool) or not isinstance(key, int):
        raise TypeError(f"IntMap keys must be int, got {type(key).__name__}")
    if not MIN_KEY <= key <= MAX_KEY:
        raise ValueError(f"IntMap key {key} outside {MIN_KEY}..{MAX_KEY}")
    return key


class IntMap(Generic[T]):
    """Immutable mapping from a byte to ``T``."""

    __slots__ = ("_entries",)

    _entries: Any

    def __init__(self, entries: tuple[tuple[int, T], ...] = ()) -> None:
        # Unchecked; use from_entries() for caller-supplied data
        self._entries = entries

    @classmethod
    def empty(cls) -> IntMap[Any]:
        """Return the shared empty map."""
        return _EMPTY

    @classmethod
    def from_entries(cls, entries: Iterable[tuple[int, T]]) -> IntMap[T]:
        """Create a map from entries already ordered by key.

        Raises:
            ValueError: If keys are not strictly increasing (out of order or
                duplicated) or fall outside the byte range.
        """
        items = tuple((_check_key(k), v) for k, v in entries)
        if not items:
            return _EMPTY
        prev = items[0][0]
        for cur, _ in items[1:]:
            if cur <= prev:
                raise ValueError(f"invalid entries array: key {cur} follows {prev}")
            prev = cur
        return cls(items)

    def _index(self, key: Any) -> int | None:
        if isinstance(key, bool) or not isinstance(key, int):
            return None
        entries = self._entries
        i = bisect_left(entries, key, key=_key)
        if i < len(entries) and entries[i][0] == key:
            return i
        return None

    def get(self, key: int, default: T | None = None) -> T | None:
        """Look up a value by key, returning ``default`` when absent."""
        i = self._index(key)
        if i is None:
            return default
        return self._entries[i][1]  # type: ignore[no-any-return]

    def iter(self) -> Iterator[tuple[int, T]]:
        """Iterate over ``(key, value)`` pairs in ascending key order."""
        return iter(tuple(self._entries))

    def keys(self) -> list[int]:
        return [k for k, _ in self._entries]

    def values(self) -> list[T]:
        return [v for _, v in self._entries]

    def to_owned(self) -> OwnedIntMap[T]:
        """Return a mutable copy of this map."""
        owned: OwnedIntMap[T] = OwnedIntMap()
        owned._entries = list(self._entries)
        return owned

    def __iter__(self) -> Iterator[tuple[int, T]]:
        return self.iter()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return self._index(key) is not None

    def __getitem__(self, key: int) -> T:
        i = self._index(key)
        if i is None:
            raise KeyError(key)
        return self._entries[i][1]  # type: ignore[no-any-return]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntMap):
            return NotImplemented
        return tuple(self._entries) == tuple(other._entries)

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}: {v!r}" for k, v in self._entries)
        return f"{type(self).__name__}({{{inner}}})"


_EMPTY: IntMap[Any] = IntMap()


class OwnedIntMap(IntMap[T]):
    """Mutable version of :class:`IntMap` for profiles built in code.

    Duplicate keys in the constructor input or in an ``extend`` batch keep
    the last value written. Not safe for concurrent mutation.
    """

    __slots__ = ()

    _entries: list[tuple[int, T]]

    def __init__(self, pairs: Iterable[tuple[int, T]] = ()) -> None:
        super().__init__()
        self._entries = []
        self.extend(pairs)

    def insert(self, key: int, value: T) -> T | None:
        """Insert an entry, returning the previous value at ``key`` if any."""
        _check_key(key)
        entries = self._entries
        i = bisect_left(entries, key, key=_key)
        if i < len(entries) and entries[i][0] == key:
            previous = entries[i][1]
            entries[i] = (key, value)
            return previous
        entries.insert(i, (key, value))
        return None

    def extend(self, pairs: Iterable[tuple[int, T]]) -> None:
        """Add all ``pairs``, or none of them if consuming ``pairs`` fails."""
        snapshot = list(self._entries)
        try:
            for k, v in pairs:
                self._entries.append((_check_key(k), v))
        except BaseException:
            self._entries[:] = snapshot
            raise
        if len(self._entries) == len(snapshot):
            return
        # Stable sort keeps insertion order among equal keys
        self._entries.sort(key=_key)
        merged: list[tuple[int, T]] = []
        for entry in self._entries:
            if merged and merged[-1][0] == entry[0]:
                merged[-1] = entry
            else:
                merged.append(entry)
        self._entries[:] = merged

    def as_int_map(self) -> IntMap[T]:
        """Return an immutable snapshot of the current entries."""
        if not self._entries:
            return _EMPTY
        return IntMap(tuple(self._entries))

    # Mutable, so not hashable
    __hash__ = None  # type: ignore[assignment]
