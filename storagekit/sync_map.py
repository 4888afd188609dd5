"""A dictionary that is safe to share between threads."""

from __future__ import annotations

import threading
from typing import Callable, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class SyncMap(Generic[K, V]):
    """A mapping guarded by a lock, usable from many threads at once.

    Iteration through :meth:`range` works on a snapshot, so the callback
    may itself store into or delete from the map.
    """

    def __init__(self) -> None:
        self._data: dict[K, V] = {}
        self._lock = threading.Lock()

    def load(self, key: K) -> tuple[V | None, bool]:
        """Return ``(value, True)`` for a present key, else ``(None, False)``."""
        with self._lock:
            if key in self._data:
                return self._data[key], True
        return None, False

    def has(self, key: K) -> bool:
        """Tell whether ``key`` is present."""
        with self._lock:
            return key in self._data

    def store(self, key: K, value: V) -> None:
        """Set the value for ``key``."""
        with self._lock:
            self._data[key] = value

    def load_or_store(self, key: K, value: V) -> tuple[V, bool]:
        """Return the existing value and True, or store ``value`` and return it with False."""
        with self._lock:
            if key in self._data:
                return self._data[key], True
            self._data[key] = value
            return value, False

    def delete(self, key: K) -> None:
        """Remove ``key`` if present."""
        with self._lock:
            self._data.pop(key, None)

    def _snapshot(self) -> list[tuple[K, V]]:
        with self._lock:
            return list(self._data.items())

    def range(self, fn: Callable[[K, V], bool]) -> None:
        """Call ``fn(key, value)`` for each entry until it returns False."""
        for key, value in self._snapshot():
            if not fn(key, value):
                break

    def values(self) -> list[V]:
        """Return the values currently held."""
        return [value for _, value in self._snapshot()]

    def count(self) -> int:
        """Return the number of entries."""
        with self._lock:
            return len(self._data)

    def empty(self) -> bool:
        """Tell whether the map holds no entries."""
        return self.count() == 0

    def to_dict(self) -> dict[K, V]:
        """Return a plain copy of the contents."""
        return dict(self._snapshot())

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data