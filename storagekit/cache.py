"""An in-memory key/value cache whose entries expire."""

from __future__ import annotations

import threading
import time
import weakref
from typing import Any, Callable, Hashable

DEFAULT_EXPIRATION = 0
NO_EXPIRATION = -1


def _janitor(ref: "weakref.ref[ExpiringCache]", stop: threading.Event, interval: float) -> None:
    while not stop.wait(interval):
        cache = ref()
        if cache is None:
            return
        cache.delete_expired()
        del cache


class ExpiringCache:
    """Thread-safe cache with a default lifetime and periodic cleanup.

    A ``ttl`` of ``None`` or 0 uses the default lifetime; a negative one
    never expires. A positive ``cleanup_interval`` starts a background
    thread that purges expired entries.
    """

    def __init__(
        self,
        default_expiration: float = 300.0,
        cleanup_interval: float = 60.0,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_expiration = default_expiration
        self.cleanup_interval = cleanup_interval
        self._clock = clock
        self._items: dict[Hashable, tuple[Any, float | None]] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        if cleanup_interval > 0:
            thread = threading.Thread(
                target=_janitor,
                args=(weakref.ref(self), self._stop, cleanup_interval),
                daemon=True,
            )
            thread.start()

    def _expiry(self, ttl: float | None) -> float | None:
        if ttl is None or ttl == DEFAULT_EXPIRATION:
            ttl = self.default_expiration
        return self._clock() + ttl if ttl > 0 else None

    def _alive(self, expires: float | None) -> bool:
        return expires is None or self._clock() <= expires

    def set(self, key: Hashable, value: Any, ttl: float | None = None) -> None:
        """Store a value, replacing any existing one."""
        expires = self._expiry(ttl)
        with self._lock:
            self._items[key] = (value, expires)

    def get(self, key: Hashable) -> Any:
        """Return the live value for ``key``, or None."""
        with self._lock:
            item = self._items.get(key)
        if item is None or not self._alive(item[1]):
            return None
        return item[0]

    def delete(self, key: Hashable) -> None:
        """Remove ``key`` if present."""
        with self._lock:
            self._items.pop(key, None)

    def delete_expired(self) -> None:
        """Drop every entry whose lifetime has passed."""
        with self._lock:
            expired = [k for k, (_, exp) in self._items.items() if not self._alive(exp)]
            for key in expired:
                del self._items[key]

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            item = self._items.get(key)
        return item is not None and self._alive(item[1])

    def __len__(self) -> int:
        """Number of stored entries, including expired ones not yet purged."""
        with self._lock:
            return len(self._items)

    def close(self) -> None:
        """Stop the background cleanup thread."""
        self._stop.set()

    def __enter__(self) -> "ExpiringCache":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def init_cache() -> ExpiringCache:
    """Create the service cache: five-minute entries, cleaned every minute."""
    return ExpiringCache(default_expiration=5 * 60.0, cleanup_interval=60.0)