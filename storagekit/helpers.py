"""Small general-purpose helpers: flags, sequences, times and debouncing."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Iterable, Sequence, TypeVar

S = TypeVar("S")
D = TypeVar("D")

_CN_TZ = timezone(timedelta(hours=8))
_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def is_bool(*args: bool) -> bool:
    """Return the first flag given, or False when none is given."""
    return bool(args) and bool(args[0])


def is_canceled(event: threading.Event) -> bool:
    """Tell whether a cancellation event has been set."""
    return event.is_set()


def slice_equal(a: Sequence[Any], b: Sequence[Any]) -> bool:
    """Tell whether two sequences hold equal items in the same order."""
    return len(a) == len(b) and all(x == y for x, y in zip(a, b))


def slice_contains(arr: Iterable[Any], v: Any) -> bool:
    """Tell whether ``v`` is among the items of ``arr``."""
    return any(item == v for item in arr)


def slice_convert(src: Iterable[S], convert: Callable[[S], D]) -> list[D]:
    """Convert every item; an exception from ``convert`` propagates."""
    return [convert(item) for item in src]


def must_slice_convert(src: Iterable[S], convert: Callable[[S], D]) -> list[D]:
    """Convert every item with a conversion that cannot fail."""
    return [convert(item) for item in src]


def must_parse_cn_time(text: str) -> datetime:
    """Parse 'YYYY-MM-DD HH:MM:SS' as China Standard Time (UTC+8).

    Unparseable text yields the zero time (year 1, UTC).
    """
    try:
        parsed = datetime.strptime(text, "%Y-%m-%d %H:%M:%S")
    except ValueError:
        return _ZERO_TIME
    return parsed.replace(tzinfo=_CN_TZ)


def _seconds(interval: float | timedelta) -> float:
    if isinstance(interval, timedelta):
        return interval.total_seconds()
    return float(interval)


def _start_timer(seconds: float, f: Callable[[], Any]) -> threading.Timer:
    timer = threading.Timer(seconds, f)
    timer.daemon = True
    timer.start()
    return timer


def new_debounce(interval: float | timedelta) -> Callable[[Callable[[], Any]], None]:
    """Return a debouncer: each call cancels the pending one and schedules ``f``."""
    seconds = _seconds(interval)
    lock = threading.Lock()
    timer: threading.Timer | None = None

    def debounce(f: Callable[[], Any]) -> None:
        nonlocal timer
        with lock:
            if timer is not None:
                timer.cancel()
            timer = _start_timer(seconds, f)

    return debounce


def new_debounce2(interval: float | timedelta, f: Callable[[], Any]) -> Callable[[], None]:
    """Return a trigger that (re)schedules ``f`` to run ``interval`` after the last call."""
    seconds = _seconds(interval)
    lock = threading.Lock()
    timer: threading.Timer | None = None

    def trigger() -> None:
        nonlocal timer
        with lock:
            if timer is not None:
                timer.cancel()
            timer = _start_timer(seconds, f)

    return trigger