"""Suppression of duplicate concurrent calls sharing a key."""

from __future__ import annotations

import threading
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a call made through :meth:`Group.do_future`."""

    value: T | None
    error: BaseException | None
    shared: bool


@dataclass(eq=False)
class _Call:
    done: threading.Event = field(default_factory=threading.Event)
    value: Any = None
    error: BaseException | None = None
    forgotten: bool = False
    dups: int = 0
    futures: list[Future] = field(default_factory=list)


class Group(Generic[T]):
    """A namespace in which only one call per key runs at a time.

    Callers that arrive while a call for the same key is in flight wait
    for it and receive its outcome instead of running their own.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: dict[str, _Call] = {}

    def do(self, key: str, fn: Callable[[], T]) -> tuple[T, bool]:
        """Run ``fn`` once for ``key`` and return ``(value, shared)``.

        ``shared`` tells whether the value went to more than one caller.
        An exception raised by ``fn`` is raised to every caller.
        """
        with self._lock:
            existing = self._calls.get(key)
            if existing is not None:
                existing.dups += 1
            else:
                call = _Call()
                self._calls[key] = call

        if existing is not None:
            existing.done.wait()
            if existing.error is not None:
                raise existing.error
            return existing.value, True

        self._do_call(call, key, fn)
        if call.error is not None:
            raise call.error
        return call.value, call.dups > 0

    def do_future(self, key: str, fn: Callable[[], T]) -> "Future[Result[T]]":
        """Like :meth:`do`, but return a future that resolves to a :class:`Result`."""
        future: Future[Result[T]] = Future()
        with self._lock:
            existing = self._calls.get(key)
            if existing is not None:
                existing.dups += 1
                existing.futures.append(future)
                return future
            call = _Call(futures=[future])
            self._calls[key] = call

        thread = threading.Thread(target=self._do_call, args=(call, key, fn), daemon=True)
        thread.start()
        return future

    def _do_call(self, call: _Call, key: str, fn: Callable[[], T]) -> None:
        try:
            call.value = fn()
        except BaseException as exc:  # noqa: BLE001 - handed to every waiter
            call.error = exc
        call.done.set()
        with self._lock:
            if not call.forgotten:
                self._calls.pop(key, None)
            futures = list(call.futures)
            shared = call.dups > 0
        result = Result(call.value, call.error, shared)
        for future in futures:
            future.set_result(result)

    def forget(self, key: str) -> None:
        """Stop deduplicating ``key``: later calls run anew even if one is in flight."""
        with self._lock:
            call = self._calls.pop(key, None)
            if call is not None:
                call.forgotten = True