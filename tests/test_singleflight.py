import threading

import pytest

from storagekit.singleflight import Group, Result

TIMEOUT = 5


def test_do_returns_value_not_shared():
    group = Group()
    assert group.do("key", lambda: "bar") == ("bar", False)


def test_do_raises_error():
    group = Group()

    def fail():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        group.do("key", fail)


def test_do_runs_again_after_completion():
    group = Group()
    calls = []

    def fn():
        calls.append(1)
        return len(calls)

    assert group.do("key", fn) == (1, False)
    assert group.do("key", fn) == (2, False)


def test_do_future_returns_result():
    group = Group()
    future = group.do_future("key", lambda: "bar")
    assert future.result(timeout=TIMEOUT) == Result("bar", None, False)


def test_do_future_carries_error():
    group = Group()
    error = ValueError("bad")

    def fail():
        raise error

    result = group.do_future("key", fail).result(timeout=TIMEOUT)
    assert result.error is error
    assert result.value is None


def _start_blocking_call(group, key, value):
    started = threading.Event()
    release = threading.Event()
    outcome = {}

    def fn():
        started.set()
        release.wait(TIMEOUT)
        return value

    def runner():
        outcome["result"] = group.do(key, fn)

    thread = threading.Thread(target=runner)
    thread.start()
    assert started.wait(TIMEOUT)
    return thread, release, outcome


def test_duplicate_calls_share_result():
    group = Group()
    thread, release, outcome = _start_blocking_call(group, "key", "first")
    duplicate_calls = []

    def duplicate():
        duplicate_calls.append(1)
        return "second"

    futures = [group.do_future("key", duplicate) for _ in range(3)]
    release.set()
    thread.join(TIMEOUT)

    assert outcome["result"] == ("first", True)
    for future in futures:
        assert future.result(timeout=TIMEOUT) == Result("first", None, True)
    assert duplicate_calls == []


def test_waiting_do_receives_shared_value():
    group = Group()
    thread, release, outcome = _start_blocking_call(group, "key", 42)
    waiter_result = {}
    future = group.do_future("key", lambda: -1)

    def waiter():
        waiter_result["value"] = group.do("key", lambda: -1)

    # The future guarantees the call is still in flight while the waiter joins.
    waiter_thread = threading.Thread(target=waiter)
    waiter_thread.start()
    release.set()
    thread.join(TIMEOUT)
    waiter_thread.join(TIMEOUT)

    assert future.result(timeout=TIMEOUT).value == 42
    assert waiter_result["value"][1] is True
    assert waiter_result["value"][0] in (42, -1)


def test_forget_lets_new_call_run():
    group = Group()
    thread, release, outcome = _start_blocking_call(group, "key", "old")
    group.forget("key")

    future = group.do_future("key", lambda: "new")
    assert future.result(timeout=TIMEOUT) == Result("new", None, False)

    release.set()
    thread.join(TIMEOUT)
    assert outcome["result"] == ("old", False)


def test_different_keys_do_not_share():
    group = Group()
    thread, release, outcome = _start_blocking_call(group, "a", "from-a")
    future = group.do_future("b", lambda: "from-b")
    assert future.result(timeout=TIMEOUT) == Result("from-b", None, False)
    release.set()
    thread.join(TIMEOUT)
    assert outcome["result"] == ("from-a", False)