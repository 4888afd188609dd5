import threading

from storagekit.sync_map import SyncMap


def test_store_and_load():
    m = SyncMap()
    m.store("a", 1)
    assert m.load("a") == (1, True)


def test_load_missing_key():
    m = SyncMap()
    assert m.load("missing") == (None, False)
    assert m.has("missing") is False


def test_store_overwrites():
    m = SyncMap()
    m.store("k", "first")
    m.store("k", "second")
    assert m.load("k") == ("second", True)
    assert m.count() == 1


def test_load_or_store_stores_then_loads():
    m = SyncMap()
    assert m.load_or_store("k", 10) == (10, False)
    assert m.load_or_store("k", 20) == (10, True)
    assert m.load("k") == (10, True)


def test_delete_removes_key():
    m = SyncMap()
    m.store("k", 1)
    m.delete("k")
    assert m.has("k") is False
    m.delete("k")
    assert m.empty() is True


def test_range_visits_all_entries():
    m = SyncMap()
    data = {"x": 1, "y": 2, "z": 3}
    for k, v in data.items():
        m.store(k, v)
    seen = {}

    m.range(lambda key, value: seen.__setitem__(key, value) is None)
    assert seen == data
    assert seen == m.to_dict()


def test_range_stops_when_callback_returns_false():
    m = SyncMap()
    for k in range(10):
        m.store(k, k)
    visited = []

    m.range(lambda key, value: visited.append((key, value)) is not None)
    assert len(visited) == 1
    key, value = visited[0]
    assert m.load(key) == (value, True)


def test_values_and_to_dict():
    m = SyncMap()
    m.store("a", 1)
    m.store("b", 2)
    assert sorted(m.values()) == [1, 2]
    assert m.to_dict() == {"a": 1, "b": 2}


def test_count_and_empty():
    m = SyncMap()
    assert m.empty() is True
    m.store("a", 1)
    m.store("b", 2)
    assert m.count() == 2
    assert m.empty() is False


def test_clear_empties_map():
    m = SyncMap()
    for k in "abc":
        m.store(k, k.upper())
    m.clear()
    assert m.to_dict() == {}
    assert m.empty() is True


def test_range_callback_may_delete():
    m = SyncMap()
    for k in range(5):
        m.store(k, k)

    def remove(key, value):
        m.delete(key)
        return True

    m.range(remove)
    assert m.count() == 0


def test_concurrent_stores_are_all_kept():
    m = SyncMap()

    def worker(base):
        for i in range(100):
            m.store(base * 100 + i, i)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert m.count() == 800
    assert len(m.to_dict()) == m.count()


def test_concurrent_load_or_store_single_winner():
    m = SyncMap()
    results = []
    lock = threading.Lock()

    def worker(n):
        value, loaded = m.load_or_store("key", n)
        with lock:
            results.append((value, loaded))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    stored = [r for r in results if not r[1]]
    assert len(stored) == 1
    winner = stored[0][0]
    assert all(value == winner for value, _ in results)
    assert m.load("key") == (winner, True)
    assert m.to_dict() == {"key": winner}