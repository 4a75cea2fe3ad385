"""Tests for the guarded store and its reader/writer lock."""

from __future__ import annotations

import threading
import time

from filetable.models import Snapshot
from filetable.store import GuardedStore, ReadWriteLock


def test_empty_store_lookup() -> None:
    store = GuardedStore()
    assert store.lookup("cat") == ("", False)
    assert store.get("cat") is None
    assert store.get("cat", "x") == "x"
    assert "cat" not in store
    assert len(store) == 0


def test_replace_swaps_whole_snapshot() -> None:
    store = GuardedStore(Snapshot(entries={"cat": "dog", "a": "b"}))
    assert store.lookup("cat") == ("dog", True)

    store.replace(Snapshot(entries={"dog": "cat"}))

    assert store.lookup("cat") == ("", False)
    assert store.lookup("dog") == ("cat", True)
    assert len(store) == 1


def test_lookup_found_with_empty_value() -> None:
    store = GuardedStore(Snapshot(entries={"aaa": ""}))
    assert store.lookup("aaa") == ("", True)
    assert "aaa" in store


def test_snapshot_returns_installed_object() -> None:
    snapshot = Snapshot(entries={"a": "b"})
    store = GuardedStore(snapshot)
    assert store.snapshot() is snapshot


def test_readers_share_the_lock() -> None:
    lock = ReadWriteLock()
    inside = threading.Barrier(2, timeout=2.0)

    def reader() -> None:
        with lock.read_locked():
            inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=2.0)

    assert not any(t.is_alive() for t in threads)


def test_writer_waits_for_reader() -> None:
    lock = ReadWriteLock()
    order: list[str] = []
    reader_in = threading.Event()
    release_reader = threading.Event()

    def reader() -> None:
        with lock.read_locked():
            reader_in.set()
            release_reader.wait(2.0)
            order.append("reader-done")

    def writer() -> None:
        with lock.write_locked():
            order.append("writer")

    rt = threading.Thread(target=reader)
    rt.start()
    assert reader_in.wait(2.0)

    wt = threading.Thread(target=writer)
    wt.start()
    time.sleep(0.05)
    assert order == []

    release_reader.set()
    rt.join(2.0)
    wt.join(2.0)

    assert order == ["reader-done", "writer"]


def test_concurrent_readers_never_see_mixed_snapshots() -> None:
    old = Snapshot(entries={f"k{i}": "old" for i in range(50)})
    new = Snapshot(entries={f"k{i}": "new" for i in range(50)})
    store = GuardedStore(old)
    stop = threading.Event()
    mixed: list[set[str]] = []

    def reader() -> None:
        while not stop.is_set():
            values = set(store.snapshot().entries.values())
            if len(values) != 1:
                mixed.append(values)

    readers = [threading.Thread(target=reader) for _ in range(4)]
    for t in readers:
        t.start()
    for i in range(200):
        store.replace(new if i % 2 else old)
    stop.set()
    for t in readers:
        t.join(2.0)

    assert mixed == []
