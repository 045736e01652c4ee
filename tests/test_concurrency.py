"""
Tests for Concurrent Access

These tests verify the ReadWriteLock and the store's behaviour under
parallel callers:
- Readers share the lock
- Writers are exclusive and are not starved by readers
- Concurrent puts never leave an entry disagreeing with the type registry

Run with: python -m pytest tests/test_concurrency.py -v
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from attrkv.store.lock import ReadWriteLock
from attrkv.store.store import AttributeStore, DataTypeError

TIMEOUT = 5.0


class TestReadWriteLock:
    """Test ReadWriteLock semantics."""

    def test_readers_share(self, rwlock: ReadWriteLock):
        """Test several readers hold the lock at the same time."""
        num_readers = 4
        barrier = threading.Barrier(num_readers, timeout=TIMEOUT)

        def reader():
            with rwlock.read_locked():
                # Every reader must be inside for the barrier to release
                barrier.wait()

        threads = [threading.Thread(target=reader) for _ in range(num_readers)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(TIMEOUT)

        assert not any(t.is_alive() for t in threads)
        assert not barrier.broken
        assert rwlock.readers == 0

    def test_writer_excludes_readers(self, rwlock: ReadWriteLock):
        """Test a reader waits while a writer holds the lock."""
        entered = threading.Event()

        def reader():
            with rwlock.read_locked():
                entered.set()

        with rwlock.write_locked():
            assert rwlock.write_held
            t = threading.Thread(target=reader)
            t.start()
            assert not entered.wait(0.2)

        assert entered.wait(TIMEOUT)
        t.join(TIMEOUT)
        assert not rwlock.write_held

    def test_writer_waits_for_readers(self, rwlock: ReadWriteLock):
        """Test a writer waits until active readers leave."""
        acquired = threading.Event()

        def writer():
            with rwlock.write_locked():
                acquired.set()

        rwlock.acquire_read()
        t = threading.Thread(target=writer)
        t.start()
        assert not acquired.wait(0.2)

        rwlock.release_read()
        assert acquired.wait(TIMEOUT)
        t.join(TIMEOUT)

    def test_writers_exclude_each_other(self, rwlock: ReadWriteLock):
        """Test only one writer is inside at a time."""
        inside = 0
        peak = 0
        guard = threading.Lock()

        def writer():
            nonlocal inside, peak
            for _ in range(50):
                with rwlock.write_locked():
                    with guard:
                        inside += 1
                        peak = max(peak, inside)
                    time.sleep(0.0005)
                    with guard:
                        inside -= 1

        with ThreadPoolExecutor(max_workers=4) as pool:
            for future in [pool.submit(writer) for _ in range(4)]:
                future.result(TIMEOUT)

        assert peak == 1

    def test_waiting_writer_blocks_new_readers(self, rwlock: ReadWriteLock):
        """Test new readers queue behind a waiting writer."""
        writer_done = threading.Event()
        late_reader_in = threading.Event()
        order = []

        def writer():
            with rwlock.write_locked():
                order.append("writer")
            writer_done.set()

        def late_reader():
            with rwlock.read_locked():
                order.append("reader")
                late_reader_in.set()

        rwlock.acquire_read()
        w = threading.Thread(target=writer)
        w.start()
        # Let the writer register as waiting
        time.sleep(0.1)

        r = threading.Thread(target=late_reader)
        r.start()
        assert not late_reader_in.wait(0.2)

        rwlock.release_read()
        assert writer_done.wait(TIMEOUT)
        assert late_reader_in.wait(TIMEOUT)
        w.join(TIMEOUT)
        r.join(TIMEOUT)

        assert order == ["writer", "reader"]

    def test_release_without_acquire(self, rwlock: ReadWriteLock):
        with pytest.raises(RuntimeError):
            rwlock.release_read()
        with pytest.raises(RuntimeError):
            rwlock.release_write()

    def test_lock_released_on_exception(self, rwlock: ReadWriteLock):
        """Test the context managers release when the body raises."""
        with pytest.raises(KeyError):
            with rwlock.write_locked():
                raise KeyError("boom")

        assert not rwlock.write_held
        with rwlock.read_locked():
            assert rwlock.readers == 1


class TestStoreConcurrency:
    """Test AttributeStore under parallel callers."""

    def test_concurrent_puts_distinct_keys(self, store: AttributeStore):
        """Test parallel puts to different keys all land."""
        def worker(worker_id: int):
            for i in range(100):
                store.put(f"k{worker_id:02d}-{i:03d}", [("n", str(i)), ("w", f"w{worker_id}")])

        with ThreadPoolExecutor(max_workers=8) as pool:
            for future in [pool.submit(worker, w) for w in range(8)]:
                future.result(TIMEOUT)

        assert store.size() == 800
        assert len(store.search("n", "42")) == 8
        assert store.keys() == sorted(store.keys())

    @pytest.mark.slow
    def test_conflicting_types_race(self, store: AttributeStore):
        """
        Test racing puts that disagree on an attribute's type.

        Exactly one type wins the lock for ``x``; every put of the other
        type fails, and no stored value contradicts the registry.
        """
        results = {"ok": 0, "conflict": 0}
        guard = threading.Lock()
        start = threading.Barrier(8, timeout=TIMEOUT)

        def worker(worker_id: int):
            raw = "1" if worker_id % 2 else "text"
            start.wait()
            for i in range(200):
                try:
                    store.put(f"k{worker_id}-{i}", [("x", raw), ("i", str(i))])
                    outcome = "ok"
                except DataTypeError:
                    outcome = "conflict"
                with guard:
                    results[outcome] += 1

        with ThreadPoolExecutor(max_workers=8) as pool:
            for future in [pool.submit(worker, w) for w in range(8)]:
                future.result(TIMEOUT * 4)

        assert results["ok"] == 800
        assert results["conflict"] == 800

        locked = store.attribute_types()["x"]
        for key in store.keys():
            assert store.get(key)["x"].type is locked

    @pytest.mark.slow
    def test_readers_see_consistent_state(self, store: AttributeStore):
        """Test readers running alongside writers only observe consistent entries."""
        stop = threading.Event()
        problems = []

        def writer():
            i = 0
            while not stop.is_set():
                key = f"k{i % 50}"
                store.put(key, [("n", str(i)), ("even", "true" if i % 2 == 0 else "false")])
                if i % 7 == 0:
                    store.delete(key)
                i += 1

        def reader():
            while not stop.is_set():
                types = store.attribute_types()
                for key in store.search("even", "true"):
                    entry = store.get(key)
                    # May have been rewritten or deleted since the search
                    if entry is None:
                        continue
                    for name, value in entry.items():
                        if types.get(name, value.type) is not value.type:
                            problems.append((key, name))
                keys = store.keys()
                if keys != sorted(keys):
                    problems.append("unsorted")

        threads = [threading.Thread(target=writer) for _ in range(2)]
        threads += [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        time.sleep(0.5)
        stop.set()
        for t in threads:
            t.join(TIMEOUT)

        assert problems == []
