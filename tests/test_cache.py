"""
Tests for cache.py - lazy values and keyed memoization.
"""

import threading
import time

from romakana.cache import Cache, KeyedCache, defcache


class TestCache:
    """Tests for the lazily initialized value."""

    def test_initializes_once(self):
        """Test the initializer runs on first access only."""
        calls = []
        cache = Cache("test-once", lambda: calls.append(1) or len(calls))
        assert cache.ensure() == 1
        assert cache.ensure() == 1
        assert calls == [1]

    def test_defcache_wraps_function(self):
        """Test defcache turns a function into a Cache."""
        @defcache("test-defcache")
        def value():
            return 42

        assert isinstance(value, Cache)
        assert value.name == "test-defcache"
        assert value.ensure() == 42

    def test_initializes_once_under_contention(self):
        """Test concurrent first access runs the initializer once."""
        barrier = threading.Barrier(8)
        calls = []

        def slow():
            calls.append(1)
            time.sleep(0.05)
            return object()

        cache = Cache("test-contention", slow)
        results = []

        def worker():
            barrier.wait()
            results.append(cache.ensure())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert all(r is results[0] for r in results)


class TestKeyedCache:
    """Tests for the bounded keyed memo table."""

    def test_get_or_build(self):
        """Test a key is built once and then served from the cache."""
        cache = KeyedCache("test")
        assert cache.get_or_build("a", lambda: 1) == 1
        assert cache.get_or_build("a", lambda: 2) == 1
        assert "a" in cache
        assert cache.builds == 1

    def test_eviction(self):
        """Test the least recently used key is dropped past maxsize."""
        cache = KeyedCache("test", maxsize=2)
        cache.get_or_build("a", lambda: 1)
        cache.get_or_build("b", lambda: 2)
        cache.get_or_build("a", lambda: 1)
        cache.get_or_build("c", lambda: 3)
        assert "a" in cache
        assert "b" not in cache
        assert len(cache) == 2

    def test_clear(self):
        """Test clear empties the table."""
        cache = KeyedCache("test")
        cache.get_or_build("a", lambda: 1)
        cache.clear()
        assert len(cache) == 0

    def test_one_build_per_key_under_contention(self):
        """Test concurrent callers for one key share a single build."""
        cache = KeyedCache("test")
        barrier = threading.Barrier(10)
        calls = []
        results = []

        def build():
            calls.append(1)
            time.sleep(0.05)
            return object()

        def worker():
            barrier.wait()
            results.append(cache.get_or_build("key", build))

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert len(results) == 10
        assert all(r is results[0] for r in results)
