"""
Caching system for romakana.

Provides thread-safe lazy values and a keyed memo table used to build
each mapping tree at most once.
"""

import logging
import threading
from collections import OrderedDict
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Cache(Generic[T]):
    """
    Thread-safe lazily initialized value.

    The initializer runs at most once, even under concurrent access.
    """

    def __init__(self, name: str, initializer: Callable[[], T]):
        """
        Create a new cache.

        Args:
            name: Cache identifier, used in log messages.
            initializer: Function to compute the cached value.
        """
        self.name = name
        self.initializer = initializer
        self._value: Optional[T] = None
        self._initialized = False
        self._cache_lock = threading.Lock()

    def ensure(self) -> T:
        """
        Get the cached value, initializing if necessary.

        Returns:
            The cached value.
        """
        if self._initialized:
            return self._value

        with self._cache_lock:
            if not self._initialized:
                logger.debug(f"{self.name}: initializing")
                self._value = self.initializer()
                self._initialized = True
            return self._value


def defcache(name: str):
    """
    Decorator to define a cached value.

    Usage:
        @defcache("my-cache")
        def compute_expensive_value():
            return expensive_computation()

        value = compute_expensive_value.ensure()
    """
    def decorator(func: Callable[[], T]) -> Cache[T]:
        return Cache(name, func)
    return decorator


class KeyedCache(Generic[T]):
    """
    Bounded memo table with at-most-one construction per key.

    Concurrent callers asking for the same missing key wait on a per-key
    lock while the first one builds the value. Least recently used
    entries are dropped once maxsize is exceeded.
    """

    def __init__(self, name: str, maxsize: int = 32):
        self.name = name
        self.maxsize = maxsize
        self._values: 'OrderedDict[Hashable, T]' = OrderedDict()
        self._key_locks: Dict[Hashable, threading.Lock] = {}
        self._lock = threading.Lock()
        self.builds = 0

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._values

    def get_or_build(self, key: Hashable, builder: Callable[[], T]) -> T:
        """
        Return the value for key, building it with builder if missing.

        Args:
            key: Hashable cache key.
            builder: Zero-argument function producing the value.

        Returns:
            The cached or freshly built value.
        """
        with self._lock:
            if key in self._values:
                self._values.move_to_end(key)
                return self._values[key]
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                if key in self._values:
                    self._values.move_to_end(key)
                    return self._values[key]

            value = builder()

            with self._lock:
                self._values[key] = value
                self.builds += 1
                while len(self._values) > self.maxsize:
                    evicted, _ = self._values.popitem(last=False)
                    logger.debug(f"{self.name}: evicted {evicted!r}")
                self._key_locks.pop(key, None)
            return value

    def clear(self):
        with self._lock:
            self._values.clear()
            self._key_locks.clear()
