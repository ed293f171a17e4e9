# phrase_markov/core/guards.py
"""
Concurrency guards for the transition store.

Three policies share the ConcurrencyGuard protocol:
  - SingleThreadedGuard: no locking at all
  - ListSynchronizedGuard: a striped lock table, one lock covers every list
    whose key hashes to that stripe. Appends to the same key serialize,
    appends to keys on different stripes do not block each other.
  - ReadWriteGuard: a shared read-write lock. Appends take the write side,
    lookups, copies and traversals take the read side.

Guards are runtime resources: they never cross a serialization boundary and
are rebuilt with new_guard() after a chain is restored.
"""

from __future__ import annotations

import threading
from contextlib import ExitStack, contextmanager, nullcontext
from typing import Hashable, Iterator

SINGLE = "single"
SYNCHRONIZED = "synchronized"
RWLOCK = "rwlock"

POLICIES = (SINGLE, SYNCHRONIZED, RWLOCK)

DEFAULT_STRIPES = 64


class SingleThreadedGuard:
    """No-op guard for chains owned by a single thread."""

    policy = SINGLE

    def writing(self, key: Hashable):
        return nullcontext()

    def reading(self, key: Hashable):
        return nullcontext()

    def snapshot(self):
        return nullcontext()


class ListSynchronizedGuard:
    """Per-list locking through a fixed table of striped locks."""

    policy = SYNCHRONIZED

    def __init__(self, stripes: int = DEFAULT_STRIPES) -> None:
        if stripes <= 0:
            raise ValueError("stripes must be positive")
        self._locks = [threading.Lock() for _ in range(stripes)]

    def _lock_for(self, key: Hashable) -> threading.Lock:
        return self._locks[hash(key) % len(self._locks)]

    def writing(self, key: Hashable):
        return self._lock_for(key)

    def reading(self, key: Hashable):
        return self._lock_for(key)

    @contextmanager
    def snapshot(self) -> Iterator[None]:
        # every stripe, always in table order, so two snapshots cannot deadlock
        with ExitStack() as stack:
            for lock in self._locks:
                stack.enter_context(lock)
            yield


class ReadWriteLock:
    """
    Writer-preferring read-write lock built on a Condition.
    Not reentrant: a thread holding either side must not acquire again.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() without a matching acquire_read()")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() without a matching acquire_write()")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class ReadWriteGuard:
    """Whole-store read-write locking, used by concurrent traversable chains."""

    policy = RWLOCK

    def __init__(self) -> None:
        self.lock = ReadWriteLock()

    def writing(self, key: Hashable):
        return self.lock.write_locked()

    def reading(self, key: Hashable):
        return self.lock.read_locked()

    def snapshot(self):
        return self.lock.read_locked()


def policy_for(concurrent: bool, traversable: bool) -> str:
    """Pick the guard policy for a {concurrent} x {traversable} combination."""
    if not concurrent:
        return SINGLE
    return RWLOCK if traversable else SYNCHRONIZED


def new_guard(policy: str, stripes: int = DEFAULT_STRIPES):
    """Build a fresh guard for `policy`."""
    if policy == SINGLE:
        return SingleThreadedGuard()
    if policy == SYNCHRONIZED:
        return ListSynchronizedGuard(stripes)
    if policy == RWLOCK:
        return ReadWriteGuard()
    raise ValueError(f"unknown guard policy: {policy!r}")
