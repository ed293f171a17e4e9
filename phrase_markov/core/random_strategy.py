# phrase_markov/core/random_strategy.py
# random index sources for successor selection.
# every chain gets one injected at construction, nothing reads the global `random` state.

from __future__ import annotations

import random
import threading
from typing import Optional


def _check_bound(bound: int) -> None:
    if bound <= 0:
        raise ValueError(f"bound must be positive, got {bound}")


class BasicRandomStrategy:
    """
    One shared random.Random behind a lock.
    Seedable, so two strategies built with the same seed replay the same draws.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)
        self._lock = threading.Lock()

    def next_int(self, bound: int) -> int:
        _check_bound(bound)
        with self._lock:
            return self._rng.randrange(bound)


class ThreadLocalRandomStrategy:
    """
    One random.Random per thread, no shared state between threads.
    With a seed, thread N (in order of first use) is seeded with seed + N.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._seed = seed
        self._local = threading.local()
        self._counter = 0
        self._counter_lock = threading.Lock()

    def _rng(self) -> random.Random:
        rng = getattr(self._local, "rng", None)
        if rng is None:
            if self._seed is None:
                rng = random.Random()
            else:
                with self._counter_lock:
                    offset = self._counter
                    self._counter += 1
                rng = random.Random(self._seed + offset)
            self._local.rng = rng
        return rng

    def next_int(self, bound: int) -> int:
        _check_bound(bound)
        return self._rng().randrange(bound)


class SequenceRandomStrategy:
    """
    Replays a fixed list of draws (each reduced modulo the bound), cycling
    when exhausted. Meant for tests and reproducible demos.
    """

    def __init__(self, draws) -> None:
        self._draws = list(draws) or [0]
        self._pos = 0
        self._lock = threading.Lock()

    def next_int(self, bound: int) -> int:
        _check_bound(bound)
        with self._lock:
            value = self._draws[self._pos % len(self._draws)]
            self._pos += 1
        return value % bound


def default_strategy(seed: Optional[int] = None, thread_local: bool = False):
    if thread_local:
        return ThreadLocalRandomStrategy(seed)
    return BasicRandomStrategy(seed)
