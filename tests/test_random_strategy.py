# tests/test_random_strategy.py
import threading

import pytest

from phrase_markov.core.protocols import RandomStrategy
from phrase_markov.core.random_strategy import (
    BasicRandomStrategy,
    SequenceRandomStrategy,
    ThreadLocalRandomStrategy,
    default_strategy,
)


@pytest.mark.parametrize("cls", [BasicRandomStrategy, ThreadLocalRandomStrategy])
def test_draws_stay_in_bounds(cls):
    r = cls(seed=7)
    assert all(0 <= r.next_int(5) < 5 for _ in range(500))
    assert r.next_int(1) == 0


@pytest.mark.parametrize("cls", [BasicRandomStrategy, ThreadLocalRandomStrategy, SequenceRandomStrategy])
def test_non_positive_bound_rejected(cls):
    r = cls([1]) if cls is SequenceRandomStrategy else cls()
    with pytest.raises(ValueError):
        r.next_int(0)


def test_seeded_basic_strategy_is_reproducible():
    a, b = BasicRandomStrategy(42), BasicRandomStrategy(42)
    assert [a.next_int(100) for _ in range(20)] == [b.next_int(100) for _ in range(20)]


def test_sequence_strategy_cycles_modulo_bound():
    r = SequenceRandomStrategy([0, 3, 5])
    assert [r.next_int(4) for _ in range(4)] == [0, 3, 1, 0]


def test_thread_local_strategy_from_many_threads():
    r = ThreadLocalRandomStrategy(seed=1)
    errors = []

    def work():
        try:
            for _ in range(200):
                assert 0 <= r.next_int(3) < 3
        except Exception as e:  # collected for the main thread
            errors.append(e)

    threads = [threading.Thread(target=work) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []


def test_strategies_satisfy_protocol():
    assert isinstance(default_strategy(), RandomStrategy)
    assert isinstance(default_strategy(thread_local=True), ThreadLocalRandomStrategy)
