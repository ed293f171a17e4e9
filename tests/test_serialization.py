# tests/test_serialization.py
import json
import pickle
from unittest.mock import MagicMock

import pytest

from phrase_markov import (
    CHAIN_END,
    CHAIN_START,
    BasicRandomStrategy,
    ChainBuilder,
    MarkovChain,
    PostDeserializationInitializer,
    SnapshotFormatError,
    UninitializedResourceError,
)
from phrase_markov.core.guards import ReadWriteGuard

PHRASES = [
    "The quick fox jumps.",
    "The lazy dog sleeps",
    "A bird sings!",
    "Why not?",
    "Hello",
]

VARIANTS = [(False, False), (False, True), (True, False), (True, True)]


def trained(concurrent=False, traversable=False):
    c = ChainBuilder(concurrent, traversable).build()
    c.add_phrases(PHRASES)
    return c


def initialize(chain, random=None, pattern=r"\s+"):
    return PostDeserializationInitializer(random or BasicRandomStrategy(1), pattern).initialize(chain)


@pytest.mark.parametrize("concurrent,traversable", VARIANTS)
def test_round_trip_preserves_map_and_suffixes(concurrent, traversable):
    original = trained(concurrent, traversable)
    restored = MarkovChain.from_json(original.to_json(), concurrent=concurrent, traversable=traversable)
    initialize(restored)

    assert restored.transitions() == original.transitions()
    assert restored.suffixes() == original.suffixes()
    # list order survives, not just membership
    assert restored.successors_of(CHAIN_START) == original.successors_of(CHAIN_START)
    assert restored.policy == original.policy


@pytest.mark.parametrize("concurrent,traversable", VARIANTS)
def test_round_trip_with_sentinel_words_in_text(concurrent, traversable):
    original = ChainBuilder(concurrent, traversable).build()
    original.add_phrases(["<END> is a word.", "a <START> b.", "<START>", "Say <END> twice"])
    restored = MarkovChain.from_json(original.to_json(), concurrent=concurrent, traversable=traversable)
    initialize(restored)

    assert restored.suffixes() == original.suffixes() == {"is", "a", "Say"}
    assert restored.transitions() == original.transitions()
    assert restored.suffixes() <= set(restored.transitions()) - {CHAIN_START, CHAIN_END}
    for _ in range(20):
        words = restored.generate_sentence().split()
        assert CHAIN_START not in words and CHAIN_END not in words


def test_snapshot_excludes_runtime_resources():
    data = json.loads(trained(True, True).to_json())
    assert set(data) == {"version", "chain", "suffixes"}
    assert data["suffixes"] == ["A", "Hello.", "The", "Why"]


@pytest.mark.parametrize("op", [
    lambda c: c.add_phrase("Some words."),
    lambda c: c.add_phrase(None),
    lambda c: c.generate_sentence(),
    lambda c: c.generate_sentence("The"),
    lambda c: c.copy(),
    lambda c: c.to_json(),
    lambda c: c.successors_of("The"),
    lambda c: c.stats(),
])
def test_guarded_ops_fail_before_initialization(op):
    chain = MarkovChain.from_json(trained().to_json(), concurrent=True, traversable=True)
    assert not chain.is_initialized
    with pytest.raises(UninitializedResourceError):
        op(chain)
    initialize(chain)
    op(chain)


def test_initializer_attaches_fresh_guard_and_strategy():
    chain = MarkovChain.from_state(trained().save_state(), concurrent=True, traversable=True)
    rand = MagicMock()
    rand.next_int.return_value = 0
    PostDeserializationInitializer(rand, r"\s+").initialize(chain)

    assert isinstance(chain._guard, ReadWriteGuard)
    chain.generate_sentence()
    rand.next_int.assert_called()


def test_initialization_happens_once():
    chain = MarkovChain.from_json(trained().to_json())
    initialize(chain)
    with pytest.raises(RuntimeError):
        initialize(chain)


def test_initializer_requires_a_strategy():
    with pytest.raises(ValueError):
        PostDeserializationInitializer(None)


def test_initializer_sets_pattern():
    chain = initialize(MarkovChain.from_json(trained().to_json()), pattern=",")
    chain.add_phrase("x,y")
    assert chain.successors_of("x") == ("y.",)


def test_bare_mapping_is_accepted():
    chain = initialize(MarkovChain.from_state({CHAIN_START: ["Hi", "Yo"], "Hi": ["there."]}, traversable=True))
    assert chain.suffixes() == {"Hi", "Yo"}
    assert chain.generate_sentence("Hi") == "Hi there."


@pytest.mark.parametrize("payload", [
    [1, 2],
    {"a": "b"},
    {"a": [1]},
    {"version": 2, "chain": {}},
    {"chain": {"a": []}, "suffixes": "a"},
])
def test_malformed_snapshots_rejected(payload):
    with pytest.raises(SnapshotFormatError):
        MarkovChain.from_state(payload)


def test_invalid_json_rejected():
    with pytest.raises(SnapshotFormatError):
        MarkovChain.from_json("{not json")


@pytest.mark.parametrize("concurrent,traversable", VARIANTS)
def test_pickle_follows_the_same_lifecycle(concurrent, traversable):
    original = trained(concurrent, traversable)
    clone = pickle.loads(pickle.dumps(original))
    assert not clone.is_initialized
    with pytest.raises(UninitializedResourceError):
        clone.add_phrase("More words.")

    PostDeserializationInitializer(BasicRandomStrategy()).initialize(clone)
    assert clone.transitions() == original.transitions()
    clone.add_phrase("More words.")
    assert "More" not in original.transitions()


def test_repr_and_str_work_before_initialization():
    chain = MarkovChain.from_json(trained().to_json())
    assert "initialized=False" in repr(chain)
    assert "KEY The->" in str(chain)
