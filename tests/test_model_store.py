# tests/test_model_store.py
import json

import pytest

from phrase_markov import ChainBuilder, SequenceRandomStrategy, UninitializedResourceError
from phrase_markov.utils.model_store import load_chain, read_snapshot, save_chain


@pytest.fixture
def chain():
    c = ChainBuilder(concurrent=True, traversable=True).build()
    c.add_phrases(["The quick fox jumps.", "The lazy dog sleeps."])
    return c


def test_save_writes_json_snapshot(tmp_path, chain):
    path = tmp_path / "models" / "chain.json"
    save_chain(chain, str(path))
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["chain"]["The"] == ["quick", "lazy"]
    assert data["suffixes"] == ["The"]
    assert not (tmp_path / "models" / "chain.json.tmp").exists()


def test_load_returns_ready_chain(tmp_path, chain):
    path = str(tmp_path / "chain.json")
    save_chain(chain, path)
    loaded = load_chain(path, SequenceRandomStrategy([1]), concurrent=True, traversable=True)
    assert loaded.is_initialized
    assert loaded.transitions() == chain.transitions()
    assert loaded.generate_sentence("The") == "The lazy dog sleeps."


def test_read_snapshot_is_uninitialized(tmp_path, chain):
    path = str(tmp_path / "chain.json")
    save_chain(chain, path)
    raw = read_snapshot(path, traversable=True)
    with pytest.raises(UninitializedResourceError):
        raw.generate_sentence()


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_chain(str(tmp_path / "nope.json"))
