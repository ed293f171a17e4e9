# tests/test_config_manager.py
import json

from phrase_markov.utils.config_manager import DEFAULTS, Config


def test_missing_file_is_created_with_defaults(tmp_path):
    p = tmp_path / "cfg.json"
    cfg = Config(str(p))
    assert p.exists()
    assert cfg.data == DEFAULTS


def test_set_coerces_to_default_type(tmp_path):
    p = tmp_path / "cfg.json"
    cfg = Config(str(p))
    assert cfg.set("workers", "8")
    assert cfg.set("concurrent", "false")
    assert cfg.set("random_seed", "42")
    assert not cfg.set("nope", "1")
    assert cfg.data["workers"] == 8
    assert cfg.data["concurrent"] is False
    assert cfg.data["random_seed"] == 42

    reloaded = Config(str(p))
    assert reloaded.data["workers"] == 8


def test_unknown_keys_in_file_are_ignored(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({"traversable": False, "theme": "dark"}), encoding="utf8")
    cfg = Config(str(p))
    assert cfg.data["traversable"] is False
    assert "theme" not in cfg.data


def test_to_chain_config(tmp_path):
    cfg = Config(str(tmp_path / "cfg.json"))
    cfg.set("lowercase", "yes")
    cc = cfg.to_chain_config()
    assert cc.lowercase is True
    assert cc.concurrent is True and cc.traversable is True
    assert any(row.startswith("workers") for row in cfg.show())


def test_malformed_file_falls_back_to_defaults(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text("{not json", encoding="utf8")
    cfg = Config(str(p))
    assert cfg.data == DEFAULTS
    # the broken file is left for the user to fix
    assert p.read_text(encoding="utf8") == "{not json"


def test_non_object_file_falls_back_to_defaults(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text("[1, 2]", encoding="utf8")
    assert Config(str(p)).data == DEFAULTS
