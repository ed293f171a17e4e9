# tests/test_logger_utils.py
from phrase_markov.utils import logger_utils
from phrase_markov.utils.logger_utils import Log


def test_time_block_records_metric(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_utils, "LOG_DIR", str(tmp_path / "logs"))
    with Log.time_block("train") as t:
        pass
    assert t.elapsed >= 0
    text = (tmp_path / "logs" / logger_utils.LOG_FILE).read_text(encoding="utf-8")
    assert "train done:" in text


def test_write_appends(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_utils, "LOG_DIR", str(tmp_path))
    Log.write("first")
    Log.write("second")
    lines = (tmp_path / logger_utils.LOG_FILE).read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2 and lines[1].endswith("second")
