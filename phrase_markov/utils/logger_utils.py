# logger_utils.py - run log and timing metrics for the CLI and bulk jobs

import os
import time
from datetime import datetime

# Directory where log files are stored, PHRASE_MARKOV_LOG_DIR overrides it
LOG_DIR = os.environ.get("PHRASE_MARKOV_LOG_DIR", "logs")
LOG_FILE = "phrase_markov.log"


def log_path() -> str:
    """Path of the log file, creating the folder on first use."""
    os.makedirs(LOG_DIR, exist_ok=True)
    return os.path.join(LOG_DIR, LOG_FILE)


class Log:
    @staticmethod
    def write(msg):
        """
        Append a message to the log file with a timestamp.
        Each entry is written as: [YYYY-MM-DD HH:MM:SS] message
        """
        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with open(log_path(), "a", encoding="utf-8") as f:
            f.write(f"[{ts}] {msg}\n")

    @staticmethod
    def metric(tag, value, unit=""):
        """
        Record a metric (timings, counts).
        Example: [12:45:02] train done: 0.123s
        """
        ts = datetime.now().strftime("%H:%M:%S")
        line = f"[{ts}] {tag}: {value}{unit}"
        Log.write(line)
        return line

    @staticmethod
    def time_block(label):
        """
        Measure a code block:
            with Log.time_block("train"):
                chain.add_phrases(lines)
        """
        return _Timer(label)


class _Timer:
    """Context manager behind Log.time_block."""
    def __init__(self, label):
        self.label = label
        self.start = time.perf_counter()
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = round(time.perf_counter() - self.start, 3)
        Log.metric(f"{self.label} done", self.elapsed, "s")
