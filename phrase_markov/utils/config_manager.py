# config_manager.py - JSON settings file for the CLI

import json
import logging
import os

from phrase_markov.core.builder import ChainConfig
from phrase_markov.context.tokenizer import WORD_REGEX

logger = logging.getLogger(__name__)

DEFAULTS = {
    "concurrent": True,
    "traversable": True,
    "pattern": WORD_REGEX,
    "lowercase": False,
    "random_seed": None,
    "thread_local_random": False,
    "workers": 4,
    "model_path": os.path.join("data", "markov_chain.json"),
}


class Config:
    def __init__(self, path="phrase_markov.json"):
        self.path = path
        self.data = dict(DEFAULTS)
        self._load()

    def _load(self):
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf8") as f:
                    loaded = json.load(f)
            except (OSError, ValueError) as e:
                # unreadable settings: keep the defaults, leave the file for the user to fix
                logger.warning("ignoring settings file %s: %s", self.path, e)
                return
            if not isinstance(loaded, dict):
                logger.warning("ignoring settings file %s: not a JSON object", self.path)
                return
            self.data.update({k: v for k, v in loaded.items() if k in DEFAULTS})
        else:
            self.save()

    def save(self):
        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def show(self):
        return [f"{k:20} = {v}" for k, v in self.data.items()]

    def set(self, key, val):
        """Set an option, coercing `val` to the default's type. False if unknown."""
        if key not in self.data:
            return False
        default = DEFAULTS[key]
        if isinstance(default, bool):
            val = str(val).lower() in ("1", "true", "yes", "on")
        elif default is None:
            val = None if str(val).lower() in ("", "none", "null") else int(val)
        else:
            val = type(default)(val)
        self.data[key] = val
        self.save()
        return True

    def to_chain_config(self) -> ChainConfig:
        d = self.data
        return ChainConfig(
            concurrent=bool(d["concurrent"]),
            traversable=bool(d["traversable"]),
            pattern=d["pattern"],
            lowercase=bool(d["lowercase"]),
            random_seed=d["random_seed"],
            thread_local_random=bool(d["thread_local_random"]),
        )
