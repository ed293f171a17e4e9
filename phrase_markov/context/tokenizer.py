# phrase_markov/context/tokenizer.py
# phrase splitting and punctuation rules shared by ingestion and generation

from __future__ import annotations

import re
from typing import List, Optional, Pattern, Union

WORD_REGEX = r"\s+"
PUNCTUATION = frozenset(".!?")
DEFAULT_PHRASE_END = "."

PatternLike = Union[str, Pattern[str]]


def compile_pattern(pattern: Optional[PatternLike] = None) -> Pattern[str]:
    """Accept a regex string or a compiled pattern, default splits on whitespace."""
    if pattern is None:
        return re.compile(WORD_REGEX)
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


def has_whitespace_error(phrase: str) -> bool:
    """True for input that is only line breaks / whitespace noise."""
    return not phrase or not phrase.strip()


def end_char(text: str) -> str:
    return text[-1] if text else ""


def is_terminal(token: str) -> bool:
    """
    True if the token closes a sentence.
    Empty tokens are never terminal (no look-back before index 0).
    """
    return bool(token) and token[-1] in PUNCTUATION


def ensure_terminated(phrase: str) -> str:
    if end_char(phrase) not in PUNCTUATION:
        return phrase + DEFAULT_PHRASE_END
    return phrase


def split_phrase(phrase: str, pattern: Pattern[str]) -> List[str]:
    """
    Split a phrase into tokens. Empty pieces (leading/trailing separators)
    are dropped so every returned token is non-empty.
    """
    return [t for t in pattern.split(phrase) if t]
