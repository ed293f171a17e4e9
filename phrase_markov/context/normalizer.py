# phrase_markov/context/normalizer.py
# word transformers applied to every token before it is recorded

from typing import Callable

WordTransformer = Callable[[str], str]


def identity(word: str) -> str:
    return word


def lowercase(word: str) -> str:
    return word.lower()
