# phrase_markov/context/__init__.py
# tokenisation rules and word transformers used by the chain

from .tokenizer import (
    DEFAULT_PHRASE_END,
    PUNCTUATION,
    WORD_REGEX,
    compile_pattern,
    ensure_terminated,
    has_whitespace_error,
    is_terminal,
    split_phrase,
)
from .normalizer import WordTransformer, identity, lowercase

__all__ = [
    "DEFAULT_PHRASE_END",
    "PUNCTUATION",
    "WORD_REGEX",
    "compile_pattern",
    "ensure_terminated",
    "has_whitespace_error",
    "is_terminal",
    "split_phrase",
    "WordTransformer",
    "identity",
    "lowercase",
]
