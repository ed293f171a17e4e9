# phrase_markov/core/builder.py
# ChainConfig + builder for the {basic | traversable} x {single | concurrent} variants

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .chain import MarkovChain
from .guards import DEFAULT_STRIPES
from .protocols import RandomStrategy
from .random_strategy import default_strategy
from ..context.normalizer import WordTransformer, identity, lowercase
from ..context.tokenizer import WORD_REGEX, PatternLike


@dataclass(frozen=True)
class ChainConfig:
    """
    Configurable knobs for building a chain.
    concurrent + traversable pick the guard policy, the rest tune tokenisation
    and the random source.
    """
    concurrent: bool = False
    traversable: bool = False
    pattern: str = WORD_REGEX
    lowercase: bool = False
    random_seed: Optional[int] = None
    thread_local_random: bool = False
    lock_stripes: int = DEFAULT_STRIPES


class ChainBuilder:
    """
    Fluent construction:
        chain = ChainBuilder(concurrent=True, traversable=True).set_random(r).build()
    """

    def __init__(self, concurrent: bool = False, traversable: bool = False) -> None:
        self.concurrent = concurrent
        self.traversable = traversable
        self._pattern: Optional[PatternLike] = None
        self._random: Optional[RandomStrategy] = None
        self._transformer: Optional[WordTransformer] = None
        self._stripes = DEFAULT_STRIPES

    def set_pattern(self, pattern: PatternLike) -> "ChainBuilder":
        self._pattern = pattern
        return self

    def set_random(self, random: RandomStrategy) -> "ChainBuilder":
        self._random = random
        return self

    def set_transformer(self, transformer: WordTransformer) -> "ChainBuilder":
        self._transformer = transformer
        return self

    def set_stripes(self, stripes: int) -> "ChainBuilder":
        self._stripes = stripes
        return self

    def build(self) -> MarkovChain:
        return MarkovChain(
            self._pattern,
            self._random,
            self._transformer,
            concurrent=self.concurrent,
            traversable=self.traversable,
            stripes=self._stripes,
        )


def build_chain(config: Optional[ChainConfig] = None, random: Optional[RandomStrategy] = None) -> MarkovChain:
    """Build a chain from a ChainConfig. An explicit `random` wins over the seed settings."""
    cfg = config or ChainConfig()
    rand = random or default_strategy(cfg.random_seed, cfg.thread_local_random)
    return (
        ChainBuilder(cfg.concurrent, cfg.traversable)
        .set_pattern(cfg.pattern)
        .set_random(rand)
        .set_transformer(lowercase if cfg.lowercase else identity)
        .set_stripes(cfg.lock_stripes)
        .build()
    )
