# phrase_markov/core/chain.py
"""
MarkovChain - first-order word chain that learns phrases and writes sentences.

One class covers every variant. Behaviour is composed from:
  - a ConcurrencyGuard policy (single / synchronized / rwlock)
  - a `traversable` flag that enables seeded generation and copy()
  - an injected RandomStrategy

Public API:
  - add_phrase(text), add_phrases(texts, workers=None)
  - generate_sentence(seed=None)
  - copy()
  - save_state() / to_json(), from_state() / from_json()
  - stats(), to_loggable_string()
"""

from __future__ import annotations

import logging
import re
from functools import partial
from typing import Iterable, List, Optional, Tuple

from .errors import UninitializedResourceError, UnsupportedOperationError
from .guards import DEFAULT_STRIPES, SINGLE, new_guard, policy_for
from .protocols import ChainSnapshot, ConcurrencyGuard, RandomStrategy
from .random_strategy import BasicRandomStrategy
from .serialization import decode_store, dumps, encode_store, loads
from .transition_store import CHAIN_END, CHAIN_START, SENTINELS, Token, TransitionStore
from ..context.normalizer import WordTransformer, identity
from ..context.tokenizer import (
    PatternLike,
    compile_pattern,
    ensure_terminated,
    has_whitespace_error,
    is_terminal,
    split_phrase,
)
from ..utils.threaded_runner import run_parallel

logger = logging.getLogger(__name__)

# returned by generate_sentence() when nothing has been learnt yet
NO_CHAIN = ""


class MarkovChain:
    """
    Word-level Markov chain with pluggable locking.

    Each learnt phrase adds:
      START -> first word, first -> second, ..., and END -> last word.
    Generation walks from START (or from a seed that began some phrase)
    until a word ending in . ! or ? is produced.
    """

    NO_CHAIN = NO_CHAIN

    def __init__(
        self,
        pattern: Optional[PatternLike] = None,
        random: Optional[RandomStrategy] = None,
        transformer: Optional[WordTransformer] = None,
        *,
        concurrent: bool = False,
        traversable: bool = False,
        stripes: int = DEFAULT_STRIPES,
    ) -> None:
        self.traversable = bool(traversable)
        self.policy = policy_for(concurrent, traversable)
        self._stripes = stripes
        self._store = TransitionStore()
        self._pattern = compile_pattern(pattern)
        self._transformer: WordTransformer = transformer or identity
        self._random: Optional[RandomStrategy] = random or BasicRandomStrategy()
        self._guard: Optional[ConcurrencyGuard] = new_guard(self.policy, stripes)

    # ------------------------------------------------------------------
    # Runtime resources
    # ------------------------------------------------------------------
    @property
    def concurrent(self) -> bool:
        return self.policy != SINGLE

    @property
    def pattern(self):
        return self._pattern

    @property
    def is_initialized(self) -> bool:
        return self._guard is not None and self._random is not None and self._pattern is not None

    def _runtime(self) -> Tuple[ConcurrencyGuard, RandomStrategy]:
        if not self.is_initialized:
            raise UninitializedResourceError(
                "chain was restored without its runtime resources; "
                "run PostDeserializationInitializer.initialize() first"
            )
        return self._guard, self._random

    def _attach_runtime(
        self,
        random: RandomStrategy,
        pattern=None,
        transformer: Optional[WordTransformer] = None,
    ) -> None:
        if self.is_initialized:
            raise RuntimeError("chain already has its runtime resources attached")
        if pattern is not None:
            self._pattern = pattern
        if transformer is not None:
            self._transformer = transformer
        self._random = random
        self._guard = new_guard(self.policy, self._stripes)

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------
    def add_phrase(self, phrase: Optional[str]) -> None:
        """
        Learn one phrase. None and whitespace-only input are ignored.
        A phrase without closing punctuation gets a trailing period.
        """
        guard, _ = self._runtime()
        if phrase is None or has_whitespace_error(phrase):
            logger.debug("skipping empty phrase")
            return

        words = [self._transformer(w) for w in split_phrase(phrase.strip(), self._pattern)]
        # sentinel strings in the text are dropped, they only ever anchor the chain
        words = [w for w in words if w and w not in SENTINELS]
        if not words:
            logger.debug("skipping phrase with no learnable words")
            return
        words[-1] = ensure_terminated(words[-1])

        self._put_head(guard, words[0], words[1] if len(words) > 1 else None)
        for i in range(1, len(words) - 1):
            self._put(guard, words[i], words[i + 1])
        if len(words) > 1:
            self._put(guard, CHAIN_END, words[-1])

    def add_phrases(self, phrases: Iterable[Optional[str]], workers: Optional[int] = None) -> int:
        """
        Learn many phrases, returns how many were submitted.
        With workers > 1 on a concurrent chain the phrases go through a thread pool.
        """
        phrases = list(phrases)
        if workers and workers > 1 and self.concurrent:
            run_parallel([partial(self.add_phrase, p) for p in phrases], max_workers=workers)
        else:
            for p in phrases:
                self.add_phrase(p)
        logger.debug("ingested %d phrases (workers=%s)", len(phrases), workers)
        return len(phrases)

    def _put_head(self, guard: ConcurrencyGuard, word: Token, nxt: Optional[Token]) -> None:
        self._put(guard, CHAIN_START, word)
        with guard.writing(word):
            self._store.add_suffix(word)
            self._store.ensure_key(word)
            if nxt is not None:
                self._store.add_transition(word, nxt)

    def _put(self, guard: ConcurrencyGuard, key: Token, nxt: Token) -> None:
        with guard.writing(key):
            self._store.add_transition(key, nxt)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def generate_sentence(self, seed: Optional[str] = None, max_words: Optional[int] = None) -> str:
        """
        Random walk until a word ending in punctuation.

        seed: start the sentence at this word (traversable chains only). A
              word that never began a phrase falls back to an unseeded walk.
        max_words: optional cap on sentence length.

        Returns NO_CHAIN if nothing has been learnt. A walk that reaches a
        word with no successors stops there, so the result lacks closing
        punctuation.
        """
        guard, rand = self._runtime()

        if seed is not None:
            if not self.traversable:
                raise UnsupportedOperationError("seeded generation needs a traversable chain")
            seed = self._transformer(seed)
            with guard.reading(seed):
                known = self._store.has_suffix(seed)
            if known:
                return self._walk(guard, rand, [seed], max_words)
            logger.debug("seed %r never started a phrase, using START", seed)

        first = self._draw(guard, rand, CHAIN_START)
        if first is None:
            logger.debug("generate_sentence on an empty chain")
            return NO_CHAIN
        return self._walk(guard, rand, [first], max_words)

    def _walk(
        self,
        guard: ConcurrencyGuard,
        rand: RandomStrategy,
        words: List[Token],
        max_words: Optional[int],
    ) -> str:
        current = words[-1]
        while not is_terminal(current):
            if max_words is not None and len(words) >= max_words:
                break
            nxt = self._draw(guard, rand, current)
            if nxt is None:
                logger.debug("dead end after %r", current)
                break
            words.append(nxt)
            current = nxt
        return " ".join(words)

    def _draw(self, guard: ConcurrencyGuard, rand: RandomStrategy, key: Token) -> Optional[Token]:
        with guard.reading(key):
            successors = self._store.successors_of(key)
        if not successors:
            return None
        return successors[rand.next_int(len(successors))]

    # ------------------------------------------------------------------
    # Lookup/copy
    # ------------------------------------------------------------------
    def successors_of(self, word: Token) -> Tuple[Token, ...]:
        guard, _ = self._runtime()
        with guard.reading(word):
            return self._store.successors_of(word)

    def is_seed(self, word: Token) -> bool:
        guard, _ = self._runtime()
        with guard.reading(word):
            return self._store.has_suffix(word)

    def suffixes(self) -> set:
        guard, _ = self._runtime()
        with guard.snapshot():
            return self._store.suffixes()

    def transitions(self) -> dict:
        """Deep copy of the transition map."""
        guard, _ = self._runtime()
        with guard.snapshot():
            return self._store.as_dict()

    def copy(self) -> "MarkovChain":
        """
        Independent chain with the same transitions, policy and transformer.
        The random strategy is shared, the guard is new.
        """
        guard, rand = self._runtime()
        if not self.traversable:
            raise UnsupportedOperationError("copy() needs a traversable chain")
        with guard.snapshot():
            store = self._store.copy()

        clone = MarkovChain(
            re.compile(self._pattern.pattern, self._pattern.flags),
            rand,
            self._transformer,
            concurrent=self.concurrent,
            traversable=True,
            stripes=self._stripes,
        )
        clone._store = store
        return clone

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def save_state(self) -> ChainSnapshot:
        guard, _ = self._runtime()
        with guard.snapshot():
            return encode_store(self._store)

    def to_json(self, indent: Optional[int] = None) -> str:
        return dumps(self.save_state(), indent=indent)

    @classmethod
    def _restored(cls, store: TransitionStore, concurrent: bool, traversable: bool, stripes: int) -> "MarkovChain":
        chain = cls.__new__(cls)
        chain.traversable = bool(traversable)
        chain.policy = policy_for(concurrent, traversable)
        chain._stripes = stripes
        chain._store = store
        chain._pattern = None
        chain._transformer = identity
        chain._random = None
        chain._guard = None
        return chain

    @classmethod
    def from_state(
        cls,
        data,
        *,
        concurrent: bool = False,
        traversable: bool = False,
        stripes: int = DEFAULT_STRIPES,
    ) -> "MarkovChain":
        """
        Decode a snapshot into an uninitialized chain.
        Must be followed by PostDeserializationInitializer.initialize().
        """
        return cls._restored(decode_store(data), concurrent, traversable, stripes)

    @classmethod
    def from_json(
        cls,
        text: str,
        *,
        concurrent: bool = False,
        traversable: bool = False,
        stripes: int = DEFAULT_STRIPES,
    ) -> "MarkovChain":
        return cls._restored(loads(text), concurrent, traversable, stripes)

    # pickle carries data only, runtime resources are re-attached explicitly
    def __getstate__(self):
        state = self.__dict__.copy()
        state["_guard"] = None
        state["_random"] = None
        return state

    def __setstate__(self, state) -> None:
        self.__dict__.update(state)

    # ------------------------------------------------------------------
    # Introspection helpers
    # ------------------------------------------------------------------
    def stats(self) -> dict:
        guard, _ = self._runtime()
        with guard.snapshot():
            return {
                "keys": len(self._store),
                "transitions": self._store.transition_count(),
                "seeds": len(self._store.suffixes()),
                "policy": self.policy,
                "traversable": self.traversable,
            }

    def _items(self):
        if not self.is_initialized:
            return self._store.items()
        with self._guard.snapshot():
            return self._store.items()

    def to_loggable_string(self) -> str:
        """One `key|succ succ` line per key."""
        return "".join(f"{k}|{' '.join(v)}\n" for k, v in self._items())

    def __str__(self) -> str:
        return "".join(f"KEY {k}-> {' '.join(v)}\n" for k, v in self._items())

    def __repr__(self) -> str:
        return (
            f"<MarkovChain policy={self.policy} traversable={self.traversable} "
            f"keys={len(self._store)} initialized={self.is_initialized}>"
        )
