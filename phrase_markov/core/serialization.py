# phrase_markov/core/serialization.py
"""
Snapshot encoding/decoding and the post-deserialization step.

Restoring a chain is two explicit phases:
  1. decode data: the transition map and suffix set come back from the
     exchange form, the chain has no random strategy and no guard
  2. attach runtime: PostDeserializationInitializer hands the chain a
     random strategy, a tokenisation pattern and a fresh guard

Until phase 2 runs every guarded operation raises UninitializedResourceError.
A default guard is never created on first use.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional

from .errors import SnapshotFormatError
from .protocols import ChainSnapshot, RandomStrategy
from .transition_store import TransitionStore
from ..context.normalizer import WordTransformer
from ..context.tokenizer import PatternLike, compile_pattern

if TYPE_CHECKING:
    from .chain import MarkovChain

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


def encode_store(store: TransitionStore) -> ChainSnapshot:
    """Exchange form of a store. Caller holds whatever lock makes it consistent."""
    return {
        "version": SNAPSHOT_VERSION,
        "chain": store.as_dict(),
        # sorted so identical chains give identical JSON
        "suffixes": sorted(store.suffixes()),
    }


def _check_tokens(value: Any, where: str) -> list:
    if not isinstance(value, list) or not all(isinstance(t, str) for t in value):
        raise SnapshotFormatError(f"{where} must be a list of strings")
    return value


def decode_store(data: Any) -> TransitionStore:
    """
    Rebuild a TransitionStore from either
      - the wrapped form {"version": 1, "chain": {...}, "suffixes": [...]}
      - a bare {token: [successor, ...]} mapping (suffixes derived from START)
    """
    if not isinstance(data, Mapping):
        raise SnapshotFormatError(f"snapshot must be an object, got {type(data).__name__}")

    if isinstance(data.get("chain"), Mapping):
        version = data.get("version", SNAPSHOT_VERSION)
        if version != SNAPSHOT_VERSION:
            raise SnapshotFormatError(f"unsupported snapshot version: {version!r}")
        chain = data["chain"]
        suffixes = data.get("suffixes")
        if suffixes is not None:
            _check_tokens(suffixes, "suffixes")
    else:
        chain = data
        suffixes = None

    for key, successors in chain.items():
        if not isinstance(key, str):
            raise SnapshotFormatError(f"chain key {key!r} is not a string")
        _check_tokens(successors, f"successors of {key!r}")

    return TransitionStore.from_mapping(chain, suffixes)


def dumps(snapshot: ChainSnapshot, indent: Optional[int] = None) -> str:
    return json.dumps(snapshot, indent=indent, ensure_ascii=False)


def loads(text: str) -> TransitionStore:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotFormatError(f"invalid JSON snapshot: {e}") from e
    return decode_store(data)


class PostDeserializationInitializer:
    """
    Attaches runtime resources to a restored chain.

    Usage:
        chain = MarkovChain.from_json(text, concurrent=True, traversable=True)
        PostDeserializationInitializer(BasicRandomStrategy(), r"\\s+").initialize(chain)
    """

    def __init__(
        self,
        random: RandomStrategy,
        pattern: Optional[PatternLike] = None,
        transformer: Optional[WordTransformer] = None,
    ) -> None:
        if random is None:
            raise ValueError("a random strategy is required")
        self.random = random
        self.pattern = pattern
        self.transformer = transformer

    def initialize(self, chain: "MarkovChain") -> "MarkovChain":
        pattern = None
        if self.pattern is not None or chain.pattern is None:
            pattern = compile_pattern(self.pattern)
        chain._attach_runtime(self.random, pattern, self.transformer)
        logger.debug("initialized restored chain (policy=%s, keys=%d)", chain.policy, len(chain._store))
        return chain
