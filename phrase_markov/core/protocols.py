# phrase_markov/core/protocols.py
"""
Protocol interfaces for the pluggable runtime pieces of a chain.

The chain depends on these Protocols, not on concrete classes, so tests can
inject deterministic doubles and callers can supply their own strategies.
"""

from __future__ import annotations

from typing import ContextManager, Dict, Hashable, List, Protocol, runtime_checkable
from typing_extensions import TypedDict


# Typed structures ------------------------------------------------------------

class ChainSnapshot(TypedDict, total=False):
    """
    Exchange form of a chain:
      {
        "version": 1,
        "chain": {"<START>": ["The"], "The": ["quick"], ...},
        "suffixes": ["The"]
      }
    "suffixes" is optional on input, it can be derived from the START list.
    """
    version: int
    chain: Dict[str, List[str]]
    suffixes: List[str]


# Protocols ------------------------------------------------------------------

@runtime_checkable
class RandomStrategy(Protocol):
    """Source of random indices for successor selection."""

    def next_int(self, bound: int) -> int:
        """Return an int in [0, bound), uniform over repeated calls."""
        ...


@runtime_checkable
class ConcurrencyGuard(Protocol):
    """
    Locking policy wrapped around a TransitionStore.

    writing(key)  - held for one append (or one head update) on `key`
    reading(key)  - held while a single successor list is copied out
    snapshot()    - held while the whole store is copied or traversed
    """

    def writing(self, key: Hashable) -> ContextManager[None]:
        ...

    def reading(self, key: Hashable) -> ContextManager[None]:
        ...

    def snapshot(self) -> ContextManager[None]:
        ...
