"""
phrase_markov.core

The chain engine:
 - transition storage (TransitionStore)
 - locking policies (SingleThreadedGuard, ListSynchronizedGuard, ReadWriteGuard)
 - random index strategies
 - the MarkovChain itself plus its builder
 - snapshot encode/decode and post-deserialization initialization
"""

from .errors import SnapshotFormatError, UninitializedResourceError, UnsupportedOperationError
from .transition_store import CHAIN_END, CHAIN_START, TransitionStore
from .guards import ListSynchronizedGuard, ReadWriteGuard, ReadWriteLock, SingleThreadedGuard
from .random_strategy import BasicRandomStrategy, SequenceRandomStrategy, ThreadLocalRandomStrategy
from .chain import NO_CHAIN, MarkovChain
from .builder import ChainBuilder, ChainConfig, build_chain
from .serialization import PostDeserializationInitializer

__all__ = [
    "SnapshotFormatError",
    "UninitializedResourceError",
    "UnsupportedOperationError",
    "CHAIN_END",
    "CHAIN_START",
    "TransitionStore",
    "ListSynchronizedGuard",
    "ReadWriteGuard",
    "ReadWriteLock",
    "SingleThreadedGuard",
    "BasicRandomStrategy",
    "SequenceRandomStrategy",
    "ThreadLocalRandomStrategy",
    "NO_CHAIN",
    "MarkovChain",
    "ChainBuilder",
    "ChainConfig",
    "build_chain",
    "PostDeserializationInitializer",
]
