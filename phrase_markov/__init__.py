"""
phrase_markov

First-order word Markov chain for sentence generation, safe for concurrent
ingestion, with a two-phase snapshot restore (decode, then attach runtime).

    from phrase_markov import ChainBuilder
    chain = ChainBuilder(concurrent=True, traversable=True).build()
    chain.add_phrase("The quick fox jumps.")
    chain.generate_sentence("The")
"""

from .core import (
    CHAIN_END,
    CHAIN_START,
    NO_CHAIN,
    BasicRandomStrategy,
    ChainBuilder,
    ChainConfig,
    MarkovChain,
    PostDeserializationInitializer,
    SequenceRandomStrategy,
    SnapshotFormatError,
    ThreadLocalRandomStrategy,
    TransitionStore,
    UninitializedResourceError,
    UnsupportedOperationError,
    build_chain,
)

__all__ = [
    "CHAIN_END",
    "CHAIN_START",
    "NO_CHAIN",
    "BasicRandomStrategy",
    "ChainBuilder",
    "ChainConfig",
    "MarkovChain",
    "PostDeserializationInitializer",
    "SequenceRandomStrategy",
    "SnapshotFormatError",
    "ThreadLocalRandomStrategy",
    "TransitionStore",
    "UninitializedResourceError",
    "UnsupportedOperationError",
    "build_chain",
]

__version__ = "0.1.0"
