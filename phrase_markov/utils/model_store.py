# model_store.py - file persistence for chains
#
# chains are stored as JSON snapshots (see core/serialization.py).
# load_chain() decodes and then runs the post-deserialization step so the
# caller gets a ready chain, read_snapshot() stops after decoding.

import logging
import os
from typing import Optional

from phrase_markov.core.chain import MarkovChain
from phrase_markov.core.protocols import RandomStrategy
from phrase_markov.core.random_strategy import BasicRandomStrategy
from phrase_markov.core.serialization import PostDeserializationInitializer

logger = logging.getLogger(__name__)


def save_chain(chain: MarkovChain, path: str, indent: Optional[int] = 2) -> None:
    """
    Write the chain snapshot to `path` (JSON).
    Written to a temp file first then renamed, so a crash never leaves half a model.
    """
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    text = chain.to_json(indent=indent)
    tmp = path + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        f.write(text)
    os.replace(tmp, path)
    logger.info("saved chain to %s", path)


def read_snapshot(
    path: str,
    *,
    concurrent: bool = False,
    traversable: bool = False,
) -> MarkovChain:
    """Decode a snapshot file. The returned chain is NOT initialized."""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    return MarkovChain.from_json(text, concurrent=concurrent, traversable=traversable)


def load_chain(
    path: str,
    random: Optional[RandomStrategy] = None,
    pattern=None,
    transformer=None,
    *,
    concurrent: bool = False,
    traversable: bool = False,
) -> MarkovChain:
    """Read a snapshot file and attach runtime resources."""
    chain = read_snapshot(path, concurrent=concurrent, traversable=traversable)
    init = PostDeserializationInitializer(random or BasicRandomStrategy(), pattern, transformer)
    init.initialize(chain)
    logger.info("loaded chain from %s (%d keys)", path, chain.stats()["keys"])
    return chain
