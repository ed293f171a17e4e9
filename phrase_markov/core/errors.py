# phrase_markov/core/errors.py
"""Exceptions raised by the chain core."""


class UninitializedResourceError(RuntimeError):
    """
    Raised when a chain is used before its runtime resources (random
    strategy, concurrency guard) have been attached.

    A chain restored from a snapshot or from pickle is in this state until
    PostDeserializationInitializer.initialize() runs on it.
    """


class UnsupportedOperationError(TypeError):
    """Raised for seeded generation or copy() on a non-traversable chain."""


class SnapshotFormatError(ValueError):
    """Raised when an exchange payload cannot be decoded into chain state."""
