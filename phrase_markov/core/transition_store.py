# phrase_markov/core/transition_store.py
# token -> successor list mapping plus the set of sentence-starting tokens.
# the store itself does no locking, callers wrap it in a ConcurrencyGuard.

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

Token = str

CHAIN_START = "<START>"
CHAIN_END = "<END>"
SENTINELS = frozenset((CHAIN_START, CHAIN_END))


class TransitionStore:
    """
    Append-only transition table.

    - successor lists keep insertion order and duplicates (repetition is
      frequency: a successor seen 3 times is 3x as likely to be drawn)
    - START and END always exist as keys
    - entries are never removed
    """

    __slots__ = ("_chain", "_suffixes")

    def __init__(self) -> None:
        self._chain: Dict[Token, List[Token]] = {CHAIN_START: [], CHAIN_END: []}
        self._suffixes: Set[Token] = set()

    # insertion -----------------------------------------------------
    def add_transition(self, key: Token, successor: Token) -> None:
        """Append `successor` under `key`, creating the list if needed."""
        lst = self._chain.get(key)
        if lst is None:
            lst = self._chain.setdefault(key, [])
        lst.append(successor)

    def ensure_key(self, key: Token) -> None:
        if key not in self._chain:
            self._chain.setdefault(key, [])

    def add_suffix(self, token: Token) -> None:
        self._suffixes.add(token)

    # lookup ---------------------------------------------------------
    def successors_of(self, key: Token) -> Tuple[Token, ...]:
        """
        Copy of the successor list for `key`.
        Unknown keys give an empty tuple, never None.
        """
        lst = self._chain.get(key)
        if not lst:
            return ()
        return tuple(lst)

    def has_suffix(self, token: Optional[Token]) -> bool:
        return token in self._suffixes

    def suffixes(self) -> Set[Token]:
        return set(self._suffixes)

    def keys(self) -> List[Token]:
        return list(self._chain)

    def __contains__(self, key: object) -> bool:
        return key in self._chain

    def __len__(self) -> int:
        return len(self._chain)

    def transition_count(self) -> int:
        return sum(len(v) for v in self._chain.values())

    # copying/export ---------------------------------------------------
    def copy(self) -> "TransitionStore":
        """Independent store, value-equal to this one, sharing no lists."""
        other = TransitionStore()
        other._chain = {k: list(v) for k, v in self._chain.items()}
        other._suffixes = set(self._suffixes)
        return other

    def as_dict(self) -> Dict[Token, List[Token]]:
        return {k: list(v) for k, v in self._chain.items()}

    def items(self) -> List[Tuple[Token, Tuple[Token, ...]]]:
        return [(k, tuple(v)) for k, v in self._chain.items()]

    @classmethod
    def from_mapping(
        cls,
        chain: Mapping[Token, Iterable[Token]],
        suffixes: Optional[Iterable[Token]] = None,
    ) -> "TransitionStore":
        """
        Rebuild a store from decoded data.
        Without `suffixes` the suffix set is derived from the START list.
        """
        store = cls()
        for key, successors in chain.items():
            store._chain[key] = list(successors)
        store._chain.setdefault(CHAIN_START, [])
        store._chain.setdefault(CHAIN_END, [])

        if suffixes is None:
            suffixes = store._chain[CHAIN_START]
        store._suffixes = {s for s in suffixes if s not in SENTINELS}
        # a seed must always be a key, even if it never got a successor
        for s in store._suffixes:
            store._chain.setdefault(s, [])
        return store

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransitionStore):
            return NotImplemented
        return self._chain == other._chain and self._suffixes == other._suffixes

    __hash__ = None  # mutable
