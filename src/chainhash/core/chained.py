from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, Tuple

from chainhash.contracts.error import (
    BadInputError,
    ConcurrentModificationError,
    InvariantError,
    KeyNotFoundError,
    NoSuchElementError,
)
from chainhash.core.pair_store import DEFAULT_CHAIN_CAPACITY, PairStore, PairStoreIterator, is_count

logger = logging.getLogger("chainhash")

Chains = List[Optional[PairStore]]


@dataclass
class ChainConfig:
    initial_buckets: int = 5
    max_load_ratio: float = 1.0
    chain_capacity: int = DEFAULT_CHAIN_CAPACITY
    check_concurrent_modification: bool = True
    on_resize: Optional[Callable[[int, int], None]] = None

    def validate(self) -> None:
        if not is_count(self.initial_buckets) or self.initial_buckets < 1:
            raise BadInputError(f"initial_buckets must be an integer >= 1, got {self.initial_buckets!r}")
        ratio = self.max_load_ratio
        if isinstance(ratio, bool) or not isinstance(ratio, (int, float)) or not ratio > 0:
            raise BadInputError(f"max_load_ratio must be a number > 0, got {ratio!r}")
        if not is_count(self.chain_capacity) or self.chain_capacity < 1:
            raise BadInputError(f"chain_capacity must be an integer >= 1, got {self.chain_capacity!r}")


def bucket_index(key: Any, bucket_count: int) -> int:
    """Map ``key`` to a bucket in ``range(bucket_count)``.

    ``None`` always lands in bucket 0. Python integers never overflow, so
    ``abs`` of the most negative hash is still non-negative.
    """

    if key is None:
        return 0
    return abs(hash(key)) % bucket_count


class ChainedIterator(Iterator[Tuple[Any, Any]]):
    """Cursor that walks every allocated chain in ascending bucket order.

    The cursor holds the bucket list it was created against. It moves through
    three states: an inner cursor with items left, an exhausted inner cursor
    with further allocated buckets ahead, and fully exhausted.
    """

    __slots__ = ("_owner", "_chains", "_index", "_current", "_expected_mods")

    def __init__(self, owner: "ChainedHashMap") -> None:
        self._owner = owner
        self._chains: Chains = owner._chains  # pylint: disable=protected-access
        self._expected_mods = owner._mod_count  # pylint: disable=protected-access
        self._index = -1
        self._current: Optional[PairStoreIterator] = None
        self._advance()

    def _advance(self) -> None:
        """Move to the next allocated chain that still has items."""

        while self._current is None or not self._current.has_next():
            self._index += 1
            if self._index >= len(self._chains):
                self._current = None
                return
            chain = self._chains[self._index]
            if chain is not None:
                self._current = iter(chain)

    def _check_modification(self) -> None:
        owner = self._owner
        if not owner.config.check_concurrent_modification:
            return
        if owner._mod_count != self._expected_mods:  # pylint: disable=protected-access
            raise ConcurrentModificationError(
                "table changed structurally during iteration",
                hint="finish or discard the iterator before putting new keys or removing keys",
            )

    def has_next(self) -> bool:
        self._check_modification()
        return self._current is not None

    def __iter__(self) -> "ChainedIterator":
        return self

    def __next__(self) -> Tuple[Any, Any]:
        if not self.has_next():
            raise NoSuchElementError("chained iterator is exhausted")
        assert self._current is not None
        pair = next(self._current)
        if not self._current.has_next():
            self._advance()
        return pair


class ChainedHashMap:
    """Hash map using separate chaining over :class:`PairStore` chains."""

    __slots__ = ("config", "_chains", "_size", "_mod_count", "_resizes")

    def __init__(self, config: Optional[ChainConfig] = None) -> None:
        self.config = config or ChainConfig()
        self.config.validate()
        self._chains: Chains = [None] * self.config.initial_buckets
        self._size = 0
        self._mod_count = 0
        self._resizes = 0

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return self._size > 0

    def __contains__(self, key: Any) -> bool:
        return self.contains_key(key)

    def __getitem__(self, key: Any) -> Any:
        return self.get(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        self.put(key, value)

    def __delitem__(self, key: Any) -> None:
        self.remove(key)

    def __iter__(self) -> ChainedIterator:
        return ChainedIterator(self)

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self)
        return f"ChainedHashMap({{{body}}})"

    @property
    def bucket_count(self) -> int:
        return len(self._chains)

    @property
    def resize_count(self) -> int:
        return self._resizes

    def load_factor(self) -> float:
        return self._size / len(self._chains)

    def max_chain_len(self) -> int:
        longest = 0
        for chain in self._chains:
            if chain is not None:
                longest = max(longest, chain.size())
        return longest

    def size(self) -> int:
        total = 0
        for chain in self._chains:
            if chain is not None:
                total += chain.size()
        return total

    def _chain_for(self, key: Any) -> Optional[PairStore]:
        return self._chains[bucket_index(key, len(self._chains))]

    def contains_key(self, key: Any) -> bool:
        chain = self._chain_for(key)
        return chain is not None and chain.contains_key(key)

    def get(self, key: Any) -> Any:
        chain = self._chain_for(key)
        if chain is None:
            raise KeyNotFoundError(key)
        return chain.get(key)

    def put(self, key: Any, value: Any) -> None:
        idx = bucket_index(key, len(self._chains))
        chain = self._chains[idx]
        if chain is None:
            chain = PairStore(self.config.chain_capacity)
            self._chains[idx] = chain
            logger.debug("Allocated chain for bucket %d", idx)
        if chain.put(key, value):
            self._size += 1
            self._mod_count += 1
        if self.load_factor() > self.config.max_load_ratio:
            self._resize(len(self._chains) * 2 + 1)

    def remove(self, key: Any) -> Any:
        chain = self._chain_for(key)
        if chain is None:
            raise KeyNotFoundError(key)
        value = chain.remove(key)
        self._size -= 1
        self._mod_count += 1
        return value

    def keys(self) -> Iterator[Any]:
        for key, _ in self:
            yield key

    def values(self) -> Iterator[Any]:
        for _, value in self:
            yield value

    def items(self) -> Iterator[Tuple[Any, Any]]:
        yield from self

    def _resize(self, new_buckets: int) -> None:
        old_buckets = len(self._chains)
        new_chains: Chains = [None] * new_buckets
        for chain in self._chains:
            if chain is None:
                continue
            for key, value in chain:
                idx = bucket_index(key, new_buckets)
                target = new_chains[idx]
                if target is None:
                    target = PairStore(self.config.chain_capacity)
                    new_chains[idx] = target
                target.put(key, value)
        self._chains = new_chains
        self._resizes += 1
        self._mod_count += 1
        logger.info(
            "Resized chained table %d -> %d buckets (entries=%d)", old_buckets, new_buckets, self._size
        )
        if self.config.on_resize:
            try:
                self.config.on_resize(old_buckets, new_buckets)
            except Exception:
                logger.exception("on_resize callback failed")

    def check_invariants(self) -> None:
        """Raise :class:`InvariantError` if the table is internally inconsistent."""

        bucket_count = len(self._chains)
        total = 0
        for idx, chain in enumerate(self._chains):
            if chain is None:
                continue
            seen: List[Any] = []
            for key, _ in chain:
                expected = bucket_index(key, bucket_count)
                if expected != idx:
                    raise InvariantError(f"key {key!r} stored in bucket {idx}, expected {expected}")
                if key in seen:
                    raise InvariantError(f"duplicate key {key!r} in bucket {idx}")
                seen.append(key)
            total += chain.size()
        if total != self._size:
            raise InvariantError(f"entry count {self._size} != stored entries {total}")


__all__ = ["ChainConfig", "ChainedHashMap", "ChainedIterator", "bucket_index"]
