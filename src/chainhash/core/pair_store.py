from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple, cast

from chainhash.contracts.error import BadInputError, KeyNotFoundError, NoSuchElementError

DEFAULT_CHAIN_CAPACITY: int = 15


@dataclass
class _Pair:
    key: Any
    value: Any


def keys_match(stored: Any, key: Any) -> bool:
    """Match by identity, then equality, as ``dict`` does."""

    return stored is key or stored == key


def is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _make_slots(capacity: int) -> List[Optional[_Pair]]:
    return [None] * capacity


class PairStoreIterator(Iterator[Tuple[Any, Any]]):
    """Cursor over a copy of the entries a :class:`PairStore` held when created."""

    __slots__ = ("_pairs", "_size", "_index")

    def __init__(self, pairs: List[_Pair]) -> None:
        self._pairs = pairs
        self._size = len(pairs)
        self._index = 0

    def has_next(self) -> bool:
        return self._index < self._size

    def __iter__(self) -> "PairStoreIterator":
        return self

    def __next__(self) -> Tuple[Any, Any]:
        if not self.has_next():
            raise NoSuchElementError("pair store iterator is exhausted")
        pair = self._pairs[self._index]
        self._index += 1
        return pair.key, pair.value


class PairStore:
    """Array-backed dictionary with linear lookup, kept in insertion order."""

    __slots__ = ("_slots", "_size")

    def __init__(self, capacity: int = DEFAULT_CHAIN_CAPACITY) -> None:
        if not is_count(capacity) or capacity < 1:
            raise BadInputError(f"capacity must be an integer >= 1, got {capacity!r}")
        self._slots: List[Optional[_Pair]] = _make_slots(capacity)
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: Any) -> bool:
        return self.contains_key(key)

    def __iter__(self) -> PairStoreIterator:
        live = [pair for pair in self._slots[: self._size] if pair is not None]
        return PairStoreIterator(live)

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}={v!r}" for k, v in self)
        return f"PairStore([{body}])"

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def size(self) -> int:
        return self._size

    def _pair_at(self, idx: int) -> _Pair:
        return cast(_Pair, self._slots[idx])

    def _find(self, key: Any) -> int:
        for idx in range(self._size):
            if keys_match(self._pair_at(idx).key, key):
                return idx
        return -1

    def _grow(self) -> None:
        grown = _make_slots(len(self._slots) * 2)
        grown[: self._size] = self._slots[: self._size]
        self._slots = grown

    def contains_key(self, key: Any) -> bool:
        return self._find(key) >= 0

    def get(self, key: Any) -> Any:
        idx = self._find(key)
        if idx < 0:
            raise KeyNotFoundError(key)
        return self._pair_at(idx).value

    def put(self, key: Any, value: Any) -> bool:
        """Store ``value`` under ``key``; return ``True`` when the key is new."""

        idx = self._find(key)
        if idx >= 0:
            self._pair_at(idx).value = value
            return False
        if self._size >= len(self._slots):
            self._grow()
        self._slots[self._size] = _Pair(key, value)
        self._size += 1
        return True

    def remove(self, key: Any) -> Any:
        idx = self._find(key)
        if idx < 0:
            raise KeyNotFoundError(key)
        pair = self._pair_at(idx)
        # shift the tail down one slot so remaining entries keep their order
        for i in range(idx, self._size - 1):
            self._slots[i] = self._slots[i + 1]
        self._slots[self._size - 1] = None
        self._size -= 1
        return pair.value


__all__ = ["DEFAULT_CHAIN_CAPACITY", "PairStore", "PairStoreIterator", "is_count", "keys_match"]
