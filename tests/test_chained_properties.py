from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from hypothesis import given, settings, strategies as st

from chainhash.contracts.error import KeyNotFoundError
from chainhash.core.chained import ChainConfig, ChainedHashMap

_MISSING = object()


@dataclass(frozen=True)
class CollidingKey:
    """Key whose hash intentionally collides with peers for stress testing."""

    value: int

    def __hash__(self) -> int:  # pragma: no cover - trivial wrapper
        return 0

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"CK({self.value})"


def _key_strategy() -> st.SearchStrategy[Any]:
    small_ints = st.integers(-20, 20)
    colliding = st.builds(CollidingKey, st.integers(-10, 10))
    text = st.text(max_size=3)
    return st.one_of(small_ints, colliding, text, st.none())


def _value_strategy() -> st.SearchStrategy[int]:
    return st.integers(-1_000, 1_000)


def _operation_strategy() -> st.SearchStrategy[Tuple[str, Any, int | None]]:
    key = _key_strategy()
    value = _value_strategy()
    put_op = st.tuples(st.just("put"), key, value)
    get_op = st.tuples(st.just("get"), key, st.none())
    remove_op = st.tuples(st.just("remove"), key, st.none())
    return st.one_of(put_op, get_op, remove_op)


def _lookup(map_impl: ChainedHashMap, key: Any) -> Any:
    try:
        return map_impl.get(key)
    except KeyNotFoundError:
        return _MISSING


@settings(max_examples=150, deadline=None)
@given(
    st.lists(_operation_strategy(), min_size=1, max_size=120),
    st.integers(1, 7),
)
def test_chained_map_behaves_like_dict(
    operations: list[Tuple[str, Any, int | None]], initial_buckets: int
) -> None:
    map_impl = ChainedHashMap(ChainConfig(initial_buckets=initial_buckets))
    model: Dict[Any, int] = {}
    seen_keys: set[Any] = set()

    for op, key, maybe_value in operations:
        seen_keys.add(key)

        if op == "put":
            assert maybe_value is not None
            map_impl.put(key, maybe_value)
            model[key] = maybe_value
        elif op == "remove":
            if key in model:
                assert map_impl.remove(key) == model.pop(key)
            else:
                try:
                    map_impl.remove(key)
                except KeyNotFoundError:
                    pass
                else:
                    raise AssertionError(f"remove({key!r}) should have raised")
        else:  # get
            assert _lookup(map_impl, key) == model.get(key, _MISSING)

        # Size mirrors oracle regardless of resizes.
        assert map_impl.size() == len(model)
        assert map_impl.load_factor() <= 1.0

        # Every seen key resolves identically.
        for candidate in seen_keys:
            assert _lookup(map_impl, candidate) == model.get(candidate, _MISSING)
            assert map_impl.contains_key(candidate) is (candidate in model)

        # Iteration yields exactly size() unique pairs matching the oracle.
        pairs = list(map_impl)
        assert len(pairs) == len(model)
        assert dict(pairs) == model

    map_impl.check_invariants()


@settings(deadline=None)
@given(st.sets(st.integers(), max_size=200))
def test_distinct_keys_survive_resizes(keys: set[int]) -> None:
    map_impl = ChainedHashMap()
    for key in keys:
        map_impl.put(key, -key)
    assert map_impl.size() == len(keys)
    for key in keys:
        assert map_impl.get(key) == -key
    map_impl.check_invariants()
