"""Chain-length statistics for chained hash tables."""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from chainhash.core.chained import ChainedHashMap


@dataclass(frozen=True)
class TableStats:
    entries: int
    bucket_count: int
    allocated_chains: int
    empty_chains: int
    load_factor: float
    max_chain_len: int
    resize_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _chain_lengths(m: ChainedHashMap) -> List[int]:
    return [0 if chain is None else len(chain) for chain in m._chains]  # pylint: disable=protected-access


def sample_stats(m: ChainedHashMap) -> TableStats:
    chains = m._chains  # pylint: disable=protected-access
    allocated = [chain for chain in chains if chain is not None]
    return TableStats(
        entries=len(m),
        bucket_count=m.bucket_count,
        allocated_chains=len(allocated),
        empty_chains=sum(1 for chain in allocated if len(chain) == 0),
        load_factor=m.load_factor(),
        max_chain_len=m.max_chain_len(),
        resize_count=m.resize_count,
    )


def collect_chain_histogram(m: ChainedHashMap) -> List[List[int]]:
    """Return ``[[chain_length, bucket_count], ...]`` sorted by length."""

    histogram: Dict[int, int] = defaultdict(int)
    for length in _chain_lengths(m):
        histogram[length] += 1
    return [[length, count] for length, count in sorted(histogram.items())]


def collect_bucket_heatmap(m: ChainedHashMap, target_cols: int = 32, max_cells: int = 512) -> Dict[str, Any]:
    base_counts = _chain_lengths(m)
    original_slots = len(base_counts)
    total = sum(base_counts)
    group_width = max(1, math.ceil(original_slots / max(1, max_cells)))
    aggregated: List[int] = []
    for idx in range(0, original_slots, group_width):
        aggregated.append(sum(base_counts[idx : idx + group_width]))

    cols = max(1, min(target_cols, len(aggregated)))
    rows = math.ceil(len(aggregated) / cols)
    padded_length = rows * cols
    if len(aggregated) < padded_length:
        aggregated.extend([0] * (padded_length - len(aggregated)))
    matrix = [aggregated[r * cols : (r + 1) * cols] for r in range(rows)]

    return {
        "rows": rows,
        "cols": cols,
        "matrix": matrix,
        "max": max(aggregated),
        "total": total,
        "slot_span": group_width,
        "original_slots": original_slots,
    }


__all__ = ["TableStats", "sample_stats", "collect_chain_histogram", "collect_bucket_heatmap"]
