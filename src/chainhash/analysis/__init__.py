"""Inspection helpers for chained hash tables."""

from .distribution import TableStats, collect_bucket_heatmap, collect_chain_histogram, sample_stats
from .probe import format_trace_lines, trace_get, trace_put

__all__ = [
    "TableStats",
    "collect_bucket_heatmap",
    "collect_chain_histogram",
    "sample_stats",
    "trace_get",
    "trace_put",
    "format_trace_lines",
]
