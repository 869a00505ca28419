"""Lookup and insert tracing for chained hash tables."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from chainhash.core.chained import ChainedHashMap, bucket_index
from chainhash.core.pair_store import keys_match

ProbeTrace = Dict[str, Any]


def _json_friendly(value: Any) -> Any:
    """Return a JSON-serialisable representation of ``value``."""

    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)
    return value


def trace_get(map_obj: ChainedHashMap, key: Any) -> ProbeTrace:
    """Record each entry a lookup of ``key`` compares against."""

    bucket = bucket_index(key, map_obj.bucket_count)
    chain = map_obj._chains[bucket]  # pylint: disable=protected-access
    path: List[Dict[str, Any]] = []
    found = False
    if chain is not None:
        for pos, (entry_key, entry_value) in enumerate(chain):
            matches = keys_match(entry_key, key)
            path.append(
                {
                    "position": pos,
                    "key_repr": repr(entry_key),
                    "value_repr": repr(entry_value),
                    "matches": matches,
                }
            )
            if matches:
                found = True
                break
    if chain is None:
        terminal = "unallocated"
    else:
        terminal = "match" if found else "end-of-chain"
    return {
        "operation": "get",
        "key_repr": repr(key),
        "bucket": bucket,
        "bucket_count": map_obj.bucket_count,
        "chain_allocated": chain is not None,
        "chain_size": len(chain) if chain is not None else 0,
        "found": found,
        "terminal": terminal,
        "path": path,
    }


def trace_put(map_obj: ChainedHashMap, key: Any, value: Any) -> ProbeTrace:
    """Describe what ``put(key, value)`` would do without mutating the table."""

    trace = trace_get(map_obj, key)
    is_new = not trace["found"]
    entries_after = len(map_obj) + (1 if is_new else 0)
    resizes = entries_after / map_obj.bucket_count > map_obj.config.max_load_ratio
    trace.update(
        {
            "operation": "put",
            "value_repr": _json_friendly(value),
            "terminal": "append" if is_new else "update",
            "allocates_chain": not trace["chain_allocated"],
            "resizes": resizes,
        }
    )
    if resizes:
        new_buckets = map_obj.bucket_count * 2 + 1
        trace["new_bucket_count"] = new_buckets
        trace["new_bucket"] = bucket_index(key, new_buckets)
    return trace


def format_trace_lines(trace: Dict[str, Any]) -> List[str]:
    """Return a human-friendly rendering of a trace."""

    lines: List[str] = []
    operation = trace.get("operation", "?")
    lines.append(f"Chain trace {operation.upper()} key={trace.get('key_repr', '?')}")
    lines.append(f"Found: {trace.get('found')} | Terminal: {trace.get('terminal')}")
    lines.append(f"Bucket: {trace.get('bucket')} of {trace.get('bucket_count')}")
    if trace.get("resizes"):
        lines.append(
            f"Resize: -> {trace.get('new_bucket_count')} buckets (key moves to bucket {trace.get('new_bucket')})"
        )
    lines.append("Entries:")
    path = trace.get("path")
    if not isinstance(path, list) or not path:
        lines.append("  (no entries compared)")
    else:
        for item in path:
            attrs = [f"key_repr={item['key_repr']}", f"matches={str(item['matches']).lower()}"]
            lines.append(f"  Entry {item['position']}: " + ", ".join(attrs))
    return lines


__all__ = ["trace_get", "trace_put", "format_trace_lines"]
