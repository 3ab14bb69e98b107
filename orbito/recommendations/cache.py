"""
In-process TTL cache for recommendation results.

Entries are keyed by namespace plus a digest of the request; expired entries
are evicted lazily on lookup.
"""
from __future__ import annotations

import hashlib
import json
import time
from typing import Any

_cache: dict[str, dict[str, Any]] = {}
_hits: int = 0
_misses: int = 0
_DEFAULT_TTL = 300  # 5 minutes


def _make_key(namespace: str, request_dict: dict) -> str:
    normalized = json.dumps(request_dict, sort_keys=True, default=str)
    digest = hashlib.sha256(normalized.encode()).hexdigest()[:16]
    return f"{namespace}:{digest}"


def cache_get(namespace: str, request_dict: dict, ttl: float = _DEFAULT_TTL) -> Any | None:
    global _hits, _misses
    key = _make_key(namespace, request_dict)
    entry = _cache.get(key)
    if entry and time.time() - entry["created_at"] < ttl:
        _hits += 1
        return entry["value"]
    if entry:
        del _cache[key]
    _misses += 1
    return None


def cache_set(namespace: str, request_dict: dict, value: Any) -> None:
    _cache[_make_key(namespace, request_dict)] = {"value": value, "created_at": time.time()}


def get_cache_stats() -> dict:
    total = _hits + _misses
    namespaces: dict[str, int] = {}
    for key in _cache:
        ns = key.split(":", 1)[0]
        namespaces[ns] = namespaces.get(ns, 0) + 1
    return {
        "size": len(_cache),
        "hits": _hits,
        "misses": _misses,
        "hit_rate": round(_hits / total * 100, 1) if total > 0 else 0.0,
        "namespaces": namespaces,
    }


def clear_cache() -> None:
    global _hits, _misses
    _cache.clear()
    _hits = 0
    _misses = 0
