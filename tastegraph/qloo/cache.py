from __future__ import annotations

import hashlib
import json
import time
from typing import Any

# key -> (expires_at, response body); dict order is insertion order
_responses: dict[str, tuple[float, Any]] = {}
_hits: int = 0
_misses: int = 0
_evictions: int = 0

DEFAULT_TTL = 300.0
MAX_ENTRIES = 2048


def _make_key(path: str, params: Any) -> str:
    normalized = json.dumps({"path": path, "params": params}, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()


def _sweep(now: float) -> None:
    """Drop expired responses, then the oldest ones if still over capacity."""
    global _evictions
    expired = [key for key, (expires_at, _) in _responses.items() if expires_at <= now]
    for key in expired:
        del _responses[key]
    _evictions += len(expired)

    while len(_responses) >= MAX_ENTRIES:
        del _responses[next(iter(_responses))]
        _evictions += 1


def cache_get(path: str, params: Any) -> Any | None:
    """Return the cached body for a taste-API GET, or None on a miss."""
    global _hits, _misses, _evictions
    key = _make_key(path, params)
    entry = _responses.get(key)
    if entry is not None:
        expires_at, body = entry
        if time.time() < expires_at:
            _hits += 1
            return body
        del _responses[key]
        _evictions += 1
    _misses += 1
    return None


def cache_set(path: str, params: Any, body: Any, ttl: float = DEFAULT_TTL) -> None:
    _sweep(time.time())
    _responses[_make_key(path, params)] = (time.time() + ttl, body)


def get_cache_stats() -> dict:
    total = _hits + _misses
    return {
        "size": len(_responses),
        "hits": _hits,
        "misses": _misses,
        "evictions": _evictions,
        "hit_rate": round(_hits / total * 100, 1) if total > 0 else 0.0,
    }


def clear_cache() -> None:
    global _hits, _misses, _evictions
    _responses.clear()
    _hits = 0
    _misses = 0
    _evictions = 0
