from __future__ import annotations

from unittest.mock import patch

from fastapi.testclient import TestClient

from tastegraph.app import app
from tastegraph.qloo.cache import cache_get, cache_set, clear_cache, get_cache_stats

client = TestClient(app)


def test_cache_miss_then_hit():
    clear_cache()
    assert cache_get("/search", [("query", "matcha")]) is None
    cache_set("/search", [("query", "matcha")], {"results": []})
    assert cache_get("/search", [("query", "matcha")]) == {"results": []}

    stats = get_cache_stats()
    assert stats["misses"] == 1
    assert stats["hits"] == 1
    assert stats["size"] == 1


def test_cache_different_params_miss():
    clear_cache()
    cache_set("/search", [("query", "matcha")], {"results": []})
    assert cache_get("/search", [("query", "boba")]) is None
    assert cache_get("/recommendations", [("query", "matcha")]) is None
    assert get_cache_stats()["hits"] == 0


def test_cache_entries_expire():
    clear_cache()
    with patch("tastegraph.qloo.cache.time.time", return_value=1000.0):
        cache_set("/search", [("query", "matcha")], {"results": []}, ttl=300)
    with patch("tastegraph.qloo.cache.time.time", return_value=1400.0):
        assert cache_get("/search", [("query", "matcha")]) is None
    stats = get_cache_stats()
    assert stats["size"] == 0
    assert stats["evictions"] == 1


def test_expired_insight_points_are_swept_on_write():
    clear_cache()
    with patch("tastegraph.qloo.cache.time.time", return_value=0.0):
        for i in range(500):
            cache_set("/v2/insights", [("filter.location", f"POINT({i} 52.5)")], {"results": {}}, ttl=300)
    assert get_cache_stats()["size"] == 500

    with patch("tastegraph.qloo.cache.time.time", return_value=10_000.0):
        cache_set("/v2/insights", [("filter.location", "POINT(13.4 52.5)")], {"results": {}}, ttl=300)

    stats = get_cache_stats()
    assert stats["size"] == 1
    assert stats["evictions"] == 500


@patch("tastegraph.qloo.cache.MAX_ENTRIES", 3)
def test_oldest_response_dropped_at_capacity():
    clear_cache()
    for query in ["matcha", "boba", "chai", "horchata"]:
        cache_set("/search", [("query", query)], {"results": []})

    assert get_cache_stats()["size"] == 3
    assert cache_get("/search", [("query", "matcha")]) is None
    assert cache_get("/search", [("query", "horchata")]) == {"results": []}


def test_cache_stats_endpoint():
    clear_cache()
    cache_set("/search", [("query", "matcha")], {"results": []})
    cache_get("/search", [("query", "matcha")])
    resp = client.get("/cache/stats")
    assert resp.status_code == 200
    body = resp.json()
    assert body["hits"] == 1
    assert body["hit_rate"] == 100.0
