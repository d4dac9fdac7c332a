from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from .cache import cache_get, cache_set
from .config import DEFAULT_QLOO_CONFIG, QlooConfig
from .models import InsightEntity

logger = logging.getLogger(__name__)

PLACE_TYPE = "urn:entity:place"

Params = list[tuple[str, str]]


class TasteAPIError(RuntimeError):
    """Raised when the taste-graph API cannot answer a query."""


def _field(data: dict[str, Any], key: str, kind: type) -> Any:
    value = data.get(key) or kind()
    if not isinstance(value, kind):
        raise ValueError(f"Expected {key!r} to be a {kind.__name__}, got {type(value).__name__}")
    return value


def _get(
    path: str,
    params: Params,
    config: QlooConfig,
    transport: httpx.BaseTransport | None = None,
) -> dict[str, Any]:
    cached = cache_get(path, params)
    if cached is not None:
        return cached

    with httpx.Client(
        base_url=config.base_url,
        headers={"X-Api-Key": config.api_key},
        timeout=config.timeout,
        transport=transport,
    ) as client:
        response = client.get(path, params=params)
        response.raise_for_status()
        data = response.json()

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object from {path}, got {type(data).__name__}")
    cache_set(path, params, data, ttl=config.cache_ttl)
    return data


# ---------------------------------------------------------------------------
# Search & recommendations
# ---------------------------------------------------------------------------


def search_entities(
    query: str,
    entity_type: str | None = None,
    config: QlooConfig = DEFAULT_QLOO_CONFIG,
    transport: httpx.BaseTransport | None = None,
) -> list[dict[str, Any]]:
    """Look up entity IDs for a free-text preference such as "Radiohead"."""
    params: Params = [("query", query)]
    if entity_type:
        params.append(("type", entity_type))
    params += [
        ("filter.radius", str(config.search_radius)),
        ("operator.filter.tags", "union"),
        ("page", "1"),
        ("sort_by", "match"),
    ]

    try:
        data = _get("/search", params, config, transport)
        return _field(data, "results", list)
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Qloo search failed for %r", query, exc_info=True)
        raise TasteAPIError(f"Search for {query!r} failed: {exc}") from exc


def get_recommendations(
    entity_ids: list[str],
    location: str | None = None,
    entity_type: str | None = None,
    config: QlooConfig = DEFAULT_QLOO_CONFIG,
    transport: httpx.BaseTransport | None = None,
) -> list[dict[str, Any]]:
    """Fetch recommendations seeded by previously resolved entity IDs."""
    params: Params = [("sample[]", eid) for eid in entity_ids]
    if entity_type:
        params.append(("category", entity_type))
    if location:
        params.append(("location", location))
    params.append(("limit", str(config.recommendation_limit)))

    try:
        data = _get("/recommendations", params, config, transport)
        return _field(data, "recommendations", list)
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Qloo recommendations failed for %s", entity_ids, exc_info=True)
        raise TasteAPIError(f"Recommendations request failed: {exc}") from exc


# ---------------------------------------------------------------------------
# Insights
# ---------------------------------------------------------------------------


def _insight_approaches(
    latitude: float,
    longitude: float,
    radius: int,
    take: int,
    tags: list[str] | None,
) -> list[tuple[str, Params]]:
    """Query shapes to try in order, from most to least specific."""
    point = f"POINT({longitude} {latitude})"
    base: Params = [("filter.type", PLACE_TYPE), ("take", str(take)), ("page", "1")]

    approaches: list[tuple[str, Params]] = []
    if tags:
        approaches.append((
            "tagged_point",
            base + [
                ("filter.location", point),
                ("filter.location.radius", str(radius)),
                ("filter.tags", ",".join(tags)),
                ("operator.filter.tags", "union"),
                ("sort_by", "affinity"),
            ],
        ))
    approaches.append((
        "point",
        base + [
            ("filter.location", point),
            ("filter.location.radius", str(radius)),
            ("sort_by", "affinity"),
        ],
    ))
    approaches.append((
        "signal_location",
        base + [
            ("signal.location", point),
            ("signal.location.radius", str(radius)),
            ("sort_by", "distance"),
        ],
    ))
    approaches.append((
        "wide_point",
        base + [
            ("filter.location", point),
            ("filter.location.radius", str(radius * 5)),
            ("sort_by", "distance"),
        ],
    ))
    return approaches


def get_place_insights(
    latitude: float,
    longitude: float,
    radius: int | None = None,
    take: int | None = None,
    tags: list[str] | None = None,
    config: QlooConfig = DEFAULT_QLOO_CONFIG,
    transport: httpx.BaseTransport | None = None,
) -> list[InsightEntity]:
    """
    Fetch places around a point from the insights endpoint.

    Each approach from ``_insight_approaches`` is tried once, in order. A
    failing approach is logged and skipped; the first one that returns any
    entities wins. Raises ``TasteAPIError`` only when every approach failed.
    """
    approaches = _insight_approaches(
        latitude,
        longitude,
        radius or config.insights_radius_m,
        take or config.insights_take,
        tags,
    )

    errors: list[str] = []
    for name, params in approaches:
        try:
            data = _get("/v2/insights", params, config, transport)
            raw = _field(_field(data, "results", dict), "entities", list)
            entities = [InsightEntity.model_validate(e) for e in raw]
        except (httpx.HTTPError, ValueError, ValidationError) as exc:
            logger.warning("Insights approach %r failed", name, exc_info=True)
            errors.append(f"{name}: {exc}")
            continue

        if entities:
            logger.info("Insights approach %r returned %d places", name, len(entities))
            return entities

    if len(errors) == len(approaches):
        raise TasteAPIError("All insight approaches failed: " + "; ".join(errors))
    return []
