from __future__ import annotations

import re

from .models import TasteEntity

TOP_RELEVANCE = 0.9
RELEVANCE_STEP = 0.05

_TOKEN_SPLIT_RE = re.compile(r"[,\s&]+")


def _category_tokens(category: str) -> list[str]:
    return [w for w in _TOKEN_SPLIT_RE.split(category.lower()) if len(w) > 2]


def convert_categories_to_entities(categories: list[str]) -> list[TasteEntity]:
    """
    Rank-weight product categories: the first gets 0.90 relevance and each
    later one 0.05 less, never below zero. Blank entries are dropped before
    ranking.
    """
    cleaned = [c.strip() for c in categories if c and c.strip()]

    entities: list[TasteEntity] = []
    for index, category in enumerate(cleaned):
        relevance = max(0.0, round(TOP_RELEVANCE - index * RELEVANCE_STEP, 4))
        entities.append(TasteEntity(
            name=category,
            relevance=relevance,
            type="product_category",
            categories=_category_tokens(category),
        ))
    return entities
