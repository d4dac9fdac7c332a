from __future__ import annotations

from .models import SalesRecord, TasteEntity, TasteGap

WORD_MATCH_WEIGHT = 0.7
CATEGORY_MATCH_WEIGHT = 0.8

MIN_GAP_RELEVANCE = 0.3
RELATED_AFFINITY_THRESHOLD = 0.2
MIN_RELATED_RECORDS = 3
COVERAGE_SATURATION = 5
WEEKLY_IMPACT_MULTIPLIER = 25
MAX_GAPS = 20


def _normalize_tags(tags: list[str]) -> set[str]:
    return {t.strip().lower() for t in tags if t and t.strip()}


def calculate_affinity(record: SalesRecord, entities: list[TasteEntity]) -> float:
    """
    Tag-overlap score between one sales record and a set of taste entities.

    Per entity, a name that is itself a tag earns the full relevance;
    otherwise each word of the name found among the tags earns 0.7x. Every
    declared category found among the tags adds 0.8x on top. Contributions
    are summed and capped at 1.0.
    """
    tags = _normalize_tags(record.tags)
    score = 0.0

    for entity in entities:
        name = entity.name.strip().lower()
        if name in tags:
            score += entity.relevance
        else:
            for word in name.split():
                if word in tags:
                    score += entity.relevance * WORD_MATCH_WEIGHT

        for category in entity.categories:
            if category.strip().lower() in tags:
                score += entity.relevance * CATEGORY_MATCH_WEIGHT

    return min(score, 1.0)


def _format_impact(amount: float) -> str:
    return f"${amount:,.2f}/week"


def find_taste_gaps(
    records: list[SalesRecord],
    entities: list[TasteEntity],
) -> list[TasteGap]:
    """
    Find taste entities the current inventory under-serves.

    An entity with relevance >= 0.3 is a gap when fewer than three records
    relate to it (single-entity affinity above 0.2) or none of the related
    records has sold anything. Returns at most 20 gaps, best first.
    """
    sold_by_sku = {r.sku_id: r.qty for r in records}
    avg_margin = sum(r.margin for r in records) / max(len(records), 1)

    gaps: list[TasteGap] = []
    for entity in entities:
        if entity.relevance < MIN_GAP_RELEVANCE:
            continue

        related = [
            r for r in records
            if calculate_affinity(r, [entity]) > RELATED_AFFINITY_THRESHOLD
        ]
        covered = [r for r in related if sold_by_sku.get(r.sku_id, 0) > 0]

        if len(related) >= MIN_RELATED_RECORDS and covered:
            continue

        # covered <= related < 3 whenever covered is non-zero here, so the
        # penalty never pushes the score below zero.
        gap_score = entity.relevance * (1 - len(covered) / COVERAGE_SATURATION)

        gaps.append(TasteGap(
            suggested_item=entity.name,
            rationale=(
                f"{entity.name} carries {entity.relevance * 100:.0f}% local taste "
                f"relevance but only {len(covered)} related SKU(s) are selling."
            ),
            predicted_impact=_format_impact(
                entity.relevance * avg_margin * WEEKLY_IMPACT_MULTIPLIER
            ),
            affinity_score=entity.relevance,
            gap_score=round(gap_score, 4),
            categories=list(entity.categories) or [entity.type or "general"],
        ))

    gaps.sort(key=lambda g: g.gap_score, reverse=True)
    return gaps[:MAX_GAPS]
