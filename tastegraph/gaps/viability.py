from __future__ import annotations

from .models import TasteGap, ViabilityAssessment
from .rules import (
    COMPLEXITY_ORDER,
    DEFAULT_COMPLEXITY,
    DEMOGRAPHIC_APPEAL,
    IMPLEMENTATION_COMPLEXITY,
    LOCATION_CONFLICTS,
    STORE_COMPATIBILITY,
)

EXCELLENT_BOOST = 1.3
GOOD_BOOST = 1.1
AVOID_PENALTY = 0.2
LOCATION_CONFLICT_PENALTY = 0.1
VIABILITY_THRESHOLD = 0.6


def normalize_store_type(store_type: str) -> str:
    return store_type.strip().lower().replace(" ", "_")


def _matches(category: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in category for keyword in keywords)


def _complexity(categories: list[str]) -> str:
    for level in COMPLEXITY_ORDER:
        if any(_matches(c, IMPLEMENTATION_COMPLEXITY[level]) for c in categories):
            return level
    return DEFAULT_COMPLEXITY


def _audiences(categories: list[str]) -> list[str]:
    return [
        audience
        for audience, keywords in DEMOGRAPHIC_APPEAL.items()
        if any(_matches(c, keywords) for c in categories)
    ]


def assess_viability(
    gap: TasteGap,
    store_type: str,
    location_context: str = "",
) -> ViabilityAssessment:
    """
    Score a gap suggestion against the store-type and location rule tables.

    Starts from the gap's affinity score. Each category gets at most one
    store-type adjustment (excellent, then good, then avoid). Each location
    rule whose phrase appears in ``location_context`` applies its penalty
    once if any category hits its avoid list. A suggestion passes when the
    clamped score is above 0.6 and no issue was recorded.
    """
    normalized_store = normalize_store_type(store_type)
    categories = [c.strip().lower() for c in gap.categories if c and c.strip()]
    location = location_context.lower()

    viability = gap.affinity_score
    issues: list[str] = []

    compatibility = STORE_COMPATIBILITY.get(normalized_store)
    if compatibility is not None:
        for category in categories:
            if _matches(category, compatibility["excellent"]):
                viability *= EXCELLENT_BOOST
            elif _matches(category, compatibility["good"]):
                viability *= GOOD_BOOST
            elif _matches(category, compatibility["avoid"]):
                viability *= AVOID_PENALTY
                issues.append(f"{category} not suitable for {normalized_store}")

    for phrase, conflict in LOCATION_CONFLICTS.items():
        if phrase in location and any(_matches(c, conflict.avoid) for c in categories):
            viability *= LOCATION_CONFLICT_PENALTY
            issues.append(conflict.reason)

    viability = max(0.0, min(1.0, viability))

    return ViabilityAssessment(
        viability=round(viability, 4),
        issues=issues,
        is_viable=viability > VIABILITY_THRESHOLD and not issues,
        complexity=_complexity(categories),
        audiences=_audiences(categories),
    )
