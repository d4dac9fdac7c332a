from __future__ import annotations

from collections import Counter

from .models import CulturalSignals, InsightEntity, SignalContext, SignalPlace

RELEVANT_PLACE_TYPES = (
    "restaurant",
    "cafe",
    "deli",
    "bakery",
    "bar",
    "coffee",
    "ice_cream_shop",
    "sandwich_shop",
    "museum",
    "tourist_attraction",
)
MIN_BUSINESS_RATING = 3.8
DEFAULT_PRICE_LEVEL = 2


def _is_relevant(entity: InsightEntity) -> bool:
    for tag in entity.tags:
        tag_type = (tag.type or "").lower()
        tag_name = (tag.name or "").lower()
        if any(t in tag_type or t in tag_name for t in RELEVANT_PLACE_TYPES):
            return True
    return False


def _has_good_rating(entity: InsightEntity) -> bool:
    rating = entity.properties.business_rating if entity.properties else None
    return not rating or rating > MIN_BUSINESS_RATING


def _price_level(entity: InsightEntity) -> float:
    if entity.properties and entity.properties.price_level:
        return entity.properties.price_level
    return DEFAULT_PRICE_LEVEL


def _most_common_neighborhood(places: list[InsightEntity]) -> str:
    neighborhoods = [
        p.properties.neighborhood
        for p in places
        if p.properties and p.properties.neighborhood
    ]
    if not neighborhoods:
        return "Unknown"
    # Ties resolve to the neighborhood seen first.
    return Counter(neighborhoods).most_common(1)[0][0]


def _average_price_level(places: list[InsightEntity]) -> float:
    if not places:
        return float(DEFAULT_PRICE_LEVEL)
    prices = [_price_level(p) for p in places]
    return round(sum(prices) / len(prices), 1)


def _to_signal_place(entity: InsightEntity) -> SignalPlace:
    props = entity.properties
    return SignalPlace(
        name=entity.name,
        type=entity.subtype or "place",
        description=props.description if props else None,
        price_level=_price_level(entity),
        business_rating=props.business_rating if props else None,
        popularity=props.popularity if props else None,
        neighborhood=props.neighborhood if props else None,
        top_keywords=[k.name for k in props.keywords[:5]] if props else [],
        specialties=[d.name for d in props.specialty_dishes[:5]] if props else [],
        categories=[t.name for t in entity.tags[:10] if t.name],
    )


def extract_cultural_signals(entities: list[InsightEntity]) -> CulturalSignals:
    """
    Reduce raw insight entities to the places worth talking about.

    A place is kept when one of its tags names a food, drink or sightseeing
    venue type and its business rating is either unknown or above 3.8.
    """
    relevant = [e for e in entities if _is_relevant(e) and _has_good_rating(e)]

    place_types: list[str] = []
    for entity in relevant:
        for tag in entity.tags[:3]:
            if tag.name and tag.name not in place_types:
                place_types.append(tag.name)

    return CulturalSignals(
        places=[_to_signal_place(e) for e in relevant],
        context=SignalContext(
            neighborhood=_most_common_neighborhood(relevant),
            average_price_level=_average_price_level(relevant),
            total_places=len(relevant),
            place_types=place_types[:6],
        ),
    )
