from __future__ import annotations

from pydantic import BaseModel, Field


# ── Raw insight entities (subset of the fields the API returns) ─────────


class Keyword(BaseModel):
    name: str
    count: int | None = None


class SpecialtyDish(BaseModel):
    id: str | None = None
    name: str
    type: str | None = None
    weight: float | None = None


class EntityProperties(BaseModel):
    description: str | None = None
    neighborhood: str | None = None
    address: str | None = None
    price_level: float | None = None
    business_rating: float | None = None
    popularity: float | None = None
    keywords: list[Keyword] = Field(default_factory=list)
    specialty_dishes: list[SpecialtyDish] = Field(default_factory=list)


class EntityTag(BaseModel):
    id: str | None = None
    name: str | None = None
    type: str | None = None
    weight: float | None = None


class InsightEntity(BaseModel):
    entity_id: str
    name: str
    subtype: str | None = None
    properties: EntityProperties | None = None
    tags: list[EntityTag] = Field(default_factory=list)


# ── Cultural signals ─────────────────────────────────────────────────────


class SignalPlace(BaseModel):
    name: str
    type: str
    description: str | None = None
    price_level: float
    business_rating: float | None = None
    popularity: float | None = None
    neighborhood: str | None = None
    top_keywords: list[str] = Field(default_factory=list)
    specialties: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)


class SignalContext(BaseModel):
    neighborhood: str
    average_price_level: float
    total_places: int
    place_types: list[str] = Field(default_factory=list)


class CulturalSignals(BaseModel):
    places: list[SignalPlace]
    context: SignalContext
