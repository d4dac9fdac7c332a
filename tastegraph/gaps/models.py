from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class SalesRecord(BaseModel):
    sku_id: str = Field(..., min_length=1)
    tags: list[str] = Field(..., min_length=1)
    qty: float = Field(default=0.0, ge=0.0)
    margin: float = Field(default=1.0)

    @field_validator("sku_id")
    @classmethod
    def _strip_sku(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("sku_id must not be blank")
        return value

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, value: list[str]) -> list[str]:
        tags = [t.strip().lower() for t in value if t and t.strip()]
        if not tags:
            raise ValueError("at least one non-blank tag is required")
        return tags


class TasteEntity(BaseModel):
    name: str = Field(..., min_length=1)
    relevance: float = Field(..., ge=0.0, le=1.0)
    type: str | None = None
    categories: list[str] = Field(default_factory=list)


class TasteGap(BaseModel):
    suggested_item: str = Field(..., min_length=1)
    rationale: str = ""
    predicted_impact: str = ""
    affinity_score: float = Field(..., ge=0.0, le=1.0)
    gap_score: float = 0.0
    categories: list[str] = Field(default_factory=list)


class ViabilityAssessment(BaseModel):
    viability: float = Field(..., ge=0.0, le=1.0)
    issues: list[str] = Field(default_factory=list)
    is_viable: bool
    complexity: str = "medium"
    audiences: list[str] = Field(default_factory=list)
