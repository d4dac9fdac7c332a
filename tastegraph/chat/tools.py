from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Literal

from pydantic import BaseModel, Field

from ..gaps.affinity import find_taste_gaps
from ..gaps.categories import convert_categories_to_entities
from ..gaps.models import SalesRecord, TasteGap
from ..gaps.viability import assess_viability
from ..qloo.client import get_place_insights, get_recommendations, search_entities
from ..qloo.config import DEFAULT_QLOO_CONFIG, QlooConfig
from ..qloo.signals import extract_cultural_signals
from .models import ChatMode

logger = logging.getLogger(__name__)

EntityType = Literal[
    "urn:entity:actor",
    "urn:entity:album",
    "urn:entity:artist",
    "urn:entity:author",
    "urn:entity:book",
    "urn:entity:brand",
    "urn:entity:destination",
    "urn:entity:director",
    "urn:entity:locality",
    "urn:entity:movie",
    "urn:entity:person",
    "urn:entity:place",
    "urn:entity:podcast",
    "urn:entity:tv_show",
    "urn:entity:videogame",
    "urn:demographics",
    "urn:tag",
]


@dataclass
class ToolContext:
    """Request-scoped data the tools need but the model never sends."""

    sales: list[SalesRecord] = field(default_factory=list)
    store_type: str | None = None
    location_context: str | None = None
    qloo_config: QlooConfig = DEFAULT_QLOO_CONFIG


# ---------------------------------------------------------------------------
# Tool inputs
# ---------------------------------------------------------------------------


class SearchQlooInput(BaseModel):
    query: str = Field(
        ..., min_length=1,
        description='Search query for a preference (e.g. "Radiohead", "Korean BBQ")',
    )
    type: EntityType | None = Field(default=None, description="Entity type to search for")


class GetRecommendationsInput(BaseModel):
    entityIds: list[str] = Field(
        ..., min_length=1, description="Entity IDs taken from searchQloo results",
    )
    location: str | None = Field(
        default=None, description='Location for recommendations (e.g. "Berlin, Germany")',
    )
    type: str | None = Field(
        default=None, description='Kind of recommendation (e.g. "restaurant", "event", "venue")',
    )


class GetPlaceInsightsInput(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    radius: int | None = Field(
        default=None, gt=0, le=50_000, description="Search radius in metres",
    )
    tags: list[str] | None = Field(
        default=None, description="Optional Qloo tag IDs to narrow the places",
    )


class FindTasteGapsInput(BaseModel):
    categories: list[str] = Field(
        ..., min_length=1, max_length=40,
        description="Product categories suggested by the local taste signals, most relevant first",
    )


class ValidateViabilityInput(BaseModel):
    suggestions: list[TasteGap] = Field(
        ..., min_length=1, description="Gaps returned by findTasteGaps",
    )
    store_type: str | None = Field(
        default=None, description='Store type such as "coffee_shop"; defaults to the uploaded store context',
    )
    location_context: str | None = Field(
        default=None, description='Free-text surroundings such as "near the museum"',
    )


# ---------------------------------------------------------------------------
# Tool implementations
# ---------------------------------------------------------------------------


def _search_qloo(args: SearchQlooInput, context: ToolContext) -> dict[str, Any]:
    results = search_entities(args.query, args.type, config=context.qloo_config)
    suffix = f" (type: {args.type})" if args.type else ""
    return {
        "results": results,
        "message": f'Found {len(results)} matches for "{args.query}"{suffix}',
    }


def _get_recommendations(args: GetRecommendationsInput, context: ToolContext) -> dict[str, Any]:
    recommendations = get_recommendations(
        args.entityIds, args.location, args.type, config=context.qloo_config,
    )
    suffix = f" in {args.location}" if args.location else ""
    return {
        "recommendations": recommendations,
        "message": f"Found {len(recommendations)} recommendations{suffix}",
    }


def _get_place_insights(args: GetPlaceInsightsInput, context: ToolContext) -> dict[str, Any]:
    entities = get_place_insights(
        args.latitude, args.longitude, radius=args.radius, tags=args.tags,
        config=context.qloo_config,
    )
    signals = extract_cultural_signals(entities)
    return {
        "signals": signals.model_dump(),
        "message": (
            f"Kept {signals.context.total_places} of {len(entities)} places "
            f"around {signals.context.neighborhood}"
        ),
    }


def _find_taste_gaps(args: FindTasteGapsInput, context: ToolContext) -> dict[str, Any]:
    entities = convert_categories_to_entities(args.categories)
    gaps = find_taste_gaps(context.sales, entities)
    return {
        "gaps": [g.model_dump() for g in gaps],
        "total_sales_records": len(context.sales),
        "message": f"Found {len(gaps)} taste gaps across {len(entities)} categories",
    }


def _validate_viability(args: ValidateViabilityInput, context: ToolContext) -> dict[str, Any]:
    store_type = args.store_type or context.store_type or ""
    location_context = args.location_context or context.location_context or ""

    assessments = []
    for gap in args.suggestions:
        result = assess_viability(gap, store_type, location_context)
        assessments.append({"suggested_item": gap.suggested_item, **result.model_dump()})

    viable = sum(1 for a in assessments if a["is_viable"])
    return {
        "assessments": assessments,
        "message": f"{viable} of {len(assessments)} suggestions are viable for {store_type or 'this store'}",
    }


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    input_model: type[BaseModel]
    run: Callable[[Any, ToolContext], dict[str, Any]]

    def definition(self) -> dict[str, Any]:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.input_model.model_json_schema(),
            },
        }


TOOLS: dict[str, Tool] = {
    tool.name: tool
    for tool in (
        Tool(
            "searchQloo",
            "Search the Qloo taste graph to find entity IDs for user preferences",
            SearchQlooInput,
            _search_qloo,
        ),
        Tool(
            "getRecommendations",
            "Get personalized recommendations from Qloo based on entity IDs",
            GetRecommendationsInput,
            _get_recommendations,
        ),
        Tool(
            "getPlaceInsights",
            "Get popular places around a coordinate and summarize their cultural signals",
            GetPlaceInsightsInput,
            _get_place_insights,
        ),
        Tool(
            "findTasteGaps",
            "Compare product categories with the uploaded sales data and rank under-served ones",
            FindTasteGapsInput,
            _find_taste_gaps,
        ),
        Tool(
            "validateBusinessViability",
            "Check gap suggestions against store-type and location business rules",
            ValidateViabilityInput,
            _validate_viability,
        ),
    )
}

MODE_TOOLS: dict[ChatMode, tuple[str, ...]] = {
    ChatMode.travel: ("searchQloo", "getRecommendations", "getPlaceInsights"),
    ChatMode.retail: ("getPlaceInsights", "findTasteGaps", "validateBusinessViability"),
}


def tool_definitions(names: tuple[str, ...]) -> list[dict[str, Any]]:
    return [TOOLS[name].definition() for name in names]


def execute_tool(name: str, arguments: str, context: ToolContext) -> dict[str, Any]:
    """
    Validate the model's JSON arguments and run the named tool.

    Never raises: any failure is returned as ``{"error", "message"}`` so the
    model can react to it.
    """
    tool = TOOLS.get(name)
    if tool is None:
        return {"error": "UnknownTool", "message": f"No tool named {name!r}"}

    try:
        args = tool.input_model.model_validate_json(arguments or "{}")
        return tool.run(args, context)
    except Exception as exc:
        logger.warning("Tool %s failed", name, exc_info=True)
        return {"error": type(exc).__name__, "message": str(exc)}
