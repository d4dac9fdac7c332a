from __future__ import annotations

import json
from unittest.mock import patch

from tastegraph.chat.models import ChatMode
from tastegraph.chat.tools import (
    MODE_TOOLS,
    ToolContext,
    execute_tool,
    tool_definitions,
)
from tastegraph.gaps.models import SalesRecord
from tastegraph.qloo.client import TasteAPIError
from tastegraph.qloo.models import InsightEntity

SALES = [
    SalesRecord(sku_id="M-01", tags=["matcha", "latte"], qty=0, margin=1.0),
    SalesRecord(sku_id="C-02", tags=["coffee"], qty=40, margin=1.0),
]


# ── Definitions ──────────────────────────────────────────────────────────


def test_tool_definitions_follow_function_schema():
    definitions = tool_definitions(MODE_TOOLS[ChatMode.travel])
    names = [d["function"]["name"] for d in definitions]
    assert names == ["searchQloo", "getRecommendations", "getPlaceInsights"]

    search = definitions[0]
    assert search["type"] == "function"
    assert search["function"]["parameters"]["required"] == ["query"]


def test_retail_mode_exposes_gap_tools():
    assert MODE_TOOLS[ChatMode.retail] == (
        "getPlaceInsights", "findTasteGaps", "validateBusinessViability",
    )


# ── Error handling ───────────────────────────────────────────────────────


def test_unknown_tool_returns_error():
    result = execute_tool("bookFlight", "{}", ToolContext())
    assert result["error"] == "UnknownTool"


def test_invalid_arguments_return_error():
    result = execute_tool("findTasteGaps", '{"categories": []}', ToolContext())
    assert result["error"] == "ValidationError"
    assert "categories" in result["message"]


def test_malformed_json_returns_error():
    result = execute_tool("searchQloo", '{"query": ', ToolContext())
    assert result["error"] == "ValidationError"


@patch("tastegraph.chat.tools.search_entities", side_effect=TasteAPIError("Qloo is down"))
def test_api_failure_returns_error(mock_search):
    result = execute_tool("searchQloo", '{"query": "Radiohead"}', ToolContext())
    assert result == {"error": "TasteAPIError", "message": "Qloo is down"}


# ── Happy paths ──────────────────────────────────────────────────────────


@patch("tastegraph.chat.tools.search_entities")
def test_search_qloo(mock_search):
    mock_search.return_value = [{"id": "e1", "name": "Radiohead"}]
    result = execute_tool(
        "searchQloo", json.dumps({"query": "Radiohead", "type": "urn:entity:artist"}), ToolContext(),
    )
    assert result["results"][0]["id"] == "e1"
    assert result["message"] == 'Found 1 matches for "Radiohead" (type: urn:entity:artist)'


@patch("tastegraph.chat.tools.get_recommendations")
def test_get_recommendations(mock_recs):
    mock_recs.return_value = [{"id": "r1"}, {"id": "r2"}]
    result = execute_tool(
        "getRecommendations", json.dumps({"entityIds": ["e1"], "location": "Berlin"}), ToolContext(),
    )
    assert result["message"] == "Found 2 recommendations in Berlin"
    assert mock_recs.call_args.args[:3] == (["e1"], "Berlin", None)


@patch("tastegraph.chat.tools.get_place_insights")
def test_get_place_insights_returns_signals(mock_insights):
    mock_insights.return_value = [
        InsightEntity.model_validate({
            "entity_id": "p1",
            "name": "Blue Bottle",
            "properties": {"neighborhood": "Mitte"},
            "tags": [{"name": "Cafe", "type": "urn:tag:category:place"}],
        }),
    ]
    result = execute_tool("getPlaceInsights", '{"latitude": 52.5, "longitude": 13.4}', ToolContext())
    assert result["signals"]["context"]["neighborhood"] == "Mitte"
    assert result["signals"]["places"][0]["name"] == "Blue Bottle"


def test_find_taste_gaps_uses_request_sales():
    context = ToolContext(sales=SALES)
    result = execute_tool("findTasteGaps", '{"categories": ["Matcha", "Coffee"]}', context)

    assert result["total_sales_records"] == 2
    items = [g["suggested_item"] for g in result["gaps"]]
    # Coffee is related to one selling SKU, matcha to an unsold one
    assert items == ["Matcha", "Coffee"]
    assert result["gaps"][1]["gap_score"] < result["gaps"][0]["gap_score"]


def test_validate_viability_falls_back_to_request_store():
    context = ToolContext(store_type="coffee_shop", location_context="near the museum")
    payload = {
        "suggestions": [
            {"suggested_item": "Wine flight", "affinity_score": 0.9, "categories": ["alcohol"]},
            {"suggested_item": "Matcha", "affinity_score": 0.7, "categories": ["matcha"]},
        ],
    }
    result = execute_tool("validateBusinessViability", json.dumps(payload), context)

    wine, matcha = result["assessments"]
    assert wine["suggested_item"] == "Wine flight"
    assert wine["is_viable"] is False
    assert wine["issues"] == ["alcohol not suitable for coffee_shop"]
    assert matcha["is_viable"] is True
    assert result["message"] == "1 of 2 suggestions are viable for coffee_shop"
