from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse, StreamingResponse
from fastapi.staticfiles import StaticFiles

from .chat.history import filter_completed_messages
from .chat.models import ChatRequest
from .chat.prompts import build_system_prompt
from .chat.stream import DATA_STREAM_HEADERS
from .chat.tools import MODE_TOOLS, ToolContext
from .llm.config import DEFAULT_LLM_CONFIG
from .llm.groq_client import stream_chat
from .qloo.cache import get_cache_stats
from .sales.csv_loader import SalesParseError, parse_sales_csv
from .sales.models import SalesUploadRequest, SalesUploadResponse

logger = logging.getLogger(__name__)

app = FastAPI(title="TasteGraph Concierge API", version="1.0.0")

_STATIC_DIR = Path(__file__).resolve().parent / "static"


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()


# ── Sales upload ─────────────────────────────────────────────────────────


@app.post("/sales/parse", response_model=SalesUploadResponse)
def parse_sales(body: SalesUploadRequest) -> SalesUploadResponse:
    try:
        records = parse_sales_csv(body.csv)
    except SalesParseError as exc:
        logger.info("Rejected sales upload: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return SalesUploadResponse(records=records, total=len(records))


# ── Chat endpoint ────────────────────────────────────────────────────────


@app.post("/api/chat")
def chat(body: ChatRequest) -> StreamingResponse:
    # 1. Strip tool invocations left over from earlier turns
    messages = filter_completed_messages(body.messages)
    if not messages:
        raise HTTPException(status_code=422, detail="No user or assistant messages to answer")

    # 2. Request-scoped data the tools read
    context = ToolContext(
        sales=body.sales,
        store_type=body.store_type,
        location_context=body.location_context,
    )

    # 3. Mode-specific prompt and tool set
    system_prompt = build_system_prompt(
        body.mode,
        store_type=body.store_type,
        location_context=body.location_context,
        sales_count=len(body.sales),
    )

    logger.info(
        "Chat request: mode=%s messages=%d sales=%d",
        body.mode.value, len(messages), len(body.sales),
    )

    return StreamingResponse(
        stream_chat(
            messages, system_prompt, MODE_TOOLS[body.mode], context, config=DEFAULT_LLM_CONFIG,
        ),
        media_type="text/plain; charset=utf-8",
        headers=DATA_STREAM_HEADERS,
    )


# ── Static ───────────────────────────────────────────────────────────────


app.mount("/static", StaticFiles(directory=str(_STATIC_DIR)), name="static")


@app.get("/")
def root():
    return FileResponse(str(_STATIC_DIR / "index.html"))
