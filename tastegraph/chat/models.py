from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..gaps.models import SalesRecord


class ChatMode(str, Enum):
    travel = "travel"
    retail = "retail"


class ChatMessage(BaseModel):
    # UI messages also carry ids, parts and toolInvocations; they are kept
    # here and dropped when building the LLM history.
    model_config = ConfigDict(extra="allow")

    role: str
    content: str | None = ""


class ChatRequest(BaseModel):
    messages: list[ChatMessage] = Field(..., min_length=1)
    mode: ChatMode = ChatMode.travel
    sales: list[SalesRecord] = Field(default_factory=list)
    store_type: str | None = Field(default=None, max_length=100)
    location_context: str | None = Field(default=None, max_length=500)
