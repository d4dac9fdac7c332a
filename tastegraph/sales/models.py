from __future__ import annotations

from pydantic import BaseModel, Field

from ..gaps.models import SalesRecord


class SalesUploadRequest(BaseModel):
    csv: str = Field(..., min_length=1, description="Raw CSV text including the header row")


class SalesUploadResponse(BaseModel):
    records: list[SalesRecord]
    total: int
