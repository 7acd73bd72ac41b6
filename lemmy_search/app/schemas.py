from __future__ import annotations

from pydantic import BaseModel, Field


class HighlightRequest(BaseModel):
    body: str
    query_terms: list[str] | None = None
    query: str | None = None


class SegmentModel(BaseModel):
    text: str
    highlighted: bool


class HighlightResponse(BaseModel):
    segments: list[SegmentModel] = Field(default_factory=list)
    truncated: bool = False
