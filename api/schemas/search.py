# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-22
# Description: search.py
# -----------------------------------------------------------------------------
from typing import Optional, Any, Dict, List

from pydantic import Field, BaseModel

class SearchRequest(BaseModel):
    q: str = ""
    # clamped by the router, not rejected
    k: Optional[int] = None

class SearchHit(BaseModel):
    rank: int
    score: float
    ref: Dict[str, Any]
    snippet: str
    chunk_id: Optional[str] = None

class SearchAnswer(BaseModel):
    answer: str
    citations: List[int] = Field(default_factory=list)

class FallbackFlags(BaseModel):
    embedding: bool
    answer: bool

class SearchResponseModel(BaseModel):
    success: bool = True
    method: str
    q: str
    k: int
    results: List[SearchHit]
    answer: SearchAnswer
    scoring: str
    used_fallback: FallbackFlags

class PingResponse(BaseModel):
    ok: bool
    has_key: bool
    model: Optional[str] = None
    breaker_open: bool
    ts: int
