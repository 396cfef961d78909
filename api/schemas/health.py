# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-21
# Description: health.py
# -----------------------------------------------------------------------------
from typing import Dict, Literal

from pydantic import BaseModel, Field

HealthStatus = Literal["ok", "degraded", "error"]


class HealthResponse(BaseModel):
    status: HealthStatus = "ok"
    message: str


class SmokeTestSummary(BaseModel):
    total: int = Field(ge=0)
    passed: int = Field(ge=0)
    failed: int = Field(ge=0)


class DeepHealthResponse(BaseModel):
    """Outcome of the vector store, embedding and chat probes."""
    status: HealthStatus
    results: Dict[str, bool]
    summary: SmokeTestSummary
    # vector dimension -> stored record count; empty when the store is unreachable
    dimensions: Dict[int, int] = Field(default_factory=dict)
