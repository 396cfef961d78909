# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-22
# Description: index.py
# -----------------------------------------------------------------------------
from pydantic import BaseModel

class IndexEntityResponse(BaseModel):
    entity_id: str
    chunks: int

class IndexAllResponse(BaseModel):
    entities: int
    indexed: int
    failed: int
    chunks: int
    fallback_chunks: int
    failed_ids: list[str]
