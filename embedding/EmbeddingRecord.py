# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-06
# Description: EmbeddingRecord
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Any, Optional, Tuple

import numpy as np


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def make_chunk_id(source_kind: str, ref_id: str, index: int) -> str:
    """Deterministic chunk id, e.g. project:42:ch0 (stable across re-runs)."""
    return f"{source_kind}:{ref_id}:ch{index}"


@dataclass
class EmbeddingRecord:
    """Embedding vector + original text + searchable metadata. Unique by (ref_id, chunk_id)."""
    source_kind: str
    ref_id: str
    chunk_id: str
    text: str
    vector: np.ndarray
    language: str = "it"
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def vector_dim(self) -> int:
        return int(np.asarray(self.vector).shape[0])

    @property
    def key(self) -> Tuple[str, str]:
        return self.ref_id, self.chunk_id
