# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-10
# Description: Ranking
# -----------------------------------------------------------------------------
import math
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from embedding.EmbeddingRecord import EmbeddingRecord
from embedding.VectorOps import cosine_similarity

SCORING_COSINE = "cosine"
SCORING_KEYWORD = "keyword"


@dataclass(frozen=True)
class ScoredRecord:
    record: EmbeddingRecord
    score: float
    position: int  # index in the corpus snapshot, used as tie-break


def keyword_score(text: str, query: str) -> float:
    """
    Lexical fallback score: literal (non-overlapping) occurrences of each
    query token in the text, damped by log10(50 + len(text)).
    """
    t = str(text or "").lower()
    tokens = str(query or "").lower().split()
    if not tokens or not t:
        return 0.0

    hits = sum(t.count(tok) for tok in tokens)
    # the divisor is at least log10(51) > 1, so it never inflates a score
    return hits / math.log10(50 + len(t))


def top_k(scored: Sequence[ScoredRecord], k: int) -> List[ScoredRecord]:
    """Descending by score; equal scores keep corpus order."""
    if k <= 0:
        return []
    return sorted(scored, key=lambda s: (-s.score, s.position))[:k]


def rank_by_cosine(
        query_vector: np.ndarray,
        records: Sequence[EmbeddingRecord],
        k: int,
) -> List[ScoredRecord]:
    scored = [
        ScoredRecord(record=r, score=cosine_similarity(query_vector, r.vector), position=i)
        for i, r in enumerate(records)
    ]
    return top_k(scored, k)


def rank_by_keyword(
        query_text: str,
        records: Sequence[EmbeddingRecord],
        k: int,
) -> List[ScoredRecord]:
    scored = [
        ScoredRecord(record=r, score=keyword_score(r.text, query_text), position=i)
        for i, r in enumerate(records)
    ]
    return top_k(scored, k)
