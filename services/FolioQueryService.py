# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-11
# Updated: 2026-10-03
# Description: FolioQueryService
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict, List, Optional, Sequence

import settings
from embedding.EmbeddingRecord import EmbeddingRecord
from embedding.FolioEmbedder import FolioEmbedder
from entities.FolioEntityStore import FolioEntityStore
from retrieval.Ranking import (
    SCORING_COSINE,
    SCORING_KEYWORD,
    ScoredRecord,
    rank_by_cosine,
    rank_by_keyword,
)
from retrieval.SearchTypes import RetrievalOutcome, SearchResult
from utility.logging_utils import get_class_logger
from vectorstore.FolioVectorStore import FolioVectorStore


class FolioQueryService:
    """
    Retrieval & ranking over a snapshot of the vector store:
      - embed the query at the corpus dimension
      - cosine ranking over compatible records, else keyword scoring
      - enrich the top-k with project display metadata
    Read-only: query traffic never writes to the store.
    """

    def __init__(
            self,
            *,
            store: FolioVectorStore,
            embedder: FolioEmbedder,
            entity_store: FolioEntityStore,
            source_kind: str = settings.SOURCE_KIND,
            snippet_chars: int = settings.SNIPPET_CHARS,
            logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.embedder = embedder
        self.entity_store = entity_store
        self.source_kind = source_kind
        self.snippet_chars = snippet_chars
        self.logger = logger or get_class_logger(self.__class__)

    def target_dim(self) -> int:
        """Dimension of the stored corpus, or the provider default when empty."""
        dim = self.store.any_vector_dim(self.source_kind)
        return dim or self.embedder.native_dim

    def search(self, query_text: str, k: int, *, prefer_keyword: bool = False) -> RetrievalOutcome:
        q = (query_text or "").strip()
        if not q:
            raise ValueError("query_text must not be empty")
        if k < 1:
            raise ValueError(f"k must be >= 1, got {k}")

        dim = self.target_dim()
        emb = self.embedder.embed(q, dim)
        records = self.store.list_records(self.source_kind)

        self.logger.info(
            "search: query='%s' k=%d dim=%d records=%d embed_fallback=%s (start)",
            q[:120],
            k,
            dim,
            len(records),
            emb.used_fallback,
        )

        if not records:
            return RetrievalOutcome(results=[], scoring=SCORING_COSINE, used_fallback=emb.used_fallback)

        scorable = [] if prefer_keyword else self._scorable(records, emb.dim)
        if scorable and len(scorable) < len(records):
            self.logger.warning(
                "search: %d of %d records have a dimension other than %d and are not scored",
                len(records) - len(scorable),
                len(records),
                emb.dim,
            )
        if scorable:
            scored = rank_by_cosine(emb.vector, scorable, k)
            scoring = SCORING_COSINE
        else:
            self.logger.info(
                "search: no vector-compatible records (prefer_keyword=%s); keyword scoring",
                prefer_keyword,
            )
            scored = rank_by_keyword(q, records, k)
            scoring = SCORING_KEYWORD

        results = self._enrich(scored)
        self.logger.info("search: scoring=%s results=%d (done)", scoring, len(results))
        return RetrievalOutcome(results=results, scoring=scoring, used_fallback=emb.used_fallback)

    @staticmethod
    def _scorable(records: Sequence[EmbeddingRecord], dim: int) -> List[EmbeddingRecord]:
        """
        Every record whose vector has the query's dimension. Provenance
        (`metadata.emb_model`) is not a filter: an indexer run that fell back
        to local vectors part-way still leaves all of its records reachable.
        """
        return [r for r in records if r.vector_dim == dim]

    def _enrich(self, scored: Sequence[ScoredRecord]) -> List[SearchResult]:
        ref_ids = list(dict.fromkeys(s.record.ref_id for s in scored))
        by_id: Dict[str, Dict[str, Any]] = self.entity_store.get_display_metadata(ref_ids) if ref_ids else {}

        results: List[SearchResult] = []
        for rank, s in enumerate(scored, start=1):
            p: Optional[Dict[str, Any]] = by_id.get(s.record.ref_id)
            results.append(SearchResult(
                rank=rank,
                score=round(float(s.score), 4),
                ref={
                    "id": s.record.ref_id,
                    "title": p.get("title") if p else None,
                    "demo": (p.get("live_demo") if p else None) or None,
                    "github": (p.get("github") if p else None) or None,
                    "tech": list(p.get("technologies") or []) if p else [],
                    "image": (p.get("image") if p else None) or None,
                },
                snippet=(s.record.text or "")[: self.snippet_chars],
                chunk_id=s.record.chunk_id,
            ))
        return results
