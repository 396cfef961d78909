# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-16
# Description: FolioSearchService.py
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass

from retrieval.SearchTypes import SearchResponse
from services.FolioAnswerService import FolioAnswerService
from services.FolioQueryService import FolioQueryService
from utility.logging_utils import get_class_logger


@dataclass
class FolioSearchService:
    """
    Public search entry point:
        - retrieves and ranks chunks using FolioQueryService
        - turns the top-k into a cited answer using FolioAnswerService
        - returns results + answer (+ which fallbacks were taken)
    """
    query_service: FolioQueryService
    answer_service: FolioAnswerService
    logger: logging.Logger | None = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    def search(self, query_text: str, k: int, *, prefer_keyword: bool = False) -> SearchResponse:
        q = (query_text or "").strip()

        outcome = self.query_service.search(q, k, prefer_keyword=prefer_keyword)
        answer = self.answer_service.synthesize(q, outcome.results)

        self.logger.info(
            "search: q='%s' k=%d results=%d scoring=%s embed_fallback=%s answer_fallback=%s",
            q[:120],
            k,
            len(outcome.results),
            outcome.scoring,
            outcome.used_fallback,
            answer.used_fallback,
        )

        return SearchResponse(
            query=q,
            k=k,
            results=outcome.results,
            answer=answer,
            scoring=outcome.scoring,
            embedding_fallback=outcome.used_fallback,
            answer_fallback=answer.used_fallback,
        )
