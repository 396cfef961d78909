# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-10
# Description: SearchTypes
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass
class SearchResult:
    """One ranked hit, display-ready. Built per request, never persisted."""
    rank: int
    score: float
    ref: Dict[str, Any]
    snippet: str
    chunk_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RetrievalOutcome:
    results: List[SearchResult]
    scoring: str  # "cosine" | "keyword"
    used_fallback: bool  # query embedding came from the local hash provider


@dataclass
class AnswerResult:
    answer: str
    cited_ranks: List[int] = field(default_factory=list)
    used_fallback: bool = False
    model: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"answer": self.answer, "citations": list(self.cited_ranks)}


@dataclass
class SearchResponse:
    query: str
    k: int
    results: List[SearchResult]
    answer: AnswerResult
    scoring: str
    embedding_fallback: bool
    answer_fallback: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "q": self.query,
            "k": self.k,
            "results": [r.to_dict() for r in self.results],
            "answer": self.answer.to_dict(),
            "scoring": self.scoring,
            "used_fallback": {
                "embedding": self.embedding_fallback,
                "answer": self.answer_fallback,
            },
        }
