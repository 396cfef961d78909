# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-14
# Description: FolioChunker
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import settings
from embedding.EmbeddingRecord import make_chunk_id
from utility.logging_utils import get_class_logger


@dataclass
class FolioChunk:
    """A bounded, word-aligned excerpt of one entity's base document."""
    chunk_id: str
    ref_id: str
    index: int
    text: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def short_preview(self, n: int = 120) -> str:
        """Return a compact text preview for logging/debugging."""
        clean = " ".join(self.text.split())
        preview = (clean[:n] + "...") if len(clean) > n else clean
        return f"[{self.chunk_id}] {preview}"


def build_base_document(title: str, body: str, tags: Sequence[str]) -> str:
    return f"{title or ''}\n\n{body or ''}\n\nTech: {', '.join(str(t) for t in tags or [])}"


def split_words(text: str, max_chars: int) -> List[str]:
    """
    Greedy word packing: whitespace tokens are appended to the running
    segment until the next one would push it past max_chars. A token longer
    than max_chars becomes a segment of its own.
    """
    if max_chars <= 0:
        raise ValueError(f"max_chars must be positive, got {max_chars}")

    out: List[str] = []
    cur: List[str] = []
    cur_len = 0
    for word in str(text or "").split():
        added = len(word) if not cur else cur_len + 1 + len(word)
        if cur and added > max_chars:
            out.append(" ".join(cur))
            cur, cur_len = [word], len(word)
        else:
            cur.append(word)
            cur_len = added
    if cur:
        out.append(" ".join(cur))
    return out


class FolioChunker:
    """
    Splits an entity's base document (title + body + tags) into at most
    `max_chunks` segments of at most `max_chars` characters.
    """

    def __init__(
            self,
            *,
            max_chars: int = settings.CHUNK_MAX_CHARS,
            max_chunks: int = settings.CHUNK_MAX_PER_ENTITY,
            source_kind: str = settings.SOURCE_KIND,
            logger: logging.Logger | None = None,
    ):
        if max_chunks <= 0:
            raise ValueError(f"max_chunks must be positive, got {max_chunks}")
        self.max_chars = max_chars
        self.max_chunks = max_chunks
        self.source_kind = source_kind
        self.logger = logger or get_class_logger(self.__class__)

    def chunk_text(self, text: str) -> List[str]:
        segments = split_words(text, self.max_chars)
        if len(segments) > self.max_chunks:
            self.logger.debug(
                "Capping %d segments to %d",
                len(segments),
                self.max_chunks,
            )
        return segments[: self.max_chunks]

    def chunk_entity(
            self,
            entity_id: str,
            title: str,
            body: str,
            tags: Sequence[str],
            metadata: Optional[Dict[str, Any]] = None,
    ) -> List[FolioChunk]:
        base = build_base_document(title, body, tags)
        segments = self.chunk_text(base)

        chunks = [
            FolioChunk(
                chunk_id=make_chunk_id(self.source_kind, entity_id, i),
                ref_id=entity_id,
                index=i,
                text=segment,
                metadata={**(metadata or {}), "tags": list(tags or []), "chunk_index": i},
            )
            for i, segment in enumerate(segments)
        ]

        if chunks:
            self.logger.debug("Chunked entity=%s into %d chunks; first=%s", entity_id, len(chunks), chunks[0].short_preview())
        else:
            self.logger.warning("No chunks produced for entity=%s", entity_id)
        return chunks
