# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-15
# Updated: 2026-10-06
# Description: FolioIndexService.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

import settings
from chunking.FolioChunker import FolioChunker
from chunking.LangDetectDetector import LangDetectDetector
from embedding.EmbeddingRecord import EmbeddingRecord
from embedding.FolioEmbedder import FolioEmbedder
from entities.ProjectEntity import ProjectEntity
from utility.logging_utils import get_class_logger
from vectorstore.FolioVectorStore import FolioVectorStore


@dataclass
class IndexSummary:
    entities: int = 0
    indexed: int = 0
    failed: int = 0
    chunks: int = 0
    fallback_chunks: int = 0
    failed_ids: List[str] = field(default_factory=list)


class FolioIndexService:
    """
    Owns the corpus index pipeline:
      - build the base document (title + body + tags)
      - chunk (word-bounded, capped per entity)
      - embed each chunk at the canonical corpus dimension
      - upsert by (ref_id, chunk_id) so re-runs overwrite instead of duplicating
    """

    def __init__(
            self,
            *,
            store: FolioVectorStore,
            embedder: FolioEmbedder,
            chunker: FolioChunker,
            lang_detector: Optional[LangDetectDetector] = None,
            default_lang: str = "it",
            canonical_dim: Optional[int] = None,
            max_workers: int = settings.INDEX_CONCURRENCY,
            logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.embedder = embedder
        self.chunker = chunker
        self.lang_detector = lang_detector or LangDetectDetector()
        self.default_lang = default_lang
        # every vector is written at one dimension so queries never reconcile at read time
        self.canonical_dim = canonical_dim or embedder.native_dim
        self.max_workers = max_workers
        self.logger = logger or get_class_logger(self.__class__)

    def index_entity(
            self,
            entity_id: str,
            title: str,
            body: str,
            tags: Sequence[str],
            metadata: Optional[Dict[str, Any]] = None,
    ) -> int:
        """Index one entity; returns the number of chunks written. Store errors propagate."""
        entity_id = str(entity_id)
        written, _fallbacks = self._index(entity_id, title, body, tags, metadata)
        return written

    def _index(
            self,
            entity_id: str,
            title: str,
            body: str,
            tags: Sequence[str],
            metadata: Optional[Dict[str, Any]],
    ) -> tuple[int, int]:
        chunks = self.chunker.chunk_entity(entity_id, title, body, tags, metadata)

        written = 0
        fallbacks = 0
        for chunk in chunks:
            emb = self.embedder.embed(chunk.text, self.canonical_dim)
            if emb.used_fallback:
                fallbacks += 1

            record = EmbeddingRecord(
                source_kind=self.chunker.source_kind,
                ref_id=entity_id,
                chunk_id=chunk.chunk_id,
                text=chunk.text,
                vector=emb.vector,
                language=self.lang_detector.language_or(chunk.text, self.default_lang),
                metadata={**chunk.metadata, "emb_model": emb.model},
            )
            self.store.upsert_record(record)
            written += 1

        self.logger.info(
            "Indexed entity=%s chunks=%d (local fallback=%d)",
            entity_id,
            written,
            fallbacks,
        )
        return written, fallbacks

    def index_project(self, project: ProjectEntity) -> int:
        return self.index_entity(
            project.id,
            project.title,
            project.description,
            project.technologies,
        )

    def index_entities(self, projects: Iterable[ProjectEntity], *, only_published: bool = settings.INDEX_ONLY_PUBLISHED) -> IndexSummary:
        """
        Index many projects with bounded parallelism. A failing project is
        logged and counted; the batch carries on.
        """
        todo = [p for p in projects if p.is_published or not only_published]
        summary = IndexSummary(entities=len(todo))

        self.logger.info("Indexing %d projects (workers=%d)", len(todo), self.max_workers)
        if not todo:
            return summary

        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="folio-index") as pool:
            futures = {
                pool.submit(self._index, p.id, p.title, p.description, p.technologies, None): p
                for p in todo
            }
            for fut in as_completed(futures):
                project = futures[fut]
                try:
                    written, fallbacks = fut.result()
                except Exception as e:
                    self.logger.error("Failed indexing project '%s': %s", project.id, e, exc_info=True)
                    summary.failed += 1
                    summary.failed_ids.append(project.id)
                    continue

                summary.indexed += 1
                summary.chunks += written
                summary.fallback_chunks += fallbacks
                done = summary.indexed + summary.failed
                if done % settings.INDEX_PROGRESS_EVERY == 0:
                    self.logger.info("Indexed %d/%d projects...", done, len(todo))

        self.logger.info(
            "Index complete: projects=%d ok=%d failed=%d chunks upserted=%d",
            summary.entities,
            summary.indexed,
            summary.failed,
            summary.chunks,
        )
        return summary


if __name__ == "__main__":
    from api.AppContainer import AppContainer

    container = AppContainer()
    result = container.index_service.index_entities(container.entity_store.list_published())

    print("\n=== Index Results ===")
    print(f"projects: {result.entities}  ok: {result.indexed}  failed: {result.failed}")
    print(f"chunks upserted: {result.chunks} (local fallback: {result.fallback_chunks})")
    if result.failed_ids:
        print(f"failed ids: {', '.join(result.failed_ids)}")
    container.close()
