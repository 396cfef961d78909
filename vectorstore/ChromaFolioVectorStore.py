# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-08
# Description: ChromaFolioVectorStore
# -----------------------------------------------------------------------------
import json
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

import chromadb
from chromadb import ClientAPI
from chromadb.api.models import Collection

from config.Config import Config
from embedding.EmbeddingRecord import EmbeddingRecord, utc_now
from embedding.VectorOps import as_vector
from utility.logging_utils import get_class_logger
from vectorstore.FolioVectorStore import FolioVectorStore, VectorStoreError


def _record_id(ref_id: str, chunk_id: str) -> str:
    return f"{ref_id}::{chunk_id}"


def _parse_ts(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


@dataclass
class ChromaFolioVectorStore(FolioVectorStore):
    """
    Chroma-backed record store. Chroma is used as durable storage only:
    ranking is done by the query service over the full snapshot.
    """
    cfg: Config
    client: Any = None
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)
        self.collection_name = self.cfg.collection_name

        if self.client is None:
            self.client = self._build_client()

        try:
            self.collection: Collection = self.client.get_or_create_collection(
                name=self.collection_name
            )
        except Exception as e:
            raise VectorStoreError(f"Cannot open Chroma collection '{self.collection_name}': {e}") from e

        self.logger.info(
            "Chroma collection ready: '%s' (mode=%s)",
            self.collection_name,
            self.cfg.chroma_mode,
        )

    def _build_client(self) -> ClientAPI:
        mode = self.cfg.chroma_mode
        if mode == "cloud":
            self.cfg.validate_chroma()
            self.logger.info(
                "Initialising Chroma Cloud client (tenant=%s, database=%s)",
                self.cfg.chroma_tenant,
                self.cfg.chroma_database,
            )
            return chromadb.CloudClient(
                tenant=self.cfg.chroma_tenant,
                database=self.cfg.chroma_database,
                api_key=self.cfg.chroma_api_key,
            )
        if mode == "persistent":
            self.logger.info("Initialising Chroma persistent client (path=%s)", self.cfg.chroma_path)
            return chromadb.PersistentClient(path=self.cfg.chroma_path)
        return chromadb.EphemeralClient()

    def test_connection(self) -> bool:
        """
        Simple health check: can we talk to Chroma and our collection?
        """
        try:
            # count() is cheap and exercises the connection + auth
            _ = self.collection.count()
            return True
        except Exception as e:
            self.logger.error("Chroma connection failed: %s", e)
            return False

    def any_vector_dim(self, source_kind: str) -> Optional[int]:
        res = self._get(where={"source_kind": source_kind}, limit=1, include=["metadatas"])
        metas = res.get("metadatas") or []
        if not metas:
            return None
        dim = (metas[0] or {}).get("vector_dim")
        return int(dim) if dim else None

    def list_records(self, source_kind: str) -> List[EmbeddingRecord]:
        res = self._get(
            where={"source_kind": source_kind},
            include=["documents", "metadatas", "embeddings"],
        )
        records = self._to_records(res)
        # Chroma does not promise insertion order; rebuild a stable corpus order
        records.sort(key=lambda r: (
            r.created_at.isoformat() if r.created_at else "",
            r.ref_id,
            int(r.metadata.get("chunk_index", 0)),
        ))
        return records

    def get_record(self, ref_id: str, chunk_id: str) -> Optional[EmbeddingRecord]:
        res = self._get(
            ids=[_record_id(ref_id, chunk_id)],
            include=["documents", "metadatas", "embeddings"],
        )
        records = self._to_records(res)
        return records[0] if records else None

    def upsert_record(self, record: EmbeddingRecord) -> EmbeddingRecord:
        existing = self.get_record(record.ref_id, record.chunk_id)
        now = utc_now()
        created = existing.created_at if existing and existing.created_at else (record.created_at or now)

        metadata = {
            "source_kind": record.source_kind,
            "ref_id": record.ref_id,
            "chunk_id": record.chunk_id,
            "language": record.language,
            "vector_dim": record.vector_dim,
            "chunk_index": int(record.metadata.get("chunk_index", 0)),
            "created_at": created.isoformat(),
            "updated_at": now.isoformat(),
            # Chroma metadata is scalar-only; nested values ride along as JSON
            "meta_json": json.dumps(record.metadata, default=str),
        }

        try:
            self.collection.upsert(
                ids=[_record_id(record.ref_id, record.chunk_id)],
                documents=[record.text],
                embeddings=[as_vector(record.vector).tolist()],
                metadatas=[metadata],
            )
        except Exception as e:
            self.logger.error("Chroma upsert failed for %s/%s: %s", record.ref_id, record.chunk_id, e)
            raise VectorStoreError(f"Upsert failed: {e}") from e

        self.logger.debug(
            "Upserted ref_id=%s chunk_id=%s into '%s'",
            record.ref_id,
            record.chunk_id,
            self.collection_name,
        )
        return EmbeddingRecord(
            source_kind=record.source_kind,
            ref_id=record.ref_id,
            chunk_id=record.chunk_id,
            text=record.text,
            vector=as_vector(record.vector),
            language=record.language,
            metadata=dict(record.metadata),
            created_at=created,
            updated_at=now,
        )

    def count(self) -> int:
        try:
            return int(self.collection.count())
        except Exception as e:
            raise VectorStoreError(f"Count failed: {e}") from e

    def dimension_histogram(self) -> Dict[int, int]:
        res = self._get(include=["metadatas"])
        dims = Counter()
        for md in res.get("metadatas") or []:
            if isinstance(md, dict) and md.get("vector_dim"):
                dims[int(md["vector_dim"])] += 1
        return dict(dims)

    def _get(self, **kwargs: Any) -> Dict[str, Any]:
        try:
            return self.collection.get(**kwargs)
        except Exception as e:
            self.logger.error("Chroma get failed on '%s': %s", self.collection_name, e, exc_info=True)
            raise VectorStoreError(f"Read failed: {e}") from e

    @staticmethod
    def _to_records(res: Dict[str, Any]) -> List[EmbeddingRecord]:
        ids = res.get("ids") or []
        docs = res.get("documents")
        metas = res.get("metadatas")
        embs = res.get("embeddings")
        docs = [] if docs is None else list(docs)
        metas = [] if metas is None else list(metas)
        embs = [] if embs is None else list(embs)

        out: List[EmbeddingRecord] = []
        for i, _rid in enumerate(ids):
            md = metas[i] if i < len(metas) and isinstance(metas[i], dict) else {}
            try:
                extra = json.loads(md.get("meta_json") or "{}")
            except ValueError:
                extra = {}
            out.append(EmbeddingRecord(
                source_kind=str(md.get("source_kind", "")),
                ref_id=str(md.get("ref_id", "")),
                chunk_id=str(md.get("chunk_id", "")),
                text=docs[i] if i < len(docs) and docs[i] is not None else "",
                vector=as_vector(embs[i]) if i < len(embs) else as_vector([]),
                language=str(md.get("language", "")),
                metadata=extra,
                created_at=_parse_ts(md.get("created_at")),
                updated_at=_parse_ts(md.get("updated_at")),
            ))
        return out
