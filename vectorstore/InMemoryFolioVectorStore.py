# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-06
# Description: InMemoryFolioVectorStore
# -----------------------------------------------------------------------------
import threading
from collections import Counter
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from embedding.EmbeddingRecord import EmbeddingRecord, utc_now
from utility.logging_utils import get_class_logger
from vectorstore.FolioVectorStore import FolioVectorStore


class InMemoryFolioVectorStore(FolioVectorStore):
    """
    Process-local store keyed by (ref_id, chunk_id).
    Insertion order is kept so ranking tie-breaks are stable.
    """

    def __init__(self, logger=None):
        self.logger = logger or get_class_logger(self.__class__)
        self._records: Dict[Tuple[str, str], EmbeddingRecord] = {}
        self._lock = threading.Lock()

    def test_connection(self) -> bool:
        return True

    def any_vector_dim(self, source_kind: str) -> Optional[int]:
        with self._lock:
            for rec in self._records.values():
                if rec.source_kind == source_kind:
                    return rec.vector_dim
        return None

    def list_records(self, source_kind: str) -> List[EmbeddingRecord]:
        with self._lock:
            return [r for r in self._records.values() if r.source_kind == source_kind]

    def get_record(self, ref_id: str, chunk_id: str) -> Optional[EmbeddingRecord]:
        with self._lock:
            return self._records.get((ref_id, chunk_id))

    def upsert_record(self, record: EmbeddingRecord) -> EmbeddingRecord:
        now = utc_now()
        with self._lock:
            existing = self._records.get(record.key)
            created = existing.created_at if existing is not None else (record.created_at or now)
            stored = replace(record, created_at=created, updated_at=now)
            # overwrite in place so the original corpus position is kept
            self._records[record.key] = stored

        self.logger.debug(
            "%s record ref_id=%s chunk_id=%s dim=%d",
            "Updated" if existing is not None else "Inserted",
            record.ref_id,
            record.chunk_id,
            stored.vector_dim,
        )
        return stored

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def dimension_histogram(self) -> Dict[int, int]:
        with self._lock:
            return dict(Counter(r.vector_dim for r in self._records.values()))
