# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-06
# Description: FolioVectorStore
# -----------------------------------------------------------------------------

from typing import Protocol, Dict, List, Optional, runtime_checkable

from embedding.EmbeddingRecord import EmbeddingRecord


class VectorStoreError(RuntimeError):
    """The corpus itself is unavailable; there is no fallback for this."""


@runtime_checkable
class FolioVectorStore(Protocol):
    def test_connection(self) -> bool:
        ...

    def any_vector_dim(self, source_kind: str) -> Optional[int]:
        ...

    def list_records(self, source_kind: str) -> List[EmbeddingRecord]:
        ...

    def get_record(self, ref_id: str, chunk_id: str) -> Optional[EmbeddingRecord]:
        ...

    def upsert_record(self, record: EmbeddingRecord) -> EmbeddingRecord:
        ...

    def count(self) -> int:
        ...

    def dimension_histogram(self) -> Dict[int, int]:
        ...
