# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-30
# Description: test_chroma_integration.py
# -----------------------------------------------------------------------------
import os
import uuid
from dataclasses import replace

import numpy as np
import pytest

from config.Config import Config
from embedding.EmbeddingRecord import EmbeddingRecord
from vectorstore.ChromaFolioVectorStore import ChromaFolioVectorStore


def _skip_if_missing_prereqs():
    missing = [name for name in Config.CHROMA_CLOUD_ENV_VARS if not os.getenv(name)]
    if missing:
        pytest.skip(f"Missing env vars for Chroma Cloud: {', '.join(missing)}")


@pytest.mark.integration
def test_cloud_store_upsert_is_idempotent():
    _skip_if_missing_prereqs()
    cfg = replace(Config.from_env(), chroma_mode="cloud", collection_name=f"folio-it-{uuid.uuid4().hex[:8]}")

    store = ChromaFolioVectorStore(cfg=cfg)
    assert store.test_connection()

    rec = EmbeddingRecord(
        source_kind="project", ref_id="it-1", chunk_id="project:it-1:ch0",
        text="integration record", vector=np.ones(8, dtype=np.float32) / np.sqrt(8),
        metadata={"chunk_index": 0},
    )
    try:
        store.upsert_record(rec)
        store.upsert_record(rec)
        assert store.count() == 1
        assert store.dimension_histogram() == {8: 1}
    finally:
        store.client.delete_collection(cfg.collection_name)
