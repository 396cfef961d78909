# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-25
# Description: test_ranking.py
# -----------------------------------------------------------------------------
import math

import numpy as np
import pytest

from embedding.EmbeddingRecord import EmbeddingRecord
from retrieval.Ranking import ScoredRecord, keyword_score, rank_by_cosine, rank_by_keyword, top_k


def _record(ref_id: str, text: str, vector) -> EmbeddingRecord:
    return EmbeddingRecord(
        source_kind="project",
        ref_id=ref_id,
        chunk_id=f"project:{ref_id}:ch0",
        text=text,
        vector=np.asarray(vector, dtype=np.float32),
    )


def test_keyword_score_counts_occurrences_with_length_damping():
    text = "react react dashboard"
    expected = 3 / math.log10(50 + len(text))
    assert keyword_score(text, "React dashboard") == pytest.approx(expected)


def test_keyword_score_matches_substrings_case_insensitively():
    assert keyword_score("Reactive UI", "react") > 0


def test_keyword_score_empty_inputs():
    assert keyword_score("", "react") == 0.0
    assert keyword_score("react", "   ") == 0.0


def test_keyword_score_single_char():
    assert keyword_score("a", "a") == pytest.approx(1 / math.log10(51))


def test_top_k_breaks_ties_by_corpus_position():
    recs = [_record(str(i), "x", [1.0]) for i in range(4)]
    scored = [
        ScoredRecord(recs[0], 0.5, 0),
        ScoredRecord(recs[1], 0.9, 1),
        ScoredRecord(recs[2], 0.5, 2),
        ScoredRecord(recs[3], 0.9, 3),
    ]
    assert [s.position for s in top_k(scored, 4)] == [1, 3, 0, 2]
    assert top_k(scored, 0) == []


def test_rank_by_cosine_orders_by_similarity():
    records = [
        _record("a", "a", [0.0, 1.0]),
        _record("b", "b", [1.0, 0.0]),
        _record("c", "c", [1.0, 1.0]),
    ]
    ranked = rank_by_cosine(np.array([1.0, 0.0], dtype=np.float32), records, 2)
    assert [s.record.ref_id for s in ranked] == ["b", "c"]
    assert ranked[0].score == pytest.approx(1.0)


def test_rank_by_keyword_returns_k_even_with_zero_scores():
    records = [
        _record("a", "vue weather", [1.0]),
        _record("b", "react dashboard", [1.0]),
        _record("c", "python blog", [1.0]),
    ]
    ranked = rank_by_keyword("react", records, 3)
    assert [s.record.ref_id for s in ranked] == ["b", "a", "c"]
    assert ranked[1].score == 0.0
