# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-26
# Description: test_answer_service.py
# -----------------------------------------------------------------------------
import json

import pytest

from config.Config import Config
from resilience import RemoteErrors
from retrieval.SearchTypes import SearchResult
from services.FolioAnswerService import (
    NO_RESULTS_MESSAGE,
    FolioAnswerService,
    local_summary,
    parse_answer_payload,
)


@pytest.fixture
def results():
    return [
        SearchResult(rank=1, score=0.91, snippet="React dashboard with live charts", ref={
            "id": "p1", "title": "Sales Dashboard", "tech": ["React", "Chart.js"],
            "github": "https://github.com/example/sales-dashboard", "demo": "https://demo.example.com/sales",
        }),
        SearchResult(rank=2, score=0.42, snippet="Node and Express REST API", ref={
            "id": "p2", "title": "Shop API", "tech": ["Node", "Express", "MongoDB", "Stripe", "Jest"],
            "github": None, "demo": None,
        }),
        SearchResult(rank=3, score=0.10, snippet="Vue   weather\nforecast", ref={
            "id": "p3", "title": None, "tech": [], "github": None, "demo": None,
        }),
    ]


def _service(chat, breaker, **kwargs) -> FolioAnswerService:
    return FolioAnswerService(chat_client=chat, breaker=breaker, timeout_s=1.0, **kwargs)


def test_no_results_skips_remote_call(fake_chat_cls, breaker):
    chat = fake_chat_cls(content=json.dumps({"answer": "x", "citations": []}))
    svc = _service(chat, breaker)

    out = svc.synthesize("anything", [])

    assert out.answer == NO_RESULTS_MESSAGE
    assert out.cited_ranks == []
    assert not out.used_fallback
    assert chat.calls == 0


def test_structured_answer_filters_citations(fake_chat_cls, breaker, results):
    chat = fake_chat_cls(content=json.dumps({"answer": "See [1] and [3].", "citations": [1, 3, 1, 9]}))
    svc = _service(chat, breaker)

    out = svc.synthesize("dashboards", results)

    assert out.answer == "See [1] and [3]."
    assert out.cited_ranks == [1, 3]
    assert not out.used_fallback
    assert out.model == "fake-chat"

    # numbered context reaches the model
    user_msg = chat.last_messages[-1]["content"]
    assert "[1] Sales Dashboard" in user_msg
    assert "[3] Untitled" in user_msg
    assert "QUESTION: dashboards" in user_msg


def test_prose_wrapped_json_is_extracted(fake_chat_cls, breaker, results):
    content = 'Sure! Here you go:\n```json\n{"answer": "Try [2].", "citations": [2]}\n```'
    svc = _service(fake_chat_cls(content=content), breaker)

    out = svc.synthesize("api", results)

    assert out.answer == "Try [2]."
    assert out.cited_ranks == [2]
    assert not out.used_fallback


def test_malformed_completion_uses_local_summary_without_tripping_breaker(fake_chat_cls, breaker, results):
    svc = _service(fake_chat_cls(content="I think project one is great"), breaker)

    out = svc.synthesize("dashboards", results)

    assert out.used_fallback
    assert out.cited_ranks == [1, 2, 3]
    assert not breaker.is_open


def test_quota_error_opens_breaker(fake_chat_cls, breaker, results, quota_error_cls):
    chat = fake_chat_cls(error=quota_error_cls("quota"))
    svc = _service(chat, breaker)

    out = svc.synthesize("dashboards", results)
    assert out.used_fallback
    assert breaker.remaining_ms() == 60_000

    # open breaker: no further remote calls
    svc.synthesize("dashboards", results)
    assert chat.calls == 1


def test_generic_error_opens_breaker_briefly(fake_chat_cls, breaker, results):
    svc = _service(fake_chat_cls(error=RuntimeError("502 bad gateway")), breaker)

    out = svc.synthesize("dashboards", results)

    assert out.used_fallback
    assert breaker.remaining_ms() == 20_000


def test_busy_workers_leave_breaker_closed(fake_chat_cls, breaker, results, monkeypatch):
    def no_free_worker(*args, **kwargs):
        raise RemoteErrors.RemoteBusyError("no free worker")

    monkeypatch.setattr(RemoteErrors, "call_with_timeout", no_free_worker)
    out = _service(fake_chat_cls(content="{}"), breaker).synthesize("dashboards", results)

    assert out.used_fallback
    assert not breaker.is_open


def test_timeout_defaults_to_configured_budget(breaker):
    svc = FolioAnswerService(chat_client=None, breaker=breaker, cfg=Config(ai_timeout_ms=2500))
    assert svc.timeout_s == pytest.approx(2.5)
    svc.close()


def test_no_chat_client_uses_local_summary(breaker, results):
    out = _service(None, breaker).synthesize("dashboards", results)
    assert out.used_fallback
    assert out.answer.startswith('Here are the most relevant results for **"dashboards"**:')


def test_local_summary_format(results):
    out = local_summary("react", results, take=3)
    lines = out.answer.splitlines()

    assert lines[0] == 'Here are the most relevant results for **"react"**:'
    assert lines[1] == "- [1] **Sales Dashboard** · tech: React, Chart.js · GitHub available · Demo available"
    # at most four technologies
    assert lines[2] == "- [2] **Shop API** · tech: Node, Express, MongoDB, Stripe"
    # nothing to show but the snippet
    assert lines[3] == "- [3] Vue weather forecast"
    assert lines[4].startswith("Tip:")
    assert out.cited_ranks == [1, 2, 3]


def test_local_summary_respects_take(results):
    out = local_summary("react", results, take=1)
    assert out.cited_ranks == [1]


@pytest.mark.parametrize("raw", [
    "",
    "not json",
    '{"citations": [1]}',
    '{"answer": "", "citations": [1]}',
    '{"answer": "ok", "citations": "1"}',
    "[1, 2]",
])
def test_parse_rejects_invalid_payloads(raw):
    assert parse_answer_payload(raw) is None


def test_parse_accepts_strict_json():
    payload = parse_answer_payload('{"answer": "ok", "citations": [1, 2]}')
    assert payload.answer == "ok"
    assert payload.citations == [1, 2]
