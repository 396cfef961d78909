# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-25
# Description: test_embedder.py
# -----------------------------------------------------------------------------
import threading
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from config.Config import Config
from embedding.EmbeddingProviders import LOCAL_MODEL_NAME, LocalHashEmbeddingProvider, fnv1a_32
from embedding.FolioEmbedder import FolioEmbedder
from resilience import RemoteErrors


@pytest.fixture
def remote_cfg() -> Config:
    return Config(openai_api_key="sk-test", embed_dim=64)


def _embedder(cfg, provider, breaker, **kwargs) -> FolioEmbedder:
    return FolioEmbedder(cfg, provider=provider, breaker=breaker, **kwargs)


def test_fnv1a_known_values():
    # reference FNV-1a 32-bit values
    assert fnv1a_32("") == 2166136261
    assert fnv1a_32("a") == 0xE40C292C


def test_local_embedding_is_deterministic_and_unit_norm(local_embedder):
    a = local_embedder.embed("react dashboard", 3072)
    b = local_embedder.embed("react dashboard", 3072)

    assert a.used_fallback
    assert a.model == LOCAL_MODEL_NAME
    assert a.dim == 3072
    assert np.array_equal(a.vector, b.vector)
    assert float(np.linalg.norm(a.vector)) == pytest.approx(1.0, abs=1e-5)


def test_local_embedding_is_identical_across_fresh_embedders(local_cfg):
    vectors = []
    for _ in range(2):
        embedder = FolioEmbedder(local_cfg)
        try:
            vectors.append(embedder.embed("Admin dashboard built with React", 1536).vector)
        finally:
            embedder.close()

    assert np.array_equal(vectors[0], vectors[1])
    assert float(np.linalg.norm(vectors[0])) == pytest.approx(1.0, abs=1e-6)


def test_local_embedding_is_case_insensitive():
    provider = LocalHashEmbeddingProvider()
    assert np.array_equal(provider.embed("React Dashboard", 128), provider.embed("react dashboard", 128))


def test_local_embedding_of_blank_text_is_zero():
    vec = LocalHashEmbeddingProvider().embed("   ", 32)
    assert vec.shape == (32,)
    assert not vec.any()


def test_no_provider_without_key(local_embedder):
    assert not local_embedder.has_remote
    assert local_embedder.model == LOCAL_MODEL_NAME


def test_remote_vector_is_resized_and_cached(remote_cfg, breaker, fake_provider_cls):
    provider = fake_provider_cls(dim=128)
    embedder = _embedder(remote_cfg, provider, breaker)
    try:
        first = embedder.embed("node api")
        second = embedder.embed("node api")
    finally:
        embedder.close()

    assert not first.used_fallback
    assert first.model == "fake-embed"
    assert first.dim == 64
    assert float(np.linalg.norm(first.vector)) == pytest.approx(1.0, abs=1e-5)
    assert second is first
    assert provider.calls == 1


def test_quota_error_falls_back_and_opens_breaker_for_a_minute(remote_cfg, breaker, clock, fake_provider_cls, quota_error_cls):
    provider = fake_provider_cls(error=quota_error_cls("quota"))
    embedder = _embedder(remote_cfg, provider, breaker)
    try:
        res = embedder.embed("hello")
        assert res.used_fallback
        assert res.model == LOCAL_MODEL_NAME
        assert res.dim == 64
        assert breaker.remaining_ms() == 60_000

        # while open the provider is not contacted at all
        embedder.embed("something else")
        assert provider.calls == 1

        clock.advance(60)
        provider.error = None
        healed = embedder.embed("hello")
    finally:
        embedder.close()

    assert provider.calls == 2
    assert not healed.used_fallback
    assert healed.model == "fake-embed"


def test_generic_error_opens_breaker_for_twenty_seconds(remote_cfg, breaker, fake_provider_cls):
    provider = fake_provider_cls(error=RuntimeError("connection reset"))
    embedder = _embedder(remote_cfg, provider, breaker)
    try:
        res = embedder.embed("hello")
    finally:
        embedder.close()

    assert res.used_fallback
    assert breaker.remaining_ms() == 20_000


def test_timeout_falls_back(remote_cfg, breaker, fake_provider_cls):
    gate = threading.Event()
    provider = fake_provider_cls(gate=gate)
    embedder = _embedder(remote_cfg, provider, breaker, timeout_s=0.05)
    try:
        res = embedder.embed("slow call")
    finally:
        gate.set()
        embedder.close()

    assert res.used_fallback
    assert breaker.is_open
    assert breaker.remaining_ms() == 20_000


def test_fallback_vector_matches_local_provider(remote_cfg, breaker, fake_provider_cls):
    breaker.open(10_000)
    embedder = _embedder(remote_cfg, fake_provider_cls(), breaker)
    try:
        res = embedder.embed("vue weather app", 64)
    finally:
        embedder.close()

    expected = LocalHashEmbeddingProvider().embed("vue weather app", 64)
    assert np.array_equal(res.vector, expected)


def test_queued_embeds_keep_their_full_timeout(remote_cfg, breaker, fake_provider_cls):
    # one worker, four callers: the last waits ~0.6s in the queue but each call takes 0.2s
    provider = fake_provider_cls(dim=64, delay=0.2)
    embedder = _embedder(remote_cfg, provider, breaker, timeout_s=0.5, max_workers=1)
    try:
        with ThreadPoolExecutor(max_workers=4) as callers:
            results = list(callers.map(embedder.embed, [f"chunk {i}" for i in range(4)]))
    finally:
        embedder.close()

    assert [r.used_fallback for r in results] == [False] * 4
    assert not breaker.is_open
    assert provider.calls == 4


def test_busy_workers_fall_back_without_opening_breaker(remote_cfg, breaker, fake_provider_cls, monkeypatch):
    def no_free_worker(*args, **kwargs):
        raise RemoteErrors.RemoteBusyError("no free worker")

    monkeypatch.setattr(RemoteErrors, "call_with_timeout", no_free_worker)
    embedder = _embedder(remote_cfg, fake_provider_cls(dim=64), breaker)
    try:
        res = embedder.embed("user query")
    finally:
        embedder.close()

    assert res.used_fallback
    assert not breaker.is_open
