# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-24
# Description: conftest.py
# -----------------------------------------------------------------------------

import sys
import threading
import time
from pathlib import Path
from types import SimpleNamespace

import numpy as np
import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from config.Config import Config  # noqa: E402
from embedding.FolioEmbedder import FolioEmbedder  # noqa: E402
from entities.FolioEntityStore import InMemoryEntityStore  # noqa: E402
from entities.ProjectEntity import ProjectEntity  # noqa: E402
from resilience.CircuitBreaker import CircuitBreaker  # noqa: E402
from vectorstore.InMemoryFolioVectorStore import InMemoryFolioVectorStore  # noqa: E402


class FakeClock:
    """Monotonic clock the tests move by hand (seconds)."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProvider:
    """Remote embedding stand-in: returns a fixed-width vector or raises `error`."""

    def __init__(self, dim: int = 128, model: str = "fake-embed", error: Exception = None, gate: threading.Event = None, delay: float = 0.0):
        self.dim = dim
        self.delay = delay
        self.model = model
        self.error = error
        self.gate = gate
        self.calls = 0

    def embed(self, text: str) -> np.ndarray:
        self.calls += 1
        if self.gate is not None:
            self.gate.wait(5)
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        rng = np.random.default_rng(abs(hash(text)) % (2 ** 32))
        return rng.normal(size=self.dim).astype(np.float32)


class QuotaError(Exception):
    status_code = 429
    code = "insufficient_quota"


class FakeChat:
    """Chat client stand-in: returns `content` (or raises `error`) and counts calls."""

    model = "fake-chat"

    def __init__(self, content: str = "", error: Exception = None):
        self.content = content
        self.error = error
        self.calls = 0
        self.last_messages = None

    def chat(self, messages, temperature=0.0, max_tokens=512, **kwargs):
        self.calls += 1
        self.last_messages = messages
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)], model=self.model)

    def healthcheck(self) -> bool:
        return self.error is None


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def breaker(clock) -> CircuitBreaker:
    return CircuitBreaker(clock=clock)


@pytest.fixture
def local_cfg() -> Config:
    # no OpenAI key: local-hash embeddings only
    return Config(openai_api_key="", embed_dim=256)


@pytest.fixture
def local_embedder(local_cfg, breaker):
    embedder = FolioEmbedder(local_cfg, breaker=breaker)
    yield embedder
    embedder.close()


@pytest.fixture
def memory_store() -> InMemoryFolioVectorStore:
    return InMemoryFolioVectorStore()


@pytest.fixture
def sample_projects():
    return [
        ProjectEntity(
            id="p1",
            title="Sales Dashboard",
            description="React dashboard with live charts for sales teams",
            technologies=["React", "Chart.js"],
            github="https://github.com/example/sales-dashboard",
            live_demo="https://demo.example.com/sales",
        ),
        ProjectEntity(
            id="p2",
            title="Shop API",
            description="Node and Express REST API with Stripe payments and Mongo storage",
            technologies=["Node", "Express", "MongoDB"],
            github="https://github.com/example/shop-api",
        ),
        ProjectEntity(
            id="p3",
            title="Weather App",
            description="Vue weather forecast application using an open data feed",
            technologies=["Vue"],
        ),
        ProjectEntity(
            id="p4",
            title="Blog Engine",
            description="Static blog generator written in Python with Markdown templates",
            technologies=["Python", "Jinja"],
        ),
        ProjectEntity(
            id="p5",
            title="Draft Project",
            description="Unfinished React prototype",
            technologies=["React"],
            status="draft",
        ),
    ]


@pytest.fixture
def entity_store(sample_projects) -> InMemoryEntityStore:
    return InMemoryEntityStore(sample_projects)


@pytest.fixture
def fake_provider_cls():
    return FakeProvider


@pytest.fixture
def fake_chat_cls():
    return FakeChat


@pytest.fixture
def quota_error_cls():
    return QuotaError
