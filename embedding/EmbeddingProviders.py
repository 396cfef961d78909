# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-05
# Description: EmbeddingProviders
# -----------------------------------------------------------------------------
from typing import Any, Optional, Protocol, runtime_checkable

import numpy as np
from openai import OpenAI

import settings
from config.Config import Config
from embedding.VectorOps import as_vector, l2_normalize
from utility.logging_utils import get_class_logger

LOCAL_MODEL_NAME = "local-hash"

_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619
_SPREAD_STEP = 2654435761


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Remote text -> native-dimension vector. May raise; FolioEmbedder absorbs it."""

    model: str

    def embed(self, text: str) -> np.ndarray:
        ...


class OpenAIEmbeddingProvider:
    """Thin wrapper over OpenAI embeddings.create (single input, no SDK retries)."""

    def __init__(self, cfg: Config, *, client: Any = None, logger=None):
        self.cfg = cfg
        self.model = cfg.embed_model
        self.logger = logger or get_class_logger(self.__class__)

        if client is None:
            if not cfg.openai_api_key:
                raise ValueError("Config is missing openai_api_key for remote embeddings")
            client = OpenAI(
                api_key=cfg.openai_api_key,
                base_url=cfg.openai_base_url or None,
                timeout=cfg.ai_timeout_s,
                max_retries=0,
            )
        self.client = client
        self.logger.info("OpenAI embedding provider initialised (model=%s)", self.model)

    def embed(self, text: str) -> np.ndarray:
        resp = self.client.embeddings.create(model=self.model, input=text)
        data = getattr(resp, "data", None) or []
        if not data or not getattr(data[0], "embedding", None):
            raise ValueError("Empty embedding returned by provider")
        return as_vector(data[0].embedding)


def fnv1a_32(token: str) -> int:
    h = _FNV_OFFSET
    for ch in token:
        h ^= ord(ch)
        h = (h * _FNV_PRIME) & 0xFFFFFFFF
    return h


class LocalHashEmbeddingProvider:
    """
    Deterministic bag-of-tokens embedding used when the remote provider is
    absent or failing. Same text -> same vector; no semantic fidelity.
    """

    model = LOCAL_MODEL_NAME

    def __init__(self, spread: Optional[int] = None):
        self.spread = spread or settings.LOCAL_EMBED_SPREAD

    def embed(self, text: str, target_dim: int) -> np.ndarray:
        if target_dim <= 0:
            raise ValueError(f"target_dim must be positive, got {target_dim}")

        vec = np.zeros(target_dim, dtype=np.float64)
        for tok in str(text or "").lower().split():
            h = fnv1a_32(tok)
            # scatter over several slots to soften single-slot collisions
            for k in range(self.spread):
                vec[(h + k * _SPREAD_STEP) % target_dim] += 1.0

        return l2_normalize(vec)
