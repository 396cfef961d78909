# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-05
# Updated: 2026-10-16
# Description: FolioEmbedder
# -----------------------------------------------------------------------------
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

import numpy as np

import settings
from config.Config import Config
from embedding.EmbeddingProviders import (
    LOCAL_MODEL_NAME,
    EmbeddingProvider,
    LocalHashEmbeddingProvider,
    OpenAIEmbeddingProvider,
)
from embedding.VectorOps import resize_vector
from resilience.CircuitBreaker import CircuitBreaker
from resilience.LRUCache import LRUCache
from resilience import RemoteErrors
from utility.logging_utils import get_class_logger


@dataclass(frozen=True)
class EmbeddingResult:
    vector: np.ndarray
    used_fallback: bool
    model: str  # provenance: remote model name or "local-hash"

    @property
    def dim(self) -> int:
        return int(self.vector.shape[0])


class FolioEmbedder:
    """
    Resilient text -> fixed-width vector.

    embed() never raises: cache hit -> remote provider (bounded by a timeout,
    guarded by the circuit breaker) -> deterministic local hash vector.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            provider: Optional[EmbeddingProvider] = None,
            local_provider: Optional[LocalHashEmbeddingProvider] = None,
            cache: Optional[LRUCache] = None,
            breaker: Optional[CircuitBreaker] = None,
            timeout_s: Optional[float] = None,
            max_workers: int = settings.REMOTE_WORKERS,
            logger=None,
    ):
        self.cfg = cfg
        self.logger = logger or get_class_logger(self.__class__)

        # Remote provider only when credentials exist; otherwise local-only mode
        if provider is None and cfg.has_openai:
            provider = OpenAIEmbeddingProvider(cfg)
        self.provider = provider
        self.local_provider = local_provider or LocalHashEmbeddingProvider()

        self.cache = cache if cache is not None else LRUCache(settings.EMBED_CACHE_CAPACITY)
        self.breaker = breaker or CircuitBreaker()
        self.timeout_s = timeout_s if timeout_s is not None else cfg.ai_timeout_s
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="folio-embed")

        self.logger.info(
            "FolioEmbedder initialised (remote=%s, model=%s, native_dim=%d, timeout=%.1fs, workers=%d)",
            self.provider is not None,
            self.model,
            self.native_dim,
            self.timeout_s,
            max_workers,
        )

    @property
    def model(self) -> str:
        return self.provider.model if self.provider is not None else LOCAL_MODEL_NAME

    @property
    def native_dim(self) -> int:
        return self.cfg.embed_dim

    @property
    def has_remote(self) -> bool:
        return self.provider is not None

    def embed(self, text: str, target_dim: Optional[int] = None) -> EmbeddingResult:
        dim = target_dim or self.native_dim
        text = "" if text is None else str(text)

        key = (self.model, dim, text)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        if self.provider is None:
            return self._fallback(text, dim)

        if not self.breaker.allow():
            self.logger.debug("Breaker open (%d ms left); using local embedding", self.breaker.remaining_ms())
            return self._fallback(text, dim)

        try:
            native = self._call_remote(text)
            vec = resize_vector(native, dim)
        except RemoteErrors.RemoteBusyError as e:
            # the call never started: breaker untouched
            self.logger.warning("EMBED_BUSY/FALLBACK: %s", e)
            return self._fallback(text, dim)
        except Exception as e:
            if RemoteErrors.is_quota_error(e):
                self.logger.warning("EMBED_QUOTA/FALLBACK: %s", RemoteErrors.describe(e))
            elif RemoteErrors.is_timeout_error(e):
                self.logger.warning("EMBED_TIMEOUT/FALLBACK: no response in %.1fs", self.timeout_s)
            else:
                self.logger.warning("EMBED_ERROR/FALLBACK: %s", RemoteErrors.describe(e))
            self.breaker.open(RemoteErrors.cooldown_ms(e))
            return self._fallback(text, dim)

        result = EmbeddingResult(vector=vec, used_fallback=False, model=self.model)
        self.cache.put(key, result)
        return result

    def _call_remote(self, text: str) -> np.ndarray:
        # The timer starts when a worker picks the call up, so a stalled call can't hold the request
        return RemoteErrors.call_with_timeout(self._executor, self.timeout_s, self.provider.embed, text)

    def _fallback(self, text: str, dim: int) -> EmbeddingResult:
        # Local vectors get their own cache identity so a healed breaker
        # does not keep serving them under the remote model key
        key = (LOCAL_MODEL_NAME, dim, text)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        vec = self.local_provider.embed(text, dim)
        result = EmbeddingResult(vector=vec, used_fallback=True, model=LOCAL_MODEL_NAME)
        self.cache.put(key, result)
        return result

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
