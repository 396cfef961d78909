# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-20
# Description: EmbeddingHealth
# -----------------------------------------------------------------------------
import logging
import time
from typing import Optional

from embedding.FolioEmbedder import FolioEmbedder
from utility.logging_utils import get_class_logger


class EmbeddingHealth:
    """
    Smoke test for the remote embedding provider.

    Verifies:
      - a remote provider is configured (local-only mode is reported as FAIL)
      - the embedding call completes and returns a vector
      - the vector dimension matches the expected dimension (if provided)

    The probe goes straight to the provider: FolioEmbedder.embed() would hide
    an outage behind the local fallback.
    """

    def __init__(
        self,
        embedder: FolioEmbedder,
        expected_dim: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.embedder = embedder
        self.expected_dim = expected_dim
        self.logger = logger or get_class_logger(self.__class__)

    def run(self) -> bool:
        if not self.embedder.has_remote:
            self.logger.warning("No remote embedding provider configured (local-hash only).")
            return False

        test_text = "Portfolio embedding healthcheck"
        self.logger.info("Running embedding healthcheck using model: %s", self.embedder.model)

        try:
            start = time.time()
            vec = self.embedder.provider.embed(test_text)
            elapsed_ms = (time.time() - start) * 1000.0
        except Exception as e:
            self.logger.error("Embedding healthcheck FAILED: %s", e)
            return False

        dim = int(vec.shape[0])
        self.logger.info("Embedding call succeeded in %.1f ms. Returned dimension: %d", elapsed_ms, dim)

        if self.expected_dim is not None and dim != self.expected_dim:
            self.logger.warning("Dimension mismatch: expected %d, got %d.", self.expected_dim, dim)
            return False

        self.logger.info("Embedding healthcheck PASSED.")
        return True
