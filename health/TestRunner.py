# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-20
# Description: TestRunner
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from health.ChatHealth import ChatHealth
from health.EmbeddingHealth import EmbeddingHealth
from health.VectorStoreHealth import VectorStoreHealth
from utility.logging_utils import get_class_logger


class TestRunner:
    """
    Orchestrates all smoke tests and reports a consolidated result.

    Tests included:
      - VectorStoreHealth (store reachable, homogeneous dimensions)
      - EmbeddingHealth   (remote embeddings)
      - ChatHealth        (chat completions)
    """

    # not a pytest class
    __test__ = False

    def __init__(
        self,
        *,
        store_health: VectorStoreHealth,
        embedding_health: EmbeddingHealth,
        chat_health: ChatHealth,
        logger: Optional[logging.Logger] = None,
    ):
        self.store_health = store_health
        self.embedding_health = embedding_health
        self.chat_health = chat_health
        self.logger = logger or get_class_logger(self.__class__)

    # -------------------------------------------------------------------------
    def run_all(self) -> Dict[str, bool]:
        """
        Run all configured smoke tests.

        :return: Dict mapping test names to True/False.
        """
        self.logger.info("Starting smoke test suite")

        checks: Dict[str, Callable[[], bool]] = {
            "vector_store_health": self.store_health.run,
            "embedding_health": self.embedding_health.run,
            "chat_health": self.chat_health.run,
        }

        results: Dict[str, bool] = {}
        for name, check in checks.items():
            try:
                ok = bool(check())
            except Exception as e:
                self.logger.exception("%s raised an exception: %s", name, e)
                ok = False
            results[name] = ok
            self._log_result(name, ok)

        self._log_summary(results)
        return results

    # -------------------------------------------------------------------------
    def _log_result(self, name: str, ok: bool) -> None:
        if ok:
            self.logger.info("%s: PASS", name)
        else:
            self.logger.error("%s: FAIL", name)

    def _log_summary(self, results: Dict[str, bool]) -> None:
        total = len(results)
        passed = sum(1 for v in results.values() if v)
        failed = total - passed

        self.logger.info("Smoke test summary: %d total, %d passed, %d failed", total, passed, failed)


if __name__ == "__main__":
    from api.AppContainer import AppContainer

    container = AppContainer()
    results = container.test_runner.run_all()

    # Optional simple console summary (separate from logger)
    print("\n=== Smoke Test Results ===")
    for name, ok in results.items():
        print(f"{name}: {'PASS' if ok else 'FAIL'}")

    print("\n=== Stored vector dimensions ===")
    for dim, count in sorted(container.store.dimension_histogram().items()):
        print(f"{dim}: {count}")

    overall_ok = all(results.values())
    print(f"\nOverall smoke test result: {'PASS' if overall_ok else 'FAIL'}")
    container.close()
