# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-21
# Description: FolioHealthService.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass

from health.TestRunner import TestRunner
from api.schemas.health import DeepHealthResponse, SmokeTestSummary


@dataclass
class FolioHealthService:
    """
    Wraps TestRunner which runs smoke tests against the embedding provider,
    the chat endpoint and the vector store.
    Returns DeepHealthResponse for API layer
    """

    test_runner: TestRunner

    def deep_health(self) -> DeepHealthResponse:
        results = self.test_runner.run_all()

        total = len(results)
        passed = sum(1 for ok in results.values() if ok)
        failed = total - passed

        store_ok = results.get("vector_store_health", False)
        # store reachable is the only hard requirement; AI outages degrade to fallbacks
        if not store_ok:
            overall_status = "error"
        elif failed:
            overall_status = "degraded"
        else:
            overall_status = "ok"

        dimensions = self.test_runner.store_health.dimension_histogram() if store_ok else {}

        return DeepHealthResponse(
            status=overall_status,
            results=results,
            summary=SmokeTestSummary(total=total, passed=passed, failed=failed),
            dimensions=dimensions,
        )
