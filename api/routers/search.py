# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-22
# Updated: 2026-10-16
# Description: search router
# -----------------------------------------------------------------------------
import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

import settings
from api.dependencies import get_ai_rate_limiter, get_breaker, get_cfg, get_search_service
from api.schemas.search import PingResponse, SearchRequest, SearchResponseModel
from config.Config import Config
from resilience.CircuitBreaker import CircuitBreaker
from resilience.RateLimiter import RateLimiter
from services.FolioSearchService import FolioSearchService

logger = logging.getLogger(__name__)


def enforce_ai_rate_limit(
    request: Request,
    limiter: RateLimiter = Depends(get_ai_rate_limiter),
) -> None:
    client = request.client.host if request.client else "unknown"
    if limiter.hit(client):
        return
    logger.warning("AI_RATE_LIMIT: client=%s path=%s", client, request.url.path)
    raise HTTPException(
        status_code=429,
        detail={"error": "Too many AI requests, try again later.", "code": "AI_RATE_LIMIT"},
        headers={"Retry-After": str(limiter.retry_after_s(client))},
    )


router = APIRouter(prefix="/ai", tags=["ai"], dependencies=[Depends(enforce_ai_rate_limit)])


def clamp_k(k: Optional[int]) -> int:
    if k is None:
        return settings.SEARCH_K_DEFAULT
    return min(max(int(k), settings.SEARCH_K_MIN), settings.SEARCH_K_MAX)


def _run_search(method: str, q: Optional[str], k: Optional[int], svc: FolioSearchService) -> SearchResponseModel:
    query_text = (q or "").strip()
    if not query_text:
        raise HTTPException(status_code=400, detail="q must not be empty")
    k = clamp_k(k)

    logger.info("%s /ai/search (start) q='%s' k=%d", method, query_text[:120], k)
    try:
        resp = svc.search(query_text, k)
    except Exception as e:
        logger.exception("%s /ai/search failed: %s", method, e)
        raise HTTPException(status_code=500, detail="AI_SEARCH_ERROR")

    logger.info("%s /ai/search (done) results=%d scoring=%s", method, len(resp.results), resp.scoring)
    return SearchResponseModel(method=method, **resp.to_dict())


@router.post("/search", response_model=SearchResponseModel)
def post_search(
    req: SearchRequest,
    svc: FolioSearchService = Depends(get_search_service),
) -> SearchResponseModel:
    return _run_search("POST", req.q, req.k, svc)


@router.get("/search", response_model=SearchResponseModel)
def get_search(
    q: str = Query("", description="Free-text query"),
    k: Optional[int] = Query(None, description="Number of results (clamped to 1..10)"),
    svc: FolioSearchService = Depends(get_search_service),
) -> SearchResponseModel:
    return _run_search("GET", q, k, svc)


@router.get("/ping", response_model=PingResponse)
def ping(
    cfg: Config = Depends(get_cfg),
    breaker: CircuitBreaker = Depends(get_breaker),
) -> PingResponse:
    return PingResponse(
        ok=True,
        has_key=cfg.has_openai,
        model=cfg.chat_model or None,
        breaker_open=breaker.is_open,
        ts=int(time.time() * 1000),
    )
