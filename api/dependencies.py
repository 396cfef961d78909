# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-22
# Updated: 2026-10-16
# Description: dependencies.py
# -----------------------------------------------------------------------------
from functools import lru_cache

import settings
from api.AppContainer import AppContainer
from config.Config import Config
from entities.FolioEntityStore import FolioEntityStore
from resilience.CircuitBreaker import CircuitBreaker
from resilience.RateLimiter import RateLimiter
from services.FolioHealthService import FolioHealthService
from services.FolioIndexService import FolioIndexService
from services.FolioSearchService import FolioSearchService


# built on first use so importing the app (tests, tooling) does not open a store
@lru_cache
def get_container() -> AppContainer:
    return AppContainer()

# process-wide and container-free: limits apply before any store is opened
@lru_cache
def get_ai_rate_limiter() -> RateLimiter:
    return RateLimiter(settings.AI_RATE_LIMIT_MAX, settings.AI_RATE_LIMIT_WINDOW_S, name="ai")

def get_cfg() -> Config:
    return get_container().cfg

def get_breaker() -> CircuitBreaker:
    return get_container().breaker

def get_health_service() -> FolioHealthService:
    # use the singleton service from the container
    return get_container().health_service

def get_search_service() -> FolioSearchService:
    # use the singleton service from the container
    return get_container().search_service

def get_index_service() -> FolioIndexService:
    return get_container().index_service

def get_entity_store() -> FolioEntityStore:
    return get_container().entity_store
