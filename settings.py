# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-02
# Updated: 2026-10-16
# Description: settings.py
# -----------------------------------------------------------------------------
import os


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name, "")
    if v == "":
        return default
    v = v.lower()
    if v in ("1", "true", "t", "yes", "y", "on"):
        return True
    if v in ("0", "false", "f", "no", "n", "off"):
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


# -----------------------------------------------------------------------------
# Resilience
# -----------------------------------------------------------------------------
EMBED_CACHE_CAPACITY = _env_int("FOLIO_EMBED_CACHE_CAPACITY", 2000)

# Breaker cool-downs (ms): quota / rate-limit errors back off longer
BREAKER_QUOTA_COOLDOWN_MS = _env_int("FOLIO_BREAKER_QUOTA_COOLDOWN_MS", 60_000)
BREAKER_ERROR_COOLDOWN_MS = _env_int("FOLIO_BREAKER_ERROR_COOLDOWN_MS", 20_000)

# Remote calls: worker pool per client and how long a call may wait for a free
# worker before it is abandoned (queue time never counts against the call timeout)
REMOTE_WORKERS = _env_int("FOLIO_REMOTE_WORKERS", 8)
REMOTE_QUEUE_WAIT_S = _env_float("FOLIO_REMOTE_QUEUE_WAIT_S", 30.0)

# Local fallback embedding: positions each token is scattered over
LOCAL_EMBED_SPREAD = _env_int("FOLIO_LOCAL_EMBED_SPREAD", 4)


# -----------------------------------------------------------------------------
# Retrieval / answer
# -----------------------------------------------------------------------------
SOURCE_KIND = _env("FOLIO_SOURCE_KIND", "project")
SNIPPET_CHARS = _env_int("FOLIO_SNIPPET_CHARS", 500)
SEARCH_K_DEFAULT = _env_int("FOLIO_SEARCH_K_DEFAULT", 5)
SEARCH_K_MIN = 1
SEARCH_K_MAX = _env_int("FOLIO_SEARCH_K_MAX", 10)
SUMMARY_TAKE = _env_int("FOLIO_SUMMARY_TAKE", 3)
CHAT_TEMPERATURE = _env_float("FOLIO_CHAT_TEMPERATURE", 0.2)
CHAT_MAX_TOKENS = _env_int("FOLIO_CHAT_MAX_TOKENS", 600)

# /ai/* requests allowed per client address per window
AI_RATE_LIMIT_MAX = _env_int("FOLIO_AI_RATE_LIMIT_MAX", 10)
AI_RATE_LIMIT_WINDOW_S = _env_float("FOLIO_AI_RATE_LIMIT_WINDOW_S", 60.0)


# -----------------------------------------------------------------------------
# Indexer
# -----------------------------------------------------------------------------
CHUNK_MAX_CHARS = _env_int("FOLIO_CHUNK_MAX_CHARS", 900)
CHUNK_MAX_PER_ENTITY = _env_int("FOLIO_CHUNK_MAX_PER_ENTITY", 6)
INDEX_CONCURRENCY = _env_int("FOLIO_INDEX_CONCURRENCY", 4)
# Background embedding budget per chunk; independent of the per-query timeout
INDEX_EMBED_TIMEOUT_S = _env_float("FOLIO_INDEX_EMBED_TIMEOUT_S", 60.0)
INDEX_PROGRESS_EVERY = _env_int("FOLIO_INDEX_PROGRESS_EVERY", 5)
INDEX_ONLY_PUBLISHED = _env_bool("FOLIO_INDEX_ONLY_PUBLISHED", True)


# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
if EMBED_CACHE_CAPACITY <= 0:
    raise RuntimeError("EMBED_CACHE_CAPACITY must be positive")

if SEARCH_K_MAX < SEARCH_K_MIN:
    raise RuntimeError("SEARCH_K_MAX must be >= 1")

if INDEX_CONCURRENCY <= 0:
    raise RuntimeError("INDEX_CONCURRENCY must be positive")

if AI_RATE_LIMIT_MAX <= 0 or AI_RATE_LIMIT_WINDOW_S <= 0:
    raise RuntimeError("AI_RATE_LIMIT_MAX and AI_RATE_LIMIT_WINDOW_S must be positive")

if REMOTE_WORKERS <= 0:
    raise RuntimeError("REMOTE_WORKERS must be positive")

if REMOTE_QUEUE_WAIT_S <= 0 or INDEX_EMBED_TIMEOUT_S <= 0:
    raise RuntimeError("REMOTE_QUEUE_WAIT_S and INDEX_EMBED_TIMEOUT_S must be positive")
