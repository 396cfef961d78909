# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-02
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass, fields
from dotenv import load_dotenv, find_dotenv

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=False)

CHROMA_MODES = ("memory", "persistent", "cloud")


@dataclass(frozen=True)
class Config:
    # OpenAI (embeddings + structured completions). Empty key = local fallback mode.
    openai_api_key: str = ""
    openai_base_url: str = ""
    embed_model: str = "text-embedding-3-small"
    chat_model: str = "gpt-4o-mini"
    embed_dim: int = 1536
    ai_timeout_ms: int = 12_000

    # Chroma Vector Database
    chroma_mode: str = "memory"
    chroma_path: str = "./data/chroma"
    chroma_api_key: str = ""
    chroma_tenant: str = ""
    chroma_database: str = ""
    collection_name: str = "folio_embeddings"

    # Corpus
    default_lang: str = "it"
    entities_file: str = ""

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        # OpenAI
        "openai_api_key": "OPENAI_API_KEY",
        "openai_base_url": "OPENAI_BASE_URL",  # e.g. https://api.openai.com/v1
        "embed_model": "FOLIO_EMBED_MODEL",
        "chat_model": "FOLIO_CHAT_MODEL",
        "embed_dim": "FOLIO_EMBED_DIM",
        "ai_timeout_ms": "FOLIO_AI_TIMEOUT_MS",

        # Chroma
        "chroma_mode": "CHROMA_MODE",
        "chroma_path": "CHROMA_PATH",
        "chroma_api_key": "CHROMA_API_KEY",
        "chroma_tenant": "CHROMA_TENANT",
        "chroma_database": "CHROMA_DATABASE",
        "collection_name": "FOLIO_COLLECTION",

        # Corpus
        "default_lang": "FOLIO_DEFAULT_LANG",
        "entities_file": "FOLIO_ENTITIES_FILE",
    }

    INT_FIELDS = ("embed_dim", "ai_timeout_ms")

    # Convenient *groups* for use in tests / health checks
    OPENAI_ENV_VARS = (
        "OPENAI_API_KEY",
    )

    CHROMA_CLOUD_ENV_VARS = (
        "CHROMA_API_KEY",
        "CHROMA_TENANT",
        "CHROMA_DATABASE",
    )

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables (blank vars keep defaults)."""
        kwargs = {}
        for field_name, env_name in Config.ENV_VARS.items():
            raw = (os.getenv(env_name) or "").strip()
            if not raw:
                continue
            if field_name in Config.INT_FIELDS:
                try:
                    kwargs[field_name] = int(raw)
                except ValueError as e:
                    raise ValueError(f"Env var {env_name} must be an int, got {raw!r}") from e
            else:
                kwargs[field_name] = raw
        return Config(**kwargs)

    def __post_init__(self):
        """
        Fail fast on values that can never work.

        Missing OpenAI credentials are NOT an error: the embedder and answer
        service degrade to their local fallbacks.
        """
        if self.embed_dim <= 0:
            raise ValueError(f"embed_dim must be positive, got {self.embed_dim}")
        if self.ai_timeout_ms <= 0:
            raise ValueError(f"ai_timeout_ms must be positive, got {self.ai_timeout_ms}")
        if self.chroma_mode not in CHROMA_MODES:
            raise ValueError(f"chroma_mode must be one of {CHROMA_MODES}, got {self.chroma_mode!r}")

    @property
    def has_openai(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def ai_timeout_s(self) -> float:
        return self.ai_timeout_ms / 1000.0

    def validate_chroma(self) -> None:
        """Cloud mode needs the full credential set; raise early if it's incomplete."""
        if self.chroma_mode != "cloud":
            return
        missing = [
            self.ENV_VARS[name]
            for name in ("chroma_api_key", "chroma_tenant", "chroma_database")
            if not getattr(self, name)
        ]
        if missing:
            raise ValueError(f"Missing required environment variables for Chroma Cloud: {missing}")

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        out = {f.name: getattr(self, f.name) for f in fields(self)}
        out["openai_api_key"] = "***" if self.openai_api_key else ""
        out["chroma_api_key"] = "***" if self.chroma_api_key else ""
        return out
