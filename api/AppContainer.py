# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-22
# Updated: 2026-10-16
# Description: AppContainer.py
# -----------------------------------------------------------------------------
from typing import Optional

import settings

from chat.OpenAIChat import OpenAIChat
from config.Config import Config

from chunking.FolioChunker import FolioChunker
from chunking.LangDetectDetector import LangDetectDetector
from embedding.FolioEmbedder import FolioEmbedder
from entities.FolioEntityStore import InMemoryEntityStore
from health.ChatHealth import ChatHealth
from health.EmbeddingHealth import EmbeddingHealth
from health.TestRunner import TestRunner
from health.VectorStoreHealth import VectorStoreHealth
from resilience.CircuitBreaker import CircuitBreaker
from services.FolioAnswerService import FolioAnswerService
from services.FolioHealthService import FolioHealthService
from services.FolioIndexService import FolioIndexService
from services.FolioQueryService import FolioQueryService
from services.FolioSearchService import FolioSearchService
from utility.logging_utils import get_class_logger
from vectorstore.ChromaFolioVectorStore import ChromaFolioVectorStore


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    Singleton instances are provided via FastAPI dependencies.
    """

    def __init__(self, cfg: Optional[Config] = None) -> None:
        # Configuration
        self.cfg = cfg or Config.from_env()
        self.logger = get_class_logger(self.__class__)
        self.logger.info("Config: %s", self.cfg.summary())

        # One breaker for every OpenAI call: a quota hit on embeddings also
        # keeps the chat path quiet until the cool-down ends
        self.breaker = CircuitBreaker(name="openai")

        # Core infrastructure
        self.embedder = FolioEmbedder(cfg=self.cfg, breaker=self.breaker)
        self.store = ChromaFolioVectorStore(cfg=self.cfg)
        if self.cfg.entities_file:
            self.entity_store = InMemoryEntityStore.from_json_file(self.cfg.entities_file)
        else:
            self.entity_store = InMemoryEntityStore()

        self.openai_chat = OpenAIChat(cfg=self.cfg) if self.cfg.has_openai else None

        # Return a singleton FolioQueryService instance
        self.query_service = FolioQueryService(
            store=self.store,
            embedder=self.embedder,
            entity_store=self.entity_store,
        )

        # Return a singleton FolioAnswerService instance
        self.answer_service = FolioAnswerService(
            chat_client=self.openai_chat,
            breaker=self.breaker,
            cfg=self.cfg,
        )

        # Return a singleton FolioSearchService instance
        self.search_service = FolioSearchService(
            query_service=self.query_service,
            answer_service=self.answer_service,
        )

        # Infrastructure for the index pipeline: a separate embedder keeps
        # re-index traffic off the query workers. The breaker is shared.
        self.index_embedder = FolioEmbedder(
            cfg=self.cfg,
            breaker=self.breaker,
            timeout_s=settings.INDEX_EMBED_TIMEOUT_S,
            max_workers=settings.INDEX_CONCURRENCY,
        )
        self.lang_detector = LangDetectDetector()
        self.chunker = FolioChunker()
        self.index_service = FolioIndexService(
            store=self.store,
            embedder=self.index_embedder,
            chunker=self.chunker,
            lang_detector=self.lang_detector,
            default_lang=self.cfg.default_lang,
        )

        # Smoke tests / health
        self.test_runner = TestRunner(
            store_health=VectorStoreHealth(self.store),
            embedding_health=EmbeddingHealth(self.embedder, expected_dim=self.cfg.embed_dim),
            chat_health=ChatHealth(self.openai_chat),
        )
        self.health_service = FolioHealthService(test_runner=self.test_runner)

    def close(self) -> None:
        self.embedder.close()
        self.index_embedder.close()
        self.answer_service.close()
