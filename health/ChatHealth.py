# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-20
# Description: ChatHealth
# -----------------------------------------------------------------------------
import logging
import time
from typing import Optional

from chat.OpenAIChat import OpenAIChat
from utility.logging_utils import get_class_logger


class ChatHealth:
    """Smoke test for the chat completion endpoint used by answer synthesis."""

    def __init__(self, chat_client: Optional[OpenAIChat], logger: Optional[logging.Logger] = None):
        self.chat_client = chat_client
        self.logger = logger or get_class_logger(self.__class__)

    def run(self) -> bool:
        if self.chat_client is None:
            self.logger.warning("No chat client configured (local summaries only).")
            return False

        self.logger.info("Running chat healthcheck using model: %s", self.chat_client.model)
        start = time.time()
        ok = self.chat_client.healthcheck()
        self.logger.info("Chat healthcheck %s in %.1f ms", "PASSED" if ok else "FAILED", (time.time() - start) * 1000.0)
        return ok
