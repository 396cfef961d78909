# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-20
# Description: VectorStoreHealth
# -----------------------------------------------------------------------------
import logging
from typing import Dict, Optional

from utility.logging_utils import get_class_logger
from vectorstore.FolioVectorStore import FolioVectorStore


class VectorStoreHealth:
    """
    Healthcheck for the embedding store.

    - check_connection(): the store answers at all
    - check_dimensions(): every stored vector has the same width
      (a mixed corpus means some records can never be scored by cosine)
    """

    def __init__(self, store: FolioVectorStore, logger: Optional[logging.Logger] = None):
        self.store = store
        self.logger = logger or get_class_logger(self.__class__)

    def check_connection(self) -> bool:
        ok = self.store.test_connection()
        self.logger.info("Vector store connection: %s", "OK" if ok else "FAIL")
        return ok

    def dimension_histogram(self) -> Dict[int, int]:
        hist = self.store.dimension_histogram()
        self.logger.info("Stored vector dimensions: %s", hist or "{} (empty corpus)")
        return hist

    def check_dimensions(self) -> bool:
        hist = self.dimension_histogram()
        if len(hist) > 1:
            self.logger.warning("Mixed vector dimensions in store: %s. Re-index to fix.", hist)
            return False
        return True

    def run(self) -> bool:
        return self.check_connection() and self.check_dimensions()
