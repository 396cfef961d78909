# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-02
# Updated: 2026-10-09
# Description: logging_utils.py
# -----------------------------------------------------------------------------
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

import colorlog

BASE_LOGGER_NAME = "folio_search"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LEVEL_COLOURS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "y")


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter(
            fmt="%(log_color)s%(asctime)s %(levelname)-8s%(reset)s %(blue)s%(name)s%(reset)s %(message)s",
            datefmt=DATE_FORMAT,
            log_colors=LEVEL_COLOURS,
        )
    )
    return handler


def _file_handler() -> logging.Handler:
    """Size-rotated plain-text log; only attached when FOLIO_LOG_TO_FILE is set."""
    path = Path(os.getenv("FOLIO_LOG_FILE", "./logs/folio_search.log"))
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=int(os.getenv("FOLIO_LOG_MAX_BYTES", str(5 * 1024 * 1024))),
        backupCount=int(os.getenv("FOLIO_LOG_BACKUP_COUNT", "5")),
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s [%(threadName)s]: %(message)s",
            datefmt=DATE_FORMAT,
        )
    )
    return handler


def _configure(logger: logging.Logger) -> logging.Logger:
    # handlers are attached once per logger name; repeat lookups reuse them
    if logger.handlers:
        return logger

    logger.addHandler(_console_handler())
    if _env_flag("FOLIO_LOG_TO_FILE"):
        logger.addHandler(_file_handler())

    level = logging.getLevelName(os.getenv("FOLIO_LOG_LEVEL", "INFO").upper())
    logger.setLevel(level if isinstance(level, int) else logging.INFO)
    logger.propagate = False
    return logger


def get_class_logger(cls: type) -> logging.Logger:
    """
    Logger named after the class and its module, under the project root
    logger, e.g. folio_search.services.FolioQueryService.FolioQueryService
    """
    module = getattr(cls, "__module__", None) or "unknown"
    name = getattr(cls, "__qualname__", None) or getattr(cls, "__name__", "Unknown")
    return _configure(logging.getLogger(f"{BASE_LOGGER_NAME}.{module}.{name}"))
