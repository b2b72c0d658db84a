from __future__ import annotations

import logging
from logging import Logger
from typing import Optional

from ..config import LoggingConfig

LOGGER_NAME = "benefitquiz"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(config: Optional[LoggingConfig] = None, level: Optional[str] = None) -> Logger:
    """Attach console and file handlers to the ``benefitquiz`` logger.

    Handlers are attached on the first call only; the file goes to
    ``config.file_path()``. Every call applies ``level`` (or
    ``config.level``) to the logger and its handlers, so a later
    ``--verbose`` switch still takes effect.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(LOGGER_NAME)
    numeric = _resolve_level(level or config.level)

    if not getattr(logger, "_configured", False):
        log_path = config.file_path()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        for handler in (logging.StreamHandler(), logging.FileHandler(str(log_path), encoding="utf-8")):
            handler.setFormatter(fmt)
            logger.addHandler(handler)
        logger._configured = True  # type: ignore[attr-defined]

    logger.setLevel(numeric)
    for handler in logger.handlers:
        handler.setLevel(numeric)
    logger.debug("Logging at %s", logging.getLevelName(numeric))
    return logger


def reset_logging() -> None:
    """Detach and close the handlers added by ``setup_logging``."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger._configured = False  # type: ignore[attr-defined]
