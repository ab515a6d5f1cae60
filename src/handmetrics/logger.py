from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

LOGGER_NAME = "handmetrics"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Child of the package logger, e.g. get_logger("tables") -> handmetrics.tables."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)


def setup_logger(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Attach stream (and optional file) handlers to the package logger.

    Calling it again replaces the handlers instead of stacking them.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    fmt = logging.Formatter(LOG_FORMAT)
    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file)
        fh.setFormatter(fmt)
        logger.addHandler(fh)
    return logger
