"""
Logging setup.

Usage:
    from idverify.logger import get_logger
    logger = get_logger(__name__)
"""

import logging
import sys
from typing import Dict, Optional

from config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_loggers: Dict[str, logging.Logger] = {}


def setup_logger(name: str, debug: Optional[bool] = None) -> logging.Logger:
    """Configure a logger with a single console handler."""
    if debug is None:
        debug = settings.DEBUG

    logger = logging.getLogger(name)

    # Avoid duplicate handlers when re-imported
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(handler)

    return logger


def get_logger(name: str = "idverify") -> logging.Logger:
    """Get a cached logger instance."""
    if name not in _loggers:
        _loggers[name] = setup_logger(name)
    return _loggers[name]
