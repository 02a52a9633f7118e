from __future__ import annotations

import logging
from typing import Union


def get_logger(name: str, level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Create or reuse a logger with a simple stdout handler."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(fmt="%(asctime)s %(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


__all__ = ["get_logger"]
