"""Structured logging for publisher events.

Loggers are named after the component that emits them and log short event
names with their fields in ``extra``:

- ``publisher.registry``: subscribed, published, delivery_failed
- ``publisher.subscription``: attached, detached
- ``publisher.factory``: registry_replaced
- ``publisher.advice``: advised, restored
"""

import logging
import sys
from typing import Optional


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return a configured logger; level defaults to PUBLISHER_LOG_LEVEL."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
            )
        )
        logger.addHandler(handler)
        if level is None:
            from publisher.config import get_settings

            level = get_settings().level
        logger.setLevel(level)
    return logger
