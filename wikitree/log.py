"""Logger factory shared by wikitree modules."""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` that propagates to the root logger.

    When the application has not configured logging (root has no handlers)
    the logger defaults to WARNING so library debug output stays quiet.
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    if not logging.getLogger().handlers:
        logger.setLevel(logging.WARNING)
    return logger


__all__ = ["get_logger"]
