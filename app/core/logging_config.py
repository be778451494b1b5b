"""
Logging configuration for the reminders service and notification client.
Sets up a single colored console handler on the root logger.
"""

import logging
from typing import Optional

import colorlog

from app.core.config import get_settings


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger once and return it.

    Args:
        level: Level name; defaults to ``LOG_LEVEL`` from settings.
    """
    settings = get_settings()
    level_name = (level or settings.LOG_LEVEL).upper()

    root = logging.getLogger()
    root.setLevel(level_name)

    # Prevent duplicate handlers if called multiple times
    if any(getattr(h, "_agrowin", False) for h in root.handlers):
        return root

    handler = colorlog.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter(
            "%(log_color)s%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
        )
    )
    handler._agrowin = True
    root.addHandler(handler)

    # Silence noisy third-party libraries
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return root
