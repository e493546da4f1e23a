# bsg_helpdesk/core/logging.py
"""Logging configuration shared by the API and the form engine."""
from __future__ import annotations

import logging

from bsg_helpdesk.core.config import get_settings

_configured = False


def setup_logging(default_level: int = logging.INFO) -> None:
    """
    Configure the root logger once.

    Every other logger (uvicorn included) reuses the same handler and
    format. Calling it again is a no-op unless the handlers were removed
    (pytest does that between sessions).
    """
    global _configured
    root_logger = logging.getLogger()
    if _configured and root_logger.handlers:
        return

    level_name = get_settings().LOG_LEVEL.upper()
    level = getattr(logging, level_name, default_level)
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )
    root_logger.addHandler(handler)

    # Access logs are noisy; errors still come through uvicorn.error
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    setup_logging()
    return logging.getLogger(name)
