"""Logging setup.

stdout carries the MCP protocol, so every handler installed here writes to
stderr.
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from drupal_modules.config import settings


def setup_logging(log_level: Optional[str] = None) -> None:
    """Configure the root logger with a Rich handler bound to stderr.

    Args:
        log_level: Logging level name (defaults to ``settings.log_level``).
    """
    log_level = log_level or settings.log_level

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)

    # Request lines from the transport are noise at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for *name* (usually ``__name__``)."""
    return logging.getLogger(name)
