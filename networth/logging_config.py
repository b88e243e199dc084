"""Logging configuration."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import AppSettings
from .exceptions import ConfigurationError

__all__ = ["setup_logging"]


def setup_logging(level: Optional[str] = None, settings: Optional[AppSettings] = None) -> None:
    """Configure package logging.

    *level* wins over ``settings.log_level``; settings are read from the
    environment when not given. Records go to stderr through rich.
    """
    if level is None:
        level = (settings or AppSettings()).log_level
    numeric = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric, int):
        raise ConfigurationError(f"Unknown log level '{level}'.")

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))

    logger = logging.getLogger("networth")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(numeric)

    # Reduce noise from third-party libraries
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
