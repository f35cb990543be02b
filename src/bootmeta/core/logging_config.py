"""Logging configuration for bootmeta. Logs go to stderr; stdout carries only the manifest."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

VERBOSITY_LEVELS = {0: None, 1: "INFO", 2: "DEBUG"}


def level_for_verbosity(verbosity: int, default: Optional[str]) -> Optional[str]:
    return VERBOSITY_LEVELS.get(min(verbosity, 2)) or default


def setup_logging(log_level: str = "WARNING", console: Optional[Console] = None) -> None:
    """Install a RichHandler on the `bootmeta` logger tree."""
    level = getattr(logging, log_level.upper(), None)
    if not isinstance(level, int):
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger = logging.getLogger("bootmeta")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
