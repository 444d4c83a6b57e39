"""Utility functions for notecheck."""

import re
import sys
import unicodedata
from pathlib import Path
from typing import Optional

from loguru import logger


def generate_slug(title: str) -> str:
    """
    Turn a document title into a file name stem:
    - Normalize unicode and drop anything that is not a letter, digit or space
    - Convert to lowercase
    - Replace runs of whitespace with single hyphens

    >>> generate_slug("Setting up basic logging with Serilog")
    'setting-up-basic-logging-with-serilog'
    """
    name = unicodedata.normalize("NFKD", title)
    name = "".join(c for c in name if c.isalnum() or c.isspace() or c == "-")
    name = name.encode("ascii", "ignore").decode("ascii")
    name = name.lower()
    name = re.sub(r"[\s_-]+", "-", name).strip("-")
    return name


def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> None:
    """Configure loguru sinks.

    Args:
        level: Level for the stderr sink
        log_file: Optional path for a rotating debug log
    """
    logger.remove()
    logger.add(sys.stderr, level=level, colorize=True)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_file),
            level="DEBUG",
            rotation="10 MB",
            retention="10 days",
            backtrace=True,
            diagnose=False,
            enqueue=False,
        )
