"""Process-wide logging for the gateway."""
from __future__ import annotations
import logging
import os
import sys

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

def resolve_level(level: int | str | None) -> int:
    """
    Turn a level number or name into a logging level.

    None reads LOG_LEVEL; unknown names fall back to INFO.
    """
    if isinstance(level, int):
        return level
    name = (level or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: int | str | None = None) -> None:
    """Send every gateway log record to stdout through a single root handler."""
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root.setLevel(resolve_level(level))
