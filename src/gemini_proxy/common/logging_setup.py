"""Central logging setup for the project."""
from __future__ import annotations
import logging
import os
import sys

def level_from_env(default: str = "INFO") -> int:
    """Resolve ``LOG_LEVEL`` to a logging level, falling back to ``default``."""
    name = os.getenv("LOG_LEVEL", default).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO

def setup_logging(level: int | None = None) -> None:
    """
    Configure root logger with sane defaults.

    Args:
        level: Logging level. Read from ``LOG_LEVEL`` when omitted.
    """
    handler = logging.StreamHandler(sys.stdout)
    fmt = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level if level is not None else level_from_env())

    # httpx logs request URLs at INFO; they carry the Gemini key
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
