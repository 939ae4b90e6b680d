"""Logging configuration.

The terminal UI owns stdout, so log records go to a debug file instead.
"""

from __future__ import annotations

import logging
from pathlib import Path

from comanda.config import LOG_PATH

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(path: str = LOG_PATH, level: int = logging.INFO) -> logging.Handler:
    """Attach a file handler to the ``comanda`` logger and return it."""
    log_file = Path(path)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(_FORMAT))

    root = logging.getLogger("comanda")
    root.setLevel(level)
    root.addHandler(handler)
    return handler
