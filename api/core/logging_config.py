"""
Root logger configuration.

Modules log through `logging.getLogger(__name__)`; this only attaches a
console handler once per process.
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def setup_logging(level: str | None = None) -> None:
    root = logging.getLogger()
    numeric_level = getattr(logging, (level or log_level()).upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    root.setLevel(numeric_level)
    if root.handlers:
        # Already configured (uvicorn, pytest or a second create_app call).
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
