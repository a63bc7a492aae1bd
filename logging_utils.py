"""Logging helpers for the backend."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import golf_config

_CONFIGURED = False


def setup_logging(log_path: Optional[Path] = None) -> Path:
    """Configure console logging plus a rotating file handler."""
    global _CONFIGURED
    resolved = Path(log_path) if log_path is not None else Path(golf_config.LOG_FILE)
    if _CONFIGURED:
        return resolved

    resolved.parent.mkdir(parents=True, exist_ok=True)
    level = getattr(logging, golf_config.LOG_LEVEL.upper(), logging.INFO)

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s"
    )

    file_handler = RotatingFileHandler(
        resolved,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(file_handler)
    root.addHandler(console_handler)

    _CONFIGURED = True
    logging.getLogger(__name__).info("Logging initialized: %s", resolved)
    return resolved
