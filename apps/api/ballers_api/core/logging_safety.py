"""Logging setup and utilities for safe structured logging fields."""

from __future__ import annotations

import hashlib
import logging
from typing import Any

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a deterministic non-reversible token for log correlation fields."""
    text = str(value or "").strip()
    if not text:
        return f"{prefix}-missing"

    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]
    return f"{prefix}-{digest}"


def configure_logging(level: str) -> None:
    """Attach one stream handler to the package logger; repeated calls only adjust the level."""
    package_logger = logging.getLogger("ballers_api")
    package_logger.setLevel(level.upper())
    if any(getattr(handler, "_ballers_handler", False) for handler in package_logger.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    handler._ballers_handler = True  # type: ignore[attr-defined]
    package_logger.addHandler(handler)
