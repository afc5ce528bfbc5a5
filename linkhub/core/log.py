"""Logging setup for the service (stdlib logging)."""
from __future__ import annotations

import logging

LOGGER_NAME = "linkhub"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the package logger. Safe to call twice."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not any(getattr(h, "_linkhub", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._linkhub = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


def redact_dsn(value: str) -> str:
    """Return the part of a connection string that is safe to log."""
    if not value:
        return ""
    cut = value.rfind("@")
    if cut > 0:
        scheme, _, _ = value.partition("://")
        return f"{scheme}://***{value[cut:]}"
    return value[:30] + ("..." if len(value) > 30 else "")
