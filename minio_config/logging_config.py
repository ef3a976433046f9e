"""
Logging for the ``minio_config`` package.

``setup_logging()`` is called once by ``python -m minio_config``. It only
touches the package logger, so an application embedding the store keeps its
own root configuration. Modules log through::

    logger = logging.getLogger(__name__)
"""
from __future__ import annotations

import json
import logging
import os
import sys
from typing import Optional

PACKAGE_LOGGER = "minio_config"
TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class _JSONFormatter(logging.Formatter):
    """Single-line JSON records, keyed the same way as the text format."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _resolve_level(level: Optional[str]) -> str:
    return (level or os.getenv("MINIO_CONFIG_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "INFO").upper()


def setup_logging(*, level: Optional[str] = None, json_format: Optional[bool] = None) -> logging.Logger:
    """Attach a stdout handler to the ``minio_config`` logger.

    *level* falls back to ``MINIO_CONFIG_LOG_LEVEL``, ``LOG_LEVEL`` and then
    ``INFO``. *json_format* falls back to ``MINIO_CONFIG_LOG_FORMAT == "json"``.
    Calling it again replaces the handler it installed earlier.
    """
    if json_format is None:
        json_format = os.getenv("MINIO_CONFIG_LOG_FORMAT", "").lower() == "json"

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_minio_config", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_JSONFormatter() if json_format else logging.Formatter(TEXT_FORMAT))
    handler._minio_config = True  # type: ignore[attr-defined]

    logger.addHandler(handler)
    logger.setLevel(_resolve_level(level))
    logger.propagate = False
    return logger
