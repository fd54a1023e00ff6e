"""
Structured logging helpers for QA pipeline workflows.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one pipeline milestone as a compact JSON line.

    Fields left as None are omitted. Korean text is written as-is rather
    than as escape sequences, and nothing is serialized when *level* is
    disabled for *logger*.
    """

    if not logger.isEnabledFor(level):
        return
    payload: dict[str, Any] = {"event": event}
    payload.update((key, value) for key, value in fields.items() if value is not None)
    logger.log(level, json.dumps(payload, default=str, ensure_ascii=False, sort_keys=True))


def configure_logging(default_level: str = "INFO") -> None:
    """
    Configure root logging once for the process from LOG_LEVEL.
    """

    log_level = os.getenv("LOG_LEVEL", default_level).strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format=LOG_FORMAT,
    )
