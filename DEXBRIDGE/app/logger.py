from __future__ import annotations

import logging
import os
import sys

LOGGER_NAME = "DEXBRIDGE"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL_VARIABLE = "DEXBRIDGE_LOG_LEVEL"


# -----------------------------------------------------------------------------
def resolve_log_level(value: str | None, default: int = logging.INFO) -> int:
    if not value:
        return default
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else default


# -----------------------------------------------------------------------------
def build_logger(name: str = LOGGER_NAME) -> logging.Logger:
    instance = logging.getLogger(name)
    if not instance.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        instance.addHandler(handler)
    instance.setLevel(resolve_log_level(os.environ.get(LOG_LEVEL_VARIABLE)))
    instance.propagate = False
    return instance


logger = build_logger()
