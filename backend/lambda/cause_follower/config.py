"""config.py — Environment configuration, table constants, logging for cause_follower."""
from __future__ import annotations

import logging
import os

__all__ = [
    "CAUSES_TABLE",
    "CAUSE_KEY_ATTR",
    "COMPONENT",
    "FOLLOWER_COUNT_ATTR",
    "INCREMENT_VALUES",
    "LOG_LEVEL",
    "logger",
]

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

CAUSES_TABLE = os.environ.get("CAUSES_TABLE", "causes")
CAUSE_KEY_ATTR = "cause_id"
FOLLOWER_COUNT_ATTR = "follower_count"
COMPONENT = "cause_follower"

# Path parameter literal -> follower_count delta. Case-sensitive.
INCREMENT_VALUES = {
    "true": 1,
    "false": -1,
}

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def _log_level(raw: str) -> int:
    """Map a LOG_LEVEL name to a logging level; unknown names fall back to INFO."""
    level = logging.getLevelName(str(raw or "").strip().upper())
    return level if isinstance(level, int) else logging.INFO


LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

logger = logging.getLogger()
logger.setLevel(_log_level(LOG_LEVEL))
if not isinstance(logging.getLevelName(LOG_LEVEL.strip().upper()), int):
    logger.warning("[WARNING] Unknown LOG_LEVEL %r, using INFO", LOG_LEVEL)
