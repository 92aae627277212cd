"""boycott_shared.observability — Structured JSON log lines.

One line per notable pipeline event, prefixed `[OBSERVABILITY]` so CloudWatch
Logs Insights can filter and parse them.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from boycott_shared.serialization import _now_z

logger = logging.getLogger(__name__)


def _emit_structured_log(
    *,
    component: str,
    event: str,
    subject: Optional[str] = None,
    stage: Optional[str] = None,
    error_code: Optional[str] = None,
    level: int = logging.INFO,
    extra: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "timestamp": _now_z(),
        "component": component,
        "event": event,
        "subject": str(subject or ""),
        "stage": str(stage or ""),
        "error_code": str(error_code or ""),
    }
    if extra:
        payload.update(extra)
    logger.log(level, "[OBSERVABILITY] %s", json.dumps(payload, sort_keys=True, default=str))
    return payload
