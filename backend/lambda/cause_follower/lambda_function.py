"""Cause Follower Lambda — follow/unfollow counter for a cause.

Route (API Gateway proxy integration, Cognito authorizer):
    POST /causes/{cause_id}/followers/{increment}

`increment` is the literal "true" (follow, +1) or "false" (unfollow, -1).
The handler validates the path, then issues exactly one conditional
UpdateItem against the causes table. It never creates a cause record.

Responses:
    200  "cause record updated = true"
    400  {"status": 400, "message": ..., "devMsg": ...}
    401  {"message": "Unauthorized"}
    500  {"error": "Unexpected server error: <detail>"}
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from boycott_shared.auth import _subject_from_event
from boycott_shared.http_utils import _error_message, _response, _server_error, _unauthorized
from boycott_shared.observability import _emit_structured_log
from config import COMPONENT, INCREMENT_VALUES, logger
from persistence import _apply_follower_delta

# ---------------------------------------------------------------------------
# Request parsing
# ---------------------------------------------------------------------------


def _path_params(event: Mapping[str, Any]) -> Mapping[str, Any]:
    params = event.get("pathParameters") if isinstance(event, Mapping) else None
    return params if isinstance(params, Mapping) else {}


def _reject(
    sub: Optional[str],
    error_code: str,
    message: str,
    dev: str,
) -> Dict[str, Any]:
    _emit_structured_log(
        component=COMPONENT,
        event="request_rejected",
        subject=sub,
        stage="validate",
        error_code=error_code,
        level=logging.WARNING,
        extra={"reason": message},
    )
    return _error_message(400, message, dev)


def _parse_follow_request(
    event: Mapping[str, Any],
    sub: str,
) -> Tuple[Optional[str], Optional[int], Optional[Dict[str, Any]]]:
    """Validate path parameters.

    Returns (cause_id, delta, None) on success or (None, None, error_response).
    cause_id is checked before increment.
    """
    params = _path_params(event)
    cause_id = params.get("cause_id")
    increment = params.get("increment")

    if not cause_id:
        return None, None, _reject(sub, "CAUSE_ID_MISSING", "cause_id not present", "Missing cause_id")
    if not increment:
        return None, None, _reject(sub, "INCREMENT_MISSING", "increment not present", "Missing increment")
    if not isinstance(increment, str) or increment not in INCREMENT_VALUES:
        return None, None, _reject(
            sub,
            "INCREMENT_INVALID",
            "increment not acceptable value",
            "Expected true/false",
        )
    return str(cause_id), INCREMENT_VALUES[increment], None


# ---------------------------------------------------------------------------
# Lambda handler
# ---------------------------------------------------------------------------


def lambda_handler(event: Mapping[str, Any], context: Any) -> Dict[str, Any]:
    sub: Optional[str] = None
    stage = "auth"
    request_id = getattr(context, "aws_request_id", "") or ""
    try:
        sub = _subject_from_event(event)
        if sub is None:
            _emit_structured_log(
                component=COMPONENT,
                event="request_rejected",
                stage=stage,
                error_code="UNAUTHORIZED",
                level=logging.WARNING,
                extra={"request_id": request_id},
            )
            return _unauthorized()

        stage = "validate"
        cause_id, delta, rejection = _parse_follow_request(event, sub)
        if rejection is not None:
            return rejection

        logger.info("[START] cause=%s delta=%+d sub=%s request_id=%s", cause_id, delta, sub, request_id)

        stage = "update"
        updated = _apply_follower_delta(cause_id, delta)

        stage = "respond"
        resp = _response(200, f"cause record updated = {str(updated).lower()}")
        logger.info("[END] cause=%s delta=%+d updated=%s", cause_id, delta, updated)
        return resp
    except Exception as exc:
        detail = str(exc) or type(exc).__name__
        logger.exception("[ERROR] cause_follower failed at stage=%s sub=%s: %s", stage, sub, detail)
        _emit_structured_log(
            component=COMPONENT,
            event="request_failed",
            subject=sub,
            stage=stage,
            error_code=type(exc).__name__,
            level=logging.ERROR,
            extra={"request_id": request_id},
        )
        return _server_error(detail)
