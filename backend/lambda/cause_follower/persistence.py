"""persistence.py — Conditional follower_count updates on the causes table.

Cause records are created elsewhere; this module only mutates the counter of
a record that already exists.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError

from boycott_shared.aws_clients import _get_ddb
from boycott_shared.serialization import _deserialize, _serialize
from config import CAUSE_KEY_ATTR, CAUSES_TABLE, FOLLOWER_COUNT_ATTR, logger

__all__ = [
    "CauseNotFoundError",
    "CauseStoreError",
    "_apply_follower_delta",
    "_cause_key",
    "_updated_follower_count",
]

_UPDATE_EXPRESSION = (
    f"SET {FOLLOWER_COUNT_ATTR} = if_not_exists({FOLLOWER_COUNT_ATTR}, :zero) + :delta"
)
_CONDITION_EXPRESSION = f"attribute_exists({CAUSE_KEY_ATTR})"


class CauseStoreError(RuntimeError):
    """DynamoDB rejected or failed the update."""


class CauseNotFoundError(CauseStoreError):
    """No cause record exists for the given cause_id."""

    def __init__(self, cause_id: str):
        super().__init__(f"Cause not found: {cause_id}")
        self.cause_id = cause_id


def _cause_key(cause_id: str) -> Dict[str, Any]:
    return {CAUSE_KEY_ATTR: _serialize(cause_id)}


def _updated_follower_count(response: Dict[str, Any]) -> Optional[int]:
    attrs = (response or {}).get("Attributes") or {}
    if FOLLOWER_COUNT_ATTR not in attrs:
        return None
    value = _deserialize({FOLLOWER_COUNT_ATTR: attrs[FOLLOWER_COUNT_ATTR]})[FOLLOWER_COUNT_ATTR]
    return int(value)


def _apply_follower_delta(cause_id: str, delta: int, ddb=None) -> bool:
    """Atomically add `delta` to a cause's follower_count.

    A missing follower_count counts as 0. The update only applies when the
    record exists; there is no clamping, so decrementing 0 yields -1.

    Returns True once DynamoDB has applied the update.

    Raises:
        CauseNotFoundError: the record does not exist (condition check failed).
        CauseStoreError: any other DynamoDB or transport failure.
        ValueError: empty cause_id or non-integer delta.
    """
    if not cause_id:
        raise ValueError("cause_id is required")
    if isinstance(delta, bool) or not isinstance(delta, int):
        raise ValueError(f"delta must be an int, got {type(delta).__name__}")

    if ddb is None:
        ddb = _get_ddb()
    try:
        resp = ddb.update_item(
            TableName=CAUSES_TABLE,
            Key=_cause_key(cause_id),
            UpdateExpression=_UPDATE_EXPRESSION,
            ConditionExpression=_CONDITION_EXPRESSION,
            ExpressionAttributeValues={
                ":delta": _serialize(delta),
                ":zero": _serialize(0),
            },
            ReturnValues="UPDATED_NEW",
        )
    except ClientError as exc:
        code = exc.response.get("Error", {}).get("Code")
        if code == "ConditionalCheckFailedException":
            logger.warning("[WARNING] Cause not found: %s", cause_id)
            raise CauseNotFoundError(cause_id) from exc
        logger.error("[ERROR] update_item failed for cause %s (%s): %s", cause_id, code, exc)
        raise CauseStoreError(str(exc)) from exc
    except BotoCoreError as exc:
        logger.error("[ERROR] DynamoDB transport failure for cause %s: %s", cause_id, exc)
        raise CauseStoreError(str(exc)) from exc

    logger.info(
        "[INFO] %s %s delta=%+d -> %s=%s",
        CAUSES_TABLE,
        cause_id,
        delta,
        FOLLOWER_COUNT_ATTR,
        _updated_follower_count(resp),
    )
    return True
