"""boycott_shared.http_utils — API Gateway response envelope helpers.

Every cause Lambda answers with the same envelope: an integer status code,
JSON content-type header (plus CORS headers when CORS_ORIGIN is set), and a
JSON-encoded body. A body is one of three shapes:

    str              — plain text message, encoded as a JSON string
    ResponseMessage  — structured client error {"status", "message", "devMsg"}
    Mapping          — key/value payload, e.g. {"error": "..."}
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Union

logger = logging.getLogger(__name__)

CORS_ORIGIN = os.environ.get("CORS_ORIGIN", "")


class SerializationError(ValueError):
    """Response body could not be encoded as JSON."""


@dataclass(frozen=True)
class ResponseMessage:
    """Client-facing error payload with a developer hint."""

    status: int
    message: str
    dev: str

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status, "message": self.message, "devMsg": self.dev}


Body = Union[str, ResponseMessage, Mapping[str, Any]]


def _cors_headers() -> Dict[str, str]:
    if not CORS_ORIGIN:
        return {}
    return {
        "Access-Control-Allow-Origin": CORS_ORIGIN,
        "Access-Control-Allow-Headers": "Content-Type,Authorization",
        "Access-Control-Allow-Methods": "POST,OPTIONS",
    }


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Decimal):
        if obj % 1 == 0:
            return int(obj)
        return float(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _encode_body(body: Body) -> str:
    if isinstance(body, ResponseMessage):
        payload: Any = body.to_dict()
    elif isinstance(body, str):
        payload = body
    elif isinstance(body, Mapping):
        payload = dict(body)
    else:
        raise SerializationError(f"Unsupported response body type: {type(body).__name__}")

    try:
        return json.dumps(payload, default=_json_default)
    except (TypeError, ValueError) as exc:
        # ValueError covers "Circular reference detected".
        raise SerializationError(f"Response body is not JSON serializable: {exc}") from exc


def _response(status_code: int, body: Body) -> Dict[str, Any]:
    """Build an API Gateway proxy response.

    Raises:
        SerializationError: body is not one of the supported shapes, or holds
            values json cannot encode.
    """
    return {
        "statusCode": int(status_code),
        "headers": {
            **_cors_headers(),
            "Content-Type": "application/json",
        },
        "body": _encode_body(body),
    }


def _error_message(status_code: int, message: str, dev: str) -> Dict[str, Any]:
    return _response(status_code, ResponseMessage(status_code, message, dev))


def _unauthorized() -> Dict[str, Any]:
    return _response(401, {"message": "Unauthorized"})


def _server_error(detail: str) -> Dict[str, Any]:
    return _response(500, {"error": f"Unexpected server error: {detail}"})
