"""boycott_shared.auth — Authenticated subject extraction for cause Lambdas.

API Gateway has already validated the caller's JWT by the time the Lambda
runs; the authorizer injects the decoded claims into the request context.
This module only reads them back out. No signature verification happens here.

Claim locations:
    requestContext.authorizer.claims       — REST API, Cognito user pool authorizer
    requestContext.authorizer.jwt.claims   — HTTP API, JWT authorizer
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


def _claims_from_event(event: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Return the authorizer claim mapping, or an empty dict when absent."""
    if not isinstance(event, Mapping):
        return {}
    rc = event.get("requestContext")
    if not isinstance(rc, Mapping):
        return {}
    authorizer = rc.get("authorizer")
    if not isinstance(authorizer, Mapping):
        return {}

    claims = authorizer.get("claims")
    if not isinstance(claims, Mapping):
        jwt_ctx = authorizer.get("jwt")
        claims = jwt_ctx.get("claims") if isinstance(jwt_ctx, Mapping) else None
    if not isinstance(claims, Mapping):
        return {}
    return dict(claims)


def _subject_from_event(event: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Extract the `sub` claim injected by the gateway authorizer.

    Returns None when the authorizer, its claims, or the `sub` claim is
    missing (or `sub` is not a non-empty string).
    """
    sub = _claims_from_event(event).get("sub")
    if not isinstance(sub, str) or not sub.strip():
        logger.debug("No authorizer subject on request")
        return None
    return sub
