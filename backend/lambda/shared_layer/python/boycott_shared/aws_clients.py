"""boycott_shared.aws_clients — Lazy-singleton AWS service clients.

The DynamoDB client is created on first call and cached at module level, so a
warm Lambda container reuses one client across invocations instead of paying
the boto3 construction cost each time.
"""

from __future__ import annotations

import os
from typing import Optional

import boto3
from botocore.config import Config

# ---------------------------------------------------------------------------
# Default region (overridable via env)
# ---------------------------------------------------------------------------

DYNAMODB_REGION: str = os.environ.get(
    "DYNAMODB_REGION", os.environ.get("AWS_REGION", "us-west-2")
)

# ---------------------------------------------------------------------------
# Client singletons
# ---------------------------------------------------------------------------

_ddb = None


def _get_ddb(region: Optional[str] = None):
    """Get (or create) the DynamoDB client singleton."""
    global _ddb
    if _ddb is None:
        _ddb = boto3.client(
            "dynamodb",
            region_name=region or DYNAMODB_REGION,
            config=Config(retries={"max_attempts": 5, "mode": "standard"}),
        )
    return _ddb


def _reset_clients() -> None:
    """Drop cached clients (tests, or after a region change)."""
    global _ddb
    _ddb = None
