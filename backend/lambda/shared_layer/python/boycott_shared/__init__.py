"""boycott_shared — Shared utilities for Boycott cause Lambda functions.

Provides:
    - Authorizer-claim subject extraction (API Gateway REST and HTTP APIs)
    - DynamoDB client singleton
    - HTTP response envelope with JSON encoding
    - DynamoDB serialization/deserialization
    - Structured observability log lines
"""

__version__ = "1.0.0"
