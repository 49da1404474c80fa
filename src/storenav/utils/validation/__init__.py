"""
Validation package.

This package provides JSON schema validation of transport requests.
"""

from .schema import ACTION_SCHEMAS, RequestValidator, validate_request

__all__ = [
    "ACTION_SCHEMAS",
    "RequestValidator",
    "validate_request",
]
