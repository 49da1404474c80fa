"""
Schema Validation for transport requests

This module provides JSON schema-based validation of the requests accepted by
the navigator server. Each action has a registered schema for its body; a
request whose action is unknown or whose body does not match is rejected
before any service call is made.

Request envelope:
    {"headers": {"action": "graph/addNode"}, "body": {"nodeName": "A", "x": 0, "y": 0}}
"""

from typing import Any, Dict, Optional, Tuple

from jsonschema import ValidationError as JsonSchemaError
from jsonschema import validate as json_validate

from ...core.exceptions import ValidationError

_NAME = {"type": "string", "minLength": 1, "pattern": r"\S"}
_NUMBER = {"type": "number"}
_TIMEOUT = {"type": "number", "exclusiveMinimum": 0}
_STORE_ID = {"type": "integer", "minimum": 1}
_EMPTY: Dict[str, Any] = {"type": "object"}


def _object(required: Dict[str, Any], optional: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Build an object schema from required and optional property schemas."""
    return {
        "type": "object",
        "properties": {**required, **(optional or {})},
        "required": list(required),
    }


ENVELOPE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "headers": _object({"action": {"type": "string"}}),
        "body": {"type": ["object", "null"]},
    },
    "required": ["headers"],
}

PRODUCT_SCHEMA = _object({"name": _NAME, "price": {"type": "number", "minimum": 0}})

ACTION_SCHEMAS: Dict[str, Dict[str, Any]] = {
    # Store operations
    "store/add": _object(
        {"name": _NAME, "location_id": _NAME},
        {"products": {"type": "array", "items": PRODUCT_SCHEMA}},
    ),
    "store/get": _object({"id": _STORE_ID}),
    "store/getAll": _EMPTY,
    "store/update": _object(
        {"id": _STORE_ID}, {"name": _NAME, "location_id": _NAME}
    ),
    "store/delete": _object({"id": _STORE_ID}),
    # Product operations
    "store/addProduct": _object({"storeId": _STORE_ID, "product": PRODUCT_SCHEMA}),
    "store/removeProduct": _object({"storeId": _STORE_ID, "productName": _NAME}),
    "store/getProducts": _object({"storeId": _STORE_ID}),
    "store/updateProduct": _object(
        {
            "storeId": _STORE_ID,
            "product": _object(
                {"id": {"type": "integer", "minimum": 1}},
                {"name": _NAME, "price": {"type": "number", "minimum": 0}},
            ),
        }
    ),
    "store/findNearest": _object(
        {"location": _NAME, "productName": _NAME}, {"timeout": _TIMEOUT}
    ),
    "store/findCheapest": _object({"productName": _NAME}),
    # Graph operations
    "graph/addNode": _object({"nodeName": _NAME, "x": _NUMBER, "y": _NUMBER}),
    "graph/addEdge": _object({"from": _NAME, "to": _NAME, "weight": _NUMBER}),
    "graph/removeNode": _object({"nodeName": _NAME}),
    "graph/removeEdge": _object({"from": _NAME, "to": _NAME}),
    "graph/getNodes": _EMPTY,
    "graph/getEdges": _EMPTY,
    "graph/shortestPath": _object(
        {"from": _NAME, "to": _NAME},
        {"timeout": _TIMEOUT},
    ),
    "graph/useAlgorithm": _object({"algorithm": _NAME}),
    "graph/clearAllData": _EMPTY,
}


class RequestValidator:
    """
    JSON Schema-based validator for transport requests.

    Attributes:
        schemas (Dict[str, Dict[str, Any]]): Body schema per action name
    """

    def __init__(self, schemas: Optional[Dict[str, Dict[str, Any]]] = None):
        self.schemas: Dict[str, Dict[str, Any]] = dict(ACTION_SCHEMAS if schemas is None else schemas)

    def register_action(self, action: str, schema: Dict[str, Any]) -> None:
        """Register or replace the body schema of an action."""
        self.schemas[action] = schema

    def validate(self, request: Any) -> Tuple[str, Dict[str, Any]]:
        """
        Validate a decoded request.

        Args:
            request: Decoded JSON request

        Returns:
            (action, body) with a missing body normalized to {}

        Raises:
            ValidationError: If the envelope, the action or the body is invalid
        """
        try:
            json_validate(instance=request, schema=ENVELOPE_SCHEMA)
        except JsonSchemaError as e:
            raise ValidationError(f"Malformed request: {e.message}") from e

        action = request["headers"]["action"]
        schema = self.schemas.get(action)
        if schema is None:
            raise ValidationError(f"Unknown action: {action}")

        body = request.get("body") or {}
        try:
            json_validate(instance=body, schema=schema)
        except JsonSchemaError as e:
            location = ".".join(str(part) for part in e.absolute_path)
            prefix = f"{location}: " if location else ""
            raise ValidationError(f"Invalid body for {action}: {prefix}{e.message}") from e
        return action, body


_default_validator = RequestValidator()


def validate_request(request: Any) -> Tuple[str, Dict[str, Any]]:
    """Validate a request against the built-in action schemas."""
    return _default_validator.validate(request)
