"""
Validation helpers shared by the domain models.

These functions raise ValidationError so that model construction failures
surface with the same type as the graph operations that rely on them.
"""

import math

from ..exceptions import ValidationError


def validate_identifier(name: str, value: str) -> str:
    """Validate that an identifier is a non-blank string and return it."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} must be a non-empty string")
    return value


def validate_weight(weight: float) -> float:
    """Validate an edge weight and return it as a float."""
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        raise ValidationError("Edge weight must be numeric")
    if math.isnan(weight) or math.isinf(weight):
        raise ValidationError("Edge weight must be a finite number")
    if weight < 0:
        raise ValidationError("Edge weight cannot be negative")
    return float(weight)


def validate_coordinate(name: str, value: float) -> float:
    """Validate a planar coordinate and return it as a float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} coordinate must be numeric")
    if math.isnan(value) or math.isinf(value):
        raise ValidationError(f"{name} coordinate must be a finite number")
    return float(value)


def validate_price(price: float) -> float:
    """Validate a product price and return it as a float."""
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise ValidationError("price must be numeric")
    if math.isnan(price) or math.isinf(price):
        raise ValidationError("price must be a finite number")
    if price < 0:
        raise ValidationError("price cannot be negative")
    return float(price)
