"""JSON conversion of domain objects for storage files and transport responses."""

import json
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Dict

from .graph.traversal import FacilityMatch, PathResult
from .models import Coordinates, Edge, Product, Store


class StoreNavJSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for store navigation types."""

    def default(self, o: Any) -> Any:
        if isinstance(o, Enum):
            return o.value
        if isinstance(o, Coordinates):
            return {"x": o.x, "y": o.y}
        if isinstance(o, (Store, Product, PathResult)):
            return o.to_dict()
        if isinstance(o, FacilityMatch):
            return {
                "facility": o.facility,
                "location_id": o.location_id,
                "path": list(o.path),
                "total_weight": o.total_weight,
            }
        if isinstance(o, Edge) or is_dataclass(o):
            return self.encode_dataclass(o)
        if isinstance(o, (set, frozenset, tuple)):
            return list(o)
        return super().default(o)

    def encode_dataclass(self, obj: Any) -> Dict[str, Any]:
        """Convert dataclass instance to dictionary."""
        result = {}
        for field in fields(obj):
            value = getattr(obj, field.name)
            if value is not None:
                result[field.name] = value
        return result


def dumps(obj: Any, **kwargs: Any) -> str:
    """Serialize an object graph that may contain domain types."""
    return json.dumps(obj, cls=StoreNavJSONEncoder, **kwargs)


def to_jsonable(obj: Any) -> Any:
    """Convert domain objects to plain JSON-compatible structures."""
    return json.loads(dumps(obj))
