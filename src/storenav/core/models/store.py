"""
Store and product models.

A store is the facility of the nearest-facility search: a record bound to one
graph node through its location_id and carrying a list of products.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .base import validate_identifier, validate_price


@dataclass
class Product:
    """
    Product stocked by a store.

    Attributes:
        id (int): Unique product id, assigned by the record storage
        name (str): Product name, matched case-insensitively
        price (float): Non-negative unit price
    """

    name: str
    price: float
    id: int = 0

    def __post_init__(self):
        validate_identifier("product name", self.name)
        self.price = validate_price(self.price)

    def matches(self, product_name: str) -> bool:
        return self.name.casefold() == product_name.strip().casefold()

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "price": self.price}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        return cls(name=data["name"], price=data["price"], id=int(data.get("id", 0)))


@dataclass
class Store:
    """
    Store record bound to a graph location.

    Attributes:
        name (str): Display name
        location_id (str): Id of the graph node hosting the store
        id (int): Unique store id, assigned by the record storage
        x (float): Longitude copied from the location node
        y (float): Latitude copied from the location node
        products (List[Product]): Stocked products
    """

    name: str
    location_id: str
    id: int = 0
    x: float = 0.0
    y: float = 0.0
    products: List[Product] = field(default_factory=list)

    def __post_init__(self):
        validate_identifier("store name", self.name)
        validate_identifier("location id", self.location_id)

    def find_product(self, product_name: str) -> Optional[Product]:
        """Return the first product with the given name, if stocked."""
        for product in self.products:
            if product.matches(product_name):
                return product
        return None

    def stocks(self, product_name: str) -> bool:
        return self.find_product(product_name) is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "location_id": self.location_id,
            "x": self.x,
            "y": self.y,
            "products": [product.to_dict() for product in self.products],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Store":
        return cls(
            name=data["name"],
            location_id=data["location_id"],
            id=int(data.get("id", 0)),
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            products=[Product.from_dict(item) for item in data.get("products", [])],
        )
