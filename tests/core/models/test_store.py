"""
Tests for store and product models.
"""

import pytest

from storenav.core.exceptions import ValidationError
from storenav.core.models import Product, Store


@pytest.fixture
def store():
    """Fixture providing a store stocking two products."""
    return Store(
        name="Tech Hub",
        location_id="C",
        id=3,
        x=4.0,
        y=0.0,
        products=[Product(name="Mouse", price=59.9, id=1), Product(name="Cable", price=5, id=2)],
    )


def test_product_name_matching_is_case_insensitive():
    product = Product(name="Mouse", price=10)
    assert product.matches("mouse")
    assert product.matches(" MOUSE ")
    assert not product.matches("Mousepad")


def test_product_validation():
    with pytest.raises(ValidationError, match="price cannot be negative"):
        Product(name="Mouse", price=-1)
    with pytest.raises(ValidationError, match="finite"):
        Product(name="Mouse", price=float("nan"))
    with pytest.raises(ValidationError):
        Product(name=" ", price=1)


def test_store_stocks(store):
    assert store.stocks("mouse")
    assert store.find_product("CABLE").id == 2
    assert not store.stocks("Keyboard")
    assert store.find_product("Keyboard") is None


def test_store_dict_conversion(store):
    data = store.to_dict()

    assert data["location_id"] == "C"
    assert data["products"][0] == {"id": 1, "name": "Mouse", "price": 59.9}
    assert Store.from_dict(data) == store


def test_store_requires_location():
    with pytest.raises(ValidationError, match="location id"):
        Store(name="Nowhere", location_id="")
