"""
Store record storage.

Stores and their products are kept in stores.json, keyed by store id. Ids are
assigned here: a new store gets the highest existing store id plus one, a new
product the highest product id across all stores plus one.
"""

import copy
import logging
from typing import Any, Dict, List, Optional, Tuple

from ...core.exceptions import NotFoundError, StorageError, StoreNotFoundError, ValidationError
from ...core.models import Product, Store
from .base import BaseStorage

logger = logging.getLogger(__name__)


class JsonStoreStorage(BaseStorage[Store]):
    """
    Asynchronous JSON storage for store records.

    Returned records are copies; changes go through the storage methods.
    """

    def __init__(self, storage_dir: str, filename: str = "stores.json"):
        super().__init__(storage_dir, filename)

    def _serialize_item(self, item: Store) -> Dict[str, Any]:
        return item.to_dict()

    def _deserialize_item(self, data: Dict[str, Any]) -> Store:
        return Store.from_dict(data)

    async def add_store(self, store: Store) -> Store:
        """
        Add a store and assign its id.

        Raises:
            ValidationError: If a store with the same name exists at the location
            StorageError: If the records cannot be written
        """
        async with self._lock:
            self._check_duplicate(store.name, store.location_id)
            created = copy.deepcopy(store)
            created.id = max((item.id for item in self._items.values()), default=0) + 1
            next_product_id = self._next_product_id()
            for offset, product in enumerate(created.products):
                product.id = next_product_id + offset
            self._items[str(created.id)] = created
            await self._commit(lambda items: items.pop(str(created.id), None))
            logger.info(f"Added store {created.id} '{created.name}' at {created.location_id}")
            return copy.deepcopy(created)

    async def get_store(self, store_id: int) -> Store:
        """
        Raises:
            StoreNotFoundError: If no store has this id
        """
        async with self._lock:
            return copy.deepcopy(self._require(store_id))

    async def list_stores(self) -> List[Store]:
        """Get every store ordered by id."""
        async with self._lock:
            return [copy.deepcopy(store) for store in sorted(self._items.values(), key=lambda s: s.id)]

    async def update_store(
        self,
        store_id: int,
        name: Optional[str] = None,
        location_id: Optional[str] = None,
        x: Optional[float] = None,
        y: Optional[float] = None,
    ) -> Store:
        """
        Update the given fields of a store. Products are left untouched.

        Raises:
            StoreNotFoundError: If no store has this id
            ValidationError: If a new name or location is blank, or another
                store with the same name exists at the location
        """
        async with self._lock:
            current = self._require(store_id)
            updated = Store(
                name=current.name if name is None else name,
                location_id=current.location_id if location_id is None else location_id,
                id=current.id,
                x=current.x if x is None else float(x),
                y=current.y if y is None else float(y),
                products=current.products,
            )
            self._check_duplicate(updated.name, updated.location_id, exclude_id=store_id)
            self._items[str(store_id)] = updated
            await self._commit(lambda items: items.__setitem__(str(store_id), current))
            logger.info(f"Updated store {store_id}")
            return copy.deepcopy(updated)

    async def delete_store(self, store_id: int) -> Store:
        """
        Raises:
            StoreNotFoundError: If no store has this id
        """
        async with self._lock:
            removed = self._require(store_id)
            del self._items[str(store_id)]
            await self._commit(lambda items: items.__setitem__(str(store_id), removed))
            logger.info(f"Deleted store {store_id}")
            return copy.deepcopy(removed)

    async def add_product(self, store_id: int, name: str, price: float) -> Product:
        """
        Add a product to a store and assign its id.

        Raises:
            StoreNotFoundError: If no store has this id
            ValidationError: If the name is blank or the price negative
        """
        async with self._lock:
            store = self._require(store_id)
            product = Product(name=name, price=price, id=self._next_product_id())
            store.products.append(product)
            await self._commit(lambda items: store.products.remove(product))
            logger.info(f"Added product {product.id} '{product.name}' to store {store_id}")
            return copy.deepcopy(product)

    async def remove_product(self, store_id: int, product_name: str) -> int:
        """
        Remove every product with the given name (case-insensitive) from a store.

        Returns:
            int: Number of products removed

        Raises:
            StoreNotFoundError: If no store has this id
            NotFoundError: If the store does not stock the product
        """
        async with self._lock:
            store = self._require(store_id)
            previous = list(store.products)
            store.products = [p for p in previous if not p.matches(product_name)]
            removed = len(previous) - len(store.products)
            if not removed:
                raise NotFoundError(f"Store {store_id} has no product named '{product_name}'")
            await self._commit(lambda items: setattr(store, "products", previous))
            logger.info(f"Removed {removed} product(s) '{product_name}' from store {store_id}")
            return removed

    async def update_product(
        self,
        store_id: int,
        product_id: int,
        name: Optional[str] = None,
        price: Optional[float] = None,
    ) -> Product:
        """
        Update the name and/or price of a product, matched by id.

        Raises:
            StoreNotFoundError: If no store has this id
            NotFoundError: If the store has no product with this id
        """
        async with self._lock:
            store = self._require(store_id)
            for index, product in enumerate(store.products):
                if product.id == product_id:
                    break
            else:
                raise NotFoundError(f"Store {store_id} has no product with id {product_id}")

            updated = Product(
                name=product.name if name is None else name,
                price=product.price if price is None else price,
                id=product.id,
            )
            store.products[index] = updated
            await self._commit(lambda items: store.products.__setitem__(index, product))
            logger.info(f"Updated product {product_id} in store {store_id}")
            return copy.deepcopy(updated)

    async def get_products(self, store_id: int) -> List[Product]:
        """
        Raises:
            StoreNotFoundError: If no store has this id
        """
        async with self._lock:
            return copy.deepcopy(self._require(store_id).products)

    async def find_cheapest_with_product(
        self, product_name: str
    ) -> Optional[Tuple[Store, Product]]:
        """
        Find the store selling a product at the lowest price.

        Returns:
            (store, product) or None if no store stocks the product. Equal
            prices resolve to the lowest store id.
        """
        async with self._lock:
            best: Optional[Tuple[Store, Product]] = None
            for store in sorted(self._items.values(), key=lambda s: s.id):
                for product in store.products:
                    if product.matches(product_name) and (
                        best is None or product.price < best[1].price
                    ):
                        best = (store, product)
            return copy.deepcopy(best)

    async def clear(self) -> None:
        """Remove every store."""
        async with self._lock:
            previous = self._items
            self._items = {}
            await self._commit(lambda items: items.update(previous))
            logger.info("Cleared all stores")

    def _require(self, store_id: int) -> Store:
        store = self._items.get(str(store_id))
        if store is None:
            raise StoreNotFoundError(f"Store not found: {store_id}")
        return store

    def _check_duplicate(self, name: str, location_id: str, exclude_id: Optional[int] = None) -> None:
        """Reject a second store with the same name (case-insensitive) at one location."""
        for existing in self._items.values():
            if existing.id == exclude_id:
                continue
            if existing.name.casefold() == name.casefold() and existing.location_id == location_id:
                raise ValidationError(f"Store '{name}' already exists at {location_id}")

    def _next_product_id(self) -> int:
        return (
            max(
                (product.id for store in self._items.values() for product in store.products),
                default=0,
            )
            + 1
        )

    async def _commit(self, undo) -> None:
        """Persist the current records, undoing the in-memory change on failure."""
        try:
            await self._persist_items()
        except StorageError:
            undo(self._items)
            raise
