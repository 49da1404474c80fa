"""
Base storage functionality for record collections.

This module provides the asynchronous JSON file storage used for store records.
It handles:
- Persistent storage and retrieval of keyed records
- Serialized access with an asyncio lock
- Error handling and logging

Subclasses define how their record type is serialized.
"""

import asyncio
import logging
import os
from typing import Any, Dict, Generic, TypeVar

from ...core.exceptions import StorageError
from .persistence import load_json_file, save_json_file

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseStorage(Generic[T]):
    """
    Base storage class for a collection of records keyed by string id.

    Attributes:
        storage_dir (str): Directory path for persistent storage
        storage_file (str): Full path to the storage file
        _items (Dict[str, T]): In-memory copy of the records
        _lock (asyncio.Lock): Guards every read-modify-write cycle
    """

    def __init__(self, storage_dir: str, filename: str):
        """
        Initialize base storage.

        Args:
            storage_dir: Directory for persistent storage
            filename: Name of storage file

        Data is loaded by initialize(), not by the constructor.
        """
        self._items: Dict[str, T] = {}
        self._lock = asyncio.Lock()
        self.storage_dir = storage_dir
        self.storage_file = os.path.join(storage_dir, filename)

    def _serialize_item(self, item: T) -> Dict[str, Any]:
        """Convert an item to a JSON-compatible dictionary."""
        raise NotImplementedError

    def _deserialize_item(self, data: Dict[str, Any]) -> T:
        """Convert a stored dictionary back to an item."""
        raise NotImplementedError

    async def _persist_items(self) -> None:
        """
        Persist items to disk storage.

        Raises:
            StorageError: If persistence operation fails
        """
        os.makedirs(self.storage_dir, exist_ok=True)
        items_data = {key: self._serialize_item(item) for key, item in self._items.items()}
        await save_json_file(self.storage_file, items_data)
        logger.debug(f"Persisted {len(items_data)} items to {self.storage_file}")

    async def _load_from_storage(self) -> None:
        """
        Load items from disk storage. A missing or empty file loads as no items.

        Raises:
            StorageError: If the file is unreadable or holds malformed records
        """
        items_data = await load_json_file(self.storage_file)
        try:
            self._items = {
                key: self._deserialize_item(value) for key, value in items_data.items()
            }
        except Exception as e:
            logger.error(f"Failed to load from storage: {str(e)}")
            raise StorageError(f"Storage loading failed: {str(e)}")
        logger.info(f"Loaded {len(self._items)} items from {self.storage_file}")

    async def initialize(self) -> None:
        """Load existing data. Call once after construction."""
        async with self._lock:
            await self._load_from_storage()
