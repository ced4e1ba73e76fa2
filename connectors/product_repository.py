"""
Module: connectors.product_repository

Repositories that load and save the full product collection as one snapshot.
"""

import json
import logging
from collections.abc import Callable, Sequence
from typing import Protocol

from config.config import StorageConfig
from connectors.local_storage import LocalStorage
from models.inventory import InvalidProductError, Product
from utils.data_generation import initial_products

logger = logging.getLogger(__name__)


class ProductRepository(Protocol):
    """Persistence collaborator for the product collection."""

    def load(self) -> list[Product]: ...

    def save(self, snapshot: Sequence[Product]) -> None: ...


class InMemoryProductRepository:
    """
    Dummy in-memory repository for tests and demos.
    """

    def __init__(self, products: Sequence[Product] | None = None):
        self._snapshot: tuple[Product, ...] = tuple(products or ())
        self.save_count = 0

    def load(self) -> list[Product]:
        return list(self._snapshot)

    def save(self, snapshot: Sequence[Product]) -> None:
        self._snapshot = tuple(snapshot)
        self.save_count += 1


class LocalStorageProductRepository:
    """
    Stores the collection as a JSON array string under a fixed key.
    Falls back to the seed catalog when nothing has been saved yet.
    """

    def __init__(
        self,
        storage: LocalStorage,
        storage_key: str = StorageConfig.storage_key,
        seed: Callable[[], list[Product]] = initial_products,
    ):
        self.storage = storage
        self.storage_key = storage_key
        self.seed = seed

    @classmethod
    def from_config(cls, config: StorageConfig | None = None) -> "LocalStorageProductRepository":
        config = config or StorageConfig()
        return cls(LocalStorage(config.storage_path), storage_key=config.storage_key)

    def load(self) -> list[Product]:
        try:
            raw = self.storage.get_item(self.storage_key)
        except ValueError as exc:
            raise InvalidProductError(f"Storage file {self.storage.path} is unreadable: {exc}") from exc
        if raw is None:
            logger.info(f"No saved products under '{self.storage_key}'; using seed catalog.")
            return self.seed()
        try:
            records = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise InvalidProductError(f"Stored products under '{self.storage_key}' are not valid JSON: {exc}") from exc
        if not isinstance(records, list):
            raise InvalidProductError(f"Stored products under '{self.storage_key}' must be a JSON array.")
        products = [Product.from_record(record) for record in records]
        logger.info(f"Loaded {len(products)} products from '{self.storage_key}'.")
        return products

    def save(self, snapshot: Sequence[Product]) -> None:
        payload = json.dumps([p.to_record() for p in snapshot])
        self.storage.set_item(self.storage_key, payload)
        logger.debug(f"Saved {len(snapshot)} products under '{self.storage_key}'.")
