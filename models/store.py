"""
Product store: the ordered, copy-on-write product collection.
"""

import logging
import threading
from collections.abc import Iterator, Sequence
from datetime import datetime

from models.enums import Category
from models.inventory import Product, ProductDraft

logger = logging.getLogger(__name__)

DEFAULT_DAILY_SALES = 2.0


class ProductStore:
    """
    Holds the current product collection as an immutable snapshot.

    Every mutation builds a new tuple and swaps it in under a writer lock, so
    readers (the decision engine, dashboards) always see a consistent
    collection without locking. Each new snapshot is handed to the repository.
    """

    def __init__(self, repository, products: Sequence[Product] = ()):
        self.repository = repository
        self._snapshot: tuple[Product, ...] = tuple(products)
        self._write_lock = threading.Lock()

    @classmethod
    def from_repository(cls, repository) -> "ProductStore":
        products = repository.load()
        logger.info(f"ProductStore initialized with {len(products)} products")
        return cls(repository, products)

    def snapshot(self) -> tuple[Product, ...]:
        """Return the current collection (newest first)."""
        return self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot)

    def __iter__(self) -> Iterator[Product]:
        return iter(self._snapshot)

    def get(self, product_id: str) -> Product | None:
        for product in self._snapshot:
            if product.id == product_id:
                return product
        return None

    def default_daily_sales(self, category: Category) -> float:
        """
        Sales velocity assumed for a new product: borrowed from the first
        product of the same category, or 2 when there is none (or it is 0).
        """
        for product in self._snapshot:
            if product.category == category:
                return product.avg_daily_sales or DEFAULT_DAILY_SALES
        return DEFAULT_DAILY_SALES

    def add(self, draft: ProductDraft, *, now: datetime) -> Product:
        """
        Create a product from a draft and prepend it to the collection.

        Args:
            draft: Validated user input.
            now: Creation time, stored as last_updated.

        Returns:
            The created Product with its assigned id.
        """
        with self._write_lock:
            product = draft.to_product(
                avg_daily_sales=self.default_daily_sales(draft.category),
                now=now,
            )
            self._commit((product, *self._snapshot))
        logger.info(
            f"Added product {product.id} ('{product.name}', {product.category.value}) "
            f"with assumed velocity {product.avg_daily_sales}"
        )
        return product

    def replace(self, products: Sequence[Product]) -> None:
        """Swap in a whole new collection."""
        with self._write_lock:
            self._commit(tuple(products))
        logger.info(f"Replaced product collection ({len(products)} products)")

    def _commit(self, snapshot: tuple[Product, ...]) -> None:
        # Persist first so a failed save leaves the previous snapshot in place
        self.repository.save(snapshot)
        self._snapshot = snapshot
