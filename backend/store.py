"""
In-memory product store shared across all routes.

Products live in one process-wide ordered list, reset on every restart.
Each read-modify-write runs under the storage lock so concurrent requests
cannot lose each other's writes.
"""

import logging
import threading
from typing import ContextManager, Iterable, Optional, Protocol

from models.product import Product, utc_timestamp

logger = logging.getLogger(__name__)


class ProductStorage(Protocol):
    """Backend holding the canonical product list."""

    lock: ContextManager

    def read_all(self) -> list[Product]: ...

    def write(self, products: Iterable[Product]) -> None: ...


class InMemoryProductStorage:
    def __init__(self):
        self.lock = threading.RLock()
        self._products: list[Product] = []

    def read_all(self) -> list[Product]:
        # Copies, so callers can't mutate stored records in place
        with self.lock:
            return [p.model_copy() for p in self._products]

    def write(self, products: Iterable[Product]) -> None:
        with self.lock:
            self._products = [p.model_copy() for p in products]


class ProductStore:
    def __init__(self, storage: Optional[ProductStorage] = None):
        self.storage = storage if storage is not None else InMemoryProductStorage()

    def read_all(self) -> list[Product]:
        return self.storage.read_all()

    def write(self, products: Iterable[Product]) -> None:
        self.storage.write(products)

    def reset(self) -> None:
        self.storage.write([])

    def list_for_user(self, user_id: str) -> list[Product]:
        return [p for p in self.storage.read_all() if p.user_id == user_id]

    def add(self, product: Product) -> Product:
        with self.storage.lock:
            products = self.storage.read_all()
            products.append(product)
            self.storage.write(products)
        return product

    def update(self, product_id: str, fields: dict) -> Optional[Product]:
        """
        Merge `fields` over the first product whose id matches.

        Only keys present in `fields` are applied, so 0 and "" are kept.
        Returns the updated product, or None when no product matches.
        """
        with self.storage.lock:
            products = self.storage.read_all()
            for index, product in enumerate(products):
                if product.id == product_id:
                    break
            else:
                return None

            updated = product.model_copy(update={**fields, "updated_at": utc_timestamp()})
            products[index] = updated
            self.storage.write(products)
        return updated

    def delete(self, product_id: str) -> bool:
        with self.storage.lock:
            products = self.storage.read_all()
            for index, product in enumerate(products):
                if product.id == product_id:
                    del products[index]
                    self.storage.write(products)
                    return True
        return False

    def reorder(self, user_id: str, product_ids: list[str]) -> bool:
        """
        Reorder one user's products to follow `product_ids`.

        Fails (returns False, nothing written) if any id is not one of the
        user's products. User products left out of `product_ids` are dropped.
        The user's block is written after every other user's products.
        """
        with self.storage.lock:
            products = self.storage.read_all()
            user_products: dict[str, Product] = {}
            for p in products:
                if p.user_id == user_id:
                    user_products.setdefault(p.id, p)

            logger.debug(
                "Reorder request: user=%s requested=%s owned=%s",
                user_id, product_ids, list(user_products),
            )

            invalid_ids = [pid for pid in product_ids if pid not in user_products]
            if invalid_ids:
                logger.info("Reorder rejected for %s: invalid ids %s", user_id, invalid_ids)
                return False

            omitted = set(user_products) - set(product_ids)
            if omitted:
                logger.info("Reorder for %s drops %d unlisted products", user_id, len(omitted))

            reordered = [user_products[pid] for pid in product_ids]
            others = [p for p in products if p.user_id != user_id]
            self.storage.write(others + reordered)

        logger.debug("Reorder successful for %s", user_id)
        return True


products = ProductStore()


def get_store() -> ProductStore:
    """FastAPI dependency returning the process-wide store."""
    return products
