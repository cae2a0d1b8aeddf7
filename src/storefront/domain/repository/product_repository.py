"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Stock is only ever changed through the atomic
``increment_stock`` / ``decrement_stock`` primitives.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product with its options, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its exact name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Persist a new product and assign its ID."""

    @abstractmethod
    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """Atomically subtract *quantity* if at least that much is in stock.

        Returns False, leaving stock untouched, when the product is missing
        or holds less than *quantity*.
        """

    @abstractmethod
    def increment_stock(self, product_id: int, quantity: int) -> bool:
        """Atomically add *quantity*. Returns False if the product is missing."""
