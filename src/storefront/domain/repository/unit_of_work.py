"""Abstract unit of work: one atomic transaction per use case.

Usage::

    with uow:
        uow.products.decrement_stock(...)
        uow.orders.add(order)

Leaving the block normally commits; an exception rolls everything back
and propagates.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        self.begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def begin(self) -> None:
        """Start the transaction and bind ``products`` / ``orders``."""

    @abstractmethod
    def commit(self) -> None:
        """Make every change since ``begin`` durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every change since ``begin``."""
