"""Shared setup for application-layer tests."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger

from storefront.domain.model.product import Product, ProductOption
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeUnitOfWork

PIZZA = 1
SODA = 2


def make_uow(pizza_stock: int = 10, soda_stock: int = 20) -> FakeUnitOfWork:
    return FakeUnitOfWork([
        Product(
            id=PIZZA,
            name="Pizza",
            price=Money.of("25.90"),
            stock=pizza_stock,
            options=[ProductOption("size", ("small", "medium", "large"))],
        ),
        Product(id=SODA, name="Soda", price=Money.of("4.50"), stock=soda_stock),
    ])


@contextmanager
def captured_warnings() -> Iterator[list[str]]:
    """Collect the text of every WARNING-or-above loguru record."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    try:
        yield messages
    finally:
        logger.remove(handler_id)
