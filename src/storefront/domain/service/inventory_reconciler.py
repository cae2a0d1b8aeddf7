"""Domain service: Inventory Reconciler.

Coordinates stock adjustments across products for the order lifecycle.
It must run inside the caller's unit of work so that a later failure
rolls the adjustments back together with the order rows.

Reservation is two-phase (validate-then-mutate): every product is
checked before any stock moves, so a failing item never leaves other
products partially decremented.
"""

from __future__ import annotations

from loguru import logger

from storefront.domain.exceptions import (
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from storefront.domain.model.order import OrderItem
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.order_validator import RequestedItem


class InventoryReconciler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def check_and_reserve(self, items: list[RequestedItem]) -> list[OrderItem]:
        """Verify and decrement stock for every requested item.

        Returns priced order items carrying a snapshot of each product's
        current price.

        Phase 1 loads and validates: the product exists, the options are
        offered, and stock covers the summed quantity per product.
        Phase 2 mutates with a conditional atomic decrement per product.
        A decrement that loses a race with a concurrent order raises, and
        the unit of work rolls back.
        """
        # Phase 1: load all products and validate
        products: dict[int, Product] = {}
        required: dict[int, int] = {}

        for item in items:
            product = products.get(item.product_id)
            if product is None:
                product = self._product_repo.get_by_id(item.product_id)
                if product is None:
                    raise NotFoundError(f"Product {item.product_id} not found")
                products[item.product_id] = product
            self.validate_options(product, item.options)
            required[product.id] = required.get(product.id, 0) + item.quantity

        for product_id, qty in required.items():
            product = products[product_id]
            if product.stock < qty:
                raise InsufficientStockError(product.id, product.name, qty, product.stock)

        # Phase 2: mutate
        for product_id, qty in required.items():
            if not self._product_repo.decrement_stock(product_id, qty):
                current = self._product_repo.get_by_id(product_id)
                available = current.stock if current is not None else 0
                raise InsufficientStockError(
                    product_id, products[product_id].name, qty, available
                )
            logger.debug("Reserved {} unit(s) of product {}", qty, product_id)

        return [
            OrderItem(
                product_id=item.product_id,
                product_name=products[item.product_id].name,
                quantity=Quantity(item.quantity),
                unit_price=products[item.product_id].price,  # <-- price snapshot
                options=item.options,
            )
            for item in items
        ]

    def restore(self, items: list[OrderItem]) -> list[int]:
        """Give each item's quantity back to its product's stock.

        Best-effort for products that no longer exist: they are logged and
        skipped, the rest are still restored. Returns the skipped product IDs.
        """
        skipped: list[int] = []
        for item in items:
            qty = item.quantity.value
            if self._product_repo.increment_stock(item.product_id, qty):
                logger.debug("Restored {} unit(s) of product {}", qty, item.product_id)
            else:
                logger.warning(
                    "Cannot restore {} unit(s) of product {}: product no longer exists",
                    qty,
                    item.product_id,
                )
                skipped.append(item.product_id)
        return skipped

    @staticmethod
    def validate_options(product: Product, options: dict[str, str] | None) -> None:
        """Check every selected option against the product's declared options."""
        if not options:
            return
        for title, value in options.items():
            option = product.find_option(title)
            if option is None:
                raise ValidationError(
                    f"Product '{product.name}' has no option '{title}'"
                )
            if not option.permits(value):
                raise ValidationError(
                    f"Invalid value '{value}' for option '{title}' of product "
                    f"'{product.name}' (allowed: {', '.join(option.values)})"
                )
