"""Application service: Create Order use case.

Validates the request, reserves stock and persists the order with its
items inside one unit of work: if persisting fails after stock was
decremented, the decrement is rolled back with it.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import Order
from storefront.domain.model.value_objects import is_positive_int64
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.inventory_reconciler import InventoryReconciler
from storefront.domain.service.order_validator import normalize_items


class CreateOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int, raw_items: Any) -> OrderDTO:
        """Place a new pending order for *user_id*.

        Steps:
        1. Normalize the raw items (fails before touching storage).
        2. Check and decrement stock, snapshotting unit prices.
        3. Persist the order and its items.
        """
        if not is_positive_int64(user_id):
            raise ValidationError(f"Invalid user reference {user_id!r}")

        requested = normalize_items(raw_items)

        with self._uow:
            reconciler = InventoryReconciler(self._uow.products)
            items = reconciler.check_and_reserve(requested)
            order = Order.place(user_id=user_id, items=items)
            self._uow.orders.add(order)
            order = self._uow.orders.get_by_id(order.id)

        logger.info(
            "Order #{} created for user {} ({} item(s), total {})",
            order.id,
            user_id,
            len(order.items),
            order.total,
        )
        return order_to_dto(order)
