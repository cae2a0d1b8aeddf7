"""Application service: Delete Order use case.

Only pending orders may be deleted. Items, order row and stock
restoration share one unit of work.
"""

from __future__ import annotations

from loguru import logger

from storefront.domain.exceptions import NotFoundError
from storefront.domain.model.value_objects import is_positive_int64
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.inventory_reconciler import InventoryReconciler


class DeleteOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> None:
        if not is_positive_int64(order_id):
            raise NotFoundError(f"Order #{order_id} not found")

        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise NotFoundError(f"Order #{order_id} not found")

            order.ensure_deletable()
            self._uow.orders.delete(order_id)
            skipped = InventoryReconciler(self._uow.products).restore(order.items)
            if skipped:
                logger.warning(
                    "Order #{} deleted, stock not restored for missing product(s) {}",
                    order_id,
                    skipped,
                )

        logger.info("Order #{} deleted, stock restored", order_id)
