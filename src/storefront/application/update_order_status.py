"""Application service: Update Order Status use case.

Cancelling an order gives its stock back in the same unit of work that
records the new status. Any other transition only rewrites the field.
"""

from __future__ import annotations

from loguru import logger

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import NotFoundError
from storefront.domain.model.order import DEFAULT_STATUS_VOCABULARY, OrderStatus, parse_status
from storefront.domain.model.value_objects import is_positive_int64
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.inventory_reconciler import InventoryReconciler


class UpdateOrderStatusHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        vocabulary: frozenset[OrderStatus] = DEFAULT_STATUS_VOCABULARY,
    ) -> None:
        self._uow = uow
        self._vocabulary = vocabulary

    def handle(self, order_id: int, new_status: str) -> OrderDTO:
        status = parse_status(new_status, self._vocabulary)

        if not is_positive_int64(order_id):
            raise NotFoundError(f"Order #{order_id} not found")

        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise NotFoundError(f"Order #{order_id} not found")

            previous = order.status
            if order.transition_to(status):
                reconciler = InventoryReconciler(self._uow.products)
                skipped = reconciler.restore(order.items)
                if skipped:
                    logger.warning(
                        "Order #{} cancelled, stock not restored for missing product(s) {}",
                        order_id,
                        skipped,
                    )
            self._uow.orders.update_status(order)
            order = self._uow.orders.get_by_id(order_id)

        logger.info(
            "Order #{} status changed {} -> {}", order_id, previous.value, status.value
        )
        return order_to_dto(order)
