"""Application service: Show Order use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import NotFoundError
from storefront.domain.model.value_objects import is_positive_int64
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDTO:
        if not is_positive_int64(order_id):
            raise NotFoundError(f"Order #{order_id} not found")

        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order #{order_id} not found")
        return order_to_dto(order)
