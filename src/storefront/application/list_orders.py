"""Application service: List Orders use case (query).

Filtering by status and user, sorting, and page/limit pagination. A
limit of ``-1`` disables pagination and returns every matching order.
"""

from __future__ import annotations

import math

from storefront.application.dto import OrderPageDTO, order_to_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import DEFAULT_STATUS_VOCABULARY, OrderStatus, parse_status
from storefront.domain.model.value_objects import MAX_INT64, is_positive_int64
from storefront.domain.repository.order_repository import (
    NO_PAGINATION,
    SORTABLE_FIELDS,
    OrderFilters,
)
from storefront.domain.repository.unit_of_work import UnitOfWork

SORT_ORDERS = ("asc", "desc")


class ListOrdersHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        vocabulary: frozenset[OrderStatus] = DEFAULT_STATUS_VOCABULARY,
    ) -> None:
        self._uow = uow
        self._vocabulary = vocabulary

    def handle(
        self,
        status: str | None = None,
        user_id: int | None = None,
        limit: int = 10,
        page: int = 1,
        sort_by: str = "ordered_at",
        sort_order: str = "desc",
    ) -> OrderPageDTO:
        filters = self._build_filters(status, user_id, limit, page, sort_by, sort_order)

        with self._uow:
            orders, total = self._uow.orders.list(filters)

        if filters.paginated:
            total_pages = math.ceil(total / filters.limit)
        else:
            total_pages = 1 if total else 0

        return OrderPageDTO(
            data=[order_to_dto(order) for order in orders],
            total=total,
            limit=filters.limit,
            page=filters.page,
            total_pages=total_pages,
        )

    def _build_filters(
        self,
        status: str | None,
        user_id: int | None,
        limit: int,
        page: int,
        sort_by: str,
        sort_order: str,
    ) -> OrderFilters:
        no_pagination = isinstance(limit, int) and limit == NO_PAGINATION
        if not (no_pagination or is_positive_int64(limit)):
            raise ValidationError(f"Limit must be a positive integer or -1, got {limit!r}")
        if not is_positive_int64(page):
            raise ValidationError(f"Page must be a positive integer, got {page!r}")
        if not no_pagination and (page - 1) * limit > MAX_INT64:
            raise ValidationError(f"Page {page} is out of range for limit {limit}")
        if user_id is not None and not is_positive_int64(user_id):
            raise ValidationError(f"Invalid user reference {user_id!r}")
        if sort_by not in SORTABLE_FIELDS:
            raise ValidationError(
                f"Cannot sort by '{sort_by}' (allowed: {', '.join(SORTABLE_FIELDS)})"
            )
        if sort_order not in SORT_ORDERS:
            raise ValidationError(f"Sort order must be 'asc' or 'desc', got '{sort_order}'")

        return OrderFilters(
            status=parse_status(status, self._vocabulary) if status else None,
            user_id=user_id,
            limit=limit,
            page=page,
            sort_by=sort_by,
            sort_order=sort_order,
        )
