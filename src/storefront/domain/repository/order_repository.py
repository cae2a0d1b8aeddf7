"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.domain.model.order import Order, OrderStatus

NO_PAGINATION = -1
SORTABLE_FIELDS = ("id", "ordered_at", "total", "status")


@dataclass(frozen=True)
class OrderFilters:
    """Query for ``OrderRepository.list``; already validated by the caller."""

    status: OrderStatus | None = None
    user_id: int | None = None
    limit: int = 10
    page: int = 1
    sort_by: str = "ordered_at"
    sort_order: str = "desc"

    @property
    def paginated(self) -> bool:
        return self.limit != NO_PAGINATION

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order with its items, or None if not found."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order with its items, assigning IDs."""

    @abstractmethod
    def update_status(self, order: Order) -> None:
        """Persist the order's current status."""

    @abstractmethod
    def delete(self, order_id: int) -> None:
        """Delete an order and all of its items. Products are untouched."""

    @abstractmethod
    def list(self, filters: OrderFilters) -> tuple[list[Order], int]:
        """Return one page of matching orders and the total match count."""
