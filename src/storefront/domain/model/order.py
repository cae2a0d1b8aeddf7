"""Order aggregate, the core of the domain.

The Order owns its items and the status state machine. Stock effects
of a transition are coordinated by the application handlers through
the inventory reconciler.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ConflictError, InvalidStatusError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

DEFAULT_STATUS_VOCABULARY = frozenset(
    {
        OrderStatus.PENDING,
        OrderStatus.CONFIRMED,
        OrderStatus.PREPARING,
        OrderStatus.READY,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    }
)


def parse_status(
    value: str,
    vocabulary: frozenset[OrderStatus] = DEFAULT_STATUS_VOCABULARY,
) -> OrderStatus:
    """Resolve a raw status string against the deployment's vocabulary."""
    try:
        status = OrderStatus(value)
    except ValueError:
        raise InvalidStatusError(str(value), "unknown status") from None
    if status not in vocabulary:
        raise InvalidStatusError(value, "not enabled for this deployment")
    return status


@dataclass
class OrderItem:
    """One product line of an order.

    ``unit_price`` is a snapshot taken when the order was placed and is
    unaffected by later catalog price changes. ``product`` is the catalog
    entry as it is now, attached on read; None once the product is gone.
    """

    product_id: int
    quantity: Quantity
    unit_price: Money
    options: dict[str, str] | None = None
    product_name: str | None = None
    id: int | None = None
    product: Product | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.place()`` for new orders. ``__init__`` stays simple so
    the repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    user_id: int
    items: list[OrderItem]
    status: OrderStatus = OrderStatus.PENDING
    ordered_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def place(user_id: int, items: list[OrderItem]) -> Order:
        """Create a new pending order."""
        if not items:
            raise ValidationError("Order must contain at least one item")
        return Order(id=None, user_id=user_id, items=list(items))

    # --- State transitions ----------------------------------------------------

    def transition_to(self, new_status: OrderStatus) -> bool:
        """Move to *new_status*.

        Returns True when this transition cancels the order, in which case
        the caller must restore stock within the same unit of work.
        """
        if self.status.is_terminal:
            raise InvalidStatusError(
                new_status.value,
                f"order #{self.id} is already {self.status.value}",
            )
        cancelling = new_status is OrderStatus.CANCELLED
        self.status = new_status
        return cancelling

    def ensure_deletable(self) -> None:
        if self.status is not OrderStatus.PENDING:
            raise ConflictError(
                f"Only pending orders may be deleted; order #{self.id} "
                f"is {self.status.value}"
            )

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result
