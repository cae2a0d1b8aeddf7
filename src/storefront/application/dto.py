"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the request layer and the application layer
without exposing domain internals. Money is rendered as a two-decimal
string and item options are always the deserialized mapping.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from storefront.domain.model.order import Order
from storefront.domain.model.product import Product


@dataclass(frozen=True)
class ProductSummaryDTO:
    """Current catalog state of an ordered product."""

    id: int
    name: str
    price: str
    stock: int


@dataclass(frozen=True)
class OrderItemDTO:
    id: int | None
    product_id: int
    product_name: str | None
    quantity: int
    unit_price: str
    line_total: str
    options: dict[str, str] | None
    product: ProductSummaryDTO | None = None


@dataclass(frozen=True)
class OrderDTO:
    id: int
    user_id: int
    status: str
    total: str
    ordered_at: str
    items: list[OrderItemDTO]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class OrderPageDTO:
    """One page of orders plus the pagination bookkeeping."""

    data: list[OrderDTO]
    total: int
    limit: int
    page: int
    total_pages: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ProductOptionDTO:
    title: str
    values: list[str]


@dataclass(frozen=True)
class ProductDTO:
    id: int
    name: str
    price: str
    stock: int
    options: list[ProductOptionDTO]

    def to_dict(self) -> dict:
        return asdict(self)


# --- Mapping ------------------------------------------------------------------


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        status=order.status.value,
        total=str(order.total),
        ordered_at=order.ordered_at.isoformat(),
        items=[
            OrderItemDTO(
                id=item.id,
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
                options=dict(item.options) if item.options is not None else None,
                product=_product_summary(item.product),
            )
            for item in order.items
        ],
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        price=str(product.price),
        stock=product.stock,
        options=[
            ProductOptionDTO(title=opt.title, values=list(opt.values))
            for opt in product.options
        ],
    )


def _product_summary(product: Product | None) -> ProductSummaryDTO | None:
    if product is None:
        return None
    return ProductSummaryDTO(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        price=str(product.price),
        stock=product.stock,
    )
