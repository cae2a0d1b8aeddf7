"""Product aggregate.

Products live independently of orders. The order workflow only reads
them, except for the stock counter which it adjusts through the
repository's atomic primitives.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import MAX_INT64, Money


@dataclass(frozen=True)
class ProductOption:
    """A selectable option such as size or colour, with its permitted values."""

    title: str
    values: tuple[str, ...]

    def permits(self, value: str) -> bool:
        return value in self.values


@dataclass
class Product:
    """A product in the catalog.

    ``stock`` reflects the value read at load time; concurrent orders
    may have moved it since, so it must never be written back as-is.
    """

    id: int | None
    name: str
    price: Money
    stock: int = 0
    options: list[ProductOption] = field(default_factory=list)

    @staticmethod
    def create(
        name: str,
        price: Money,
        stock: int = 0,
        options: list[ProductOption] | None = None,
    ) -> Product:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if isinstance(stock, bool) or not isinstance(stock, int) or not 0 <= stock <= MAX_INT64:
            raise ValidationError(f"Stock must be a non-negative integer, got {stock!r}")
        titles = [opt.title for opt in options or []]
        if len(titles) != len(set(titles)):
            raise ValidationError(f"Duplicate option titles for product '{name}'")
        for opt in options or []:
            if not opt.title or not opt.values:
                raise ValidationError(
                    f"Option '{opt.title}' must have a title and at least one value"
                )
        return Product(
            id=None,
            name=name.strip(),
            price=price,
            stock=stock,
            options=list(options or []),
        )

    def find_option(self, title: str) -> ProductOption | None:
        for opt in self.options:
            if opt.title == title:
                return opt
        return None
