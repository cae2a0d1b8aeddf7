"""Application service: Add Product use case."""

from __future__ import annotations

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product, ProductOption
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        name: str,
        price: str,
        stock: int = 0,
        options: dict[str, list[str]] | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        product = Product.create(
            name=name,
            price=Money.of(price),
            stock=stock,
            options=[
                ProductOption(title=title, values=tuple(values))
                for title, values in (options or {}).items()
            ],
        )

        with self._uow:
            if self._uow.products.get_by_name(product.name) is not None:
                raise ValidationError(f"Product '{product.name}' already exists")
            self._uow.products.add(product)

        return product_to_dto(product)
