"""Integration tests for the CreateOrder use case.

Uses the in-memory fake unit of work, no database.
"""

import pytest

from storefront.application.create_order import CreateOrderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import InsufficientStockError, NotFoundError, ValidationError
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.value_objects import Money
from tests.application.helpers import PIZZA, SODA, make_uow


class TestCreateOrderHappyPath:

    def test_pizza_scenario(self):
        uow = make_uow(pizza_stock=10)
        dto = CreateOrderHandler(uow).handle(
            1, [{"productId": PIZZA, "quantity": 2, "options": {"size": "large"}}]
        )

        assert dto.total == "51.80"
        assert dto.status == "pending"
        assert dto.user_id == 1
        assert dto.items[0].unit_price == "25.90"
        assert dto.items[0].options == {"size": "large"}
        assert uow.products.stock_of(PIZZA) == 8

    def test_total_and_stock_for_several_products(self):
        uow = make_uow(pizza_stock=10, soda_stock=20)
        dto = CreateOrderHandler(uow).handle(1, [
            {"productId": PIZZA, "quantity": 3},
            {"productId": SODA, "quantity": 4},
        ])

        assert dto.total == "95.70"  # 3 * 25.90 + 4 * 4.50
        assert uow.products.stock_of(PIZZA) == 7
        assert uow.products.stock_of(SODA) == 16

    def test_persists_order_in_one_commit(self):
        uow = make_uow()
        dto = CreateOrderHandler(uow).handle(1, [{"productId": SODA, "quantity": 1}])

        assert uow.commits == 1
        saved = uow.orders.get_by_id(dto.id)
        assert saved.status == OrderStatus.PENDING
        assert saved.items[0].quantity.value == 1

    def test_sequential_ids(self):
        uow = make_uow()
        handler = CreateOrderHandler(uow)
        first = handler.handle(1, [{"productId": SODA, "quantity": 1}])
        second = handler.handle(2, [{"productId": SODA, "quantity": 1}])
        assert second.id == first.id + 1


class TestCreateOrderPriceLock:

    def test_price_snapshot_at_creation(self):
        uow = make_uow()
        dto = CreateOrderHandler(uow).handle(1, [{"productId": PIZZA, "quantity": 1}])

        # Change the catalog price afterwards
        uow.products._store[PIZZA].price = Money.of("99.99")

        shown = ShowOrderHandler(uow).handle(dto.id)
        assert shown.total == "25.90"
        assert shown.items[0].unit_price == "25.90"


class TestCreateOrderFailures:

    def test_insufficient_stock_leaves_stock_unchanged(self):
        uow = make_uow(pizza_stock=1)
        with pytest.raises(InsufficientStockError, match="Pizza"):
            CreateOrderHandler(uow).handle(1, [{"productId": PIZZA, "quantity": 2}])

        assert uow.products.stock_of(PIZZA) == 1
        assert uow.orders._store == {}

    def test_no_partial_decrement_across_products(self):
        uow = make_uow(pizza_stock=10, soda_stock=1)
        with pytest.raises(InsufficientStockError, match="Soda"):
            CreateOrderHandler(uow).handle(1, [
                {"productId": PIZZA, "quantity": 2},
                {"productId": SODA, "quantity": 2},
            ])

        assert uow.products.stock_of(PIZZA) == 10
        assert uow.products.stock_of(SODA) == 1

    def test_unknown_product(self):
        uow = make_uow()
        with pytest.raises(NotFoundError, match="Product 99 not found"):
            CreateOrderHandler(uow).handle(1, [{"productId": 99, "quantity": 1}])

    def test_invalid_items_rejected_before_opening_transaction(self):
        uow = make_uow()
        with pytest.raises(ValidationError, match="non-empty list"):
            CreateOrderHandler(uow).handle(1, [])
        assert uow.commits == 0
        assert uow.rollbacks == 0

    def test_invalid_user_rejected(self):
        with pytest.raises(ValidationError, match="Invalid user reference"):
            CreateOrderHandler(make_uow()).handle(0, [{"productId": SODA, "quantity": 1}])

    def test_user_beyond_storage_range_rejected(self):
        with pytest.raises(ValidationError, match="Invalid user reference"):
            CreateOrderHandler(make_uow()).handle(10**20, [{"productId": SODA, "quantity": 1}])

    def test_persistence_failure_rolls_back_stock(self):
        uow = make_uow(pizza_stock=10)
        uow.orders.fail_on_add = RuntimeError("disk full")

        with pytest.raises(RuntimeError, match="disk full"):
            CreateOrderHandler(uow).handle(1, [{"productId": PIZZA, "quantity": 2}])

        assert uow.rollbacks == 1
        assert uow.products.stock_of(PIZZA) == 10
