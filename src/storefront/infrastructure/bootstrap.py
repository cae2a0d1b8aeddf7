"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.application.add_product import AddProductHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.delete_order import DeleteOrderHandler
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.infrastructure.persistence.sqlite_unit_of_work import SqliteUnitOfWork
from storefront.infrastructure.settings import Settings


def unit_of_work(settings: Settings) -> SqliteUnitOfWork:
    return SqliteUnitOfWork(settings.db_path, timeout=settings.db_timeout)


def create_order_handler(settings: Settings) -> CreateOrderHandler:
    return CreateOrderHandler(unit_of_work(settings))


def show_order_handler(settings: Settings) -> ShowOrderHandler:
    return ShowOrderHandler(unit_of_work(settings))


def list_orders_handler(settings: Settings) -> ListOrdersHandler:
    return ListOrdersHandler(unit_of_work(settings), settings.order_statuses)


def update_order_status_handler(settings: Settings) -> UpdateOrderStatusHandler:
    return UpdateOrderStatusHandler(unit_of_work(settings), settings.order_statuses)


def delete_order_handler(settings: Settings) -> DeleteOrderHandler:
    return DeleteOrderHandler(unit_of_work(settings))


def add_product_handler(settings: Settings) -> AddProductHandler:
    return AddProductHandler(unit_of_work(settings))
