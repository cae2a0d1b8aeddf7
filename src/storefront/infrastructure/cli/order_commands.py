"""CLI commands for the Order aggregate."""

from __future__ import annotations

import json

import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure import bootstrap
from storefront.infrastructure.cli.envelope import DomainErrorResponse, echo_success
from storefront.infrastructure.settings import Settings


def _parse_items(raw: str) -> object:
    """Parse the ``--items`` JSON array, e.g. '[{"productId": 1, "quantity": 2}]'."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Items must be a JSON array: {exc.msg}") from None


@click.command("create")
@click.option("--user", "user_id", required=True, type=int, help="Owning user ID.")
@click.option("--items", required=True, help="JSON array of {productId, quantity, options}.")
@click.pass_obj
def order_create(settings: Settings, user_id: int, items: str) -> None:
    """Place a new order (decrements stock)."""
    handler = bootstrap.create_order_handler(settings)

    try:
        dto = handler.handle(user_id=user_id, raw_items=_parse_items(items))
    except DomainException as exc:
        raise DomainErrorResponse(exc)

    echo_success(dto.to_dict())


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(settings: Settings, order_id: int) -> None:
    """Show an order with its items."""
    handler = bootstrap.show_order_handler(settings)

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise DomainErrorResponse(exc)

    echo_success(dto.to_dict())


@click.command("list")
@click.option("--status", default=None, help="Only orders in this status.")
@click.option("--user", "user_id", default=None, type=int, help="Only orders of this user.")
@click.option("--limit", default=10, show_default=True, type=int, help="Page size, -1 for all.")
@click.option("--page", default=1, show_default=True, type=int, help="Page number.")
@click.option("--sort-by", default="ordered_at", show_default=True, help="Sort field.")
@click.option(
    "--sort-order",
    default="desc",
    show_default=True,
    type=click.Choice(["asc", "desc"]),
    help="Sort direction.",
)
@click.pass_obj
def order_list(
    settings: Settings,
    status: str | None,
    user_id: int | None,
    limit: int,
    page: int,
    sort_by: str,
    sort_order: str,
) -> None:
    """List orders with filters and pagination."""
    handler = bootstrap.list_orders_handler(settings)

    try:
        page_dto = handler.handle(
            status=status,
            user_id=user_id,
            limit=limit,
            page=page,
            sort_by=sort_by,
            sort_order=sort_order,
        )
    except DomainException as exc:
        raise DomainErrorResponse(exc)

    echo_success(page_dto.to_dict())


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option("--status", "new_status", required=True, help="New status.")
@click.pass_obj
def order_status(settings: Settings, order_id: int, new_status: str) -> None:
    """Change an order's status (cancelling restores stock)."""
    handler = bootstrap.update_order_status_handler(settings)

    try:
        dto = handler.handle(order_id, new_status)
    except DomainException as exc:
        raise DomainErrorResponse(exc)

    echo_success(dto.to_dict())


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
@click.pass_obj
def order_delete(settings: Settings, order_id: int) -> None:
    """Delete a pending order (restores stock)."""
    handler = bootstrap.delete_order_handler(settings)

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise DomainErrorResponse(exc)

    echo_success({"id": order_id, "deleted": True})
