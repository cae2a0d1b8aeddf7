import click

from storefront.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_list,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.product_commands import product_add, product_list
from storefront.infrastructure.logger import setup_logger
from storefront.infrastructure.settings import Settings


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Storefront: orders and inventory"""
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise click.ClickException(str(exc))
    setup_logger(settings.log_level, settings.log_file)
    ctx.obj = settings


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_list)
