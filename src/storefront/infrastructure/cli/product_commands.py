"""CLI commands for seeding and inspecting the product catalog."""

from __future__ import annotations

import click

from storefront.application.dto import product_to_dto
from storefront.domain.exceptions import DomainException
from storefront.infrastructure import bootstrap
from storefront.infrastructure.cli.envelope import DomainErrorResponse, echo_success
from storefront.infrastructure.settings import Settings


def _parse_options(raw: tuple[str, ...]) -> dict[str, list[str]]:
    """Parse repeated 'size=small|large' values into {title: [values]}."""
    options: dict[str, list[str]] = {}
    for entry in raw:
        if "=" not in entry:
            raise click.BadParameter(
                f"Invalid option '{entry}'. Expected 'Title=value1|value2'."
            )
        title, values = entry.split("=", 1)
        options[title.strip()] = [v.strip() for v in values.split("|") if v.strip()]
    return options


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 25.90).")
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
@click.option("--option", "option_specs", multiple=True, help="Option as 'Title=v1|v2'.")
@click.pass_obj
def product_add(
    settings: Settings, name: str, price: str, stock: int, option_specs: tuple[str, ...]
) -> None:
    """Add a new product to the catalog."""
    handler = bootstrap.add_product_handler(settings)

    try:
        dto = handler.handle(
            name=name, price=price, stock=stock, options=_parse_options(option_specs)
        )
    except DomainException as exc:
        raise DomainErrorResponse(exc)

    echo_success(dto.to_dict())


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products in the catalog."""
    uow = bootstrap.unit_of_work(settings)
    with uow:
        products = uow.products.list_all()

    echo_success([product_to_dto(p).to_dict() for p in products])
