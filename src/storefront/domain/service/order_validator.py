"""Structural validation of an incoming order request.

Pure functions: no I/O and no side effects. Checks that depend on the
catalog (existence, stock, declared options) belong to the inventory
reconciler.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import is_positive_int64


@dataclass(frozen=True)
class RequestedItem:
    """A normalized order line as asked for by the customer."""

    product_id: int
    quantity: int
    options: dict[str, str] | None = None


def normalize_items(raw_items: Any) -> list[RequestedItem]:
    """Turn the raw request payload into a list of ``RequestedItem``.

    Accepts ``productId`` or ``product_id`` as the product reference.
    """
    if not isinstance(raw_items, list) or not raw_items:
        raise ValidationError("Order items must be a non-empty list")
    return [_normalize_item(index, raw) for index, raw in enumerate(raw_items)]


def _normalize_item(index: int, raw: Any) -> RequestedItem:
    if not isinstance(raw, Mapping):
        raise ValidationError(f"Item #{index + 1} must be an object")

    product_ref = raw.get("productId", raw.get("product_id"))
    if product_ref is None or product_ref == "":
        raise ValidationError(f"Item #{index + 1} is missing a product reference")
    product_id = _coerce_product_id(index, product_ref)

    quantity = raw.get("quantity")
    if not is_positive_int64(quantity):
        raise ValidationError(
            f"Item #{index + 1} (product {product_id}): quantity must be a "
            f"positive integer, got {quantity!r}"
        )

    return RequestedItem(
        product_id=product_id,
        quantity=quantity,
        options=_normalize_options(index, product_id, raw.get("options")),
    )


def _coerce_product_id(index: int, ref: Any) -> int:
    if isinstance(ref, str) and ref.strip().isdecimal():
        try:
            ref = int(ref.strip())
        except ValueError as exc:
            raise ValidationError(
                f"Item #{index + 1}: invalid product reference {ref!r}"
            ) from exc
    if not is_positive_int64(ref):
        raise ValidationError(f"Item #{index + 1}: invalid product reference {ref!r}")
    return ref


def _normalize_options(index: int, product_id: int, options: Any) -> dict[str, str] | None:
    if options is None:
        return None
    if not isinstance(options, Mapping):
        raise ValidationError(
            f"Item #{index + 1} (product {product_id}): options must be a "
            f"mapping of option title to value"
        )
    normalized: dict[str, str] = {}
    for title, value in options.items():
        if not isinstance(title, str) or not isinstance(value, str):
            raise ValidationError(
                f"Item #{index + 1} (product {product_id}): option "
                f"{title!r} must map a text title to a text value"
            )
        normalized[title] = value
    return normalized
