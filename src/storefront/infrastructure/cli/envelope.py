"""Response envelopes for the request layer.

The core raises typed domain errors and carries no transport semantics;
this module is where each error kind gets its HTTP-style status code.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

import click

from storefront.domain.exceptions import (
    ConflictError,
    DomainException,
    InsufficientStockError,
    InvalidStatusError,
    NotFoundError,
    ValidationError,
)

_STATUS_CODES: tuple[tuple[type[DomainException], int], ...] = (
    (NotFoundError, 404),
    (ConflictError, 409),
    (InsufficientStockError, 400),
    (InvalidStatusError, 400),
    (ValidationError, 400),
)


def status_code_for(exc: DomainException) -> int:
    for kind, code in _STATUS_CODES:
        if isinstance(exc, kind):
            return code
    return 400


def success(data: Any) -> dict:
    return {"status": "success", "data": data, "timestamp": _now()}


def error(exc: DomainException) -> dict:
    body: dict[str, Any] = {
        "status": "error",
        "message": str(exc),
        "code": status_code_for(exc),
        "timestamp": _now(),
    }
    if isinstance(exc, InsufficientStockError):
        body["details"] = {
            "product_id": exc.product_id,
            "product_name": exc.product_name,
            "requested": exc.requested,
            "available": exc.available,
        }
    return body


class DomainErrorResponse(click.ClickException):
    """Renders a domain error as a JSON error envelope on stdout."""

    def __init__(self, exc: DomainException) -> None:
        super().__init__(str(exc))
        self.body = error(exc)

    def show(self, file=None) -> None:
        click.echo(json.dumps(self.body, indent=2))


def echo_success(data: Any) -> None:
    click.echo(json.dumps(success(data), indent=2))


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()
