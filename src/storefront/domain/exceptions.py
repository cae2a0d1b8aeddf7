"""Domain-level exceptions.

Every business rule violation is a subclass of DomainException so the
request layer can catch them uniformly and map each kind to a response.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed input: item list, quantities, option selections."""


class NotFoundError(DomainException):
    """A requested order or product does not exist."""


class InsufficientStockError(DomainException):
    """A product does not have enough stock for the requested quantity."""

    def __init__(
        self,
        product_id: int,
        product_name: str,
        requested: int,
        available: int,
    ) -> None:
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product '{product_name}' (id {product_id}): "
            f"need {requested}, have {available}"
        )


class InvalidStatusError(DomainException):
    """Status value outside the vocabulary, or an illegal transition."""

    def __init__(self, status: str, reason: str | None = None) -> None:
        self.status = status
        msg = f"Invalid status '{status}'"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class ConflictError(DomainException):
    """The entity's current state forbids the requested operation."""
