"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations

from decimal import Decimal


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A field rule or invariant was violated.

    ``field`` names the offending attribute (e.g. ``"min_price"``) and
    ``rule`` a short machine-readable rule name, when known.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        rule: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.rule = rule


class PriceOutOfRangeError(ValidationError):
    """A concrete gift price falls outside its suggestion's band."""

    def __init__(self, price: Decimal, bound: str, bound_value: Decimal) -> None:
        direction = "below minimum" if bound == "min_price" else "above maximum"
        super().__init__(
            f"Concrete gift price ({price}) is {direction} price "
            f"({bound_value}) for gift suggestion",
            field="exact_price",
            rule="price_out_of_range",
        )
        self.price = price
        self.bound = bound
        self.bound_value = bound_value


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} not found with ID: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class InvalidArgumentError(DomainException):
    """A required argument was missing or malformed at the API boundary."""
