"""Price values and the price-range invariant.

Prices are Decimals throughout to avoid floating-point rounding errors.
The range checker is a pure function returning a structured violation so
callers can attach the failure to the right field.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

from gcs.domain.exceptions import ValidationError

ZERO = Decimal("0")


def to_price(
    value: str | float | int | Decimal | None,
    field: str = "price",
) -> Decimal | None:
    """Coerce a raw amount to Decimal; ``None`` passes through."""
    if value is None:
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(
            f"Invalid amount for {field}: {value!r}", field=field, rule="decimal"
        ) from exc
    # NaN and Infinity parse but cannot be ordered or priced.
    if not amount.is_finite():
        raise ValidationError(
            f"Invalid amount for {field}: {value!r}", field=field, rule="decimal"
        )
    return amount


class PriceRangeViolation(Enum):
    """Why a ``[min, max]`` pair is not a valid price band."""

    INVALID_RANGE = "invalid_range"
    NON_POSITIVE_BOUND = "non_positive_bound"
    INVERTED_RANGE = "inverted_range"


@dataclass(frozen=True)
class PriceRangeFailure:
    violation: PriceRangeViolation
    field: str
    message: str

    def to_error(self) -> ValidationError:
        return ValidationError(self.message, field=self.field, rule=self.violation.value)


def check_price_range(
    min_price: Decimal | None, max_price: Decimal | None
) -> PriceRangeFailure | None:
    """Return the first rule ``[min_price, max_price]`` breaks, or None."""
    if min_price is None:
        return PriceRangeFailure(
            PriceRangeViolation.INVALID_RANGE, "min_price", "Minimum price is required"
        )
    if max_price is None:
        return PriceRangeFailure(
            PriceRangeViolation.INVALID_RANGE, "max_price", "Maximum price is required"
        )
    if min_price <= ZERO:
        return PriceRangeFailure(
            PriceRangeViolation.NON_POSITIVE_BOUND,
            "min_price",
            "Minimum price must be positive",
        )
    if max_price <= ZERO:
        return PriceRangeFailure(
            PriceRangeViolation.NON_POSITIVE_BOUND,
            "max_price",
            "Maximum price must be positive",
        )
    if min_price > max_price:
        return PriceRangeFailure(
            PriceRangeViolation.INVERTED_RANGE,
            "min_price",
            "Minimum price cannot be greater than maximum price",
        )
    return None


def validate_price_range(min_price: Decimal | None, max_price: Decimal | None) -> None:
    failure = check_price_range(min_price, max_price)
    if failure is not None:
        raise failure.to_error()


@dataclass(frozen=True)
class PriceRange:
    """A validated, inclusive price band."""

    min_price: Decimal
    max_price: Decimal

    def __post_init__(self) -> None:
        validate_price_range(self.min_price, self.max_price)

    def overlaps(self, low: Decimal, high: Decimal) -> bool:
        """True if this band intersects ``[low, high]``."""
        return self.max_price >= low and self.min_price <= high

    def contains(self, price: Decimal) -> bool:
        """True if a single price lies inside the band, bounds included."""
        return self.min_price <= price <= self.max_price

    def __str__(self) -> str:
        return f"${self.min_price:.2f} - ${self.max_price:.2f}"

    @staticmethod
    def of(
        min_price: str | float | int | Decimal,
        max_price: str | float | int | Decimal,
    ) -> PriceRange:
        return PriceRange(to_price(min_price, "min_price"), to_price(max_price, "max_price"))
