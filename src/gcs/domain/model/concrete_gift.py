"""ConcreteGift entity: a purchasable product behind a suggestion."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from gcs.domain.exceptions import PriceOutOfRangeError, ValidationError
from gcs.domain.model.gift_suggestion import GiftSuggestion, require_text
from gcs.domain.model.price_range import ZERO

MAX_NAME_LENGTH = 150
MAX_DESCRIPTION_LENGTH = 1000
MAX_VENDOR_LENGTH = 100
MAX_URL_LENGTH = 500
MAX_SKU_LENGTH = 50
URL_SCHEMES = ("http://", "https://")


@dataclass
class ConcreteGift:
    """A vendor-specific product tied to exactly one GiftSuggestion.

    The parent is referenced by id only; ``exact_price`` must stay inside
    the parent's band, which ``check_within(suggestion)`` verifies.
    """

    id: str | None
    name: str
    description: str | None
    exact_price: Decimal
    vendor_name: str
    gift_suggestion_id: str | None
    product_url: str | None = None
    product_sku: str | None = None
    available: bool = True
    created_at: datetime | None = None
    last_modified_at: datetime | None = None

    def validate(self) -> None:
        """Field-level rules; does not look at the parent suggestion."""
        self.name = require_text(self.name, "name", "Name", MAX_NAME_LENGTH)
        self.description = require_text(
            self.description, "description", "Description", MAX_DESCRIPTION_LENGTH
        )
        if self.exact_price is None:
            raise ValidationError(
                "Exact price is required", field="exact_price", rule="required"
            )
        if self.exact_price <= ZERO:
            raise ValidationError(
                "Price must be positive", field="exact_price", rule="positive"
            )
        self.vendor_name = require_text(
            self.vendor_name, "vendor_name", "Vendor name", MAX_VENDOR_LENGTH
        )
        self.product_url = self._optional(self.product_url)
        if self.product_url is not None:
            if not self.product_url.startswith(URL_SCHEMES):
                raise ValidationError(
                    "Product URL must start with http:// or https://",
                    field="product_url",
                    rule="url",
                )
            if len(self.product_url) > MAX_URL_LENGTH:
                raise ValidationError(
                    f"Product URL must not exceed {MAX_URL_LENGTH} characters",
                    field="product_url",
                    rule="max_length",
                )
        self.product_sku = self._optional(self.product_sku)
        if self.product_sku is not None and len(self.product_sku) > MAX_SKU_LENGTH:
            raise ValidationError(
                f"Product SKU must not exceed {MAX_SKU_LENGTH} characters",
                field="product_sku",
                rule="max_length",
            )
        if self.available is None:
            self.available = True
        if self.gift_suggestion_id is None:
            raise ValidationError(
                "Gift suggestion is required",
                field="gift_suggestion_id",
                rule="required",
            )

    def check_within(self, suggestion: GiftSuggestion) -> None:
        """Raise PriceOutOfRangeError unless the price sits in the band."""
        if self.exact_price < suggestion.min_price:
            raise PriceOutOfRangeError(self.exact_price, "min_price", suggestion.min_price)
        if self.exact_price > suggestion.max_price:
            raise PriceOutOfRangeError(self.exact_price, "max_price", suggestion.max_price)

    def replace_with(self, other: ConcreteGift) -> None:
        self.name = other.name
        self.description = other.description
        self.exact_price = other.exact_price
        self.vendor_name = other.vendor_name
        self.product_url = other.product_url
        self.product_sku = other.product_sku
        self.available = other.available
        self.gift_suggestion_id = other.gift_suggestion_id

    @staticmethod
    def _optional(value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()
