"""Data Transfer Objects: plain input containers for create/update.

Callers (CLI, an API layer) fill these with raw values; ``to_domain()``
coerces prices and enum names and hands back an unsaved domain object.
Updates replace every field, so each DTO carries the full record.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from gcs.domain.model.categories import (
    AgeGroup,
    Gender,
    Interest,
    Occasion,
    PersonalityType,
    Relationship,
)
from gcs.domain.model.concrete_gift import ConcreteGift
from gcs.domain.model.gift_suggestion import GiftSuggestion
from gcs.domain.model.price_range import to_price


def _parse(enum_type, value, field):
    return None if value is None else enum_type.parse(value, field=field)


@dataclass(frozen=True)
class GiftSuggestionData:

    name: str
    description: str
    min_price: str | int | float | Decimal | None
    max_price: str | int | float | Decimal | None
    age_group: AgeGroup | str | None
    gender: Gender | str | None
    interest: Interest | str | None
    occasion: Occasion | str | None
    relationship: Relationship | str | None
    personality_type: PersonalityType | str | None
    id: str | None = None

    def coerced_fields(self) -> dict:
        """Coerced constructor arguments, without the id."""
        return dict(
            name=self.name,
            description=self.description,
            min_price=to_price(self.min_price, "min_price"),
            max_price=to_price(self.max_price, "max_price"),
            age_group=_parse(AgeGroup, self.age_group, "age_group"),
            gender=_parse(Gender, self.gender, "gender"),
            interest=_parse(Interest, self.interest, "interest"),
            occasion=_parse(Occasion, self.occasion, "occasion"),
            relationship=_parse(Relationship, self.relationship, "relationship"),
            personality_type=_parse(
                PersonalityType, self.personality_type, "personality_type"
            ),
        )

    def to_domain(self) -> GiftSuggestion:
        return GiftSuggestion(id=self.id, **self.coerced_fields())


@dataclass(frozen=True)
class ConcreteGiftData:

    name: str
    description: str | None
    exact_price: str | int | float | Decimal | None
    vendor_name: str
    gift_suggestion_id: str | None
    product_url: str | None = None
    product_sku: str | None = None
    available: bool = True
    id: str | None = None

    def to_domain(self) -> ConcreteGift:
        return ConcreteGift(
            id=self.id,
            name=self.name,
            description=self.description,
            exact_price=to_price(self.exact_price, "exact_price"),
            vendor_name=self.vendor_name,
            gift_suggestion_id=self.gift_suggestion_id,
            product_url=self.product_url,
            product_sku=self.product_sku,
            available=self.available,
        )
