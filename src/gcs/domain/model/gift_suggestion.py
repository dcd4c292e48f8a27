"""GiftSuggestion aggregate.

A suggestion is an abstract gift idea: a price band plus six category
tags.  It owns its concrete gifts, but the ownership lives in the store's
child index rather than in a list on this object.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from gcs.domain.exceptions import ValidationError
from gcs.domain.model.categories import (
    AgeGroup,
    Gender,
    Interest,
    Occasion,
    PersonalityType,
    Relationship,
)
from gcs.domain.model.price_range import PriceRange, validate_price_range

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500

CATEGORY_FIELDS: dict[str, type] = {
    "age_group": AgeGroup,
    "gender": Gender,
    "interest": Interest,
    "occasion": Occasion,
    "relationship": Relationship,
    "personality_type": PersonalityType,
}


def require_text(value: str | None, field: str, label: str, max_length: int) -> str:
    """Strip ``value`` and enforce non-blank plus a length cap."""
    if value is None or not value.strip():
        raise ValidationError(f"{label} is required", field=field, rule="required")
    value = value.strip()
    if len(value) > max_length:
        raise ValidationError(
            f"{label} must not exceed {max_length} characters",
            field=field,
            rule="max_length",
        )
    return value


@dataclass
class GiftSuggestion:
    """Aggregate root for gift ideas.

    Use ``GiftSuggestion.create()`` for new suggestions.  The plain
    ``__init__`` lets the repository reconstitute stored records without
    re-validating them.
    """

    id: str | None
    name: str
    description: str
    min_price: Decimal
    max_price: Decimal
    age_group: AgeGroup
    gender: Gender
    interest: Interest
    occasion: Occasion
    relationship: Relationship
    personality_type: PersonalityType
    created_at: datetime | None = None
    last_modified_at: datetime | None = None

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        name: str,
        description: str,
        min_price: Decimal,
        max_price: Decimal,
        age_group: AgeGroup,
        gender: Gender,
        interest: Interest,
        occasion: Occasion,
        relationship: Relationship,
        personality_type: PersonalityType,
    ) -> GiftSuggestion:
        suggestion = GiftSuggestion(
            id=None,
            name=name,
            description=description,
            min_price=min_price,
            max_price=max_price,
            age_group=age_group,
            gender=gender,
            interest=interest,
            occasion=occasion,
            relationship=relationship,
            personality_type=personality_type,
        )
        suggestion.validate()
        return suggestion

    # --- Invariants -----------------------------------------------------------

    def validate(self) -> None:
        """Check every field rule, normalising text fields in place."""
        self.name = require_text(self.name, "name", "Name", MAX_NAME_LENGTH)
        self.description = require_text(
            self.description, "description", "Description", MAX_DESCRIPTION_LENGTH
        )
        validate_price_range(self.min_price, self.max_price)
        for field, enum_type in CATEGORY_FIELDS.items():
            value = getattr(self, field)
            if value is None:
                label = field.replace("_", " ").capitalize()
                raise ValidationError(f"{label} is required", field=field, rule="required")
            if not isinstance(value, enum_type):
                setattr(self, field, enum_type.parse(value, field=field))

    # --- Mutation -------------------------------------------------------------

    def replace_with(self, other: GiftSuggestion) -> None:
        """Overwrite every mutable field with ``other``'s values.

        Identity and audit timestamps are left alone.
        """
        other.validate()
        self.name = other.name
        self.description = other.description
        self.min_price = other.min_price
        self.max_price = other.max_price
        for field in CATEGORY_FIELDS:
            setattr(self, field, getattr(other, field))

    # --- Computed properties --------------------------------------------------

    @property
    def price_range(self) -> PriceRange:
        return PriceRange(self.min_price, self.max_price)
