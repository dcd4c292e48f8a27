"""Optional-criteria query building.

A Specification is a list of predicates that must all hold.  Every
builder method ignores a ``None`` argument, so a criteria object with
nothing set matches every record.

Suggestions are filtered on their *band* (overlap / affordability),
concrete gifts on their *point* price (containment).  The two criteria
classes below keep that distinction explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Collection, Generic, TypeVar

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
from gcs.domain.model.price_range import validate_price_range

T = TypeVar("T")
Predicate = Callable[[T], bool]


class Specification(Generic[T]):

    def __init__(self) -> None:
        self._predicates: list[Predicate] = []

    def where(self, predicate: Predicate | None) -> Specification[T]:
        if predicate is not None:
            self._predicates.append(predicate)
        return self

    def equal(self, attr: str, value: Any) -> Specification[T]:
        if value is None:
            return self
        return self.where(lambda record: getattr(record, attr) == value)

    def at_least(self, attr: str, bound: Any) -> Specification[T]:
        if bound is None:
            return self
        return self.where(lambda record: getattr(record, attr) >= bound)

    def at_most(self, attr: str, bound: Any) -> Specification[T]:
        if bound is None:
            return self
        return self.where(lambda record: getattr(record, attr) <= bound)

    def is_in(self, attr: str, values: Collection[Any] | None) -> Specification[T]:
        if values is None:
            return self
        allowed = frozenset(values)
        return self.where(lambda record: getattr(record, attr) in allowed)

    def matches(self, record: T) -> bool:
        return all(predicate(record) for predicate in self._predicates)

    def __call__(self, record: T) -> bool:
        return self.matches(record)

    def __len__(self) -> int:
        return len(self._predicates)


@dataclass(frozen=True)
class SuggestionCriteria:
    """Filters for gift suggestions; every field is optional.

    ``max_budget`` keeps suggestions whose band starts at or below the
    budget.  ``min_budget``/``max_budget`` together select bands that
    overlap the requested range.
    """

    age_group: AgeGroup | None = None
    gender: Gender | None = None
    interest: Interest | None = None
    occasion: Occasion | None = None
    relationship: Relationship | None = None
    personality_type: PersonalityType | None = None
    min_budget: Decimal | None = None
    max_budget: Decimal | None = None

    def __post_init__(self) -> None:
        if self.min_budget is not None and self.max_budget is not None:
            validate_price_range(self.min_budget, self.max_budget)

    def to_specification(self) -> Specification[GiftSuggestion]:
        return (
            Specification[GiftSuggestion]()
            .equal("age_group", self.age_group)
            .equal("gender", self.gender)
            .equal("interest", self.interest)
            .equal("occasion", self.occasion)
            .equal("relationship", self.relationship)
            .equal("personality_type", self.personality_type)
            .at_most("min_price", self.max_budget)
            .at_least("max_price", self.min_budget)
        )

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in vars(self).values())


@dataclass(frozen=True)
class ConcreteGiftCriteria:
    """Filters for concrete gifts; price bounds are inclusive."""

    gift_suggestion_id: str | None = None
    vendor_name: str | None = None
    available: bool | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None

    def __post_init__(self) -> None:
        if self.min_price is not None and self.max_price is not None:
            validate_price_range(self.min_price, self.max_price)

    def to_specification(self) -> Specification[ConcreteGift]:
        return (
            Specification[ConcreteGift]()
            .equal("gift_suggestion_id", self.gift_suggestion_id)
            .equal("vendor_name", self.vendor_name)
            .equal("available", self.available)
            .at_least("exact_price", self.min_price)
            .at_most("exact_price", self.max_price)
        )
