"""Application service: gift suggestion use cases.

Mutations validate before touching the repository, so a rejected
request never leaves a partial write behind.  The named finders are
thin wrappers around ``SuggestionCriteria``.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from gcs.application.dto import GiftSuggestionData
from gcs.domain.exceptions import EntityNotFoundError, InvalidArgumentError
from gcs.domain.model.categories import (
    AgeGroup,
    Gender,
    Interest,
    Occasion,
    PersonalityType,
    Relationship,
)
from gcs.domain.model.gift_suggestion import GiftSuggestion
from gcs.domain.model.paging import Page, PageRequest
from gcs.domain.model.price_range import to_price, validate_price_range
from gcs.domain.query import SuggestionCriteria
from gcs.domain.repository.concrete_gift_repository import ConcreteGiftRepository
from gcs.domain.repository.gift_suggestion_repository import GiftSuggestionRepository
from gcs.domain.repository.transaction import Transaction

logger = structlog.get_logger(__name__)

ENTITY = "Gift suggestion"


def _require(value, label: str):
    if value is None:
        raise InvalidArgumentError(f"{label} cannot be null")
    return value


class GiftSuggestionService:

    def __init__(
        self,
        suggestion_repo: GiftSuggestionRepository,
        gift_repo: ConcreteGiftRepository,
        transaction: Transaction,
    ) -> None:
        self._suggestion_repo = suggestion_repo
        self._gift_repo = gift_repo
        self._transaction = transaction

    # --- Commands -------------------------------------------------------------

    def create(self, data: GiftSuggestionData) -> GiftSuggestion:
        """Validate and store a new suggestion; the store assigns its id."""
        _require(data, "Gift suggestion")
        logger.info("creating_gift_suggestion", name=data.name)
        if data.id is not None:
            raise InvalidArgumentError("Gift suggestion ID must be null for creation")

        suggestion = GiftSuggestion.create(**data.coerced_fields())
        with self._transaction.atomic():
            saved = self._suggestion_repo.save(suggestion)

        logger.info("gift_suggestion_created", id=saved.id)
        return saved

    def update(self, suggestion_id: str, data: GiftSuggestionData) -> GiftSuggestion:
        """Replace every mutable field of an existing suggestion.

        A new band must still contain every owned concrete gift.
        """
        _require(suggestion_id, "ID")
        _require(data, "Gift suggestion")
        logger.info("updating_gift_suggestion", id=suggestion_id)

        with self._transaction.atomic():
            existing = self._suggestion_repo.get_by_id(suggestion_id)
            if existing is None:
                raise EntityNotFoundError(ENTITY, suggestion_id)
            existing.replace_with(data.to_domain())
            for gift in self._gift_repo.list_by_suggestion_id(suggestion_id):
                gift.check_within(existing)
            saved = self._suggestion_repo.save(existing)

        logger.info("gift_suggestion_updated", id=suggestion_id)
        return saved

    def delete_by_id(self, suggestion_id: str) -> None:
        """Delete a suggestion together with all of its concrete gifts."""
        _require(suggestion_id, "ID")
        logger.info("deleting_gift_suggestion", id=suggestion_id)

        with self._transaction.atomic():
            if not self._suggestion_repo.exists(suggestion_id):
                raise EntityNotFoundError(ENTITY, suggestion_id)
            removed = self._gift_repo.delete_by_suggestion_id(suggestion_id)
            self._suggestion_repo.delete(suggestion_id)

        logger.info("gift_suggestion_deleted", id=suggestion_id, concrete_gifts_removed=removed)

    # --- Lookups --------------------------------------------------------------

    def find_by_id(self, suggestion_id: str) -> GiftSuggestion | None:
        _require(suggestion_id, "ID")
        logger.debug("finding_gift_suggestion", id=suggestion_id)
        return self._suggestion_repo.get_by_id(suggestion_id)

    def exists_by_id(self, suggestion_id: str | None) -> bool:
        if suggestion_id is None:
            return False
        return self._suggestion_repo.exists(suggestion_id)

    def find_all(self) -> list[GiftSuggestion]:
        return self._suggestion_repo.list_all()

    def find_all_paged(self, page_request: PageRequest) -> Page[GiftSuggestion]:
        _require(page_request, "Pageable")
        return self.find_by_advanced_criteria(SuggestionCriteria(), page_request)

    # --- Category finders -----------------------------------------------------

    def find_by_age_group(self, age_group: AgeGroup) -> list[GiftSuggestion]:
        return self._find(SuggestionCriteria(age_group=_require(age_group, "Age group")))

    def find_by_gender(self, gender: Gender) -> list[GiftSuggestion]:
        return self._find(SuggestionCriteria(gender=_require(gender, "Gender")))

    def find_by_interest(self, interest: Interest) -> list[GiftSuggestion]:
        return self._find(SuggestionCriteria(interest=_require(interest, "Interest")))

    def find_by_occasion(self, occasion: Occasion) -> list[GiftSuggestion]:
        return self._find(SuggestionCriteria(occasion=_require(occasion, "Occasion")))

    def find_by_relationship(self, relationship: Relationship) -> list[GiftSuggestion]:
        return self._find(
            SuggestionCriteria(relationship=_require(relationship, "Relationship"))
        )

    def find_by_personality_type(
        self, personality_type: PersonalityType
    ) -> list[GiftSuggestion]:
        return self._find(
            SuggestionCriteria(
                personality_type=_require(personality_type, "Personality type")
            )
        )

    def find_by_age_group_and_gender(
        self, age_group: AgeGroup, gender: Gender
    ) -> list[GiftSuggestion]:
        return self._find(
            SuggestionCriteria(
                age_group=_require(age_group, "Age group"),
                gender=_require(gender, "Gender"),
            )
        )

    def find_by_age_group_and_interest(
        self, age_group: AgeGroup, interest: Interest
    ) -> list[GiftSuggestion]:
        return self._find(
            SuggestionCriteria(
                age_group=_require(age_group, "Age group"),
                interest=_require(interest, "Interest"),
            )
        )

    def find_by_gender_and_interest(
        self, gender: Gender, interest: Interest
    ) -> list[GiftSuggestion]:
        return self._find(
            SuggestionCriteria(
                gender=_require(gender, "Gender"),
                interest=_require(interest, "Interest"),
            )
        )

    def find_by_occasion_and_relationship(
        self, occasion: Occasion, relationship: Relationship
    ) -> list[GiftSuggestion]:
        return self._find(
            SuggestionCriteria(
                occasion=_require(occasion, "Occasion"),
                relationship=_require(relationship, "Relationship"),
            )
        )

    def find_by_age_group_and_gender_and_interest(
        self, age_group: AgeGroup, gender: Gender, interest: Interest
    ) -> list[GiftSuggestion]:
        return self._find(
            SuggestionCriteria(
                age_group=_require(age_group, "Age group"),
                gender=_require(gender, "Gender"),
                interest=_require(interest, "Interest"),
            )
        )

    def find_by_age_group_and_gender_and_interest_and_occasion(
        self,
        age_group: AgeGroup,
        gender: Gender,
        interest: Interest,
        occasion: Occasion,
        page_request: PageRequest,
    ) -> Page[GiftSuggestion]:
        criteria = SuggestionCriteria(
            age_group=_require(age_group, "Age group"),
            gender=_require(gender, "Gender"),
            interest=_require(interest, "Interest"),
            occasion=_require(occasion, "Occasion"),
        )
        return self.find_by_advanced_criteria(criteria, page_request)

    # --- Price finders --------------------------------------------------------

    def find_gifts_within_budget(
        self, min_budget: Decimal, max_budget: Decimal
    ) -> list[GiftSuggestion]:
        """Suggestions whose band overlaps ``[min_budget, max_budget]``."""
        criteria = self._budget_criteria(min_budget, max_budget)
        logger.debug("finding_gifts_within_budget", min=str(min_budget), max=str(max_budget))
        return self._find(criteria)

    def find_by_price_range_paged(
        self, min_budget: Decimal, max_budget: Decimal, page_request: PageRequest
    ) -> Page[GiftSuggestion]:
        criteria = self._budget_criteria(min_budget, max_budget)
        return self.find_by_advanced_criteria(criteria, page_request)

    def find_affordable_gifts(self, budget: Decimal) -> list[GiftSuggestion]:
        """Suggestions that can be bought at ``budget`` or less."""
        return self._find(SuggestionCriteria(max_budget=to_price(_require(budget, "Budget"))))

    def find_by_min_price_at_most(self, max_budget: Decimal) -> list[GiftSuggestion]:
        return self.find_affordable_gifts(max_budget)

    def find_by_max_price_at_least(self, min_budget: Decimal) -> list[GiftSuggestion]:
        return self._find(
            SuggestionCriteria(min_budget=to_price(_require(min_budget, "Budget")))
        )

    # --- Advanced criteria ----------------------------------------------------

    def find_by_advanced_criteria(
        self, criteria: SuggestionCriteria | None, page_request: PageRequest
    ) -> Page[GiftSuggestion]:
        _require(page_request, "Pageable")
        criteria = criteria or SuggestionCriteria()
        logger.debug("finding_gift_suggestions_by_criteria", criteria=criteria)
        return self._suggestion_repo.find(criteria.to_specification(), page_request)

    def count_by_advanced_criteria(self, criteria: SuggestionCriteria | None = None) -> int:
        criteria = criteria or SuggestionCriteria()
        return self._suggestion_repo.count(criteria.to_specification())

    # --- Internal helpers -----------------------------------------------------

    def _find(self, criteria: SuggestionCriteria) -> list[GiftSuggestion]:
        return self._suggestion_repo.find_all(criteria.to_specification())

    @staticmethod
    def _budget_criteria(min_budget, max_budget) -> SuggestionCriteria:
        if min_budget is None or max_budget is None:
            raise InvalidArgumentError("Price range bounds cannot be null")
        low = to_price(min_budget, "min_price")
        high = to_price(max_budget, "max_price")
        validate_price_range(low, high)
        return SuggestionCriteria(min_budget=low, max_budget=high)
