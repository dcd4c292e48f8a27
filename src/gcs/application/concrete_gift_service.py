"""Application service: concrete gift use cases.

Creating or updating a gift reads the parent suggestion, checks the
price against its band and writes the gift, all inside one transaction.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from gcs.application.dto import ConcreteGiftData
from gcs.domain.exceptions import EntityNotFoundError, InvalidArgumentError
from gcs.domain.model.concrete_gift import ConcreteGift
from gcs.domain.model.gift_suggestion import GiftSuggestion
from gcs.domain.model.paging import Page, PageRequest
from gcs.domain.model.price_range import to_price, validate_price_range
from gcs.domain.query import ConcreteGiftCriteria, Specification, SuggestionCriteria
from gcs.domain.repository.concrete_gift_repository import ConcreteGiftRepository
from gcs.domain.repository.gift_suggestion_repository import GiftSuggestionRepository
from gcs.domain.repository.transaction import Transaction

logger = structlog.get_logger(__name__)

ENTITY = "Concrete gift"


def _require(value, label: str):
    if value is None:
        raise InvalidArgumentError(f"{label} cannot be null")
    return value


class ConcreteGiftService:

    def __init__(
        self,
        gift_repo: ConcreteGiftRepository,
        suggestion_repo: GiftSuggestionRepository,
        transaction: Transaction,
    ) -> None:
        self._gift_repo = gift_repo
        self._suggestion_repo = suggestion_repo
        self._transaction = transaction

    # --- Commands -------------------------------------------------------------

    def create(self, data: ConcreteGiftData) -> ConcreteGift:
        _require(data, "Concrete gift")
        logger.info("creating_concrete_gift", name=data.name)
        if data.id is not None:
            raise InvalidArgumentError("Concrete gift ID must be null for creation")

        gift = data.to_domain()
        gift.validate()
        with self._transaction.atomic():
            suggestion = self._resolve_suggestion(gift.gift_suggestion_id)
            self.validate_gift_suggestion_association(gift, suggestion)
            saved = self._gift_repo.save(gift)

        logger.info("concrete_gift_created", id=saved.id, gift_suggestion_id=saved.gift_suggestion_id)
        return saved

    def update(self, gift_id: str, data: ConcreteGiftData) -> ConcreteGift:
        """Replace every mutable field, including the parent reference."""
        _require(gift_id, "ID")
        _require(data, "Concrete gift")
        logger.info("updating_concrete_gift", id=gift_id)

        with self._transaction.atomic():
            existing = self._gift_repo.get_by_id(gift_id)
            if existing is None:
                raise EntityNotFoundError(ENTITY, gift_id)
            replacement = data.to_domain()
            replacement.validate()
            suggestion = self._resolve_suggestion(replacement.gift_suggestion_id)
            self.validate_gift_suggestion_association(replacement, suggestion)
            existing.replace_with(replacement)
            saved = self._gift_repo.save(existing)

        logger.info("concrete_gift_updated", id=gift_id)
        return saved

    def delete_by_id(self, gift_id: str) -> None:
        _require(gift_id, "ID")
        logger.info("deleting_concrete_gift", id=gift_id)
        with self._transaction.atomic():
            if not self._gift_repo.exists(gift_id):
                raise EntityNotFoundError(ENTITY, gift_id)
            self._gift_repo.delete(gift_id)
        logger.info("concrete_gift_deleted", id=gift_id)

    def validate_gift_suggestion_association(
        self, gift: ConcreteGift, suggestion: GiftSuggestion
    ) -> None:
        """Raise PriceOutOfRangeError unless the gift's price fits the band."""
        _require(gift, "Concrete gift")
        _require(suggestion, "Gift suggestion")
        logger.debug("validating_association", gift=gift.name, gift_suggestion_id=suggestion.id)
        if gift.exact_price is not None:
            gift.check_within(suggestion)

    # --- Lookups --------------------------------------------------------------

    def find_by_id(self, gift_id: str) -> ConcreteGift | None:
        _require(gift_id, "ID")
        logger.debug("finding_concrete_gift", id=gift_id)
        return self._gift_repo.get_by_id(gift_id)

    def exists_by_id(self, gift_id: str | None) -> bool:
        if gift_id is None:
            return False
        return self._gift_repo.exists(gift_id)

    def find_all(self) -> list[ConcreteGift]:
        return self._gift_repo.list_all()

    def find_all_paged(self, page_request: PageRequest) -> Page[ConcreteGift]:
        return self.find_by_advanced_criteria(ConcreteGiftCriteria(), page_request)

    # --- By suggestion --------------------------------------------------------

    def find_by_gift_suggestion(self, suggestion: GiftSuggestion) -> list[ConcreteGift]:
        _require(suggestion, "Gift suggestion")
        return self.find_by_gift_suggestion_id(suggestion.id)

    def find_by_gift_suggestion_id(self, suggestion_id: str) -> list[ConcreteGift]:
        _require(suggestion_id, "Gift suggestion ID")
        return self._gift_repo.list_by_suggestion_id(suggestion_id)

    def find_by_gift_suggestion_id_paged(
        self, suggestion_id: str, page_request: PageRequest
    ) -> Page[ConcreteGift]:
        _require(suggestion_id, "Gift suggestion ID")
        _require(page_request, "Pageable")
        self._resolve_suggestion(suggestion_id)
        return page_request.apply(self._gift_repo.list_by_suggestion_id(suggestion_id))

    def find_by_gift_suggestion_and_available(
        self, suggestion: GiftSuggestion, available: bool
    ) -> list[ConcreteGift]:
        _require(suggestion, "Gift suggestion")
        return self.find_by_gift_suggestion_id_and_available(suggestion.id, available)

    def find_by_gift_suggestion_id_and_available(
        self, suggestion_id: str, available: bool
    ) -> list[ConcreteGift]:
        _require(suggestion_id, "Gift suggestion ID")
        _require(available, "Availability")
        return [
            gift
            for gift in self._gift_repo.list_by_suggestion_id(suggestion_id)
            if gift.available == available
        ]

    def count_by_gift_suggestion_id(self, suggestion_id: str) -> int:
        """Number of gifts a suggestion owns; 0 for an unknown id."""
        _require(suggestion_id, "Gift suggestion ID")
        return len(self._gift_repo.list_by_suggestion_id(suggestion_id))

    # --- Vendor / availability ------------------------------------------------

    def find_by_vendor_name(self, vendor_name: str) -> list[ConcreteGift]:
        if vendor_name is None or not vendor_name.strip():
            raise InvalidArgumentError("Vendor name cannot be null or empty")
        return self._find(ConcreteGiftCriteria(vendor_name=vendor_name.strip()))

    def find_by_available(self, available: bool) -> list[ConcreteGift]:
        return self._find(ConcreteGiftCriteria(available=_require(available, "Availability")))

    def find_all_available(self) -> list[ConcreteGift]:
        return self.find_by_available(True)

    def find_all_unavailable(self) -> list[ConcreteGift]:
        return self.find_by_available(False)

    def find_by_vendor_and_available(
        self, vendor_name: str, available: bool
    ) -> list[ConcreteGift]:
        return self._find(self._vendor_criteria(vendor_name, available))

    def find_by_vendor_and_available_paged(
        self, vendor_name: str, available: bool, page_request: PageRequest
    ) -> Page[ConcreteGift]:
        return self.find_by_advanced_criteria(
            self._vendor_criteria(vendor_name, available), page_request
        )

    def count_by_vendor_and_available(
        self, vendor_name: str | None = None, available: bool | None = None
    ) -> int:
        return self.count_by_advanced_criteria(
            ConcreteGiftCriteria(vendor_name=vendor_name, available=available)
        )

    # --- Price ----------------------------------------------------------------

    def find_by_price_range(self, min_price: Decimal, max_price: Decimal) -> list[ConcreteGift]:
        """Gifts whose exact price lies in ``[min_price, max_price]``."""
        if min_price is None or max_price is None:
            raise InvalidArgumentError("Price range bounds cannot be null")
        low = to_price(min_price, "min_price")
        high = to_price(max_price, "max_price")
        validate_price_range(low, high)
        return self._find(ConcreteGiftCriteria(min_price=low, max_price=high))

    def find_by_price_at_most(self, max_price: Decimal) -> list[ConcreteGift]:
        return self._find(ConcreteGiftCriteria(max_price=to_price(_require(max_price, "Price"))))

    def find_by_price_at_least(self, min_price: Decimal) -> list[ConcreteGift]:
        return self._find(ConcreteGiftCriteria(min_price=to_price(_require(min_price, "Price"))))

    # --- Advanced criteria ----------------------------------------------------

    def find_by_advanced_criteria(
        self, criteria: ConcreteGiftCriteria | None, page_request: PageRequest
    ) -> Page[ConcreteGift]:
        _require(page_request, "Pageable")
        criteria = criteria or ConcreteGiftCriteria()
        logger.debug("finding_concrete_gifts_by_criteria", criteria=criteria)
        return self._gift_repo.find(criteria.to_specification(), page_request)

    def count_by_advanced_criteria(self, criteria: ConcreteGiftCriteria | None = None) -> int:
        criteria = criteria or ConcreteGiftCriteria()
        return self._gift_repo.count(criteria.to_specification())

    def find_by_suggestion_and_criteria(
        self,
        suggestion_criteria: SuggestionCriteria | None,
        gift_criteria: ConcreteGiftCriteria | None,
        page_request: PageRequest,
    ) -> Page[ConcreteGift]:
        """Gift search that also filters on the parent's categories and band."""
        _require(page_request, "Pageable")
        spec = self._joined_specification(suggestion_criteria, gift_criteria)
        return self._gift_repo.find(spec, page_request)

    def count_by_suggestion_and_criteria(
        self,
        suggestion_criteria: SuggestionCriteria | None = None,
        gift_criteria: ConcreteGiftCriteria | None = None,
    ) -> int:
        return self._gift_repo.count(
            self._joined_specification(suggestion_criteria, gift_criteria)
        )

    # --- Internal helpers -----------------------------------------------------

    def _find(self, criteria: ConcreteGiftCriteria) -> list[ConcreteGift]:
        return self._gift_repo.find_all(criteria.to_specification())

    @staticmethod
    def _vendor_criteria(vendor_name: str, available: bool) -> ConcreteGiftCriteria:
        return ConcreteGiftCriteria(
            vendor_name=_require(vendor_name, "Vendor name"),
            available=_require(available, "Availability"),
        )

    def _resolve_suggestion(self, suggestion_id: str) -> GiftSuggestion:
        suggestion = self._suggestion_repo.get_by_id(suggestion_id)
        if suggestion is None:
            raise EntityNotFoundError("Gift suggestion", suggestion_id)
        return suggestion

    def _joined_specification(
        self,
        suggestion_criteria: SuggestionCriteria | None,
        gift_criteria: ConcreteGiftCriteria | None,
    ) -> Specification[ConcreteGift]:
        spec = (gift_criteria or ConcreteGiftCriteria()).to_specification()
        if suggestion_criteria is None or suggestion_criteria.is_empty:
            return spec
        parent_ids = [
            s.id
            for s in self._suggestion_repo.find_all(suggestion_criteria.to_specification())
        ]
        return spec.is_in("gift_suggestion_id", parent_ids)
