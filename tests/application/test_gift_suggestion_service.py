"""Integration tests for GiftSuggestionService.

Uses in-memory fake repositories, no file I/O.
"""

from decimal import Decimal

import pytest

from gcs.domain.exceptions import (
    EntityNotFoundError,
    InvalidArgumentError,
    PriceOutOfRangeError,
    ValidationError,
)
from gcs.domain.model.categories import AgeGroup, Gender, Interest, Occasion, Relationship
from gcs.domain.model.paging import PageRequest
from gcs.domain.query import SuggestionCriteria
from tests.fakes import build_services, gift_data, suggestion_data


@pytest.fixture
def services():
    return build_services()


@pytest.fixture
def suggestions(services):
    return services[0]


@pytest.fixture
def gifts(services):
    return services[1]


class TestCreate:

    def test_assigns_fresh_id_and_timestamps(self, suggestions):
        first = suggestions.create(suggestion_data())
        second = suggestions.create(suggestion_data(name="Second"))
        assert first.id is not None
        assert first.id != second.id
        assert first.created_at is not None
        assert first.last_modified_at == first.created_at

    def test_persists(self, suggestions):
        created = suggestions.create(suggestion_data())
        assert suggestions.exists_by_id(created.id)
        assert suggestions.find_by_id(created.id).name == "Pour-over coffee kit"

    def test_text_fields_normalised_on_create(self, suggestions):
        created = suggestions.create(suggestion_data(name="  Pour-over kit  ", gender="non-binary"))
        assert created.name == "Pour-over kit"
        assert created.gender is Gender.NON_BINARY

    def test_missing_category_rejected(self, suggestions):
        with pytest.raises(ValidationError, match="Occasion is required"):
            suggestions.create(suggestion_data(occasion=None))

    def test_preset_id_rejected(self, suggestions):
        with pytest.raises(InvalidArgumentError, match="must be null for creation"):
            suggestions.create(suggestion_data(id="mine"))

    def test_none_data_rejected(self, suggestions):
        with pytest.raises(InvalidArgumentError):
            suggestions.create(None)

    def test_inverted_band_rejected_on_min_price(self, suggestions):
        with pytest.raises(ValidationError) as excinfo:
            suggestions.create(suggestion_data(min_price="100", max_price="10"))
        assert excinfo.value.field == "min_price"
        assert suggestions.find_all() == []

    def test_unknown_category_rejected(self, suggestions):
        with pytest.raises(ValidationError, match="Invalid Interest"):
            suggestions.create(suggestion_data(interest="knitting"))

    @pytest.mark.parametrize("bounds", [("NaN", "100"), ("10", "Infinity"), ("-inf", "10")])
    def test_non_finite_band_rejected(self, suggestions, bounds):
        low, high = bounds
        with pytest.raises(ValidationError, match="Invalid amount"):
            suggestions.create(suggestion_data(min_price=low, max_price=high))
        assert suggestions.find_all() == []


class TestFindById:

    def test_idempotent(self, suggestions):
        created = suggestions.create(suggestion_data())
        assert suggestions.find_by_id(created.id) == suggestions.find_by_id(created.id)

    def test_missing_returns_none(self, suggestions):
        assert suggestions.find_by_id("nope") is None

    def test_none_id_rejected(self, suggestions):
        with pytest.raises(InvalidArgumentError, match="ID cannot be null"):
            suggestions.find_by_id(None)

    def test_exists_by_none_is_false(self, suggestions):
        assert suggestions.exists_by_id(None) is False


class TestUpdate:

    def test_replaces_fields_and_keeps_identity(self, suggestions):
        created = suggestions.create(suggestion_data())
        updated = suggestions.update(
            created.id, suggestion_data(name="Espresso kit", max_price="250", id="ignored")
        )
        assert updated.id == created.id
        assert updated.name == "Espresso kit"
        assert updated.max_price == Decimal("250")
        assert updated.created_at == created.created_at
        assert updated.last_modified_at > created.last_modified_at

    def test_missing_id_not_found(self, suggestions):
        with pytest.raises(EntityNotFoundError, match="Gift suggestion not found with ID: x"):
            suggestions.update("x", suggestion_data())

    def test_invalid_data_leaves_record_untouched(self, suggestions):
        created = suggestions.create(suggestion_data())
        with pytest.raises(ValidationError):
            suggestions.update(created.id, suggestion_data(min_price="500"))
        assert suggestions.find_by_id(created.id).min_price == Decimal("10.00")

    def test_narrowing_band_below_existing_gift_rejected(self, suggestions, gifts):
        created = suggestions.create(suggestion_data())
        gifts.create(gift_data(created.id, exact_price="80"))
        with pytest.raises(PriceOutOfRangeError, match="above maximum price"):
            suggestions.update(created.id, suggestion_data(max_price="50"))
        assert suggestions.find_by_id(created.id).max_price == Decimal("100.00")


class TestDelete:

    def test_cascades_to_concrete_gifts(self, suggestions, gifts):
        created = suggestions.create(suggestion_data())
        gifts.create(gift_data(created.id))
        gifts.create(gift_data(created.id, exact_price="10"))
        assert gifts.count_by_gift_suggestion_id(created.id) == 2

        suggestions.delete_by_id(created.id)

        assert not suggestions.exists_by_id(created.id)
        assert gifts.count_by_gift_suggestion_id(created.id) == 0
        assert gifts.find_all() == []

    def test_other_suggestions_keep_their_gifts(self, suggestions, gifts):
        doomed = suggestions.create(suggestion_data())
        kept = suggestions.create(suggestion_data(name="Kept"))
        gifts.create(gift_data(doomed.id))
        survivor = gifts.create(gift_data(kept.id))

        suggestions.delete_by_id(doomed.id)

        assert [g.id for g in gifts.find_all()] == [survivor.id]

    def test_missing_id_not_found(self, suggestions):
        with pytest.raises(EntityNotFoundError):
            suggestions.delete_by_id("missing")

    def test_runs_inside_a_transaction(self, services):
        suggestions, _, transaction = services
        created = suggestions.create(suggestion_data())
        before = transaction.commits
        suggestions.delete_by_id(created.id)
        assert transaction.commits == before + 1


class TestCategoryFinders:

    @pytest.fixture
    def seeded(self, suggestions):
        suggestions.create(suggestion_data(name="A", age_group="TEEN", gender="MALE", interest="GAMING"))
        suggestions.create(suggestion_data(name="B", age_group="TEEN", gender="FEMALE", interest="GAMING"))
        suggestions.create(suggestion_data(name="C", age_group="ADULT", gender="FEMALE", interest="ART",
                                           occasion="WEDDING", relationship="COLLEAGUE"))
        return suggestions

    def test_single_field(self, seeded):
        assert [s.name for s in seeded.find_by_age_group(AgeGroup.TEEN)] == ["A", "B"]
        assert [s.name for s in seeded.find_by_gender(Gender.FEMALE)] == ["B", "C"]
        assert [s.name for s in seeded.find_by_interest(Interest.ART)] == ["C"]
        assert [s.name for s in seeded.find_by_occasion(Occasion.BIRTHDAY)] == ["A", "B"]
        assert [s.name for s in seeded.find_by_relationship(Relationship.COLLEAGUE)] == ["C"]

    def test_combinations(self, seeded):
        assert [s.name for s in seeded.find_by_age_group_and_gender(AgeGroup.TEEN, Gender.FEMALE)] == ["B"]
        assert [s.name for s in seeded.find_by_gender_and_interest(Gender.FEMALE, Interest.GAMING)] == ["B"]
        assert [s.name for s in seeded.find_by_age_group_and_interest(AgeGroup.ADULT, Interest.ART)] == ["C"]
        assert [
            s.name for s in seeded.find_by_occasion_and_relationship(Occasion.WEDDING, Relationship.COLLEAGUE)
        ] == ["C"]
        assert [
            s.name
            for s in seeded.find_by_age_group_and_gender_and_interest(
                AgeGroup.TEEN, Gender.MALE, Interest.GAMING
            )
        ] == ["A"]

    def test_four_field_combination_is_paged(self, seeded):
        page = seeded.find_by_age_group_and_gender_and_interest_and_occasion(
            AgeGroup.TEEN, Gender.FEMALE, Interest.GAMING, Occasion.BIRTHDAY, PageRequest(0, 10)
        )
        assert [s.name for s in page] == ["B"]
        assert page.total_elements == 1

    def test_none_argument_rejected(self, seeded):
        with pytest.raises(InvalidArgumentError, match="Age group cannot be null"):
            seeded.find_by_age_group(None)


class TestPriceFinders:

    @pytest.fixture
    def seeded(self, suggestions):
        suggestions.create(suggestion_data(name="Mid", min_price="25", max_price="50"))
        suggestions.create(suggestion_data(name="Luxury", min_price="100", max_price="200"))
        suggestions.create(suggestion_data(name="Cheap", min_price="5", max_price="15"))
        return suggestions

    def test_within_budget_uses_overlap(self, seeded):
        names = [s.name for s in seeded.find_gifts_within_budget(Decimal("20"), Decimal("40"))]
        assert names == ["Mid"]

    def test_within_budget_accepts_strings(self, seeded):
        names = [s.name for s in seeded.find_gifts_within_budget("10", "30")]
        assert names == ["Mid", "Cheap"]

    def test_within_budget_rejects_inverted_range(self, seeded):
        with pytest.raises(ValidationError, match="cannot be greater"):
            seeded.find_gifts_within_budget(Decimal("40"), Decimal("20"))

    def test_within_budget_rejects_missing_bound(self, seeded):
        with pytest.raises(InvalidArgumentError, match="bounds cannot be null"):
            seeded.find_gifts_within_budget(None, Decimal("20"))

    def test_affordable(self, seeded):
        assert [s.name for s in seeded.find_affordable_gifts(Decimal("25"))] == ["Mid", "Cheap"]
        assert seeded.find_by_min_price_at_most(Decimal("4")) == []

    def test_max_price_at_least(self, seeded):
        assert [s.name for s in seeded.find_by_max_price_at_least(Decimal("60"))] == ["Luxury"]

    def test_paged_price_range(self, seeded):
        page = seeded.find_by_price_range_paged(Decimal("1"), Decimal("1000"), PageRequest(0, 2))
        assert page.total_elements == 3
        assert len(page) == 2


class TestAdvancedCriteria:

    def test_no_filters_returns_everything(self, suggestions):
        for i in range(4):
            suggestions.create(suggestion_data(name=f"S{i}"))
        page = suggestions.find_by_advanced_criteria(SuggestionCriteria(), PageRequest(0, 10))
        assert page.total_elements == 4
        assert suggestions.count_by_advanced_criteria() == 4

    def test_none_criteria_treated_as_wildcard(self, suggestions):
        suggestions.create(suggestion_data())
        assert suggestions.find_by_advanced_criteria(None, PageRequest()).total_elements == 1

    def test_five_records_paged_by_two(self, suggestions):
        for i in range(5):
            suggestions.create(suggestion_data(name=f"S{i}"))

        first = suggestions.find_all_paged(PageRequest(0, 2))
        assert len(first) == 2
        assert first.total_pages == 3
        assert first.total_elements == 5

        last = suggestions.find_all_paged(PageRequest(2, 2))
        assert len(last) == 1
        assert last.is_last

    def test_out_of_range_page_is_empty(self, suggestions):
        suggestions.create(suggestion_data())
        page = suggestions.find_all_paged(PageRequest(5, 2))
        assert page.content == []
        assert page.total_elements == 1

    def test_filters_and_budget_combine(self, suggestions):
        suggestions.create(suggestion_data(name="Fits", gender="FEMALE", min_price="20", max_price="80"))
        suggestions.create(suggestion_data(name="TooDear", gender="FEMALE", min_price="90", max_price="150"))
        suggestions.create(suggestion_data(name="WrongGender", gender="MALE", min_price="20", max_price="80"))

        criteria = SuggestionCriteria(gender=Gender.FEMALE, max_budget=Decimal("50"))
        page = suggestions.find_by_advanced_criteria(criteria, PageRequest(0, 10))

        assert [s.name for s in page] == ["Fits"]
        assert suggestions.count_by_advanced_criteria(criteria) == 1

    def test_sorted_by_price(self, suggestions):
        suggestions.create(suggestion_data(name="B", min_price="30"))
        suggestions.create(suggestion_data(name="A", min_price="20"))
        page = suggestions.find_all_paged(PageRequest(0, 10, sort=("min_price",)))
        assert [s.name for s in page] == ["A", "B"]

    def test_unknown_sort_key_rejected(self, suggestions):
        suggestions.create(suggestion_data())
        with pytest.raises(InvalidArgumentError, match="unknown property 'bogus'"):
            suggestions.find_all_paged(PageRequest(0, 5, sort=("bogus",)))

    def test_missing_page_request_rejected(self, suggestions):
        with pytest.raises(InvalidArgumentError, match="Pageable cannot be null"):
            suggestions.find_by_advanced_criteria(SuggestionCriteria(), None)
