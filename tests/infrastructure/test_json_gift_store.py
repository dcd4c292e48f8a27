"""Tests for the JSON-file arena store, against real files under tmp_path."""

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from gcs.domain.exceptions import EntityNotFoundError, ValidationError
from gcs.domain.model.categories import Interest
from gcs.infrastructure.bootstrap import concrete_gift_service, gift_suggestion_service
from gcs.infrastructure.persistence.json_gift_store import JsonGiftStore
from tests.fakes import FakeClock, gift_data, suggestion_data


@pytest.fixture
def path(tmp_path):
    return tmp_path / "data" / "gifts.json"


@pytest.fixture
def store(path):
    return JsonGiftStore(path, clock=FakeClock())


def _services(store):
    return gift_suggestion_service(store), concrete_gift_service(store)


class TestFile:

    def test_created_empty_on_first_use(self, path):
        JsonGiftStore(path)
        assert json.loads(path.read_text()) == {"suggestions": [], "concrete_gifts": []}

    def test_records_survive_reload(self, path, store):
        suggestions, gifts = _services(store)
        s = suggestions.create(suggestion_data(interest="gaming"))
        g = gifts.create(gift_data(s.id, exact_price="19.99"))

        reloaded = JsonGiftStore(path)
        again = reloaded.suggestions.get_by_id(s.id)
        gift = reloaded.concrete_gifts.get_by_id(g.id)

        assert again.interest is Interest.GAMING
        assert again.min_price == Decimal("10.00")
        assert again.created_at == datetime(2024, 1, 1, 0, 0, 1, tzinfo=timezone.utc)
        assert gift.exact_price == Decimal("19.99")
        assert [c.id for c in reloaded.concrete_gifts.list_by_suggestion_id(s.id)] == [g.id]

    def test_prices_stored_as_strings(self, path, store):
        suggestions, _ = _services(store)
        suggestions.create(suggestion_data(min_price="0.10"))
        raw = json.loads(path.read_text())
        assert raw["suggestions"][0]["min_price"] == "0.10"
        assert raw["suggestions"][0]["age_group"] == "ADULT"


class TestRepositories:

    def test_ids_are_unique(self, store):
        suggestions, _ = _services(store)
        ids = {suggestions.create(suggestion_data()).id for _ in range(3)}
        assert len(ids) == 3

    def test_get_returns_a_copy(self, store):
        suggestions, _ = _services(store)
        s = suggestions.create(suggestion_data())
        loaded = store.suggestions.get_by_id(s.id)
        loaded.name = "mutated"
        assert store.suggestions.get_by_id(s.id).name == "Pour-over coffee kit"

    def test_save_rejects_inverted_band(self, store):
        suggestions, _ = _services(store)
        s = suggestions.create(suggestion_data())
        s.min_price = Decimal("500")
        with pytest.raises(ValidationError):
            store.suggestions.save(s)

    def test_gift_save_requires_parent(self, store):
        gift = gift_data("ghost").to_domain()
        with pytest.raises(EntityNotFoundError):
            store.concrete_gifts.save(gift)

    def test_update_keeps_created_at(self, store):
        suggestions, _ = _services(store)
        s = suggestions.create(suggestion_data())
        updated = suggestions.update(s.id, suggestion_data(name="Renamed"))
        assert updated.created_at == s.created_at
        assert updated.last_modified_at > s.last_modified_at

    def test_reassigning_gift_moves_child_index(self, store):
        suggestions, gifts = _services(store)
        a = suggestions.create(suggestion_data(name="A"))
        b = suggestions.create(suggestion_data(name="B"))
        g = gifts.create(gift_data(a.id))
        gifts.update(g.id, gift_data(b.id))
        assert store.concrete_gifts.list_by_suggestion_id(a.id) == []
        assert [c.id for c in store.concrete_gifts.list_by_suggestion_id(b.id)] == [g.id]


class TestAtomic:

    def test_failed_block_is_rolled_back_and_not_written(self, path, store):
        suggestions, _ = _services(store)
        s = suggestions.create(suggestion_data())
        before = path.read_text()

        with pytest.raises(RuntimeError):
            with store.atomic():
                store.suggestions.delete(s.id)
                raise RuntimeError("boom")

        assert store.suggestions.exists(s.id)
        assert path.read_text() == before

    def test_nested_blocks_write_once_at_outer_exit(self, path, store):
        with store.atomic():
            with store.atomic():
                store.suggestions.save(suggestion_data().to_domain())
            assert json.loads(path.read_text())["suggestions"] == []
        assert len(json.loads(path.read_text())["suggestions"]) == 1

    def test_inner_failure_rolls_back_whole_block(self, store):
        with pytest.raises(RuntimeError):
            with store.atomic():
                store.suggestions.save(suggestion_data().to_domain())
                with store.atomic():
                    raise RuntimeError("boom")
        assert store.suggestions.list_all() == []

    def test_failed_write_rolls_back_memory(self, path, store, monkeypatch):
        suggestions, _ = _services(store)
        kept = suggestions.create(suggestion_data(name="Kept"))

        def disk_full():
            raise OSError("No space left on device")

        monkeypatch.setattr(store, "_persist", disk_full)
        with pytest.raises(OSError):
            suggestions.create(suggestion_data(name="Lost"))

        assert [s.id for s in store.suggestions.list_all()] == [kept.id]
        assert len(json.loads(path.read_text())["suggestions"]) == 1

    def test_cascade_delete_is_persisted(self, path, store):
        suggestions, gifts = _services(store)
        s = suggestions.create(suggestion_data())
        gifts.create(gift_data(s.id))
        suggestions.delete_by_id(s.id)

        raw = json.loads(path.read_text())
        assert raw == {"suggestions": [], "concrete_gifts": []}
