"""JSON-file-backed arena store for suggestions and their concrete gifts.

Both tables live in one file together with nothing but ids linking
them.  The in-memory child index (suggestion id -> gift ids) is rebuilt
on load.  Writes go to disk when the outermost ``atomic()`` block exits,
or straight away when no transaction is open.
"""

from __future__ import annotations

import copy
import dataclasses
import json
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import structlog

from gcs.domain.exceptions import EntityNotFoundError
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
from gcs.domain.repository.concrete_gift_repository import ConcreteGiftRepository
from gcs.domain.repository.gift_suggestion_repository import GiftSuggestionRepository
from gcs.domain.repository.transaction import Transaction

logger = structlog.get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JsonGiftStore(Transaction):

    def __init__(
        self,
        file_path: Path,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._file_path = file_path
        self._clock = clock
        self._depth = 0
        self._ensure_file()
        self._suggestions: dict[str, GiftSuggestion] = {}
        self._gifts: dict[str, ConcreteGift] = {}
        self._children: dict[str, list[str]] = {}
        self._load()
        self.suggestions = JsonGiftSuggestionRepository(self)
        self.concrete_gifts = JsonConcreteGiftRepository(self)

    # --- Transaction interface ------------------------------------------------

    @contextmanager
    def atomic(self) -> Iterator[None]:
        if self._depth:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        snapshot = copy.deepcopy((self._suggestions, self._gifts, self._children))
        self._depth = 1
        try:
            yield
            self._persist()
        except BaseException:
            # Memory must not run ahead of the file when the write fails.
            self._suggestions, self._gifts, self._children = snapshot
            logger.debug("transaction_rolled_back", file=str(self._file_path))
            raise
        finally:
            self._depth = 0

    # --- Table access used by the repositories --------------------------------

    def now(self) -> datetime:
        return self._clock()

    @staticmethod
    def new_id() -> str:
        return str(uuid.uuid4())

    def written(self) -> None:
        """Flush to disk unless a transaction will do it later."""
        if not self._depth:
            self._persist()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _suggestion_to_raw(s: GiftSuggestion) -> dict:
        return {
            "id": s.id,
            "name": s.name,
            "description": s.description,
            "min_price": str(s.min_price),
            "max_price": str(s.max_price),
            "age_group": s.age_group.value,
            "gender": s.gender.value,
            "interest": s.interest.value,
            "occasion": s.occasion.value,
            "relationship": s.relationship.value,
            "personality_type": s.personality_type.value,
            "created_at": _iso(s.created_at),
            "last_modified_at": _iso(s.last_modified_at),
        }

    @staticmethod
    def _suggestion_to_domain(raw: dict) -> GiftSuggestion:
        return GiftSuggestion(
            id=raw["id"],
            name=raw["name"],
            description=raw["description"],
            min_price=Decimal(raw["min_price"]),
            max_price=Decimal(raw["max_price"]),
            age_group=AgeGroup(raw["age_group"]),
            gender=Gender(raw["gender"]),
            interest=Interest(raw["interest"]),
            occasion=Occasion(raw["occasion"]),
            relationship=Relationship(raw["relationship"]),
            personality_type=PersonalityType(raw["personality_type"]),
            created_at=_parse_iso(raw.get("created_at")),
            last_modified_at=_parse_iso(raw.get("last_modified_at")),
        )

    @staticmethod
    def _gift_to_raw(g: ConcreteGift) -> dict:
        return {
            "id": g.id,
            "gift_suggestion_id": g.gift_suggestion_id,
            "name": g.name,
            "description": g.description,
            "exact_price": str(g.exact_price),
            "vendor_name": g.vendor_name,
            "product_url": g.product_url,
            "product_sku": g.product_sku,
            "available": g.available,
            "created_at": _iso(g.created_at),
            "last_modified_at": _iso(g.last_modified_at),
        }

    @staticmethod
    def _gift_to_domain(raw: dict) -> ConcreteGift:
        return ConcreteGift(
            id=raw["id"],
            gift_suggestion_id=raw["gift_suggestion_id"],
            name=raw["name"],
            description=raw.get("description"),
            exact_price=Decimal(raw["exact_price"]),
            vendor_name=raw["vendor_name"],
            product_url=raw.get("product_url"),
            product_sku=raw.get("product_sku"),
            available=raw.get("available", True),
            created_at=_parse_iso(raw.get("created_at")),
            last_modified_at=_parse_iso(raw.get("last_modified_at")),
        )

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> None:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        for item in raw.get("suggestions", []):
            suggestion = self._suggestion_to_domain(item)
            self._suggestions[suggestion.id] = suggestion
            self._children[suggestion.id] = []
        for item in raw.get("concrete_gifts", []):
            gift = self._gift_to_domain(item)
            self._gifts[gift.id] = gift
            self._children.setdefault(gift.gift_suggestion_id, []).append(gift.id)

    def _persist(self) -> None:
        raw = {
            "suggestions": [self._suggestion_to_raw(s) for s in self._suggestions.values()],
            "concrete_gifts": [self._gift_to_raw(g) for g in self._gifts.values()],
        }
        self._file_path.write_text(json.dumps(raw, indent=2) + "\n", encoding="utf-8")

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                '{"suggestions": [], "concrete_gifts": []}\n', encoding="utf-8"
            )


class JsonGiftSuggestionRepository(GiftSuggestionRepository):

    def __init__(self, store: JsonGiftStore) -> None:
        self._store = store

    def get_by_id(self, suggestion_id: str) -> GiftSuggestion | None:
        suggestion = self._store._suggestions.get(suggestion_id)
        return dataclasses.replace(suggestion) if suggestion else None

    def exists(self, suggestion_id: str) -> bool:
        return suggestion_id in self._store._suggestions

    def list_all(self) -> list[GiftSuggestion]:
        return [dataclasses.replace(s) for s in self._store._suggestions.values()]

    def save(self, suggestion: GiftSuggestion) -> GiftSuggestion:
        validate_price_range(suggestion.min_price, suggestion.max_price)
        now = self._store.now()
        if suggestion.id is None:
            suggestion.id = self._store.new_id()
        existing = self._store._suggestions.get(suggestion.id)
        if existing is None:
            suggestion.created_at = now
            self._store._children.setdefault(suggestion.id, [])
        else:
            suggestion.created_at = existing.created_at
        suggestion.last_modified_at = now
        self._store._suggestions[suggestion.id] = dataclasses.replace(suggestion)
        self._store.written()
        return suggestion

    def delete(self, suggestion_id: str) -> None:
        self._store._suggestions.pop(suggestion_id, None)
        self._store._children.pop(suggestion_id, None)
        self._store.written()


class JsonConcreteGiftRepository(ConcreteGiftRepository):

    def __init__(self, store: JsonGiftStore) -> None:
        self._store = store

    def get_by_id(self, gift_id: str) -> ConcreteGift | None:
        gift = self._store._gifts.get(gift_id)
        return dataclasses.replace(gift) if gift else None

    def exists(self, gift_id: str) -> bool:
        return gift_id in self._store._gifts

    def list_all(self) -> list[ConcreteGift]:
        return [dataclasses.replace(g) for g in self._store._gifts.values()]

    def list_by_suggestion_id(self, suggestion_id: str) -> list[ConcreteGift]:
        return [
            dataclasses.replace(self._store._gifts[gift_id])
            for gift_id in self._store._children.get(suggestion_id, [])
        ]

    def save(self, gift: ConcreteGift) -> ConcreteGift:
        if gift.gift_suggestion_id not in self._store._suggestions:
            raise EntityNotFoundError("Gift suggestion", gift.gift_suggestion_id)
        now = self._store.now()
        if gift.id is None:
            gift.id = self._store.new_id()
        existing = self._store._gifts.get(gift.id)
        if existing is None:
            gift.created_at = now
        else:
            gift.created_at = existing.created_at
            if existing.gift_suggestion_id != gift.gift_suggestion_id:
                self._store._children[existing.gift_suggestion_id].remove(gift.id)
        children = self._store._children.setdefault(gift.gift_suggestion_id, [])
        if gift.id not in children:
            children.append(gift.id)
        gift.last_modified_at = now
        self._store._gifts[gift.id] = dataclasses.replace(gift)
        self._store.written()
        return gift

    def delete(self, gift_id: str) -> None:
        gift = self._store._gifts.pop(gift_id, None)
        if gift is not None:
            self._store._children.get(gift.gift_suggestion_id, []).remove(gift_id)
        self._store.written()

    def delete_by_suggestion_id(self, suggestion_id: str) -> int:
        gift_ids = self._store._children.get(suggestion_id, [])
        for gift_id in gift_ids:
            del self._store._gifts[gift_id]
        self._store._children[suggestion_id] = []
        self._store.written()
        return len(gift_ids)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_iso(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None
