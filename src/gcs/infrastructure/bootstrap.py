"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from pathlib import Path

from gcs.application.concrete_gift_service import ConcreteGiftService
from gcs.application.gift_suggestion_service import GiftSuggestionService
from gcs.infrastructure.persistence.json_gift_store import JsonGiftStore

DATA_FILE_ENV = "GCS_DATA_FILE"
LOG_LEVEL_ENV = "GCS_LOG_LEVEL"

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_FILE = Path(__file__).resolve().parents[3] / "data" / "gifts.json"


def data_file() -> Path:
    override = os.environ.get(DATA_FILE_ENV)
    return Path(override) if override else _DEFAULT_DATA_FILE


def gift_store() -> JsonGiftStore:
    return JsonGiftStore(data_file())


def gift_suggestion_service(store: JsonGiftStore | None = None) -> GiftSuggestionService:
    store = store or gift_store()
    return GiftSuggestionService(
        suggestion_repo=store.suggestions,
        gift_repo=store.concrete_gifts,
        transaction=store,
    )


def concrete_gift_service(store: JsonGiftStore | None = None) -> ConcreteGiftService:
    store = store or gift_store()
    return ConcreteGiftService(
        gift_repo=store.concrete_gifts,
        suggestion_repo=store.suggestions,
        transaction=store,
    )
