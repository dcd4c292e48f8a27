"""Abstract repository for the GiftSuggestion aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Implementations assign ids and audit timestamps in
``save``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from gcs.domain.model.gift_suggestion import GiftSuggestion
from gcs.domain.model.paging import Page, PageRequest
from gcs.domain.query import Specification


class GiftSuggestionRepository(ABC):

    @abstractmethod
    def get_by_id(self, suggestion_id: str) -> GiftSuggestion | None:
        """Return a suggestion by its ID, or None if not found."""

    @abstractmethod
    def exists(self, suggestion_id: str) -> bool:
        """True if a suggestion with this ID is stored."""

    @abstractmethod
    def list_all(self) -> list[GiftSuggestion]:
        """Return every suggestion in insertion order."""

    @abstractmethod
    def save(self, suggestion: GiftSuggestion) -> GiftSuggestion:
        """Persist a new or updated suggestion and return it."""

    @abstractmethod
    def delete(self, suggestion_id: str) -> None:
        """Remove a suggestion.  Owned gifts are removed by the caller."""

    def find_all(self, spec: Specification[GiftSuggestion]) -> list[GiftSuggestion]:
        return [s for s in self.list_all() if spec.matches(s)]

    def find(
        self, spec: Specification[GiftSuggestion], page_request: PageRequest
    ) -> Page[GiftSuggestion]:
        return page_request.apply(self.find_all(spec))

    def count(self, spec: Specification[GiftSuggestion]) -> int:
        return len(self.find_all(spec))
