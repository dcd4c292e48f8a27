"""Abstract repository for ConcreteGift entities."""

from __future__ import annotations

from abc import ABC, abstractmethod

from gcs.domain.model.concrete_gift import ConcreteGift
from gcs.domain.model.paging import Page, PageRequest
from gcs.domain.query import Specification


class ConcreteGiftRepository(ABC):

    @abstractmethod
    def get_by_id(self, gift_id: str) -> ConcreteGift | None:
        """Return a concrete gift by its ID, or None if not found."""

    @abstractmethod
    def exists(self, gift_id: str) -> bool:
        """True if a concrete gift with this ID is stored."""

    @abstractmethod
    def list_all(self) -> list[ConcreteGift]:
        """Return every concrete gift in insertion order."""

    @abstractmethod
    def list_by_suggestion_id(self, suggestion_id: str) -> list[ConcreteGift]:
        """Return the gifts owned by one suggestion."""

    @abstractmethod
    def save(self, gift: ConcreteGift) -> ConcreteGift:
        """Persist a new or updated gift and return it."""

    @abstractmethod
    def delete(self, gift_id: str) -> None:
        """Remove one gift."""

    @abstractmethod
    def delete_by_suggestion_id(self, suggestion_id: str) -> int:
        """Remove every gift owned by a suggestion; return how many."""

    def find_all(self, spec: Specification[ConcreteGift]) -> list[ConcreteGift]:
        return [g for g in self.list_all() if spec.matches(g)]

    def find(
        self, spec: Specification[ConcreteGift], page_request: PageRequest
    ) -> Page[ConcreteGift]:
        return page_request.apply(self.find_all(spec))

    def count(self, spec: Specification[ConcreteGift]) -> int:
        return len(self.find_all(spec))
