"""Transaction boundary supplied by the persistence layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager


class Transaction(ABC):

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Context manager: all writes inside commit together or not at all.

        Nested blocks join the outermost one.
        """
