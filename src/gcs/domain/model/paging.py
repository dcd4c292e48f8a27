"""Page requests and result pages."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

from gcs.domain.exceptions import InvalidArgumentError

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index, page size and sort keys.

    ``sort`` holds attribute names; a leading ``-`` sorts that key
    descending.  With no sort keys, records keep insertion order.
    """

    page: int = 0
    size: int = 20
    sort: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.page < 0:
            raise InvalidArgumentError(f"Page index must not be negative, got {self.page}")
        if self.size < 1:
            raise InvalidArgumentError(f"Page size must be at least 1, got {self.size}")

    @property
    def offset(self) -> int:
        return self.page * self.size

    def apply(self, records: Sequence[T]) -> Page[T]:
        """Sort ``records`` and cut out this request's slice."""
        ordered = list(records)
        for key in self.sort:
            name = key.lstrip("-")
            if not name or (ordered and not hasattr(ordered[0], name)):
                raise InvalidArgumentError(f"Cannot sort by unknown property {key!r}")
        # Python's sort is stable, so sorting by each key from last to
        # first yields a multi-key order with insertion order as tiebreak.
        for key in reversed(self.sort):
            name = key.lstrip("-")
            ordered.sort(
                key=lambda record: _sort_value(getattr(record, name)),
                reverse=key.startswith("-"),
            )
        content = ordered[self.offset:self.offset + self.size]
        return Page(content=content, request=self, total_elements=len(ordered))


def _sort_value(value: object) -> tuple:
    # None sorts first; enums sort by their value.
    if value is None:
        return (0, "")
    return (1, getattr(value, "value", value))


@dataclass(frozen=True)
class Page(Generic[T]):
    content: list[T] = field(default_factory=list)
    request: PageRequest = field(default_factory=PageRequest)
    total_elements: int = 0

    @property
    def number(self) -> int:
        return self.request.page

    @property
    def size(self) -> int:
        return self.request.size

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.request.size)

    @property
    def is_first(self) -> bool:
        return self.number == 0

    @property
    def is_last(self) -> bool:
        return not self.has_next

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    def __len__(self) -> int:
        return len(self.content)

    def __iter__(self):
        return iter(self.content)
