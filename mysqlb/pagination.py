"""Read-only view over one page of a paginated SELECT."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from math import ceil
from typing import Any, Generic, Optional

from typing_extensions import TypeVar

__all__ = ("Paginator",)

T = TypeVar("T", default="dict[str, Any]")


@dataclass(frozen=True)
class Paginator(Generic[T]):
    """Container for data returned using limit/offset pagination.

    Built once from the result of a count query and a bounded query; never mutated.
    """

    total: int
    """Number of rows matching the query, ignoring pagination bounds."""
    limit: int
    """Maximal number of items on a page."""
    current: int
    """Page number of ``items``, starting at 1."""
    items: Sequence[T] = field(default_factory=tuple)
    """Rows on the current page."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def count_in_page(self) -> int:
        return self.limit

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.limit)

    @property
    def first_page(self) -> int:
        return 1

    @property
    def last_page(self) -> int:
        return self.total_pages

    @property
    def prev_page(self) -> Optional[int]:
        """Previous page number, or ``None`` on the first page."""
        if self.current > 1:
            return self.current - 1
        return None

    @property
    def next_page(self) -> Optional[int]:
        """Next page number, or ``None`` on (or past) the last page."""
        if self.current < self.total_pages:
            return self.current + 1
        return None

    @property
    def offset(self) -> int:
        """Offset of the first item of the page."""
        return self.limit * (self.current - 1)
