"""Pagination models."""
from dataclasses import dataclass, field
from typing import Generic, List, TypeVar

T = TypeVar('T')


@dataclass(frozen=True)
class PageCursor:
    """
    Continuation cursor.

    Attributes:
        token: Opaque next_max_id value ('' when absent)
        more_available: Server says another page exists
    """
    token: str = ''
    more_available: bool = False

    @property
    def exhausted(self) -> bool:
        return not self.more_available or not self.token

    @classmethod
    def end(cls) -> 'PageCursor':
        return cls('', False)

    @classmethod
    def from_response(cls, next_max_id, more_available: bool) -> 'PageCursor':
        """Build from the raw next_max_id (str, int or None) and flag."""
        token = '' if next_max_id is None else str(next_max_id)
        return cls(token, bool(more_available))


@dataclass
class Page(Generic[T]):
    """One decoded page."""
    items: List[T]
    cursor: PageCursor = field(default_factory=PageCursor.end)


@dataclass
class AggregatedPage(Generic[T]):
    """
    Items gathered across pages.

    Owned by the call that created it.
    """
    items: List[T] = field(default_factory=list)
    page_count: int = 0
    cursor: PageCursor = field(default_factory=PageCursor.end)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)
