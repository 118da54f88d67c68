"""Cursor pagination."""
from .models import PageCursor, Page, AggregatedPage
from .driver import paginate, append_items, PARTIAL_MESSAGE

__all__ = [
    'PageCursor',
    'Page',
    'AggregatedPage',
    'paginate',
    'append_items',
    'PARTIAL_MESSAGE',
]
