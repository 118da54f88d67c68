"""
Cursor pagination driver.

Fetches the first page, then follows the cursor until it is exhausted, the
page cap is reached or a fetch fails. A failure after the first page does
not discard what was already gathered: the aggregation is returned as a
degraded success carrying the failure message.
"""
from typing import Awaitable, Callable, List, Optional, TypeVar

from .models import Page, PageCursor, AggregatedPage
from ..results import Result
from ..logging import get_logger

T = TypeVar('T')

FetchFirst = Callable[[], Awaitable[Result[Page[T]]]]
FetchNext = Callable[[str], Awaitable[Result[Page[T]]]]
Merge = Callable[[List[T], List[T]], None]

PARTIAL_MESSAGE = "Not all pages were downloaded: {reason}"

logger = get_logger('igmobile.pagination')


def append_items(target: List[T], items: List[T]) -> None:
    """Default merge: append preserving arrival order."""
    target.extend(items)


async def paginate(
    max_pages: int,
    fetch_first: FetchFirst,
    fetch_next: FetchNext,
    merge: Optional[Merge] = None
) -> Result[AggregatedPage[T]]:
    """
    Drive pagination.

    Args:
        max_pages: Page cap; 0 means no cap
        fetch_first: Coroutine function fetching page 1
        fetch_next: Coroutine function fetching the page after a cursor token
        merge: Appends a page's items to the aggregation (defaults to extend)

    Returns:
        Result[AggregatedPage]: success, PARTIAL (a later page failed) or the
        failure of the first page
    """
    if max_pages < 0:
        raise ValueError("max_pages must be >= 0")
    merge = merge or append_items

    first = await fetch_first()
    if not first.succeeded:
        return first.forward()

    aggregated: AggregatedPage[T] = AggregatedPage()
    merge(aggregated.items, first.value.items)
    aggregated.page_count = 1
    aggregated.cursor = first.value.cursor

    while not aggregated.cursor.exhausted and (max_pages == 0 or aggregated.page_count < max_pages):
        token = aggregated.cursor.token
        page = await fetch_next(token)
        if not page.succeeded:
            message = PARTIAL_MESSAGE.format(reason=page.message)
            logger.warning(f"{message} (after {aggregated.page_count} pages)")
            return Result.partial(aggregated, message)

        merge(aggregated.items, page.value.items)
        aggregated.page_count += 1
        # A server repeating the same token would loop forever
        if page.value.cursor.token == token:
            logger.warning(f"Cursor did not advance ({token}), stopping")
            aggregated.cursor = PageCursor.end()
            break
        aggregated.cursor = page.value.cursor

    logger.debug(f"Fetched {len(aggregated.items)} items in {aggregated.page_count} pages")
    return Result.success(aggregated)
