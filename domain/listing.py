"""Best-effort aggregation of paginated platform listings."""
import logging
from typing import Callable, Iterator, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_ITEMS_PER_PAGE = 1000


def iter_pages(
    fetch_page: Callable[[int, int], list[T]],
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
) -> Iterator[list[T]]:
    """
    Yield pages 1, 2, ... of a listing until one comes back empty.

    Pages are fetched lazily, so a caller that stops iterating stops
    requesting. Errors from fetch_page propagate.
    """
    page = 1
    while True:
        batch = fetch_page(page, items_per_page)
        if not batch:
            return
        yield batch
        page += 1


def list_all(
    fetch_page: Callable[[int, int], list[T]],
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
) -> list[T]:
    """
    Collect every item from a paginated listing.

    Requests pages 1, 2, ... until a page comes back empty. A failure on
    any page ends the loop and the items gathered so far are returned;
    the error is logged, not raised.

    Args:
        fetch_page: Called as fetch_page(page, items_per_page).
        items_per_page: Page size sent with every request.

    Returns:
        Items in the order the pages returned them.
    """
    items: list[T] = []
    pages = 0
    try:
        for batch in iter_pages(fetch_page, items_per_page):
            pages += 1
            items.extend(batch)
    except Exception as e:
        logger.warning(
            f"Listing stopped at page {pages + 1} after {len(items)} items: {e}"
        )

    logger.debug(f"Listing collected {len(items)} items over {pages} pages")
    return items
