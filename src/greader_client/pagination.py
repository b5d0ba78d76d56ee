"""Helpers that drain the unread stream across continuation pages.

``GoogleReaderClient.list_unread`` returns exactly one page per call; these
follow the cursor for callers that want everything.
"""

import logging
from collections.abc import AsyncIterator

from .client import GoogleReaderClient
from .models import Item, ListResponse

logger = logging.getLogger(__name__)


async def iter_unread_pages(
    client: GoogleReaderClient,
    continuation: str | None = None,
    max_pages: int | None = None,
) -> AsyncIterator[ListResponse]:
    """Yield unread pages until the server stops returning a continuation.

    Args:
        client: Session to query
        continuation: Cursor to resume from, or None for the first page
        max_pages: Stop after this many pages even if more remain
    """
    pages = 0
    while max_pages is None or pages < max_pages:
        page = await client.list_unread(continuation)
        pages += 1
        yield page
        if page.continuation is None:
            return
        continuation = page.continuation
    logger.debug("Stopped after %d pages with cursor %s pending", pages, continuation)


async def iter_unread_items(
    client: GoogleReaderClient,
    continuation: str | None = None,
    max_pages: int | None = None,
) -> AsyncIterator[Item]:
    async for page in iter_unread_pages(client, continuation, max_pages):
        for item in page.items:
            yield item


async def collect_unread(
    client: GoogleReaderClient,
    max_pages: int | None = None,
) -> list[Item]:
    """Return every unread item across all pages."""
    return [item async for item in iter_unread_items(client, max_pages=max_pages)]
