"""MCP tool definitions for a Google Reader session.

Each tool does exactly one thing. All exceptions are caught at the
tool boundary and returned as "Error: ..." strings so the MCP protocol
never sees an uncaught exception.
"""

import asyncio
import json
import logging

from fastmcp import FastMCP

from .client import GoogleReaderClient
from .models import Item
from .pagination import collect_unread

logger = logging.getLogger(__name__)


def _truncate_summary(summary: str, max_length: int) -> str:
    """Truncate summary to max_length at a word boundary."""
    if len(summary) <= max_length:
        return summary
    return summary[:max_length].rsplit(" ", 1)[0] + "..."


def _item_to_dict(item: Item, max_summary_length: int) -> dict:
    return {
        "id": item.id,
        "title": item.title,
        "url": item.url,
        "published": item.published,
        "feed": item.origin.get("title"),
        "author": item.summary.author,
        "summary": _truncate_summary(item.summary.content or "", max_summary_length),
    }


def register_tools(mcp: FastMCP, client: GoogleReaderClient) -> None:
    """Register all Google Reader tools on the given MCP server instance."""

    # The session caches tokens without locking; run one call at a time.
    lock = asyncio.Lock()

    @mcp.tool()
    async def list_unread(continuation: str | None = None, max_summary_length: int = 500) -> str:
        """Get one page of unread items, newest first.

        Args:
            continuation: Cursor returned by a previous call, to fetch the next page.
            max_summary_length: Maximum characters for item summaries (default 500).

        Returns a JSON object with "items" and "continuation". When
        "continuation" is null there are no more pages.
        """
        try:
            async with lock:
                page = await client.list_unread(continuation)
            return json.dumps(
                {
                    "items": [_item_to_dict(i, max_summary_length) for i in page.items],
                    "continuation": page.continuation,
                }
            )
        except Exception as e:
            logger.error("list_unread failed: %s", e, exc_info=True)
            return f"Error: {e}"

    @mcp.tool()
    async def list_all_unread(max_pages: int = 10, max_summary_length: int = 500) -> str:
        """Get unread items across pages, following continuation cursors.

        Args:
            max_pages: Maximum number of pages to fetch (default 10).
            max_summary_length: Maximum characters for item summaries (default 500).

        Returns a JSON-formatted list of items.
        """
        try:
            async with lock:
                items = await collect_unread(client, max_pages=max_pages)
            return json.dumps([_item_to_dict(i, max_summary_length) for i in items])
        except Exception as e:
            logger.error("list_all_unread failed: %s", e, exc_info=True)
            return f"Error: {e}"

    @mcp.tool()
    async def mark_item_read(item_id: str) -> str:
        """Mark an item as read.

        Args:
            item_id: Item ID as returned by list_unread.

        Returns the server's response (normally "OK") or an error message.
        """
        try:
            async with lock:
                return await client.mark_item_read(item_id)
        except Exception as e:
            logger.error("mark_item_read failed: %s", e, exc_info=True)
            return f"Error: {e}"

    @mcp.tool()
    async def mark_item_unread(item_id: str) -> str:
        """Mark an item as unread.

        Args:
            item_id: Item ID as returned by list_unread.
        """
        try:
            async with lock:
                return await client.mark_item_unread(item_id)
        except Exception as e:
            logger.error("mark_item_unread failed: %s", e, exc_info=True)
            return f"Error: {e}"

    @mcp.tool()
    async def star_item(item_id: str) -> str:
        """Star an item."""
        try:
            async with lock:
                return await client.star_item(item_id)
        except Exception as e:
            logger.error("star_item failed: %s", e, exc_info=True)
            return f"Error: {e}"

    @mcp.tool()
    async def unstar_item(item_id: str) -> str:
        """Remove the star from an item."""
        try:
            async with lock:
                return await client.unstar_item(item_id)
        except Exception as e:
            logger.error("unstar_item failed: %s", e, exc_info=True)
            return f"Error: {e}"

    @mcp.tool()
    async def unread_count() -> str:
        """Get the total number of unread items.

        Not supported by FreshRSS, which returns an error here.
        """
        try:
            async with lock:
                count = await client.unread_count()
            return str(count)
        except Exception as e:
            logger.error("unread_count failed: %s", e, exc_info=True)
            return f"Error: {e}"
