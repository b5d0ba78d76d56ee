"""Tests for tools.py: tool registration and error boundaries.

These tests verify that:
1. Tools catch all exceptions and return 'Error: ...' strings
2. Tools produce correct output for happy paths
3. The _truncate_summary helper works at boundaries
"""

import json
from unittest.mock import AsyncMock

import pytest

from fakes import SERVER_URL, FakeReaderServer, make_page
from greader_client.client import GoogleReaderClient
from greader_client.exceptions import ParseError
from greader_client.tools import _truncate_summary, register_tools

# We don't need a real FastMCP server: we just need to capture the
# registered tool functions so we can call them directly.


class FakeMCP:
    """Minimal stand-in that captures tool registrations."""

    def __init__(self):
        self.tools: dict[str, object] = {}

    def tool(self):
        def decorator(fn):
            self.tools[fn.__name__] = fn
            return fn

        return decorator


@pytest.fixture
def server():
    return FakeReaderServer(
        pages={None: make_page(["a", "b"], continuation="p2"), "p2": make_page(["c"])}
    )


@pytest.fixture
def client(server):
    return GoogleReaderClient("testuser", "testpass", SERVER_URL, transport=server.transport)


@pytest.fixture
def tools(client):
    """Register tools on a fake MCP and return them as a dict."""
    fake_mcp = FakeMCP()
    register_tools(fake_mcp, client)
    return fake_mcp.tools


def test_registers_all_tools(tools):
    assert set(tools) == {
        "list_unread",
        "list_all_unread",
        "mark_item_read",
        "mark_item_unread",
        "star_item",
        "unstar_item",
        "unread_count",
    }


# --- _truncate_summary ---


class TestTruncateSummary:
    def test_short_text_unchanged(self):
        assert _truncate_summary("hello", 100) == "hello"

    def test_exact_length_unchanged(self):
        text = "a" * 50
        assert _truncate_summary(text, 50) == text

    def test_truncates_at_word_boundary(self):
        result = _truncate_summary("hello world this is a test", 15)
        assert result.endswith("...")
        assert len(result) <= 18

    def test_empty_string(self):
        assert _truncate_summary("", 100) == ""


# --- Happy paths ---


@pytest.mark.asyncio
async def test_list_unread_returns_page_and_cursor(tools):
    result = json.loads(await tools["list_unread"]())

    assert [i["id"] for i in result["items"]] == ["a", "b"]
    assert result["continuation"] == "p2"
    assert result["items"][0]["feed"] == "Example Feed"
    assert result["items"][0]["url"] == "https://example.com/a"


@pytest.mark.asyncio
async def test_list_unread_with_cursor(tools):
    result = json.loads(await tools["list_unread"](continuation="p2"))

    assert [i["id"] for i in result["items"]] == ["c"]
    assert result["continuation"] is None


@pytest.mark.asyncio
async def test_list_unread_truncates_summary(tools):
    result = json.loads(await tools["list_unread"](max_summary_length=5))
    assert result["items"][0]["summary"].endswith("...")


@pytest.mark.asyncio
async def test_list_all_unread_follows_pages(tools):
    result = json.loads(await tools["list_all_unread"]())
    assert [i["id"] for i in result] == ["a", "b", "c"]


@pytest.mark.asyncio
async def test_mark_item_read_returns_server_reply(tools, server):
    assert await tools["mark_item_read"](item_id="a") == "OK"
    assert server.paths[-1] == "/reader/api/0/edit-tag"


@pytest.mark.asyncio
async def test_unread_count(tools):
    assert await tools["unread_count"]() == "3"


# --- Error boundaries ---


@pytest.mark.asyncio
async def test_list_unread_error_returns_string(tools, client):
    client.list_unread = AsyncMock(side_effect=RuntimeError("connection lost"))

    result = await tools["list_unread"]()
    assert result.startswith("Error:")
    assert "connection lost" in result


@pytest.mark.asyncio
async def test_list_all_unread_error_returns_string(tools, client):
    client.list_unread = AsyncMock(side_effect=RuntimeError("timeout"))

    result = await tools["list_all_unread"]()
    assert result.startswith("Error:")


@pytest.mark.asyncio
async def test_unread_count_unsupported_server(tools, server):
    server.unread_count_body = "ERROR"

    result = await tools["unread_count"]()
    assert result.startswith("Error:")
    assert "unread_count" in result


@pytest.mark.asyncio
async def test_mark_item_read_error(tools, client):
    client.mark_item_read = AsyncMock(side_effect=ParseError("bad", operation="mark_item_read"))

    result = await tools["mark_item_read"](item_id="a")
    assert result.startswith("Error:")


@pytest.mark.asyncio
async def test_star_item_error(tools, client):
    client.star_item = AsyncMock(side_effect=RuntimeError("denied"))

    result = await tools["star_item"](item_id="a")
    assert result == "Error: denied"


@pytest.mark.asyncio
async def test_unstar_and_mark_unread_success(tools):
    assert await tools["unstar_item"](item_id="a") == "OK"
    assert await tools["mark_item_unread"](item_id="a") == "OK"
