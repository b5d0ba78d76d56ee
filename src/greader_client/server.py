"""MCP server entry point for a Google Reader account.

Runs FastMCP with Streamable HTTP transport so MCP clients can discover
and call tools via HTTP POST to /mcp. The session is shared by all tool
calls and closed when the server shuts down.
"""

import logging
import sys
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from fastmcp import FastMCP

from .client import GoogleReaderClient
from .config import load_config
from .tools import register_tools

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def session_lifespan(
    client: GoogleReaderClient,
) -> Callable[[FastMCP], AbstractAsyncContextManager[dict]]:
    """Build a FastMCP lifespan that closes ``client`` on shutdown."""

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[dict]:
        try:
            yield {}
        finally:
            logger.info("Closing session for %s", client.server_url)
            await client.aclose()

    return lifespan


def create_server(client: GoogleReaderClient) -> FastMCP:
    mcp = FastMCP("greader-mcp", lifespan=session_lifespan(client))
    register_tools(mcp, client)
    return mcp


def main() -> None:
    """Run the Google Reader MCP server until interrupted."""
    config = load_config()
    configure_logging(config.log_level)

    client = GoogleReaderClient.from_config(config)
    mcp = create_server(client)

    logger.info(
        "Serving %s on %s:%d (streamable-http)",
        client.server_url,
        config.server_host,
        config.server_port,
    )
    mcp.run(
        transport="streamable-http",
        host=config.server_host,
        port=config.server_port,
    )


if __name__ == "__main__":
    main()
