# common/mcp_session.py
import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from mcp import ClientSession
from mcp.client.streamable_http import streamablehttp_client

from common.config import get_settings

logger = logging.getLogger(__name__)


def editor_host_url(base_url: str) -> str:
    """Appends the '/mcp/' path the streamable-http transport is served on."""
    url = base_url if base_url.endswith("/") else base_url + "/"
    if not url.endswith("/mcp/"):
        url += "mcp/"
    return url


@asynccontextmanager
async def open_mcp_session(timeout: Optional[float] = None) -> AsyncGenerator[ClientSession, None]:
    """
    Opens a session with the editor host's MCP server.

    Every editor call made during a batch (open, move caret, format) goes
    through one of these sessions. `timeout` defaults to MCP_TIMEOUT.
    """
    settings = get_settings()
    mcp_url = editor_host_url(os.environ.get("MCP_SERVER_URL", settings.MCP_SERVER_URL))
    timeout = settings.MCP_TIMEOUT if timeout is None else timeout

    # The streamable-http transport requires a specific Accept header.
    headers = {"Accept": "application/json, text/event-stream"}

    logger.debug(f"Connecting to editor host at {mcp_url} (timeout {timeout}s)")
    async with streamablehttp_client(mcp_url, headers=headers, timeout=timeout) as (r, w, _):
        async with ClientSession(r, w) as session:
            await session.initialize()
            yield session
