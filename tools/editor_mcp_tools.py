# tools/editor_mcp_tools.py

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from common.mcp_session import open_mcp_session

logger = logging.getLogger(__name__)


def _result_text(raw: Any) -> str:
    """Extracts the first text block from an MCP tool result."""
    # A ClientSession returns a CallToolResult, the FastMCP client may
    # hand back the list of content blocks directly.
    content_list = []
    if hasattr(raw, 'content') and isinstance(raw.content, list):
        content_list = raw.content
    elif isinstance(raw, list):
        content_list = raw

    if content_list and hasattr(content_list[0], 'text'):
        return content_list[0].text
    return ""


class McpEditorSink:
    """
    Editor sink that forwards every call to an editor host over MCP.

    The host is expected to expose the editor.* tools served by tool_server.py.
    """

    async def _call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        logger.debug(f"McpEditorSink: calling '{name}' with {arguments}")
        async with open_mcp_session() as session:
            raw = await session.call_tool(name, arguments or {})
        if getattr(raw, 'isError', False):
            raise RuntimeError(f"Editor host tool '{name}' failed: {_result_text(raw)}")
        return raw

    async def open(self, path: Path) -> None:
        await self._call("editor.open", {"path": str(path)})

    async def move_caret(self, path: Path, offset: int) -> None:
        await self._call("editor.move_caret", {"path": str(path), "offset": offset})

    async def sync_navigation(self) -> None:
        await self._call("editor.sync_navigation")

    async def is_format_action_available(self) -> bool:
        raw = await self._call("editor.format_available")
        return _result_text(raw).strip().lower() == "true"

    async def run_format_action(self) -> None:
        await self._call("editor.format")
