# tool_server.py
import logging
from pathlib import Path
from typing import Optional

from fastmcp import FastMCP

from common.config import get_settings
from creation.local_host import LocalEditorSink, build_local_session
from creation.models import BatchReport
from creation.orchestrator import create_from_expression

logger = logging.getLogger(__name__)


def build_editor_server(editor: Optional[LocalEditorSink] = None, name: str = "AddAnyFile-Editor-Host") -> FastMCP:
    """
    Builds an MCP server that acts as the editor host.

    The editor.* tools expose an in-memory editor model; files.add runs a whole
    creation batch against the workspace using that same editor.
    """
    editor = editor if editor is not None else LocalEditorSink()
    server = FastMCP(name=name)

    # --- Editor Tools ---

    @server.tool(name="editor.open")
    async def editor_open(path: str) -> None:
        """Opens a document and makes it the active one."""
        await editor.open(Path(path))

    @server.tool(name="editor.move_caret")
    async def editor_move_caret(path: str, offset: int) -> None:
        """Moves the caret of an open document to a character offset."""
        await editor.move_caret(Path(path), offset)

    @server.tool(name="editor.sync_navigation")
    async def editor_sync_navigation() -> None:
        """Selects the active document in the navigation view."""
        await editor.sync_navigation()

    @server.tool(name="editor.format_available")
    async def editor_format_available() -> bool:
        """Reports whether the format document action can run right now."""
        return await editor.is_format_action_available()

    @server.tool(name="editor.format")
    async def editor_format() -> None:
        """Formats the active document."""
        await editor.run_format_action()

    # --- File Creation ---

    @server.tool(name="files.add")
    async def files_add(expression: str, folder: Optional[str] = None) -> BatchReport:
        """Creates the files and folders named by `expression` inside the workspace."""
        settings = get_settings()
        session = build_local_session(settings, editor=editor)
        root = session.project.root_folder
        target_folder = root / folder if folder else root
        try:
            report = await create_from_expression(session, expression, target_folder)
            logger.info(f"files.add succeeded for expression: {expression!r}")
            return report
        except Exception as e:
            logger.error(f"files.add FAILED for expression: {expression!r}: {e}")
            raise

    return server


# --- Main Execution ---

if __name__ == "__main__":
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(levelname)-8s %(name)s:%(lineno)d - %(message)s")

    mcp_server = build_editor_server()
    logger.info(f"Starting MCP Tool Server at http://{settings.MCP_HOST}:{settings.MCP_PORT}")
    logger.info(f"Workspace (REPO_DIR): {Path(settings.REPO_DIR).resolve()}")

    mcp_server.run(transport="streamable-http", host=settings.MCP_HOST, port=settings.MCP_PORT)
