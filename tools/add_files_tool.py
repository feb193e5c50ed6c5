# tools/add_files_tool.py

import logging
from pathlib import Path
from typing import List, Optional

from langchain_core.tools import tool
from pydantic import BaseModel, Field

from common.config import get_settings
from creation.local_host import CollectingNotifier, LocalEditorSink, build_local_session
from creation.orchestrator import create_from_expression
from tools.editor_mcp_tools import McpEditorSink

logger = logging.getLogger(__name__)

# --- Pydantic Schemas for Tool Input/Output ---

class AddFilesInput(BaseModel):
    expression: str = Field(
        description=(
            "Comma-separated files to create, with optional extension lists in parentheses "
            "and a trailing '/' for folders, e.g. 'home.(html,js), about.(html,js,css), assets/'."
        )
    )
    folder_relative_to_repo: Optional[str] = Field(
        default=None,
        description="The folder within the repo to create the files in. Defaults to the repo root.",
    )

class AddFilesOutput(BaseModel):
    ok: bool = Field(description="True if every entry was created and the batch was not aborted.")
    created: List[str] = Field(default_factory=list, description="Paths that were created, relative to the repo.")
    skipped: List[str] = Field(default_factory=list, description="Paths that already existed, relative to the repo.")
    messages: List[str] = Field(default_factory=list, description="Notices produced while creating the files.")
    aborted: bool = Field(default=False, description="True if a path outside the repo stopped the batch.")


def _relative_to(path: str, root: Path) -> str:
    try:
        return Path(path).relative_to(root).as_posix()
    except ValueError:
        return path

# --- Tool Implementation ---

@tool(args_schema=AddFilesInput)
async def add_files(expression: str, folder_relative_to_repo: Optional[str] = None) -> AddFilesOutput:
    """
    Creates one or more files and folders in the repository workspace from a compact expression.
    Existing files are never overwritten and nothing is created outside the repository.
    """
    logger.info(f"Tool: add_files called with expression: '{expression}' in dir: '{folder_relative_to_repo}'")
    settings = get_settings()
    editor = McpEditorSink() if settings.EDITOR_BACKEND == "mcp" else LocalEditorSink()
    notifier = CollectingNotifier()
    session = build_local_session(settings, editor=editor, notifier=notifier)

    root = session.project.root_folder
    folder = root / folder_relative_to_repo if folder_relative_to_repo else root

    try:
        report = await create_from_expression(session, expression, folder)
    except Exception as e:
        error_message = f"Unexpected error in add_files tool for '{expression}': {e}"
        logger.error(error_message, exc_info=True)
        return AddFilesOutput(ok=False, messages=[error_message])

    created = [_relative_to(p, root) for p in report.created]
    skipped = [_relative_to(p, root) for p in report.skipped]
    messages = list(notifier.messages)
    if not report.entries:
        messages.append(f"Nothing to create for '{expression}' in '{folder}'.")

    ok = bool(report.entries) and not report.aborted and len(created) == len(report.entries)
    return AddFilesOutput(ok=ok, created=created, skipped=skipped, messages=messages, aborted=report.aborted)
