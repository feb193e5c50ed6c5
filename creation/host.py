# creation/host.py
"""
Contracts between the file-creation core and the host it runs in.

The core never reaches for global state: everything it needs from the host
is bundled in a HostSession that the caller builds and passes in.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class Project(BaseModel):
    """The project that owns the files being created."""
    name: str
    root_folder: Path
    kind: str = "generic"
    root_namespace: Optional[str] = None


class ProjectItemHandle(BaseModel):
    """A registered project item, identified by its path relative to the project root."""
    path: str


class Selection(BaseModel):
    """What the user is currently looking at when they ask for new files."""
    active_document: Optional[Path] = None
    selected_item: Optional[Path] = None


# --- Collaborator Protocols ---

class ProjectSink(Protocol):
    """Registers files with the host's project index."""

    async def add_file(self, path: Path) -> ProjectItemHandle:
        ...

    async def remove_file(self, handle: ProjectItemHandle) -> None:
        ...

    async def set_item_type(self, handle: ProjectItemHandle, item_type: str) -> None:
        ...


class EditorSink(Protocol):
    """Opens documents and drives the host editor."""

    async def open(self, path: Path) -> None:
        ...

    async def move_caret(self, path: Path, offset: int) -> None:
        ...

    async def sync_navigation(self) -> None:
        ...

    async def is_format_action_available(self) -> bool:
        ...

    async def run_format_action(self) -> None:
        ...


class TemplateResolver(Protocol):
    """Supplies boilerplate text for a new file, or None."""

    async def resolve(self, project: Project, file_path: Path) -> Optional[str]:
        ...


class TelemetrySink(Protocol):
    """Fire-and-forget usage events."""

    def track_event(self, name: str, properties: Optional[Dict[str, str]] = None) -> None:
        ...


class UserNotifier(Protocol):
    """Shows a message to the user."""

    async def show_message(self, text: str) -> None:
        ...


class HostSession(BaseModel):
    """
    Everything the orchestrator needs from the host for one invocation.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    project: Project
    project_sink: Any = Field(description="A ProjectSink implementation.")
    editor: Any = Field(description="An EditorSink implementation.")
    templates: Any = Field(description="A TemplateResolver implementation.")
    telemetry: Any = Field(description="A TelemetrySink implementation.")
    notifier: Any = Field(description="A UserNotifier implementation.")

    # Lower-case extension -> project item type, e.g. {".cs": "Compile"}
    item_types: Dict[str, str] = Field(default_factory=dict)
    caret_marker: str = "$"
    folder_placeholder: str = "__dummy__"


def resolve_active_folder(selection: Selection, project: Optional[Project]) -> Optional[Path]:
    """
    Picks the folder new files are created in.

    An open document wins and yields its directory. Otherwise the selected
    item is used (its directory for a file, itself for a folder), and the
    project root is the last resort. Returns None when nothing applies.
    """
    doc = selection.active_document
    if doc is not None and doc.is_file():
        return doc.parent

    item = selection.selected_item
    if item is not None:
        return item.parent if item.is_file() else item

    if project is not None:
        return project.root_folder

    logger.debug("No active document, selection or project to resolve a folder from.")
    return None
