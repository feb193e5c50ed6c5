# creation/local_host.py
"""In-process implementations of the host collaborators."""

import logging
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, Optional

from common.config import Settings
from creation.host import HostSession, Project
from creation.project_index import ManifestProjectSink
from creation.templates import FileTemplateResolver

logger = logging.getLogger(__name__)


class LocalEditorSink:
    """
    Keeps track of open documents and caret positions in memory.

    The format action counts as available once a document is active.
    """

    def __init__(self):
        self.open_documents: List[Path] = []
        self.active_document: Optional[Path] = None
        self.carets: Dict[Path, int] = {}
        self.navigation_syncs = 0
        self.formatted: List[Path] = []

    async def open(self, path: Path) -> None:
        path = Path(path)
        if path not in self.open_documents:
            self.open_documents.append(path)
        self.active_document = path
        self.carets.setdefault(path, 0)
        logger.info(f"Opened '{path}'")

    async def move_caret(self, path: Path, offset: int) -> None:
        self.carets[Path(path)] = offset
        logger.debug(f"Caret in '{path}' moved to {offset}")

    async def sync_navigation(self) -> None:
        self.navigation_syncs += 1

    async def is_format_action_available(self) -> bool:
        return self.active_document is not None

    async def run_format_action(self) -> None:
        if self.active_document is not None:
            self.formatted.append(self.active_document)
            logger.debug(f"Formatted '{self.active_document}'")


class LoggingTelemetrySink:
    """Writes telemetry events to the log instead of a remote service."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def track_event(self, name: str, properties: Optional[Dict[str, str]] = None) -> None:
        if self.enabled:
            logger.info(f"Telemetry: {name} {properties or {}}")


class CollectingNotifier:
    """Collects user-visible messages and optionally forwards them."""

    def __init__(self, forward: Optional[Callable[[str], Awaitable[None]]] = None):
        self.messages: List[str] = []
        self._forward = forward

    async def show_message(self, text: str) -> None:
        logger.warning(text)
        self.messages.append(text)
        if self._forward is not None:
            await self._forward(text)


def project_from_settings(settings: Settings) -> Project:
    root = Path(settings.REPO_DIR).resolve()
    return Project(
        name=settings.PROJECT_NAME or root.name,
        root_folder=root,
        kind=settings.PROJECT_KIND,
        root_namespace=settings.ROOT_NAMESPACE,
    )


def build_local_session(
    settings: Settings,
    editor=None,
    notifier=None,
) -> HostSession:
    """Assembles a HostSession for the workspace described by `settings`."""
    project = project_from_settings(settings)
    return HostSession(
        project=project,
        project_sink=ManifestProjectSink(project, project.root_folder / settings.PROJECT_MANIFEST),
        editor=editor if editor is not None else LocalEditorSink(),
        templates=FileTemplateResolver(settings.TEMPLATES_DIR, caret_marker=settings.CARET_MARKER),
        telemetry=LoggingTelemetrySink(enabled=settings.TELEMETRY_ENABLED),
        notifier=notifier if notifier is not None else CollectingNotifier(),
        item_types={ext.lower(): item_type for ext, item_type in settings.ITEM_TYPES.items()},
        caret_marker=settings.CARET_MARKER,
        folder_placeholder=settings.FOLDER_PLACEHOLDER,
    )
