# tests/conftest.py

import sys
from pathlib import Path

# Add the project root directory to the system path to ensure
# modules like 'common' and 'creation' can be imported in tests.
# The project root is one level up from this directory (tests/conftest.py).
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest
import pytest_asyncio
from typing import AsyncIterator, Dict, List, Optional, Tuple
from contextlib import asynccontextmanager

from fastmcp import Client

from common.config import Settings
from creation.host import HostSession
from creation.local_host import CollectingNotifier, LocalEditorSink, build_local_session
from tool_server import build_editor_server


# --- Helper Functions ---

@asynccontextmanager
async def mock_mcp_session_cm(client_to_yield: Client) -> AsyncIterator[Client]:
    """
    A reusable async context manager to mock common.mcp_session.open_mcp_session.

    Yields the provided FastMCP client instance.
    """
    yield client_to_yield


class RecordingTelemetrySink:
    """Keeps every tracked event for assertions."""

    def __init__(self):
        self.events: List[Tuple[str, Optional[Dict[str, str]]]] = []

    def track_event(self, name: str, properties: Optional[Dict[str, str]] = None) -> None:
        self.events.append((name, properties))


# --- Fixtures ---

@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """An empty project root folder."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    """A templates directory with a couple of boilerplate files."""
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "cs.txt").write_text("namespace {namespace}\n{\n    class {itemname} { $ }\n}\n", encoding="utf-8")
    (templates / "html.txt").write_text("<html>$</html>", encoding="utf-8")
    return templates


@pytest.fixture
def test_settings(workspace: Path, templates_dir: Path) -> Settings:
    return Settings(
        REPO_DIR=workspace,
        TEMPLATES_DIR=templates_dir,
        PROJECT_NAME="Demo App",
        _env_file=None,
    )


@pytest.fixture
def session(test_settings: Settings) -> HostSession:
    """A local host session with a recording telemetry sink."""
    session = build_local_session(test_settings, editor=LocalEditorSink(), notifier=CollectingNotifier())
    session.telemetry = RecordingTelemetrySink()
    return session


# --- FastMCP Editor Host ---

@pytest.fixture
def host_editor() -> LocalEditorSink:
    return LocalEditorSink()


@pytest_asyncio.fixture
async def editor_client(host_editor: LocalEditorSink) -> AsyncIterator[Client]:
    """Yields a FastMCP Client connected in memory to the editor host server."""
    server = build_editor_server(host_editor, name="EditorHostTestServer")
    async with Client(server) as c:
        yield c
