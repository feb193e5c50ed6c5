# common/config.py

from functools import lru_cache
from pathlib import Path
from typing import Dict, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the project root directory (assuming this file is in project_root/common/)
# This allows .env to be loaded from the project root.
PROJECT_ROOT = Path(__file__).parent.parent.resolve()

class Settings(BaseSettings):
    """
    Defines and loads all application settings from environment variables
    and/or a .env file.
    """
    # --- Workspace Configuration ---
    # Root folder of the project that files are created in.
    # No file is ever written outside of this directory.
    REPO_DIR: Path = PROJECT_ROOT / "workspace_dev"

    # Display name of the project. Defaults to the REPO_DIR folder name.
    PROJECT_NAME: Optional[str] = None

    # Free-form project kind, e.g. "generic", "website".
    PROJECT_KIND: str = "generic"

    # Namespace substituted into templates. Falls back to the project name.
    ROOT_NAMESPACE: Optional[str] = None

    # Location of the JSON project index, relative to REPO_DIR.
    PROJECT_MANIFEST: str = ".addanyfile/project.json"

    # --- File Creation ---
    # Directory holding the "<extension>.txt" boilerplate templates.
    TEMPLATES_DIR: Path = PROJECT_ROOT / "templates"

    # Character in a template that marks where the caret lands.
    CARET_MARKER: str = "$"

    # File name used to materialize folder-only entries.
    FOLDER_PLACEHOLDER: str = "__dummy__"

    # Maps a lower-case extension (".cs") to the project item type ("Compile").
    ITEM_TYPES: Dict[str, str] = {}

    # --- Editor Host ---
    # 'local' keeps an in-process editor model, 'mcp' forwards editor
    # calls to the MCP server at MCP_SERVER_URL.
    EDITOR_BACKEND: Literal["local", "mcp"] = "local"

    # URL for the running Model Context Protocol (MCP) server.
    MCP_SERVER_URL: str = "http://127.0.0.1:8080"

    # Seconds to wait for the editor host before an editor call fails.
    MCP_TIMEOUT: float = 30.0

    # Host and port the bundled MCP tool server binds to.
    MCP_HOST: str = "127.0.0.1"
    MCP_PORT: int = 8080

    # --- System & Server Configuration ---
    # Logging level for the application (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    LOG_LEVEL: str = "INFO"

    # Telemetry events are only logged, this switch silences them.
    TELEMETRY_ENABLED: bool = True

    # Host and port for the FastAPI gateway.
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Pydantic Settings configuration
    model_config = SettingsConfigDict(
        env_file=PROJECT_ROOT / ".env",
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore' # Ignore extra fields from .env file
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Returns a cached instance of the application settings.

    The lru_cache decorator ensures that the Settings object is created only
    once, the first time this function is called. This allows test fixtures
    or other setup code to modify environment variables before the settings
    are loaded.
    """
    return Settings()


# For convenience, a global settings object is provided.
# Code that needs to be testable with different configurations should
# call get_settings() or receive a Settings instance explicitly.
settings = get_settings()
