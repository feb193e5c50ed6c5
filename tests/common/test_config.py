# tests/common/test_config.py

from pathlib import Path

from common import config


def test_settings_load_defaults():
    """Tests that the Settings class loads with default values."""
    # Instantiate the class directly, providing no env file.
    settings_instance = config.Settings(_env_file=None)

    assert settings_instance.LOG_LEVEL == "INFO"
    assert "workspace_dev" in str(settings_instance.REPO_DIR)
    assert settings_instance.TEMPLATES_DIR == config.PROJECT_ROOT / "templates"
    assert settings_instance.CARET_MARKER == "$"
    assert settings_instance.FOLDER_PLACEHOLDER == "__dummy__"
    assert settings_instance.EDITOR_BACKEND == "local"
    assert settings_instance.ITEM_TYPES == {}
    assert settings_instance.TELEMETRY_ENABLED is True
    assert settings_instance.MCP_TIMEOUT == 30.0


def test_settings_load_from_env_file(tmp_path):
    """
    Tests that settings are correctly overridden by a .env file.
    tmp_path is a pytest fixture that provides a temporary directory.
    """
    env_content = """
REPO_DIR=./custom_workspace
LOG_LEVEL=DEBUG
EDITOR_BACKEND=mcp
ITEM_TYPES={".cs": "Compile"}
project_name=Shop
    """
    env_file = tmp_path / ".env"
    env_file.write_text(env_content)

    settings_instance = config.Settings(_env_file=env_file)

    assert settings_instance.LOG_LEVEL == "DEBUG"
    assert settings_instance.EDITOR_BACKEND == "mcp"
    assert settings_instance.ITEM_TYPES == {".cs": "Compile"}
    assert settings_instance.PROJECT_NAME == "Shop"
    # Relative paths are kept as-is; resolution happens where they are used.
    assert settings_instance.REPO_DIR == Path('./custom_workspace')


def test_environment_variables_override_defaults(monkeypatch):
    monkeypatch.setenv("CARET_MARKER", "|")
    monkeypatch.setenv("TELEMETRY_ENABLED", "false")

    settings_instance = config.Settings(_env_file=None)

    assert settings_instance.CARET_MARKER == "|"
    assert settings_instance.TELEMETRY_ENABLED is False


def test_get_settings_is_cached():
    assert config.get_settings() is config.get_settings()
