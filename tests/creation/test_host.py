"""Tests for the host contracts and the local host implementations."""

from pathlib import Path

import pytest

from common.config import Settings
from creation.host import Project, Selection, resolve_active_folder
from creation.local_host import (
    CollectingNotifier,
    LocalEditorSink,
    LoggingTelemetrySink,
    build_local_session,
    project_from_settings,
)
from creation.project_index import ManifestProjectSink
from creation.templates import FileTemplateResolver


def test_active_document_wins(workspace: Path):
    doc = workspace / "src" / "app.js"
    doc.parent.mkdir()
    doc.touch()
    other = workspace / "other"
    other.mkdir()

    folder = resolve_active_folder(Selection(active_document=doc, selected_item=other), None)

    assert folder == doc.parent


def test_selected_file_resolves_to_its_directory(workspace: Path):
    item = workspace / "readme.md"
    item.touch()
    assert resolve_active_folder(Selection(selected_item=item), None) == workspace


def test_selected_folder_is_used_as_is(workspace: Path):
    item = workspace / "docs"
    item.mkdir()
    assert resolve_active_folder(Selection(selected_item=item), None) == item


def test_unsaved_document_falls_back_to_project_root(workspace: Path):
    project = Project(name="p", root_folder=workspace)
    selection = Selection(active_document=workspace / "not-saved-yet.txt")
    assert resolve_active_folder(selection, project) == workspace


def test_nothing_to_resolve():
    assert resolve_active_folder(Selection(), None) is None


def test_project_from_settings(workspace: Path):
    project = project_from_settings(Settings(REPO_DIR=workspace, _env_file=None))
    assert project.name == workspace.name
    assert project.root_folder == workspace
    assert project.kind == "generic"


def test_build_local_session(test_settings: Settings, workspace: Path, templates_dir: Path):
    test_settings.ITEM_TYPES = {".CS": "Compile"}
    session = build_local_session(test_settings)

    assert session.project.name == "Demo App"
    assert isinstance(session.project_sink, ManifestProjectSink)
    assert session.project_sink.manifest_path == workspace / ".addanyfile" / "project.json"
    assert isinstance(session.editor, LocalEditorSink)
    assert isinstance(session.templates, FileTemplateResolver)
    assert session.templates.templates_dir == templates_dir
    assert isinstance(session.telemetry, LoggingTelemetrySink)
    assert isinstance(session.notifier, CollectingNotifier)
    assert session.item_types == {".cs": "Compile"}
    assert session.caret_marker == "$"
    assert session.folder_placeholder == "__dummy__"


@pytest.mark.asyncio
async def test_local_editor_tracks_documents_and_format(tmp_path: Path):
    editor = LocalEditorSink()
    assert await editor.is_format_action_available() is False

    await editor.open(tmp_path / "a.txt")
    await editor.move_caret(tmp_path / "a.txt", 7)
    await editor.sync_navigation()
    assert await editor.is_format_action_available() is True
    await editor.run_format_action()

    assert editor.open_documents == [tmp_path / "a.txt"]
    assert editor.carets[tmp_path / "a.txt"] == 7
    assert editor.navigation_syncs == 1
    assert editor.formatted == [tmp_path / "a.txt"]


@pytest.mark.asyncio
async def test_collecting_notifier_forwards_messages():
    forwarded = []

    async def forward(text: str):
        forwarded.append(text)

    notifier = CollectingNotifier(forward=forward)
    await notifier.show_message("The file 'x' already exists.")

    assert notifier.messages == ["The file 'x' already exists."]
    assert forwarded == ["The file 'x' already exists."]


def test_disabled_telemetry_sink_is_silent(caplog):
    sink = LoggingTelemetrySink(enabled=False)
    with caplog.at_level("INFO"):
        sink.track_event("File added", {"extension": ".js"})
    assert "Telemetry" not in caplog.text
