# creation/orchestrator.py

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, Optional, Set

from creation.errors import AlreadyExists, ContainmentViolation
from creation.host import HostSession
from creation.materializer import materialize
from creation.models import BatchReport, EntryOutcome, EntryState, TargetPath
from creation.parser import parse_expression
from creation.writer import write_file

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[EntryOutcome], Awaitable[None]]


def file_extension(path: Path) -> str:
    """Lower-case extension of `path`; dot files such as ".gitignore" are all extension."""
    return (path.suffix or path.name).lower()


class CreationOrchestrator:
    """
    Turns an expression into files, one entry at a time.

    Entries are processed strictly in order: a later entry may live in a
    folder created by an earlier one, and host project APIs are not
    reentrant. A containment violation stops the whole batch; every other
    per-entry problem only affects that entry.
    """

    def __init__(self, session: HostSession, on_outcome: Optional[OutcomeCallback] = None):
        self.session = session
        self._on_outcome = on_outcome
        self._pending: Set[asyncio.Task] = set()

    async def run(self, expression: str, folder: Optional[Path]) -> BatchReport:
        report = BatchReport(expression=expression or "", folder=str(folder) if folder else None)

        if folder is None or not Path(folder).is_dir():
            logger.info(f"No usable folder ({folder!r}); nothing to create.")
            return report

        report.entries = parse_expression(expression or "")
        if not report.entries:
            logger.info(f"Expression {expression!r} produced no entries.")
            return report

        root = self.session.project.root_folder
        for entry in report.entries:
            outcome = EntryOutcome(entry=entry)
            try:
                target = materialize(Path(folder), entry, root, self.session.folder_placeholder)
            except ContainmentViolation as e:
                outcome.state = EntryState.ABORTED
                outcome.path = str(e.path)
                outcome.message = str(e)
                report.aborted = True
                await self._notify(report, str(e))
                await self._record(report, outcome)
                break
            except Exception as e:
                logger.error(f"Could not prepare the folder for '{entry}': {e}", exc_info=True)
                outcome.state = EntryState.FAILED
                outcome.path = str(Path(folder) / entry)
                outcome.message = str(e)
                await self._record(report, outcome)
                continue

            outcome.state = EntryState.VALIDATED
            outcome.path = str(target.display_path)
            try:
                await self._create(target, outcome)
            except AlreadyExists as e:
                outcome.state = EntryState.SKIPPED
                outcome.message = str(e)
                await self._notify(report, str(e))
            except Exception as e:
                logger.error(f"Failed to create '{entry}': {e}", exc_info=True)
                outcome.state = EntryState.FAILED
                outcome.message = str(e)
            await self._record(report, outcome)

        logger.info(
            f"Batch {expression!r} finished: {len(report.created)} created, "
            f"{len(report.skipped)} skipped, aborted={report.aborted}"
        )
        return report

    async def _create(self, target: TargetPath, outcome: EntryOutcome) -> None:
        session = self.session
        if target.path.exists():
            raise AlreadyExists(target.display_path)

        template = None
        if not target.is_placeholder:
            template = await session.templates.resolve(session.project, target.path)
            self._track("File added", {"extension": file_extension(target.path)})

        try:
            caret = await asyncio.to_thread(write_file, target.path, template, session.caret_marker)
        except FileExistsError:
            raise AlreadyExists(target.display_path)
        outcome.state = EntryState.WRITTEN
        outcome.caret_offset = caret

        if target.is_placeholder:
            await self._register_folder(target, outcome)
            return

        try:
            handle = await session.project_sink.add_file(target.path)
        except Exception as e:
            logger.error(f"Could not add '{target.path}' to the project: {e}", exc_info=True)
            outcome.message = f"Created on disk but not added to the project: {e}"
            return
        outcome.state = EntryState.REGISTERED

        item_type = session.item_types.get(file_extension(target.path))
        if item_type:
            try:
                await session.project_sink.set_item_type(handle, item_type)
            except Exception as e:
                logger.error(f"Could not set item type '{item_type}' on '{handle.path}': {e}", exc_info=True)

        await session.editor.open(target.path)
        outcome.state = EntryState.OPENED
        if caret > 0:
            await session.editor.move_caret(target.path, caret)
        await session.editor.sync_navigation()
        self._schedule_format()
        outcome.state = EntryState.DONE

    async def _register_folder(self, target: TargetPath, outcome: EntryOutcome) -> None:
        """Registers the placeholder so the host learns about the folder, then removes it."""
        session = self.session
        try:
            try:
                handle = await session.project_sink.add_file(target.path)
            except Exception as e:
                logger.error(f"Could not add folder '{target.directory}' to the project: {e}", exc_info=True)
                outcome.message = f"Folder created on disk but not added to the project: {e}"
                return
            outcome.state = EntryState.REGISTERED
            self._track("Folder added")
            await session.project_sink.remove_file(handle)
        finally:
            await asyncio.to_thread(target.path.unlink, missing_ok=True)
        outcome.state = EntryState.DONE

    def _track(self, name: str, properties=None) -> None:
        try:
            self.session.telemetry.track_event(name, properties)
        except Exception as e:
            logger.debug(f"Telemetry event '{name}' dropped: {e}")

    def _schedule_format(self) -> None:
        task = asyncio.get_running_loop().create_task(self._format_when_idle())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _format_when_idle(self) -> None:
        # Let the current pass finish before touching the editor again.
        await asyncio.sleep(0)
        editor = self.session.editor
        try:
            if await editor.is_format_action_available():
                await editor.run_format_action()
        except Exception as e:
            logger.debug(f"Format action failed: {e}")

    async def wait_for_pending_actions(self) -> None:
        """Waits for scheduled format actions to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _notify(self, report: BatchReport, text: str) -> None:
        report.messages.append(text)
        await self.session.notifier.show_message(text)

    async def _record(self, report: BatchReport, outcome: EntryOutcome) -> None:
        report.outcomes.append(outcome)
        if self._on_outcome is not None:
            await self._on_outcome(outcome)


async def create_from_expression(
    session: HostSession,
    expression: str,
    folder: Optional[Path],
    on_outcome: Optional[OutcomeCallback] = None,
) -> BatchReport:
    """Runs one batch and waits for its deferred editor actions."""
    orchestrator = CreationOrchestrator(session, on_outcome=on_outcome)
    report = await orchestrator.run(expression, folder)
    await orchestrator.wait_for_pending_actions()
    return report
