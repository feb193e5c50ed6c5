# gateway/main.py

import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from common.config import settings, PROJECT_ROOT
from common.ws_messages import (
    AddFilesRequest,
    EntryMessage,
    ErrorMessage,
    FinalData,
    FinalMessage,
    NoticeMessage,
)
from creation.local_host import CollectingNotifier, build_local_session
from creation.materializer import is_inside_root
from creation.models import BatchReport, EntryOutcome
from creation.orchestrator import create_from_expression
from tools.editor_mcp_tools import McpEditorSink

# Configure logging
# The log level is loaded from the settings instance
logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan manager for the FastAPI application.
    Resolves REPO_DIR to an absolute path and creates it if it doesn't exist.
    """
    if not settings.REPO_DIR.is_absolute():
        settings.REPO_DIR = (PROJECT_ROOT / settings.REPO_DIR).resolve()
    settings.REPO_DIR.mkdir(parents=True, exist_ok=True)
    logger.info("--- Gateway Startup ---")
    logger.info(f"Host: {settings.HOST}")
    logger.info(f"Port: {settings.PORT}")
    logger.info(f"Log Level: {settings.LOG_LEVEL}")
    logger.info(f"Workspace (REPO_DIR): {settings.REPO_DIR}")
    logger.info(f"Editor backend: {settings.EDITOR_BACKEND}")
    logger.info("-----------------------")
    yield
    # Code here would run on shutdown
    logger.info("--- Gateway Shutdown ---")


# Create the FastAPI app instance with the lifespan manager
app = FastAPI(
    title="Add Any File Gateway",
    description="Creates files and folders in the workspace from a compact expression",
    version="0.1.0",
    lifespan=lifespan,
)


def _session(notifier: CollectingNotifier):
    editor = McpEditorSink() if settings.EDITOR_BACKEND == "mcp" else None
    return build_local_session(settings, editor=editor, notifier=notifier)


def _target_folder(root: Path, folder: str | None) -> Path:
    """Resolves the request folder; it has to stay inside the workspace."""
    target = root / folder if folder else root
    if not is_inside_root(target, root):
        raise ValueError(f"The folder '{folder}' is outside the workspace.")
    return target


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint to verify that the server is running.
    """
    logger.info("Health check endpoint was called.")
    return {"status": "ok"}


@app.post("/api/files", response_model=BatchReport, tags=["Files"])
async def add_files(request: AddFilesRequest) -> BatchReport:
    """
    Creates every file and folder named by the request's expression.
    """
    notifier = CollectingNotifier()
    session = _session(notifier)
    try:
        folder = _target_folder(session.project.root_folder, request.folder)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Received expression '{request.expression}' for folder '{folder}'")
    return await create_from_expression(session, request.expression, folder)


@app.websocket("/api/files")
async def add_files_websocket(websocket: WebSocket):
    """
    Accepts one request per message and streams back every entry outcome,
    the user-visible notices and a final summary.
    """
    await websocket.accept()
    logger.info("WebSocket connection accepted.")

    async def send_notice(text: str):
        await websocket.send_text(NoticeMessage(d=text).model_dump_json())

    async def send_outcome(outcome: EntryOutcome):
        await websocket.send_text(EntryMessage(d=outcome).model_dump_json())

    try:
        while True:
            raw_data = await websocket.receive_text()
            logger.debug(f"Received raw data: {raw_data}")

            try:
                request = AddFilesRequest.model_validate(json.loads(raw_data))
            except (json.JSONDecodeError, ValidationError) as e:
                logger.error(f"Invalid request payload: {raw_data}")
                await websocket.send_text(ErrorMessage(d=f"Invalid request: {e}").model_dump_json())
                continue

            session = _session(CollectingNotifier(forward=send_notice))
            try:
                folder = _target_folder(session.project.root_folder, request.folder)
            except ValueError as e:
                await websocket.send_text(ErrorMessage(d=str(e)).model_dump_json())
                continue

            report = await create_from_expression(session, request.expression, folder, on_outcome=send_outcome)
            await websocket.send_text(
                FinalMessage(
                    d=FinalData(
                        created=len(report.created),
                        skipped=len(report.skipped),
                        aborted=report.aborted,
                    )
                ).model_dump_json()
            )

    except WebSocketDisconnect:
        logger.info("WebSocket connection closed.")
    except Exception as e:
        logger.error(
            f"An unexpected error occurred: {e}", exc_info=True
        )
        try:
            await websocket.send_text(
                ErrorMessage(d="An internal server error occurred.").model_dump_json()
            )
            await websocket.close(code=1011)
        except Exception:
            pass  # Ignore if sending fails


# To run this application:
# uvicorn gateway.main:app --host 0.0.0.0 --port 8000 --reload
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
