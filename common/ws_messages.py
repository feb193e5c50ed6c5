# common/ws_messages.py

from typing import Any, Literal, Optional
from pydantic import BaseModel, Field

from creation.models import EntryOutcome

# Base model for all WebSocket messages to ensure they have a type field 't'
class WsMessage(BaseModel):
    t: str = Field(..., description="The type of the message.")
    d: Any = Field(..., description="The data payload of the message.")

# --- Client -> Server ---

class AddFilesRequest(BaseModel):
    """A request to create files, sent over HTTP or WebSocket."""
    expression: str = Field(..., description="The compact multi-file expression typed by the user.")
    folder: Optional[str] = Field(
        default=None,
        description="Folder relative to the workspace root. Defaults to the root.",
    )

# --- Server -> Client ---

class EntryMessage(WsMessage):
    """The outcome of a single parsed entry."""
    t: Literal["entry"] = "entry"
    d: EntryOutcome

class NoticeMessage(WsMessage):
    """A user-visible notice, e.g. a file that already exists."""
    t: Literal["notice"] = "notice"
    d: str = Field(..., description="The notice text.")

class FinalData(BaseModel):
    created: int
    skipped: int
    aborted: bool

class FinalMessage(WsMessage):
    """Sent once a batch has been processed completely."""
    t: Literal["final"] = "final"
    d: FinalData

class ErrorMessage(WsMessage):
    """A message indicating an error occurred while handling a request."""
    t: Literal["error"] = "error"
    d: str = Field(..., description="The error message.")
