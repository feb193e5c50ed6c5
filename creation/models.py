# creation/models.py

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


class TargetPath(BaseModel):
    """A parsed entry resolved to an absolute path inside the project root."""
    entry: str = Field(description="The expanded relative path the target was built from.")
    path: Path = Field(description="Absolute path of the file to create.")
    directory: Path = Field(description="Directory containing `path`.")
    is_placeholder: bool = Field(default=False, description="True for folder-only entries.")

    @property
    def display_path(self) -> Path:
        """The path shown to users. Placeholder targets show their folder."""
        return self.directory if self.is_placeholder else self.path


class TemplateResult(BaseModel):
    text: str = ""
    caret_offset: int = Field(default=0, ge=0, description="0 means the caret is not moved.")


class EntryState(str, Enum):
    PENDING = "pending"
    VALIDATED = "validated"
    WRITTEN = "written"
    REGISTERED = "registered"
    OPENED = "opened"
    DONE = "done"
    SKIPPED = "skipped"
    ABORTED = "aborted"
    FAILED = "failed"


class EntryOutcome(BaseModel):
    """What happened to a single parsed entry."""
    entry: str
    state: EntryState = EntryState.PENDING
    path: Optional[str] = Field(default=None, description="Display path of the target, if it was resolved.")
    caret_offset: int = 0
    message: Optional[str] = None


class BatchReport(BaseModel):
    """Result of one expression being turned into files."""
    expression: str
    folder: Optional[str] = None
    entries: List[str] = Field(default_factory=list)
    outcomes: List[EntryOutcome] = Field(default_factory=list)
    aborted: bool = False
    messages: List[str] = Field(default_factory=list, description="User-visible notices raised during the batch.")

    @property
    def created(self) -> List[str]:
        return [o.path for o in self.outcomes if o.state == EntryState.DONE and o.path]

    @property
    def skipped(self) -> List[str]:
        return [o.path for o in self.outcomes if o.state == EntryState.SKIPPED and o.path]
