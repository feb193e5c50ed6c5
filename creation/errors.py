# creation/errors.py

from pathlib import Path


class CreationError(Exception):
    """Base class for failures while creating files from an expression."""


class ContainmentViolation(CreationError):
    """A target path resolves outside of the project root folder."""

    def __init__(self, path: Path, root: Path):
        self.path = path
        self.root = root
        super().__init__(f"The path '{path}' is outside the project folder.")


class AlreadyExists(CreationError):
    """The target file is already present on disk."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"The file '{path}' already exists.")


class RegistrationFailure(CreationError):
    """The host project index refused to register a file."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to register '{path}' with the project: {reason}")
