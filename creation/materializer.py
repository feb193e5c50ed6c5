# creation/materializer.py

import logging
from pathlib import Path

from creation.errors import ContainmentViolation
from creation.models import TargetPath
from creation.parser import is_folder_entry

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "__dummy__"


def is_inside_root(path: Path, root: Path) -> bool:
    """Checks that `path` resolves to `root` itself or a descendant of it."""
    resolved_root = Path(root).resolve()
    resolved = Path(path).resolve()
    return resolved == resolved_root or resolved_root in resolved.parents


def resolve_target(base_dir: Path, entry: str, root: Path, placeholder: str = PLACEHOLDER_NAME) -> TargetPath:
    """
    Joins `entry` onto `base_dir` without touching the filesystem.

    Folder-only entries get `placeholder` appended so a concrete file path is
    always produced. Raises ContainmentViolation when the result escapes `root`.
    """
    folder_only = is_folder_entry(entry)
    relative = entry + placeholder if folder_only else entry
    path = Path(base_dir) / relative

    if not is_inside_root(path, root):
        logger.warning(f"Rejected '{path}': outside of project root '{root}'")
        raise ContainmentViolation(Path(base_dir) / entry, Path(root))

    path = path.resolve()
    return TargetPath(
        entry=entry,
        path=path,
        directory=path.parent,
        is_placeholder=folder_only,
    )


def ensure_directory(directory: Path) -> None:
    """Creates `directory` and any missing parents. Existing directories are left alone."""
    Path(directory).mkdir(parents=True, exist_ok=True)


def materialize(base_dir: Path, entry: str, root: Path, placeholder: str = PLACEHOLDER_NAME) -> TargetPath:
    """Resolves `entry` against `base_dir` and makes sure its containing directory exists."""
    target = resolve_target(base_dir, entry, root, placeholder)
    ensure_directory(target.directory)
    return target
