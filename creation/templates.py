# creation/templates.py

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from creation.host import Project
from creation.project_index import namespace_for
from creation.writer import CARET_MARKER

logger = logging.getLogger(__name__)


def template_candidates(file_name: str) -> List[str]:
    """
    Template file names to look for, most specific first.

    For "home.aspx.cs" this is "home.aspx.cs.txt", "aspx.cs.txt", "cs.txt".
    """
    name = file_name.lower()
    candidates = [f"{name}.txt"]
    parts = name.split(".")
    # parts[0] is the stem (empty for dot files like ".gitignore")
    for i in range(1, len(parts)):
        ext = ".".join(parts[i:])
        if ext:
            candidates.append(f"{ext}.txt")
    return list(dict.fromkeys(candidates))


class FileTemplateResolver:
    """Looks up boilerplate in a directory of "<extension>.txt" files."""

    def __init__(self, templates_dir: Path, caret_marker: str = CARET_MARKER):
        self.templates_dir = Path(templates_dir)
        self.caret_marker = caret_marker

    def _find(self, file_name: str) -> Optional[Path]:
        if not self.templates_dir.is_dir():
            return None
        for candidate in template_candidates(file_name):
            template_path = self.templates_dir / candidate
            if template_path.is_file():
                return template_path
        return None

    def _render(self, project: Project, file_path: Path) -> Optional[str]:
        template_path = self._find(file_path.name)
        if template_path is None:
            return None

        logger.debug(f"Using template '{template_path.name}' for '{file_path.name}'")
        text = template_path.read_text(encoding="utf-8")
        # "home.aspx.cs" -> "home"; dot files keep their whole name
        stem = file_path.name.split(".")[0] or file_path.name
        # Substituted values must not contain the caret marker, the writer
        # places the caret at the first one it finds.
        values = {
            "{itemname}": stem,
            "{namespace}": namespace_for(project, file_path),
        }
        for placeholder, value in values.items():
            text = text.replace(placeholder, value.replace(self.caret_marker, ""))
        return text

    async def resolve(self, project: Project, file_path: Path) -> Optional[str]:
        return await asyncio.to_thread(self._render, project, Path(file_path))
