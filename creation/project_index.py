# creation/project_index.py

import asyncio
import logging
from pathlib import Path, PurePosixPath
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from creation.errors import RegistrationFailure
from creation.host import Project, ProjectItemHandle

logger = logging.getLogger(__name__)


# --- Namespace Helpers ---

def clean_namespace(ns: str, strip_periods: bool = True) -> str:
    """Turns a folder or project name into a namespace-safe identifier."""
    if strip_periods:
        ns = ns.replace(".", "")
    return ns.replace(" ", "").replace("-", "").replace("\\", ".").replace("/", ".")


def root_namespace(project: Project) -> str:
    return clean_namespace(project.root_namespace or project.name or "", strip_periods=False)


def namespace_for(project: Project, file_path: Path) -> str:
    """Root namespace of the project extended with the file's folder, relative to the root."""
    ns = root_namespace(project)
    try:
        relative_dir = Path(file_path).resolve().parent.relative_to(Path(project.root_folder).resolve())
    except ValueError:
        return ns

    parts = [clean_namespace(part) for part in relative_dir.parts]
    return ".".join(p for p in [ns, *parts] if p)


# --- Manifest Schemas ---

class ManifestItem(BaseModel):
    path: str = Field(description="POSIX path relative to the project root.")
    kind: Literal["file", "folder"] = "file"
    item_type: Optional[str] = None


class ProjectManifest(BaseModel):
    items: List[ManifestItem] = Field(default_factory=list)

    def find(self, path: str) -> Optional[ManifestItem]:
        return next((item for item in self.items if item.path == path), None)


# --- Project Sink ---

class ManifestProjectSink:
    """
    Project registration backed by a JSON manifest under the project root.

    Adding a file also registers every folder between the root and the file,
    so the manifest always describes a complete tree.
    """

    def __init__(self, project: Project, manifest_path: Path):
        self.project = project
        self.manifest_path = Path(manifest_path)

    def load(self) -> ProjectManifest:
        if not self.manifest_path.exists():
            return ProjectManifest()
        return ProjectManifest.model_validate_json(self.manifest_path.read_text(encoding="utf-8"))

    def save(self, manifest: ProjectManifest) -> None:
        self.manifest_path.parent.mkdir(parents=True, exist_ok=True)
        self.manifest_path.write_text(manifest.model_dump_json(indent=2) + "\n", encoding="utf-8")

    def _relative(self, path: Path) -> PurePosixPath:
        root = Path(self.project.root_folder).resolve()
        try:
            return PurePosixPath(Path(path).resolve().relative_to(root).as_posix())
        except ValueError:
            raise RegistrationFailure(Path(path), f"not inside project root '{root}'")

    def _add(self, path: Path) -> ProjectItemHandle:
        relative = self._relative(path)
        if not Path(path).is_file():
            raise RegistrationFailure(Path(path), "file does not exist")

        manifest = self.load()
        folder = PurePosixPath()
        for part in relative.parent.parts:
            folder = folder / part
            if manifest.find(str(folder)) is None:
                manifest.items.append(ManifestItem(path=str(folder), kind="folder"))

        if manifest.find(str(relative)) is None:
            manifest.items.append(ManifestItem(path=str(relative), kind="file"))
        self.save(manifest)

        logger.info(f"Registered '{relative}' with project '{self.project.name}'")
        return ProjectItemHandle(path=str(relative))

    def _remove(self, handle: ProjectItemHandle) -> None:
        manifest = self.load()
        manifest.items = [item for item in manifest.items if item.path != handle.path]
        self.save(manifest)
        logger.info(f"Unregistered '{handle.path}' from project '{self.project.name}'")

    def _set_item_type(self, handle: ProjectItemHandle, item_type: str) -> None:
        if not item_type:
            return
        manifest = self.load()
        item = manifest.find(handle.path)
        if item is None:
            logger.warning(f"Cannot set item type of unregistered item '{handle.path}'")
            return
        item.item_type = item_type
        self.save(manifest)

    async def add_file(self, path: Path) -> ProjectItemHandle:
        return await asyncio.to_thread(self._add, path)

    async def remove_file(self, handle: ProjectItemHandle) -> None:
        await asyncio.to_thread(self._remove, handle)

    async def set_item_type(self, handle: ProjectItemHandle, item_type: str) -> None:
        await asyncio.to_thread(self._set_item_type, handle, item_type)

    def registered_paths(self) -> List[str]:
        """Paths of all registered files, in registration order."""
        return [item.path for item in self.load().items if item.kind == "file"]

    def registered_folders(self) -> List[str]:
        return [item.path for item in self.load().items if item.kind == "folder"]
