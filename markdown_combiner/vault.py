"""
Filesystem abstraction used by the combiner.

A vault is a folder tree of notes. Folders and files are addressed by
vault-relative paths joined with ``/``; the root folder's path is ``/``.
``LocalVault`` maps a directory on disk to that model.
"""
import asyncio
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

import ascii_colors as logging

logger = logging.getLogger(__name__)

ROOT_PATH = "/"


@dataclass(frozen=True)
class FileNode:
    name: str  # without extension
    path: str
    extension: str

    @property
    def file_name(self) -> str:
        return f"{self.name}.{self.extension}" if self.extension else self.name


@dataclass(frozen=True)
class FolderNode:
    name: str
    path: str
    children: List[Union["FolderNode", FileNode]] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.path in ("", ROOT_PATH)


def join_path(folder_path: str, name: str) -> str:
    """Joins a vault folder path and an entry name."""
    if folder_path in ("", ROOT_PATH):
        return name
    return f"{folder_path.rstrip('/')}/{name}"


def split_file_name(file_name: str):
    """Splits ``note.md`` into ``("note", "md")``; dot files keep their name."""
    stem, dot, extension = file_name.rpartition(".")
    if not dot or not stem:
        return file_name, ""
    return stem, extension


class LocalVault:
    """
    A vault backed by a directory on the local disk.

    ``root()`` returns a snapshot of the directory tree. Reads and the final
    create run in worker threads so the event loop is never blocked.
    """

    def __init__(self, base_dir: Union[str, Path], include_hidden: bool = False):
        self.base_dir = Path(base_dir).resolve()
        self.include_hidden = include_hidden
        if not self.base_dir.is_dir():
            raise NotADirectoryError(f"Vault directory not found: {self.base_dir}")

    @property
    def name(self) -> str:
        return self.base_dir.name

    def root(self) -> FolderNode:
        return FolderNode(self.name, ROOT_PATH, self._scan(self.base_dir, ROOT_PATH))

    def get_folder(self, path: str) -> FolderNode:
        """Finds the folder at a vault-relative ``path`` in a fresh snapshot."""
        folder = self.root()
        for part in [p for p in path.replace("\\", "/").split("/") if p and p != "."]:
            for child in folder.children:
                if isinstance(child, FolderNode) and child.name == part:
                    folder = child
                    break
            else:
                raise KeyError(f"Folder not found in vault: {path}")
        return folder

    def _scan(self, directory: Path, vault_path: str) -> List[Union[FolderNode, FileNode]]:
        children: List[Union[FolderNode, FileNode]] = []
        with os.scandir(directory) as entries:
            for entry in sorted(entries, key=lambda e: e.name):
                if entry.name.startswith(".") and not self.include_hidden:
                    continue
                child_path = join_path(vault_path, entry.name)
                if entry.is_dir(follow_symlinks=False):
                    children.append(FolderNode(entry.name, child_path, self._scan(Path(entry.path), child_path)))
                elif entry.is_file():
                    stem, extension = split_file_name(entry.name)
                    children.append(FileNode(stem, child_path, extension))
        return children

    def resolve(self, path: str) -> Path:
        if path in ("", ROOT_PATH):
            return self.base_dir
        return self.base_dir.joinpath(*path.split("/"))

    async def read(self, file: FileNode) -> str:
        return await asyncio.to_thread(self.resolve(file.path).read_text, encoding="utf-8")

    async def create(self, path: str, content: str) -> None:
        """Creates a new file; raises ``FileExistsError`` if ``path`` exists."""
        await asyncio.to_thread(self._create, self.resolve(path), content)

    @staticmethod
    def _create(target: Path, content: str) -> None:
        with open(target, "x", encoding="utf-8") as f:
            f.write(content)
        logger.debug(f"Created {target}")
