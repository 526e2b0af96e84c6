"""
Combines the markdown documents of a vault folder into a single document.

The whole output is assembled in memory and written with one exclusive
create, so a failed operation never leaves a partial file behind. Document
reads are issued concurrently but the output always follows the sorted
document order.

The folder snapshot is assumed not to change while an operation runs. If
files are edited or removed meanwhile, the result is best effort.
"""
import asyncio
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional

import ascii_colors as logging
from ascii_colors import trace_exception

from markdown_combiner.errors import CombinerError, EmptyInputError, ReadFailure, WriteFailure
from markdown_combiner.naming import output_name, snake_case
from markdown_combiner.settings import Settings
from markdown_combiner.tree import SEPARATOR, render_directory_context
from markdown_combiner.vault import FileNode, FolderNode, join_path
from markdown_combiner.walker import collect_documents, relative_path

logger = logging.getLogger(__name__)

VAULT_BASE_NAME = "vault_combined"


class CombineStatus(str, Enum):
    COMBINED = "combined"
    DIRECTORY_ONLY = "directory_only"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class CombineResult:
    status: CombineStatus
    file_count: int = 0
    output_name: Optional[str] = None
    output_path: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in (CombineStatus.COMBINED, CombineStatus.DIRECTORY_ONLY)

    @property
    def directory_only(self) -> bool:
        return self.status == CombineStatus.DIRECTORY_ONLY

    @property
    def message(self) -> str:
        if self.status == CombineStatus.COMBINED:
            return f"Combined {self.file_count} files into {self.output_name}"
        if self.status == CombineStatus.DIRECTORY_ONLY:
            return f"No markdown files found, wrote directory structure to {self.output_name}"
        return self.error or "Combine failed"


def document_block(header: str, content: str) -> str:
    return f"# {header}\n\n{content}\n\n{SEPARATOR}\n"


async def _read_all(vault, documents: List[FileNode]) -> List[str]:
    async def read_one(file: FileNode) -> str:
        try:
            return await vault.read(file)
        except Exception as e:
            raise ReadFailure(f"Could not read {file.path}", e) from e

    # results follow document order, so the first failure raised is the first document that failed
    results = await asyncio.gather(*(read_one(file) for file in documents), return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results


async def _combine(
    vault,
    folder: FolderNode,
    settings: Settings,
    base_name: str,
    header_for: Callable[[FileNode], str],
    now: Optional[datetime] = None,
) -> CombineResult:
    documents = sorted(collect_documents(folder), key=lambda file: relative_path(file, folder))
    logger.debug(f"Found {len(documents)} markdown files under '{folder.path}'")

    if not documents and not settings.include_directory_context:
        raise EmptyInputError(f"No markdown files found in {folder.name}")

    blocks = []
    if settings.include_directory_context:
        blocks.append(render_directory_context(folder))

    contents = await _read_all(vault, documents)
    for file, content in zip(documents, contents):
        blocks.append(document_block(header_for(file), content))

    name = output_name(base_name, settings, now)
    path = join_path(folder.path, name)
    try:
        await vault.create(path, "\n".join(blocks))
    except Exception as e:
        raise WriteFailure(f"Could not write {path}", e) from e

    logger.info(f"Combined {len(documents)} files into {path}")
    status = CombineStatus.COMBINED if documents else CombineStatus.DIRECTORY_ONLY
    return CombineResult(status, len(documents), name, path)


async def _report(operation) -> CombineResult:
    try:
        return await operation
    except EmptyInputError as e:
        logger.info(str(e))
        return CombineResult(CombineStatus.EMPTY, error=str(e))
    except CombinerError as e:
        logger.error(f"Combine failed: {e}")
        trace_exception(e)
        return CombineResult(CombineStatus.FAILED, error=f"Error combining files: {e}")


async def combine_folder(vault, folder: FolderNode, settings: Settings, now: Optional[datetime] = None) -> CombineResult:
    """
    Combines the documents under ``folder`` into ``<folder>/<snake_name>_<suffix>.md``.

    Headers show each document's path relative to ``folder``.
    """
    return await _report(_combine(
        vault,
        folder,
        settings,
        snake_case(folder.name),
        lambda file: relative_path(file, folder),
        now,
    ))


async def combine_vault(vault, settings: Settings, now: Optional[datetime] = None) -> CombineResult:
    """Combines every document of the vault into ``vault_combined_<suffix>.md`` at its root."""
    async def run() -> CombineResult:
        try:
            root = vault.root()
        except OSError as e:
            raise ReadFailure("Could not list the vault", e) from e
        return await _combine(vault, root, settings, VAULT_BASE_NAME, lambda file: file.path, now)

    return await _report(run())
