from typing import List

from markdown_combiner.vault import FileNode, FolderNode

MARKDOWN_EXTENSION = "md"


def collect_documents(folder: FolderNode, extension: str = MARKDOWN_EXTENSION) -> List[FileNode]:
    """
    Collects every document below ``folder``, depth first.

    Documents are returned in child order, with a subfolder's documents
    spliced in where the subfolder appears. Callers sort the result.
    """
    documents: List[FileNode] = []
    for child in folder.children:
        if isinstance(child, FolderNode):
            documents.extend(collect_documents(child, extension))
        elif isinstance(child, FileNode) and child.extension == extension:
            documents.append(child)
    return documents


def relative_path(file: FileNode, folder: FolderNode) -> str:
    """Returns ``file.path`` with ``folder``'s own path prefix stripped."""
    if folder.is_root:
        return file.path
    prefix = folder.path.rstrip("/") + "/"
    if file.path.startswith(prefix):
        return file.path[len(prefix):]
    return file.path
