"""
ASCII rendering of a folder tree, used as directory context at the top of
a combined document.
"""
from typing import List

from markdown_combiner.vault import FolderNode

TREE_BRANCH = "├── "
TREE_LAST = "└── "
TREE_VLINE = "│   "
TREE_SPACE = "    "
SEPARATOR = "---"


def _entry_name(item) -> str:
    return item.name if isinstance(item, FolderNode) else item.file_name


def sort_key(name: str):
    """Orders names case-insensitively, lowercase before uppercase on ties."""
    return (name.casefold(), name.swapcase())


def _tree_lines(folder: FolderNode, prefix: str = "") -> List[str]:
    lines = []
    items = sorted(folder.children, key=lambda item: sort_key(_entry_name(item)))
    num_items = len(items)
    for i, item in enumerate(items):
        is_last = (i == num_items - 1)
        connector = TREE_LAST if is_last else TREE_BRANCH
        if isinstance(item, FolderNode):
            lines.append(f"{prefix}{connector}{item.name}/")
            lines.extend(_tree_lines(item, prefix + (TREE_SPACE if is_last else TREE_VLINE)))
        else:
            lines.append(f"{prefix}{connector}{item.file_name}")
    return lines


def render_tree(folder: FolderNode) -> str:
    """Renders ``folder`` and everything below it, siblings sorted by name."""
    return "\n".join([f"{folder.name}/"] + _tree_lines(folder))


def render_directory_context(folder: FolderNode) -> str:
    """Wraps the rendered tree in a titled code block closed by a separator."""
    lines = [
        f"# Directory Structure: {folder.name}",
        "",
        "```text",
        render_tree(folder),
        "```",
        "",
        SEPARATOR,
        "",
    ]
    return "\n".join(lines)
