from pathlib import Path
from typing import Dict

import pytest

from markdown_combiner.vault import LocalVault


def write_tree(base: Path, files: Dict[str, str]) -> None:
    for rel_path, content in files.items():
        target = base / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")


@pytest.fixture
def make_vault(tmp_path):
    def factory(files: Dict[str, str], folders=()) -> LocalVault:
        for folder in folders:
            (tmp_path / folder).mkdir(parents=True, exist_ok=True)
        write_tree(tmp_path, files)
        return LocalVault(tmp_path)
    return factory
