from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

import pytest


FragmentWriter = Callable[[Dict[str, str]], Path]


@pytest.fixture()
def fragment_root(tmp_path: Path) -> Path:
    root = tmp_path / "resources"
    root.mkdir()
    return root.resolve()


@pytest.fixture()
def write_fragments(fragment_root: Path) -> FragmentWriter:
    """Write ``{relative_path: content}`` under the fragment root."""

    def _write(files: Dict[str, str]) -> Path:
        for relative, content in files.items():
            target = fragment_root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return fragment_root

    return _write
