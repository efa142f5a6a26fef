from __future__ import annotations

from pathlib import Path
from typing import Dict, List

from fragcat.fragments.graph import DependencyGraph


def require(path: str) -> str:
    """Directive line requiring ``path``."""
    return f"*require '{path}'*"


def graph_of(root: Path, edges: Dict[str, List[str]]) -> DependencyGraph:
    """Graph over ``root / name`` paths, keys in the given order."""
    mapping = {
        (root / name).resolve(): [(root / dep).resolve() for dep in deps]
        for name, deps in edges.items()
    }
    return DependencyGraph.from_mapping(mapping)


def names(paths) -> List[str]:
    return [path.name for path in paths]
