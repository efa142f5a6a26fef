"""Cycle reporting for graphs the topological sort could not order.

Purely diagnostic: the run fails whenever a cycle exists, this module only
finds one to show the user.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Set

from .graph import DependencyGraph
from .models import display_path


def _walk_from(graph: DependencyGraph, start: int, cleared: Set[int]) -> Optional[List[int]]:
    """Depth-first walk from ``start`` with a path-scoped visited set.

    ``cleared`` holds nodes whose whole reachable subgraph was already
    walked without meeting the current path; they can be skipped.
    """
    path: List[int] = [start]
    on_path: Set[int] = {start}
    # Stack of (node, position of the next edge to follow)
    stack: List[List[int]] = [[start, 0]]

    while stack:
        frame = stack[-1]
        node, position = frame
        targets = graph.targets_at(node)
        if position < len(targets):
            frame[1] += 1
            target = targets[position]
            if target in on_path:
                start_at = path.index(target)
                return path[start_at:] + [target]
            if target in cleared:
                continue
            path.append(target)
            on_path.add(target)
            stack.append([target, 0])
        else:
            stack.pop()
            path.pop()
            on_path.discard(node)
            cleared.add(node)
    return None


def find_cycle(graph: DependencyGraph) -> List[Path]:
    """Return the first cycle found, closed (``[a, b, a]``), or ``[]``.

    Fragments are tried in universe order; each one gets a fresh walk.
    """
    cleared: Set[int] = set()
    for start in range(len(graph)):
        if start in cleared:
            continue
        cycle = _walk_from(graph, start, cleared)
        if cycle:
            return [graph.node_at(i) for i in cycle]
    return []


def describe_cycle(cycle: Sequence[Path], root: Optional[Path] = None) -> str:
    """Render a cycle as ``a.txt -> b.txt -> a.txt``."""
    if root is None:
        return " -> ".join(path.name for path in cycle)
    return " -> ".join(display_path(path, root) for path in cycle)


__all__ = ["describe_cycle", "find_cycle"]
