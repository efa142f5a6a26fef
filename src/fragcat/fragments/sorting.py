"""Topological sort of the dependency graph (Kahn's algorithm).

In-degree here counts how many edge instances name a fragment as their
*dependency target*. A fragment at zero is not required by anything still
pending, so it can be emitted next. That emits dependents before their
dependencies; the final order is the emission reversed.

Ties are broken FIFO. Seeding scans the universe from the last-discovered
fragment to the first so that, once reversed, independent fragments come
out in discovery order.
"""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Deque, List

from fragcat.exceptions import CyclicDependencyError

from .cycles import find_cycle
from .graph import DependencyGraph

logger = logging.getLogger(__name__)


def _emission_order(graph: DependencyGraph) -> List[int]:
    """Kahn's algorithm over dependent -> dependency edges, as indices."""
    size = len(graph)
    in_degree = [0] * size
    for index in range(size):
        for target in graph.targets_at(index):
            in_degree[target] += 1

    queue: Deque[int] = deque(
        index for index in reversed(range(size)) if in_degree[index] == 0
    )
    emitted: List[int] = []
    while queue:
        index = queue.popleft()
        emitted.append(index)
        for target in graph.targets_at(index):
            in_degree[target] -= 1
            if in_degree[target] == 0:
                queue.append(target)
    return emitted


def topological_order(graph: DependencyGraph) -> List[Path]:
    """Order every fragment so that dependencies precede dependents.

    Raises:
        CyclicDependencyError: the graph has a cycle; carries one cycle and
            every fragment that could not be ordered
    """
    emitted = _emission_order(graph)

    if len(emitted) != len(graph):
        done = set(emitted)
        unsorted = [graph.node_at(i) for i in range(len(graph)) if i not in done]
        cycle = find_cycle(graph)
        logger.error(
            "Topological sort stalled with %d of %d fragment(s) unordered",
            len(unsorted),
            len(graph),
        )
        raise CyclicDependencyError(cycle=cycle, unsorted=unsorted)

    order = [graph.node_at(i) for i in reversed(emitted)]
    logger.info("Ordered %d fragment(s)", len(order))
    return order


__all__ = ["topological_order"]
