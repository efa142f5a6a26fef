"""Dependency graph over the fragment universe.

Edges point from a dependent to the fragment it requires. Fragments are
mapped to small integer indices in discovery order and the adjacency is a
list of index lists; ``Path`` stays the public key.
"""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from fragcat.diagnostics import DiagnosticSink

from .extraction import extract_dependencies
from .models import UnresolvedDependency
from .store import FragmentStore

logger = logging.getLogger(__name__)


class DependencyGraph:
    """Adjacency list keyed by fragment path.

    Every fragment of the universe has an entry, even with no dependencies,
    and every edge target is a member of the universe. Duplicate edges are
    kept: each matching directive line is its own edge instance.
    """

    def __init__(self, fragments: Iterable[Path]):
        self._nodes: List[Path] = []
        self._index: Dict[Path, int] = {}
        for path in fragments:
            if path in self._index:
                raise ValueError(f"Duplicate fragment in universe: {path}")
            self._index[path] = len(self._nodes)
            self._nodes.append(path)
        self._adjacency: List[List[int]] = [[] for _ in self._nodes]

    @classmethod
    def from_mapping(cls, mapping: Dict[Path, Sequence[Path]]) -> "DependencyGraph":
        """Build a graph from ``{fragment: [dependency, ...]}`` (insertion order kept)."""
        graph = cls(mapping)
        for dependent, dependencies in mapping.items():
            for dependency in dependencies:
                graph.add_edge(dependent, dependency)
        return graph

    def add_edge(self, dependent: Path, dependency: Path) -> None:
        """Record that ``dependent`` requires ``dependency``.

        Raises:
            KeyError: either endpoint is not in the universe
        """
        self._adjacency[self._index[dependent]].append(self._index[dependency])

    @property
    def fragments(self) -> List[Path]:
        """All fragments in universe (discovery) order."""
        return list(self._nodes)

    def dependencies_of(self, fragment: Path) -> List[Path]:
        return [self._nodes[i] for i in self._adjacency[self._index[fragment]]]

    def dependents_of(self, fragment: Path) -> List[Path]:
        """Fragments that require ``fragment``, once each, in universe order."""
        target = self._index[fragment]
        return [self._nodes[i] for i, targets in enumerate(self._adjacency) if target in targets]

    def edges(self) -> Iterator[Tuple[Path, Path]]:
        """Every edge instance as ``(dependent, dependency)``."""
        for source, targets in enumerate(self._adjacency):
            for target in targets:
                yield self._nodes[source], self._nodes[target]

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self._adjacency)

    def to_mapping(self) -> Dict[Path, List[Path]]:
        return {path: self.dependencies_of(path) for path in self._nodes}

    # Index-level access for the sorter and the cycle reporter

    def index_of(self, fragment: Path) -> int:
        return self._index[fragment]

    def node_at(self, index: int) -> Path:
        return self._nodes[index]

    def targets_at(self, index: int) -> Sequence[int]:
        return self._adjacency[index]

    def __contains__(self, fragment: object) -> bool:
        return fragment in self._index

    def __len__(self) -> int:
        return len(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DependencyGraph):
            return NotImplemented
        return self._nodes == other._nodes and self._adjacency == other._adjacency

    def __repr__(self) -> str:
        return f"DependencyGraph(fragments={len(self)}, edges={self.edge_count})"


def build_dependency_graph(
    store: FragmentStore,
    root: Path,
    sink: DiagnosticSink,
    unresolved: Optional[List[UnresolvedDependency]] = None,
) -> DependencyGraph:
    """Extract every fragment's directives and build the graph.

    Targets coming out of the extractor are trusted to be universe members.
    Unresolved directives go to ``sink`` and, when given, to ``unresolved``.
    """
    graph = DependencyGraph(store.paths)
    for fragment in store:
        targets = extract_dependencies(fragment, store, root, sink, unresolved)
        repeated = [path for path, count in Counter(targets).items() if count > 1]
        if repeated:
            # Kept as separate edges; each one counts toward in-degree
            logger.debug(
                "%s requires %s more than once",
                fragment.name,
                ", ".join(path.name for path in repeated),
            )
        for target in targets:
            graph.add_edge(fragment.path, target)

    logger.debug("Built %r", graph)
    return graph


__all__ = ["DependencyGraph", "build_dependency_graph"]
