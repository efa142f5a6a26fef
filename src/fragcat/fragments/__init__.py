"""Fragment dependency engine.

Modules:
    discovery: recursive fragment discovery
    store: in-memory fragment store
    extraction: ``*require '<path>'*`` directive scanning
    graph: dependency graph and builder
    sorting: topological sort (Kahn)
    cycles: cycle reporting for failed sorts
    assembler: writes the ordered document
    pipeline: end-to-end orchestration
"""

from __future__ import annotations

from .assembler import write_assembly
from .cycles import describe_cycle, find_cycle
from .discovery import discover_fragments
from .extraction import REQUIRE_PATTERN, extract_dependencies, iter_directives
from .graph import DependencyGraph, build_dependency_graph
from .models import Fragment, UnresolvedDependency
from .sorting import topological_order
from .store import FragmentStore

__all__ = [
    "DependencyGraph",
    "Fragment",
    "FragmentStore",
    "REQUIRE_PATTERN",
    "UnresolvedDependency",
    "build_dependency_graph",
    "describe_cycle",
    "discover_fragments",
    "extract_dependencies",
    "find_cycle",
    "iter_directives",
    "topological_order",
    "write_assembly",
]
