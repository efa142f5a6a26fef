"""End-to-end assembly pipeline.

discovery -> extraction -> graph -> topological sort -> write. A cyclic
graph aborts the run before anything is written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Callable, List, Optional

from fragcat.diagnostics import DiagnosticSink, LoggingSink

from .assembler import write_assembly
from .discovery import discover_fragments
from .graph import DependencyGraph, build_dependency_graph
from .sorting import topological_order
from .store import FragmentStore

if TYPE_CHECKING:
    from fragcat.config import AssemblyConfig

logger = logging.getLogger(__name__)

# Step keys reported to progress callbacks, in execution order
STEP_DISCOVER = "discover"
STEP_GRAPH = "graph"
STEP_SORT = "sort"
STEP_WRITE = "write"
PIPELINE_STEPS = (STEP_DISCOVER, STEP_GRAPH, STEP_SORT, STEP_WRITE)


@dataclass
class AssemblyPlan:
    """Everything known once the order has been computed."""

    root: Path
    store: FragmentStore
    graph: DependencyGraph
    order: List[Path] = field(default_factory=list)


@dataclass
class AssemblyResult:
    """Outcome of a full assembly run."""

    plan: AssemblyPlan
    output: Path
    written: bool = False
    lines_written: int = 0


ProgressCallback = Callable[[str, str], None]


def _noop(step: str, detail: str) -> None:
    return None


def plan_assembly(
    config: "AssemblyConfig",
    sink: Optional[DiagnosticSink] = None,
    on_step: Optional[ProgressCallback] = None,
) -> AssemblyPlan:
    """Discover, load, build the graph and sort.

    Raises:
        FragmentDiscoveryError: the fragment root is missing
        FragmentReadError: a fragment could not be read
        CyclicDependencyError: no valid order exists
    """
    sink = sink or LoggingSink()
    on_step = on_step or _noop
    root = config.root_dir.resolve()

    paths = discover_fragments(root, config.extensions, exclude=[config.output_file])
    store = FragmentStore.load(paths, encoding=config.encoding)
    on_step(STEP_DISCOVER, f"{len(store)} fragment(s)")

    graph = build_dependency_graph(store, root, sink)
    on_step(STEP_GRAPH, f"{graph.edge_count} edge(s)")

    order = topological_order(graph)
    on_step(STEP_SORT, "order found")

    return AssemblyPlan(root=root, store=store, graph=graph, order=order)


def run_assembly(
    config: "AssemblyConfig",
    sink: Optional[DiagnosticSink] = None,
    dry_run: bool = False,
    on_step: Optional[ProgressCallback] = None,
) -> AssemblyResult:
    """Plan and, unless ``dry_run``, write the assembled document.

    Raises:
        Everything ``plan_assembly`` raises, plus AssemblyWriteError
    """
    plan = plan_assembly(config, sink=sink, on_step=on_step)
    result = AssemblyResult(plan=plan, output=config.output_file)
    if dry_run:
        logger.info("Dry run: skipping write of %s", config.output_file)
        return result

    result.lines_written = write_assembly(
        plan.order, plan.store, config.output_file, encoding=config.encoding
    )
    result.written = True
    (on_step or _noop)(STEP_WRITE, f"{result.lines_written} line(s)")
    return result


__all__ = [
    "AssemblyPlan",
    "AssemblyResult",
    "PIPELINE_STEPS",
    "STEP_DISCOVER",
    "STEP_GRAPH",
    "STEP_SORT",
    "STEP_WRITE",
    "plan_assembly",
    "run_assembly",
]
