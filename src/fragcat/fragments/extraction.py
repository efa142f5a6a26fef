"""Dependency extraction from ``*require '<path>'*`` directives.

Each line contributes at most one candidate edge: the first directive on
the line wins. Targets are resolved against the fragment root and must be
part of the known universe; anything else is reported and dropped.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Collection, Iterable, Iterator, List, Optional, Tuple

from fragcat.diagnostics import DiagnosticSink

from .models import Fragment, UnresolvedDependency

logger = logging.getLogger(__name__)

# Compiled once; <path> is non-empty and may not contain a quote
REQUIRE_PATTERN = re.compile(r"\*require '([^']+)'\*")


def iter_directives(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
    """Yield ``(line_number, raw_path)`` for every line carrying a directive.

    Line numbers are 1-based.
    """
    for line_number, line in enumerate(lines, start=1):
        match = REQUIRE_PATTERN.search(line)
        if match:
            yield line_number, match.group(1)


def resolve_target(raw_path: str, root: Path) -> Path:
    """Resolve a directive path against the fragment root."""
    return (root / raw_path).resolve()


def extract_dependencies(
    fragment: Fragment,
    universe: Collection[Path],
    root: Path,
    sink: DiagnosticSink,
    unresolved: Optional[List[UnresolvedDependency]] = None,
) -> List[Path]:
    """Ordered dependency targets declared by ``fragment``.

    Args:
        fragment: Fragment to scan
        universe: Every known fragment identifier
        root: Directory directive paths are relative to
        sink: Receives one warning per unresolved directive
        unresolved: When given, unresolved directives are appended to it

    Returns:
        One target per matching line whose target is known. Repeated
        directives yield repeated targets.
    """
    root = root.resolve()
    targets: List[Path] = []
    for line_number, raw_path in iter_directives(fragment.lines):
        target = resolve_target(raw_path, root)
        if target in universe:
            targets.append(target)
            continue
        record = UnresolvedDependency(
            dependent=fragment.path,
            target=target,
            line_number=line_number,
            raw_path=raw_path,
        )
        sink.warning(record.message)
        if unresolved is not None:
            unresolved.append(record)

    logger.debug("%s declares %d dependency edge(s)", fragment.name, len(targets))
    return targets


__all__ = [
    "REQUIRE_PATTERN",
    "extract_dependencies",
    "iter_directives",
    "resolve_target",
]
