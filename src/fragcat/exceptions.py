"""Exception hierarchy for fragment assembly."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence


class FragcatError(Exception):
    """Base exception for fragcat errors."""
    pass


class ConfigError(FragcatError):
    """Raised when .fragcat/config.yaml cannot be parsed or is invalid."""


class FragmentDiscoveryError(FragcatError):
    """Raised when the fragment root directory cannot be walked."""

    def __init__(self, root: Path, reason: str):
        self.root = root
        self.reason = reason
        super().__init__(f"Cannot discover fragments under {root}: {reason}")


class FragmentReadError(FragcatError):
    """Reading a fragment from disk failed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read fragment {path}: {reason}")


class AssemblyWriteError(FragcatError):
    """Writing the assembled document failed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write {path}: {reason}")


class CyclicDependencyError(FragcatError):
    """The dependency graph contains at least one cycle.

    No valid order exists, so nothing is written. ``cycle`` holds one
    representative cycle (closed, first element repeated at the end) and
    ``unsorted`` every fragment the sorter could not emit.
    """

    def __init__(
        self,
        cycle: Sequence[Path],
        unsorted: Sequence[Path] = (),
        message: Optional[str] = None,
    ):
        """Initialize CyclicDependencyError.

        Args:
            cycle: One cycle found by the cycle reporter (may be empty if none was located)
            unsorted: Fragments left over when the topological sort stalled
            message: Optional custom message (defaults to a generated one)
        """
        self.cycle: List[Path] = list(cycle)
        self.unsorted: List[Path] = list(unsorted)

        if message:
            super().__init__(message)
        elif self.cycle:
            chain = " -> ".join(path.name for path in self.cycle)
            super().__init__(f"Cyclic dependency detected between fragments: {chain}")
        else:
            super().__init__(
                f"Cyclic dependency detected among {len(self.unsorted)} fragment(s)"
            )


__all__ = [
    "AssemblyWriteError",
    "ConfigError",
    "CyclicDependencyError",
    "FragcatError",
    "FragmentDiscoveryError",
    "FragmentReadError",
]
