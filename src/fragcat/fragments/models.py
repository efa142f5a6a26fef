"""Core data models for fragment assembly."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


@dataclass(frozen=True)
class Fragment:
    """One unit of text identified by its resolved path."""
    path: Path  # Resolved, absolute; this is the identifier
    lines: Tuple[str, ...] = ()  # Content without line terminators

    def __post_init__(self) -> None:
        if not self.path.is_absolute():
            raise ValueError(f"Fragment path must be resolved: {self.path}")

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class UnresolvedDependency:
    """A directive whose target is not part of the fragment universe.

    Recoverable: the edge is dropped and the record is reported as a warning.
    """
    dependent: Path
    target: Path
    line_number: int  # 1-based
    raw_path: str

    @property
    def message(self) -> str:
        return (
            f"Warning: {self.target} not found, skipped "
            f"(required by {self.dependent.name}, line {self.line_number})"
        )


def display_path(path: Path, root: Path) -> str:
    """Render ``path`` relative to ``root`` for console output."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


__all__ = ["Fragment", "UnresolvedDependency", "display_path"]
