"""Project root detection."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .constants import FRAGCAT_DIR


def locate_project_root(start: Optional[Path] = None) -> Optional[Path]:
    """Walk upwards from ``start`` looking for a ``.fragcat/`` directory.

    Returns the directory that contains it, or None when no ancestor does.
    """
    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / FRAGCAT_DIR).is_dir():
            return candidate
    return None


def resolve_project_root(start: Optional[Path] = None) -> Path:
    """Project root if one is marked, else ``start`` (or the cwd) itself."""
    return locate_project_root(start) or (start or Path.cwd()).resolve()


__all__ = ["locate_project_root", "resolve_project_root"]
