"""Fragment discovery: recursive walk of the fragment root."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence

from fragcat.core.constants import DEFAULT_EXTENSIONS
from fragcat.exceptions import FragmentDiscoveryError

logger = logging.getLogger(__name__)


def normalize_extensions(extensions: Iterable[str]) -> tuple[str, ...]:
    """Return extensions with a leading dot, duplicates removed, order kept."""
    seen: list[str] = []
    for ext in extensions:
        ext = ext.strip()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = f".{ext}"
        if ext not in seen:
            seen.append(ext)
    return tuple(seen)


def discover_fragments(
    root: Path,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    exclude: Iterable[Path] = (),
) -> List[Path]:
    """Find every fragment file below ``root``.

    Returns resolved paths sorted by path components, so the order is the
    same on every run and platform. Files listed in ``exclude`` (typically
    the assembled output) are skipped.

    Raises:
        FragmentDiscoveryError: root does not exist or is not a directory
    """
    root = root.resolve()
    if not root.exists():
        raise FragmentDiscoveryError(root, "directory does not exist")
    if not root.is_dir():
        raise FragmentDiscoveryError(root, "not a directory")

    suffixes = normalize_extensions(extensions)
    excluded = {path.resolve() for path in exclude}

    try:
        candidates = [
            path.resolve()
            for path in root.rglob("*")
            if path.is_file() and path.name.endswith(suffixes)
        ]
    except OSError as exc:
        raise FragmentDiscoveryError(root, str(exc)) from exc

    fragments = sorted(path for path in set(candidates) if path not in excluded)
    logger.info("Discovered %d fragment(s) under %s", len(fragments), root)
    return fragments


def read_fragment_lines(path: Path, encoding: str = "utf-8") -> tuple[str, ...]:
    """Read a fragment as a tuple of lines without terminators.

    Only LF, CRLF and CR end a line; form feeds and Unicode line
    separators stay part of the line text.
    """
    with path.open(encoding=encoding, newline=None) as handle:
        return tuple(line.rstrip("\n") for line in handle)


__all__ = ["discover_fragments", "normalize_extensions", "read_fragment_lines"]
