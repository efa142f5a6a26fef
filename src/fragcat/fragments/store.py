"""In-memory fragment store."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Iterator, List

from fragcat.core.constants import DEFAULT_ENCODING
from fragcat.exceptions import FragmentReadError

from .discovery import read_fragment_lines
from .models import Fragment


class FragmentStore:
    """Ordered set of fragments keyed by resolved path.

    Iteration follows insertion (discovery) order, which every ordering
    decision downstream relies on.
    """

    def __init__(self, fragments: Iterable[Fragment] = ()):
        self._fragments: Dict[Path, Fragment] = {}
        for fragment in fragments:
            if fragment.path in self._fragments:
                raise ValueError(f"Duplicate fragment: {fragment.path}")
            self._fragments[fragment.path] = fragment

    @classmethod
    def load(cls, paths: Iterable[Path], encoding: str = DEFAULT_ENCODING) -> "FragmentStore":
        """Read every path into a store.

        Raises:
            FragmentReadError: a fragment could not be read or decoded
        """
        fragments: List[Fragment] = []
        for path in paths:
            resolved = path.resolve()
            try:
                lines = read_fragment_lines(resolved, encoding)
            except (OSError, UnicodeDecodeError) as exc:
                raise FragmentReadError(resolved, str(exc)) from exc
            fragments.append(Fragment(path=resolved, lines=lines))
        return cls(fragments)

    @property
    def paths(self) -> List[Path]:
        return list(self._fragments)

    def get(self, path: Path) -> Fragment:
        return self._fragments[path]

    def __contains__(self, path: object) -> bool:
        return path in self._fragments

    def __iter__(self) -> Iterator[Fragment]:
        return iter(self._fragments.values())

    def __len__(self) -> int:
        return len(self._fragments)


__all__ = ["FragmentStore"]
