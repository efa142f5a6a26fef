"""Write ordered fragments into a single output document."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Sequence

from fragcat.core.constants import DEFAULT_ENCODING
from fragcat.exceptions import AssemblyWriteError

from .store import FragmentStore

logger = logging.getLogger(__name__)


def write_assembly(
    order: Sequence[Path],
    store: FragmentStore,
    output: Path,
    encoding: str = DEFAULT_ENCODING,
) -> int:
    """Write each fragment's lines in ``order``, a blank line after each fragment.

    The output's parent directory is created when missing. The document is
    written to a temp file in the same directory and renamed over
    ``output``, so a failed write leaves any previous result in place.

    Returns:
        Number of lines written, separators included

    Raises:
        AssemblyWriteError: the output could not be created or written
    """
    written = 0
    tmp_path = None
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=output.parent,
            prefix=f".{output.name}.",
            suffix=".tmp",
        )
        with os.fdopen(fd, "w", encoding=encoding, newline="\n") as handle:
            for path in order:
                for line in store.get(path).lines:
                    handle.write(line)
                    handle.write("\n")
                    written += 1
                handle.write("\n")
                written += 1
        os.replace(tmp_path, output)
    except (OSError, UnicodeEncodeError) as exc:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise AssemblyWriteError(output, str(exc)) from exc

    logger.info("Wrote %d fragment(s), %d line(s) to %s", len(order), written, output)
    return written


__all__ = ["write_assembly"]
