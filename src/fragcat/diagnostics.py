"""Diagnostic sinks used by the dependency engine.

The engine never prints. Recoverable problems (a directive pointing at a
fragment that does not exist) are handed to a sink, and the caller decides
whether they end up in the log, on the console or in a JSON payload.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Protocol

logger = logging.getLogger(__name__)


class DiagnosticSink(Protocol):
    """Accepts human-readable warnings and errors."""

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingSink:
    """Forward diagnostics to the standard logging tree."""

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger

    def warning(self, message: str) -> None:
        self._log.warning(message)

    def error(self, message: str) -> None:
        self._log.error(message)


@dataclass
class CollectingSink:
    """Keep diagnostics in memory (JSON output, tests)."""

    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def warning(self, message: str) -> None:
        self.warnings.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_dict(self) -> dict[str, list[str]]:
        return {"warnings": list(self.warnings), "errors": list(self.errors)}


__all__ = ["CollectingSink", "DiagnosticSink", "LoggingSink"]
