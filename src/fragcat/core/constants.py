"""Shared path constants and defaults for fragcat projects."""

from __future__ import annotations

FRAGCAT_DIR = ".fragcat"
CONFIG_FILENAME = "config.yaml"

DEFAULT_ROOT_DIR = "src/resources"
DEFAULT_OUTPUT_FILE = "src/resources/output/result.txt"
DEFAULT_EXTENSIONS: tuple[str, ...] = (".txt",)
DEFAULT_ENCODING = "utf-8"

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_ENCODING",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_OUTPUT_FILE",
    "DEFAULT_ROOT_DIR",
    "FRAGCAT_DIR",
]
