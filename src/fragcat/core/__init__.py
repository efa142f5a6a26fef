"""Core utilities and configuration exports."""

from .constants import (
    CONFIG_FILENAME,
    DEFAULT_ENCODING,
    DEFAULT_EXTENSIONS,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_ROOT_DIR,
    FRAGCAT_DIR,
)
from .paths import locate_project_root, resolve_project_root

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_ENCODING",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_OUTPUT_FILE",
    "DEFAULT_ROOT_DIR",
    "FRAGCAT_DIR",
    "locate_project_root",
    "resolve_project_root",
]
