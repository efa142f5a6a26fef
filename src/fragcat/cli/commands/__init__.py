"""CLI command modules for fragcat."""

from .assemble import assemble
from .check import check
from .config_cmd import config
from .order import order

__all__ = ["assemble", "check", "config", "order"]
