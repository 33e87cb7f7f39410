"""Command groups for the lrcfinder CLI.

This package provides the commands mounted by lrcfinder.cli.
"""

from . import config as config  # noqa: F401
from . import fetch as fetch  # noqa: F401
from . import search as search  # noqa: F401

__all__ = [
    "config",
    "fetch",
    "search",
]
