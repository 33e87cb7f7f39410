"""Lyric provider plugins.

Each plugin implements `BasePlugin` so the CLI (or any host) can search and
fetch lyrics without knowing which catalog is behind it.
"""

from .base import BasePlugin
from .netease import NeteasePlugin

__all__ = ["BasePlugin", "NeteasePlugin"]
