"""
Defines the abstract base class for all lyric provider plugins.

This module provides the `BasePlugin` ABC, the two-phase interface every
provider follows: `search` returns candidates with opaque ids, `get_lyrics`
resolves one of those ids later. Plugins are async context managers so that
HTTP sessions are opened and closed around a batch of calls.
"""

from abc import ABC, abstractmethod
from typing import List

from ..core.models import LyricResponse, RemoteLyricInfo, TrackQuery


class BasePlugin(ABC):
    """An abstract base class that all provider plugins must inherit from."""

    name: str = "base"

    async def authenticate(self):
        """
        Authenticate with the service.

        Public lyric catalogs need no credentials, so the default does nothing.
        """
        pass

    @abstractmethod
    async def search(self, query: TrackQuery) -> List[RemoteLyricInfo]:
        """Return matching lyrics, an empty list when nothing usable was found."""

    @abstractmethod
    async def get_lyrics(self, lyric_id: str) -> LyricResponse:
        """Resolve an id produced by `search`; raises LyricsNotFoundError."""

    async def __aenter__(self):
        await self.authenticate()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None
