"""
Data shapes shared by the matcher, the assembler and the provider plugin.

Everything here is created per request and thrown away when the call returns;
nothing is cached between searches.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, Optional, Tuple

SYNCED_FORMAT = "lrc"
PLAIN_FORMAT = "txt"


class LyricVariant(str, Enum):
    """Which lyric form an identifier resolves to."""

    SYNCED = "synced"
    PLAIN = "plain"

    @property
    def output_format(self) -> str:
        return SYNCED_FORMAT if self is LyricVariant.SYNCED else PLAIN_FORMAT

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TrackQuery:
    """Loose track metadata as handed over by the caller."""

    song_name: Optional[str] = None
    artist_names: Tuple[str, ...] = ()
    album_name: Optional[str] = None
    duration: Optional[float] = None  # seconds

    @property
    def artist_name(self) -> Optional[str]:
        for name in self.artist_names:
            if name:
                return name
        return None


@dataclass(frozen=True)
class LyricPayload:
    """Raw lyric texts for one catalog entry, either may be empty."""

    original: str = ""
    translated: str = ""


@dataclass(frozen=True)
class CatalogCandidate:
    """One song entry returned by the catalog search."""

    key: str
    title: str = ""
    album: str = ""
    artists: Tuple[str, ...] = ()
    duration_ms: int = 0
    # Set only when the catalog response carried the lyrics inline
    embedded: Optional[LyricPayload] = None

    @property
    def duration(self) -> int:
        """Duration in whole seconds."""
        return self.duration_ms // 1000

    @property
    def artist(self) -> str:
        return ", ".join(self.artists)


@dataclass(frozen=True)
class SearchOptions:
    """Read-only configuration snapshot taken at the start of a search."""

    strict: bool = True
    exclude_artist: bool = False
    exclude_album: bool = False
    search_limit: int = 50


@dataclass
class LyricResponse:
    format: str
    stream: BinaryIO

    @classmethod
    def from_text(cls, text: str, format: str) -> "LyricResponse":
        return cls(format=format, stream=io.BytesIO(text.encode("utf-8")))

    def read_text(self) -> str:
        """Read the remaining stream content as UTF-8 text."""
        return self.stream.read().decode("utf-8")


@dataclass
class LyricMetadata:
    album: str = ""
    artist: str = ""
    title: str = ""
    length: float = 0.0  # seconds
    is_synced: bool = False


@dataclass
class RemoteLyricInfo:
    """A single search hit: identifier, provider, metadata and the lyric stream."""

    id: str
    provider_name: str
    metadata: LyricMetadata = field(default_factory=LyricMetadata)
    lyrics: Optional[LyricResponse] = None
