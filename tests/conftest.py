"""Shared fixtures: isolated settings and an in-memory catalog."""

import logging
from typing import Dict, List, Optional

import pytest

from lrcfinder.core.config import reset_settings
from lrcfinder.core.models import CatalogCandidate, LyricPayload


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LRCF_SETTINGS_PATH", str(tmp_path / "settings.json"))
    monkeypatch.setenv("LRCF_IGNORE_LOCAL_SETTINGS", "1")
    for key in ("LRCF_STRICT", "LRCF_EXCLUDE_ARTIST", "LRCF_EXCLUDE_ALBUM"):
        monkeypatch.delenv(key, raising=False)
    reset_settings()
    root = logging.getLogger()
    level = root.level
    yield
    # drop handlers installed by setup_logging during CLI runs
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)
    for name in ("aiohttp", "asyncio"):
        logging.getLogger(name).setLevel(logging.NOTSET)
    reset_settings()


def lrc_lines(count: int, prefix: str = "line") -> str:
    return "\n".join(f"[00:{i:02d}.00]{prefix} {i}" for i in range(count))


class FakeCatalog:
    """Stands in for the NetEase API client; records every call."""

    def __init__(
        self,
        songs: Optional[List[CatalogCandidate]] = None,
        lyrics: Optional[Dict[str, LyricPayload]] = None,
        search_error: Optional[BaseException] = None,
        lyric_errors: Optional[Dict[str, BaseException]] = None,
    ):
        self.songs = list(songs or [])
        self.lyrics = dict(lyrics or {})
        self.search_error = search_error
        self.lyric_errors = dict(lyric_errors or {})
        self.search_calls: List[dict] = []
        self.lyric_calls: List[str] = []

    async def search_songs(self, song, *, artist=None, album=None, limit=50):
        self.search_calls.append({"song": song, "artist": artist, "album": album, "limit": limit})
        if self.search_error is not None:
            raise self.search_error
        return list(self.songs)

    async def get_lyrics(self, key):
        self.lyric_calls.append(key)
        if key in self.lyric_errors:
            raise self.lyric_errors[key]
        return self.lyrics.get(key)
