"""
NetEase Cloud Music plugin for lrcfinder.

Features:
- Async catalog search and lyric download using aiohttp
- Strict (duration-filtered) or fuzzy (query-narrowed) candidate matching
- Original and translated lyrics merged into one LRC document per hit
- Opaque `<song id>_<variant>` identifiers resolvable without a new search
"""

import logging
from typing import Any, List, Optional

import aiohttp

from ..core.assembler import ResultAssembler, select_lyrics
from ..core.config import LrcFinderSettings, get_settings
from ..core.errors import LrcFinderError, LyricsNotFoundError
from ..core.ids import LyricId
from ..core.matching import TRANSPORT_ERRORS, find_candidates
from ..core.models import (
    CatalogCandidate,
    LyricPayload,
    LyricResponse,
    RemoteLyricInfo,
    TrackQuery,
)
from ..core.ratelimit import AsyncRateLimiter
from .base import BasePlugin

logger = logging.getLogger(__name__)

SEARCH_PATH = "/api/search/get/web"
LYRIC_PATH = "/api/song/lyric"
SONG_SEARCH_TYPE = 1

_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:109.0) Gecko/20100101 Firefox/115.0"
    ),
    "Referer": "https://music.163.com",
}


def _lyric_text(data: Any, key: str) -> str:
    block = data.get(key) if isinstance(data, dict) else None
    text = block.get("lyric") if isinstance(block, dict) else None
    return text if isinstance(text, str) else ""


def _candidate_from_song(song: dict) -> Optional[CatalogCandidate]:
    """Normalize one `result.songs[]` entry; None when it has no id."""
    song_id = song.get("id")
    if song_id is None:
        return None
    album = song.get("album")
    artists = []
    for artist in song.get("artists") or []:
        if isinstance(artist, dict) and artist.get("name"):
            artists.append(str(artist["name"]))
    embedded = None
    if "lrc" in song or "tlyric" in song:
        embedded = LyricPayload(_lyric_text(song, "lrc"), _lyric_text(song, "tlyric"))
    try:
        duration_ms = int(song.get("duration") or 0)
    except (TypeError, ValueError):
        duration_ms = 0
    return CatalogCandidate(
        key=str(song_id),
        title=str(song.get("name") or ""),
        album=str(album.get("name") or "") if isinstance(album, dict) else "",
        artists=tuple(artists),
        duration_ms=duration_ms,
        embedded=embedded,
    )


def parse_search_response(data: Any) -> List[CatalogCandidate]:
    result = data.get("result") if isinstance(data, dict) else None
    songs = result.get("songs") if isinstance(result, dict) else None
    candidates: List[CatalogCandidate] = []
    for song in songs or []:
        if not isinstance(song, dict):
            continue
        candidate = _candidate_from_song(song)
        if candidate is not None:
            candidates.append(candidate)
    return candidates


def parse_lyric_response(data: Any) -> Optional[LyricPayload]:
    if not isinstance(data, dict):
        return None
    return LyricPayload(_lyric_text(data, "lrc"), _lyric_text(data, "tlyric"))


class _NeteaseApiClient:
    def __init__(
        self,
        base_url: str,
        session: aiohttp.ClientSession,
        limiter: AsyncRateLimiter | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.limiter = limiter

    async def _request(self, path: str, params: dict) -> Any:
        if not self.session:
            raise RuntimeError("API client must be used within an active session.")
        if self.limiter:
            await self.limiter.acquire()
        async with self.session.get(f"{self.base_url}{path}", params=params) as response:
            response.raise_for_status()
            try:
                # The API answers JSON with a text/plain content type
                return await response.json(content_type=None)
            except ValueError:
                logger.debug("netease: non-JSON body from %s", path)
                return None

    async def search_songs(
        self,
        song: str,
        *,
        artist: Optional[str] = None,
        album: Optional[str] = None,
        limit: int = 50,
    ) -> List[CatalogCandidate]:
        params = {"s": song, "type": SONG_SEARCH_TYPE, "limit": limit}
        if artist:
            params["artist_name"] = artist
        if album:
            params["album_name"] = album
        data = await self._request(SEARCH_PATH, params)
        return parse_search_response(data)

    async def get_lyrics(self, key: str) -> Optional[LyricPayload]:
        data = await self._request(LYRIC_PATH, {"id": key, "lv": -1, "tv": -1})
        return parse_lyric_response(data)


class NeteasePlugin(BasePlugin):
    name = "netease"

    def __init__(self, *, settings: LrcFinderSettings | None = None):
        self.settings = settings
        self.session: aiohttp.ClientSession | None = None
        self.api_client: _NeteaseApiClient | None = None

    def _settings(self) -> LrcFinderSettings:
        return self.settings if self.settings is not None else get_settings()

    def _require_client(self) -> _NeteaseApiClient:
        if self.api_client is None:
            raise LrcFinderError("NeteasePlugin must be used within `async with`.")
        return self.api_client

    async def search(self, query: TrackQuery) -> List[RemoteLyricInfo]:
        client = self._require_client()
        settings = self._settings()
        options = settings.search_options()
        candidates = await find_candidates(client, query, options)
        if not candidates:
            return []
        assembler = ResultAssembler(
            client,
            settings.provider_name,
            unmerged_embedded=settings.unmerged_embedded,
        )
        results = await assembler.assemble(candidates)
        logger.debug(
            "netease.search: %d result(s) from %d candidate(s) for %r",
            len(results),
            len(candidates),
            query.song_name,
        )
        return results

    async def get_lyrics(self, lyric_id: str) -> LyricResponse:
        client = self._require_client()
        decoded = LyricId.decode(lyric_id)
        try:
            payload = await client.get_lyrics(decoded.catalog_key)
        except TRANSPORT_ERRORS as exc:
            logger.debug(
                "Unable to get results for id %s",
                lyric_id,
                exc_info=True,
                extra={"lyric_id": lyric_id, "catalog_key": decoded.catalog_key, "provider": self.name},
            )
            raise LyricsNotFoundError(lyric_id, "catalog request failed") from exc
        if payload is None:
            raise LyricsNotFoundError(lyric_id, "catalog entry not found")
        return select_lyrics(payload, decoded.variant, lyric_id)

    async def __aenter__(self):
        await self.authenticate()
        settings = self._settings()
        timeout = aiohttp.ClientTimeout(total=settings.http_timeout)
        self.session = aiohttp.ClientSession(headers=_HEADERS, timeout=timeout)
        self.api_client = _NeteaseApiClient(
            settings.base_url,
            self.session,
            AsyncRateLimiter(settings.rps, 1.0),
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()
            self.session = None
        self.api_client = None
