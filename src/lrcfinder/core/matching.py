"""
Candidate matching: turns a TrackQuery into a catalog query and filters the hits.

Two strategies, selected by ``SearchOptions.strict``:

- strict: every field must be present; the catalog is searched by song name only
  and hits are filtered by duration (within ``DURATION_TOLERANCE`` seconds).
- fuzzy: song name plus whichever of artist/album are not excluded are sent as
  separate query terms; the catalog does the narrowing and no duration filter
  is applied.

Missing fields and transport failures both end in an empty list, never in an
exception.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Protocol, Sequence

import aiohttp

from .models import CatalogCandidate, LyricPayload, SearchOptions, TrackQuery

logger = logging.getLogger(__name__)

DURATION_TOLERANCE = 3  # seconds

# Exceptions treated as transport failures of the catalog
TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


class CatalogClient(Protocol):
    async def search_songs(
        self,
        song: str,
        *,
        artist: Optional[str] = None,
        album: Optional[str] = None,
        limit: int = 50,
    ) -> List[CatalogCandidate]: ...

    async def get_lyrics(self, key: str) -> Optional[LyricPayload]: ...


def missing_fields(query: TrackQuery, options: SearchOptions) -> List[str]:
    """Names of the fields the selected strategy needs but the query lacks."""
    missing: List[str] = []
    if not query.song_name:
        missing.append("Song name")
    if (options.strict or not options.exclude_artist) and not query.artist_name:
        missing.append("Artist name")
    if (options.strict or not options.exclude_album) and not query.album_name:
        missing.append("Album name")
    if options.strict and query.duration is None:
        missing.append("Duration")
    return missing


def within_tolerance(candidate: CatalogCandidate, duration: float) -> bool:
    return abs(candidate.duration - duration) <= DURATION_TOLERANCE


def filter_by_duration(
    candidates: Sequence[CatalogCandidate], duration: float
) -> List[CatalogCandidate]:
    return [c for c in candidates if within_tolerance(c, duration)]


async def exact_match(
    client: CatalogClient, query: TrackQuery, options: SearchOptions
) -> List[CatalogCandidate]:
    # Artist and album only gate the search here, the catalog gets the title
    songs = await client.search_songs(query.song_name, limit=options.search_limit)
    kept = filter_by_duration(songs, query.duration)
    logger.debug(
        "matching.exact: %d of %d candidates within %ss of %ss",
        len(kept),
        len(songs),
        DURATION_TOLERANCE,
        query.duration,
    )
    return kept


async def fuzzy_match(
    client: CatalogClient, query: TrackQuery, options: SearchOptions
) -> List[CatalogCandidate]:
    songs = await client.search_songs(
        query.song_name,
        artist=None if options.exclude_artist else query.artist_name,
        album=None if options.exclude_album else query.album_name,
        limit=options.search_limit,
    )
    logger.debug("matching.fuzzy: %d candidates", len(songs))
    return list(songs)


async def find_candidates(
    client: CatalogClient, query: TrackQuery, options: SearchOptions
) -> List[CatalogCandidate]:
    """Run the configured strategy and return the candidates worth fetching."""
    missing = missing_fields(query, options)
    if missing:
        for name in missing:
            logger.info("%s is required", name)
        return []

    strategy = exact_match if options.strict else fuzzy_match
    try:
        return await strategy(client, query, options)
    except TRANSPORT_ERRORS as exc:
        logger.debug(
            "Unable to get results for %s - %s - %s: %s",
            query.artist_name,
            query.album_name,
            query.song_name,
            exc,
            exc_info=True,
        )
        return []
