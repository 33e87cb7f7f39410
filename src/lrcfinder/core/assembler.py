"""
Result assembly: raw lyric payloads -> RemoteLyricInfo search hits.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .errors import LyricsNotFoundError
from .ids import encode_id
from .lrc import merge_parsed, parse_lyrics
from .matching import TRANSPORT_ERRORS, CatalogClient
from .models import (
    CatalogCandidate,
    LyricMetadata,
    LyricPayload,
    LyricResponse,
    LyricVariant,
    RemoteLyricInfo,
)

logger = logging.getLogger(__name__)

# Fewer timestamped lines than this is not treated as real synced lyrics
MIN_SYNCED_LINES = 5


def _metadata(candidate: CatalogCandidate, *, is_synced: bool) -> LyricMetadata:
    return LyricMetadata(
        album=candidate.album,
        artist=candidate.artist,
        title=candidate.title,
        length=candidate.duration_ms / 1000,
        is_synced=is_synced,
    )


def _result(
    candidate: CatalogCandidate, variant: LyricVariant, text: str, provider_name: str
) -> RemoteLyricInfo:
    return RemoteLyricInfo(
        id=encode_id(candidate.key, variant),
        provider_name=provider_name,
        metadata=_metadata(candidate, is_synced=variant is LyricVariant.SYNCED),
        lyrics=LyricResponse.from_text(text, variant.output_format),
    )


def select_lyrics(payload: LyricPayload, variant: LyricVariant, lyric_id: str = "") -> LyricResponse:
    """Pick the text a fetch should return for the requested variant."""
    text = payload.original if variant is LyricVariant.SYNCED else payload.translated
    if not text:
        raise LyricsNotFoundError(lyric_id, f"no {variant.value} lyrics")
    return LyricResponse.from_text(text, variant.output_format)


class ResultAssembler:
    """Fetches, parses and merges lyrics for accepted candidates."""

    def __init__(
        self, client: CatalogClient, provider_name: str, *, unmerged_embedded: bool = False
    ) -> None:
        self.client = client
        self.provider_name = provider_name
        # Emit embedded lyrics as separate synced/plain hits instead of merging
        self.unmerged_embedded = unmerged_embedded

    def build_synced_result(
        self, candidate: CatalogCandidate, payload: LyricPayload
    ) -> Optional[RemoteLyricInfo]:
        if not payload.original:
            return None
        original = parse_lyrics(payload.original)
        if len(original) < MIN_SYNCED_LINES:
            logger.debug(
                "assembler: dropping %s (%s), only %d timestamped lines",
                candidate.key,
                candidate.title,
                len(original),
            )
            return None
        translated = parse_lyrics(payload.translated or "")
        merged = merge_parsed(original, translated)
        return _result(candidate, LyricVariant.SYNCED, merged, self.provider_name)

    def unmerged_results(self, candidate: CatalogCandidate) -> List[RemoteLyricInfo]:
        """Emit embedded original and translated texts as they are, one hit each."""
        payload = candidate.embedded
        if payload is None:
            return []
        results: List[RemoteLyricInfo] = []
        if payload.original:
            results.append(
                _result(candidate, LyricVariant.SYNCED, payload.original, self.provider_name)
            )
        if payload.translated:
            results.append(
                _result(candidate, LyricVariant.PLAIN, payload.translated, self.provider_name)
            )
        return results

    async def _payload_for(self, candidate: CatalogCandidate) -> Optional[LyricPayload]:
        if candidate.embedded is not None:
            return candidate.embedded
        return await self.client.get_lyrics(candidate.key)

    async def assemble(self, candidates: Iterable[CatalogCandidate]) -> List[RemoteLyricInfo]:
        results: List[RemoteLyricInfo] = []
        for candidate in candidates:
            if self.unmerged_embedded and candidate.embedded is not None:
                results.extend(self.unmerged_results(candidate))
                continue
            try:
                payload = await self._payload_for(candidate)
            except TRANSPORT_ERRORS as exc:
                logger.debug(
                    "assembler: lyrics for %s unavailable: %s",
                    candidate.key,
                    exc,
                    extra={"catalog_key": candidate.key},
                )
                continue
            if payload is None:
                continue
            result = self.build_synced_result(candidate, payload)
            if result is not None:
                results.append(result)
        return results
