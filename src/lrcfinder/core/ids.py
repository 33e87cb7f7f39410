"""
Opaque lyric identifiers.

A search hit is identified as ``<catalog key>_<variant>`` so that a later fetch
can resolve it without repeating the search. Internally the id is kept as a
``LyricId`` pair and only turned into a string at the plugin boundary.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import LyricsNotFoundError
from .models import LyricVariant

ID_SEPARATOR = "_"


@dataclass(frozen=True)
class LyricId:
    catalog_key: str
    variant: LyricVariant

    def encode(self) -> str:
        if not self.catalog_key:
            raise ValueError("catalog key must not be empty")
        if ID_SEPARATOR in self.catalog_key:
            raise ValueError(f"catalog key {self.catalog_key!r} contains {ID_SEPARATOR!r}")
        return f"{self.catalog_key}{ID_SEPARATOR}{self.variant.value}"

    @classmethod
    def decode(cls, raw: str) -> "LyricId":
        """Parse an encoded id, raising LyricsNotFoundError when it is malformed."""
        key, sep, tag = (raw or "").partition(ID_SEPARATOR)
        if not sep or not key:
            raise LyricsNotFoundError(raw, "malformed identifier")
        try:
            variant = LyricVariant(tag.lower())
        except ValueError:
            raise LyricsNotFoundError(raw, f"unknown variant {tag!r}") from None
        return cls(key, variant)


def encode_id(catalog_key: str, variant: LyricVariant) -> str:
    return LyricId(str(catalog_key), variant).encode()


def decode_id(raw: str) -> LyricId:
    return LyricId.decode(raw)
