# src/lrcfinder/core/errors.py


class LrcFinderError(Exception):
    """Base application error for lrcfinder.

    Use this for predictable, user-facing error messages that should be
    caught by the CLI and displayed nicely.
    """

    pass


class LyricsNotFoundError(LrcFinderError):
    """Raised when an identifier cannot be resolved to lyric text.

    Covers malformed identifiers, catalog entries that vanished, empty
    variants and transport failures during a fetch.
    """

    def __init__(self, lyric_id: str, reason: str = "no lyrics available") -> None:
        self.lyric_id = lyric_id
        self.reason = reason
        super().__init__(f"Unable to get results for id {lyric_id}: {reason}")
