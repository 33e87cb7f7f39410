"""
LRC parsing and original/translation merging.

Timestamps are kept as canonical ``[MM:SS.mmm]`` strings. Because the width is
fixed, sorting the strings sorts the lines chronologically, so no numeric
conversion is needed anywhere in the merge.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

# [MM:SS], [MM:SS.fff] or [MM:SS:fff] at the start of the line
_TIMESTAMP_PATTERN = re.compile(r"^\[(\d{2}):(\d{2})(?:[.:](\d{1,3}))?\](.*)$")


def format_timestamp(minutes: str, seconds: str, fraction: Optional[str] = None) -> str:
    """Build the canonical ``[MM:SS.mmm]`` key.

    The fraction is right-padded, so ``.5`` means 500 ms and ``.34`` 340 ms.
    """
    millis = (fraction or "").ljust(3, "0")
    return f"[{minutes}:{seconds}.{millis}]"


def parse_line(line: str) -> Optional[Tuple[str, str]]:
    """Split one raw line into ``(timestamp, text)``.

    Returns None when the line has no leading timestamp tag.
    """
    match = _TIMESTAMP_PATTERN.match(line.rstrip("\r"))
    if not match:
        return None
    minutes, seconds, fraction, text = match.groups()
    return format_timestamp(minutes, seconds, fraction), text


@dataclass
class ParsedLyrics:
    """Timestamped lines plus the lines that carried no timestamp."""

    lines: Dict[str, str] = field(default_factory=dict)
    unformatted: List[str] = field(default_factory=list)

    def add(self, timestamp: str, text: str) -> None:
        # Last write wins, and the rewritten entry moves to the end
        self.lines.pop(timestamp, None)
        self.lines[timestamp] = text

    def __len__(self) -> int:
        return len(self.lines)


def parse_lyrics(text: Optional[str]) -> ParsedLyrics:
    """Split a raw lyric document into timestamped and unformatted lines.

    Lines without a leading tag, blank ones included, are kept verbatim. Only
    the empty remainder after a final newline is not a line.
    """
    parsed = ParsedLyrics()
    raw_lines = (text or "").split("\n")
    if raw_lines[-1] == "":
        raw_lines.pop()
    for line in raw_lines:
        result = parse_line(line)
        if result is None:
            parsed.unformatted.append(line)
        else:
            parsed.add(*result)
    return parsed


def merge_lyrics(
    original: Mapping[str, str],
    translated: Mapping[str, str],
    unformatted: Iterable[str] = (),
) -> str:
    """Interleave original and translated lines into one LRC document.

    Unformatted lines come first, verbatim. Every timestamp of either map then
    gets its original line (blank if missing), followed by the translation at
    the same timestamp when there is one.
    """
    out: List[str] = list(unformatted)
    for timestamp in sorted(set(original) | set(translated)):
        out.append(f"{timestamp}{original.get(timestamp, '')}")
        translation = translated.get(timestamp)
        if translation:
            out.append(f"{timestamp}{translation}")
    return "".join(f"{line}\n" for line in out)


def merge_parsed(original: ParsedLyrics, translated: Optional[ParsedLyrics] = None) -> str:
    """Merge two parsed documents, keeping only the original's unformatted lines."""
    return merge_lyrics(
        original.lines,
        translated.lines if translated is not None else {},
        original.unformatted,
    )
