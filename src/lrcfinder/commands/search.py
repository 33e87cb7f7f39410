"""
Search command for lrcfinder (`lrcf search`).

Runs one lyric search against the catalog and prints the hits, their ids can
then be passed to `lrcf fetch`.
"""

import asyncio
import json
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from ..core.config import LrcFinderSettings, get_settings
from ..core.models import RemoteLyricInfo, TrackQuery
from ..plugins.netease import NeteasePlugin

console = Console()


def _format_length(seconds: float) -> str:
    total = int(round(seconds))
    return f"{total // 60}:{total % 60:02d}"


def _print_table(results: List[RemoteLyricInfo]) -> None:
    table = Table(show_header=True, header_style="bold")
    for col in ("id", "title", "artist", "album", "length"):
        table.add_column(col)
    for r in results:
        table.add_row(
            r.id,
            r.metadata.title,
            r.metadata.artist,
            r.metadata.album,
            _format_length(r.metadata.length),
        )
    console.print(table)


def _as_dict(result: RemoteLyricInfo) -> dict:
    return {
        "id": result.id,
        "provider": result.provider_name,
        "title": result.metadata.title,
        "artist": result.metadata.artist,
        "album": result.metadata.album,
        "length": result.metadata.length,
        "synced": result.metadata.is_synced,
        "format": result.lyrics.format if result.lyrics else None,
    }


def search(
    title: str = typer.Option(..., "--title", "-t", help="Song title"),
    artist: Optional[List[str]] = typer.Option(
        None, "--artist", "-a", help="Artist name (repeatable, the first one is used)"
    ),
    album: Optional[str] = typer.Option(None, "--album", "-A", help="Album name"),
    duration: Optional[float] = typer.Option(
        None, "--duration", "-d", help="Track duration in seconds"
    ),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--fuzzy",
        help="Strict: all fields required, duration filtered. Fuzzy: catalog-narrowed query.",
    ),
    exclude_artist: Optional[bool] = typer.Option(
        None,
        "--exclude-artist/--include-artist",
        help="Fuzzy mode: leave the artist out of the query.",
    ),
    exclude_album: Optional[bool] = typer.Option(
        None,
        "--exclude-album/--include-album",
        help="Fuzzy mode: leave the album out of the query.",
    ),
    limit: Optional[int] = typer.Option(None, "--limit", help="Catalog results to inspect (1-100)"),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
    show: bool = typer.Option(False, "--show", help="Print the lyrics of the first hit"),
):
    """Search synced lyrics for a track."""
    # Per-invocation overrides, the saved settings stay untouched
    overrides = {
        "strict": strict,
        "exclude_artist": exclude_artist,
        "exclude_album": exclude_album,
        "search_limit": limit,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    try:
        settings = LrcFinderSettings.model_validate({**get_settings().model_dump(), **overrides})
    except ValidationError as e:
        console.print(f"[red]Invalid value:[/red]\n{e}")
        raise typer.Exit(1)
    query = TrackQuery(
        song_name=title,
        artist_names=tuple(artist or ()),
        album_name=album,
        duration=duration,
    )

    async def _run() -> List[RemoteLyricInfo]:
        async with NeteasePlugin(settings=settings) as plugin:
            return await plugin.search(query)

    results = asyncio.run(_run())

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "provider": settings.provider_name,
                    "mode": "strict" if settings.strict else "fuzzy",
                    "query": title,
                    "results": [_as_dict(r) for r in results],
                },
                ensure_ascii=False,
            )
        )
    elif results:
        _print_table(results)
    else:
        console.print("[yellow]No lyrics found.[/yellow]")

    if not results:
        raise typer.Exit(1)
    if show and results[0].lyrics is not None:
        typer.echo(results[0].lyrics.read_text(), nl=False)
