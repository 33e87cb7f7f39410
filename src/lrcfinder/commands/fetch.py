"""
Fetch command for lrcfinder (`lrcf fetch`).
"""

import asyncio
import json

import typer
from rich.console import Console

from ..core.errors import LyricsNotFoundError
from ..core.models import LyricResponse
from ..plugins.netease import NeteasePlugin

console = Console(stderr=True)


def fetch(
    lyric_id: str = typer.Argument(..., help="Id printed by `lrcf search`, e.g. 481357_synced"),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
):
    """Print the lyrics behind a search id."""

    async def _run() -> LyricResponse:
        async with NeteasePlugin() as plugin:
            return await plugin.get_lyrics(lyric_id)

    try:
        response = asyncio.run(_run())
    except LyricsNotFoundError as e:
        console.print(f"[red]Not found:[/red] {e.reason} ({e.lyric_id})")
        raise typer.Exit(2)

    text = response.read_text()
    if json_output:
        typer.echo(json.dumps({"id": lyric_id, "format": response.format, "lyrics": text}, ensure_ascii=False))
    else:
        typer.echo(text, nl=not text.endswith("\n"))
