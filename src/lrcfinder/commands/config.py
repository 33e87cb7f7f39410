"""
Configuration commands for lrcfinder (`lrcf config`).

Shows and updates the matcher settings: strict/fuzzy selection, which fields
the fuzzy query leaves out, the catalog result limit, how embedded lyrics are
emitted and the HTTP timeout.
"""

import json
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from ..core.config import (
    create_default_settings,
    get_settings,
    reset_settings,
    save_settings,
)

console = Console()
app = typer.Typer(
    no_args_is_help=True,
    help="Show or change matching settings.",
)


@app.command("show")
def config_show(
    json_output: bool = typer.Option(False, "--json", help="Output raw JSON to stdout"),
):
    """Display the current configuration."""
    settings = get_settings()
    data = {
        "matching": {
            "mode": "strict" if settings.strict else "fuzzy",
            "exclude_artist": settings.exclude_artist,
            "exclude_album": settings.exclude_album,
            "search_limit": settings.search_limit,
            "unmerged_embedded": settings.unmerged_embedded,
        },
        "catalog": {
            "provider": settings.provider_name,
            "base_url": settings.base_url,
            "http_timeout": settings.http_timeout,
            "rps": settings.rps,
        },
    }
    if json_output:
        typer.echo(json.dumps(data))
        return

    console.print("[bold]Current Configuration[/bold]")
    console.print("\n[bold]Matching:[/bold]")
    console.print(f"  Mode:           [blue]{data['matching']['mode']}[/blue]")
    console.print(f"  Exclude artist: {'yes' if settings.exclude_artist else 'no'}")
    console.print(f"  Exclude album:  {'yes' if settings.exclude_album else 'no'}")
    console.print(f"  Search limit:   {settings.search_limit}")
    console.print(f"  Embedded:       {'unmerged' if settings.unmerged_embedded else 'merged'}")
    console.print("\n[bold]Catalog:[/bold]")
    console.print(f"  Provider: {settings.provider_name} ([blue]{settings.base_url}[/blue])")
    console.print(f"  Timeout:  {settings.http_timeout}s")


@app.command("set")
def config_set(
    strict: Optional[bool] = typer.Option(
        None, "--strict/--fuzzy", help="Select the strict or fuzzy matcher."
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
    unmerged_embedded: Optional[bool] = typer.Option(
        None,
        "--unmerged-embedded/--merged-embedded",
        help="Emit lyrics embedded in search results as separate synced/plain hits.",
    ),
    limit: Optional[int] = typer.Option(None, "--limit", help="Catalog results to inspect (1-100)."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="HTTP timeout in seconds."),
):
    """Update matcher settings and save them."""
    updates = {
        "strict": strict,
        "exclude_artist": exclude_artist,
        "exclude_album": exclude_album,
        "search_limit": limit,
        "unmerged_embedded": unmerged_embedded,
        "http_timeout": timeout,
    }
    updates = {k: v for k, v in updates.items() if v is not None}
    if not updates:
        console.print("[yellow]Nothing to change.[/yellow] See `lrcf config set --help`.")
        return

    settings = get_settings()
    try:
        for key, value in updates.items():
            setattr(settings, key, value)
    except ValidationError as e:
        console.print(f"[red]Invalid value:[/red]\n{e}")
        reset_settings()
        raise typer.Exit(1)

    save_settings(settings)
    for key, value in updates.items():
        console.print(f"{key} set to: [blue]{value}[/blue]")
    console.print("[green]✅ Settings saved.[/green]")


@app.command("reset")
def config_reset():
    """Reset all settings to their defaults."""
    console.print("[yellow]Resetting settings to default...[/yellow]")
    reset_settings()
    save_settings(create_default_settings())
    console.print("[green]✅ Settings reset and saved.[/green]")
