"""
lrcfinder CLI - Main entry point using Typer.

This module configures the main Typer application, registers all command groups,
and defines global options like --version and --verbose.
"""

import typer
from rich.console import Console
from rich.traceback import install

from .commands import config, fetch, search
from .core.errors import LrcFinderError
from .core.logging_util import setup_logging

# Install a rich traceback handler for readable exceptions
install(show_locals=False)

console = Console(stderr=True)

app = typer.Typer(
    name="lrcf",
    help="🎤 lrcfinder - find synced lyrics (with translations) for your tracks.",
    epilog="Use `lrcf [COMMAND] --help` for more info on a specific command.",
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)

app.add_typer(
    config.app,
    name="config",
    help="⚙️ Show or change matching settings.",
)
app.command("search", help="🔎 Search lyrics for a track.")(search.search)
app.command("fetch", help="📄 Fetch lyrics by the id printed by `search`.")(fetch.fetch)


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show the application version and exit.",
        is_eager=True,
    ),
    verbose: bool = typer.Option(None, "--verbose", help="Enable DEBUG-level logging."),
    quiet: bool = typer.Option(
        None, "--quiet", help="Reduce logging to warnings and errors."
    ),
    json_logs: bool = typer.Option(
        False, "--json-logs", help="Emit logs as JSON lines to stderr."
    ),
):
    """
    lrcfinder CLI - synced lyrics search.
    """
    if version:
        from . import __version__

        typer.echo(f"lrcfinder v{__version__}")
        raise typer.Exit()

    # Configure logging once, early
    setup_logging(json_logs=json_logs, verbose=bool(verbose), quiet=bool(quiet))


def cli():
    """Main entry point for the console script defined in pyproject.toml."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]👋 Operation cancelled by user.[/yellow]")
        raise typer.Exit(130)
    except LrcFinderError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    cli()
