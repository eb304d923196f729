"""domsnap CLI — Main Typer entry point.

Registers all subcommands and provides --version / --verbose global options.
"""

from __future__ import annotations

import typer
from rich.console import Console

from domsnap import __version__

TAGLINE = "Addressable DOM snapshots for browser agents."

console = Console()

# ── Version callback ──────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        console.print("domsnap", style="bold cyan")
        console.print(f"  {TAGLINE}", style="dim")
        console.print(f"  v{__version__}\n", style="bold")
        raise typer.Exit()


# ── Main app ──────────────────────────────────────────────────────────────

app = typer.Typer(
    name="domsnap",
    help=TAGLINE,
    rich_markup_mode="rich",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show domsnap version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (DEBUG logging, page-walk timings).",
    ),
) -> None:
    """domsnap -- snapshot a page's interactive elements and address them by index."""
    if verbose:
        import logging

        logging.basicConfig(level=logging.DEBUG, format="%(name)s  %(message)s")


# ── Register subcommands ──────────────────────────────────────────────────
# Each subcommand is a separate module to keep this file lean.

from domsnap.cli.render import render  # noqa: E402
from domsnap.cli.selector import selector  # noqa: E402
from domsnap.cli.snapshot import snapshot  # noqa: E402

app.command(name="snapshot", help="Open a URL in Chromium and list its interactive elements.")(snapshot)
app.command(name="render", help="Materialize a saved page-walk JSON dump offline.")(render)
app.command(name="selector", help="Convert an xpath to a CSS selector.")(selector)
