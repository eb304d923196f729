"""domsnap snapshot — Open a URL in Chromium and list its interactive elements.

Launches a headless (or headed) Chromium via Playwright, takes one snapshot
of the page, and prints the prompt rendering followed by the selector map.
With --json the selector map is written to stdout as JSON instead.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from domsnap.cli.output import load_config, print_error, selector_map_rows, selector_map_table
from domsnap.config import DomSnapConfig
from domsnap.engine.session import BrowserState, SnapshotSession

console = Console(stderr=True)
output_console = Console()  # stdout for machine-readable output

logger = logging.getLogger("domsnap.cli.snapshot")


def _take_snapshot(url: str, config: DomSnapConfig) -> tuple[BrowserState, str]:
    """Run one browser session against ``url``. Returns the state and its rendering."""
    from playwright.sync_api import sync_playwright

    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(headless=config.headless)
        try:
            width, height = config.viewport
            context = browser.new_context(viewport={"width": width, "height": height})
            page = context.new_page()
            page.goto(url, wait_until="domcontentloaded", timeout=config.timeout * 1000)

            session = SnapshotSession(page, config)
            state = session.get_state()
            return state, session.render()
        finally:
            browser.close()


def snapshot(
    url: str = typer.Argument(..., help="Page to snapshot."),
    headed: bool = typer.Option(
        False,
        "--headed",
        help="Show the browser window instead of running headless.",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a config.yaml. Defaults to .domsnap/config.yaml when present.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the selector map as JSON.",
    ),
) -> None:
    """Snapshot URL and print its interactive elements by index."""
    config = load_config(config_path, console)
    if headed:
        config.headless = False

    try:
        state, rendering = _take_snapshot(url, config)
    except Exception as exc:
        logger.debug("Snapshot of %s failed", url, exc_info=True)
        print_error(console, "Snapshot Failed", f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1)

    rows = selector_map_rows(state.selector_map, config.include_dynamic_attributes)

    if as_json:
        payload = {"url": state.url, "title": state.title, "elements": rows}
        output_console.print(json.dumps(payload, indent=2), markup=False, highlight=False, emoji=False, soft_wrap=True)
        return

    console.print(f"[bold]{escape(state.title or state.url)}[/bold] [dim]{escape(state.url)}[/dim]")
    if rendering:
        output_console.print(rendering, markup=False, highlight=False, emoji=False, soft_wrap=True)
    output_console.print(selector_map_table(rows, f"{len(rows)} interactive elements"))
