"""Shared output helpers for the domsnap CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from domsnap.config import DomSnapConfig, DomSnapConfigError
from domsnap.dom.selectors import enhanced_css_selector
from domsnap.dom.views import SelectorMap

DEFAULT_CONFIG_PATH = Path(".domsnap") / "config.yaml"


def load_config(config_path: Path | None, console: Console) -> DomSnapConfig:
    """Load ``config_path``, or the project config if present, or the defaults."""
    if config_path is None:
        if not DEFAULT_CONFIG_PATH.is_file():
            return DomSnapConfig()
        config_path = DEFAULT_CONFIG_PATH

    try:
        return DomSnapConfig.from_file(config_path)
    except DomSnapConfigError as exc:
        console.print(
            Panel(
                f"[red]{escape(str(exc))}[/red]",
                title="[red]Config Error[/red]",
                border_style="red",
            )
        )
        raise typer.Exit(code=2)


def selector_map_rows(selector_map: SelectorMap, include_dynamic_attributes: bool = True) -> list[dict[str, Any]]:
    rows = []
    for index in sorted(selector_map):
        element = selector_map[index]
        rows.append(
            {
                "index": index,
                "tag_name": element.tag_name,
                "xpath": element.xpath,
                "css_selector": enhanced_css_selector(element, include_dynamic_attributes),
                "attributes": dict(element.attributes),
                "is_new": element.is_new,
            }
        )
    return rows


def selector_map_table(rows: list[dict[str, Any]], title: str) -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("#", justify="right", style="bold cyan")
    table.add_column("Tag", style="green")
    table.add_column("CSS selector", overflow="fold")
    table.add_column("New", justify="center")

    for row in rows:
        new_marker = "[bold yellow]*[/bold yellow]" if row["is_new"] else ""
        table.add_row(str(row["index"]), Text(row["tag_name"]), Text(row["css_selector"]), new_marker)
    return table


def print_error(console: Console, title: str, message: str) -> None:
    console.print(
        Panel(
            message,
            title=f"[red]{title}[/red]",
            border_style="red",
        )
    )
