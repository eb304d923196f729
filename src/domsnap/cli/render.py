"""domsnap render — Materialize a saved page-walk dump without a browser.

Reads the JSON object returned by the page-walk script (``{map, rootId}``),
rebuilds the element tree and prints the prompt rendering and selector map.
With --previous, elements absent from the earlier dump are flagged as new.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape

from domsnap.cli.output import load_config, print_error, selector_map_rows, selector_map_table
from domsnap.dom.differ import SnapshotDiffer
from domsnap.dom.materializer import MaterializationError, materialize
from domsnap.dom.views import DOMState

console = Console(stderr=True)
output_console = Console()

# Both dumps are compared as the same page
_OFFLINE_URL = "file://domsnap-render"


def _read_dump(path: Path) -> Any:
    if not path.is_file():
        print_error(console, "File Not Found", f"[red]No such file:[/red] {escape(str(path))}")
        raise typer.Exit(code=2)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        print_error(console, "Invalid Dump", f"[red]{escape(str(path))} is not valid JSON:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)


def _materialize(path: Path, strict_children: bool) -> DOMState:
    dump = _read_dump(path)
    if not isinstance(dump, dict):
        print_error(console, "Invalid Dump", f"[red]{escape(str(path))} must contain a JSON object[/red]")
        raise typer.Exit(code=1)
    try:
        return materialize(dump, strict_children=strict_children)
    except MaterializationError as exc:
        print_error(console, "Invalid Dump", f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1)


def render(
    file: Path = typer.Argument(..., help="JSON file holding a page-walk result."),
    previous: Optional[Path] = typer.Option(
        None,
        "--previous",
        "-p",
        help="Earlier dump of the same page; new elements are marked with *.",
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
    """Rebuild FILE's element tree and print its interactive elements."""
    config = load_config(config_path, console)
    state = _materialize(file, config.strict_children)

    if previous is not None:
        differ = SnapshotDiffer()
        differ.update(_materialize(previous, config.strict_children).element_tree, _OFFLINE_URL)
        differ.update(state.element_tree, _OFFLINE_URL)

    rows = selector_map_rows(state.selector_map, config.include_dynamic_attributes)

    if as_json:
        output_console.print(json.dumps({"elements": rows}, indent=2), markup=False, highlight=False, emoji=False, soft_wrap=True)
        return

    rendering = state.element_tree.clickable_elements_to_string(config.include_attributes)
    if rendering:
        output_console.print(rendering, markup=False, highlight=False, emoji=False, soft_wrap=True)
    output_console.print(selector_map_table(rows, f"{len(rows)} interactive elements"))
