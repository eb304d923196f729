"""domsnap selector — Convert an xpath into a CSS selector."""

from __future__ import annotations

import typer
from rich.console import Console

from domsnap.dom.selectors import xpath_to_css

output_console = Console()


def selector(
    xpath: str = typer.Argument(..., help="Xpath such as 'div/ul/li[2]/a'."),
) -> None:
    """Print the CSS selector equivalent of XPATH.

    Positional predicates become :nth-of-type / :last-of-type; other
    predicates are dropped.
    """
    output_console.print(xpath_to_css(xpath), markup=False, highlight=False, emoji=False, soft_wrap=True)
