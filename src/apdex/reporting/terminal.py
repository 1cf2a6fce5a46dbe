"""Terminal output: map semantic display colours onto rich styles."""

from __future__ import annotations

from typing import Mapping

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..core.accumulator import ApdexAccumulator, DisplayColor

COLOR_STYLES: dict[DisplayColor, str] = {
    DisplayColor.UNSET: "",
    DisplayColor.CYAN: "cyan",
    DisplayColor.GREEN: "green",
    DisplayColor.PURPLE: "magenta",
    DisplayColor.RED: "red",
}


def style_for(color: DisplayColor) -> str:
    return COLOR_STYLES[color]


def render(apdex: ApdexAccumulator, rating: bool = False) -> Text:
    """Uniform Output of *apdex* styled by its display colour."""
    plain = apdex.rating_text() if rating else str(apdex)
    return Text(plain, style=style_for(apdex.display_color))


def summary_table(groups: Mapping[str, ApdexAccumulator], title: str = "Apdex") -> Table:
    table = Table(title=title)
    table.add_column("Group")
    table.add_column("Score", justify="right")
    table.add_column("Rating")
    table.add_column("S", justify="right")
    table.add_column("T", justify="right")
    table.add_column("F", justify="right")

    for name, apdex in groups.items():
        table.add_row(
            name,
            render(apdex),
            render(apdex, rating=True),
            str(apdex.satisfied),
            str(apdex.tolerating),
            str(apdex.frustrated),
        )
    return table


def print_summary(
    groups: Mapping[str, ApdexAccumulator],
    console: Console | None = None,
    title: str = "Apdex",
) -> None:
    """Print a table of named accumulators to *console* (stdout by default)."""
    console = console or Console(highlight=False)
    console.print(summary_table(groups, title=title))
