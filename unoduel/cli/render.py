"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Sequence

from rich.console import RenderableType
from rich.panel import Panel

from ..cards import Card, Color
from ..state import Snapshot
from .views import SnapshotView

_COLOR_STYLES = {
    Color.RED: "bold red",
    Color.BLUE: "bold blue",
    Color.GREEN: "bold green",
    Color.YELLOW: "bold yellow",
    Color.WILD: "bold magenta",
}


def format_color(color: Color | None) -> str:
    if color is None:
        return "[dim]choosing…[/dim]"
    style = _COLOR_STYLES[color]
    return f"[{style}]{color.value}[/{style}]"


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    style = _COLOR_STYLES[card.color]
    return f"[{style}]{card.label()}[/{style}]"


def render_snapshot(
    snapshot: Snapshot,
    events: Sequence[str] = (),
    *,
    title: str = "unoduel",
) -> RenderableType:
    """Return a Rich panel describing ``snapshot``."""

    view = SnapshotView(
        snapshot=snapshot,
        events=events,
        card_formatter=format_card,
        color_formatter=format_color,
    )
    return Panel(view.render(), title=title, padding=(0, 1), border_style="cyan")
