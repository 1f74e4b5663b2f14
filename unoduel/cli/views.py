"""Composable view primitives for the unoduel CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card, Color
from ..state import Side, Snapshot, TurnPhase

_STATUS_TEXT = {
    TurnPhase.WAITING_FOR_PLAYER_MOVE: "[bold yellow]Your move[/bold yellow]",
    TurnPhase.WAITING_FOR_COLOR_CHOICE: "[bold magenta]Choose a color[/bold magenta]",
    TurnPhase.WAITING_FOR_OPPONENT_MOVE: "[cyan]Opponent is thinking…[/cyan]",
}


@dataclass(slots=True)
class SnapshotView:
    """Renderable summarising a game snapshot."""

    snapshot: Snapshot
    events: Sequence[str]
    card_formatter: Callable[[Card], str]
    color_formatter: Callable[[Color | None], str]

    def _hand_table(self) -> Table:
        table = Table(box=box.SIMPLE, expand=True, show_header=True)
        table.add_column("#", justify="right", style="bold")
        table.add_column("Card", justify="left")
        for index, card in enumerate(self.snapshot.player_hand, start=1):
            table.add_row(str(index), self.card_formatter(card))
        if not self.snapshot.player_hand:
            table.add_row("—", "[dim]empty[/dim]")
        return table

    def _status(self) -> str:
        snap = self.snapshot
        if snap.phase is TurnPhase.GAME_OVER:
            if snap.winner is Side.PLAYER:
                return "[bold green]You win![/bold green]"
            return "[bold red]Opponent wins[/bold red]"
        return _STATUS_TEXT[snap.phase]

    def _metadata_panel(self) -> Panel:
        snap = self.snapshot
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(f"[cyan]Turn[/cyan]: {snap.turn_number}")
        top = self.card_formatter(snap.discard_top) if snap.discard_top is not None else "—"
        grid.add_row(f"[cyan]Discard[/cyan]: {top} ({snap.discard_size} card(s))")
        grid.add_row(f"[cyan]Active color[/cyan]: {self.color_formatter(snap.active_color)}")
        rank = snap.active_rank.value if snap.active_rank is not None else "—"
        grid.add_row(f"[cyan]Active rank[/cyan]: {rank}")
        grid.add_row(f"[cyan]Deck[/cyan]: {snap.deck_size} card(s)")
        opponent = f"{snap.opponent_hand_size} card(s)"
        if snap.opponent_uno:
            opponent += " [bold red]UNO![/bold red]"
        grid.add_row(f"[cyan]Opponent[/cyan]: {opponent}")
        grid.add_row(self._status())
        return Panel(grid, title="Table", box=box.SQUARE, border_style="blue")

    def _event_panel(self) -> Panel:
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        if self.events:
            for line in self.events:
                grid.add_row(line)
        else:
            grid.add_row("[dim]Event log will appear here[/dim]")
        return Panel(grid, title="Events", box=box.SIMPLE, border_style="magenta")

    def render(self) -> RenderableType:
        title = "Your hand"
        if self.snapshot.player_uno:
            title += " — [bold yellow]UNO![/bold yellow]"
        hand = Panel(self._hand_table(), title=title, box=box.SQUARE, border_style="green")
        return Group(self._metadata_panel(), hand, self._event_panel())
