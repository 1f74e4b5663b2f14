"""Typer entry-point wiring for the unoduel CLI."""

from __future__ import annotations

import logging
import time

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Confirm, Prompt
from rich.table import Table

from .. import benchmark, scoreboard
from ..cards import Color
from ..controller import GameController, Outcome, Rejection, RejectionReason
from ..scheduler import ManualScheduler
from ..state import GameConfig, Side, Snapshot, TurnPhase
from .render import format_card, format_color, render_snapshot

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()

MAX_EVENT_LOG = 8


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _append_event(log: list[str], message: str) -> None:
    """Append ``message`` to ``log`` maintaining a bounded log length."""

    log.append(message)
    excess = len(log) - MAX_EVENT_LOG
    if excess > 0:
        del log[:excess]


def _describe(snapshot: Snapshot) -> str:
    actor = "[yellow]You[/yellow]" if snapshot.turn_owner is Side.PLAYER else "[cyan]Opponent[/cyan]"
    top = format_card(snapshot.discard_top) if snapshot.discard_top is not None else "—"
    if snapshot.game_over:
        return f"Turn {snapshot.turn_number}: {top} ends the game"
    if snapshot.pending_wild_choice:
        return f"Turn {snapshot.turn_number}: {actor} played {top}"
    return (
        f"Turn {snapshot.turn_number}: top {top}, "
        f"color {format_color(snapshot.active_color)}, {actor} to move"
    )


def _wait_for_opponent(scheduler: ManualScheduler) -> None:
    """Sleep through the opponent's presentation delay, then let it act."""

    due = scheduler.next_due()
    if due is None:
        return
    wait = max(0.0, due - scheduler.now)
    if wait:
        time.sleep(wait)
    scheduler.advance(wait)


def _player_turn(controller: GameController, snapshot: Snapshot) -> Outcome:
    if snapshot.phase is TurnPhase.WAITING_FOR_COLOR_CHOICE:
        answer = Prompt.ask(
            "Choose a color",
            choices=[color.value for color in Color.base_colors()],
            console=console,
        )
        return controller.player_choose_color(answer)

    answer = Prompt.ask("Card number, [bold]d[/bold] to draw, [bold]q[/bold] to quit", console=console)
    answer = answer.strip().lower()
    if answer == "q":
        raise typer.Exit()
    if answer == "d":
        return controller.player_draw()
    if answer.isdigit():
        return controller.player_play(int(answer) - 1)
    return Rejection(RejectionReason.ILLEGAL_MOVE, f"unrecognised command {answer!r}")


def _render_match_summary(history: scoreboard.MatchHistory) -> Table:
    """Return the aggregated session summary table."""

    table = Table(title="Session Summary", box=box.DOUBLE_EDGE)
    table.add_column("Side", justify="center")
    table.add_column("Wins", justify="right")
    table.add_column("Losses", justify="right")
    table.add_column("Cards left when losing", justify="right")
    for total in history.totals():
        label = "You" if total.side is Side.PLAYER else "Opponent"
        table.add_row(label, str(total.wins), str(total.losses), str(total.cards_left_when_losing))
    return table


def run_session(
    controller: GameController,
    scheduler: ManualScheduler,
    events: list[str],
) -> scoreboard.MatchHistory:
    """Play games on the console until the user declines another one."""

    history = scoreboard.MatchHistory()

    game_number = 0
    while True:
        game_number += 1
        events.clear()
        snapshot = controller.start_game()
        while not snapshot.game_over:
            console.print(render_snapshot(snapshot, events, title=f"Game {game_number}"))
            if snapshot.phase is TurnPhase.WAITING_FOR_OPPONENT_MOVE:
                _wait_for_opponent(scheduler)
                current = controller.snapshot()
                assert current is not None
                snapshot = current
                continue
            outcome = _player_turn(controller, snapshot)
            if isinstance(outcome, Rejection):
                console.print(f"[red]{outcome.message}[/red]")
                continue
            snapshot = outcome

        console.print(render_snapshot(snapshot, events, title=f"Game {game_number}"))
        assert controller.state is not None
        history.record(scoreboard.summarize(controller.state, game_number))
        console.print(_render_match_summary(history))
        if not Confirm.ask("Play again?", default=True, console=console):
            return history


@app.command()
def play(
    seed: int | None = typer.Option(None, help="Random seed for reproducible games (omit for randomness)."),
    delay: float = typer.Option(0.8, min=0.0, help="Seconds the opponent 'thinks' before moving."),
    hand_size: int = typer.Option(7, min=1, help="Cards dealt to each side."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show engine debug logging."),
) -> None:
    """Play against the heuristic opponent in the terminal."""

    _configure_logging(verbose)
    try:
        config = GameConfig(hand_size=hand_size, opponent_delay=delay, seed=seed)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    events: list[str] = []
    scheduler = ManualScheduler()
    controller = GameController(
        config,
        scheduler=scheduler,
        on_state_changed=lambda snapshot: _append_event(events, _describe(snapshot)),
    )
    run_session(controller, scheduler, events)


@app.command("benchmark")
def benchmark_cli(
    games: int = typer.Option(100, min=1, help="Number of self-play games."),
    seed: int = typer.Option(123, help="Random seed for the benchmark."),
    hand_size: int = typer.Option(7, min=1, help="Cards dealt to each side."),
    max_turns: int = typer.Option(benchmark.DEFAULT_MAX_TURNS, min=1, help="Abandon a game after this many turns."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show engine debug logging."),
) -> None:
    """Run heuristic-vs-heuristic games and report the outcome."""

    _configure_logging(verbose)
    try:
        config = GameConfig(hand_size=hand_size, opponent_delay=0.0)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    report = benchmark.run_self_play(games, seed=seed, config=config, max_turns=max_turns)

    table = Table(title="Self-Play Benchmark", box=box.SIMPLE_HEAVY)
    table.add_column("Metric", justify="left")
    table.add_column("Value", justify="right")
    table.add_row("Games finished", str(report.finished))
    table.add_row("Games stalled", str(report.stalled))
    table.add_row("First-mover wins", str(report.wins(Side.PLAYER)))
    table.add_row("Second-mover wins", str(report.wins(Side.OPPONENT)))
    table.add_row("Mean turns", f"{report.turns.mean:.1f}")
    table.add_row("Median turns", f"{report.turns.median:.1f}")
    table.add_row("90th percentile turns", f"{report.turns.p90:.1f}")
    table.add_row("Longest game", str(report.turns.longest))
    console.print(table)


def main() -> None:
    """Entry-point for ``python -m unoduel.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
