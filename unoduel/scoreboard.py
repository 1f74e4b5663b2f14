"""Helpers for tracking results across consecutive games of one session."""

from __future__ import annotations

from dataclasses import dataclass, field

from .state import GameState, Side

__all__ = ["GameSummary", "SideTotal", "MatchHistory", "summarize"]


@dataclass(frozen=True, slots=True)
class GameSummary:
    """Summary statistics captured after a single finished game."""

    game_number: int
    winner: Side
    turns: int
    loser_cards_left: int


@dataclass(frozen=True, slots=True)
class SideTotal:
    """Aggregate totals for one side across all recorded games."""

    side: Side
    wins: int
    losses: int
    cards_left_when_losing: int


def summarize(state: GameState, game_number: int) -> GameSummary:
    """Build a ``GameSummary`` from a finished ``state``."""

    if not state.game_over or state.winner is None:
        raise ValueError("winner has not been determined")
    return GameSummary(
        game_number=game_number,
        winner=state.winner,
        turns=state.turn_number,
        loser_cards_left=len(state.hand(state.winner.other)),
    )


@dataclass(slots=True)
class MatchHistory:
    """Mutable tracker that accumulates game summaries for a session."""

    games: list[GameSummary] = field(default_factory=list)
    _wins: dict[Side, int] = field(init=False, repr=False)
    _cards_left: dict[Side, int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._wins = {side: 0 for side in Side}
        self._cards_left = {side: 0 for side in Side}
        for summary in list(self.games):
            self._accumulate(summary)

    def record(self, summary: GameSummary) -> None:
        """Record ``summary`` and update cumulative totals."""

        if summary.turns < 0 or summary.loser_cards_left < 0:
            raise ValueError("summary counts must be non-negative")
        self.games.append(summary)
        self._accumulate(summary)

    def _accumulate(self, summary: GameSummary) -> None:
        self._wins[summary.winner] += 1
        self._cards_left[summary.winner.other] += summary.loser_cards_left

    def totals(self) -> list[SideTotal]:
        """Return cumulative totals, player first."""

        played = len(self.games)
        return [
            SideTotal(
                side=side,
                wins=self._wins[side],
                losses=played - self._wins[side],
                cards_left_when_losing=self._cards_left[side],
            )
            for side in Side
        ]
