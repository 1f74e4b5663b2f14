"""Headless self-play harness pitting the heuristic against itself."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

import numpy as np

from . import scoreboard
from .deck import build_deck, shuffle
from .opponent import OpponentModel
from .state import GameConfig, GameState, Side, deal_new_game

__all__ = ["TurnStatistics", "SelfPlayReport", "play_headless_game", "run_self_play"]

logger = logging.getLogger(__name__)

DEFAULT_MAX_TURNS = 500


@dataclass(frozen=True, slots=True)
class TurnStatistics:
    """Distribution of game lengths, in resolved turns."""

    mean: float
    median: float
    p90: float
    longest: int


@dataclass(frozen=True, slots=True)
class SelfPlayReport:
    """Outcome of a batch of self-play games."""

    history: scoreboard.MatchHistory
    stalled: int
    turns: TurnStatistics

    @property
    def finished(self) -> int:
        return len(self.history.games)

    def wins(self, side: Side) -> int:
        return sum(1 for game in self.history.games if game.winner is side)


def play_headless_game(
    config: GameConfig,
    rng: random.Random,
    *,
    max_turns: int = DEFAULT_MAX_TURNS,
) -> GameState:
    """Deal and play one game with both seats driven by the heuristic.

    The deck is never recycled, so a game can run dry with neither side able
    to play; it is abandoned after ``max_turns`` resolved turns.
    """

    deck = build_deck()
    shuffle(deck, rng)
    game_state = deal_new_game(config, deck)
    model = OpponentModel(rng=rng)

    while not game_state.game_over and game_state.turn_number < max_turns:
        model.take_turn(game_state, game_state.turn_owner)
        game_state.check_invariants()
    return game_state


def _turn_statistics(lengths: list[int]) -> TurnStatistics:
    if not lengths:
        return TurnStatistics(mean=0.0, median=0.0, p90=0.0, longest=0)
    samples = np.asarray(lengths, dtype=np.int64)
    return TurnStatistics(
        mean=float(samples.mean()),
        median=float(np.median(samples)),
        p90=float(np.percentile(samples, 90)),
        longest=int(samples.max()),
    )


def run_self_play(
    games: int,
    *,
    seed: int = 123,
    config: GameConfig | None = None,
    max_turns: int = DEFAULT_MAX_TURNS,
) -> SelfPlayReport:
    """Play ``games`` headless games from ``seed`` and summarise them."""

    if games <= 0:
        raise ValueError("games must be positive")
    config = config or GameConfig()
    rng = random.Random(seed)
    history = scoreboard.MatchHistory()
    stalled = 0

    for game_number in range(1, games + 1):
        game_state = play_headless_game(config, rng, max_turns=max_turns)
        if not game_state.game_over:
            stalled += 1
            logger.debug("game %d stalled after %d turns", game_number, game_state.turn_number)
            continue
        history.record(scoreboard.summarize(game_state, game_number))

    lengths = [game.turns for game in history.games]
    return SelfPlayReport(history=history, stalled=stalled, turns=_turn_statistics(lengths))
