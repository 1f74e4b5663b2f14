"""Single owner of the live game and the operations exposed to a host.

The controller turns rule violations into ``Rejection`` values, emits a
``Snapshot`` after every accepted transition and runs the opponent's turn
from a delayed callback. Each callback remembers the game generation it
was scheduled for and does nothing once a newer game has replaced it.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union

from . import opponent, rules
from .cards import Color
from .deck import RandomSource, build_deck, shuffle
from .scheduler import Cancellable, ManualScheduler, Scheduler
from .state import GameConfig, GameState, Side, Snapshot, deal_new_game

__all__ = ["RejectionReason", "Rejection", "Outcome", "GameController"]

logger = logging.getLogger(__name__)


class RejectionReason(str, Enum):
    ILLEGAL_MOVE = "illegal_move"
    OUT_OF_TURN = "out_of_turn"
    INVALID_COLOR_CHOICE = "invalid_color_choice"
    GAME_OVER = "game_over"
    NO_GAME = "no_game"


@dataclass(frozen=True, slots=True)
class Rejection:
    """Marker returned instead of a snapshot when an action is refused."""

    reason: RejectionReason
    message: str


Outcome = Union[Snapshot, Rejection]

_REASONS: dict[type[rules.RuleViolation], RejectionReason] = {
    rules.IllegalMove: RejectionReason.ILLEGAL_MOVE,
    rules.OutOfTurn: RejectionReason.OUT_OF_TURN,
    rules.InvalidColorChoice: RejectionReason.INVALID_COLOR_CHOICE,
    rules.GameFinished: RejectionReason.GAME_OVER,
}


class GameController:
    """Runs one game at a time on behalf of a host."""

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        scheduler: Scheduler | None = None,
        rng: RandomSource | None = None,
        on_state_changed: Callable[[Snapshot], None] | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.scheduler: Scheduler = scheduler if scheduler is not None else ManualScheduler()
        self._rng: RandomSource = rng if rng is not None else random.Random(self.config.seed)
        self._opponent = opponent.OpponentModel(rng=self._rng)
        self._on_state_changed = on_state_changed
        self._state: GameState | None = None
        self._generation = 0
        self._pending_task: Cancellable | None = None

    @property
    def state(self) -> GameState | None:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def snapshot(self) -> Snapshot | None:
        if self._state is None:
            return None
        return self._state.snapshot(self._generation)

    def start_game(self) -> Snapshot:
        """Shuffle a new deck, deal, and replace whatever game was running."""

        deck = build_deck()
        shuffle(deck, self._rng)
        return self.replace_state(deal_new_game(self.config, deck))

    def replace_state(self, state: GameState) -> Snapshot:
        """Install ``state`` as the live game, invalidating the previous one."""

        if self._pending_task is not None:
            self._pending_task.cancel()
            self._pending_task = None
        self._generation += 1
        self._state = state
        logger.info("game %d started, %s to move", self._generation, state.turn_owner.value)
        snapshot = self._emit()
        self._schedule_opponent()
        return snapshot

    def player_play(self, card_index: int) -> Outcome:
        return self._player_action(lambda state: rules.play_card(state, Side.PLAYER, card_index))

    def player_draw(self) -> Outcome:
        return self._player_action(lambda state: rules.draw_card(state, Side.PLAYER))

    def player_choose_color(self, color: Color | str) -> Outcome:
        return self._player_action(
            lambda state: rules.choose_wild_color(state, Side.PLAYER, color)
        )

    def _player_action(self, apply: Callable[[GameState], object]) -> Outcome:
        if self._state is None:
            return Rejection(RejectionReason.NO_GAME, "no game has been started")
        try:
            apply(self._state)
        except rules.RuleViolation as exc:
            reason = _REASONS.get(type(exc), RejectionReason.ILLEGAL_MOVE)
            logger.debug("rejected player action (%s): %s", reason.value, exc)
            return Rejection(reason, str(exc))
        snapshot = self._emit()
        self._schedule_opponent()
        return snapshot

    def _emit(self) -> Snapshot:
        assert self._state is not None
        snapshot = self._state.snapshot(self._generation)
        if self._on_state_changed is not None:
            self._on_state_changed(snapshot)
        return snapshot

    def _schedule_opponent(self) -> None:
        state = self._state
        if state is None or state.game_over or state.turn_owner is not Side.OPPONENT:
            return
        generation = self._generation
        self._pending_task = self.scheduler.call_later(
            self.config.opponent_delay,
            lambda: self._opponent_turn(generation),
        )

    def _opponent_turn(self, generation: int) -> None:
        if generation != self._generation:
            logger.debug("ignoring stale opponent callback for game %d", generation)
            return
        self._pending_task = None
        state = self._state
        if state is None or state.game_over or state.turn_owner is not Side.OPPONENT:
            return

        self._opponent.take_turn(
            state,
            Side.OPPONENT,
            on_applied=lambda _action: self._emit_if_current(generation),
        )
        if generation != self._generation:
            return
        self._schedule_opponent()

    def _emit_if_current(self, generation: int) -> bool:
        """Emit a snapshot; report whether game ``generation`` is still live.

        The state-changed callback may start a new game, in which case the
        rest of the old game's opponent turn must not run.
        """

        self._emit()
        if generation != self._generation:
            logger.debug("game %d was replaced during the opponent's turn", generation)
            return False
        return True
