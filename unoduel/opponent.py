"""Heuristic decision making for the computer-controlled side."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Sequence

from . import actions, rules
from .cards import Card, CardKind, Color, Rank
from .deck import RandomSource
from .state import GameState, Side

__all__ = ["choose_action", "choose_wild_color", "OpponentModel"]

logger = logging.getLogger(__name__)


def choose_action(
    hand: Sequence[Card],
    active_color: Color | None,
    active_rank: Rank | None,
) -> actions.PlayAction | actions.DrawAction:
    """Pick the opponent's move from ``hand``.

    Among the legal cards, prefer (in order) a special action card, a card
    matching the active color, a card matching the active rank, then
    whatever legal card comes first. With nothing playable, draw.
    """

    legal = [
        index
        for index, card in enumerate(hand)
        if rules.is_legal_play(card, active_color, active_rank)
    ]
    if not legal:
        return actions.DrawAction()

    preferences = (
        lambda card: card.kind is CardKind.SPECIAL,
        lambda card: card.color is active_color,
        lambda card: card.rank is active_rank,
    )
    for prefer in preferences:
        for index in legal:
            if prefer(hand[index]):
                return actions.PlayAction(index)
    return actions.PlayAction(legal[0])


def choose_wild_color(rng: RandomSource) -> Color:
    """Pick a declared color uniformly from the four base colors."""

    return rng.choice(Color.base_colors())


@dataclass(slots=True)
class OpponentModel:
    """Drives one side of the table with the shedding heuristic."""

    rng: RandomSource = field(default_factory=random.Random)

    def take_turn(
        self,
        state: GameState,
        side: Side = Side.OPPONENT,
        on_applied: Callable[[actions.Action], bool] | None = None,
    ) -> list[actions.Action]:
        """Play a full turn for ``side`` and return the actions applied.

        A wild play is followed by its color declaration, so the turn is
        fully resolved when this returns. ``on_applied`` is called after
        each applied action; returning ``False`` ends the turn early.
        """

        decision = choose_action(state.hand(side), state.active_color, state.active_rank)
        actions.apply_action(state, side, decision)
        applied: list[actions.Action] = [decision]
        if on_applied is not None and not on_applied(decision):
            logger.debug("%s turn interrupted after %s", side.value, decision)
            return applied
        if state.pending_wild_choice and not state.game_over:
            follow_up = actions.ChooseColorAction(choose_wild_color(self.rng))
            actions.apply_action(state, side, follow_up)
            applied.append(follow_up)
            if on_applied is not None:
                on_applied(follow_up)
        logger.debug("%s turn resolved with %s", side.value, applied)
        return applied
