"""Legal action generation utilities for unoduel gameplay."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from . import rules
from .cards import Color
from .state import GameState, Side


@dataclass(frozen=True)
class PlayAction:
    """Play the card at ``card_index`` of the acting side's hand."""

    card_index: int


@dataclass(frozen=True)
class DrawAction:
    """Draw one card and end the turn."""


@dataclass(frozen=True)
class ChooseColorAction:
    """Declare the color of a wild card that was just played."""

    color: Color


Action = Union[PlayAction, DrawAction, ChooseColorAction]


def legal_actions(state: GameState, side: Side) -> list[Action]:
    """Return every action ``side`` may take right now."""

    if state.game_over or state.turn_owner is not side:
        return []
    if state.pending_wild_choice:
        return [ChooseColorAction(color) for color in Color.base_colors()]

    result: list[Action] = [PlayAction(index) for index in rules.legal_card_indices(state, side)]
    result.append(DrawAction())
    return result


def apply_action(state: GameState, side: Side, action: Action) -> None:
    """Apply ``action`` for ``side`` through the rules engine."""

    if isinstance(action, PlayAction):
        rules.play_card(state, side, action.card_index)
    elif isinstance(action, DrawAction):
        rules.draw_card(state, side)
    elif isinstance(action, ChooseColorAction):
        rules.choose_wild_color(state, side, action.color)
    else:  # pragma: no cover - defensive branch
        raise ValueError(f"Unknown action {action!r}")
