"""Rule utilities for the two-party shedding game.

Every mutating helper validates its preconditions first and raises a
``RuleViolation`` subclass before touching the state, so a rejected call
leaves the game exactly as it was.
"""

from __future__ import annotations

import logging
from typing import Final

from .cards import Card, CardKind, Color, NumberCard, Rank, SpecialCard, WildCard
from .deck import draw
from .state import GameState, Side

__all__ = [
    "RuleViolation",
    "IllegalMove",
    "OutOfTurn",
    "InvalidColorChoice",
    "GameFinished",
    "DRAW_PENALTIES",
    "is_legal_play",
    "legal_card_indices",
    "play_card",
    "resolve_effect",
    "choose_wild_color",
    "draw_card",
    "flip_turn",
]

logger = logging.getLogger(__name__)

DRAW_PENALTIES: Final[dict[Rank, int]] = {Rank.DRAW2: 2, Rank.WILD4: 4}


class RuleViolation(RuntimeError):
    """Base class for rejected actions."""


class IllegalMove(RuleViolation):
    """Raised when a card or action is not allowed in the current position."""


class OutOfTurn(RuleViolation):
    """Raised when a side acts while the other side owns the turn."""


class InvalidColorChoice(RuleViolation):
    """Raised when no color choice is pending or the color is not a base color."""


class GameFinished(RuleViolation):
    """Raised when any action is attempted after the game has ended."""


def is_legal_play(card: Card, active_color: Color | None, active_rank: Rank | None) -> bool:
    """Return ``True`` when ``card`` may be played onto the active color/rank."""

    if card.kind is CardKind.WILD:
        return True
    return card.color is active_color or card.rank is active_rank


def legal_card_indices(state: GameState, side: Side) -> list[int]:
    """Return indices into ``side``'s hand of every card it could legally play."""

    return [
        index
        for index, card in enumerate(state.hand(side))
        if is_legal_play(card, state.active_color, state.active_rank)
    ]


def _require_turn(state: GameState, side: Side) -> None:
    if state.game_over:
        raise GameFinished("game already finished")
    if state.turn_owner is not side:
        raise OutOfTurn(f"it is not the {side.value}'s turn")


def play_card(state: GameState, side: Side, card_index: int) -> Card:
    """Play the card at ``card_index`` from ``side``'s hand and return it."""

    _require_turn(state, side)
    if state.pending_wild_choice:
        raise IllegalMove("a wild color must be chosen first")
    hand = state.hand(side)
    if isinstance(card_index, bool) or not isinstance(card_index, int):
        raise IllegalMove(f"card index must be an integer, got {card_index!r}")
    if not 0 <= card_index < len(hand):
        raise IllegalMove(f"no card at index {card_index}")
    card = hand[card_index]
    if not is_legal_play(card, state.active_color, state.active_rank):
        raise IllegalMove(f"{card.label()} does not match the active color or rank")

    del hand[card_index]
    state.discard_pile.append(card)
    state.active_rank = card.rank
    state.active_color = None if card.kind is CardKind.WILD else card.color
    logger.debug("%s played %s", side.value, card.label())

    if not hand:
        state.game_over = True
        state.winner = side
        logger.debug("%s emptied their hand and wins", side.value)
        return card

    if card.kind is CardKind.WILD:
        state.pending_wild_choice = True
        return card

    resolve_effect(state, card, side)
    flip_turn(state)
    return card


def _force_draw(state: GameState, side: Side, count: int) -> None:
    drawn = draw(state.deck, count)
    state.hand(side).extend(drawn)
    logger.debug("%s draws %d card(s) as a penalty", side.value, len(drawn))


def resolve_effect(state: GameState, card: Card, side: Side) -> None:
    """Apply the effect of ``card`` just played by ``side``.

    Skip and reverse carry no extra effect with two seats. The wild draw
    four penalty is applied here too, but only once a color was chosen.
    """

    if isinstance(card, NumberCard):
        return
    if isinstance(card, SpecialCard):
        if card.action is Rank.DRAW2:
            _force_draw(state, side.other, DRAW_PENALTIES[Rank.DRAW2])
        return
    if isinstance(card, WildCard):
        if card.action is Rank.WILD4:
            _force_draw(state, side.other, DRAW_PENALTIES[Rank.WILD4])
        return
    raise TypeError(f"unknown card type: {type(card).__name__}")


def choose_wild_color(state: GameState, side: Side, color: Color | str) -> Color:
    """Declare the color for the wild card ``side`` just played."""

    _require_turn(state, side)
    if not state.pending_wild_choice:
        raise InvalidColorChoice("no wild color choice is pending")
    try:
        chosen = Color(color)
    except ValueError as exc:
        raise InvalidColorChoice(f"unknown color {color!r}") from exc
    if chosen not in Color.base_colors():
        raise InvalidColorChoice(f"{chosen.value} is not a base color")

    state.active_color = chosen
    state.pending_wild_choice = False
    logger.debug("%s chose %s", side.value, chosen.value)

    top = state.discard_top
    if top is not None:
        resolve_effect(state, top, side)
    flip_turn(state)
    return chosen


def draw_card(state: GameState, side: Side) -> Card | None:
    """Draw a single card for ``side`` and end its turn.

    Returns the card drawn, or ``None`` when the deck was empty.
    """

    _require_turn(state, side)
    if state.pending_wild_choice:
        raise IllegalMove("a wild color must be chosen first")

    drawn = draw(state.deck, 1)
    state.hand(side).extend(drawn)
    logger.debug("%s draws %d card(s)", side.value, len(drawn))
    flip_turn(state)
    return drawn[0] if drawn else None


def flip_turn(state: GameState) -> None:
    """Hand the turn to the other side."""

    state.turn_owner = state.turn_owner.other
    state.turn_number += 1
