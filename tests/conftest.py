"""Shared builders for constructing exact game positions."""

from __future__ import annotations

from typing import Callable, Sequence

import pytest

from unoduel.cards import Card, Color, Rank
from unoduel.deck import build_deck
from unoduel.state import GameState, Side


def build_state(
    player_hand: Sequence[Card],
    opponent_hand: Sequence[Card],
    top: Card,
    *,
    active_color: Color | None = None,
    active_rank: Rank | None = None,
    turn_owner: Side = Side.PLAYER,
    deck: Sequence[Card] | None = None,
) -> GameState:
    """Return a state holding exactly the given cards.

    Every card of the 108 not placed elsewhere goes to the deck, or beneath
    ``top`` on the discard pile when an explicit ``deck`` is supplied, so
    card conservation holds for any position built here.
    """

    remaining = build_deck()
    for card in [*player_hand, *opponent_hand, top, *(deck or [])]:
        remaining.remove(card)
    if deck is None:
        deck_cards = remaining
        discard = [top]
    else:
        deck_cards = list(deck)
        discard = remaining + [top]
    return GameState(
        player_hand=list(player_hand),
        opponent_hand=list(opponent_hand),
        deck=deck_cards,
        discard_pile=discard,
        active_color=top.color if active_color is None else active_color,
        active_rank=top.rank if active_rank is None else active_rank,
        turn_owner=turn_owner,
    )


@pytest.fixture
def make_state() -> Callable[..., GameState]:
    return build_state
