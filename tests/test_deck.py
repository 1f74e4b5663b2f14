from __future__ import annotations

import random
from collections import Counter
from typing import Sequence, TypeVar

from unoduel.cards import CardKind, Color, NumberCard, Rank
from unoduel.deck import DECK_CARD_COUNT, build_deck, draw, shuffle

T = TypeVar("T")


class ScriptedRandom:
    """Random source whose ``randrange`` answers come from a function."""

    def __init__(self, pick) -> None:
        self._pick = pick

    def randrange(self, stop: int) -> int:
        return self._pick(stop)

    def choice(self, seq: Sequence[T]) -> T:
        return seq[0]


def test_build_deck_composition() -> None:
    deck = build_deck()
    assert len(deck) == DECK_CARD_COUNT

    counts = Counter((card.color, card.rank) for card in deck)
    assert counts[(Color.WILD, Rank.WILD)] == 4
    assert counts[(Color.WILD, Rank.WILD4)] == 4
    for color in Color.base_colors():
        assert counts[(color, Rank.ZERO)] == 1
        for rank in Rank.numbers()[1:]:
            assert counts[(color, rank)] == 2
        for rank in Rank.specials():
            assert counts[(color, rank)] == 2
        assert sum(1 for card in deck if card.color is color) == 25


def test_shuffle_preserves_multiset() -> None:
    deck = build_deck()
    before = Counter(deck)
    shuffle(deck, random.Random(42))
    assert Counter(deck) == before
    assert deck != build_deck()


def test_shuffle_follows_random_source() -> None:
    cards = [NumberCard(Color.RED, n) for n in range(3)]

    identity = list(cards)
    shuffle(identity, ScriptedRandom(lambda stop: stop - 1))
    assert identity == cards

    rotated = list(cards)
    shuffle(rotated, ScriptedRandom(lambda stop: 0))
    assert rotated == [cards[1], cards[2], cards[0]]


def test_draw_takes_from_working_end() -> None:
    deck = [NumberCard(Color.RED, n) for n in range(5)]
    drawn = draw(deck, 2)
    assert drawn == [NumberCard(Color.RED, 4), NumberCard(Color.RED, 3)]
    assert len(deck) == 3


def test_draw_is_partial_when_deck_runs_out() -> None:
    deck = [NumberCard(Color.BLUE, 1)]
    assert draw(deck, 4) == [NumberCard(Color.BLUE, 1)]
    assert deck == []
    assert draw(deck, 1) == []


def test_build_deck_has_no_wild_colored_numbers() -> None:
    deck = build_deck()
    assert all(card.kind is CardKind.WILD for card in deck if card.color is Color.WILD)
