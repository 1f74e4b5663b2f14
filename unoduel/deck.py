"""Deck assembly, shuffling and draw helpers."""

from __future__ import annotations

import logging
from typing import Final, MutableSequence, Protocol, Sequence, TypeVar

from .cards import Card, Color, NumberCard, Rank, SpecialCard, WildCard

__all__ = ["DECK_CARD_COUNT", "RandomSource", "build_deck", "shuffle", "draw"]

logger = logging.getLogger(__name__)

DECK_CARD_COUNT: Final[int] = 108
WILD_COPIES: Final[int] = 4

T = TypeVar("T")


class RandomSource(Protocol):
    """Minimal random interface used by the engine.

    ``random.Random`` satisfies it, so does any scripted stand-in that
    returns predetermined values.
    """

    def randrange(self, stop: int) -> int: ...

    def choice(self, seq: Sequence[T]) -> T: ...


def build_deck() -> list[Card]:
    """Return a deterministic ordering of all 108 cards."""

    cards: list[Card] = []
    for color in Color.base_colors():
        cards.append(NumberCard(color, 0))
        for number in range(1, 10):
            cards.append(NumberCard(color, number))
            cards.append(NumberCard(color, number))
        for action in Rank.specials():
            cards.append(SpecialCard(color, action))
            cards.append(SpecialCard(color, action))
    for _ in range(WILD_COPIES):
        cards.append(WildCard(Rank.WILD))
        cards.append(WildCard(Rank.WILD4))
    return cards


def shuffle(deck: MutableSequence[Card], rng: RandomSource) -> None:
    """Shuffle ``deck`` in place with a Fisher-Yates pass."""

    for i in range(len(deck) - 1, 0, -1):
        j = rng.randrange(i + 1)
        deck[i], deck[j] = deck[j], deck[i]


def draw(deck: list[Card], count: int) -> list[Card]:
    """Remove up to ``count`` cards from the working end of ``deck``.

    A short or empty deck yields whatever is left; that is not an error.
    """

    if count < 0:
        raise ValueError("count must be non-negative")
    drawn: list[Card] = []
    while deck and len(drawn) < count:
        drawn.append(deck.pop())
    if len(drawn) < count:
        logger.debug("deck exhausted: requested %d card(s), drew %d", count, len(drawn))
    return drawn
