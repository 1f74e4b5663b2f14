"""Card abstractions and helpers for unoduel."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Color(str, Enum):
    """Enumeration of card colors, including the colorless wild marker."""

    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    WILD = "wild"

    @classmethod
    def base_colors(cls) -> tuple["Color", ...]:
        """Return the four colors a wild card may be declared as."""

        return (cls.RED, cls.BLUE, cls.GREEN, cls.YELLOW)


class Rank(str, Enum):
    """Every face value printed on a card."""

    ZERO = "0"
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW2 = "draw2"
    WILD = "wild"
    WILD4 = "wild4"

    @classmethod
    def numbers(cls) -> tuple["Rank", ...]:
        return (
            cls.ZERO,
            cls.ONE,
            cls.TWO,
            cls.THREE,
            cls.FOUR,
            cls.FIVE,
            cls.SIX,
            cls.SEVEN,
            cls.EIGHT,
            cls.NINE,
        )

    @classmethod
    def specials(cls) -> tuple["Rank", ...]:
        return (cls.SKIP, cls.REVERSE, cls.DRAW2)

    @classmethod
    def wilds(cls) -> tuple["Rank", ...]:
        return (cls.WILD, cls.WILD4)


class CardKind(str, Enum):
    NUMBER = "number"
    SPECIAL = "special"
    WILD = "wild"


@dataclass(frozen=True, slots=True)
class NumberCard:
    """Colored card carrying a face value between 0 and 9."""

    color: Color
    number: int

    def __post_init__(self) -> None:
        if self.color not in Color.base_colors():
            raise ValueError(f"number card needs a base color, got {self.color!r}")
        if not 0 <= self.number <= 9:
            raise ValueError(f"number card value out of range: {self.number}")

    @property
    def rank(self) -> Rank:
        return Rank(str(self.number))

    @property
    def kind(self) -> CardKind:
        return CardKind.NUMBER

    def label(self) -> str:
        return f"{self.color.value} {self.number}"


@dataclass(frozen=True, slots=True)
class SpecialCard:
    """Colored action card: skip, reverse or draw two."""

    color: Color
    action: Rank

    def __post_init__(self) -> None:
        if self.color not in Color.base_colors():
            raise ValueError(f"special card needs a base color, got {self.color!r}")
        if self.action not in Rank.specials():
            raise ValueError(f"not a special action: {self.action!r}")

    @property
    def rank(self) -> Rank:
        return self.action

    @property
    def kind(self) -> CardKind:
        return CardKind.SPECIAL

    def label(self) -> str:
        return f"{self.color.value} {self.action.value}"


@dataclass(frozen=True, slots=True)
class WildCard:
    """Colorless card whose effective color is declared by whoever plays it."""

    action: Rank = Rank.WILD

    def __post_init__(self) -> None:
        if self.action not in Rank.wilds():
            raise ValueError(f"not a wild action: {self.action!r}")

    @property
    def color(self) -> Color:
        return Color.WILD

    @property
    def rank(self) -> Rank:
        return self.action

    @property
    def kind(self) -> CardKind:
        return CardKind.WILD

    def label(self) -> str:
        return self.action.value


Card = Union[NumberCard, SpecialCard, WildCard]


def make_card(color: Color | str, rank: Rank | str) -> Card:
    """Build the matching card variant from a ``(color, rank)`` pair.

    Accepts either enum members or their string values, which keeps test
    fixtures and host-side parsing terse: ``make_card("red", "5")``.
    """

    color = Color(color)
    rank = Rank(rank)
    if rank in Rank.wilds():
        if color is not Color.WILD:
            raise ValueError(f"{rank.value} cards are colorless")
        return WildCard(rank)
    if rank in Rank.specials():
        return SpecialCard(color, rank)
    return NumberCard(color, int(rank.value))
