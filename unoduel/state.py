"""Core game state data structures for unoduel."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Sequence

from .cards import Card, CardKind, Color, Rank
from .deck import DECK_CARD_COUNT, draw


class Side(str, Enum):
    """The two seats at the table."""

    PLAYER = "player"
    OPPONENT = "opponent"

    @property
    def other(self) -> "Side":
        return Side.OPPONENT if self is Side.PLAYER else Side.PLAYER


class TurnPhase(str, Enum):
    """Externally visible engine states, derived from ``GameState`` fields."""

    WAITING_FOR_PLAYER_MOVE = "waiting_for_player_move"
    WAITING_FOR_COLOR_CHOICE = "waiting_for_color_choice"
    WAITING_FOR_OPPONENT_MOVE = "waiting_for_opponent_move"
    GAME_OVER = "game_over"


class InvariantViolation(RuntimeError):
    """Raised when a state breaks card conservation or active-card rules."""


@dataclass(slots=True)
class GameConfig:
    """Runtime configuration for a single game."""

    hand_size: int = 7
    opponent_delay: float = 0.8
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.hand_size <= 0:
            raise ValueError("hand_size must be positive")
        # Both hands plus a non-wild seed must fit among the 100 colored cards.
        if 2 * self.hand_size >= DECK_CARD_COUNT - 8:
            raise ValueError("hand_size too large for a 108-card deck")
        if self.opponent_delay < 0:
            raise ValueError("opponent_delay must be non-negative")


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Immutable view of a game handed to the host after each transition."""

    generation: int
    player_hand: tuple[Card, ...]
    opponent_hand_size: int
    deck_size: int
    discard_size: int
    discard_top: Card | None
    active_color: Color | None
    active_rank: Rank | None
    turn_owner: Side
    phase: TurnPhase
    pending_wild_choice: bool
    game_over: bool
    winner: Side | None
    turn_number: int
    player_uno: bool
    opponent_uno: bool

    def to_dict(self) -> dict[str, Any]:
        """Return plain data suitable for JSON encoding by a host."""

        data = asdict(self)
        data["player_hand"] = [
            {"color": card.color.value, "rank": card.rank.value, "kind": card.kind.value}
            for card in self.player_hand
        ]
        top = self.discard_top
        data["discard_top"] = (
            None
            if top is None
            else {"color": top.color.value, "rank": top.rank.value, "kind": top.kind.value}
        )
        data["active_color"] = self.active_color.value if self.active_color else None
        data["active_rank"] = self.active_rank.value if self.active_rank else None
        data["turn_owner"] = self.turn_owner.value
        data["phase"] = self.phase.value
        data["winner"] = self.winner.value if self.winner else None
        return data


@dataclass(slots=True)
class GameState:
    """Mutable record of a single game; owned by exactly one controller."""

    player_hand: list[Card] = field(default_factory=list)
    opponent_hand: list[Card] = field(default_factory=list)
    deck: list[Card] = field(default_factory=list)
    discard_pile: list[Card] = field(default_factory=list)
    active_color: Color | None = None
    active_rank: Rank | None = None
    turn_owner: Side = Side.PLAYER
    pending_wild_choice: bool = False
    game_over: bool = False
    winner: Side | None = None
    turn_number: int = 0

    def hand(self, side: Side) -> list[Card]:
        """Return the live hand list owned by ``side``."""

        return self.player_hand if side is Side.PLAYER else self.opponent_hand

    @property
    def discard_top(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def phase(self) -> TurnPhase:
        if self.game_over:
            return TurnPhase.GAME_OVER
        if self.pending_wild_choice:
            return TurnPhase.WAITING_FOR_COLOR_CHOICE
        if self.turn_owner is Side.PLAYER:
            return TurnPhase.WAITING_FOR_PLAYER_MOVE
        return TurnPhase.WAITING_FOR_OPPONENT_MOVE

    def card_count(self) -> int:
        return (
            len(self.deck)
            + len(self.player_hand)
            + len(self.opponent_hand)
            + len(self.discard_pile)
        )

    def check_invariants(self) -> None:
        """Raise ``InvariantViolation`` if the state is internally inconsistent."""

        total = self.card_count()
        if total != DECK_CARD_COUNT:
            raise InvariantViolation(f"card conservation broken: {total} cards tracked")
        top = self.discard_top
        if top is None:
            raise InvariantViolation("discard pile is empty")
        if top.kind is CardKind.WILD:
            if self.active_rank is not top.rank:
                raise InvariantViolation("active rank must follow the wild on top")
            if self.pending_wild_choice and self.active_color is not None:
                raise InvariantViolation("active color must be unset while a choice is pending")
            if not self.pending_wild_choice and not self.game_over:
                if self.active_color not in Color.base_colors():
                    raise InvariantViolation("wild color was never chosen")
        elif self.active_color is not top.color or self.active_rank is not top.rank:
            raise InvariantViolation("active color/rank out of sync with discard top")
        if self.game_over != (self.winner is not None):
            raise InvariantViolation("game_over and winner disagree")
        if not self.game_over and (not self.player_hand or not self.opponent_hand):
            raise InvariantViolation("empty hand without a winner")

    def snapshot(self, generation: int = 0) -> Snapshot:
        return Snapshot(
            generation=generation,
            player_hand=tuple(self.player_hand),
            opponent_hand_size=len(self.opponent_hand),
            deck_size=len(self.deck),
            discard_size=len(self.discard_pile),
            discard_top=self.discard_top,
            active_color=self.active_color,
            active_rank=self.active_rank,
            turn_owner=self.turn_owner,
            phase=self.phase,
            pending_wild_choice=self.pending_wild_choice,
            game_over=self.game_over,
            winner=self.winner,
            turn_number=self.turn_number,
            player_uno=len(self.player_hand) == 1,
            opponent_uno=len(self.opponent_hand) == 1,
        )

    def clone(self) -> "GameState":
        """Return a copy whose card containers can be mutated independently."""

        return GameState(
            player_hand=list(self.player_hand),
            opponent_hand=list(self.opponent_hand),
            deck=list(self.deck),
            discard_pile=list(self.discard_pile),
            active_color=self.active_color,
            active_rank=self.active_rank,
            turn_owner=self.turn_owner,
            pending_wild_choice=self.pending_wild_choice,
            game_over=self.game_over,
            winner=self.winner,
            turn_number=self.turn_number,
        )


def _pop_seed_card(deck: list[Card]) -> Card:
    """Remove the non-wild card nearest the working end of ``deck``.

    Wild cards passed over stay in the deck in their original order.
    """

    for index in range(len(deck) - 1, -1, -1):
        if deck[index].kind is not CardKind.WILD:
            return deck.pop(index)
    raise ValueError("deck holds no non-wild card to seed the discard pile")


def deal_new_game(config: GameConfig, deck_cards: Sequence[Card]) -> GameState:
    """Deal a fresh game from an already shuffled deck."""

    deck = list(deck_cards)
    if len(deck) < 2 * config.hand_size + 1:
        raise ValueError("insufficient cards in deck for requested hand size")

    player_hand = draw(deck, config.hand_size)
    opponent_hand = draw(deck, config.hand_size)
    seed = _pop_seed_card(deck)

    return GameState(
        player_hand=player_hand,
        opponent_hand=opponent_hand,
        deck=deck,
        discard_pile=[seed],
        active_color=seed.color,
        active_rank=seed.rank,
        turn_owner=Side.PLAYER,
    )
