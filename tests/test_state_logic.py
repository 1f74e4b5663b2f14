from __future__ import annotations

import pytest

from unoduel.cards import CardKind, Color, NumberCard, Rank, SpecialCard, WildCard
from unoduel.deck import DECK_CARD_COUNT, build_deck
from unoduel.state import (
    GameConfig,
    InvariantViolation,
    Side,
    TurnPhase,
    deal_new_game,
)


def test_deal_new_game_assigns_hand_sizes() -> None:
    deck = build_deck()
    game_state = deal_new_game(GameConfig(), deck)

    assert len(game_state.player_hand) == 7
    assert len(game_state.opponent_hand) == 7
    assert len(game_state.discard_pile) == 1
    assert len(game_state.deck) == DECK_CARD_COUNT - 15
    assert game_state.turn_owner is Side.PLAYER
    assert game_state.phase is TurnPhase.WAITING_FOR_PLAYER_MOVE
    game_state.check_invariants()


def test_deal_deals_player_first_from_working_end() -> None:
    deck = build_deck()
    game_state = deal_new_game(GameConfig(hand_size=2), deck)
    assert game_state.player_hand == [deck[-1], deck[-2]]
    assert game_state.opponent_hand == [deck[-3], deck[-4]]


def test_seed_card_skips_wilds_and_leaves_them_in_deck() -> None:
    deck = build_deck()
    # Unshuffled, the four-wild/four-wild4 block sits at the working end.
    wilds = deck[-8:]
    game_state = deal_new_game(GameConfig(hand_size=2), deck)

    seed = game_state.discard_pile[-1]
    assert seed.kind is not CardKind.WILD
    assert seed == deck[-9]
    assert game_state.active_color is seed.color
    assert game_state.active_rank is seed.rank
    assert game_state.deck[-4:] == wilds[:4]
    game_state.check_invariants()


def test_deal_rejects_short_deck() -> None:
    with pytest.raises(ValueError):
        deal_new_game(GameConfig(hand_size=7), build_deck()[:10])


@pytest.mark.parametrize(
    "kwargs",
    [{"hand_size": 0}, {"hand_size": 50}, {"opponent_delay": -1.0}],
)
def test_config_validation(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        GameConfig(**kwargs)


def test_check_invariants_detects_lost_card(make_state) -> None:
    game_state = make_state(
        [NumberCard(Color.RED, 1)],
        [NumberCard(Color.BLUE, 2)],
        NumberCard(Color.RED, 5),
    )
    game_state.check_invariants()
    game_state.deck.pop()
    with pytest.raises(InvariantViolation):
        game_state.check_invariants()


def test_check_invariants_detects_active_mismatch(make_state) -> None:
    game_state = make_state(
        [NumberCard(Color.RED, 1)],
        [NumberCard(Color.BLUE, 2)],
        NumberCard(Color.RED, 5),
        active_color=Color.BLUE,
    )
    with pytest.raises(InvariantViolation):
        game_state.check_invariants()


def test_phase_reflects_pending_choice(make_state) -> None:
    game_state = make_state(
        [NumberCard(Color.RED, 1)],
        [NumberCard(Color.BLUE, 2)],
        WildCard(Rank.WILD),
        active_color=None,
        active_rank=Rank.WILD,
    )
    game_state.active_color = None
    game_state.pending_wild_choice = True
    assert game_state.phase is TurnPhase.WAITING_FOR_COLOR_CHOICE
    game_state.check_invariants()


def test_snapshot_reports_uno_flags(make_state) -> None:
    game_state = make_state(
        [NumberCard(Color.RED, 1)],
        [NumberCard(Color.BLUE, 2), SpecialCard(Color.GREEN, Rank.SKIP)],
        NumberCard(Color.RED, 5),
    )
    snapshot = game_state.snapshot(generation=3)
    assert snapshot.generation == 3
    assert snapshot.player_uno
    assert not snapshot.opponent_uno
    assert snapshot.opponent_hand_size == 2
    assert snapshot.player_hand == (NumberCard(Color.RED, 1),)

    data = snapshot.to_dict()
    assert data["player_hand"] == [{"color": "red", "rank": "1", "kind": "number"}]
    assert data["turn_owner"] == "player"
    assert data["phase"] == "waiting_for_player_move"
    assert data["winner"] is None


def test_clone_is_independent(make_state) -> None:
    game_state = make_state(
        [NumberCard(Color.RED, 1)],
        [NumberCard(Color.BLUE, 2)],
        NumberCard(Color.RED, 5),
    )
    copy = game_state.clone()
    copy.player_hand.clear()
    assert game_state.player_hand == [NumberCard(Color.RED, 1)]
    assert copy != game_state
