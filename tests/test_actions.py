from __future__ import annotations

import pytest

from unoduel import actions, rules
from unoduel.cards import Color, NumberCard, Rank, WildCard
from unoduel.state import GameState, Side

RED_9 = NumberCard(Color.RED, 9)


def test_legal_actions_lists_playable_cards_then_draw(make_state) -> None:
    game_state = make_state(
        [NumberCard(Color.BLUE, 3), NumberCard(Color.RED, 2), WildCard(Rank.WILD)],
        [NumberCard(Color.BLUE, 1)],
        RED_9,
    )

    assert actions.legal_actions(game_state, Side.PLAYER) == [
        actions.PlayAction(1),
        actions.PlayAction(2),
        actions.DrawAction(),
    ]
    assert actions.legal_actions(game_state, Side.OPPONENT) == []


def test_legal_actions_during_color_choice(make_state) -> None:
    game_state = make_state(
        [WildCard(Rank.WILD), NumberCard(Color.BLUE, 3)],
        [NumberCard(Color.BLUE, 1)],
        RED_9,
    )
    rules.play_card(game_state, Side.PLAYER, 0)

    choices = actions.legal_actions(game_state, Side.PLAYER)
    assert choices == [actions.ChooseColorAction(color) for color in Color.base_colors()]


def test_apply_action_dispatches_to_rules(monkeypatch: pytest.MonkeyPatch, make_state) -> None:
    game_state = make_state([NumberCard(Color.RED, 1)], [NumberCard(Color.BLUE, 1)], RED_9)
    called: dict[str, tuple] = {}

    def mock_draw(state: GameState, side: Side) -> None:
        called["draw"] = (state, side)

    def mock_play(state: GameState, side: Side, index: int) -> None:
        called["play"] = (state, side, index)

    monkeypatch.setattr(rules, "draw_card", mock_draw)
    monkeypatch.setattr(rules, "play_card", mock_play)

    actions.apply_action(game_state, Side.PLAYER, actions.DrawAction())
    actions.apply_action(game_state, Side.PLAYER, actions.PlayAction(0))

    assert called["draw"] == (game_state, Side.PLAYER)
    assert called["play"] == (game_state, Side.PLAYER, 0)
