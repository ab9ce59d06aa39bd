from decimal import Decimal

import pytest

from wagering.config import WageringSettings, reset_settings_cache
from wagering.errors import GameCalculationError
from wagering.games import calculate_game
from wagering.games.registry import calculator_for
from wagering.models import Game, GameType


@pytest.mark.parametrize("game_type", list(GameType))
def test_every_game_type_has_a_calculator(game_type, holes, make_player) -> None:
    players = [make_player(uid, [4] * 18) for uid in ("a", "b", "c", "d")]
    game = Game(id=f"g-{game_type.value}", type=game_type, bet_amount=1)

    result = calculate_game(game, players, holes)

    assert callable(calculator_for(game_type))
    assert result.game_type is game_type


def test_bet_above_configured_maximum_is_rejected(monkeypatch, holes, make_player) -> None:
    monkeypatch.setenv("WAGERING_MAX_BET_AMOUNT", "50")
    reset_settings_cache()
    players = [make_player("a", [4] * 18), make_player("b", [4] * 18)]
    game = Game(id="g1", type=GameType.SKINS, bet_amount=51)

    with pytest.raises(GameCalculationError):
        calculate_game(game, players, holes)


def test_required_handicaps_flow_through_dispatch(holes, make_player) -> None:
    players = [make_player("a", [4] * 18, handicap=None), make_player("b", [4] * 18)]
    game = Game(id="g1", type=GameType.NASSAU, bet_amount=1, require_handicaps=True)

    with pytest.raises(GameCalculationError):
        calculate_game(game, players, holes)


def test_injected_settings_bound_the_bet(holes, make_player) -> None:
    players = [make_player("a", [4] * 18), make_player("b", [4] * 18)]
    game = Game(id="g1", type=GameType.NASSAU, bet_amount=100)

    with pytest.raises(GameCalculationError):
        calculate_game(game, players, holes, WageringSettings(max_bet_amount=5))


def test_injected_settings_take_precedence_over_environment(
    monkeypatch, holes, make_player
) -> None:
    monkeypatch.setenv("WAGERING_MAX_BET_AMOUNT", "5")
    reset_settings_cache()
    players = [make_player("a", [4] * 18), make_player("b", [4] * 18)]
    game = Game(id="g1", type=GameType.SNAKE, bet_amount=20)

    result = calculate_game(game, players, holes, WageringSettings(max_bet_amount=50))

    assert result.bet_amount == Decimal("20")
