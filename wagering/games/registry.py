"""Exhaustive dispatch from :class:`GameType` to its calculator."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence, Union

from ..config import WageringSettings
from ..models import Game, GameType, Hole, Player
from .banker import BankerResult, calculate_banker
from .bingo_bango_bongo import BingoBangoBongoResult, calculate_bingo_bango_bongo
from .match import MatchPlayResult, NassauResult, calculate_match_play, calculate_nassau
from .nines import NinesResult, calculate_nines
from .skins import SkinsResult, calculate_skins
from .snake import SnakeResult, calculate_snake
from .stableford import StablefordResult, calculate_stableford
from .vegas import VegasResult, calculate_vegas
from .wolf import WolfResult, calculate_wolf

GameResultModel = Union[
    NassauResult,
    SkinsResult,
    WolfResult,
    NinesResult,
    MatchPlayResult,
    StablefordResult,
    SnakeResult,
    VegasResult,
    BankerResult,
    BingoBangoBongoResult,
]

Calculator = Callable[
    [Game, Sequence[Player], Sequence[Hole], Optional[WageringSettings]],
    GameResultModel,
]

_CALCULATORS: Dict[GameType, Calculator] = {
    GameType.NASSAU: lambda game, players, holes, settings: calculate_nassau(
        players,
        holes,
        game.bet_amount,
        require_handicaps=game.require_handicaps,
        settings=settings,
    ),
    GameType.SKINS: lambda game, players, holes, settings: calculate_skins(
        players,
        holes,
        game.bet_amount,
        require_handicaps=game.require_handicaps,
        settings=settings,
    ),
    GameType.WOLF: lambda game, players, holes, settings: calculate_wolf(
        players,
        holes,
        game.wolf_decisions,
        game.bet_amount,
        require_handicaps=game.require_handicaps,
        settings=settings,
    ),
    GameType.NINES: lambda game, players, holes, settings: calculate_nines(
        players,
        holes,
        game.bet_amount,
        require_handicaps=game.require_handicaps,
        settings=settings,
    ),
    GameType.MATCH_PLAY: lambda game, players, holes, settings: calculate_match_play(
        players,
        holes,
        game.bet_amount,
        require_handicaps=game.require_handicaps,
        settings=settings,
    ),
    GameType.STABLEFORD: lambda game, players, holes, settings: calculate_stableford(
        players,
        holes,
        game.bet_amount,
        require_handicaps=game.require_handicaps,
        settings=settings,
    ),
    GameType.SNAKE: lambda game, players, holes, settings: calculate_snake(
        players, game.bet_amount, settings=settings
    ),
    GameType.VEGAS: lambda game, players, holes, settings: calculate_vegas(
        players,
        holes,
        game.vegas_teams,
        game.bet_amount,
        require_handicaps=game.require_handicaps,
        settings=settings,
    ),
    GameType.BANKER: lambda game, players, holes, settings: calculate_banker(
        players,
        holes,
        game.banker_decisions,
        game.bet_amount,
        require_handicaps=game.require_handicaps,
        settings=settings,
    ),
    GameType.BINGO_BANGO_BONGO: lambda game, players, holes, settings: calculate_bingo_bango_bongo(
        players, game.bbb_points, game.bet_amount, settings=settings
    ),
}

_missing = set(GameType) - set(_CALCULATORS)
if _missing:
    raise RuntimeError(
        "no calculator registered for game type(s): "
        + ", ".join(sorted(t.value for t in _missing))
    )


def calculator_for(game_type: GameType) -> Calculator:
    return _CALCULATORS[game_type]


def calculate_game(
    game: Game,
    players: Sequence[Player],
    holes: Sequence[Hole],
    settings: Optional[WageringSettings] = None,
) -> GameResultModel:
    """Run ``game``'s calculator over ``players`` (already filtered to participants)."""

    return _CALCULATORS[game.type](game, players, holes, settings)


__all__ = ["Calculator", "GameResultModel", "calculate_game", "calculator_for"]
