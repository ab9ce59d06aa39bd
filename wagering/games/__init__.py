"""Per-game scoring calculators."""

from .banker import BankerResult, calculate_banker
from .base import GameOutcome, check_bet_amount
from .bingo_bango_bongo import BingoBangoBongoResult, calculate_bingo_bango_bongo
from .match import (
    MatchPlayResult,
    NassauResult,
    SegmentResult,
    calculate_match_play,
    calculate_nassau,
    evaluate_match,
)
from .nines import NinesResult, calculate_nines
from .registry import GameResultModel, calculate_game
from .skins import SkinsResult, calculate_skins
from .snake import SnakeResult, calculate_snake
from .stableford import StablefordResult, calculate_stableford
from .vegas import VegasResult, calculate_vegas
from .wolf import WolfResult, calculate_wolf

__all__ = [
    "BankerResult",
    "BingoBangoBongoResult",
    "GameOutcome",
    "GameResultModel",
    "MatchPlayResult",
    "NassauResult",
    "NinesResult",
    "SegmentResult",
    "SkinsResult",
    "SnakeResult",
    "StablefordResult",
    "VegasResult",
    "WolfResult",
    "calculate_banker",
    "calculate_bingo_bango_bongo",
    "calculate_game",
    "calculate_match_play",
    "calculate_nassau",
    "calculate_nines",
    "calculate_skins",
    "calculate_snake",
    "calculate_stableford",
    "calculate_vegas",
    "calculate_wolf",
    "check_bet_amount",
    "evaluate_match",
]
