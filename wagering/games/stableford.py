"""Stableford: points per hole from net score relative to par."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..config import WageringSettings
from ..handicap import NetScorer
from ..models import GameType, Hole, Player
from ..money import MoneyLike, ZERO
from .base import BACK_NINE, FRONT_NINE, GameOutcome, ROUND_HOLES, check_bet_amount

DEFAULT_PAR = 4


def stableford_points(net: int, par: int) -> int:
    diff = net - par
    if diff <= -3:
        return 5
    if diff == -2:
        return 4
    if diff == -1:
        return 3
    if diff == 0:
        return 2
    if diff == 1:
        return 1
    return 0


class StablefordStanding(BaseModel):
    user_id: str = Field(serialization_alias="userId")
    name: str
    front: int = 0
    back: int = 0
    total: int = 0
    money: Decimal = ZERO
    hole_points: Dict[int, int] = Field(default_factory=dict, serialization_alias="holePoints")

    model_config = ConfigDict(populate_by_name=True)


class StablefordResult(GameOutcome):
    game_type: GameType = Field(
        default=GameType.STABLEFORD, serialization_alias="gameType"
    )
    standings: List[StablefordStanding] = Field(default_factory=list)
    average_points: Decimal = Field(default=ZERO, serialization_alias="averagePoints")


def calculate_stableford(
    players: Sequence[Player],
    holes: Sequence[Hole],
    bet_amount: MoneyLike,
    *,
    require_handicaps: bool = False,
    settings: Optional[WageringSettings] = None,
) -> StablefordResult:
    bet = check_bet_amount(bet_amount, settings)
    if not players:
        return StablefordResult(bet_amount=bet)

    scorer = NetScorer(players, holes, require_handicaps=require_handicaps)

    standings: List[StablefordStanding] = []
    for player in players:
        points: Dict[int, int] = {}
        for hole_number in ROUND_HOLES:
            net = scorer.net(player.user_id, hole_number)
            if net is None:
                continue
            hole = scorer.hole(hole_number)
            points[hole_number] = stableford_points(net, hole.par if hole else DEFAULT_PAR)
        front = sum(v for h, v in points.items() if h in FRONT_NINE)
        back = sum(v for h, v in points.items() if h in BACK_NINE)
        standings.append(
            StablefordStanding(
                user_id=player.user_id,
                name=player.name,
                front=front,
                back=back,
                total=front + back,
                hole_points=points,
            )
        )

    average = Decimal(sum(s.total for s in standings)) / len(standings)
    for standing in standings:
        standing.money = (standing.total - average) * bet
    standings.sort(key=lambda s: s.total, reverse=True)
    return StablefordResult(bet_amount=bet, standings=standings, average_points=average)


__all__ = [
    "StablefordResult",
    "StablefordStanding",
    "calculate_stableford",
    "stableford_points",
]
