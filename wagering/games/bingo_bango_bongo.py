"""Bingo-Bango-Bongo: three externally recorded points per hole."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..config import WageringSettings
from ..models import BingoBangoBongoPoint, GameType, Player
from ..money import MoneyLike, ZERO
from .base import GameOutcome, ROUND_HOLES, check_bet_amount

POINTS_AVAILABLE = 3 * len(ROUND_HOLES)


class BingoBangoBongoStanding(BaseModel):
    user_id: str = Field(serialization_alias="userId")
    name: str
    bingo: int = 0
    bango: int = 0
    bongo: int = 0
    total: int = 0
    money: Decimal = ZERO

    model_config = ConfigDict(populate_by_name=True)


class BingoBangoBongoResult(GameOutcome):
    game_type: GameType = Field(
        default=GameType.BINGO_BANGO_BONGO, serialization_alias="gameType"
    )
    standings: List[BingoBangoBongoStanding] = Field(default_factory=list)


def calculate_bingo_bango_bongo(
    players: Sequence[Player],
    points: Sequence[BingoBangoBongoPoint],
    bet_amount: MoneyLike,
    *,
    settings: Optional[WageringSettings] = None,
) -> BingoBangoBongoResult:
    bet = check_bet_amount(bet_amount, settings)
    if not players:
        return BingoBangoBongoResult(bet_amount=bet)

    tallies: Dict[str, Dict[str, int]] = {
        p.user_id: {"bingo": 0, "bango": 0, "bongo": 0} for p in players
    }
    for point in points:
        for kind, user_id in (
            ("bingo", point.bingo_user_id),
            ("bango", point.bango_user_id),
            ("bongo", point.bongo_user_id),
        ):
            if user_id in tallies:
                tallies[user_id][kind] += 1

    average = Decimal(POINTS_AVAILABLE) / len(players)
    standings: List[BingoBangoBongoStanding] = []
    for player in players:
        tally = tallies[player.user_id]
        total = sum(tally.values())
        standings.append(
            BingoBangoBongoStanding(
                user_id=player.user_id,
                name=player.name,
                total=total,
                money=(total - average) * bet,
                **tally,
            )
        )
    standings.sort(key=lambda s: s.total, reverse=True)
    return BingoBangoBongoResult(bet_amount=bet, standings=standings)


__all__ = [
    "BingoBangoBongoResult",
    "BingoBangoBongoStanding",
    "calculate_bingo_bango_bongo",
]
