"""Banker: the banker plays every other player at once on each hole."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..config import WageringSettings
from ..errors import ErrorCode, GameCalculationError
from ..handicap import NetScorer
from ..models import BankerDecision, GameType, Hole, Player
from ..money import MoneyLike, ZERO
from .base import GameOutcome, ROUND_HOLES, check_bet_amount


class BankerHole(BaseModel):
    hole: int
    banker_id: str = Field(serialization_alias="bankerUserId")
    banker_score: Optional[int] = Field(default=None, serialization_alias="bankerScore")
    best_other_score: Optional[int] = Field(
        default=None, serialization_alias="bestOtherScore"
    )
    banker_won: Optional[bool] = Field(default=None, serialization_alias="bankerWon")

    model_config = ConfigDict(populate_by_name=True)


class BankerStanding(BaseModel):
    user_id: str = Field(serialization_alias="userId")
    name: str
    money: Decimal = ZERO

    model_config = ConfigDict(populate_by_name=True)


class BankerResult(GameOutcome):
    game_type: GameType = Field(default=GameType.BANKER, serialization_alias="gameType")
    holes: List[BankerHole] = Field(default_factory=list)
    standings: List[BankerStanding] = Field(default_factory=list)


def calculate_banker(
    players: Sequence[Player],
    holes: Sequence[Hole],
    decisions: Sequence[BankerDecision],
    bet_amount: MoneyLike,
    *,
    require_handicaps: bool = False,
    settings: Optional[WageringSettings] = None,
) -> BankerResult:
    bet = check_bet_amount(bet_amount, settings)
    if len(players) < 2:
        return BankerResult(
            bet_amount=bet,
            applicable=False,
            reason="Banker requires at least 2 players",
        )

    user_ids = [p.user_id for p in players]
    for decision in decisions:
        if decision.banker_user_id not in user_ids:
            raise GameCalculationError(
                f"Banker decision on hole {decision.hole_number} references "
                f"non-participant {decision.banker_user_id}",
                ErrorCode.VALIDATION_ERROR,
            )

    scorer = NetScorer(players, holes, require_handicaps=require_handicaps)
    by_hole = {d.hole_number: d.banker_user_id for d in decisions}
    count = len(user_ids)
    totals: Dict[str, Decimal] = {uid: ZERO for uid in user_ids}

    rows: List[BankerHole] = []
    for hole_number in ROUND_HOLES:
        banker_id = by_hole.get(hole_number) or user_ids[(hole_number - 1) % count]
        nets = scorer.nets(user_ids, hole_number)
        if any(net is None for net in nets.values()):
            rows.append(BankerHole(hole=hole_number, banker_id=banker_id))
            continue
        others = [uid for uid in user_ids if uid != banker_id]
        row = BankerHole(
            hole=hole_number,
            banker_id=banker_id,
            banker_score=nets[banker_id],
            best_other_score=min(nets[uid] for uid in others),
        )
        rows.append(row)
        if row.banker_score == row.best_other_score:
            continue
        row.banker_won = row.banker_score < row.best_other_score
        sign = 1 if row.banker_won else -1
        totals[banker_id] += bet * len(others) * sign
        for uid in others:
            totals[uid] -= bet * sign

    standings = [
        BankerStanding(user_id=p.user_id, name=p.name, money=totals[p.user_id])
        for p in players
    ]
    standings.sort(key=lambda s: s.money, reverse=True)
    return BankerResult(bet_amount=bet, holes=rows, standings=standings)


__all__ = ["BankerHole", "BankerResult", "BankerStanding", "calculate_banker"]
