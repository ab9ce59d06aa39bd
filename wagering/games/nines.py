"""Nines: nine points split across the group on every hole by net rank."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..config import WageringSettings
from ..handicap import NetScorer
from ..models import GameType, Hole, Player
from ..money import MoneyLike, ZERO
from .base import BACK_NINE, FRONT_NINE, GameOutcome, ROUND_HOLES, check_bet_amount

POINTS_PER_HOLE = 9
POINT_TABLES: Dict[int, tuple[Decimal, ...]] = {
    4: (Decimal(5), Decimal(3), Decimal(1), Decimal(0)),
    3: (Decimal(5), Decimal(3), Decimal(1)),
    2: (Decimal(6), Decimal(3)),
}


class NinesHole(BaseModel):
    hole: int
    points: Dict[str, Decimal] = Field(default_factory=dict)


class NinesStanding(BaseModel):
    user_id: str = Field(serialization_alias="userId")
    name: str
    front: Decimal = ZERO
    back: Decimal = ZERO
    total: Decimal = ZERO
    front_money: Decimal = Field(default=ZERO, serialization_alias="frontMoney")
    back_money: Decimal = Field(default=ZERO, serialization_alias="backMoney")
    total_money: Decimal = Field(default=ZERO, serialization_alias="totalMoney")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def money(self) -> Decimal:
        return self.total_money


class NinesResult(GameOutcome):
    game_type: GameType = Field(default=GameType.NINES, serialization_alias="gameType")
    holes: List[NinesHole] = Field(default_factory=list)
    standings: List[NinesStanding] = Field(default_factory=list)


def award_hole_points(nets: Dict[str, int]) -> Dict[str, Decimal]:
    """Distribute a hole's points by rank; tied players share their ranks' points.

    Player counts without a point table receive nothing.
    """

    table = POINT_TABLES.get(len(nets))
    if table is None:
        return {uid: ZERO for uid in nets}

    ordered = sorted(nets.items(), key=lambda item: item[1])
    awarded: Dict[str, Decimal] = {}
    position = 0
    while position < len(ordered):
        score = ordered[position][1]
        tied = [uid for uid, net in ordered[position:] if net == score]
        pool = sum(table[position : position + len(tied)], ZERO)
        share = pool / len(tied)
        for uid in tied:
            awarded[uid] = share
        position += len(tied)
    return awarded


def calculate_nines(
    players: Sequence[Player],
    holes: Sequence[Hole],
    bet_amount: MoneyLike,
    *,
    require_handicaps: bool = False,
    settings: Optional[WageringSettings] = None,
) -> NinesResult:
    bet = check_bet_amount(bet_amount, settings)
    if not players:
        return NinesResult(bet_amount=bet)

    scorer = NetScorer(players, holes, require_handicaps=require_handicaps)
    user_ids = [p.user_id for p in players]

    rows: List[NinesHole] = []
    for hole_number in ROUND_HOLES:
        nets = scorer.nets(user_ids, hole_number)
        if any(net is None for net in nets.values()):
            continue
        rows.append(NinesHole(hole=hole_number, points=award_hole_points(nets)))

    count = len(user_ids)
    expected_nine = Decimal(POINTS_PER_HOLE * len(FRONT_NINE)) / count
    expected_round = Decimal(POINTS_PER_HOLE * len(ROUND_HOLES)) / count

    standings: List[NinesStanding] = []
    for player in players:
        front = sum(
            (r.points[player.user_id] for r in rows if r.hole in FRONT_NINE), ZERO
        )
        back = sum((r.points[player.user_id] for r in rows if r.hole in BACK_NINE), ZERO)
        total = front + back
        standings.append(
            NinesStanding(
                user_id=player.user_id,
                name=player.name,
                front=front,
                back=back,
                total=total,
                front_money=(front - expected_nine) * bet,
                back_money=(back - expected_nine) * bet,
                total_money=(total - expected_round) * bet,
            )
        )
    standings.sort(key=lambda s: s.total, reverse=True)
    return NinesResult(bet_amount=bet, holes=rows, standings=standings)


__all__ = [
    "NinesHole",
    "NinesResult",
    "NinesStanding",
    "award_hole_points",
    "calculate_nines",
]
