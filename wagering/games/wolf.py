"""Wolf: a rotating wolf picks a partner or goes it alone each hole."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..config import WageringSettings
from ..errors import ErrorCode, GameCalculationError
from ..handicap import NetScorer
from ..models import GameType, Hole, Player, WolfDecision
from ..money import MoneyLike, ZERO
from .base import GameOutcome, ROUND_HOLES, check_bet_amount

BLIND_LONE_WOLF_MULTIPLIER = 4
WOLF_PLAYERS_REQUIRED = "Wolf requires at least 2 players"


class WolfHole(BaseModel):
    hole: int
    wolf_id: str = Field(serialization_alias="wolfUserId")
    partner_id: Optional[str] = Field(default=None, serialization_alias="partnerUserId")
    is_lone_wolf: bool = Field(serialization_alias="isLoneWolf")
    is_blind: bool = Field(default=False, serialization_alias="isBlind")
    wolf_team_score: Optional[int] = Field(default=None, serialization_alias="wolfTeamScore")
    pack_score: Optional[int] = Field(default=None, serialization_alias="packScore")
    winner: Optional[str] = None
    points: Decimal = ZERO
    changes: Dict[str, Decimal] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)


class WolfStanding(BaseModel):
    user_id: str = Field(serialization_alias="userId")
    name: str
    money: Decimal = ZERO

    model_config = ConfigDict(populate_by_name=True)


class WolfResult(GameOutcome):
    game_type: GameType = Field(default=GameType.WOLF, serialization_alias="gameType")
    holes: List[WolfHole] = Field(default_factory=list)
    standings: List[WolfStanding] = Field(default_factory=list)


def _check_decisions(decisions: Sequence[WolfDecision], user_ids: set[str]) -> None:
    for decision in decisions:
        named = [decision.wolf_user_id]
        if decision.partner_user_id:
            named.append(decision.partner_user_id)
        for user_id in named:
            if user_id not in user_ids:
                raise GameCalculationError(
                    f"Wolf decision on hole {decision.hole_number} references "
                    f"non-participant {user_id}",
                    ErrorCode.VALIDATION_ERROR,
                )
        if decision.partner_user_id == decision.wolf_user_id:
            raise GameCalculationError(
                f"Wolf cannot partner with themselves on hole {decision.hole_number}",
                ErrorCode.VALIDATION_ERROR,
            )


def _best(nets: Dict[str, Optional[int]], members: Sequence[str]) -> Optional[int]:
    values = [nets[uid] for uid in members if nets.get(uid) is not None]
    return min(values) if values else None


def _exchange(
    winners: Sequence[str], losers: Sequence[str], bet: Decimal
) -> Dict[str, Decimal]:
    """Every (winner, loser) pair exchanges ``bet``."""

    changes: Dict[str, Decimal] = {}
    for uid in winners:
        changes[uid] = bet * len(losers)
    for uid in losers:
        changes[uid] = -bet * len(winners)
    return changes


def _lone_wolf_changes(
    wolf_id: str, pack: Sequence[str], hole_points: Decimal, wolf_won: bool
) -> Dict[str, Decimal]:
    share = hole_points / len(pack)
    sign = 1 if wolf_won else -1
    changes = {wolf_id: hole_points * sign}
    for uid in pack:
        changes[uid] = -share * sign
    return changes


def calculate_wolf(
    players: Sequence[Player],
    holes: Sequence[Hole],
    decisions: Sequence[WolfDecision],
    bet_amount: MoneyLike,
    *,
    require_handicaps: bool = False,
    settings: Optional[WageringSettings] = None,
) -> WolfResult:
    bet = check_bet_amount(bet_amount, settings)
    if len(players) < 2:
        return WolfResult(
            bet_amount=bet, applicable=False, reason=WOLF_PLAYERS_REQUIRED
        )

    user_ids = [p.user_id for p in players]
    _check_decisions(decisions, set(user_ids))
    scorer = NetScorer(players, holes, require_handicaps=require_handicaps)
    by_hole = {d.hole_number: d for d in decisions}
    count = len(user_ids)

    rows: List[WolfHole] = []
    for hole_number in ROUND_HOLES:
        decision = by_hole.get(hole_number)
        wolf_id = decision.wolf_user_id if decision else user_ids[(hole_number - 1) % count]
        partner_id = decision.partner_user_id if decision else None
        is_lone = decision.is_lone_wolf if decision else partner_id is None
        is_blind = decision.is_blind if decision else False
        if is_lone:
            partner_id = None

        row = WolfHole(
            hole=hole_number,
            wolf_id=wolf_id,
            partner_id=partner_id,
            is_lone_wolf=is_lone,
            is_blind=is_blind,
        )
        rows.append(row)
        nets = scorer.nets(user_ids, hole_number)
        if any(net is None for net in nets.values()):
            continue

        wolf_team = [wolf_id] if partner_id is None else [wolf_id, partner_id]
        pack = [uid for uid in user_ids if uid not in wolf_team]
        if not pack:
            continue

        row.wolf_team_score = _best(nets, wolf_team)
        row.pack_score = _best(nets, pack)
        if row.wolf_team_score == row.pack_score:
            continue

        wolf_won = row.wolf_team_score < row.pack_score
        row.winner = "wolf" if wolf_won else "pack"
        if is_lone:
            multiplier = BLIND_LONE_WOLF_MULTIPLIER if is_blind else count - 1
            row.points = bet * multiplier
            row.changes = _lone_wolf_changes(wolf_id, pack, row.points, wolf_won)
        else:
            row.points = bet
            winners, losers = (wolf_team, pack) if wolf_won else (pack, wolf_team)
            row.changes = _exchange(winners, losers, bet)

    totals: Dict[str, Decimal] = {uid: ZERO for uid in user_ids}
    for row in rows:
        for uid, change in row.changes.items():
            totals[uid] += change

    standings = [
        WolfStanding(user_id=p.user_id, name=p.name, money=totals[p.user_id])
        for p in players
    ]
    standings.sort(key=lambda s: s.money, reverse=True)
    return WolfResult(bet_amount=bet, holes=rows, standings=standings)


__all__ = ["WolfHole", "WolfResult", "WolfStanding", "calculate_wolf"]
