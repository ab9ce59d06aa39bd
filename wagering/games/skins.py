"""Skins: lowest net score on a hole wins the pot, ties carry it over."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..config import WageringSettings
from ..handicap import NetScorer
from ..models import GameType, Hole, Player
from ..money import MoneyLike, ZERO, money_sum
from .base import GameOutcome, ROUND_HOLES, check_bet_amount


class Skin(BaseModel):
    hole: int
    winner_id: Optional[str] = Field(default=None, serialization_alias="winnerId")
    value: Decimal = ZERO
    carried: Decimal = ZERO

    model_config = ConfigDict(populate_by_name=True)


class SkinsResult(GameOutcome):
    game_type: GameType = Field(default=GameType.SKINS, serialization_alias="gameType")
    skins: List[Skin] = Field(default_factory=list)
    total_pot: Decimal = Field(default=ZERO, serialization_alias="totalPot")
    carryover: Decimal = ZERO

    def winnings_by_player(self) -> dict[str, Decimal]:
        won: dict[str, Decimal] = {}
        for skin in self.skins:
            if skin.winner_id is not None:
                won[skin.winner_id] = won.get(skin.winner_id, ZERO) + skin.value
        return won


def calculate_skins(
    players: Sequence[Player],
    holes: Sequence[Hole],
    bet_amount: MoneyLike,
    *,
    require_handicaps: bool = False,
    settings: Optional[WageringSettings] = None,
) -> SkinsResult:
    bet = check_bet_amount(bet_amount, settings)
    if not players:
        return SkinsResult(bet_amount=bet)

    scorer = NetScorer(players, holes, require_handicaps=require_handicaps)
    user_ids = [p.user_id for p in players]

    skins: List[Skin] = []
    carryover = ZERO
    for hole_number in ROUND_HOLES:
        nets = scorer.nets(user_ids, hole_number)
        if any(net is None for net in nets.values()):
            skins.append(Skin(hole=hole_number, carried=carryover))
            continue

        skin_value = bet + carryover
        best = min(nets.values())
        leaders = [uid for uid, net in nets.items() if net == best]
        if len(leaders) == 1:
            skins.append(
                Skin(hole=hole_number, winner_id=leaders[0], value=skin_value, carried=carryover)
            )
            carryover = ZERO
        else:
            skins.append(Skin(hole=hole_number, carried=carryover))
            carryover = skin_value

    return SkinsResult(
        bet_amount=bet,
        skins=skins,
        total_pot=money_sum(s.value for s in skins),
        carryover=carryover,
    )


__all__ = ["Skin", "SkinsResult", "calculate_skins"]
