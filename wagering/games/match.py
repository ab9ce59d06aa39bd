"""Head-to-head match play: Nassau segments, Match Play and press segments."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..config import WageringSettings
from ..handicap import NetScorer
from ..models import GameType, Hole, Player
from ..money import MoneyLike, ZERO
from .base import GameOutcome, check_bet_amount, up_status

NASSAU_PLAYERS_REQUIRED = "Nassau requires exactly 2 players"
MATCH_PLAY_PLAYERS_REQUIRED = "Match Play requires exactly 2 players"


class SegmentResult(BaseModel):
    winner_id: Optional[str] = Field(default=None, serialization_alias="winnerId")
    loser_id: Optional[str] = Field(default=None, serialization_alias="loserId")
    margin: int = 0
    up: int = Field(default=0, serialization_alias="p1Score")
    holes_played: int = Field(default=0, serialization_alias="holesPlayed")
    holes_remaining: int = Field(default=0, serialization_alias="holesRemaining")
    last_hole_played: Optional[int] = Field(
        default=None, serialization_alias="lastHolePlayed"
    )
    status: str

    model_config = ConfigDict(populate_by_name=True)


def evaluate_match(
    scorer: NetScorer,
    p1_id: str,
    p2_id: str,
    start_hole: int,
    end_hole: int,
) -> SegmentResult:
    """Play ``p1_id`` against ``p2_id`` over ``start_hole..end_hole`` inclusive.

    Holes where either net score is missing are skipped, halved holes leave
    the count unchanged.
    """

    up = 0
    played = 0
    last_played: Optional[int] = None
    for hole_number in range(start_hole, end_hole + 1):
        p1_net = scorer.net(p1_id, hole_number)
        p2_net = scorer.net(p2_id, hole_number)
        if p1_net is None or p2_net is None:
            continue
        played += 1
        last_played = hole_number
        if p1_net < p2_net:
            up += 1
        elif p2_net < p1_net:
            up -= 1

    remaining = (end_hole - start_hole + 1) - played
    if played == 0:
        status = "No scores yet"
    elif remaining > 0:
        status = f"{abs(up)} {up_status(up)} ({remaining} to play)"
    elif up == 0:
        status = "TIED"
    else:
        status = f"{abs(up)} & 0"

    winner_id: Optional[str] = None
    loser_id: Optional[str] = None
    if up > 0:
        winner_id, loser_id = p1_id, p2_id
    elif up < 0:
        winner_id, loser_id = p2_id, p1_id

    return SegmentResult(
        winner_id=winner_id,
        loser_id=loser_id,
        margin=abs(up),
        up=up,
        holes_played=played,
        holes_remaining=remaining,
        last_hole_played=last_played,
        status=status,
    )


class NassauResult(GameOutcome):
    game_type: GameType = Field(
        default=GameType.NASSAU, serialization_alias="gameType"
    )
    front: SegmentResult
    back: SegmentResult
    overall: SegmentResult

    def segments(self) -> Iterable[tuple[str, SegmentResult]]:
        yield "front", self.front
        yield "back", self.back
        yield "overall", self.overall


def calculate_nassau(
    players: Sequence[Player],
    holes: Sequence[Hole],
    bet_amount: MoneyLike,
    *,
    require_handicaps: bool = False,
    settings: Optional[WageringSettings] = None,
) -> NassauResult:
    bet = check_bet_amount(bet_amount, settings)
    if len(players) != 2:
        return NassauResult(
            bet_amount=bet,
            applicable=False,
            reason=NASSAU_PLAYERS_REQUIRED,
            front=SegmentResult(status=NASSAU_PLAYERS_REQUIRED),
            back=SegmentResult(status=NASSAU_PLAYERS_REQUIRED),
            overall=SegmentResult(status=NASSAU_PLAYERS_REQUIRED),
        )

    scorer = NetScorer(players, holes, require_handicaps=require_handicaps)
    p1, p2 = players
    return NassauResult(
        bet_amount=bet,
        front=evaluate_match(scorer, p1.user_id, p2.user_id, 1, 9),
        back=evaluate_match(scorer, p1.user_id, p2.user_id, 10, 18),
        overall=evaluate_match(scorer, p1.user_id, p2.user_id, 1, 18),
    )


class MatchPlayHole(BaseModel):
    hole: int
    p1_net: Optional[int] = Field(default=None, serialization_alias="p1Net")
    p2_net: Optional[int] = Field(default=None, serialization_alias="p2Net")
    winner_id: Optional[str] = Field(default=None, serialization_alias="winner")

    model_config = ConfigDict(populate_by_name=True)


class MatchPlayStanding(BaseModel):
    user_id: str = Field(serialization_alias="userId")
    name: str
    status: str
    money: Decimal

    model_config = ConfigDict(populate_by_name=True)


class MatchPlayResult(GameOutcome):
    game_type: GameType = Field(
        default=GameType.MATCH_PLAY, serialization_alias="gameType"
    )
    holes: List[MatchPlayHole] = Field(default_factory=list)
    standings: List[MatchPlayStanding] = Field(default_factory=list)
    match_status: str = Field(serialization_alias="matchStatus")
    match_over: bool = Field(default=False, serialization_alias="matchOver")
    up: int = 0
    overall: SegmentResult


def _standing_status(up: int) -> str:
    if up > 0:
        return f"{up} UP"
    if up < 0:
        return f"{abs(up)} DOWN"
    return "AS"


def calculate_match_play(
    players: Sequence[Player],
    holes: Sequence[Hole],
    bet_amount: MoneyLike,
    *,
    require_handicaps: bool = False,
    settings: Optional[WageringSettings] = None,
) -> MatchPlayResult:
    bet = check_bet_amount(bet_amount, settings)
    if len(players) != 2:
        return MatchPlayResult(
            bet_amount=bet,
            applicable=False,
            reason=MATCH_PLAY_PLAYERS_REQUIRED,
            match_status=MATCH_PLAY_PLAYERS_REQUIRED,
            overall=SegmentResult(status=MATCH_PLAY_PLAYERS_REQUIRED),
        )

    scorer = NetScorer(players, holes, require_handicaps=require_handicaps)
    p1, p2 = players

    hole_rows: List[MatchPlayHole] = []
    up = 0
    played = 0
    for hole_number in range(1, 19):
        p1_net = scorer.net(p1.user_id, hole_number)
        p2_net = scorer.net(p2.user_id, hole_number)
        if p1_net is None or p2_net is None:
            hole_rows.append(MatchPlayHole(hole=hole_number))
            continue
        played += 1
        winner: Optional[str] = None
        if p1_net < p2_net:
            up += 1
            winner = p1.user_id
        elif p2_net < p1_net:
            up -= 1
            winner = p2.user_id
        hole_rows.append(
            MatchPlayHole(hole=hole_number, p1_net=p1_net, p2_net=p2_net, winner_id=winner)
        )

    remaining = 18 - played
    match_over = abs(up) > remaining

    if match_over:
        leader = p1 if up > 0 else p2
        match_status = f"Match over: {leader.name} wins"
    elif remaining > 0:
        match_status = f"{abs(up)} {up_status(up)} thru {played}"
    else:
        match_status = "HALVED"

    p1_money = ZERO
    if match_over:
        p1_money = bet if up > 0 else -bet

    return MatchPlayResult(
        bet_amount=bet,
        holes=hole_rows,
        standings=[
            MatchPlayStanding(
                user_id=p1.user_id,
                name=p1.name,
                status=_standing_status(up),
                money=p1_money,
            ),
            MatchPlayStanding(
                user_id=p2.user_id,
                name=p2.name,
                status=_standing_status(-up),
                money=-p1_money,
            ),
        ],
        match_status=match_status,
        match_over=match_over,
        up=up,
        overall=evaluate_match(scorer, p1.user_id, p2.user_id, 1, 18),
    )


__all__ = [
    "MatchPlayHole",
    "MatchPlayResult",
    "MatchPlayStanding",
    "NassauResult",
    "SegmentResult",
    "calculate_match_play",
    "calculate_nassau",
    "evaluate_match",
]
