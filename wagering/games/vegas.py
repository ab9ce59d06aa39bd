"""Vegas: two fixed teams of two, each team's scores read as a two-digit number."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..config import WageringSettings
from ..handicap import NetScorer
from ..models import GameType, Hole, Player, VegasTeam
from ..money import MoneyLike, ZERO
from .base import GameOutcome, ROUND_HOLES, check_bet_amount

VEGAS_TEAMS_REQUIRED = "Vegas requires exactly 2 teams of 2 players"


def combine_scores(first: int, second: int) -> int:
    """Lower score is the tens digit: 7 and 4 read as 47."""

    low, high = sorted((first, second))
    return low * 10 + high


class VegasHole(BaseModel):
    hole: int
    team1_score: Optional[int] = Field(default=None, serialization_alias="team1Score")
    team2_score: Optional[int] = Field(default=None, serialization_alias="team2Score")
    diff: int = 0

    model_config = ConfigDict(populate_by_name=True)


class VegasTeamStanding(BaseModel):
    team_number: int = Field(serialization_alias="teamNumber")
    player_ids: List[str] = Field(serialization_alias="playerIds")
    total: int = 0
    money: Decimal = ZERO

    model_config = ConfigDict(populate_by_name=True)


class VegasResult(GameOutcome):
    game_type: GameType = Field(default=GameType.VEGAS, serialization_alias="gameType")
    holes: List[VegasHole] = Field(default_factory=list)
    teams: List[VegasTeamStanding] = Field(default_factory=list)

    def team(self, team_number: int) -> Optional[VegasTeamStanding]:
        for team in self.teams:
            if team.team_number == team_number:
                return team
        return None


def _valid_teams(
    players: Sequence[Player], teams: Sequence[VegasTeam]
) -> Optional[tuple[VegasTeam, VegasTeam]]:
    if len(players) != 4 or len(teams) != 2:
        return None
    by_number = {t.team_number: t for t in teams}
    team1, team2 = by_number.get(1), by_number.get(2)
    if team1 is None or team2 is None:
        return None
    members = [*team1.member_ids, *team2.member_ids]
    if len(set(members)) != 4 or set(members) != {p.user_id for p in players}:
        return None
    return team1, team2


def calculate_vegas(
    players: Sequence[Player],
    holes: Sequence[Hole],
    teams: Sequence[VegasTeam],
    bet_amount: MoneyLike,
    *,
    require_handicaps: bool = False,
    settings: Optional[WageringSettings] = None,
) -> VegasResult:
    bet = check_bet_amount(bet_amount, settings)
    pairing = _valid_teams(players, teams)
    if pairing is None:
        return VegasResult(bet_amount=bet, applicable=False, reason=VEGAS_TEAMS_REQUIRED)

    team1, team2 = pairing
    scorer = NetScorer(players, holes, require_handicaps=require_handicaps)

    rows: List[VegasHole] = []
    for hole_number in ROUND_HOLES:
        nets1 = [scorer.net(uid, hole_number) for uid in team1.member_ids]
        nets2 = [scorer.net(uid, hole_number) for uid in team2.member_ids]
        if None in nets1 or None in nets2:
            rows.append(VegasHole(hole=hole_number))
            continue
        score1 = combine_scores(*nets1)
        score2 = combine_scores(*nets2)
        rows.append(
            VegasHole(
                hole=hole_number,
                team1_score=score1,
                team2_score=score2,
                diff=score2 - score1,
            )
        )

    total = sum(row.diff for row in rows)
    return VegasResult(
        bet_amount=bet,
        holes=rows,
        teams=[
            VegasTeamStanding(
                team_number=1,
                player_ids=list(team1.member_ids),
                total=total,
                money=total * bet,
            ),
            VegasTeamStanding(
                team_number=2,
                player_ids=list(team2.member_ids),
                total=-total,
                money=-total * bet,
            ),
        ],
    )


__all__ = [
    "VegasHole",
    "VegasResult",
    "VegasTeamStanding",
    "calculate_vegas",
    "combine_scores",
]
