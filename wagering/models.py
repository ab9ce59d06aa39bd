"""Input records and persisted records exchanged with the wagering engine."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GameType(str, Enum):
    NASSAU = "NASSAU"
    SKINS = "SKINS"
    WOLF = "WOLF"
    NINES = "NINES"
    MATCH_PLAY = "MATCH_PLAY"
    STABLEFORD = "STABLEFORD"
    SNAKE = "SNAKE"
    VEGAS = "VEGAS"
    BANKER = "BANKER"
    BINGO_BANGO_BONGO = "BINGO_BANGO_BONGO"

    @property
    def min_players(self) -> int:
        """Smallest participant list a finalize run will settle."""

        return _MIN_PLAYERS[self]

    @property
    def supports_presses(self) -> bool:
        return self in (GameType.NASSAU, GameType.MATCH_PLAY)


_MIN_PLAYERS: Dict[GameType, int] = {
    GameType.NASSAU: 2,
    GameType.SKINS: 2,
    GameType.MATCH_PLAY: 2,
    GameType.WOLF: 4,
    GameType.NINES: 2,
    GameType.STABLEFORD: 1,
    GameType.BINGO_BANGO_BONGO: 3,
    GameType.VEGAS: 4,
    GameType.SNAKE: 2,
    GameType.BANKER: 3,
}


class PressSegment(str, Enum):
    FRONT = "FRONT"
    BACK = "BACK"
    OVERALL = "OVERALL"
    MATCH = "MATCH"

    @property
    def first_hole(self) -> int:
        return 10 if self is PressSegment.BACK else 1

    @property
    def last_hole(self) -> int:
        return 9 if self is PressSegment.FRONT else 18


class PressStatus(str, Enum):
    ACTIVE = "ACTIVE"
    WON = "WON"
    LOST = "LOST"
    PUSHED = "PUSHED"
    CANCELED = "CANCELED"


class RoundStatus(str, Enum):
    SETUP = "SETUP"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class SettlementStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    SETTLED = "SETTLED"


class Score(BaseModel):
    hole_number: int = Field(ge=1, le=18, serialization_alias="holeNumber")
    strokes: Optional[int] = None
    putts: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True)

    @property
    def played(self) -> bool:
        return self.strokes is not None and self.strokes > 0


class Player(BaseModel):
    user_id: str = Field(serialization_alias="userId")
    course_handicap: Optional[int] = Field(
        default=None, serialization_alias="courseHandicap"
    )
    scores: List[Score] = Field(default_factory=list)
    display_name: Optional[str] = Field(default=None, serialization_alias="displayName")
    first_name: Optional[str] = Field(default=None, serialization_alias="firstName")

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="after")
    def _one_score_per_hole(self) -> "Player":
        seen: set[int] = set()
        for score in self.scores:
            if score.hole_number in seen:
                raise ValueError(
                    f"player {self.user_id} has more than one score for hole {score.hole_number}"
                )
            seen.add(score.hole_number)
        return self

    @property
    def name(self) -> str:
        return self.display_name or self.first_name or "Unknown"

    def score_for(self, hole_number: int) -> Score | None:
        for score in self.scores:
            if score.hole_number == hole_number:
                return score
        return None


class Hole(BaseModel):
    hole_number: int = Field(ge=1, le=18, serialization_alias="holeNumber")
    par: int = Field(ge=3, le=5)
    handicap_rank: int = Field(ge=1, le=18, serialization_alias="handicapRank")

    model_config = ConfigDict(populate_by_name=True)


class WolfDecision(BaseModel):
    hole_number: int = Field(ge=1, le=18, serialization_alias="holeNumber")
    wolf_user_id: str = Field(serialization_alias="wolfUserId")
    partner_user_id: Optional[str] = Field(
        default=None, serialization_alias="partnerUserId"
    )
    is_lone_wolf: bool = Field(default=False, serialization_alias="isLoneWolf")
    is_blind: bool = Field(default=False, serialization_alias="isBlind")

    model_config = ConfigDict(populate_by_name=True)


class VegasTeam(BaseModel):
    team_number: int = Field(serialization_alias="teamNumber")
    player1_id: str = Field(serialization_alias="player1Id")
    player2_id: str = Field(serialization_alias="player2Id")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def member_ids(self) -> tuple[str, str]:
        return (self.player1_id, self.player2_id)


class BingoBangoBongoPoint(BaseModel):
    hole_number: int = Field(ge=1, le=18, serialization_alias="holeNumber")
    bingo_user_id: Optional[str] = Field(default=None, serialization_alias="bingoUserId")
    bango_user_id: Optional[str] = Field(default=None, serialization_alias="bangoUserId")
    bongo_user_id: Optional[str] = Field(default=None, serialization_alias="bongoUserId")

    model_config = ConfigDict(populate_by_name=True)


class BankerDecision(BaseModel):
    hole_number: int = Field(ge=1, le=18, serialization_alias="holeNumber")
    banker_user_id: str = Field(serialization_alias="bankerUserId")

    model_config = ConfigDict(populate_by_name=True)


def new_press_id() -> str:
    return f"press_{uuid.uuid4().hex[:12]}"


def new_settlement_id() -> str:
    return f"stl_{uuid.uuid4().hex[:12]}"


class Press(BaseModel):
    id: str = Field(default_factory=new_press_id)
    segment: PressSegment
    start_hole: int = Field(ge=1, le=18, serialization_alias="startHole")
    initiated_by_id: str = Field(serialization_alias="initiatedById")
    bet_multiplier: Decimal = Field(
        default=Decimal("1"), gt=0, serialization_alias="betMultiplier"
    )
    parent_press_id: Optional[str] = Field(
        default=None, serialization_alias="parentPressId"
    )
    status: PressStatus = PressStatus.ACTIVE

    model_config = ConfigDict(populate_by_name=True)


class DotsAchievement(BaseModel):
    user_id: str = Field(serialization_alias="userId")
    hole_number: int = Field(ge=1, le=18, serialization_alias="holeNumber")
    type: str

    model_config = ConfigDict(populate_by_name=True)


class Game(BaseModel):
    id: str
    type: GameType
    bet_amount: Decimal = Field(ge=0, serialization_alias="betAmount")
    name: Optional[str] = None
    participant_ids: List[str] = Field(
        default_factory=list, serialization_alias="participantIds"
    )
    is_auto_press: bool = Field(default=False, serialization_alias="isAutoPress")
    require_handicaps: bool = Field(
        default=False, serialization_alias="requireHandicaps"
    )
    presses: List[Press] = Field(default_factory=list)
    wolf_decisions: List[WolfDecision] = Field(
        default_factory=list, serialization_alias="wolfDecisions"
    )
    vegas_teams: List[VegasTeam] = Field(
        default_factory=list, serialization_alias="vegasTeams"
    )
    bbb_points: List[BingoBangoBongoPoint] = Field(
        default_factory=list, serialization_alias="bbbPoints"
    )
    banker_decisions: List[BankerDecision] = Field(
        default_factory=list, serialization_alias="bankerDecisions"
    )

    model_config = ConfigDict(populate_by_name=True)


class Round(BaseModel):
    id: str
    status: RoundStatus = RoundStatus.ACTIVE
    created_by_id: Optional[str] = Field(default=None, serialization_alias="createdById")
    players: List[Player] = Field(default_factory=list)
    holes: List[Hole] = Field(default_factory=list)
    games: List[Game] = Field(default_factory=list)
    dots_enabled: bool = Field(default=False, serialization_alias="dotsEnabled")
    dots_amount: Optional[Decimal] = Field(default=None, serialization_alias="dotsAmount")
    dots_achievements: List[DotsAchievement] = Field(
        default_factory=list, serialization_alias="dotsAchievements"
    )

    model_config = ConfigDict(populate_by_name=True)

    def participants(self, game: Game) -> List[Player]:
        """Players taking part in ``game``, in round order."""

        if not game.participant_ids:
            return list(self.players)
        wanted = set(game.participant_ids)
        return [p for p in self.players if p.user_id in wanted]


class SettlementFlow(BaseModel):
    from_user_id: str = Field(serialization_alias="fromUserId")
    to_user_id: str = Field(serialization_alias="toUserId")
    amount: Decimal

    model_config = ConfigDict(populate_by_name=True)


class Settlement(BaseModel):
    id: str
    round_id: str = Field(serialization_alias="roundId")
    from_user_id: str = Field(serialization_alias="fromUserId")
    to_user_id: str = Field(serialization_alias="toUserId")
    amount: Decimal
    status: SettlementStatus = SettlementStatus.PENDING
    created_at: datetime = Field(serialization_alias="createdAt")
    paid_at: Optional[datetime] = Field(default=None, serialization_alias="paidAt")
    confirmed_at: Optional[datetime] = Field(
        default=None, serialization_alias="confirmedAt"
    )

    model_config = ConfigDict(populate_by_name=True)


class GameResult(BaseModel):
    game_id: str = Field(serialization_alias="gameId")
    user_id: str = Field(serialization_alias="userId")
    net_amount: Decimal = Field(serialization_alias="netAmount")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class PressResult(BaseModel):
    press_id: str = Field(serialization_alias="pressId")
    user_id: str = Field(serialization_alias="userId")
    net_amount: Decimal = Field(serialization_alias="netAmount")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


__all__ = [
    "BankerDecision",
    "BingoBangoBongoPoint",
    "DotsAchievement",
    "Game",
    "GameResult",
    "GameType",
    "Hole",
    "Player",
    "Press",
    "PressResult",
    "PressSegment",
    "PressStatus",
    "Round",
    "RoundStatus",
    "Score",
    "Settlement",
    "SettlementFlow",
    "SettlementStatus",
    "VegasTeam",
    "WolfDecision",
    "new_press_id",
    "new_settlement_id",
]
