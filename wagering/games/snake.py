"""Snake: whoever three-putted last holds the snake and pays the group."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..config import WageringSettings
from ..models import GameType, Player
from ..money import MoneyLike, ZERO
from .base import GameOutcome, ROUND_HOLES, check_bet_amount

THREE_PUTT = 3


class SnakeStanding(BaseModel):
    user_id: str = Field(serialization_alias="userId")
    name: str
    three_putts: int = Field(default=0, serialization_alias="threePutts")
    holds_snake: bool = Field(default=False, serialization_alias="holdsSnake")
    money: Decimal = ZERO

    model_config = ConfigDict(populate_by_name=True)


class SnakeResult(GameOutcome):
    game_type: GameType = Field(default=GameType.SNAKE, serialization_alias="gameType")
    snake_holder_id: Optional[str] = Field(default=None, serialization_alias="snakeHolder")
    last_three_putt_hole: Optional[int] = Field(
        default=None, serialization_alias="lastThreePuttHole"
    )
    standings: List[SnakeStanding] = Field(default_factory=list)


def calculate_snake(
    players: Sequence[Player],
    bet_amount: MoneyLike,
    *,
    settings: Optional[WageringSettings] = None,
) -> SnakeResult:
    """Snake ignores handicaps; only recorded putts count."""

    bet = check_bet_amount(bet_amount, settings)
    holder: Optional[str] = None
    last_hole: Optional[int] = None
    three_putts = {p.user_id: 0 for p in players}

    for hole_number in ROUND_HOLES:
        for player in players:
            score = player.score_for(hole_number)
            if score is None or score.putts is None or score.putts < THREE_PUTT:
                continue
            three_putts[player.user_id] += 1
            holder = player.user_id
            last_hole = hole_number

    count = len(players)
    standings: List[SnakeStanding] = []
    for player in players:
        money = ZERO
        if holder is not None:
            money = -bet * (count - 1) if player.user_id == holder else bet
        standings.append(
            SnakeStanding(
                user_id=player.user_id,
                name=player.name,
                three_putts=three_putts[player.user_id],
                holds_snake=player.user_id == holder,
                money=money,
            )
        )
    return SnakeResult(
        bet_amount=bet,
        snake_holder_id=holder,
        last_three_putt_hole=last_hole,
        standings=standings,
    )


__all__ = ["SnakeResult", "SnakeStanding", "calculate_snake"]
