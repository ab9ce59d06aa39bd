"""Shared result shapes and helpers for the game calculators."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import WageringSettings, get_settings
from ..errors import ErrorCode, GameCalculationError
from ..money import MoneyLike, to_money
from ..models import GameType

ROUND_HOLES = tuple(range(1, 19))
FRONT_NINE = tuple(range(1, 10))
BACK_NINE = tuple(range(10, 19))


class GameOutcome(BaseModel):
    """Fields every calculator result carries.

    ``applicable`` is False when the participant list does not fit the game
    (for example three players in a Nassau); ``reason`` then explains why and
    every winner field is left empty.
    """

    game_type: GameType = Field(serialization_alias="gameType")
    bet_amount: Decimal = Field(serialization_alias="betAmount")
    applicable: bool = True
    reason: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


def check_bet_amount(
    bet_amount: MoneyLike, settings: Optional[WageringSettings] = None
) -> Decimal:
    """Validate a bet against the configured bounds and return it as Decimal.

    ``settings`` defaults to the process-wide :func:`get_settings`.
    """

    bet = to_money(bet_amount)
    limit = (settings or get_settings()).max_bet_amount
    if bet < 0:
        raise GameCalculationError(
            "Bet amount cannot be negative", ErrorCode.VALIDATION_ERROR
        )
    if bet > limit:
        raise GameCalculationError(
            f"Bet amount ({bet}) exceeds maximum allowed ({limit})",
            ErrorCode.VALIDATION_ERROR,
        )
    return bet


def up_status(up: int) -> str:
    if up > 0:
        return "UP"
    if up < 0:
        return "DOWN"
    return "AS"


__all__ = [
    "BACK_NINE",
    "FRONT_NINE",
    "GameOutcome",
    "ROUND_HOLES",
    "check_bet_amount",
    "up_status",
]
