"""Pure planning step of finalization: calculators, presses, folding and bounds."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import WageringSettings, get_settings
from ..errors import SettlementInvariantError, SettlementLimitExceeded
from ..games.registry import GameResultModel, calculate_game
from ..handicap import NetScorer
from ..models import (
    Game,
    GameResult,
    GameType,
    Player,
    PressResult,
    PressStatus,
    Round,
    SettlementFlow,
)
from ..money import ZERO, money_sum, round_cents
from ..presses.engine import PressOutcome, resolve_presses
from ..presses.rules import SEGMENTS_BY_GAME
from ..settlements.allocation import GameSettlement, dots_flows, settle_game
from ..settlements.consolidate import consolidate_settlements

logger = logging.getLogger(__name__)


class SkippedGame(BaseModel):
    game_id: str = Field(serialization_alias="gameId")
    game_type: GameType = Field(serialization_alias="gameType")
    players: int
    required: int

    model_config = ConfigDict(populate_by_name=True)


@dataclass(slots=True)
class GamePlan:
    game: Game
    result: GameResultModel
    settlement: GameSettlement
    presses: Optional[PressOutcome] = None


@dataclass(slots=True)
class FinalizationPlan:
    round_id: str
    games: List[GamePlan] = field(default_factory=list)
    skipped: List[SkippedGame] = field(default_factory=list)
    flows: List[SettlementFlow] = field(default_factory=list)
    consolidated: List[SettlementFlow] = field(default_factory=list)
    game_results: List[GameResult] = field(default_factory=list)
    press_results: List[PressResult] = field(default_factory=list)
    press_statuses: Dict[str, PressStatus] = field(default_factory=dict)

    @property
    def total_amount(self) -> Decimal:
        return money_sum(f.amount for f in self.consolidated)


def _resolve_game_presses(
    round_: Round, game: Game, players: List[Player]
) -> Optional[PressOutcome]:
    segments = SEGMENTS_BY_GAME.get(game.type)
    if segments is None or not game.presses or len(players) != 2:
        return None
    scorer = NetScorer(players, round_.holes, require_handicaps=game.require_handicaps)
    p1, p2 = players
    return resolve_presses(
        game.presses,
        scorer,
        p1.user_id,
        p2.user_id,
        game.bet_amount,
        segments=segments,
    )


def _plan_game(
    round_: Round, game: Game, players: List[Player], settings: WageringSettings
) -> GamePlan:
    result = calculate_game(game, players, round_.holes, settings)
    settlement = settle_game(result, players)
    presses = _resolve_game_presses(round_, game, players) if result.applicable else None
    if presses is not None:
        settlement.flows.extend(presses.flows)
        for flow in presses.flows:
            net = settlement.net_by_player
            net[flow.to_user_id] = net.get(flow.to_user_id, ZERO) + flow.amount
            net[flow.from_user_id] = net.get(flow.from_user_id, ZERO) - flow.amount
    return GamePlan(game=game, result=result, settlement=settlement, presses=presses)


def _check_flow(flow: SettlementFlow, settings: WageringSettings) -> None:
    if flow.amount > settings.max_individual_settlement:
        logger.warning(
            "settlement %s -> %s of %s exceeds maximum %s",
            flow.from_user_id,
            flow.to_user_id,
            flow.amount,
            settings.max_individual_settlement,
        )
        raise SettlementLimitExceeded(
            f"Settlement amount (${flow.amount:.2f}) exceeds maximum allowed "
            f"(${settings.max_individual_settlement})"
        )
    if flow.amount < 0:
        logger.error(
            "negative settlement amount %s calculated for %s -> %s",
            flow.amount,
            flow.from_user_id,
            flow.to_user_id,
        )
        raise SettlementInvariantError(
            "Invalid settlement calculation. Please try again."
        )


def plan_finalization(
    round_: Round, settings: Optional[WageringSettings] = None
) -> FinalizationPlan:
    """Compute every settlement ``round_`` would produce without writing anything."""

    settings = settings or get_settings()
    plan = FinalizationPlan(round_id=round_.id)

    for game in round_.games:
        players = round_.participants(game)
        required = game.type.min_players
        if len(players) < required:
            logger.warning(
                "skipping %s game %s: %d player(s), %d required",
                game.type.value,
                game.id,
                len(players),
                required,
            )
            plan.skipped.append(
                SkippedGame(
                    game_id=game.id,
                    game_type=game.type,
                    players=len(players),
                    required=required,
                )
            )
            continue

        game_plan = _plan_game(round_, game, players, settings)
        plan.games.append(game_plan)
        plan.flows.extend(game_plan.settlement.flows)
        for user_id, net in game_plan.settlement.net_by_player.items():
            plan.game_results.append(
                GameResult(game_id=game.id, user_id=user_id, net_amount=round_cents(net))
            )
        if game_plan.presses is not None:
            plan.press_results.extend(game_plan.presses.press_results)
            plan.press_statuses.update(game_plan.presses.statuses())

    plan.flows.extend(dots_flows(round_))

    for flow in plan.flows:
        _check_flow(flow, settings)

    plan.consolidated = consolidate_settlements(plan.flows)
    total = plan.total_amount
    if total > settings.max_total_settlement:
        logger.warning(
            "round %s settlements total %s exceeds maximum %s",
            round_.id,
            total,
            settings.max_total_settlement,
        )
        raise SettlementLimitExceeded(
            f"Total settlements (${total:.2f}) exceed maximum allowed "
            f"(${settings.max_total_settlement})"
        )
    return plan


__all__ = ["FinalizationPlan", "GamePlan", "SkippedGame", "plan_finalization"]
