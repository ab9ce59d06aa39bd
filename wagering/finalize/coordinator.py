"""Exactly-once finalization of a round's wagers."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import WageringSettings, get_settings
from ..errors import RoundNotFound
from ..models import (
    GameResult,
    PressResult,
    RoundStatus,
    Settlement,
    SettlementStatus,
    new_settlement_id,
)
from ..notifications import notify_round_finalized
from ..store import CommitResult, FinalizationWrite, WageringStore
from .planner import FinalizationPlan, SkippedGame, plan_finalization

logger = logging.getLogger(__name__)


class FinalizeOutcome(str, Enum):
    FINALIZED = "FINALIZED"
    ALREADY_COMPLETED = "ALREADY_COMPLETED"
    SETTLEMENTS_EXIST = "SETTLEMENTS_EXIST"


class FinalizeReceipt(BaseModel):
    round_id: str = Field(serialization_alias="roundId")
    outcome: FinalizeOutcome
    settlements: List[Settlement] = Field(default_factory=list)
    game_results: List[GameResult] = Field(
        default_factory=list, serialization_alias="gameResults"
    )
    press_results: List[PressResult] = Field(
        default_factory=list, serialization_alias="pressResults"
    )
    skipped_games: List[SkippedGame] = Field(
        default_factory=list, serialization_alias="skippedGames"
    )

    model_config = ConfigDict(populate_by_name=True)

    @property
    def race_prevented(self) -> bool:
        """True when another writer had already finalized the round."""

        return self.outcome is not FinalizeOutcome.FINALIZED


_RACE_OUTCOMES = {
    CommitResult.ALREADY_COMPLETED: FinalizeOutcome.ALREADY_COMPLETED,
    CommitResult.SETTLEMENTS_EXIST: FinalizeOutcome.SETTLEMENTS_EXIST,
}


class FinalizationCoordinator:
    """Plan a round's settlements and commit them through the store's compare-and-swap."""

    def __init__(
        self, store: WageringStore, settings: Optional[WageringSettings] = None
    ) -> None:
        self._store = store
        self._settings = settings

    @property
    def settings(self) -> WageringSettings:
        return self._settings or get_settings()

    def _build_write(self, plan: FinalizationPlan) -> FinalizationWrite:
        created_at = datetime.now(timezone.utc)
        settlements = [
            Settlement(
                id=new_settlement_id(),
                round_id=plan.round_id,
                from_user_id=flow.from_user_id,
                to_user_id=flow.to_user_id,
                amount=flow.amount,
                status=SettlementStatus.PENDING,
                created_at=created_at,
            )
            for flow in plan.consolidated
        ]
        return FinalizationWrite(
            settlements=settlements,
            game_results=list(plan.game_results),
            press_results=list(plan.press_results),
            press_statuses=dict(plan.press_statuses),
        )

    def finalize(self, round_id: str, *, user_id: Optional[str] = None) -> FinalizeReceipt:
        round_ = self._store.load_round(round_id)
        if round_ is None:
            raise RoundNotFound(f"Round {round_id} not found")

        logger.info(
            "finalize attempt round=%s user=%s players=%d games=%d",
            round_id,
            user_id,
            len(round_.players),
            len(round_.games),
        )

        # Not authoritative; the commit re-checks under the store's lock.
        if round_.status is RoundStatus.COMPLETED:
            logger.warning("round %s already finalized; nothing to do", round_id)
            return FinalizeReceipt(
                round_id=round_id, outcome=FinalizeOutcome.ALREADY_COMPLETED
            )

        settings = self.settings
        plan = plan_finalization(round_, settings)
        write = self._build_write(plan)

        result = self._store.commit_finalization(round_id, write)
        if result is CommitResult.NOT_FOUND:
            raise RoundNotFound(f"Round {round_id} not found")
        if result in _RACE_OUTCOMES:
            logger.warning(
                "race prevented for round %s: %s", round_id, result.value.lower()
            )
            return FinalizeReceipt(round_id=round_id, outcome=_RACE_OUTCOMES[result])

        logger.info(
            "round %s finalized with %d settlement(s) totalling %s",
            round_id,
            len(write.settlements),
            plan.total_amount,
        )
        if settings.notify_on_finalize:
            notify_round_finalized(round_id, write.settlements)

        return FinalizeReceipt(
            round_id=round_id,
            outcome=FinalizeOutcome.FINALIZED,
            settlements=write.settlements,
            game_results=write.game_results,
            press_results=write.press_results,
            skipped_games=plan.skipped,
        )


__all__ = ["FinalizationCoordinator", "FinalizeOutcome", "FinalizeReceipt"]
