"""Persistence contract for rounds, settlements and career results.

The finalize path relies on exactly one operation being atomic:
:meth:`WageringStore.commit_finalization`, which re-checks the round status
and existing settlements inside the same critical section that writes.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Protocol

from .models import (
    GameResult,
    PressResult,
    PressStatus,
    Round,
    RoundStatus,
    Settlement,
    SettlementStatus,
)

logger = logging.getLogger(__name__)


class CommitResult(str, Enum):
    COMMITTED = "COMMITTED"
    ALREADY_COMPLETED = "ALREADY_COMPLETED"
    SETTLEMENTS_EXIST = "SETTLEMENTS_EXIST"
    NOT_FOUND = "NOT_FOUND"


@dataclass(slots=True)
class FinalizationWrite:
    settlements: List[Settlement] = field(default_factory=list)
    game_results: List[GameResult] = field(default_factory=list)
    press_results: List[PressResult] = field(default_factory=list)
    press_statuses: Dict[str, PressStatus] = field(default_factory=dict)


class WageringStore(Protocol):
    def load_round(self, round_id: str) -> Optional[Round]: ...

    def save_round(self, round_: Round) -> None: ...

    def commit_finalization(self, round_id: str, write: FinalizationWrite) -> CommitResult: ...

    def list_settlements(self, round_id: str) -> List[Settlement]: ...

    def list_game_results(self, round_id: str) -> List[GameResult]: ...

    def list_press_results(self, round_id: str) -> List[PressResult]: ...

    def get_settlement(self, settlement_id: str) -> Optional[Settlement]: ...

    def transition_settlement(
        self,
        settlement_id: str,
        expected: SettlementStatus,
        new_status: SettlementStatus,
        *,
        at: datetime,
    ) -> Optional[Settlement]: ...


class InMemoryWageringStore:
    """Thread-safe reference store; every method holds one lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._rounds: Dict[str, Round] = {}
        self._settlements: Dict[str, Settlement] = {}
        self._game_results: Dict[str, List[GameResult]] = {}
        self._press_results: Dict[str, List[PressResult]] = {}

    def load_round(self, round_id: str) -> Optional[Round]:
        with self._lock:
            round_ = self._rounds.get(round_id)
            return round_.model_copy(deep=True) if round_ else None

    def save_round(self, round_: Round) -> None:
        with self._lock:
            self._rounds[round_.id] = round_.model_copy(deep=True)

    def commit_finalization(self, round_id: str, write: FinalizationWrite) -> CommitResult:
        with self._lock:
            round_ = self._rounds.get(round_id)
            if round_ is None:
                return CommitResult.NOT_FOUND
            if round_.status is RoundStatus.COMPLETED:
                return CommitResult.ALREADY_COMPLETED
            if any(s.round_id == round_id for s in self._settlements.values()):
                return CommitResult.SETTLEMENTS_EXIST

            for settlement in write.settlements:
                self._settlements[settlement.id] = settlement.model_copy()
            self._game_results[round_id] = list(write.game_results)
            self._press_results[round_id] = list(write.press_results)

            games = []
            for game in round_.games:
                presses = [
                    p.model_copy(update={"status": write.press_statuses[p.id]})
                    if p.id in write.press_statuses
                    else p
                    for p in game.presses
                ]
                games.append(game.model_copy(update={"presses": presses}))
            self._rounds[round_id] = round_.model_copy(
                update={"games": games, "status": RoundStatus.COMPLETED}
            )
            logger.debug(
                "committed %d settlement(s) for round %s",
                len(write.settlements),
                round_id,
            )
            return CommitResult.COMMITTED

    def list_settlements(self, round_id: str) -> List[Settlement]:
        with self._lock:
            return [
                s.model_copy() for s in self._settlements.values() if s.round_id == round_id
            ]

    def list_game_results(self, round_id: str) -> List[GameResult]:
        with self._lock:
            return list(self._game_results.get(round_id, []))

    def list_press_results(self, round_id: str) -> List[PressResult]:
        with self._lock:
            return list(self._press_results.get(round_id, []))

    def get_settlement(self, settlement_id: str) -> Optional[Settlement]:
        with self._lock:
            settlement = self._settlements.get(settlement_id)
            return settlement.model_copy() if settlement else None

    def transition_settlement(
        self,
        settlement_id: str,
        expected: SettlementStatus,
        new_status: SettlementStatus,
        *,
        at: datetime,
    ) -> Optional[Settlement]:
        """Move a settlement from ``expected`` to ``new_status``; None when it is no longer ``expected``."""

        with self._lock:
            settlement = self._settlements.get(settlement_id)
            if settlement is None or settlement.status is not expected:
                return None
            update: Dict[str, object] = {"status": new_status}
            if new_status is SettlementStatus.PAID:
                update["paid_at"] = at
            elif new_status is SettlementStatus.SETTLED:
                update["confirmed_at"] = at
            updated = settlement.model_copy(update=update)
            self._settlements[settlement_id] = updated
            return updated.model_copy()


__all__ = [
    "CommitResult",
    "FinalizationWrite",
    "InMemoryWageringStore",
    "WageringStore",
]
