"""Two-step payment confirmation: the payer marks a settlement paid, the payee confirms."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from ..errors import ErrorCode, SettlementActionError, SettlementConflict, SettlementNotFound
from ..models import Settlement, SettlementStatus
from ..notifications import notify_settlement_paid
from ..store import WageringStore

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _load(store: WageringStore, settlement_id: str) -> Settlement:
    settlement = store.get_settlement(settlement_id)
    if settlement is None:
        raise SettlementNotFound(f"Settlement {settlement_id} not found")
    return settlement


def mark_settlement_paid(
    store: WageringStore,
    settlement_id: str,
    user_id: str,
    *,
    now: Optional[datetime] = None,
) -> Settlement:
    settlement = _load(store, settlement_id)
    if settlement.from_user_id != user_id:
        raise SettlementActionError(
            "Only the payer can mark a settlement as paid", ErrorCode.FORBIDDEN
        )
    if settlement.status is not SettlementStatus.PENDING:
        raise SettlementActionError(
            f"Settlement is already {settlement.status.value.lower()}"
        )

    updated = store.transition_settlement(
        settlement_id,
        SettlementStatus.PENDING,
        SettlementStatus.PAID,
        at=now or _now(),
    )
    if updated is None:
        raise SettlementConflict("Settlement was already updated by another request")

    logger.info(
        "settlement %s marked paid by %s (%s)", settlement_id, user_id, updated.amount
    )
    notify_settlement_paid(updated)
    return updated


def confirm_settlement(
    store: WageringStore,
    settlement_id: str,
    user_id: str,
    *,
    now: Optional[datetime] = None,
) -> Settlement:
    settlement = _load(store, settlement_id)
    if settlement.to_user_id != user_id:
        raise SettlementActionError(
            "Only the recipient can confirm a settlement", ErrorCode.FORBIDDEN
        )
    if settlement.status is SettlementStatus.PENDING:
        raise SettlementActionError("Payment has not been marked as sent yet")
    if settlement.status is SettlementStatus.SETTLED:
        raise SettlementActionError("Settlement is already confirmed")

    updated = store.transition_settlement(
        settlement_id,
        SettlementStatus.PAID,
        SettlementStatus.SETTLED,
        at=now or _now(),
    )
    if updated is None:
        raise SettlementConflict("Settlement was already updated by another request")

    logger.info("settlement %s confirmed by %s", settlement_id, user_id)
    return updated


__all__ = ["confirm_settlement", "mark_settlement_paid"]
