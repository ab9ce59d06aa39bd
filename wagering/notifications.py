"""Fire-and-forget notifications for settlement lifecycle events."""

from __future__ import annotations

import logging
import time
from decimal import Decimal
from typing import Callable, Dict, Iterable, Mapping, MutableMapping, Optional

from .models import Settlement

SettlementNotifier = Callable[[str, Mapping[str, object]], None]

_notifier: Optional[SettlementNotifier] = None
_logger = logging.getLogger(__name__)


def set_settlement_notifier(candidate: SettlementNotifier | None) -> None:
    """Register the dispatcher that delivers settlement notifications."""

    global _notifier
    _notifier = candidate if callable(candidate) else None


def _now_ms() -> int:
    return int(time.time() * 1000)


def _amount(value: Decimal) -> str:
    return f"{value:.2f}"


def _safe_emit(event: str, payload: MutableMapping[str, object]) -> None:
    if not _notifier:
        _logger.debug("settlement notifier not configured for event %s", event)
        return
    try:
        _notifier(event, dict(payload))
    except Exception:
        _logger.exception("failed to dispatch settlement notification %s", event)


def notify_settlement_created(settlement: Settlement) -> None:
    """One message per party: the payer is told what they owe, the payee what they are owed."""

    base: Dict[str, object] = {
        "settlementId": settlement.id,
        "roundId": settlement.round_id,
        "amount": _amount(settlement.amount),
        "ts": _now_ms(),
    }
    for role, user_id, counterparty_id in (
        ("payer", settlement.from_user_id, settlement.to_user_id),
        ("payee", settlement.to_user_id, settlement.from_user_id),
    ):
        payload = dict(base)
        payload.update(role=role, userId=user_id, counterpartyId=counterparty_id)
        _safe_emit("settlement.created", payload)


def notify_settlement_paid(settlement: Settlement) -> None:
    _safe_emit(
        "settlement.paid",
        {
            "settlementId": settlement.id,
            "roundId": settlement.round_id,
            "userId": settlement.to_user_id,
            "counterpartyId": settlement.from_user_id,
            "amount": _amount(settlement.amount),
            "ts": _now_ms(),
        },
    )


def notify_round_finalized(round_id: str, settlements: Iterable[Settlement]) -> None:
    items = list(settlements)
    for settlement in items:
        notify_settlement_created(settlement)
    _safe_emit(
        "round.finalized",
        {"roundId": round_id, "settlementCount": len(items), "ts": _now_ms()},
    )


__all__ = [
    "SettlementNotifier",
    "notify_round_finalized",
    "notify_settlement_created",
    "notify_settlement_paid",
    "set_settlement_notifier",
]
