from datetime import datetime, timezone
from decimal import Decimal

import pytest

from wagering.errors import (
    ErrorCode,
    SettlementActionError,
    SettlementConflict,
    SettlementNotFound,
)
from wagering.models import Round, Settlement, SettlementStatus
from wagering.settlements import confirm_settlement, mark_settlement_paid
from wagering.store import FinalizationWrite, InMemoryWageringStore

NOW = datetime(2026, 5, 1, 18, 30, tzinfo=timezone.utc)


@pytest.fixture
def store() -> InMemoryWageringStore:
    store = InMemoryWageringStore()
    store.save_round(Round(id="r1"))
    settlement = Settlement(
        id="stl_1",
        round_id="r1",
        from_user_id="bob",
        to_user_id="alice",
        amount=Decimal("12.50"),
        created_at=NOW,
    )
    store.commit_finalization("r1", FinalizationWrite(settlements=[settlement]))
    return store


def test_payer_marks_paid_then_payee_confirms(store, notifications) -> None:
    paid = mark_settlement_paid(store, "stl_1", "bob", now=NOW)

    assert paid.status is SettlementStatus.PAID
    assert paid.paid_at == NOW
    assert notifications[-1][0] == "settlement.paid"
    assert notifications[-1][1]["userId"] == "alice"

    settled = confirm_settlement(store, "stl_1", "alice", now=NOW)

    assert settled.status is SettlementStatus.SETTLED
    assert settled.confirmed_at == NOW
    assert store.get_settlement("stl_1").status is SettlementStatus.SETTLED


def test_only_the_payer_can_mark_paid(store) -> None:
    with pytest.raises(SettlementActionError) as excinfo:
        mark_settlement_paid(store, "stl_1", "alice")

    assert excinfo.value.code is ErrorCode.FORBIDDEN


def test_cannot_mark_paid_twice(store) -> None:
    mark_settlement_paid(store, "stl_1", "bob")

    with pytest.raises(SettlementActionError):
        mark_settlement_paid(store, "stl_1", "bob")


def test_confirm_requires_payment_first(store) -> None:
    with pytest.raises(SettlementActionError) as excinfo:
        confirm_settlement(store, "stl_1", "alice")

    assert "not been marked as sent" in excinfo.value.message


def test_confirm_only_once_and_only_by_payee(store) -> None:
    mark_settlement_paid(store, "stl_1", "bob")

    with pytest.raises(SettlementActionError):
        confirm_settlement(store, "stl_1", "bob")

    confirm_settlement(store, "stl_1", "alice")
    with pytest.raises(SettlementActionError) as excinfo:
        confirm_settlement(store, "stl_1", "alice")
    assert "already confirmed" in excinfo.value.message


def test_losing_the_status_race_is_a_conflict(store, monkeypatch) -> None:
    monkeypatch.setattr(store, "transition_settlement", lambda *args, **kwargs: None)

    with pytest.raises(SettlementConflict):
        mark_settlement_paid(store, "stl_1", "bob")


def test_unknown_settlement(store) -> None:
    with pytest.raises(SettlementNotFound):
        mark_settlement_paid(store, "missing", "bob")
