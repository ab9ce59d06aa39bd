from decimal import Decimal

from wagering.config import get_settings, reset_settings_cache
from wagering.errors import ErrorCode, SettlementLimitExceeded, WageringError


def test_defaults() -> None:
    settings = get_settings()

    assert settings.max_bet_amount == Decimal("10000")
    assert settings.max_individual_settlement == Decimal("50000")
    assert settings.max_total_settlement == Decimal("100000")
    assert settings.notify_on_finalize is True


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("WAGERING_MAX_TOTAL_SETTLEMENT", "2500.50")
    monkeypatch.setenv("WAGERING_NOTIFY_ON_FINALIZE", "0")
    reset_settings_cache()

    settings = get_settings()

    assert settings.max_total_settlement == Decimal("2500.50")
    assert settings.notify_on_finalize is False


def test_settings_are_cached() -> None:
    assert get_settings() is get_settings()


def test_errors_carry_machine_readable_codes() -> None:
    error = SettlementLimitExceeded("too much")

    assert isinstance(error, WageringError)
    assert error.code is ErrorCode.SETTLEMENT_LIMIT_EXCEEDED
    assert error.to_dict() == {"code": "SETTLEMENT_LIMIT_EXCEEDED", "message": "too much"}
