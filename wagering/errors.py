"""Error taxonomy for the wagering engine.

Input-shape problems, bound violations and internal invariant breaks are
raised as distinct exception types, each carrying a machine-readable
``code`` next to the human message. Wrong player counts are *not* errors:
calculators report them through a not-applicable result instead.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    INVALID_SETTLEMENT = "INVALID_SETTLEMENT"
    FINALIZATION_FAILED = "FINALIZATION_FAILED"
    CALCULATION_ERROR = "CALCULATION_ERROR"
    MISSING_HANDICAPS = "MISSING_HANDICAPS"
    SETTLEMENT_LIMIT_EXCEEDED = "SETTLEMENT_LIMIT_EXCEEDED"
    INVALID_PRESS = "INVALID_PRESS"


class WageringError(Exception):
    default_code = ErrorCode.CALCULATION_ERROR

    def __init__(self, message: str, code: ErrorCode | None = None) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code.value, "message": self.message}


class GameCalculationError(WageringError):
    """Caller supplied data a calculator cannot interpret."""


class PressValidationError(WageringError):
    default_code = ErrorCode.INVALID_PRESS


class SettlementLimitExceeded(WageringError):
    default_code = ErrorCode.SETTLEMENT_LIMIT_EXCEEDED


class SettlementInvariantError(WageringError):
    """A computed amount broke an arithmetic invariant (internal bug)."""

    default_code = ErrorCode.INVALID_SETTLEMENT


class RoundNotFound(WageringError):
    default_code = ErrorCode.NOT_FOUND


class SettlementNotFound(WageringError):
    default_code = ErrorCode.NOT_FOUND


class SettlementActionError(WageringError):
    default_code = ErrorCode.VALIDATION_ERROR


class SettlementConflict(WageringError):
    default_code = ErrorCode.CONFLICT


__all__ = [
    "ErrorCode",
    "GameCalculationError",
    "PressValidationError",
    "RoundNotFound",
    "SettlementActionError",
    "SettlementConflict",
    "SettlementInvariantError",
    "SettlementLimitExceeded",
    "SettlementNotFound",
    "WageringError",
]
