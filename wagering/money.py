"""Decimal helpers for money values."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Union

MoneyLike = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_money(value: MoneyLike | None) -> Decimal:
    """Convert ``value`` to a ``Decimal`` without binary float noise."""

    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(str(value))


def round_cents(value: MoneyLike) -> Decimal:
    return to_money(value).quantize(CENT, rounding=ROUND_HALF_UP)


def money_sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)


__all__ = ["CENT", "ZERO", "MoneyLike", "money_sum", "round_cents", "to_money"]
