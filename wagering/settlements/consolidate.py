"""Net many pairwise money flows down to one payment per pair of players."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, List, Tuple

from ..models import SettlementFlow
from ..money import ZERO, round_cents

Pair = Tuple[str, str]


def consolidate_settlements(flows: Iterable[SettlementFlow]) -> List[SettlementFlow]:
    """Merge ``flows`` into at most one flow per unordered pair.

    A flow is netted against the reverse pair when that pair is already being
    tracked, otherwise it accumulates on its own pair. Entries that round to
    zero cents are dropped; negative balances flip direction.
    """

    balances: Dict[Pair, Decimal] = {}
    for flow in flows:
        if flow.from_user_id == flow.to_user_id:
            continue
        forward = (flow.from_user_id, flow.to_user_id)
        reverse = (flow.to_user_id, flow.from_user_id)
        if reverse in balances:
            balances[reverse] -= flow.amount
        else:
            balances[forward] = balances.get(forward, ZERO) + flow.amount

    consolidated: List[SettlementFlow] = []
    for (from_id, to_id), balance in balances.items():
        amount = round_cents(abs(balance))
        if amount == ZERO:
            continue
        if balance < 0:
            from_id, to_id = to_id, from_id
        consolidated.append(
            SettlementFlow(from_user_id=from_id, to_user_id=to_id, amount=amount)
        )
    return consolidated


def net_positions(flows: Iterable[SettlementFlow]) -> Dict[str, Decimal]:
    """Each player's net balance across ``flows`` (positive = receives)."""

    positions: Dict[str, Decimal] = {}
    for flow in flows:
        positions[flow.to_user_id] = positions.get(flow.to_user_id, ZERO) + flow.amount
        positions[flow.from_user_id] = positions.get(flow.from_user_id, ZERO) - flow.amount
    return positions


__all__ = ["consolidate_settlements", "net_positions"]
