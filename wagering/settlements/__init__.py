"""Settlement folding, consolidation and the payment lifecycle."""

from .allocation import (
    GameSettlement,
    allocate_from_standings,
    dots_flows,
    settle_game,
)
from .consolidate import consolidate_settlements, net_positions
from .lifecycle import confirm_settlement, mark_settlement_paid

__all__ = [
    "GameSettlement",
    "allocate_from_standings",
    "confirm_settlement",
    "consolidate_settlements",
    "dots_flows",
    "mark_settlement_paid",
    "net_positions",
    "settle_game",
]
