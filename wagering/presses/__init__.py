"""Press (side bet on a side bet) trees for Nassau and Match Play."""

from .engine import PressOutcome, PressResolution, PressTree, resolve_presses
from .rules import (
    GamePressStatus,
    PressRequest,
    cancel_press,
    open_press,
    press_status,
    validate_press_request,
)

__all__ = [
    "GamePressStatus",
    "PressOutcome",
    "PressRequest",
    "PressResolution",
    "PressTree",
    "cancel_press",
    "open_press",
    "press_status",
    "validate_press_request",
    "resolve_presses",
]
