"""Round finalization: plan settlements, then commit them exactly once."""

from .coordinator import FinalizationCoordinator, FinalizeOutcome, FinalizeReceipt
from .planner import FinalizationPlan, SkippedGame, plan_finalization

__all__ = [
    "FinalizationCoordinator",
    "FinalizationPlan",
    "FinalizeOutcome",
    "FinalizeReceipt",
    "SkippedGame",
    "plan_finalization",
]
