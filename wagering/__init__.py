"""Golf side-game wagering: game calculators, presses and round settlement."""

from .errors import ErrorCode, WageringError  # noqa: F401
from .finalize import FinalizationCoordinator, FinalizeOutcome  # noqa: F401
from .games import calculate_game  # noqa: F401
from .models import Game, GameType, Hole, Player, Round, Score  # noqa: F401
from .settlements import consolidate_settlements  # noqa: F401
from .store import InMemoryWageringStore  # noqa: F401
