"""Handicap stroke allocation shared by every game calculator.

Strokes are allocated relative to the lowest course handicap among the
*current game's* participants, so two games in the same round can give the
same player a different number of strokes.
"""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Sequence

from .errors import ErrorCode, GameCalculationError
from .models import Hole, Player


def strokes_given(
    course_handicap: int | None, handicap_rank: int, min_handicap: int
) -> int:
    """Return 1 when a player receives a stroke on a hole of ``handicap_rank``."""

    diff = (course_handicap or 0) - min_handicap
    return 1 if handicap_rank <= diff else 0


def group_min_handicap(players: Iterable[Player]) -> int:
    values = [p.course_handicap or 0 for p in players]
    if not values:
        return 0
    return min(values)


def index_holes(holes: Iterable[Hole]) -> Dict[int, Hole]:
    """Map holes by number, rejecting duplicate numbers or difficulty ranks."""

    by_number: Dict[int, Hole] = {}
    ranks: set[int] = set()
    for hole in holes:
        if hole.hole_number in by_number:
            raise GameCalculationError(
                f"Duplicate hole number {hole.hole_number} in course data",
                ErrorCode.VALIDATION_ERROR,
            )
        if hole.handicap_rank in ranks:
            raise GameCalculationError(
                f"Duplicate handicap rank {hole.handicap_rank} in course data",
                ErrorCode.VALIDATION_ERROR,
            )
        by_number[hole.hole_number] = hole
        ranks.add(hole.handicap_rank)
    return by_number


def validate_handicaps(players: Sequence[Player]) -> None:
    missing = [p for p in players if p.course_handicap is None]
    if missing:
        raise GameCalculationError(
            "Handicapped play requires all players to have handicaps set. "
            f"{len(missing)} player(s) missing handicap.",
            ErrorCode.MISSING_HANDICAPS,
        )


class NetScorer:
    """Net score lookups for one game's participant subset."""

    def __init__(
        self,
        players: Sequence[Player],
        holes: Iterable[Hole] | Mapping[int, Hole],
        *,
        require_handicaps: bool = False,
    ) -> None:
        if require_handicaps:
            validate_handicaps(players)
        self._holes = dict(holes) if isinstance(holes, Mapping) else index_holes(holes)
        self._players = {p.user_id: p for p in players}
        self.min_handicap = group_min_handicap(players)
        self._gross: Dict[str, Dict[int, int]] = {
            p.user_id: {s.hole_number: s.strokes for s in p.scores if s.played}
            for p in players
        }

    def hole(self, hole_number: int) -> Hole | None:
        return self._holes.get(hole_number)

    def strokes(self, user_id: str, hole_number: int) -> int:
        """Handicap strokes ``user_id`` receives on ``hole_number``."""

        player = self._players.get(user_id)
        hole = self._holes.get(hole_number)
        if player is None or hole is None:
            return 0
        return strokes_given(player.course_handicap, hole.handicap_rank, self.min_handicap)

    def gross(self, user_id: str, hole_number: int) -> int | None:
        return self._gross.get(user_id, {}).get(hole_number)

    def net(self, user_id: str, hole_number: int) -> int | None:
        gross = self.gross(user_id, hole_number)
        if gross is None:
            return None
        return gross - self.strokes(user_id, hole_number)

    def nets(self, user_ids: Iterable[str], hole_number: int) -> Dict[str, int | None]:
        return {uid: self.net(uid, hole_number) for uid in user_ids}


__all__ = [
    "NetScorer",
    "group_min_handicap",
    "index_holes",
    "strokes_given",
    "validate_handicaps",
]
