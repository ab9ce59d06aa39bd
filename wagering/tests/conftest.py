"""Shared pytest fixtures for wagering tests."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Union

import pytest

from wagering.config import reset_settings_cache
from wagering.models import Hole, Player, Score
from wagering.notifications import set_settlement_notifier

StrokeInput = Union[Sequence[Optional[int]], Dict[int, Optional[int]]]

PARS = [4, 5, 3, 4, 4, 3, 5, 4, 4, 4, 3, 5, 4, 4, 3, 4, 5, 4]


@pytest.fixture(autouse=True)
def _isolate_globals():
    reset_settings_cache()
    set_settlement_notifier(None)
    yield
    reset_settings_cache()
    set_settlement_notifier(None)


@pytest.fixture
def holes() -> List[Hole]:
    """Eighteen holes where hole N is the Nth hardest."""

    return [
        Hole(hole_number=n, par=PARS[n - 1], handicap_rank=n) for n in range(1, 19)
    ]


@pytest.fixture
def make_player() -> Callable[..., Player]:
    def build(
        user_id: str,
        strokes: StrokeInput = (),
        *,
        handicap: Optional[int] = 0,
        putts: Optional[Dict[int, int]] = None,
        name: Optional[str] = None,
    ) -> Player:
        if isinstance(strokes, dict):
            by_hole = dict(strokes)
        else:
            by_hole = {i + 1: value for i, value in enumerate(strokes)}
        putts = putts or {}
        numbers = sorted(set(by_hole) | set(putts))
        scores = [
            Score(hole_number=n, strokes=by_hole.get(n), putts=putts.get(n))
            for n in numbers
        ]
        return Player(
            user_id=user_id,
            course_handicap=handicap,
            scores=scores,
            display_name=name or user_id.title(),
        )

    return build


@pytest.fixture
def notifications() -> List[tuple[str, dict]]:
    """Capture notifier calls."""

    received: List[tuple[str, dict]] = []
    set_settlement_notifier(lambda event, payload: received.append((event, dict(payload))))
    return received
