"""Press trees and their resolution.

Presses are kept in an arena: each node stores the index of its parent, and a
press may only name a parent that appears earlier in the list, so the tree is
cycle-free by construction. Resolution walks the tree with an explicit stack
so arbitrarily deep press-the-press chains never hit the recursion limit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Collection, Dict, Iterator, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..errors import PressValidationError
from ..games.match import evaluate_match
from ..handicap import NetScorer
from ..models import Press, PressResult, PressSegment, PressStatus, SettlementFlow
from ..money import MoneyLike, ZERO, round_cents, to_money

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Node:
    press: Press
    parent: Optional[int]
    segment: PressSegment
    children: List[int] = field(default_factory=list)


class PressTree:
    """Arena of presses indexed by position with parent links."""

    def __init__(self, presses: Sequence[Press]) -> None:
        self._nodes: List[_Node] = []
        self._index: Dict[str, int] = {}
        self._roots: List[int] = []
        for press in presses:
            self.add(press)

    def add(self, press: Press) -> int:
        if press.id in self._index:
            raise PressValidationError(f"Duplicate press id {press.id}")
        parent: Optional[int] = None
        if press.parent_press_id is not None:
            parent = self._index.get(press.parent_press_id)
            if parent is None:
                raise PressValidationError(
                    f"Press {press.id} references parent {press.parent_press_id} "
                    "which does not precede it"
                )
        root = press.segment if parent is None else self._nodes[parent].segment
        for segment in dict.fromkeys((press.segment, root)):
            if not segment.first_hole <= press.start_hole <= segment.last_hole:
                raise PressValidationError(
                    f"Press {press.id} starts on hole {press.start_hole}, outside "
                    f"the {segment.value} segment ({segment.first_hole}-{segment.last_hole})"
                )
        position = len(self._nodes)
        self._nodes.append(_Node(press=press, parent=parent, segment=root))
        self._index[press.id] = position
        if parent is None:
            self._roots.append(position)
        else:
            self._nodes[parent].children.append(position)
        return position

    def __len__(self) -> int:
        return len(self._nodes)

    def get(self, press_id: str) -> Optional[Press]:
        position = self._index.get(press_id)
        return None if position is None else self._nodes[position].press

    def parent_of(self, press_id: str) -> Optional[Press]:
        position = self._index.get(press_id)
        if position is None:
            return None
        parent = self._nodes[position].parent
        return None if parent is None else self._nodes[parent].press

    def children_of(self, press_id: str) -> List[Press]:
        position = self._index.get(press_id)
        if position is None:
            return []
        return [self._nodes[i].press for i in self._nodes[position].children]

    def root_segment(self, press_id: str) -> Optional[PressSegment]:
        position = self._index.get(press_id)
        if position is None:
            return None
        return self._nodes[position].segment

    def walk_active(
        self, segments: Optional[Collection[PressSegment]] = None
    ) -> Iterator[tuple[Press, PressSegment, int]]:
        """Yield ``(press, root_segment, depth)`` depth-first, pre-order.

        Only ACTIVE presses are visited, and the children of a visited press
        are only reached through it.
        """

        stack: List[tuple[int, PressSegment, int]] = []
        for position in reversed(self._roots):
            press = self._nodes[position].press
            if press.status is not PressStatus.ACTIVE:
                continue
            if segments is not None and press.segment not in segments:
                continue
            stack.append((position, press.segment, 0))

        while stack:
            position, segment, depth = stack.pop()
            node = self._nodes[position]
            yield node.press, segment, depth
            for child in reversed(node.children):
                if self._nodes[child].press.status is PressStatus.ACTIVE:
                    stack.append((child, segment, depth + 1))


class PressResolution(BaseModel):
    press_id: str = Field(serialization_alias="pressId")
    segment: PressSegment
    start_hole: int = Field(serialization_alias="startHole")
    end_hole: int = Field(serialization_alias="endHole")
    depth: int = 0
    status: PressStatus
    winner_id: Optional[str] = Field(default=None, serialization_alias="winnerId")
    loser_id: Optional[str] = Field(default=None, serialization_alias="loserId")
    margin: int = 0
    amount: Decimal = ZERO

    model_config = ConfigDict(populate_by_name=True)


class PressOutcome(BaseModel):
    resolutions: List[PressResolution] = Field(default_factory=list)
    flows: List[SettlementFlow] = Field(default_factory=list)
    press_results: List[PressResult] = Field(
        default_factory=list, serialization_alias="pressResults"
    )

    def statuses(self) -> Dict[str, PressStatus]:
        return {r.press_id: r.status for r in self.resolutions}


def resolve_presses(
    presses: Sequence[Press] | PressTree,
    scorer: NetScorer,
    p1_id: str,
    p2_id: str,
    bet_amount: MoneyLike,
    *,
    segments: Optional[Collection[PressSegment]] = None,
) -> PressOutcome:
    """Settle every ACTIVE press between ``p1_id`` and ``p2_id``.

    Each press is replayed from its start hole to the end of its root's
    segment. A decided press moves ``bet * bet_multiplier`` from loser to
    winner; a tie pushes.
    """

    tree = presses if isinstance(presses, PressTree) else PressTree(presses)
    bet = to_money(bet_amount)
    outcome = PressOutcome()

    for press, segment, depth in tree.walk_active(segments):
        end_hole = segment.last_hole
        match = evaluate_match(scorer, p1_id, p2_id, press.start_hole, end_hole)
        if match.winner_id is None:
            status = PressStatus.PUSHED
        elif match.winner_id == press.initiated_by_id:
            status = PressStatus.WON
        else:
            status = PressStatus.LOST

        amount = ZERO
        if match.winner_id is not None and match.loser_id is not None:
            amount = round_cents(bet * press.bet_multiplier)
            outcome.flows.append(
                SettlementFlow(
                    from_user_id=match.loser_id,
                    to_user_id=match.winner_id,
                    amount=amount,
                )
            )
            outcome.press_results.append(
                PressResult(press_id=press.id, user_id=match.winner_id, net_amount=amount)
            )
            outcome.press_results.append(
                PressResult(press_id=press.id, user_id=match.loser_id, net_amount=-amount)
            )

        logger.debug(
            "press %s (%s from hole %s, depth %s) resolved %s",
            press.id,
            segment.value,
            press.start_hole,
            depth,
            status.value,
        )
        outcome.resolutions.append(
            PressResolution(
                press_id=press.id,
                segment=segment,
                start_hole=press.start_hole,
                end_hole=end_hole,
                depth=depth,
                status=status,
                winner_id=match.winner_id,
                loser_id=match.loser_id,
                margin=match.margin,
                amount=amount,
            )
        )

    return outcome


__all__ = ["PressOutcome", "PressResolution", "PressTree", "resolve_presses"]
