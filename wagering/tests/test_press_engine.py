from decimal import Decimal

import pytest

from wagering.errors import PressValidationError
from wagering.handicap import NetScorer
from wagering.models import Press, PressSegment, PressStatus
from wagering.presses import PressTree, resolve_presses

ALICE = [4] * 18
BOB = [5, 5, 5, 3, 3, 3, 3, 4, 4] + [4] * 9


@pytest.fixture
def scorer(holes, make_player) -> NetScorer:
    return NetScorer([make_player("alice", ALICE), make_player("bob", BOB)], holes)


def test_press_won_by_initiator_pays_multiplied_bet(scorer) -> None:
    press = Press(
        id="p1",
        segment=PressSegment.FRONT,
        start_hole=4,
        initiated_by_id="bob",
        bet_multiplier=Decimal(2),
    )

    outcome = resolve_presses([press], scorer, "alice", "bob", 10)

    resolution = outcome.resolutions[0]
    assert resolution.status is PressStatus.WON
    assert resolution.end_hole == 9
    assert resolution.margin == 4
    assert len(outcome.flows) == 1
    flow = outcome.flows[0]
    assert (flow.from_user_id, flow.to_user_id, flow.amount) == ("alice", "bob", Decimal(20))
    assert {(r.user_id, r.net_amount) for r in outcome.press_results} == {
        ("bob", Decimal(20)),
        ("alice", Decimal(-20)),
    }


def test_press_lost_by_initiator(scorer) -> None:
    press = Press(id="p1", segment=PressSegment.OVERALL, start_hole=1, initiated_by_id="alice")

    outcome = resolve_presses([press], scorer, "alice", "bob", 5)

    assert outcome.statuses() == {"p1": PressStatus.LOST}
    assert outcome.resolutions[0].winner_id == "bob"
    assert outcome.flows[0].from_user_id == "alice"


def test_children_inherit_root_segment_and_tied_press_pushes(scorer) -> None:
    presses = [
        Press(id="root", segment=PressSegment.FRONT, start_hole=4, initiated_by_id="bob"),
        Press(
            id="child",
            segment=PressSegment.OVERALL,
            start_hole=8,
            initiated_by_id="alice",
            parent_press_id="root",
        ),
    ]

    outcome = resolve_presses(presses, scorer, "alice", "bob", 5)

    assert [r.press_id for r in outcome.resolutions] == ["root", "child"]
    child = outcome.resolutions[1]
    assert child.segment is PressSegment.FRONT
    assert child.end_hole == 9
    assert child.depth == 1
    assert child.status is PressStatus.PUSHED
    assert len(outcome.flows) == 1


def test_canceled_press_and_its_children_are_not_resolved(scorer) -> None:
    presses = [
        Press(
            id="gone",
            segment=PressSegment.FRONT,
            start_hole=2,
            initiated_by_id="bob",
            status=PressStatus.CANCELED,
        ),
        Press(
            id="orphan",
            segment=PressSegment.FRONT,
            start_hole=5,
            initiated_by_id="bob",
            parent_press_id="gone",
        ),
    ]

    outcome = resolve_presses(presses, scorer, "alice", "bob", 5)

    assert outcome.resolutions == []
    assert outcome.flows == []


def test_segment_filter_skips_other_roots(scorer) -> None:
    presses = [
        Press(id="m", segment=PressSegment.MATCH, start_hole=1, initiated_by_id="bob"),
        Press(id="f", segment=PressSegment.FRONT, start_hole=1, initiated_by_id="bob"),
    ]

    outcome = resolve_presses(
        presses, scorer, "alice", "bob", 5, segments={PressSegment.MATCH}
    )

    assert [r.press_id for r in outcome.resolutions] == ["m"]


def test_deep_press_chain_resolves_without_recursion(scorer) -> None:
    presses = [Press(id="p0", segment=PressSegment.BACK, start_hole=10, initiated_by_id="bob")]
    for i in range(1, 3000):
        presses.append(
            Press(
                id=f"p{i}",
                segment=PressSegment.BACK,
                start_hole=10 + i % 9,
                initiated_by_id="bob",
                parent_press_id=f"p{i - 1}",
            )
        )

    outcome = resolve_presses(presses, scorer, "alice", "bob", 1)

    assert len(outcome.resolutions) == 3000
    assert outcome.resolutions[-1].depth == 2999
    assert all(r.status is PressStatus.PUSHED for r in outcome.resolutions)


def test_parent_must_precede_child() -> None:
    presses = [
        Press(
            id="child",
            segment=PressSegment.FRONT,
            start_hole=3,
            initiated_by_id="a",
            parent_press_id="root",
        ),
        Press(id="root", segment=PressSegment.FRONT, start_hole=1, initiated_by_id="a"),
    ]

    with pytest.raises(PressValidationError):
        PressTree(presses)


def test_tree_lookups() -> None:
    tree = PressTree(
        [
            Press(id="r", segment=PressSegment.BACK, start_hole=10, initiated_by_id="a"),
            Press(
                id="c",
                segment=PressSegment.BACK,
                start_hole=12,
                initiated_by_id="b",
                parent_press_id="r",
            ),
        ]
    )

    assert len(tree) == 2
    assert tree.parent_of("c").id == "r"
    assert [p.id for p in tree.children_of("r")] == ["c"]
    assert tree.root_segment("c") is PressSegment.BACK
    assert tree.get("missing") is None


@pytest.mark.parametrize(
    ("segment", "start_hole"),
    [(PressSegment.FRONT, 12), (PressSegment.BACK, 4)],
)
def test_start_hole_outside_segment_is_rejected(scorer, segment, start_hole) -> None:
    press = Press(id="p1", segment=segment, start_hole=start_hole, initiated_by_id="bob")

    with pytest.raises(PressValidationError):
        resolve_presses([press], scorer, "alice", "bob", 10)


def test_child_start_hole_must_fit_root_segment() -> None:
    presses = [
        Press(id="root", segment=PressSegment.FRONT, start_hole=2, initiated_by_id="a"),
        Press(
            id="child",
            segment=PressSegment.OVERALL,
            start_hole=14,
            initiated_by_id="b",
            parent_press_id="root",
        ),
    ]

    with pytest.raises(PressValidationError):
        PressTree(presses)
