import math
from decimal import Decimal

import pytest

from wagering.games import calculate_nines
from wagering.games.nines import award_hole_points


@pytest.mark.parametrize(
    ("nets", "expected"),
    [
        ({"a": 3, "b": 4, "c": 5, "d": 6}, {"a": 5, "b": 3, "c": 1, "d": 0}),
        ({"a": 3, "b": 3, "c": 5, "d": 6}, {"a": 4, "b": 4, "c": 1, "d": 0}),
        (
            {"a": 3, "b": 4, "c": 4, "d": 4},
            {"a": 5, "b": Decimal(4) / 3, "c": Decimal(4) / 3, "d": Decimal(4) / 3},
        ),
        ({"a": 4, "b": 4, "c": 4}, {"a": 3, "b": 3, "c": 3}),
        ({"a": 4, "b": 5}, {"a": 6, "b": 3}),
        ({"a": 4, "b": 4}, {"a": Decimal("4.5"), "b": Decimal("4.5")}),
    ],
)
def test_hole_points_split_tied_ranks(nets, expected) -> None:
    awarded = award_hole_points(nets)

    assert awarded == {uid: Decimal(v) for uid, v in expected.items()}
    assert math.isclose(float(sum(awarded.values())), 9.0)


def test_five_players_award_nothing() -> None:
    nets = {uid: 4 for uid in "abcde"}

    assert set(award_hole_points(nets).values()) == {0}


def test_nines_money_is_relative_to_expected_points(holes, make_player) -> None:
    players = [
        make_player("a", [3] * 18),
        make_player("b", [4] * 18),
        make_player("c", [5] * 18),
        make_player("d", [6] * 18),
    ]

    result = calculate_nines(players, holes, 1)

    by_id = {s.user_id: s for s in result.standings}
    assert by_id["a"].total == 90
    assert by_id["a"].front == 45
    assert by_id["a"].front_money == Decimal("24.75")
    assert by_id["a"].total_money == Decimal("49.5")
    assert by_id["d"].total_money == Decimal("-40.5")
    assert sum(s.total_money for s in result.standings) == 0


def test_holes_missing_a_score_award_no_points(holes, make_player) -> None:
    players = [
        make_player("a", {1: 3, 2: 3}),
        make_player("b", {1: 4, 2: None}),
    ]

    result = calculate_nines(players, holes, 1)

    assert [h.hole for h in result.holes] == [1]
    assert result.standings[0].total == 6
