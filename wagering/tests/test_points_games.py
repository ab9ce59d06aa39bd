import math
from decimal import Decimal

import pytest

from wagering.games import (
    calculate_banker,
    calculate_bingo_bango_bongo,
    calculate_snake,
    calculate_stableford,
)
from wagering.games.stableford import stableford_points
from wagering.models import BankerDecision, BingoBangoBongoPoint, Hole


@pytest.mark.parametrize(
    ("net", "par", "points"),
    [(1, 4, 5), (2, 5, 5), (2, 4, 4), (3, 4, 3), (4, 4, 2), (5, 4, 1), (6, 4, 0), (9, 3, 0)],
)
def test_stableford_points_table(net, par, points) -> None:
    assert stableford_points(net, par) == points


def test_stableford_money_against_group_average(holes, make_player) -> None:
    players = [
        make_player("a", {1: 3}),
        make_player("b", {1: 4}),
        make_player("c", {1: 5}),
    ]

    result = calculate_stableford(players, holes, 2)

    by_id = {s.user_id: s for s in result.standings}
    assert by_id["a"].total == 3
    assert by_id["c"].total == 1
    assert result.average_points == 2
    assert by_id["a"].money == Decimal(2)
    assert by_id["b"].money == 0
    assert by_id["c"].money == Decimal(-2)


def test_stableford_unknown_hole_uses_par_four(make_player) -> None:
    course = [Hole(hole_number=1, par=3, handicap_rank=1)]
    player = make_player("a", {1: 3, 2: 3})

    result = calculate_stableford([player], course, 1)

    assert result.standings[0].hole_points == {1: 2, 2: 3}
    assert result.standings[0].money == 0


def test_last_three_putt_holds_the_snake(make_player) -> None:
    players = [
        make_player("a", putts={2: 3, 5: 2}),
        make_player("b", putts={7: 4}),
        make_player("c", putts={7: 3, 3: 1}),
    ]

    result = calculate_snake(players, 5)

    assert result.snake_holder_id == "c"
    assert result.last_three_putt_hole == 7
    money = {s.user_id: s.money for s in result.standings}
    assert money == {"a": 5, "b": 5, "c": -10}
    assert {s.user_id: s.three_putts for s in result.standings} == {"a": 1, "b": 1, "c": 1}


def test_no_three_putts_means_no_snake(make_player) -> None:
    players = [make_player("a", putts={1: 2}), make_player("b", putts={1: 1})]

    result = calculate_snake(players, 5)

    assert result.snake_holder_id is None
    assert all(s.money == 0 for s in result.standings)


def test_banker_collects_from_everyone_on_a_win(holes, make_player) -> None:
    players = [
        make_player("a", {1: 3, 2: 5, 3: 4}),
        make_player("b", {1: 4, 2: 4, 3: 4}),
        make_player("c", {1: 5, 2: 5, 3: 4}),
    ]
    decisions = [BankerDecision(hole_number=2, banker_user_id="c")]

    result = calculate_banker(players, holes, decisions, 1)

    first, second, third = result.holes[:3]
    assert first.banker_id == "a" and first.banker_won is True
    assert second.banker_id == "c" and second.banker_won is False
    assert third.banker_id == "c" and third.banker_won is None
    money = {s.user_id: s.money for s in result.standings}
    assert money == {"a": 3, "b": 0, "c": -3}
    assert sum(money.values()) == 0


def test_banker_zero_sum_across_rotation(holes, make_player) -> None:
    players = [
        make_player(f"p{i}", [3 + ((i * 7 + n) % 4) for n in range(18)]) for i in range(5)
    ]

    result = calculate_banker(players, holes, [], 2)

    assert sum(s.money for s in result.standings) == 0


def test_bingo_bango_bongo_money_relative_to_fair_share(make_player) -> None:
    players = [make_player(uid) for uid in ("a", "b", "c")]
    points = [
        BingoBangoBongoPoint(
            hole_number=n, bingo_user_id="a", bango_user_id="a", bongo_user_id="b"
        )
        for n in range(1, 19)
    ]
    points.append(BingoBangoBongoPoint(hole_number=1, bingo_user_id="stranger"))

    result = calculate_bingo_bango_bongo(players, points, 1)

    by_id = {s.user_id: s for s in result.standings}
    assert by_id["a"].total == 36
    assert by_id["a"].bingo == 18
    assert by_id["a"].money == Decimal(18)
    assert by_id["b"].money == 0
    assert by_id["c"].money == Decimal(-18)
    assert math.isclose(float(sum(s.money for s in result.standings)), 0.0, abs_tol=1e-10)


def test_banker_hole_missing_a_score_has_no_result(holes, make_player) -> None:
    players = [make_player("a", {1: 3, 2: 4}), make_player("b", {1: 4})]

    result = calculate_banker(players, holes, [], 1)

    assert len(result.holes) == 18
    skipped = result.holes[1]
    assert skipped.banker_id == "b"
    assert skipped.banker_score is None
    assert skipped.best_other_score is None
    assert skipped.banker_won is None
    assert {s.user_id: s.money for s in result.standings} == {"a": 1, "b": -1}
