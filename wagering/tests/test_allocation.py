from decimal import Decimal

from wagering.games import calculate_skins
from wagering.games.vegas import VegasResult, VegasTeamStanding
from wagering.models import DotsAchievement, Round
from wagering.settlements import allocate_from_standings, dots_flows
from wagering.settlements.allocation import settle_skins, settle_vegas


def _as_set(flows):
    return {(f.from_user_id, f.to_user_id, f.amount) for f in flows}


def test_losers_pay_winners_in_proportion_to_winnings() -> None:
    flows = allocate_from_standings(
        {"a": Decimal(30), "b": Decimal(10), "c": Decimal(-24), "d": Decimal(-16)}
    )

    assert _as_set(flows) == {
        ("c", "a", Decimal("18.00")),
        ("c", "b", Decimal("6.00")),
        ("d", "a", Decimal("12.00")),
        ("d", "b", Decimal("4.00")),
    }


def test_no_winnings_means_no_flows() -> None:
    assert allocate_from_standings({"a": Decimal(0), "b": Decimal(0)}) == []


def test_skins_nets_against_equal_share_of_pot(holes, make_player) -> None:
    players = [
        make_player("a", {1: 3, 2: 3}),
        make_player("b", {1: 4, 2: 4}),
        make_player("c", {1: 4, 2: 4}),
    ]
    result = calculate_skins(players, holes, 3)

    settlement = settle_skins(result, ["a", "b", "c"])

    assert settlement.net_by_player == {
        "a": Decimal("4.00"),
        "b": Decimal("-2.00"),
        "c": Decimal("-2.00"),
    }
    assert _as_set(settlement.flows) == {
        ("b", "a", Decimal("2.00")),
        ("c", "a", Decimal("2.00")),
    }


def test_vegas_losers_each_pay_each_winner_a_quarter() -> None:
    result = VegasResult(
        bet_amount=Decimal(1),
        teams=[
            VegasTeamStanding(team_number=1, player_ids=["a", "b"], total=-10, money=Decimal(-10)),
            VegasTeamStanding(team_number=2, player_ids=["c", "d"], total=10, money=Decimal(10)),
        ],
    )

    settlement = settle_vegas(result)

    assert len(settlement.flows) == 4
    assert {f.amount for f in settlement.flows} == {Decimal("2.50")}
    assert {f.from_user_id for f in settlement.flows} == {"a", "b"}
    assert settlement.net_by_player == {
        "a": Decimal("-5.00"),
        "b": Decimal("-5.00"),
        "c": Decimal("5.00"),
        "d": Decimal("5.00"),
    }


def test_tied_vegas_records_zero_for_everyone() -> None:
    result = VegasResult(
        bet_amount=Decimal(1),
        teams=[
            VegasTeamStanding(team_number=1, player_ids=["a", "b"]),
            VegasTeamStanding(team_number=2, player_ids=["c", "d"]),
        ],
    )

    settlement = settle_vegas(result)

    assert settlement.flows == []
    assert set(settlement.net_by_player.values()) == {0}


def test_dots_paid_relative_to_round_average(make_player) -> None:
    round_ = Round(
        id="r",
        players=[make_player(uid) for uid in ("a", "b", "c")],
        dots_enabled=True,
        dots_amount=Decimal(2),
        dots_achievements=[
            DotsAchievement(user_id="a", hole_number=3, type="BIRDIE"),
            DotsAchievement(user_id="a", hole_number=7, type="SANDY"),
            DotsAchievement(user_id="b", hole_number=9, type="GREENIE"),
        ],
    )

    flows = dots_flows(round_)

    assert _as_set(flows) == {("c", "a", Decimal("2.00"))}


def test_dots_disabled_settles_nothing(make_player) -> None:
    round_ = Round(
        id="r",
        players=[make_player("a"), make_player("b")],
        dots_enabled=False,
        dots_amount=Decimal(2),
        dots_achievements=[DotsAchievement(user_id="a", hole_number=1, type="BIRDIE")],
    )

    assert dots_flows(round_) == []
