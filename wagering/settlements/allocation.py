"""Fold calculator results into pairwise settlement flows and per-player nets."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Mapping, Sequence

from ..games import SegmentResult, SkinsResult, VegasResult
from ..games.registry import GameResultModel
from ..models import GameType, Player, Round, SettlementFlow
from ..money import ZERO, round_cents, to_money


@dataclass(slots=True)
class GameSettlement:
    """Flows owed for one game plus each participant's net for the career record."""

    flows: List[SettlementFlow] = field(default_factory=list)
    net_by_player: Dict[str, Decimal] = field(default_factory=dict)


def allocate_from_standings(money_by_player: Mapping[str, Decimal]) -> List[SettlementFlow]:
    """Each loser pays each winner in proportion to that winner's share of the winnings."""

    winners = [(uid, m) for uid, m in money_by_player.items() if m > 0]
    losers = [(uid, m) for uid, m in money_by_player.items() if m < 0]
    total_winnings = sum((m for _, m in winners), ZERO)
    if total_winnings <= 0:
        return []

    flows: List[SettlementFlow] = []
    for loser_id, loss in losers:
        for winner_id, winnings in winners:
            amount = round_cents(abs(loss) * winnings / total_winnings)
            if amount > 0:
                flows.append(
                    SettlementFlow(from_user_id=loser_id, to_user_id=winner_id, amount=amount)
                )
    return flows


def settle_standings(money_by_player: Mapping[str, Decimal]) -> GameSettlement:
    return GameSettlement(
        flows=allocate_from_standings(money_by_player),
        net_by_player={uid: round_cents(m) for uid, m in money_by_player.items()},
    )


def settle_head_to_head(
    segments: Iterable[SegmentResult], bet: Decimal, player_ids: Sequence[str] = ()
) -> GameSettlement:
    """Every decided segment moves ``bet`` from its loser to its winner."""

    settlement = GameSettlement(net_by_player={uid: ZERO for uid in player_ids})
    for segment in segments:
        if segment.winner_id is None or segment.loser_id is None or segment.margin <= 0:
            continue
        settlement.flows.append(
            SettlementFlow(
                from_user_id=segment.loser_id, to_user_id=segment.winner_id, amount=bet
            )
        )
        net = settlement.net_by_player
        net[segment.winner_id] = net.get(segment.winner_id, ZERO) + bet
        net[segment.loser_id] = net.get(segment.loser_id, ZERO) - bet
    return settlement


def settle_skins(result: SkinsResult, player_ids: Sequence[str]) -> GameSettlement:
    if not player_ids:
        return GameSettlement()
    won = result.winnings_by_player()
    share = result.total_pot / len(player_ids)
    net = {uid: won.get(uid, ZERO) - share for uid in player_ids}
    return settle_standings(net)


def settle_vegas(result: VegasResult) -> GameSettlement:
    """Each member of the losing team pays each winner a quarter of the team total."""

    team1, team2 = result.team(1), result.team(2)
    if team1 is None or team2 is None:
        return GameSettlement()
    if team1.money == 0:
        return GameSettlement(
            net_by_player={uid: ZERO for uid in [*team1.player_ids, *team2.player_ids]}
        )

    losing, winning = (team1, team2) if team1.money < 0 else (team2, team1)
    total = abs(team1.money)
    per_pair = round_cents(total / 4)
    per_player = round_cents(total / 2)

    settlement = GameSettlement()
    for loser_id in losing.player_ids:
        for winner_id in winning.player_ids:
            if per_pair > 0:
                settlement.flows.append(
                    SettlementFlow(from_user_id=loser_id, to_user_id=winner_id, amount=per_pair)
                )
    for uid in losing.player_ids:
        settlement.net_by_player[uid] = -per_player
    for uid in winning.player_ids:
        settlement.net_by_player[uid] = per_player
    return settlement


def dots_money(round_: Round) -> Dict[str, Decimal]:
    """Per-player dots money relative to the round's average dot count."""

    if not round_.dots_enabled or not round_.dots_amount or not round_.dots_achievements:
        return {}
    if not round_.players:
        return {}
    counts: Dict[str, int] = {p.user_id: 0 for p in round_.players}
    for dot in round_.dots_achievements:
        counts[dot.user_id] = counts.get(dot.user_id, 0) + 1
    average = Decimal(len(round_.dots_achievements)) / len(round_.players)
    per_dot = to_money(round_.dots_amount)
    return {uid: (counts[uid] - average) * per_dot for uid in (p.user_id for p in round_.players)}


def dots_flows(round_: Round) -> List[SettlementFlow]:
    return allocate_from_standings(dots_money(round_))


def _standing_money(result) -> Dict[str, Decimal]:
    return {s.user_id: s.money for s in result.standings}


Folder = Callable[[GameResultModel, Sequence[Player]], GameSettlement]

_FOLDERS: Dict[GameType, Folder] = {
    GameType.NASSAU: lambda r, players: settle_head_to_head(
        (segment for _, segment in r.segments()),
        r.bet_amount,
        [p.user_id for p in players],
    ),
    GameType.MATCH_PLAY: lambda r, players: settle_head_to_head(
        [r.overall], r.bet_amount, [p.user_id for p in players]
    ),
    GameType.SKINS: lambda r, players: settle_skins(r, [p.user_id for p in players]),
    GameType.VEGAS: lambda r, players: settle_vegas(r),
    GameType.WOLF: lambda r, players: settle_standings(_standing_money(r)),
    GameType.NINES: lambda r, players: settle_standings(
        {s.user_id: s.total_money for s in r.standings}
    ),
    GameType.STABLEFORD: lambda r, players: settle_standings(_standing_money(r)),
    GameType.SNAKE: lambda r, players: settle_standings(_standing_money(r)),
    GameType.BANKER: lambda r, players: settle_standings(_standing_money(r)),
    GameType.BINGO_BANGO_BONGO: lambda r, players: settle_standings(_standing_money(r)),
}

_missing = set(GameType) - set(_FOLDERS)
if _missing:
    raise RuntimeError(
        "no settlement rule registered for game type(s): "
        + ", ".join(sorted(t.value for t in _missing))
    )


def settle_game(result: GameResultModel, players: Sequence[Player]) -> GameSettlement:
    """Turn ``result`` into flows; games that did not apply settle nothing."""

    if not result.applicable:
        return GameSettlement()
    return _FOLDERS[result.game_type](result, players)


__all__ = [
    "GameSettlement",
    "allocate_from_standings",
    "dots_flows",
    "dots_money",
    "settle_game",
    "settle_head_to_head",
    "settle_skins",
    "settle_standings",
    "settle_vegas",
]
