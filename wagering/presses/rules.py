"""Opening, cancelling and monitoring presses on Nassau and Match Play games."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ErrorCode, PressValidationError
from ..games.match import evaluate_match
from ..handicap import NetScorer
from ..models import Game, GameType, Press, PressSegment, PressStatus, Round, RoundStatus
from .engine import PressTree

logger = logging.getLogger(__name__)

SEGMENTS_BY_GAME: Dict[GameType, tuple[PressSegment, ...]] = {
    GameType.NASSAU: (PressSegment.FRONT, PressSegment.BACK, PressSegment.OVERALL),
    GameType.MATCH_PLAY: (PressSegment.MATCH,),
}
PRESS_THRESHOLD = 2


class PressRequest(BaseModel):
    segment: PressSegment
    start_hole: int = Field(serialization_alias="startHole")
    initiated_by_id: str = Field(serialization_alias="initiatedById")
    parent_press_id: Optional[str] = Field(default=None, serialization_alias="parentPressId")
    bet_multiplier: Decimal = Field(default=Decimal("1"), serialization_alias="betMultiplier")

    model_config = ConfigDict(populate_by_name=True)


def _start_hole_error(segment: PressSegment, start_hole: int) -> Optional[str]:
    if segment is PressSegment.FRONT and not 1 <= start_hole <= 9:
        return "Front 9 press must start on holes 1-9"
    if segment is PressSegment.BACK and not 10 <= start_hole <= 18:
        return "Back 9 press must start on holes 10-18"
    if not 1 <= start_hole <= 18:
        return "Press must start on a valid hole (1-18)"
    return None


def validate_press_request(
    game: Game,
    request: PressRequest,
    *,
    participant_ids: Optional[Sequence[str]] = None,
) -> None:
    """Raise :class:`PressValidationError` when ``request`` cannot be opened on ``game``."""

    allowed = SEGMENTS_BY_GAME.get(game.type)
    if allowed is None:
        raise PressValidationError(
            "Press is only available for Nassau and Match Play games"
        )
    if request.segment not in allowed:
        raise PressValidationError(
            f"Invalid segment for {game.type.value}. Must be one of: "
            + ", ".join(s.value for s in allowed)
        )
    message = _start_hole_error(request.segment, request.start_hole)
    if message:
        raise PressValidationError(message)
    if request.bet_multiplier <= 0:
        raise PressValidationError("Press bet multiplier must be positive")
    if participant_ids is not None and request.initiated_by_id not in participant_ids:
        raise PressValidationError(
            "Only a player in this game can press", ErrorCode.FORBIDDEN
        )

    tree = PressTree(game.presses)
    if request.parent_press_id is not None:
        parent = tree.get(request.parent_press_id)
        if parent is None:
            raise PressValidationError(
                f"Parent press {request.parent_press_id} not found", ErrorCode.NOT_FOUND
            )
        if parent.status is not PressStatus.ACTIVE:
            raise PressValidationError("Can only press an active press")
        if tree.root_segment(parent.id) is not request.segment:
            raise PressValidationError("A press-the-press must stay in its parent's segment")

    for press in game.presses:
        if (
            press.status is PressStatus.ACTIVE
            and press.segment is request.segment
            and press.start_hole == request.start_hole
            and press.parent_press_id == request.parent_press_id
        ):
            raise PressValidationError(
                "An active press already exists for this segment starting at this hole"
            )


def open_press(
    game: Game,
    request: PressRequest,
    *,
    participant_ids: Optional[Sequence[str]] = None,
    round_status: RoundStatus = RoundStatus.ACTIVE,
) -> tuple[Game, Press]:
    """Return a copy of ``game`` with the new press appended, plus the press."""

    if round_status is RoundStatus.COMPLETED:
        raise PressValidationError("Cannot press on a completed round")
    validate_press_request(game, request, participant_ids=participant_ids)
    press = Press(
        segment=request.segment,
        start_hole=request.start_hole,
        initiated_by_id=request.initiated_by_id,
        parent_press_id=request.parent_press_id,
        bet_multiplier=request.bet_multiplier,
    )
    logger.info(
        "press %s opened on game %s (%s from hole %s) by %s",
        press.id,
        game.id,
        press.segment.value,
        press.start_hole,
        press.initiated_by_id,
    )
    return game.model_copy(update={"presses": [*game.presses, press]}), press


def cancel_press(
    game: Game,
    press_id: str,
    *,
    user_id: Optional[str] = None,
    round_created_by_id: Optional[str] = None,
) -> Game:
    """Cancel an ACTIVE press; only its initiator or the round creator may do so."""

    target = next((p for p in game.presses if p.id == press_id), None)
    if target is None:
        raise PressValidationError("Press not found", ErrorCode.NOT_FOUND)
    if user_id is not None and user_id not in (target.initiated_by_id, round_created_by_id):
        raise PressValidationError(
            "Only the press initiator or round creator can cancel", ErrorCode.FORBIDDEN
        )
    if target.status is not PressStatus.ACTIVE:
        raise PressValidationError("Can only cancel active presses")

    canceled = target.model_copy(update={"status": PressStatus.CANCELED})
    presses = [canceled if p.id == press_id else p for p in game.presses]
    logger.info("press %s canceled on game %s", press_id, game.id)
    return game.model_copy(update={"presses": presses})


class ActivePressStatus(BaseModel):
    id: str
    start_hole: int = Field(serialization_alias="startHole")
    current_score: int = Field(serialization_alias="currentScore")
    holes_played: int = Field(serialization_alias="holesPlayed")
    holes_remaining: int = Field(serialization_alias="holesRemaining")
    can_press_the_press: bool = Field(serialization_alias="canPressThePress")

    model_config = ConfigDict(populate_by_name=True)


class SegmentPressStatus(BaseModel):
    segment: PressSegment
    current_score: int = Field(serialization_alias="currentScore")
    holes_played: int = Field(serialization_alias="holesPlayed")
    holes_remaining: int = Field(serialization_alias="holesRemaining")
    can_press: bool = Field(serialization_alias="canPress")
    suggest_auto_press: bool = Field(serialization_alias="suggestAutoPress")
    auto_press_hole: Optional[int] = Field(default=None, serialization_alias="autoPressHole")
    active_presses: List[ActivePressStatus] = Field(
        default_factory=list, serialization_alias="activePresses"
    )

    model_config = ConfigDict(populate_by_name=True)


class GamePressStatus(BaseModel):
    game_id: str = Field(serialization_alias="gameId")
    game_type: GameType = Field(serialization_alias="gameType")
    is_auto_press: bool = Field(serialization_alias="isAutoPress")
    segments: List[SegmentPressStatus] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


def _can_press(score: int, holes_remaining: int) -> bool:
    return abs(score) >= PRESS_THRESHOLD and holes_remaining > 0


def press_status(round_: Round) -> List[GamePressStatus]:
    """Live press view for every two-player Nassau and Match Play game in ``round_``."""

    statuses: List[GamePressStatus] = []
    for game in round_.games:
        segments = SEGMENTS_BY_GAME.get(game.type)
        if segments is None:
            continue
        players = round_.participants(game)
        if len(players) != 2:
            continue

        p1, p2 = players
        scorer = NetScorer(players, round_.holes)
        tree = PressTree(game.presses)
        active = [p for p in game.presses if p.status is PressStatus.ACTIVE]

        game_status = GamePressStatus(
            game_id=game.id, game_type=game.type, is_auto_press=game.is_auto_press
        )
        for segment in segments:
            match = evaluate_match(
                scorer, p1.user_id, p2.user_id, segment.first_hole, segment.last_hole
            )
            last_played = match.last_hole_played or segment.first_hole - 1
            in_segment = [p for p in active if tree.root_segment(p.id) is segment]
            recent = any(p.start_hole >= last_played for p in in_segment)
            can_press = _can_press(match.up, match.holes_remaining) and not recent

            press_rows: List[ActivePressStatus] = []
            for press in in_segment:
                running = evaluate_match(
                    scorer, p1.user_id, p2.user_id, press.start_hole, segment.last_hole
                )
                has_child = any(
                    c.status is PressStatus.ACTIVE for c in tree.children_of(press.id)
                )
                press_rows.append(
                    ActivePressStatus(
                        id=press.id,
                        start_hole=press.start_hole,
                        current_score=running.up,
                        holes_played=running.holes_played,
                        holes_remaining=running.holes_remaining,
                        can_press_the_press=_can_press(running.up, running.holes_remaining)
                        and not has_child,
                    )
                )

            game_status.segments.append(
                SegmentPressStatus(
                    segment=segment,
                    current_score=match.up,
                    holes_played=match.holes_played,
                    holes_remaining=match.holes_remaining,
                    can_press=can_press,
                    suggest_auto_press=game.is_auto_press and can_press,
                    auto_press_hole=last_played + 1 if can_press else None,
                    active_presses=press_rows,
                )
            )
        statuses.append(game_status)
    return statuses


__all__ = [
    "ActivePressStatus",
    "GamePressStatus",
    "PressRequest",
    "SegmentPressStatus",
    "cancel_press",
    "open_press",
    "press_status",
    "validate_press_request",
]
