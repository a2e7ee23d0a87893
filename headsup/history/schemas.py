"""
Pydantic schemas for persisting and transmitting the event log.

Every event becomes one ``EventRecord`` tagged with its type; the fields
that type does not use stay unset. Decoding restores the exact event
objects, so ``load_history(dump_history(events)) == list(events)``.
"""

from typing import List, Optional, Iterable
from pydantic import BaseModel, Field

from headsup.core.actions import (
    Fold, Check, Call, Raise, AllIn,
    NextBettingRound, ShowdownSharePots, FoldSharePots,
    PotsShared, BetActionType, DealerActionType,
)
from headsup.history.events import Event, EventKind, GameCreate, NewDeal, event_kind


HISTORY_VERSION = 1


# ============= Record Schemas =============

class EventRecord(BaseModel):
    """One event of the log."""
    kind: EventKind
    type: Optional[str] = Field(default=None, description="Bet or dealer action type")

    # GameCreate
    blind: Optional[int] = Field(default=None, gt=0)
    stacks: Optional[List[int]] = Field(default=None, min_length=2, max_length=2)

    # NewDeal
    acting_seat: Optional[int] = Field(default=None, ge=0, le=1)

    # Call / Raise
    match: Optional[int] = Field(default=None, ge=0)
    raise_amount: Optional[int] = Field(default=None, ge=0)

    # ShowdownSharePots
    winner: Optional[int] = Field(default=None, ge=0, le=1)
    tie: Optional[bool] = None

    # PotsShared
    shares: Optional[List[int]] = Field(default=None, min_length=2, max_length=2)
    returned: Optional[List[int]] = Field(default=None, min_length=2, max_length=2)


class HistoryRecord(BaseModel):
    """A complete, ordered event log."""
    version: int = HISTORY_VERSION
    events: List[EventRecord] = []


# ============= Encoding =============

def encode_event(event: Event) -> EventRecord:
    kind = event_kind(event)

    if kind is EventKind.GAME_CREATE:
        return EventRecord(kind=kind, blind=event.blind, stacks=list(event.stacks))
    if kind is EventKind.NEW_DEAL:
        return EventRecord(kind=kind, acting_seat=event.acting_seat)
    if kind is EventKind.POTS_SHARED:
        return EventRecord(
            kind=kind,
            shares=list(event.shares),
            returned=list(event.returned),
            tie=event.tie,
        )

    record = EventRecord(kind=kind, type=event.kind.value)
    if isinstance(event, Call):
        record.match = event.match
    elif isinstance(event, Raise):
        record.match = event.match
        record.raise_amount = event.raise_amount
    elif isinstance(event, ShowdownSharePots):
        record.winner = event.winner
        record.tie = event.tie
    return record


def _require(record: EventRecord, *names: str) -> None:
    missing = [name for name in names if getattr(record, name) is None]
    if missing:
        raise ValueError(f"{record.kind.value} {record.type or ''} record is missing {missing}")


def decode_event(record: EventRecord) -> Event:
    """
    Rebuild an event from its record.

    Raises:
        ValueError: If the record lacks a field its type needs
    """
    kind = record.kind

    if kind is EventKind.GAME_CREATE:
        _require(record, "blind", "stacks")
        return GameCreate(blind=record.blind, stacks=tuple(record.stacks))
    if kind is EventKind.NEW_DEAL:
        _require(record, "acting_seat")
        return NewDeal(acting_seat=record.acting_seat)
    if kind is EventKind.POTS_SHARED:
        _require(record, "shares", "returned")
        return PotsShared(
            shares=tuple(record.shares),
            returned=tuple(record.returned),
            tie=bool(record.tie),
        )

    _require(record, "type")
    if kind is EventKind.BET_ACTION:
        action_type = BetActionType(record.type)
        if action_type is BetActionType.FOLD:
            return Fold()
        if action_type is BetActionType.CHECK:
            return Check()
        if action_type is BetActionType.ALL_IN:
            return AllIn()
        if action_type is BetActionType.CALL:
            _require(record, "match")
            return Call(record.match)
        _require(record, "match", "raise_amount")
        return Raise(record.match, record.raise_amount)

    action_type = DealerActionType(record.type)
    if action_type is DealerActionType.NEXT_BETTING_ROUND:
        return NextBettingRound()
    if action_type is DealerActionType.FOLD_SHARE_POTS:
        return FoldSharePots()
    return ShowdownSharePots(winner=record.winner, tie=bool(record.tie))


def dump_history(events: Iterable[Event]) -> str:
    """Encode an event log as JSON."""
    history = HistoryRecord(events=[encode_event(event) for event in events])
    return history.model_dump_json(exclude_none=True)


def load_history(text: str) -> List[Event]:
    """Decode a JSON event log produced by ``dump_history``."""
    history = HistoryRecord.model_validate_json(text)
    return [decode_event(record) for record in history.events]
