"""
Event vocabulary and the append-only event log.

The log is the single source of truth for a match: ``replay`` rebuilds
every view from it, and sinks subscribed to it receive each event in
order (for persistence or transmission).
"""

from __future__ import annotations
from typing import Callable, Iterator, List, Optional, Tuple, Union, Iterable
from dataclasses import dataclass
from enum import Enum
import logging

from headsup.core.actions import (
    BetAction, DealerAction, PotsShared,
    Fold, Check, Call, Raise, AllIn,
    NextBettingRound, ShowdownSharePots, FoldSharePots,
)


logger = logging.getLogger(__name__)


class EventKind(Enum):
    """The five kinds of events a log can hold."""
    GAME_CREATE = "GAME_CREATE"
    NEW_DEAL = "NEW_DEAL"
    BET_ACTION = "BET_ACTION"
    DEALER_ACTION = "DEALER_ACTION"
    POTS_SHARED = "POTS_SHARED"


@dataclass(frozen=True)
class GameCreate:
    """A match was created with ``blind`` and starting ``stacks`` per seat."""
    blind: int
    stacks: Tuple[int, int]


@dataclass(frozen=True)
class NewDeal:
    """A hand was dealt; ``acting_seat`` holds the button and acts first."""
    acting_seat: int


Event = Union[GameCreate, NewDeal, BetAction, DealerAction, PotsShared]
EventSink = Callable[[Event], None]

BET_ACTION_TYPES = (Fold, Check, Call, Raise, AllIn)
DEALER_ACTION_TYPES = (NextBettingRound, ShowdownSharePots, FoldSharePots)


def event_kind(event: Event) -> EventKind:
    """Classify an event."""
    if isinstance(event, GameCreate):
        return EventKind.GAME_CREATE
    if isinstance(event, NewDeal):
        return EventKind.NEW_DEAL
    if isinstance(event, BET_ACTION_TYPES):
        return EventKind.BET_ACTION
    if isinstance(event, DEALER_ACTION_TYPES):
        return EventKind.DEALER_ACTION
    if isinstance(event, PotsShared):
        return EventKind.POTS_SHARED
    raise TypeError(f"Not an event: {event!r}")


class EventLog:
    """
    Append-only, ordered record of accepted events.

    Usage:
        log = EventLog()
        log.subscribe(print)
        log.append(GameCreate(blind=10, stacks=(1000, 1000)))
    """

    def __init__(self, sinks: Optional[Iterable[EventSink]] = None):
        self._events: List[Event] = []
        self._sinks: List[EventSink] = list(sinks or [])

    def subscribe(self, sink: EventSink) -> None:
        """Register a sink; it only sees events appended from now on."""
        self._sinks.append(sink)

    def append(self, event: Event) -> None:
        event_kind(event)  # rejects anything that is not an event
        self._events.append(event)
        logger.debug(f"Event #{len(self._events)}: {event!r}")
        for sink in self._sinks:
            sink(event)

    @property
    def events(self) -> Tuple[Event, ...]:
        return tuple(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(tuple(self._events))

    def __len__(self) -> int:
        return len(self._events)

    def __getitem__(self, index):
        return self._events[index]

    def __repr__(self) -> str:
        return f"EventLog({len(self._events)} events)"
