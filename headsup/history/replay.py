"""
Replay: rebuild per-event views of a match from its event log alone.

``replay`` is a strict left fold of ``apply_event`` over the log. It
keeps no state between calls, so replaying the same log twice (or a
prefix of it) always yields the same snapshots.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Tuple
from dataclasses import dataclass, replace

from headsup.core.actions import (
    Fold, AllIn, NextBettingRound, PotsShared,
)
from headsup.core.rules import RoundType, other, big_blind_for
from headsup.history.events import Event, EventKind, GameCreate, NewDeal, event_kind


@dataclass(frozen=True)
class Snapshot:
    """
    View of a match right after one event.

    Attributes:
        hand_no: Hands dealt so far
        blind: Small blind of the match
        stacks: Unwagered chips per seat
        bets: Chips bet per seat in the running betting round
        pot: Chips swept from completed betting rounds
        button: Button seat of the running hand (None between hands)
        round_type: Running betting round (None between hands)
        acting_seat: Seat holding the turn (None between hands)
        event: The event this snapshot follows
    """
    hand_no: int
    blind: int
    stacks: Tuple[int, int]
    bets: Tuple[int, int] = (0, 0)
    pot: int = 0
    button: Optional[int] = None
    round_type: Optional[RoundType] = None
    acting_seat: Optional[int] = None
    event: Optional[Event] = None

    @property
    def running_pot(self) -> int:
        """
        Chips bet in the current betting round.

        This is the sum of the bet-type events since the last round
        boundary (plus the blinds before the flop): ``bets`` is zeroed by
        every dealer action and only bet events add to it.
        """
        return sum(self.bets)

    @property
    def total_chips(self) -> int:
        return sum(self.stacks) + sum(self.bets) + self.pot

    @property
    def hand_running(self) -> bool:
        return self.button is not None


def apply_event(previous: Optional[Snapshot], event: Event) -> Snapshot:
    """
    Compute the snapshot that follows ``previous`` after ``event``.

    Args:
        previous: Snapshot before the event (None only for GameCreate)
        event: Next event of the log

    Returns:
        The new snapshot

    Raises:
        ValueError: If the event cannot follow ``previous``
    """
    kind = event_kind(event)

    if kind is EventKind.GAME_CREATE:
        if previous is not None:
            raise ValueError("GameCreate must be the first event")
        return Snapshot(
            hand_no=0,
            blind=event.blind,
            stacks=tuple(event.stacks),
            event=event,
        )

    if previous is None:
        raise ValueError(f"Log must start with GameCreate, got {event!r}")

    if kind is EventKind.NEW_DEAL:
        return _deal(previous, event)
    if kind is EventKind.BET_ACTION:
        return _bet(previous, event)
    if kind is EventKind.DEALER_ACTION:
        return _dealer(previous, event)
    return _share(previous, event)


def replay(events: Iterable[Event]) -> List[Snapshot]:
    """Replay a whole log; one snapshot per event."""
    snapshots: List[Snapshot] = []
    last: Optional[Snapshot] = None
    for event in events:
        last = apply_event(last, event)
        snapshots.append(last)
    return snapshots


def _deal(previous: Snapshot, event: NewDeal) -> Snapshot:
    if previous.hand_running:
        raise ValueError("NewDeal while a hand is running")

    button = event.acting_seat
    big_blind_seat = other(button)
    stacks = list(previous.stacks)
    bets = [0, 0]

    for seat, blind in ((button, previous.blind), (big_blind_seat, big_blind_for(previous.blind))):
        posted = min(blind, stacks[seat])
        stacks[seat] -= posted
        bets[seat] += posted

    return replace(
        previous,
        hand_no=previous.hand_no + 1,
        stacks=tuple(stacks),
        bets=tuple(bets),
        pot=0,
        button=button,
        round_type=RoundType.PREFLOP,
        acting_seat=button,
        event=event,
    )


def _bet(previous: Snapshot, event) -> Snapshot:
    seat = previous.acting_seat
    if seat is None:
        raise ValueError(f"Bet action {event!r} with no hand running")

    stacks = list(previous.stacks)
    bets = list(previous.bets)
    amount = stacks[seat] if isinstance(event, AllIn) else event.total
    stacks[seat] -= amount
    bets[seat] += amount

    # Fold ends the hand and an all-in answers the wager; neither passes the turn
    acting_seat = seat if isinstance(event, (Fold, AllIn)) else other(seat)

    return replace(
        previous,
        stacks=tuple(stacks),
        bets=tuple(bets),
        acting_seat=acting_seat,
        event=event,
    )


def _dealer(previous: Snapshot, event) -> Snapshot:
    if not previous.hand_running:
        raise ValueError(f"Dealer action {event!r} with no hand running")

    swept = replace(
        previous,
        bets=(0, 0),
        pot=previous.pot + previous.running_pot,
        event=event,
    )
    if isinstance(event, NextBettingRound):
        return replace(
            swept,
            round_type=previous.round_type.next(),
            acting_seat=other(previous.button),
        )
    return swept


def _share(previous: Snapshot, event: PotsShared) -> Snapshot:
    stacks = tuple(previous.stacks[seat] + event.payout(seat) for seat in (0, 1))
    return replace(
        previous,
        stacks=stacks,
        bets=(0, 0),
        pot=0,
        button=None,
        round_type=None,
        acting_seat=None,
        event=event,
    )
