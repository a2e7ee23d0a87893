"""
Timed match: turn clock and event recording around a ``Match``.

``TimedMatch`` is the surface a server drives. After every accepted
transition it appends the event(s) to the log, records a live snapshot,
and restarts the clock for whoever must act next (a seat or the dealer).
It never enforces timeouts itself: an external scheduler reads ``turn``
and submits an ordinary ``Fold`` for a seat that ran out of time.
"""

from __future__ import annotations
from typing import Callable, List, Optional, Sequence
from dataclasses import dataclass, replace
import logging
import time

from headsup.core.actions import (
    BetAction, DealerAction, NextBettingRound,
)
from headsup.core.match import Match, ActionResult
from headsup.core.rules import DEFAULT_BLIND, DEFAULT_TURN_TIMEOUT
from headsup.history.events import EventLog, Event, GameCreate, NewDeal
from headsup.history.replay import Snapshot


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Turn:
    """Who must act, and since when."""
    seat: Optional[int]
    dealer: bool
    since: float


class TimedMatch:
    """
    A ``Match`` with a turn clock and an event log.

    Usage:
        timed = TimedMatch(blind=10)
        timed.deal()
        timed.try_player_action(timed.turn.seat, Call(10))

        # scheduler
        if timed.expired() and timed.turn.seat is not None:
            timed.try_player_action(timed.turn.seat, Fold())
    """

    def __init__(
        self,
        blind: int = DEFAULT_BLIND,
        stacks: Optional[Sequence[int]] = None,
        log: Optional[EventLog] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Create the match and record its GameCreate event.

        Args:
            blind: Small blind amount
            stacks: Starting stacks per seat
            log: Event log to append to (a fresh one by default)
            clock: Time source for turn timestamps
        """
        self.match = Match(blind=blind, stacks=stacks)
        self.log = log if log is not None else EventLog()
        self.snapshots: List[Snapshot] = []
        self._clock = clock

        self.timed_seat: Optional[int] = None
        self.timed_dealer = False
        self.timestamp = self._clock()

        self._record(GameCreate(blind=blind, stacks=tuple(self.match.stacks)), self._view())

    @property
    def turn(self) -> Turn:
        return Turn(seat=self.timed_seat, dealer=self.timed_dealer, since=self.timestamp)

    def expired(self, timeout: float = DEFAULT_TURN_TIMEOUT, now: Optional[float] = None) -> bool:
        """
        Check whether the current turn has lasted longer than ``timeout``.

        Only meaningful while a seat or the dealer is on the clock.
        """
        if self.timed_seat is None and not self.timed_dealer:
            return False
        if now is None:
            now = self._clock()
        return now - self.timestamp > timeout

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def deal(self) -> bool:
        if not self.match.deal():
            return False
        self._start_next_turn()
        self._record(NewDeal(acting_seat=self.match.acting_seat), self._view())
        return True

    def try_player_action(self, seat: int, action: BetAction) -> ActionResult:
        result = self.match.try_player_action(seat, action)
        if not result:
            return result

        self._record(action, self._view())
        self._start_next_turn()
        return result

    def try_dealer_action(self, action: DealerAction) -> ActionResult:
        swept = self._swept_view()
        result = self.match.try_dealer_action(action)
        if not result:
            return result

        if isinstance(action, NextBettingRound):
            self._record(action, self._view())
        else:
            self._record(action, swept)

        pots_shared = self.match.pots_shared
        if pots_shared is not None:
            self.match.collect_round()
            self._record(pots_shared, self._view())
            self._stop_clock()
        else:
            self._start_next_turn()
        return result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _start_next_turn(self) -> None:
        """Put the dealer on the clock if a dealer action is due, else the acting seat."""
        if self.match.dealer_action is not None:
            self._start_dealer_turn()
        else:
            self._start_acting_turn()

    def _start_acting_turn(self) -> None:
        self.timed_dealer = False
        self.timed_seat = self.match.acting_seat
        self.timestamp = self._clock()

    def _start_dealer_turn(self) -> None:
        self.timed_dealer = True
        self.timed_seat = None
        self.timestamp = self._clock()

    def _stop_clock(self) -> None:
        self.timed_dealer = False
        self.timed_seat = None
        self.timestamp = self._clock()

    def _record(self, event: Event, snapshot: Snapshot) -> None:
        self.log.append(event)
        self.snapshots.append(replace(snapshot, event=event))

    def _view(self) -> Snapshot:
        """Snapshot of the live match state."""
        match = self.match
        round_ = match.running_round
        if round_ is None:
            return Snapshot(
                hand_no=match.hand_no,
                blind=match.blind,
                stacks=tuple(match.stacks),
            )
        return Snapshot(
            hand_no=match.hand_no,
            blind=match.blind,
            stacks=match.round_stacks,
            bets=match.bets,
            pot=round_.pot,
            button=match.button,
            round_type=round_.round_type,
            acting_seat=match.acting_seat,
        )

    def _swept_view(self) -> Optional[Snapshot]:
        """Live view with the running bets swept into the pot."""
        if self.match.running_round is None:
            return None
        view = self._view()
        return replace(view, bets=(0, 0), pot=view.pot + view.running_pot)
