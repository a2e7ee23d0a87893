"""
Heads-up Match - sequences hands between two persistent stacks.

The match speaks in seats (indexes into ``Match.stacks``). The running
``BettingRound`` speaks in positions (0 = button, 1 = big blind); the
match translates between the two through the button.
"""

from __future__ import annotations
from typing import List, Optional, Tuple, Dict, Any, Sequence
from dataclasses import dataclass
import logging

from headsup.core.actions import (
    BetAction, Raise, DealerAction, DealerActionType,
    NextBettingRound, ShowdownSharePots, FoldSharePots,
    PotsShared, is_legal,
)
from headsup.core.betting_round import BettingRound
from headsup.core.exceptions import InvariantViolation
from headsup.core.rules import (
    DEFAULT_BLIND, NUM_SEATS,
    other, default_stacks, get_blind_positions, seat_to_position, position_to_seat,
)


logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Result of a player or dealer request."""
    success: bool
    message: str
    action: Optional[Any] = None

    def __bool__(self) -> bool:
        return self.success


class Match:
    """
    A heads-up match played until one seat has no chips left.

    Usage:
        match = Match(blind=10)
        match.deal()

        while match.running_round:
            if match.dealer_action:
                match.try_dealer_action(dealer_decision(match))
            else:
                match.try_player_action(match.acting_seat, choose(match.legal_actions))
            if match.can_collect_round:
                match.collect_round()
    """

    def __init__(
        self,
        blind: int = DEFAULT_BLIND,
        stacks: Optional[Sequence[int]] = None,
    ):
        """
        Initialize a new match.

        Args:
            blind: Small blind amount (big blind is twice that)
            stacks: Starting stacks per seat; defaults to 100 small blinds each
        """
        if blind <= 0:
            raise ValueError("Blind must be positive")

        if stacks is None:
            stacks = default_stacks(blind)
        if len(stacks) != NUM_SEATS:
            raise ValueError(f"Heads-up needs exactly {NUM_SEATS} stacks")
        if min(stacks) < 0:
            raise ValueError("Stacks cannot be negative")

        self.blind = blind
        self.stacks: List[int] = list(stacks)
        self.button = 0
        self.hand_no = 0
        self.running_round: Optional[BettingRound] = None

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def winner(self) -> Optional[int]:
        """Seat that won the match, or None while both seats have chips."""
        if self.stacks[0] == 0:
            return 1
        if self.stacks[1] == 0:
            return 0
        return None

    @property
    def running(self) -> bool:
        """True while both seats still have chips."""
        return self.stacks[0] > 0 and self.stacks[1] > 0

    @property
    def can_deal(self) -> bool:
        return self.running and self.running_round is None

    @property
    def can_collect_round(self) -> bool:
        return self.running_round is not None and self.running_round.settled

    @property
    def total_chips(self) -> int:
        if self.running_round is not None:
            return self.running_round.chips_in_play
        return sum(self.stacks)

    @property
    def dealer_action(self) -> Optional[DealerActionType]:
        if self.running_round is None:
            return None
        return self.running_round.dealer_action

    @property
    def acting_seat(self) -> Optional[int]:
        """Seat holding the turn in the running round."""
        if self.running_round is None:
            return None
        return self.position_to_seat(self.running_round.acting_turn)

    @property
    def legal_actions(self) -> List[BetAction]:
        if self.running_round is None:
            return []
        return self.running_round.legal_actions()

    @property
    def pots_shared(self) -> Optional[PotsShared]:
        """The running round's pot distribution, by seat."""
        if self.running_round is None or self.running_round.pots_shared is None:
            return None
        return self._pots_by_seat(self.running_round.pots_shared)

    @property
    def round_stacks(self) -> Tuple[int, int]:
        """Unwagered chips per seat, including the running round."""
        if self.running_round is None:
            return self.stacks[0], self.stacks[1]
        return self._by_seat(self.running_round.stacks)

    @property
    def bets(self) -> Tuple[int, int]:
        """Running round bets per seat."""
        if self.running_round is None:
            return 0, 0
        return self._by_seat(self.running_round.bets)

    def seat_to_position(self, seat: int) -> int:
        return seat_to_position(seat, self.button)

    def position_to_seat(self, position: int) -> int:
        return position_to_seat(position, self.button)

    def _by_seat(self, per_position: Sequence[int]) -> Tuple[int, int]:
        return (
            per_position[self.seat_to_position(0)],
            per_position[self.seat_to_position(1)],
        )

    def _pots_by_seat(self, pots_shared: PotsShared) -> PotsShared:
        # Seat 0 holds position 0 only while it has the button
        return pots_shared if self.button == 0 else pots_shared.swapped()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def deal(self) -> bool:
        """
        Start a new hand: post blinds and open preflop betting.

        Returns:
            True if the hand started, False otherwise
        """
        if not self.can_deal:
            logger.warning(
                f"Cannot deal: running={self.running}, "
                f"round in progress={self.running_round is not None}"
            )
            return False

        self.hand_no += 1
        button, big_blind = get_blind_positions(self.button)
        self.running_round = BettingRound(
            (self.stacks[button], self.stacks[big_blind]), self.blind
        )
        logger.info(f"Starting hand #{self.hand_no}, button=seat {button}")
        return True

    def try_player_action(self, seat: int, action: BetAction) -> ActionResult:
        """
        Validate and apply a player action.

        Args:
            seat: Seat submitting the action
            action: The proposed action

        Returns:
            ActionResult; nothing changes when it is a failure
        """
        round_ = self.running_round
        if round_ is None:
            return self._reject("No hand in progress", action)

        if seat != self.acting_seat:
            return self._reject(f"Not seat {seat}'s turn", action)

        if not is_legal(action, round_.legal_actions()):
            return self._reject(f"Illegal action {action!r}", action)

        if isinstance(action, Raise) and action.total > round_.stacks[round_.acting_turn]:
            return self._reject(
                f"Raise of {action.total} exceeds stack {round_.stacks[round_.acting_turn]}",
                action,
            )

        round_.apply(action)
        logger.debug(f"Hand #{self.hand_no}: seat {seat} {action!r}")
        return ActionResult(True, f"Seat {seat}: {action.kind.value}", action)

    def try_dealer_action(self, action: DealerAction) -> ActionResult:
        """
        Apply a dealer action if it is the one the round is waiting for.

        A showdown winner is given as a seat.
        """
        required = self.dealer_action
        if required is None or required is not action.kind:
            return self._reject(f"Dealer action {action.kind.value} not due (due: {required})", action)

        round_ = self.running_round
        if isinstance(action, NextBettingRound):
            round_.next_betting_round()
        elif isinstance(action, ShowdownSharePots):
            winner = None if action.tie else self.seat_to_position(action.winner)
            round_.showdown_share_pots(winner=winner, tie=action.tie)
        elif isinstance(action, FoldSharePots):
            round_.fold_share_pots()
        else:
            raise InvariantViolation(f"Unknown dealer action: {action!r}")

        logger.debug(f"Hand #{self.hand_no}: dealer {action!r}")
        return ActionResult(True, action.kind.value, action)

    def collect_round(self) -> bool:
        """
        Copy the finished round's stacks back and pass the button.

        Returns:
            True if a settled round was collected
        """
        if not self.can_collect_round:
            logger.warning("Cannot collect round: no settled round")
            return False

        stacks = self.round_stacks
        self.stacks = [stacks[0], stacks[1]]
        self.running_round = None
        self.button = other(self.button)

        logger.info(f"Hand #{self.hand_no} collected, stacks={self.stacks}")
        if self.winner is not None:
            logger.info(f"Match over, seat {self.winner} wins")
        return True

    def _reject(self, message: str, action: Any) -> ActionResult:
        logger.warning(f"Rejected: {message}")
        return ActionResult(False, message, action)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        dealer_action = self.dealer_action
        return {
            "hand_no": self.hand_no,
            "blind": self.blind,
            "button": self.button,
            "stacks": list(self.stacks),
            "acting_seat": self.acting_seat,
            "dealer_action": dealer_action.value if dealer_action else None,
            "round": self.running_round.to_dict() if self.running_round else None,
            "winner": self.winner,
        }
