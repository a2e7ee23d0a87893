"""
Heads-up Betting Round - State Machine Implementation.

A ``BettingRound`` holds one hand from the blinds to the pot distribution.
Positions are fixed for the whole hand: position 0 is the button (small
blind), position 1 the big blind.

The round never decides on its own what happens next. After every mutation
the caller reads:
- ``dealer_action``: the dealer transition the round is waiting for, if any
- ``legal_actions()``: what the acting position may submit otherwise

Chips only move between ``stacks``, ``bets`` and ``pot``, so their sum is
constant for the life of the round.
"""

from __future__ import annotations
from typing import List, Optional, Dict, Any, Tuple
import logging

from headsup.core.actions import (
    BetAction, Fold, Check, Call, Raise, AllIn,
    DealerActionType, PotsShared,
)
from headsup.core.exceptions import InvariantViolation
from headsup.core.rules import (
    RoundType, BUTTON, OUT_OF_POSITION,
    other, big_blind_for, first_to_act, split_pot,
)


logger = logging.getLogger(__name__)


class BettingRound:
    """
    One hand of heads-up no-limit betting.

    Usage:
        round_ = BettingRound((1000, 1000), small_blind=10)

        while not round_.settled:
            if round_.dealer_action is DealerActionType.NEXT_BETTING_ROUND:
                round_.next_betting_round()
            elif ...:
                ...
            else:
                action = choose(round_.legal_actions())
                round_.apply(action)
    """

    def __init__(self, stacks: Tuple[int, int], small_blind: int):
        """
        Create the round and post the blinds.

        Args:
            stacks: Chips of (button, big blind) before the blinds
            small_blind: Small blind amount; the big blind is twice that
        """
        if len(stacks) != 2 or min(stacks) <= 0:
            raise ValueError(f"Both stacks must be positive, got {stacks!r}")
        if small_blind <= 0:
            raise ValueError("Small blind must be positive")

        self.small_blind = small_blind
        self.big_blind = big_blind_for(small_blind)

        self.stacks: List[int] = list(stacks)
        self.bets: List[int] = [0, 0]
        self.pot = 0
        self.total_chips = sum(stacks)

        self.round_type = RoundType.PREFLOP
        self.acting_turn = BUTTON
        self.has_everyone_acted = False

        self.folded_stack: Optional[int] = None
        # None means uncapped
        self.side_pot_cap: List[Optional[int]] = [None, None]
        self.pots_shared: Optional[PotsShared] = None

        self._post_blinds()

    def _post_blinds(self) -> None:
        """Post small and big blind, all-in if a stack is shorter."""
        self._transfer(BUTTON, min(self.small_blind, self.stacks[BUTTON]))
        self._transfer(OUT_OF_POSITION, min(self.big_blind, self.stacks[OUT_OF_POSITION]))
        self._update_caps()

        logger.debug(f"Blinds posted: SB={self.bets[BUTTON]} BB={self.bets[OUT_OF_POSITION]}")

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def settled(self) -> bool:
        """True once the pots have been distributed."""
        return self.pots_shared is not None

    @property
    def other_turn(self) -> int:
        return other(self.acting_turn)

    @property
    def chips_in_play(self) -> int:
        """Sum of every chip the round holds; always ``total_chips``."""
        return sum(self.stacks) + sum(self.bets) + self.pot

    @property
    def dealer_action(self) -> Optional[DealerActionType]:
        """
        The dealer transition the round is waiting for.

        Returns:
            A DealerActionType, or None when a player must act (or the
            pots are already shared)
        """
        if self.settled:
            return None

        if self.bets[0] == self.bets[1] and self.has_everyone_acted:
            if self.round_type.is_last or 0 in self.stacks:
                return DealerActionType.SHOWDOWN_SHARE_POTS
            return DealerActionType.NEXT_BETTING_ROUND

        if self.folded_stack is not None:
            return DealerActionType.FOLD_SHARE_POTS

        everyone_all_in = self.stacks[0] == 0 and self.stacks[1] == 0
        if everyone_all_in or any(cap is not None for cap in self.side_pot_cap):
            return DealerActionType.SHOWDOWN_SHARE_POTS

        return None

    def legal_actions(self) -> List[BetAction]:
        """
        Actions the acting position may submit right now.

        Returns:
            Ordered list of actions; empty while a dealer action is due
        """
        if self.settled or self.dealer_action is not None:
            return []

        acting, opponent = self.acting_turn, self.other_turn
        actions: List[BetAction] = [Fold()]

        if self.bets[acting] == self.bets[opponent]:
            actions.append(Check())

        to_call = self.bets[opponent] - self.bets[acting]
        stack = self.stacks[acting]

        # All-in for a call or less: nothing else to offer
        if stack <= to_call:
            actions.append(AllIn())
            return actions

        if to_call > 0:
            actions.append(Call(to_call))

        to_raise = stack - to_call
        if to_raise > self.small_blind:
            actions.append(Raise(to_call, to_raise))

        return actions

    # ------------------------------------------------------------------
    # Player mutators
    # ------------------------------------------------------------------

    def apply(self, action: BetAction) -> None:
        """Dispatch a player action to its mutator."""
        if isinstance(action, Fold):
            self.fold()
        elif isinstance(action, Check):
            self.check()
        elif isinstance(action, Call):
            self.call(action.match)
        elif isinstance(action, Raise):
            self.raise_(action.match, action.raise_amount)
        elif isinstance(action, AllIn):
            self.allin()
        else:
            raise InvariantViolation(f"Unknown bet action: {action!r}")

    def fold(self) -> None:
        self._require_player_turn("fold")
        self.folded_stack = self.acting_turn

    def check(self) -> None:
        self._require_player_turn("check")
        if self.bets[0] != self.bets[1]:
            raise InvariantViolation(f"Cannot check facing a bet: bets={self.bets}")

        # A check from out of position closes the option on the blind
        if not self.has_everyone_acted and self.acting_turn == OUT_OF_POSITION:
            self.has_everyone_acted = True
        self._alternate_turn()

    def call(self, amount: int) -> None:
        """Call ``amount``; answering a wager closes the action."""
        self._require_player_turn("call")
        self._transfer(self.acting_turn, amount)
        self.has_everyone_acted = True
        self._alternate_turn()

    def raise_(self, match: int, raise_amount: int) -> None:
        """Equalize with ``match`` and raise by ``raise_amount``."""
        self._require_player_turn("raise")
        self._transfer(self.acting_turn, match + raise_amount)
        self._update_caps()
        self._alternate_turn()

    def allin(self) -> None:
        """
        Move the whole acting stack into the bets.

        Only offered when the stack does not cover more than the call, so
        it always answers the wager: the turn stays put, and a position
        left short of the opponent's bet is capped.
        """
        self._require_player_turn("all-in")
        acting, opponent = self.acting_turn, self.other_turn
        to_call = self.bets[opponent] - self.bets[acting]
        if self.stacks[acting] > to_call:
            raise InvariantViolation(
                f"All-in of {self.stacks[acting]} exceeds the call of {to_call}; raise instead"
            )

        self._transfer(acting, self.stacks[acting])
        self._update_caps()
        self.has_everyone_acted = True

    # ------------------------------------------------------------------
    # Dealer mutators
    # ------------------------------------------------------------------

    def next_betting_round(self) -> None:
        """Sweep bets into the pot and open the next round."""
        if self.round_type.is_last:
            raise InvariantViolation("No next betting round after the river")
        if self.settled:
            raise InvariantViolation("Pots already shared")

        self._sweep_bets()
        self.round_type = self.round_type.next()
        self.has_everyone_acted = False
        self.acting_turn = first_to_act(self.round_type)

        logger.info(f"Betting round advanced to {self.round_type.value}, pot={self.pot}")

    def showdown_share_pots(self, winner: Optional[int] = None, tie: bool = False) -> PotsShared:
        """
        Distribute the pot after a showdown.

        Args:
            winner: Winning position (ignored on a tie)
            tie: Split the pot evenly

        Returns:
            The PotsShared record, by position
        """
        if self.settled:
            raise InvariantViolation("Pots already shared")
        if not tie and winner not in (BUTTON, OUT_OF_POSITION):
            raise InvariantViolation(f"Showdown needs a winner or a tie, got winner={winner!r}")

        self._sweep_bets()

        returned = [0, 0]
        for position in (BUTTON, OUT_OF_POSITION):
            cap = self.side_pot_cap[position]
            if cap is not None and cap < self.pot:
                excess = self.pot - cap
                returned[other(position)] += excess
                self.pot -= excess

        if tie:
            shares = split_pot(self.pot)
        else:
            shares = (self.pot, 0) if winner == BUTTON else (0, self.pot)

        return self._pay_out(PotsShared(shares=shares, returned=tuple(returned), tie=tie))

    def fold_share_pots(self) -> PotsShared:
        """Give the whole pot to the position that did not fold."""
        if self.folded_stack is None:
            raise InvariantViolation("No folded stack, cannot share pots")
        if self.settled:
            raise InvariantViolation("Pots already shared")

        self._sweep_bets()
        shares = [0, 0]
        shares[other(self.folded_stack)] = self.pot
        return self._pay_out(PotsShared(shares=tuple(shares)))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_player_turn(self, what: str) -> None:
        if self.settled or self.dealer_action is not None:
            raise InvariantViolation(
                f"Cannot {what}: waiting for dealer action {self.dealer_action}"
            )

    def _transfer(self, position: int, amount: int) -> None:
        """Move chips from a stack into its bet; checked before anything moves."""
        if amount < 0 or amount > self.stacks[position]:
            raise InvariantViolation(
                f"Position {position} cannot bet {amount} from a stack of {self.stacks[position]}"
            )
        self.stacks[position] -= amount
        self.bets[position] += amount

    def _update_caps(self) -> None:
        """Cap any all-in position that cannot match the opponent's bet."""
        for position in (BUTTON, OUT_OF_POSITION):
            if self.side_pot_cap[position] is not None:
                continue
            if self.stacks[position] == 0 and self.bets[position] < self.bets[other(position)]:
                self.side_pot_cap[position] = self.pot + 2 * self.bets[position]
                logger.debug(f"Position {position} all-in short, capped at {self.side_pot_cap[position]}")

    def _alternate_turn(self) -> None:
        self.acting_turn = self.other_turn

    def _sweep_bets(self) -> None:
        self.pot += self.bets[0] + self.bets[1]
        self.bets = [0, 0]

    def _pay_out(self, pots_shared: PotsShared) -> PotsShared:
        for position in (BUTTON, OUT_OF_POSITION):
            self.stacks[position] += pots_shared.payout(position)
        self.pot = 0
        self.pots_shared = pots_shared
        logger.debug(f"Pots shared: {pots_shared}")
        return pots_shared

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        dealer_action = self.dealer_action
        return {
            "round_type": self.round_type.value,
            "stacks": list(self.stacks),
            "bets": list(self.bets),
            "pot": self.pot,
            "acting_turn": self.acting_turn,
            "has_everyone_acted": self.has_everyone_acted,
            "folded_stack": self.folded_stack,
            "side_pot_cap": list(self.side_pot_cap),
            "dealer_action": dealer_action.value if dealer_action else None,
            "settled": self.settled,
        }

    def __repr__(self) -> str:
        return (
            f"BettingRound({self.round_type.value}, stacks={self.stacks}, "
            f"bets={self.bets}, pot={self.pot}, turn={self.acting_turn})"
        )
