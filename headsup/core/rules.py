"""
Heads-up No-Limit Rules and Constants.

Everything here is fixed at exactly two seats. Key rules:

1. The button posts the small blind, the other seat posts the big blind.
   Preflop: button acts first. Postflop: the seat out of position acts first.

2. A raise always puts the raiser's whole remaining stack in; the only
   floor is that the raise part must exceed the small blind.

3. A seat that goes all-in short of the opponent's bet is capped: it can
   never win more than the chips it matched. The uncalled excess goes back
   to the deeper seat at showdown.

4. An odd chip on a split pot goes to the seat out of position (the first
   seat left of the button).
"""

from enum import Enum
from typing import Tuple


class RoundType(Enum):
    """The four betting rounds of a hand, in order."""
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"

    @property
    def is_last(self) -> bool:
        return self is RoundType.RIVER

    def next(self) -> "RoundType":
        """
        The round that follows this one.

        Raises:
            ValueError: On the river, which has no successor.
        """
        order = list(RoundType)
        index = order.index(self)
        if index == len(order) - 1:
            raise ValueError("No betting round follows the river")
        return order[index + 1]


# Default game settings
DEFAULT_BLIND = 10            # Small blind
BIG_BLIND_MULTIPLIER = 2
STARTING_STACK_BLINDS = 100   # Starting stack, in small blinds
DEFAULT_TURN_TIMEOUT = 30.0   # Seconds

NUM_SEATS = 2

# Positions inside a betting round
BUTTON = 0
OUT_OF_POSITION = 1


def other(position: int) -> int:
    """The opposing position (or seat)."""
    return 1 - position


def big_blind_for(small_blind: int) -> int:
    return small_blind * BIG_BLIND_MULTIPLIER


def default_stacks(blind: int) -> Tuple[int, int]:
    """Starting stacks for a match played at ``blind``."""
    stack = blind * STARTING_STACK_BLINDS
    return stack, stack


def get_blind_positions(button: int) -> Tuple[int, int]:
    """
    Seats posting the small and big blind.

    Heads-up rule: the button posts the small blind.

    Args:
        button: Seat holding the dealer button

    Returns:
        Tuple of (small_blind_seat, big_blind_seat)
    """
    return button, other(button)


def first_to_act(round_type: RoundType) -> int:
    """
    Position that opens betting in ``round_type``.

    Preflop the button (small blind) acts first; on later rounds the seat
    out of position does.
    """
    if round_type is RoundType.PREFLOP:
        return BUTTON
    return OUT_OF_POSITION


def seat_to_position(seat: int, button: int) -> int:
    """Map a match seat to a betting-round position."""
    return BUTTON if seat == button else OUT_OF_POSITION


def position_to_seat(position: int, button: int) -> int:
    """Map a betting-round position to a match seat."""
    return button if position == BUTTON else other(button)


def split_pot(pot: int) -> Tuple[int, int]:
    """
    Split a pot between both positions.

    The odd chip, if any, goes to the seat out of position.

    Returns:
        Tuple of (button_share, out_of_position_share)
    """
    half = pot // 2
    return half, pot - half
