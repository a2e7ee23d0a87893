"""
Action vocabulary for the heads-up engine.

Seated players submit ``BetAction`` values; the orchestrating caller
submits ``DealerAction`` values when the betting round asks for one.
Every variant is an immutable dataclass, so actions can be compared,
hashed and stored in the event log as-is.
"""

from __future__ import annotations
from typing import ClassVar, Optional, Tuple, Union
from dataclasses import dataclass
from enum import Enum


class BetActionType(Enum):
    """Kinds of player actions."""
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE = "RAISE"
    ALL_IN = "ALL_IN"


class DealerActionType(Enum):
    """Kinds of dealer (system driven) actions."""
    NEXT_BETTING_ROUND = "NEXT_BETTING_ROUND"
    SHOWDOWN_SHARE_POTS = "SHOWDOWN_SHARE_POTS"
    FOLD_SHARE_POTS = "FOLD_SHARE_POTS"


# ============= Player actions =============

@dataclass(frozen=True)
class Fold:
    kind: ClassVar[BetActionType] = BetActionType.FOLD

    @property
    def total(self) -> int:
        return 0


@dataclass(frozen=True)
class Check:
    kind: ClassVar[BetActionType] = BetActionType.CHECK

    @property
    def total(self) -> int:
        return 0


@dataclass(frozen=True)
class Call:
    """Put in ``match`` chips to equalize bets."""
    match: int
    kind: ClassVar[BetActionType] = BetActionType.CALL

    @property
    def total(self) -> int:
        return self.match


@dataclass(frozen=True)
class Raise:
    """
    Equalize with ``match`` chips, then raise by ``raise_amount`` more.

    Attributes:
        match: Chips needed to equalize the opponent's bet
        raise_amount: Chips added on top of the equalizing amount
    """
    match: int
    raise_amount: int
    kind: ClassVar[BetActionType] = BetActionType.RAISE

    @property
    def total(self) -> int:
        return self.match + self.raise_amount


@dataclass(frozen=True)
class AllIn:
    """Put in the whole remaining stack; the amount is resolved by the round."""
    kind: ClassVar[BetActionType] = BetActionType.ALL_IN

    @property
    def total(self) -> int:
        return 0


BetAction = Union[Fold, Check, Call, Raise, AllIn]


def action_matches(proposed: BetAction, generated: BetAction) -> bool:
    """
    Check a proposed action against one generated legal action.

    Same variant is required. A call must match the amount exactly; a raise
    must match the equalizing amount and raise at least as much as the
    generated raise.
    """
    if isinstance(generated, Call):
        return isinstance(proposed, Call) and proposed.match == generated.match
    if isinstance(generated, Raise):
        return (
            isinstance(proposed, Raise)
            and proposed.match == generated.match
            and proposed.raise_amount >= generated.raise_amount
        )
    return type(proposed) is type(generated)


def is_legal(proposed: BetAction, legal_actions) -> bool:
    """True if ``proposed`` is equivalent to any of ``legal_actions``."""
    return any(action_matches(proposed, action) for action in legal_actions)


# ============= Dealer actions =============

@dataclass(frozen=True)
class NextBettingRound:
    kind: ClassVar[DealerActionType] = DealerActionType.NEXT_BETTING_ROUND


@dataclass(frozen=True)
class ShowdownSharePots:
    """
    Showdown verdict from the external card oracle.

    Exactly one of ``winner`` (a seat or position, depending on who reads
    it) or ``tie=True`` must be given.
    """
    winner: Optional[int] = None
    tie: bool = False
    kind: ClassVar[DealerActionType] = DealerActionType.SHOWDOWN_SHARE_POTS

    def __post_init__(self):
        if self.tie and self.winner is not None:
            raise ValueError("A tie has no winner")
        if not self.tie and self.winner not in (0, 1):
            raise ValueError(f"Winner must be 0 or 1, got {self.winner!r}")


@dataclass(frozen=True)
class FoldSharePots:
    kind: ClassVar[DealerActionType] = DealerActionType.FOLD_SHARE_POTS


DealerAction = Union[NextBettingRound, ShowdownSharePots, FoldSharePots]


# ============= Pot distribution =============

@dataclass(frozen=True)
class PotsShared:
    """
    Record of how a finished hand's chips were paid out.

    Attributes:
        shares: Chips won out of the pot, per position (or seat)
        returned: Uncalled chips handed back by the side-pot cap
        tie: Whether the pot was split
    """
    shares: Tuple[int, int]
    returned: Tuple[int, int] = (0, 0)
    tie: bool = False

    @property
    def total(self) -> int:
        return sum(self.shares) + sum(self.returned)

    def payout(self, index: int) -> int:
        """Everything that goes back to ``index``."""
        return self.shares[index] + self.returned[index]

    def swapped(self) -> "PotsShared":
        """The same distribution with both indexes exchanged."""
        return PotsShared(
            shares=(self.shares[1], self.shares[0]),
            returned=(self.returned[1], self.returned[0]),
            tie=self.tie,
        )
