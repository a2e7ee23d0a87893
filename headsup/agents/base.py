"""
Base Agent Interface for the heads-up engine.

An agent sits in one seat and picks one of the legal actions the
betting round offers. Agents never touch the match directly; the runner
submits whatever they return.

Usage:
    class MyAgent(BaseAgent):
        def act(self, snapshot, legal_actions):
            return legal_actions[-1]
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from headsup.core.actions import BetAction, PotsShared
from headsup.history.replay import Snapshot


class BaseAgent(ABC):
    """
    Abstract base class for seat agents.

    Attributes:
        seat: Seat this agent plays (0 or 1)
        name: Human-readable name
    """

    def __init__(self, seat: int, name: Optional[str] = None):
        if seat not in (0, 1):
            raise ValueError(f"Seat must be 0 or 1, got {seat!r}")
        self.seat = seat
        self.name = name or f"Agent-{seat}"

    def observe(self, snapshot: Snapshot) -> None:
        """Called after every event of the match. Default: ignore."""
        pass

    @abstractmethod
    def act(self, snapshot: Snapshot, legal_actions: List[BetAction]) -> BetAction:
        """
        Choose an action.

        Args:
            snapshot: View of the match right now
            legal_actions: Actions the round accepts; never empty

        Returns:
            One of ``legal_actions`` (a raise may be larger than offered)
        """

    def on_hand_start(self, hand_no: int) -> None:
        pass

    def on_hand_end(self, pots_shared: PotsShared) -> None:
        """Called with the hand's distribution, by seat."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.seat}, {self.name})"
