"""
Simple agents and a random showdown oracle.

Useful for testing and for driving simulated matches. Every random
choice goes through a seeded ``random.Random`` so a match can be played
again move for move.
"""

import random
from typing import List, Optional

from headsup.agents.base import BaseAgent
from headsup.core.actions import (
    BetAction, Fold, Check, Call, Raise, AllIn, ShowdownSharePots,
)
from headsup.history.replay import Snapshot


def _find(legal_actions: List[BetAction], action_type) -> Optional[BetAction]:
    return next((a for a in legal_actions if isinstance(a, action_type)), None)


class RandomAgent(BaseAgent):
    """
    An agent that selects random legal actions.

    The agent has configurable tendencies:
    - fold_probability: How likely to fold when facing a bet
    - raise_probability: How likely to raise (or shove) vs check/call
    """

    def __init__(
        self,
        seat: int,
        name: Optional[str] = None,
        fold_probability: float = 0.1,
        raise_probability: float = 0.2,
        seed: Optional[int] = None,
    ):
        super().__init__(seat, name or f"Random-{seat}")
        self.fold_probability = fold_probability
        self.raise_probability = raise_probability
        self.rng = random.Random(seed)

    def act(self, snapshot: Snapshot, legal_actions: List[BetAction]) -> BetAction:
        roll = self.rng.random()

        check = _find(legal_actions, Check)
        # Never fold for free
        if check is None and roll < self.fold_probability:
            return Fold()

        aggressive = _find(legal_actions, Raise) or _find(legal_actions, AllIn)
        if aggressive is not None and roll < self.fold_probability + self.raise_probability:
            return aggressive

        passive = check or _find(legal_actions, Call) or _find(legal_actions, AllIn)
        if passive is not None:
            return passive

        return self.rng.choice(legal_actions)


class CallAgent(BaseAgent):
    """An agent that always checks or calls (all-in when it cannot cover)."""

    def __init__(self, seat: int, name: Optional[str] = None):
        super().__init__(seat, name or f"Caller-{seat}")

    def act(self, snapshot: Snapshot, legal_actions: List[BetAction]) -> BetAction:
        return (
            _find(legal_actions, Check)
            or _find(legal_actions, Call)
            or _find(legal_actions, AllIn)
            or Fold()
        )


class AggressiveAgent(BaseAgent):
    """An agent that raises whenever it can, otherwise calls."""

    def __init__(self, seat: int, name: Optional[str] = None):
        super().__init__(seat, name or f"Aggro-{seat}")

    def act(self, snapshot: Snapshot, legal_actions: List[BetAction]) -> BetAction:
        return (
            _find(legal_actions, Raise)
            or _find(legal_actions, Call)
            or _find(legal_actions, AllIn)
            or _find(legal_actions, Check)
            or Fold()
        )


class RandomShowdownOracle:
    """
    Stand-in for the card oracle: picks a winner seat (or a tie) at random.

    Args:
        tie_probability: Chance of a split pot
        seed: Seed for the internal random generator
    """

    def __init__(self, tie_probability: float = 0.1, seed: Optional[int] = None):
        self.tie_probability = tie_probability
        self.rng = random.Random(seed)

    def __call__(self, snapshot: Snapshot) -> ShowdownSharePots:
        if self.rng.random() < self.tie_probability:
            return ShowdownSharePots(tie=True)
        return ShowdownSharePots(winner=self.rng.randrange(2))
