"""
headsup Core - Pure Python heads-up betting logic

This module contains the betting state machine and match orchestration,
without any network or card dependencies.
"""

from headsup.core.actions import (
    BetActionType, DealerActionType,
    Fold, Check, Call, Raise, AllIn, BetAction,
    NextBettingRound, ShowdownSharePots, FoldSharePots, DealerAction,
    PotsShared, action_matches, is_legal,
)
from headsup.core.rules import RoundType
from headsup.core.exceptions import PokerEngineError, InvariantViolation
from headsup.core.betting_round import BettingRound
from headsup.core.match import Match, ActionResult
from headsup.core.clock import TimedMatch, Turn

__all__ = [
    "BetActionType",
    "DealerActionType",
    "Fold",
    "Check",
    "Call",
    "Raise",
    "AllIn",
    "BetAction",
    "NextBettingRound",
    "ShowdownSharePots",
    "FoldSharePots",
    "DealerAction",
    "PotsShared",
    "action_matches",
    "is_legal",
    "RoundType",
    "PokerEngineError",
    "InvariantViolation",
    "BettingRound",
    "Match",
    "ActionResult",
    "TimedMatch",
    "Turn",
]
