"""
headsup - Heads-up No-Limit Betting Engine

A two-seat no-limit betting engine with:
- Pure Python betting-round state machine (no card or hand evaluation)
- Match orchestration with a turn clock for external schedulers
- Event-sourced history with replay and JSON encoding

Usage:
    from headsup.core import Match, TimedMatch, Call, Raise, Fold
    from headsup.history import replay, dump_history
"""

__version__ = "0.1.0"

from headsup.core.actions import (
    Fold, Check, Call, Raise, AllIn,
    NextBettingRound, ShowdownSharePots, FoldSharePots, PotsShared,
)
from headsup.core.betting_round import BettingRound
from headsup.core.match import Match, ActionResult
from headsup.core.clock import TimedMatch
from headsup.history.replay import Snapshot, replay

__all__ = [
    "Fold",
    "Check",
    "Call",
    "Raise",
    "AllIn",
    "NextBettingRound",
    "ShowdownSharePots",
    "FoldSharePots",
    "PotsShared",
    "BettingRound",
    "Match",
    "ActionResult",
    "TimedMatch",
    "Snapshot",
    "replay",
    "__version__",
]
