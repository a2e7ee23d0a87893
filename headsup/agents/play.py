"""
Drive a ``TimedMatch`` with agents in both seats.

The runner plays the dealer: whenever the round asks for a dealer action
it submits it, asking the showdown oracle for a verdict when needed.
"""

from typing import Callable, Optional, Sequence
import logging

from headsup.agents.base import BaseAgent
from headsup.core.actions import (
    DealerActionType, DealerAction, NextBettingRound, FoldSharePots,
    PotsShared, ShowdownSharePots,
)
from headsup.core.clock import TimedMatch
from headsup.core.exceptions import InvariantViolation
from headsup.history.replay import Snapshot


logger = logging.getLogger(__name__)

ShowdownOracle = Callable[[Snapshot], ShowdownSharePots]


def _check_seats(agents: Sequence[BaseAgent]) -> None:
    if len(agents) != 2 or any(agent.seat != seat for seat, agent in enumerate(agents)):
        raise ValueError(f"Need one agent per seat, in seat order: {agents!r}")


def _dealer_decision(required: DealerActionType, oracle: ShowdownOracle, snapshot: Snapshot) -> DealerAction:
    if required is DealerActionType.NEXT_BETTING_ROUND:
        return NextBettingRound()
    if required is DealerActionType.FOLD_SHARE_POTS:
        return FoldSharePots()
    return oracle(snapshot)


def play_hand(
    timed: TimedMatch,
    agents: Sequence[BaseAgent],
    oracle: ShowdownOracle,
) -> Optional[PotsShared]:
    """
    Deal and play one hand to the end.

    Args:
        timed: The match to play on
        agents: One agent per seat, in seat order
        oracle: Called for a verdict when a showdown is due

    Returns:
        The hand's distribution by seat, or None if no hand could be dealt

    Raises:
        InvariantViolation: If an agent or the oracle submits a rejected action
    """
    _check_seats(agents)
    if not timed.deal():
        return None

    match = timed.match
    for agent in agents:
        agent.on_hand_start(match.hand_no)

    while match.running_round is not None:
        snapshot = timed.snapshots[-1]
        for agent in agents:
            agent.observe(snapshot)

        required = match.dealer_action
        if required is not None:
            action = _dealer_decision(required, oracle, snapshot)
            result = timed.try_dealer_action(action)
        else:
            seat = match.acting_seat
            action = agents[seat].act(snapshot, match.legal_actions)
            result = timed.try_player_action(seat, action)

        if not result:
            raise InvariantViolation(f"Runner submitted a rejected action: {result.message}")

    pots_shared = timed.log[-1]
    for agent in agents:
        agent.on_hand_end(pots_shared)
    return pots_shared


def play_match(
    timed: TimedMatch,
    agents: Sequence[BaseAgent],
    oracle: ShowdownOracle,
    max_hands: Optional[int] = None,
) -> Optional[int]:
    """
    Play hands until one seat is broke or ``max_hands`` have been dealt.

    Returns:
        The winning seat, or None if the hand limit was reached first
    """
    _check_seats(agents)
    played = 0
    while timed.match.can_deal and (max_hands is None or played < max_hands):
        play_hand(timed, agents, oracle)
        played += 1

    winner = timed.match.winner
    logger.info(f"Played {played} hands, winner={winner}, stacks={timed.match.stacks}")
    return winner
