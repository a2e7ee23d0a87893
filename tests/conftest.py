"""
Pytest configuration and shared fixtures for headsup tests.
"""

import pytest
from headsup.core.betting_round import BettingRound
from headsup.core.match import Match
from headsup.core.clock import TimedMatch


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def betting_round():
    """A fresh preflop round: 1000 chips each, blinds 10/20."""
    return BettingRound((1000, 1000), small_blind=10)


@pytest.fixture
def match():
    """A match at blind 10 with default stacks (1000 each)."""
    return Match(blind=10)


@pytest.fixture
def dealt_match(match):
    """A match with its first hand dealt."""
    assert match.deal()
    return match


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def timed_match(clock):
    """A timed match driven by a fake clock."""
    return TimedMatch(blind=10, clock=clock)
