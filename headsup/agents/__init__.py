"""
headsup Agents - seat agents and a match runner

Used to drive simulated matches and to exercise the engine in tests.
"""

from headsup.agents.base import BaseAgent
from headsup.agents.random_agent import RandomAgent, CallAgent, AggressiveAgent, RandomShowdownOracle
from headsup.agents.play import play_hand, play_match

__all__ = [
    "BaseAgent",
    "RandomAgent",
    "CallAgent",
    "AggressiveAgent",
    "RandomShowdownOracle",
    "play_hand",
    "play_match",
]
