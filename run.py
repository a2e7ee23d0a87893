#!/usr/bin/env python3
"""
headsup - Match Simulator

Plays a heads-up match between two random agents and prints the result,
or the full event log as JSON.

Usage:
    python run.py [--blind BLIND] [--hands HANDS] [--seed SEED] [--json]
"""

import argparse
import logging

from headsup.agents import RandomAgent, RandomShowdownOracle, play_match
from headsup.core.clock import TimedMatch
from headsup.core.rules import DEFAULT_BLIND
from headsup.history import dump_history, replay


def main():
    parser = argparse.ArgumentParser(description="headsup match simulator")
    parser.add_argument("--blind", type=int, default=DEFAULT_BLIND, help="Small blind")
    parser.add_argument("--hands", type=int, default=100, help="Maximum hands to play")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--json", action="store_true", help="Print the event log as JSON")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    seed = args.seed
    agents = [
        RandomAgent(0, seed=seed),
        RandomAgent(1, seed=None if seed is None else seed + 1),
    ]
    oracle = RandomShowdownOracle(seed=None if seed is None else seed + 2)

    timed = TimedMatch(blind=args.blind)
    winner = play_match(timed, agents, oracle, max_hands=args.hands)

    if args.json:
        print(dump_history(timed.log))
        return

    final = replay(timed.log)[-1]
    print(f"Hands played: {timed.match.hand_no}")
    print(f"Final stacks: {list(final.stacks)}")
    print(f"Winner: {'none yet' if winner is None else f'seat {winner}'}")


if __name__ == "__main__":
    main()
