#!/usr/bin/env python3
"""Run a series of all-AI matches between named policies."""

import argparse

from bigtwo_engine.agents import AGENT_TYPES, create_agent
from bigtwo_engine.config import EngineConfig
from bigtwo_engine.evaluation import SEAT_COUNTS, Tournament
from bigtwo_engine.log import setup_logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "policies",
        nargs="*",
        default=["heuristic", "greedy", "random", "random"],
        help=f"Policy per seat, {' or '.join(map(str, SEAT_COUNTS))} of: {', '.join(sorted(AGENT_TYPES))}",
    )
    parser.add_argument("--games", type=int, default=100, help="Number of matches to play")
    parser.add_argument("--seed", type=int, default=None, help="Seed for deals and random agents")
    args = parser.parse_args(argv)
    unknown = [p for p in args.policies if p not in AGENT_TYPES]
    if unknown:
        parser.error(f"unknown policies: {', '.join(unknown)}")
    if len(args.policies) not in SEAT_COUNTS:
        allowed = " or ".join(map(str, SEAT_COUNTS))
        parser.error(f"need {allowed} policies to deal 52 cards evenly, got {len(args.policies)}")
    return args


def main(argv=None):
    args = parse_args(argv)
    config = EngineConfig.from_env()
    setup_logging(config.log_level)

    agents = []
    for seat, policy in enumerate(args.policies):
        kwargs = {"rules": config.rules}
        if policy == "random" and args.seed is not None:
            kwargs["seed"] = args.seed + seat
        agents.append(create_agent(policy, name=f"{policy.title()}-{seat}", **kwargs))

    print(f"Playing {args.games} games: {', '.join(a.name for a in agents)}")
    results = Tournament(agents, rules=config.rules).run(args.games, seed=args.seed)

    for name, stats in results["agent_stats"].items():
        print(f"{name:15s} wins {stats['total_wins']:4d}  win rate {stats['win_rate']:.2%}  avg cards left {stats['avg_cards_left']:.2f}")
    summary = results["tournament_summary"]
    if summary["undecided_games"]:
        print(f"Undecided games: {summary['undecided_games']}")
    print(f"Leader: {summary['leader']}")
    return results


if __name__ == "__main__":
    main()
