"""Tournament system for Big Two agents."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

from ..agents import BaseAgent
from ..config import RulesConfig
from ..core.bigtwo import BigTwoMatch, MatchPhase

logger = logging.getLogger(__name__)

# Safety valve against a policy that never finishes a match
MAX_TURNS = 2000

# Table sizes the random deal can fill evenly
SEAT_COUNTS = tuple(n for n in range(2, 5) if 52 % n == 0)


@dataclass(frozen=True)
class MatchResult:
    winner: Optional[str]  # agent name, None if the turn limit was hit
    cards_remaining: Dict[str, int]
    turns: int


def play_match(
    agents: List[BaseAgent],
    seed: Optional[int] = None,
    rules: Optional[RulesConfig] = None,
) -> MatchResult:
    """Play one all-AI match through the match controller.

    Seats are named after the agents, so names must be unique.
    """
    names = [agent.name for agent in agents]
    if len(set(names)) != len(names):
        raise ValueError(f"Agent names must be unique: {names}")

    for agent in agents:
        agent.reset()

    match = BigTwoMatch(names, agents=dict(zip(names, agents)), seed=seed, rules=rules, track_move_history=False)
    match.start()
    match.advance_ai_turns(max_turns=MAX_TURNS)
    match.check_invariants()

    if match.phase is not MatchPhase.GAME_OVER:
        logger.warning("Match hit the %d turn limit without a winner", MAX_TURNS)
    winner = match.winner_id
    for agent in agents:
        agent.record_game_result(agent.name == winner)
    return MatchResult(winner, match.hand_counts(), match.action_count)


class Tournament:
    """Repeated matches between a fixed table of agents."""

    def __init__(self, agents: List[BaseAgent], rules: Optional[RulesConfig] = None):
        """
        Initialize tournament with list of agents.

        Args:
            agents: BaseAgent instances sharing the table, one per seat
            rules: Rule policy for every match
        """
        if len(agents) not in SEAT_COUNTS:
            allowed = " or ".join(map(str, SEAT_COUNTS))
            raise ValueError(f"Tournament requires {allowed} agents to deal 52 cards evenly, got {len(agents)}")
        self.agents = agents
        self.rules = rules

    def list_agents(self) -> List[str]:
        """Get list of agent names."""
        return [agent.name for agent in self.agents]

    def run(self, num_games: int = 100, seed: Optional[int] = None) -> Dict:
        """
        Play num_games matches, rotating seat order between games.

        Returns:
            Dict with per-agent stats and a summary
        """
        rng = np.random.default_rng(seed)
        wins = {name: 0 for name in self.list_agents()}
        cards_left = {name: [] for name in self.list_agents()}
        undecided = 0

        for game in range(num_games):
            shift = game % len(self.agents)
            table = self.agents[shift:] + self.agents[:shift]
            result = play_match(table, seed=int(rng.integers(2**31)), rules=self.rules)
            if result.winner is None:
                undecided += 1
            else:
                wins[result.winner] += 1
            for name, count in result.cards_remaining.items():
                cards_left[name].append(count)

        agent_stats = {
            name: {
                "total_wins": wins[name],
                "win_rate": wins[name] / num_games if num_games else 0.0,
                "avg_cards_left": float(np.mean(cards_left[name])) if cards_left[name] else 0.0,
            }
            for name in self.list_agents()
        }
        best = max(agent_stats, key=lambda n: agent_stats[n]["total_wins"]) if num_games else None
        return {
            "agent_stats": agent_stats,
            "games_played": num_games,
            "tournament_summary": {"leader": best, "undecided_games": undecided},
        }
