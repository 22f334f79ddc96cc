"""Big Two agents - computer policies for AI-controlled seats."""

from .base_agent import BaseAgent
from .greedy_agent import GreedyAgent
from .heuristic_agent import HeuristicAgent
from .random_agent import RandomAgent

AGENT_TYPES = {
    "heuristic": HeuristicAgent,
    "greedy": GreedyAgent,
    "random": RandomAgent,
}


def create_agent(agent_type: str, name=None, **kwargs) -> BaseAgent:
    """Create an agent by policy name."""
    if agent_type not in AGENT_TYPES:
        raise ValueError(f"Unknown agent type: {agent_type}. Available: {list(AGENT_TYPES)}")
    return AGENT_TYPES[agent_type](name or agent_type.title(), **kwargs)


__all__ = [
    "AGENT_TYPES",
    "BaseAgent",
    "GreedyAgent",
    "HeuristicAgent",
    "RandomAgent",
    "create_agent",
]
