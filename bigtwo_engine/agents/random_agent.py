"""Random agent.

This agent selects uniformly among legal moves (and passing, when the table
is not empty), providing a baseline for evaluation and comparison.
"""

from typing import Dict, List, Optional

import numpy as np

from ..core.cards import Card
from ..core.game import Combination
from .base_agent import BaseAgent


class RandomAgent(BaseAgent):
    """Random agent over legal moves."""

    def __init__(self, name: str = "Random", seed: Optional[int] = None, rules=None):
        """Initialize Random agent.

        Args:
            name: Agent name for identification
            seed: Random seed for reproducible behavior
        """
        super().__init__(name, rules)
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def choose(
        self,
        hand: List[Card],
        last_play: Optional[Combination],
        opponent_counts: Dict[str, int],
    ) -> Optional[Combination]:
        if not last_play:
            moves = self.lead_options(hand)
            if not moves:
                return None
            return moves[int(self.rng.integers(len(moves)))].cards

        moves = self.legal_plays(hand, last_play)
        # Slot len(moves) stands for PASS
        choice = int(self.rng.integers(len(moves) + 1))
        if choice == len(moves):
            return None
        return moves[choice].cards

    def reset(self) -> None:
        """Reset the generator when a seed was provided."""
        if self.seed is not None:
            self.rng = np.random.default_rng(self.seed)

