"""Greedy agent that always plays the lowest legal combination."""

from typing import Dict, List, Optional

from ..core.cards import Card
from ..core.game import Combination
from .base_agent import BaseAgent


class GreedyAgent(BaseAgent):
    """Greedy agent that always plays the lowest legal card/combination.

    Move lists are sorted weakest first, so this is a consistent
    "play lowest" baseline: a single on the lead, the cheapest answer when
    following, and a pass only when nothing beats the table.
    """

    def __init__(self, name: str = "Greedy", rules=None):
        super().__init__(name, rules)

    def choose(
        self,
        hand: List[Card],
        last_play: Optional[Combination],
        opponent_counts: Dict[str, int],
    ) -> Optional[Combination]:
        moves = self.legal_plays(hand, last_play) if last_play else self.lead_options(hand)
        if not moves:
            return None
        return moves[0].cards

