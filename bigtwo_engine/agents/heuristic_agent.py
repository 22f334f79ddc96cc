"""Rule-based opponent used for computer seats and disconnected players."""

from typing import Dict, List, Optional

from ..core.cards import Card
from ..core.game import Combination
from .base_agent import BaseAgent


class HeuristicAgent(BaseAgent):
    """Sheds long combinations on the lead and conserves strength when following.

    On the lead it plays the longest combination available (five cards over a
    pair over a single). Ties within that length go to the lowest sub-shape
    tier first and the lowest power second, so a Straight is led ahead of a
    Four of a Kind even when the quads rank lower. While the opening card is
    in hand the lead must contain it. When following it plays the weakest card
    set that beats the table, switching to the strongest once any opponent is
    down to `urgency_threshold` cards or fewer.
    """

    def __init__(self, name: str = "Heuristic", rules=None, urgency_threshold: Optional[int] = None):
        super().__init__(name, rules)
        if urgency_threshold is None:
            urgency_threshold = self.rules.urgency_threshold
        self.urgency_threshold = urgency_threshold

    def choose(
        self,
        hand: List[Card],
        last_play: Optional[Combination],
        opponent_counts: Dict[str, int],
    ) -> Optional[Combination]:
        if not last_play:
            return self._choose_lead(hand)

        moves = self.legal_plays(hand, last_play)
        if not moves:
            return None

        if self.is_urgent(opponent_counts):
            return moves[-1].cards
        return moves[0].cards

    def _choose_lead(self, hand: List[Card]) -> Optional[Combination]:
        options = self.lead_options(hand)
        if not options:
            return None
        # Longest first, then weakest
        best = min(options, key=lambda p: (-p.size, p.tier, p.power))
        return best.cards

    def is_urgent(self, opponent_counts: Dict[str, int]) -> bool:
        """True when some opponent is close to going out."""
        return any(count <= self.urgency_threshold for count in opponent_counts.values())
