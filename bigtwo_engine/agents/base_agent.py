"""Base agent interface for Big Two agents."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Sequence

from ..config import DEFAULT_RULES, RulesConfig
from ..errors import AIFailure
from ..core.cards import OPENING_CARD, Card
from ..core.game import Combination, PlayInfo, enumerate_legal_plays

logger = logging.getLogger(__name__)


class BaseAgent(ABC):
    """Base class for all Big Two agents."""

    def __init__(self, name: str, rules: Optional[RulesConfig] = None):
        self.name = name
        self.rules = rules or DEFAULT_RULES
        self.wins = 0
        self.games_played = 0

    def decide(
        self,
        hand: Iterable[Card],
        last_play: Optional[Sequence[Card]],
        opponent_counts: Optional[Dict[str, int]] = None,
    ) -> Optional[Combination]:
        """Pick a combination to play, or None to pass.

        Any failure inside the policy degrades to a pass.
        """
        hand = list(hand)
        try:
            move = self.choose(hand, tuple(last_play) if last_play else None, dict(opponent_counts or {}))
            if move is not None and not set(move) <= set(hand):
                raise AIFailure(f"{self.name} chose cards outside its hand")
        except Exception:
            logger.warning("Agent %s failed to decide; passing", self.name, exc_info=True)
            return None
        return move

    @abstractmethod
    def choose(
        self,
        hand: List[Card],
        last_play: Optional[Combination],
        opponent_counts: Dict[str, int],
    ) -> Optional[Combination]:
        """
        Select a move.

        Args:
            hand: Cards currently held
            last_play: Combination on the table, None when this seat leads
            opponent_counts: Remaining hand size per opponent id

        Returns:
            Combination to play, or None to pass
        """

    def legal_plays(self, hand: List[Card], last_play: Optional[Combination]) -> List[PlayInfo]:
        """Legal plays for this hand, weakest first."""
        return enumerate_legal_plays(hand, last_play, rules=self.rules)

    def lead_options(self, hand: List[Card]) -> List[PlayInfo]:
        """Free-lead plays; restricted to those holding the opening card while it is in hand."""
        plays = enumerate_legal_plays(hand, None, rules=self.rules)
        if OPENING_CARD in hand:
            plays = [p for p in plays if OPENING_CARD in p.cards]
        return plays

    def reset(self) -> None:
        """Reset agent state for a new match."""

    def record_game_result(self, won: bool):
        """Record result of a game."""
        self.games_played += 1
        if won:
            self.wins += 1

    def get_win_rate(self) -> float:
        """Get current win rate."""
        if self.games_played == 0:
            return 0.0
        return self.wins / self.games_played

    def reset_stats(self):
        """Reset win/loss statistics."""
        self.wins = 0
        self.games_played = 0
