"""Game-specific types and data structures for Big Two."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from ..cards import Card

# A combination as submitted or held on the table, weakest card first.
Combination = Tuple[Card, ...]

PLAY_SIZES = (1, 2, 5)


class PlayType(Enum):
    """Shape of a combination, determined by its size."""

    SINGLE = 1
    PAIR = 2
    FIVE_CARD = 5


class FiveCardType(Enum):
    """Five-card sub-shapes; the value is the fixed hierarchy tier."""

    STRAIGHT = 1
    FLUSH = 2
    FULL_HOUSE = 3
    FOUR_KIND = 4
    STRAIGHT_FLUSH = 5

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()

    def __lt__(self, other: FiveCardType) -> bool:
        return self.value < other.value

    def __le__(self, other: FiveCardType) -> bool:
        return self.value <= other.value

    def __gt__(self, other: FiveCardType) -> bool:
        return self.value > other.value

    def __ge__(self, other: FiveCardType) -> bool:
        return self.value >= other.value


@dataclass(frozen=True)
class PlayInfo:
    """Classification of a combination.

    power totally orders combinations of the same play type and subtype.
    """

    play_type: PlayType
    power: int
    cards: Combination
    subtype: Optional[FiveCardType] = None

    @property
    def size(self) -> int:
        return len(self.cards)

    @property
    def tier(self) -> int:
        return self.subtype.value if self.subtype is not None else 0

    @property
    def sort_key(self) -> Tuple[int, int, int]:
        """Ascending order used for move lists: size, then tier, then power."""
        return (self.size, self.tier, self.power)

    @property
    def card_set(self) -> FrozenSet[Card]:
        return frozenset(self.cards)

    @property
    def label(self) -> str:
        if self.subtype is not None:
            return self.subtype.label
        return self.play_type.name.title()


# Straight weights. Regular runs use their top rank (7..14); the two
# wraparound runs sit below and above them.
ACE_LOW_STRAIGHT = frozenset({3, 4, 5, 14, 15})  # A-2-3-4-5
TWO_HIGH_STRAIGHT = frozenset({3, 4, 5, 6, 15})  # 2-3-4-5-6
ACE_LOW_WEIGHT = 5
TWO_HIGH_WEIGHT = 15

# Rank windows for straights, as (ranks, weight, rank of the suit tie-break card).
STRAIGHT_WINDOWS: Tuple[Tuple[FrozenSet[int], int, int], ...] = (
    (ACE_LOW_STRAIGHT, ACE_LOW_WEIGHT, 5),
    *((frozenset(range(top - 4, top + 1)), top, top) for top in range(7, 15)),
    (TWO_HIGH_STRAIGHT, TWO_HIGH_WEIGHT, 6),
)
