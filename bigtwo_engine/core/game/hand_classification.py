"""Hand classification logic for Big Two."""

from typing import Iterable, Optional, Sequence

import numpy as np

from ...config import DEFAULT_RULES, RulesConfig
from ..cards import Card
from .types import STRAIGHT_WINDOWS, FiveCardType, PlayInfo, PlayType


def classify(cards: Iterable[Card], rules: Optional[RulesConfig] = None) -> Optional[PlayInfo]:
    """Classify a set of cards as a playable combination.

    Returns:
        - Single: power of the card
        - Pair: power of the higher card
        - Five-card: subtype plus power within that subtype
        - None for anything else, including duplicates and non-card input
    """
    rules = rules or DEFAULT_RULES
    try:
        combo = tuple(sorted(cards))
    except TypeError:
        return None
    if not all(isinstance(c, Card) for c in combo) or len(set(combo)) != len(combo):
        return None

    n = len(combo)
    if n == 1:
        return PlayInfo(PlayType.SINGLE, combo[0].power, combo)

    if n == 2:
        if combo[0].rank != combo[1].rank:
            return None
        return PlayInfo(PlayType.PAIR, combo[1].power, combo)

    if n == 5:
        return _classify_five(combo, rules)

    return None


def _classify_five(cards: Sequence[Card], rules: RulesConfig) -> Optional[PlayInfo]:
    """Five-card classification, strongest category first."""
    ranks = np.array([c.rank for c in cards])
    suits = np.array([int(c.suit) for c in cards])
    rank_counts = np.bincount(ranks, minlength=16)
    counts = sorted(int(c) for c in rank_counts if c)

    is_flush = bool(np.all(suits == suits[0]))
    straight = _straight_strength(cards)

    if is_flush and straight is not None:
        return PlayInfo(PlayType.FIVE_CARD, straight, tuple(cards), FiveCardType.STRAIGHT_FLUSH)

    if counts == [1, 4]:
        quad_rank = int(np.argmax(rank_counts == 4))
        return PlayInfo(PlayType.FIVE_CARD, quad_rank, tuple(cards), FiveCardType.FOUR_KIND)

    if counts == [2, 3]:
        triple_rank = int(np.argmax(rank_counts == 3))
        return PlayInfo(PlayType.FIVE_CARD, triple_rank, tuple(cards), FiveCardType.FULL_HOUSE)

    if is_flush and rules.allow_flush:
        return PlayInfo(PlayType.FIVE_CARD, _flush_strength(cards), tuple(cards), FiveCardType.FLUSH)

    if straight is not None:
        return PlayInfo(PlayType.FIVE_CARD, straight, tuple(cards), FiveCardType.STRAIGHT)

    return None


def _straight_strength(cards: Sequence[Card]) -> Optional[int]:
    """Return weight * 10 + suit of the deciding card, or None if not a straight."""
    rank_set = frozenset(c.rank for c in cards)
    if len(rank_set) != 5:
        return None
    for window, weight, top_rank in STRAIGHT_WINDOWS:
        if rank_set == window:
            top = next(c for c in cards if c.rank == top_rank)
            return weight * 10 + int(top.suit)
    return None


def _flush_strength(cards: Sequence[Card]) -> int:
    """Ranks high to low as base-16 digits, then the suit."""
    value = 0
    for rank in sorted((c.rank for c in cards), reverse=True):
        value = value * 16 + rank
    return value * 4 + int(cards[0].suit)


def is_straight(cards: Sequence[Card]) -> bool:
    """Check whether five cards form a qualifying run, ignoring suits."""
    return len(cards) == 5 and _straight_strength(cards) is not None
