"""Legal move enumeration for Big Two hands."""

import itertools
from typing import Dict, Iterable, Iterator, List, Optional, Union

import numpy as np

from ...config import DEFAULT_RULES, RulesConfig
from ...errors import PlayRejectedError
from ..cards import Card, mask_to_cards
from .hand_classification import classify
from .legality import check_play
from .types import STRAIGHT_WINDOWS, Combination, FiveCardType, PlayInfo

HandLike = Union[Iterable[Card], np.ndarray]


def enumerate_legal_plays(
    hand: HandLike,
    last_play: Optional[Iterable[Card]] = None,
    is_opening_play: bool = False,
    rules: Optional[RulesConfig] = None,
) -> List[PlayInfo]:
    """Classified legal plays, weakest first.

    With an empty table every shape is generated; otherwise only the size of
    the last play. Ordering is by (size, sub-shape tier, power).
    """
    rules = rules or DEFAULT_RULES
    cards = _normalize_hand(hand)
    last = tuple(last_play) if last_play else None
    target = len(last) if last else None

    candidates: List[Combination] = []
    if target in (None, 1):
        candidates.extend((c,) for c in cards)
    if target in (None, 2):
        candidates.extend(find_pairs(cards))
    if target in (None, 5):
        min_tier = None
        if last is not None:
            last_info = classify(last, rules)
            min_tier = last_info.subtype if last_info is not None else None
        candidates.extend(generate_five_card_hands(cards, rules, min_tier))

    seen = set()
    legal: List[PlayInfo] = []
    for combo in candidates:
        key = frozenset(combo)
        if key in seen:
            continue
        seen.add(key)
        try:
            info = check_play(combo, last, is_opening_play, rules)
        except PlayRejectedError:
            continue
        legal.append(info)

    legal.sort(key=lambda info: (info.sort_key, info.cards))
    return legal


def enumerate_legal_moves(
    hand: HandLike,
    last_play: Optional[Iterable[Card]] = None,
    is_opening_play: bool = False,
    rules: Optional[RulesConfig] = None,
) -> List[Combination]:
    """Every combination from `hand` that can be played on `last_play`, weakest first."""
    return [info.cards for info in enumerate_legal_plays(hand, last_play, is_opening_play, rules)]


def _normalize_hand(hand: HandLike) -> List[Card]:
    if isinstance(hand, np.ndarray):
        if hand.dtype == bool and hand.shape == (52,):
            return mask_to_cards(hand)
        raise ValueError(f"Expected a 52-slot boolean mask, got shape {hand.shape}")
    return sorted(set(hand))


def group_by_rank(cards: List[Card]) -> Dict[int, List[Card]]:
    """Group cards by rank using numpy for efficient processing."""
    if not cards:
        return {}
    ranks = np.array([c.rank for c in cards])
    unique_ranks = np.unique(ranks)
    return {int(r): [cards[i] for i in np.flatnonzero(ranks == r)] for r in unique_ranks}


def group_by_suit(cards: List[Card]) -> Dict[int, List[Card]]:
    """Group cards by suit using numpy for efficient processing."""
    if not cards:
        return {}
    suits = np.array([int(c.suit) for c in cards])
    unique_suits = np.unique(suits)
    return {int(s): [cards[i] for i in np.flatnonzero(suits == s)] for s in unique_suits}


def find_pairs(cards: List[Card]) -> Iterator[Combination]:
    """Every 2-combination within each rank group."""
    for rank_cards in group_by_rank(cards).values():
        if len(rank_cards) >= 2:
            yield from itertools.combinations(rank_cards, 2)


def generate_five_card_hands(
    cards: List[Card],
    rules: RulesConfig = DEFAULT_RULES,
    min_tier: Optional[FiveCardType] = None,
) -> Iterator[Combination]:
    """Candidate five-card hands built per sub-shape.

    Sub-shapes below `min_tier` cannot beat the table and are skipped.
    Candidates may repeat across generators; callers deduplicate.
    """
    if len(cards) < 5:
        return

    rank_groups = group_by_rank(cards)
    suit_groups = group_by_suit(cards)

    def wanted(subtype: FiveCardType) -> bool:
        return min_tier is None or subtype >= min_tier

    # Straights also cover straight flushes
    yield from _gen_straights(rank_groups)

    if wanted(FiveCardType.FOUR_KIND):
        yield from _gen_four_kind(cards, rank_groups)

    if wanted(FiveCardType.FULL_HOUSE):
        yield from _gen_full_house(rank_groups)

    if rules.allow_flush and wanted(FiveCardType.FLUSH):
        yield from _gen_flush(suit_groups)


def _gen_straights(rank_groups: Dict[int, List[Card]]) -> Iterator[Combination]:
    present = set(rank_groups)
    for window, _weight, _top in STRAIGHT_WINDOWS:
        if not window <= present:
            continue
        # One card per rank, at most 4^5 choices
        yield from itertools.product(*(rank_groups[r] for r in sorted(window)))


def _gen_four_kind(cards: List[Card], rank_groups: Dict[int, List[Card]]) -> Iterator[Combination]:
    for rank, quad in rank_groups.items():
        if len(quad) != 4:
            continue
        for kicker in cards:
            if kicker.rank != rank:
                yield tuple(quad) + (kicker,)


def _gen_full_house(rank_groups: Dict[int, List[Card]]) -> Iterator[Combination]:
    triple_ranks = [r for r, group in rank_groups.items() if len(group) >= 3]
    pair_ranks = [r for r, group in rank_groups.items() if len(group) >= 2]
    for triple_rank in triple_ranks:
        for triple in itertools.combinations(rank_groups[triple_rank], 3):
            for pair_rank in pair_ranks:
                if pair_rank == triple_rank:
                    continue
                for pair in itertools.combinations(rank_groups[pair_rank], 2):
                    yield triple + pair


def _gen_flush(suit_groups: Dict[int, List[Card]]) -> Iterator[Combination]:
    for suit_cards in suit_groups.values():
        if len(suit_cards) >= 5:
            yield from itertools.combinations(suit_cards, 5)
