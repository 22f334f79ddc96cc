"""Legality checks for candidate plays against the table."""

from typing import Iterable, Optional

from ...config import RulesConfig
from ...errors import IllegalPlay, InvalidCombination, OpeningViolation, PlayRejectedError
from ..cards import OPENING_CARD, Card
from .hand_classification import classify
from .types import PlayInfo, PlayType


def check_play(
    candidate: Iterable[Card],
    last_play: Optional[Iterable[Card]],
    is_opening_play: bool = False,
    rules: Optional[RulesConfig] = None,
) -> PlayInfo:
    """Validate a candidate play and return its classification.

    Raises:
        InvalidCombination: candidate is not a recognized shape
        OpeningViolation: opening play without the opening card
        IllegalPlay: candidate does not beat the table
    """
    try:
        candidate = tuple(candidate)
    except TypeError:
        raise InvalidCombination("Cards could not be read") from None
    info = classify(candidate, rules)
    if info is None:
        raise InvalidCombination("Cards do not form a single, pair or five-card hand")

    if is_opening_play and OPENING_CARD not in info.cards:
        raise OpeningViolation(f"The first play must include {OPENING_CARD}")

    if not last_play:
        return info

    prev = classify(last_play, rules)
    if prev is None:
        raise IllegalPlay("Table holds an unrecognized combination")

    if info.size != prev.size:
        raise IllegalPlay(f"Must play {prev.size} card(s) to follow a {prev.label}")

    if not beats(info, prev):
        raise IllegalPlay(f"{info.label} does not beat {prev.label}")

    return info


def beats(play: PlayInfo, last: PlayInfo) -> bool:
    """Compare two classified plays of the same size."""
    if play.size != last.size or play.play_type != last.play_type:
        return False

    if play.play_type is PlayType.FIVE_CARD:
        # Fixed hierarchy: a higher sub-shape always wins, a lower one never does
        if play.subtype != last.subtype:
            return play.subtype > last.subtype

    return play.power > last.power


def can_play(
    candidate: Iterable[Card],
    last_play: Optional[Iterable[Card]],
    is_opening_play: bool = False,
    rules: Optional[RulesConfig] = None,
) -> bool:
    """Check if a candidate play is admissible. Never raises."""
    try:
        check_play(candidate, last_play, is_opening_play, rules)
    except (PlayRejectedError, TypeError, ValueError):
        return False
    return True
