"""Big Two rules: classification, legality and move generation."""

from .types import (
    PLAY_SIZES,
    STRAIGHT_WINDOWS,
    Combination,
    FiveCardType,
    PlayInfo,
    PlayType,
)
from .hand_classification import classify, is_straight
from .legality import beats, can_play, check_play
from .move_generation import enumerate_legal_moves, enumerate_legal_plays

__all__ = [
    # Types
    "PLAY_SIZES",
    "STRAIGHT_WINDOWS",
    "Combination",
    "FiveCardType",
    "PlayInfo",
    "PlayType",
    # Hand classification
    "classify",
    "is_straight",
    # Legality
    "beats",
    "can_play",
    "check_play",
    # Move generation
    "enumerate_legal_moves",
    "enumerate_legal_plays",
]
