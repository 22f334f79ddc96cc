"""Core Big Two game components."""

from .cards import OPENING_CARD, Card, Suit
from .game import (
    Combination,
    FiveCardType,
    PlayInfo,
    PlayType,
    can_play,
    check_play,
    classify,
    enumerate_legal_moves,
)
from .events import (
    Dealt,
    Event,
    EventSink,
    MatchOver,
    PlayAccepted,
    PlayRejected,
    RoundReset,
    SeatTakenOver,
    TurnAdvanced,
)
from .bigtwo import BigTwoMatch, MatchPhase, Seat, SeatController

__all__ = [
    "OPENING_CARD",
    "Card",
    "Suit",
    "Combination",
    "FiveCardType",
    "PlayInfo",
    "PlayType",
    "can_play",
    "check_play",
    "classify",
    "enumerate_legal_moves",
    "Dealt",
    "Event",
    "EventSink",
    "MatchOver",
    "PlayAccepted",
    "PlayRejected",
    "RoundReset",
    "SeatTakenOver",
    "TurnAdvanced",
    "BigTwoMatch",
    "MatchPhase",
    "Seat",
    "SeatController",
]
