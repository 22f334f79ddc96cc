"""Outbound match events handed to the transport layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Protocol, Tuple

from .cards import Card, card_to_string


@dataclass(frozen=True)
class Event:
    """Base event. recipient None means broadcast to the whole room."""

    name: ClassVar[str] = "event"

    @property
    def recipient(self) -> Optional[str]:
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"event": self.name, **self._payload()}

    def _payload(self) -> Dict[str, Any]:
        return {}


def _cards_payload(cards: Tuple[Card, ...]):
    return [card_to_string(c) for c in cards]


@dataclass(frozen=True)
class Dealt(Event):
    """Private hand delivery at match start."""

    name: ClassVar[str] = "dealt"
    player_id: str
    hand: Tuple[Card, ...]

    @property
    def recipient(self) -> Optional[str]:
        return self.player_id

    def _payload(self):
        return {"player_id": self.player_id, "hand": _cards_payload(self.hand)}


@dataclass(frozen=True)
class PlayAccepted(Event):
    name: ClassVar[str] = "play_accepted"
    player_id: str
    cards: Tuple[Card, ...]
    remaining_count: int
    play_type: str = ""

    def _payload(self):
        return {
            "player_id": self.player_id,
            "cards": _cards_payload(self.cards),
            "remaining_count": self.remaining_count,
            "play_type": self.play_type,
        }


@dataclass(frozen=True)
class PlayRejected(Event):
    """Sent to the acting seat only."""

    name: ClassVar[str] = "play_rejected"
    player_id: str
    reason: str
    code: str = "rejected"

    @property
    def recipient(self) -> Optional[str]:
        return self.player_id

    def _payload(self):
        return {"player_id": self.player_id, "reason": self.reason, "code": self.code}


@dataclass(frozen=True)
class TurnAdvanced(Event):
    name: ClassVar[str] = "turn_advanced"
    current_player_id: str

    def _payload(self):
        return {"current_player_id": self.current_player_id}


@dataclass(frozen=True)
class RoundReset(Event):
    name: ClassVar[str] = "round_reset"


@dataclass(frozen=True)
class MatchOver(Event):
    name: ClassVar[str] = "match_over"
    winner_id: str
    final_hand_counts: Dict[str, int] = field(default_factory=dict)

    def _payload(self):
        return {"winner_id": self.winner_id, "final_hand_counts": dict(self.final_hand_counts)}


@dataclass(frozen=True)
class SeatTakenOver(Event):
    """A disconnected seat is now played by the AI."""

    name: ClassVar[str] = "seat_taken_over"
    player_id: str

    def _payload(self):
        return {"player_id": self.player_id}


class EventSink(Protocol):
    """Transport-side receiver for outbound events."""

    def deliver(self, event: Event) -> None:
        ...
