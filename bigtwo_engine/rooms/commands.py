"""Inbound commands, one type per transport event."""

from dataclasses import dataclass
from typing import Any, Tuple


@dataclass(frozen=True)
class Command:
    """Base class for commands queued on a room."""


@dataclass(frozen=True)
class RequestPlay(Command):
    player_id: str
    cards: Tuple[Any, ...]

    def __post_init__(self):
        object.__setattr__(self, "cards", tuple(self.cards) if self.cards is not None else ())


@dataclass(frozen=True)
class RequestPass(Command):
    player_id: str


@dataclass(frozen=True)
class PlayerDisconnected(Command):
    player_id: str


@dataclass(frozen=True)
class AITurn(Command):
    """Scheduled AI action; token is the match action count it was planned for."""

    token: int
