"""Room runtime: registry, serialized per-room handler and inbound commands."""

from .commands import AITurn, Command, PlayerDisconnected, RequestPass, RequestPlay
from .registry import RoomRegistry
from .room import Room

__all__ = [
    "AITurn",
    "Command",
    "PlayerDisconnected",
    "RequestPass",
    "RequestPlay",
    "Room",
    "RoomRegistry",
]
