"""Registry of live rooms keyed by room id."""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..agents import HeuristicAgent
from ..config import DEFAULT_CONFIG, EngineConfig
from ..core.bigtwo import BigTwoMatch
from ..core.events import EventSink
from ..errors import RoomError
from .commands import Command
from .room import Room

logger = logging.getLogger(__name__)


class RoomRegistry:
    """Owns every running room.

    A room is added when its match starts and removed when the match ends,
    every seat has been taken over by the AI, or close_room() is called.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self._rooms: Dict[str, Room] = {}

    def __contains__(self, room_id: str) -> bool:
        return room_id in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)

    @property
    def room_ids(self) -> List[str]:
        return list(self._rooms)

    def get(self, room_id: str) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            raise RoomError(f"Room not found: {room_id}")
        return room

    async def open_room(
        self,
        room_id: str,
        players: Sequence[str],
        sink: EventSink,
        names: Optional[Mapping[str, str]] = None,
        ai_players: Iterable[str] = (),
        seed: Optional[int] = None,
    ) -> Room:
        """Deal a new match for the room and start processing its commands."""
        if room_id in self._rooms:
            raise RoomError(f"Room exists: {room_id}")
        if len(players) > self.config.room.num_seats:
            raise RoomError(f"Room {room_id} seats at most {self.config.room.num_seats} players")

        rules = self.config.rules
        names = dict(names or {})
        agents = {pid: HeuristicAgent(f"{names.get(pid, pid)} (AI)", rules=rules) for pid in ai_players}
        match = BigTwoMatch(players, names=names, agents=agents, seed=seed, rules=rules)

        room = Room(room_id, match, sink, self.config.room, on_closed=self._forget)
        self._rooms[room_id] = room
        logger.info("Room %s opened with %d seats", room_id, len(players))
        await room.start()
        return room

    def submit(self, room_id: str, command: Command) -> None:
        """Route an inbound command to its room."""
        self.get(room_id).submit(command)

    async def close_room(self, room_id: str) -> None:
        room = self._rooms.get(room_id)
        if room is None:
            return
        await room.close()
        self._forget(room_id)

    async def close_all(self) -> None:
        for room_id in list(self._rooms):
            await self.close_room(room_id)

    def _forget(self, room_id: str) -> None:
        if self._rooms.pop(room_id, None) is not None:
            logger.debug("Room %s removed from registry", room_id)
