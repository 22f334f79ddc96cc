"""Per-room serialized command handler."""

import asyncio
import logging
from typing import Callable, Iterable, Optional

from ..config import RoomConfig
from ..core.bigtwo import BigTwoMatch, MatchPhase
from ..core.events import Event, EventSink, PlayRejected
from ..errors import MatchNotInProgress, OutOfTurn, PlayRejectedError
from .commands import AITurn, Command, PlayerDisconnected, RequestPass, RequestPlay

logger = logging.getLogger(__name__)

_STOP = object()


class Room:
    """Owns one match and applies commands to it one at a time.

    Commands are queued by submit() and drained by a single worker task, so
    the match is never mutated concurrently. AI seats act through a delayed
    task that queues an AITurn; the task is cancelled when the room closes,
    and a stale AITurn (the match moved on) is dropped.
    """

    def __init__(
        self,
        room_id: str,
        match: BigTwoMatch,
        sink: EventSink,
        config: Optional[RoomConfig] = None,
        on_closed: Optional[Callable[[str], None]] = None,
    ):
        self.room_id = room_id
        self.match = match
        self.sink = sink
        self.config = config or RoomConfig()
        self.on_closed = on_closed
        self.closed = False

        self._queue: "asyncio.Queue" = asyncio.Queue()
        self._worker: Optional[asyncio.Task] = None
        self._ai_task: Optional[asyncio.Task] = None
        self._ai_token: Optional[int] = None
        self._closed_event = asyncio.Event()

    async def start(self) -> None:
        """Deal, announce the first turn and begin processing commands."""
        if self._worker is not None:
            return
        self._worker = asyncio.create_task(self._run(), name=f"room-{self.room_id}")
        self._emit(self.match.start())
        self._after_dispatch()

    def submit(self, command: Command) -> None:
        """Queue an inbound command; never blocks."""
        if self.closed:
            player_id = getattr(command, "player_id", None)
            if player_id is not None:
                self._emit([PlayRejected(player_id, "Room is closed", MatchNotInProgress.code)])
            return
        self._queue.put_nowait(command)

    async def drain(self) -> None:
        """Wait until every queued command has been handled."""
        await self._queue.join()

    async def wait_closed(self) -> None:
        await self._closed_event.wait()

    async def close(self) -> None:
        """Tear the room down and stop its worker."""
        if not self.closed:
            self.match.close()
            self._finish()
        worker = self._worker
        if worker is not None and worker is not asyncio.current_task() and not worker.done():
            self._queue.put_nowait(_STOP)
            await worker

    # ------------------------------------------------------------------

    async def _run(self) -> None:
        while not self.closed:
            command = await self._queue.get()
            try:
                if command is _STOP:
                    break
                self._dispatch(command)
            finally:
                self._queue.task_done()
        # Release anyone waiting on drain()
        while not self._queue.empty():
            self._queue.get_nowait()
            self._queue.task_done()

    def _dispatch(self, command: Command) -> None:
        logger.debug("Room %s handling %s", self.room_id, command)
        player_id = getattr(command, "player_id", None)
        try:
            if isinstance(command, AITurn):
                events = self._run_ai_turn(command)
            elif isinstance(command, RequestPlay):
                self._require_human(command.player_id)
                events = self.match.submit_play(command.player_id, command.cards)
            elif isinstance(command, RequestPass):
                self._require_human(command.player_id)
                events = self.match.submit_pass(command.player_id)
            elif isinstance(command, PlayerDisconnected):
                events = self.match.handle_disconnect(command.player_id, autoplay=False)
            else:
                raise TypeError(f"Unknown command: {command!r}")
        except PlayRejectedError as e:
            logger.debug("Room %s rejected %s: %s", self.room_id, command, e)
            self._emit([PlayRejected(player_id or "", e.reason, e.code)])
            return
        except Exception:
            logger.exception("Room %s failed handling %s", self.room_id, command)
            if player_id is not None:
                self._emit([PlayRejected(player_id, "Internal error", "internal_error")])
            return

        self._emit(events)
        self._after_dispatch()

    def _require_human(self, player_id: str) -> None:
        if self.match.seat(player_id).is_ai:
            raise OutOfTurn("Seat is under AI control", player_id)

    def _run_ai_turn(self, command: AITurn) -> Iterable[Event]:
        match = self.match
        if command.token != match.action_count or not match.in_progress or not match.current_seat.is_ai:
            logger.debug("Room %s dropping stale AI turn %d", self.room_id, command.token)
            return []
        self._ai_task = None
        self._ai_token = None
        return match.play_ai_turn()

    def _after_dispatch(self) -> None:
        if self.match.phase in (MatchPhase.GAME_OVER, MatchPhase.CLOSED):
            self._finish()
            return
        self._schedule_ai_if_needed()

    def _schedule_ai_if_needed(self) -> None:
        match = self.match
        if not match.in_progress or not match.current_seat.is_ai:
            return
        token = match.action_count
        if self._ai_token == token and self._ai_task is not None and not self._ai_task.done():
            return
        self._cancel_ai_task()
        self._ai_token = token
        self._ai_task = asyncio.create_task(self._delayed_ai_turn(token))

    async def _delayed_ai_turn(self, token: int) -> None:
        await asyncio.sleep(self.config.ai_delay)
        if not self.closed:
            self._queue.put_nowait(AITurn(token))

    def _cancel_ai_task(self) -> None:
        if self._ai_task is not None and not self._ai_task.done():
            self._ai_task.cancel()
        self._ai_task = None
        self._ai_token = None

    def _finish(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._cancel_ai_task()
        logger.info("Room %s closed (%s)", self.room_id, self.match.phase.value)
        if self.on_closed is not None:
            self.on_closed(self.room_id)
        self._closed_event.set()

    def _emit(self, events: Iterable[Event]) -> None:
        for event in events:
            self.sink.deliver(event)
