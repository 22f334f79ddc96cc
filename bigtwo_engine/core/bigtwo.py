"""Authoritative Big Two match state machine."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

import numpy as np

from ..config import DEFAULT_RULES, RulesConfig
from ..errors import (
    EmptyTablePass,
    IllegalPlay,
    InvalidCombination,
    InvariantViolation,
    MatchNotInProgress,
    OutOfTurn,
    PlayRejectedError,
    SeatingError,
    UnknownPlayer,
)
from .cards import OPENING_CARD, Card, coerce_card, deal, format_hand, mask_to_cards
from .events import (
    Dealt,
    Event,
    MatchOver,
    PlayAccepted,
    RoundReset,
    SeatTakenOver,
    TurnAdvanced,
)
from .game import Combination, check_play, enumerate_legal_moves, enumerate_legal_plays

if TYPE_CHECKING:
    from ..agents.base_agent import BaseAgent

logger = logging.getLogger(__name__)

MIN_SEATS = 2
MAX_SEATS = 4


class SeatController(Enum):
    """Who decides a seat's actions."""

    HUMAN = "human"
    AI = "ai"


class MatchPhase(Enum):
    DEALT = "dealt"
    IN_PROGRESS = "in_progress"
    GAME_OVER = "game_over"
    CLOSED = "closed"  # torn down after every seat became AI


@dataclass
class Seat:
    """One player's place at the table. The hand lives in BigTwoMatch.hands."""

    player_id: str
    name: str
    controller: SeatController = SeatController.HUMAN
    has_passed: bool = False
    agent: Optional["BaseAgent"] = None

    @property
    def is_ai(self) -> bool:
        return self.controller is SeatController.AI


@dataclass(frozen=True)
class MoveRecord:
    player_id: str
    cards: Optional[Combination]  # None for a pass


AgentFactory = Callable[[Seat, RulesConfig], "BaseAgent"]


def default_agent_factory(seat: Seat, rules: RulesConfig) -> "BaseAgent":
    from ..agents.heuristic_agent import HeuristicAgent

    return HeuristicAgent(f"{seat.name} (AI)", rules=rules)


class BigTwoMatch:
    """Big Two match with turn order, pass counting and win detection.

    All mutations go through submit_play, submit_pass and handle_disconnect.
    Each validates fully before touching state, so a rejected action leaves
    the match exactly as it was.
    """

    # Instance variable type hints
    seats: List[Seat]
    hands: np.ndarray  # shape (num_players, 52) boolean array
    played: np.ndarray  # shape (52,) boolean array
    turn_index: int
    last_play: Optional[Combination]
    last_player_index: Optional[int]
    consecutive_passes: int
    phase: MatchPhase

    def __init__(
        self,
        players: Sequence[str],
        names: Optional[Mapping[str, str]] = None,
        agents: Optional[Mapping[str, "BaseAgent"]] = None,
        hands: Optional[np.ndarray] = None,
        seed: Optional[int] = None,
        rules: Optional[RulesConfig] = None,
        agent_factory: Optional[AgentFactory] = None,
        track_move_history: bool = True,
    ) -> None:
        if not MIN_SEATS <= len(players) <= MAX_SEATS:
            raise SeatingError(f"Need {MIN_SEATS}-{MAX_SEATS} players, got {len(players)}")
        if len(set(players)) != len(players):
            raise SeatingError(f"Duplicate player ids: {list(players)}")

        names = names or {}
        agents = agents or {}
        unknown = set(agents) - set(players)
        if unknown:
            raise SeatingError(f"Agents given for unknown players: {sorted(unknown)}")

        self.rules = rules or DEFAULT_RULES
        self.agent_factory = agent_factory or default_agent_factory
        self.track_move_history = track_move_history
        self.seats = [
            Seat(
                player_id=pid,
                name=names.get(pid, pid),
                controller=SeatController.AI if pid in agents else SeatController.HUMAN,
                agent=agents.get(pid),
            )
            for pid in players
        ]

        self.hands = deal(len(players), seed) if hands is None else np.array(hands, dtype=bool)
        self._validate_hands()

        self.played = np.zeros(52, dtype=bool)
        self.last_play = None
        self.last_player_index = None
        self.consecutive_passes = 0
        self.opening_play_done = False
        self.action_count = 0
        self.winner_id: Optional[str] = None
        self.move_history: List[MoveRecord] = []
        self.phase = MatchPhase.DEALT

        # The holder of the opening card leads
        self.turn_index = int(np.argmax(self.hands[:, OPENING_CARD.index]))

    def _validate_hands(self) -> None:
        if self.hands.shape != (len(self.seats), 52):
            raise SeatingError(f"Hands shape {self.hands.shape} does not match {len(self.seats)} seats")
        per_card = self.hands.sum(axis=0)
        if not np.all(per_card == 1):
            missing = int(np.sum(per_card == 0))
            duplicated = int(np.sum(per_card > 1))
            raise SeatingError(f"Deal must hold each card exactly once ({missing} missing, {duplicated} duplicated)")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def num_players(self) -> int:
        return len(self.seats)

    @property
    def current_seat(self) -> Seat:
        return self.seats[self.turn_index]

    @property
    def current_player_id(self) -> str:
        return self.current_seat.player_id

    @property
    def is_opening_play(self) -> bool:
        return not self.opening_play_done

    @property
    def in_progress(self) -> bool:
        return self.phase is MatchPhase.IN_PROGRESS

    @property
    def all_ai(self) -> bool:
        return all(seat.is_ai for seat in self.seats)

    def seat_index(self, player_id: str) -> int:
        for i, seat in enumerate(self.seats):
            if seat.player_id == player_id:
                return i
        raise UnknownPlayer(f"No seat for player {player_id!r}", player_id)

    def seat(self, player_id: str) -> Seat:
        return self.seats[self.seat_index(player_id)]

    def hand_of(self, player_id: str) -> List[Card]:
        return mask_to_cards(self.hands[self.seat_index(player_id)])

    def hand_counts(self) -> Dict[str, int]:
        counts = self.hands.sum(axis=1)
        return {seat.player_id: int(counts[i]) for i, seat in enumerate(self.seats)}

    def opponent_counts(self, player_id: str) -> Dict[str, int]:
        return {pid: n for pid, n in self.hand_counts().items() if pid != player_id}

    def legal_moves(self, player_id: str) -> List[Combination]:
        """Combinations the player could play right now if it were their turn."""
        idx = self.seat_index(player_id)
        return enumerate_legal_moves(self.hands[idx], self.last_play, self.is_opening_play, self.rules)

    def snapshot(self, player_id: str) -> Dict[str, Any]:
        """State visible to one seat."""
        idx = self.seat_index(player_id)
        return {
            "player_id": player_id,
            "phase": self.phase.value,
            "hand": [str(c) for c in mask_to_cards(self.hands[idx])],
            "hand_counts": self.hand_counts(),
            "current_player_id": self.current_player_id,
            "last_play": [str(c) for c in self.last_play] if self.last_play else None,
            "last_player_id": (
                self.seats[self.last_player_index].player_id if self.last_player_index is not None else None
            ),
            "consecutive_passes": self.consecutive_passes,
            "passed": [seat.player_id for seat in self.seats if seat.has_passed],
            "ai_seats": [seat.player_id for seat in self.seats if seat.is_ai],
            "winner_id": self.winner_id,
        }

    def check_invariants(self) -> None:
        """Check card conservation and counter bounds.

        Raises:
            InvariantViolation: naming the first broken invariant
        """
        per_card = self.hands.sum(axis=0) + self.played
        if not np.all(per_card == 1):
            raise InvariantViolation("card conservation violated")
        if not 0 <= self.turn_index < self.num_players:
            raise InvariantViolation(f"turn index {self.turn_index} out of range")
        if not 0 <= self.consecutive_passes < self.num_players - 1:
            raise InvariantViolation(f"pass counter {self.consecutive_passes} out of range")
        if self.last_play is None and self.consecutive_passes:
            raise InvariantViolation("passes counted on an empty table")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> List[Event]:
        """Deal hands to human seats and announce the opening turn."""
        if self.phase is not MatchPhase.DEALT:
            raise MatchNotInProgress(f"Match already {self.phase.value}")
        self.phase = MatchPhase.IN_PROGRESS

        events: List[Event] = []
        for i, seat in enumerate(self.seats):
            if not seat.is_ai:
                events.append(Dealt(seat.player_id, tuple(mask_to_cards(self.hands[i]))))
        events.append(TurnAdvanced(self.current_player_id))
        logger.info(
            "Match started with %s; %s opens",
            [seat.player_id for seat in self.seats],
            self.current_player_id,
        )
        return events

    def close(self) -> None:
        """Tear the match down; no further actions are accepted."""
        if self.phase is not MatchPhase.GAME_OVER:
            self.phase = MatchPhase.CLOSED

    # ------------------------------------------------------------------
    # Player actions
    # ------------------------------------------------------------------

    def _require_turn(self, player_id: str) -> int:
        if not self.in_progress:
            raise MatchNotInProgress(f"Match is {self.phase.value}", player_id)
        idx = self.seat_index(player_id)
        if idx != self.turn_index:
            raise OutOfTurn(f"It is {self.current_player_id}'s turn", player_id)
        return idx

    def submit_play(self, player_id: str, cards: Iterable[Any]) -> List[Event]:
        """Lay down a combination.

        Raises:
            PlayRejectedError subclasses; state is unchanged when raised.
        """
        idx = self._require_turn(player_id)

        try:
            combo = [coerce_card(c) for c in cards]
        except (TypeError, ValueError) as e:
            raise InvalidCombination(f"Unreadable cards: {e}", player_id) from e

        missing = [c for c in combo if not self.hands[idx, c.index]]
        if missing:
            raise IllegalPlay(f"Cards not in hand: {format_hand(missing)}", player_id)

        try:
            info = check_play(combo, self.last_play, self.is_opening_play, self.rules)
        except PlayRejectedError as e:
            e.player_id = player_id
            raise

        # Validation done; mutate
        indices = [c.index for c in info.cards]
        self.hands[idx, indices] = False
        self.played[indices] = True
        self.last_play = info.cards
        self.last_player_index = idx
        self.consecutive_passes = 0
        self.opening_play_done = True
        self.action_count += 1
        for seat in self.seats:
            seat.has_passed = False
        if self.track_move_history:
            self.move_history.append(MoveRecord(player_id, info.cards))

        remaining = int(self.hands[idx].sum())
        logger.debug("%s played %s (%s), %d left", player_id, format_hand(info.cards), info.label, remaining)
        events: List[Event] = [PlayAccepted(player_id, info.cards, remaining, info.label)]

        if remaining == 0:
            self.phase = MatchPhase.GAME_OVER
            self.winner_id = player_id
            counts = self.hand_counts()
            logger.info("Match over: %s wins; final counts %s", player_id, counts)
            events.append(MatchOver(player_id, counts))
            return events

        self.turn_index = (idx + 1) % self.num_players
        events.append(TurnAdvanced(self.current_player_id))
        return events

    def submit_pass(self, player_id: str) -> List[Event]:
        """Decline to play. Not allowed while holding the lead."""
        idx = self._require_turn(player_id)
        if self.last_play is None:
            raise EmptyTablePass("Cannot pass on an empty table; you have the lead", player_id)

        self.consecutive_passes += 1
        self.seats[idx].has_passed = True
        self.action_count += 1
        if self.track_move_history:
            self.move_history.append(MoveRecord(player_id, None))
        self.turn_index = (idx + 1) % self.num_players
        logger.debug("%s passed (%d in a row)", player_id, self.consecutive_passes)

        events: List[Event] = []
        if self.consecutive_passes == self.num_players - 1:
            # Round reset: the last player to play now leads
            self.last_play = None
            self.consecutive_passes = 0
            for seat in self.seats:
                seat.has_passed = False
            logger.debug("Round reset; %s leads", self.current_player_id)
            events.append(RoundReset())

        events.append(TurnAdvanced(self.current_player_id))
        return events

    def handle_disconnect(self, player_id: str, autoplay: bool = True) -> List[Event]:
        """Hand a seat over to the AI without touching hand, seat or turn.

        With autoplay, AI seats act immediately when the turn is theirs.
        When every seat is AI-controlled the match is closed.
        """
        idx = self.seat_index(player_id)
        seat = self.seats[idx]
        if seat.is_ai or self.phase in (MatchPhase.GAME_OVER, MatchPhase.CLOSED):
            return []

        seat.controller = SeatController.AI
        if seat.agent is None:
            seat.agent = self.agent_factory(seat, self.rules)
        logger.info("Seat %s disconnected; now AI-controlled", player_id)
        events: List[Event] = [SeatTakenOver(player_id)]

        if self.all_ai:
            logger.info("All seats AI-controlled; closing match")
            self.close()
            return events

        if autoplay and self.in_progress and idx == self.turn_index:
            events.extend(self.advance_ai_turns())
        return events

    # ------------------------------------------------------------------
    # AI turns
    # ------------------------------------------------------------------

    def play_ai_turn(self) -> List[Event]:
        """Let the agent on the current seat act once."""
        if not self.in_progress:
            raise MatchNotInProgress(f"Match is {self.phase.value}")
        seat = self.current_seat
        if not seat.is_ai:
            raise OutOfTurn(f"{seat.player_id} is not AI-controlled", seat.player_id)
        if seat.agent is None:
            seat.agent = self.agent_factory(seat, self.rules)

        hand = mask_to_cards(self.hands[self.turn_index])
        decision = seat.agent.decide(hand, self.last_play, self.opponent_counts(seat.player_id))

        try:
            if decision is None:
                return self.submit_pass(seat.player_id)
            return self.submit_play(seat.player_id, decision)
        except PlayRejectedError as e:
            logger.warning("AI on seat %s chose a rejected action (%s); substituting a fallback", seat.player_id, e.code)
            return self._fallback_ai_action(seat)

    def _fallback_ai_action(self, seat: Seat) -> List[Event]:
        if self.last_play is not None:
            return self.submit_pass(seat.player_id)
        # Holding the lead: play the weakest single available
        plays = enumerate_legal_plays(self.hands[self.turn_index], None, self.is_opening_play, self.rules)
        return self.submit_play(seat.player_id, plays[0].cards)

    def advance_ai_turns(self, max_turns: Optional[int] = None) -> List[Event]:
        """Play consecutive AI turns until a human seat is up or the match ends."""
        events: List[Event] = []
        turns = 0
        while self.in_progress and self.current_seat.is_ai:
            if max_turns is not None and turns >= max_turns:
                break
            events.extend(self.play_ai_turn())
            turns += 1
        return events

