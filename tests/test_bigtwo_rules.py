"""Unit tests for Big Two match rules enforcement."""

import os
import sys

import numpy as np
import pytest

# Add project root to path for tests
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bigtwo_engine.agents import BaseAgent, GreedyAgent, HeuristicAgent
from bigtwo_engine.core.bigtwo import BigTwoMatch, MatchPhase, SeatController
from bigtwo_engine.core.cards import OPENING_CARD, cards_to_mask, strings_to_cards
from bigtwo_engine.core.events import (
    Dealt,
    MatchOver,
    PlayAccepted,
    RoundReset,
    SeatTakenOver,
    TurnAdvanced,
)
from bigtwo_engine.errors import (
    EmptyTablePass,
    IllegalPlay,
    InvalidCombination,
    InvariantViolation,
    MatchNotInProgress,
    OpeningViolation,
    OutOfTurn,
    SeatingError,
    UnknownPlayer,
)

PLAYERS = ["A", "B", "C", "D"]


class UnmatchedAgent(BaseAgent):
    """Always proposes its two lowest cards, which rarely form a pair."""

    def choose(self, hand, last_play, opponent_counts):
        return tuple(hand[:2])


def cards(text):
    return strings_to_cards(text.split())


def build_hands(*hand_strs):
    """Hands array from explicit hands; the last seat receives every card not listed."""
    hands = np.zeros((len(hand_strs) + 1, 52), dtype=bool)
    for i, text in enumerate(hand_strs):
        hands[i] = cards_to_mask(cards(text))
    hands[-1] = ~hands[:-1].any(axis=0)
    return hands


def state_of(match):
    return (
        match.hands.copy(),
        match.played.copy(),
        match.turn_index,
        match.last_play,
        match.consecutive_passes,
        match.action_count,
        match.phase,
    )


def assert_same_state(before, after):
    assert np.array_equal(before[0], after[0])
    assert np.array_equal(before[1], after[1])
    assert before[2:] == after[2:]


class TestMatchSetup:
    """Seating, dealing and the opening turn."""

    def test_opening_card_holder_leads(self):
        for seed in range(10):
            match = BigTwoMatch(PLAYERS, seed=seed)
            idx = match.seat_index(match.current_player_id)
            assert match.hands[idx, OPENING_CARD.index], f"Leader lacks the 3 of clubs (seed {seed})"

    def test_start_deals_to_humans(self):
        match = BigTwoMatch(PLAYERS, seed=1, agents={"B": GreedyAgent("bot")})
        events = match.start()
        dealt = [e for e in events if isinstance(e, Dealt)]
        assert {e.player_id for e in dealt} == {"A", "C", "D"}
        assert all(len(e.hand) == 13 for e in dealt)
        assert all(e.recipient == e.player_id for e in dealt)
        assert events[-1] == TurnAdvanced(match.current_player_id)
        assert match.phase is MatchPhase.IN_PROGRESS

    def test_start_twice(self):
        match = BigTwoMatch(PLAYERS, seed=1)
        match.start()
        with pytest.raises(MatchNotInProgress):
            match.start()

    def test_actions_before_start(self):
        match = BigTwoMatch(PLAYERS, hands=build_hands("3C", "4C", "5C"))
        with pytest.raises(MatchNotInProgress):
            match.submit_play("A", cards("3C"))

    @pytest.mark.parametrize("players", [["A"], ["A", "B", "C", "D", "E"], ["A", "A", "B", "C"]])
    def test_bad_seating(self, players):
        with pytest.raises(SeatingError):
            BigTwoMatch(players)

    def test_agent_for_unknown_player(self):
        with pytest.raises(SeatingError):
            BigTwoMatch(PLAYERS, agents={"Z": GreedyAgent()})

    def test_inconsistent_hands(self):
        hands = build_hands("3C", "4C", "5C")
        hands[1, 0] = True  # 3C dealt twice
        with pytest.raises(SeatingError):
            BigTwoMatch(PLAYERS, hands=hands)
        with pytest.raises(SeatingError):
            BigTwoMatch(PLAYERS, hands=np.zeros((3, 52), dtype=bool))

    def test_unknown_player(self):
        match = BigTwoMatch(PLAYERS, seed=0)
        match.start()
        with pytest.raises(UnknownPlayer):
            match.submit_play("Z", cards("3C"))


class TestPlays:
    def setup_method(self):
        self.match = BigTwoMatch(PLAYERS, hands=build_hands("3C 4C 9S", "3D 5D", "3H 6H"))
        self.match.start()

    def test_opening_violation_leaves_state_unchanged(self):
        before = state_of(self.match)
        with pytest.raises(OpeningViolation) as exc:
            self.match.submit_play("A", cards("4C"))
        assert exc.value.player_id == "A"
        assert exc.value.code == "opening_violation"
        assert_same_state(before, state_of(self.match))

    def test_accepted_play(self):
        events = self.match.submit_play("A", ["3C"])
        assert events == [
            PlayAccepted("A", tuple(cards("3C")), 2, "Single"),
            TurnAdvanced("B"),
        ]
        assert not self.match.hands[0, OPENING_CARD.index]
        assert self.match.played[OPENING_CARD.index]
        assert self.match.last_play == tuple(cards("3C"))
        assert not self.match.is_opening_play
        self.match.check_invariants()

    def test_payload_forms(self):
        self.match.submit_play("A", [{"suit": "clubs", "rank": 3}])
        self.match.submit_play("B", ["3D"])
        assert self.match.current_player_id == "C"

    def test_out_of_turn(self):
        before = state_of(self.match)
        with pytest.raises(OutOfTurn):
            self.match.submit_play("B", cards("3D"))
        with pytest.raises(OutOfTurn):
            self.match.submit_pass("C")
        assert_same_state(before, state_of(self.match))

    def test_cards_not_in_hand(self):
        with pytest.raises(IllegalPlay):
            self.match.submit_play("A", cards("3C 3D"))

    def test_unreadable_cards(self):
        with pytest.raises(InvalidCombination):
            self.match.submit_play("A", ["??"])
        with pytest.raises(InvalidCombination):
            self.match.submit_play("A", cards("3C 4C"))

    def test_must_beat_table(self):
        self.match.submit_play("A", cards("3C"))
        self.match.submit_play("B", cards("5D"))
        before = state_of(self.match)
        with pytest.raises(IllegalPlay):
            self.match.submit_play("C", cards("3H"))
        assert_same_state(before, state_of(self.match))

    def test_empty_table_pass(self):
        with pytest.raises(EmptyTablePass):
            self.match.submit_pass("A")

    def test_snapshot(self):
        self.match.submit_play("A", cards("3C"))
        snap = self.match.snapshot("B")
        assert snap["hand"] == ["3D", "5D"]
        assert snap["current_player_id"] == "B"
        assert snap["last_play"] == ["3C"]
        assert snap["last_player_id"] == "A"
        assert snap["hand_counts"]["A"] == 2
        assert snap["phase"] == "in_progress"


class TestPassesAndRounds:
    def setup_method(self):
        self.match = BigTwoMatch(PLAYERS, hands=build_hands("3C 4C", "3D", "3H 8H"))
        self.match.start()
        self.match.submit_play("A", cards("3C"))

    def test_three_passes_reset_round(self):
        assert self.match.submit_pass("B") == [TurnAdvanced("C")]
        assert self.match.submit_pass("C") == [TurnAdvanced("D")]
        assert self.match.consecutive_passes == 2
        events = self.match.submit_pass("D")
        assert events == [RoundReset(), TurnAdvanced("A")]
        assert self.match.last_play is None
        assert self.match.consecutive_passes == 0
        assert not any(seat.has_passed for seat in self.match.seats)
        self.match.check_invariants()

    def test_leader_after_reset_can_lead_anything(self):
        for pid in ["B", "C", "D"]:
            self.match.submit_pass(pid)
        with pytest.raises(EmptyTablePass):
            self.match.submit_pass("A")
        events = self.match.submit_play("A", cards("4C"))
        assert isinstance(events[0], PlayAccepted)

    def test_play_resets_pass_count(self):
        self.match.submit_pass("B")
        self.match.submit_play("C", cards("3H"))
        assert self.match.in_progress
        assert self.match.consecutive_passes == 0
        assert not any(seat.has_passed for seat in self.match.seats)
        self.match.submit_pass("D")
        self.match.submit_pass("A")
        events = self.match.submit_pass("B")
        assert events == [RoundReset(), TurnAdvanced("C")]

    def test_passed_seat_may_play_later_in_round(self):
        self.match.submit_pass("B")
        assert self.match.seats[1].has_passed
        self.match.submit_pass("C")
        self.match.submit_play("D", cards("5S"))
        self.match.submit_pass("A")
        assert self.match.current_player_id == "B"


class TestMatchEnd:
    def setup_method(self):
        self.match = BigTwoMatch(PLAYERS, hands=build_hands("3C", "3D 4D", "3H"))
        self.match.start()

    def test_last_card_ends_match(self):
        events = self.match.submit_play("A", cards("3C"))
        assert len(events) == 2
        assert isinstance(events[0], PlayAccepted)
        assert events[0].remaining_count == 0
        assert isinstance(events[1], MatchOver)
        assert events[1].winner_id == "A"
        assert events[1].final_hand_counts == {"A": 0, "B": 2, "C": 1, "D": 48}
        assert not any(isinstance(e, TurnAdvanced) for e in events)
        assert self.match.phase is MatchPhase.GAME_OVER
        assert self.match.winner_id == "A"

    def test_no_actions_after_match_over(self):
        self.match.submit_play("A", cards("3C"))
        with pytest.raises(MatchNotInProgress):
            self.match.submit_play("B", cards("4D"))
        with pytest.raises(MatchNotInProgress):
            self.match.submit_pass("B")
        assert self.match.handle_disconnect("B") == []


class TestDisconnect:
    def setup_method(self):
        self.match = BigTwoMatch(PLAYERS, seed=5)
        self.match.start()
        self.leader = self.match.current_player_id

    def test_takeover_keeps_hand_and_turn(self):
        other = next(pid for pid in PLAYERS if pid != self.leader)
        hand_before = self.match.hand_of(other)
        events = self.match.handle_disconnect(other)
        assert events == [SeatTakenOver(other)]
        seat = self.match.seat(other)
        assert seat.controller is SeatController.AI
        assert isinstance(seat.agent, HeuristicAgent)
        assert self.match.hand_of(other) == hand_before
        assert self.match.current_player_id == self.leader

    def test_takeover_on_turn_plays_immediately(self):
        events = self.match.handle_disconnect(self.leader)
        assert events[0] == SeatTakenOver(self.leader)
        assert isinstance(events[1], PlayAccepted)
        assert events[1].player_id == self.leader
        assert OPENING_CARD in events[1].cards
        self.match.check_invariants()

    def test_takeover_without_autoplay(self):
        events = self.match.handle_disconnect(self.leader, autoplay=False)
        assert events == [SeatTakenOver(self.leader)]
        assert self.match.is_opening_play
        self.match.play_ai_turn()
        assert not self.match.is_opening_play

    def test_repeat_disconnect_is_noop(self):
        self.match.handle_disconnect(self.leader, autoplay=False)
        assert self.match.handle_disconnect(self.leader) == []

    def test_all_ai_closes_match(self):
        for pid in PLAYERS:
            self.match.handle_disconnect(pid, autoplay=False)
        assert self.match.phase is MatchPhase.CLOSED
        with pytest.raises(MatchNotInProgress):
            self.match.submit_play(self.leader, [OPENING_CARD])


class TestAllAIMatch:
    """Full matches played by computer seats."""

    @pytest.mark.parametrize("seed", range(5))
    def test_heuristic_match_finishes(self, seed):
        agents = {pid: HeuristicAgent(pid) for pid in PLAYERS}
        match = BigTwoMatch(PLAYERS, agents=agents, seed=seed)
        events = match.start()
        assert not any(isinstance(e, Dealt) for e in events)

        for _ in range(1000):
            if not match.in_progress:
                break
            match.play_ai_turn()
            match.check_invariants()

        assert match.phase is MatchPhase.GAME_OVER
        counts = match.hand_counts()
        assert counts[match.winner_id] == 0
        assert sum(counts.values()) + int(match.played.sum()) == 52

    def test_move_history(self):
        agents = {pid: GreedyAgent(pid) for pid in PLAYERS}
        match = BigTwoMatch(PLAYERS, agents=agents, seed=2)
        match.start()
        match.advance_ai_turns()
        assert len(match.move_history) == match.action_count
        first = match.move_history[0]
        assert OPENING_CARD in first.cards

    def test_two_seat_match(self):
        agents = {pid: GreedyAgent(pid) for pid in ["A", "B"]}
        match = BigTwoMatch(["A", "B"], agents=agents, seed=4)
        match.start()
        match.advance_ai_turns()
        assert match.phase is MatchPhase.GAME_OVER


class TestAIFallback:
    """A rejected AI decision is replaced rather than stalling the match."""

    def test_rejected_lead_becomes_weakest_single(self):
        hands = build_hands("3C 4C 9S", "3D 5D", "3H 6H")
        match = BigTwoMatch(PLAYERS, hands=hands, agents={"A": UnmatchedAgent("bad")})
        match.start()
        events = match.play_ai_turn()
        assert events[0] == PlayAccepted("A", tuple(cards("3C")), 2, "Single")
        assert match.current_player_id == "B"

    def test_rejected_follow_becomes_pass(self):
        hands = build_hands("3C 4C 9S", "3D 5D", "3H 6H")
        match = BigTwoMatch(PLAYERS, hands=hands, agents={"B": UnmatchedAgent("bad")})
        match.start()
        match.submit_play("A", cards("3C"))
        events = match.play_ai_turn()
        assert events == [TurnAdvanced("C")]
        assert match.seat("B").has_passed
        match.check_invariants()


class TestInvariantChecks:
    """check_invariants raises rather than relying on assert statements."""

    def setup_method(self):
        self.match = BigTwoMatch(PLAYERS, hands=build_hands("3C 4C", "3D", "3H 8H"))
        self.match.start()

    def test_consistent_state_passes(self):
        self.match.check_invariants()
        self.match.submit_play("A", cards("3C"))
        self.match.check_invariants()

    def test_lost_card(self):
        self.match.hands[0, OPENING_CARD.index] = False
        with pytest.raises(InvariantViolation, match="conservation"):
            self.match.check_invariants()

    def test_duplicated_card(self):
        self.match.played[OPENING_CARD.index] = True
        with pytest.raises(InvariantViolation, match="conservation"):
            self.match.check_invariants()

    def test_turn_index_out_of_range(self):
        self.match.turn_index = 4
        with pytest.raises(InvariantViolation, match="turn index"):
            self.match.check_invariants()

    def test_pass_counter_out_of_range(self):
        self.match.submit_play("A", cards("3C"))
        self.match.consecutive_passes = 3
        with pytest.raises(InvariantViolation, match="pass counter"):
            self.match.check_invariants()

    def test_passes_on_empty_table(self):
        self.match.consecutive_passes = 1
        with pytest.raises(InvariantViolation, match="empty table"):
            self.match.check_invariants()
