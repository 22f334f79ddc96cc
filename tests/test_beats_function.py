"""Tests for play comparison and legality checks."""

import os
import sys

import pytest

# Add project root to path for tests
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bigtwo_engine.config import RulesConfig
from bigtwo_engine.core.cards import strings_to_cards
from bigtwo_engine.core.game import FiveCardType, beats, can_play, check_play, classify
from bigtwo_engine.errors import IllegalPlay, InvalidCombination, OpeningViolation

# One example per five-card sub-shape, weakest to strongest
FIVE_CARD_LADDER = [
    "3C 4D 5H 6S 7D",  # straight
    "3H 5H 7H 9H JH",  # flush
    "4C 4D 4H 5C 5D",  # full house
    "9C 9D 9H 9S 3D",  # four of a kind
    "3S 4S 5S 6S 7S",  # straight flush
]


def cards(text):
    return strings_to_cards(text.split())


class TestBeats:
    """Test the beats() comparison between classified plays."""

    def test_higher_single_beats_lower(self):
        assert beats(classify(cards("2C")), classify(cards("AS")))
        assert not beats(classify(cards("AS")), classify(cards("2C")))

    def test_suit_breaks_single_ties(self):
        assert beats(classify(cards("5S")), classify(cards("5H")))
        assert not beats(classify(cards("5C")), classify(cards("5D")))

    def test_pair_compared_by_top_card(self):
        assert beats(classify(cards("5S 5C")), classify(cards("5H 5D")))
        assert beats(classify(cards("6C 6D")), classify(cards("5H 5S")))

    def test_irreflexive(self):
        for text in ["3C", "2S", "7C 7D"] + FIVE_CARD_LADDER:
            info = classify(cards(text))
            assert not beats(info, info), f"{text} must not beat itself"

    def test_sizes_never_cross(self):
        assert not beats(classify(cards("2S 2H")), classify(cards("3C")))
        assert not beats(classify(cards("3C 4C 5C 6C 7C")), classify(cards("3D 3H")))

    def test_five_card_hierarchy(self):
        infos = [classify(cards(text)) for text in FIVE_CARD_LADDER]
        assert [info.subtype for info in infos] == sorted(FiveCardType)
        for i, stronger in enumerate(infos):
            for weaker in infos[:i]:
                assert beats(stronger, weaker), f"{stronger.label} should beat {weaker.label}"
                assert not beats(weaker, stronger), f"{weaker.label} should not beat {stronger.label}"

    def test_straight_flush_beats_four_of_a_kind(self):
        straight_flush = classify(cards("3C 4C 5C 6C 2C"))
        quads = classify(cards("2C 2D 2H 2S 3D"))
        assert beats(straight_flush, quads)

    def test_same_subtype_uses_power(self):
        assert beats(classify(cards("5C 5D 5H 3C 3D")), classify(cards("4C 4D 4H 2C 2D")))
        assert not beats(classify(cards("4C 4D 4H 2C 2D")), classify(cards("5C 5D 5H 3C 3D")))


class TestCheckPlay:
    """Admission of a candidate against the table."""

    def test_free_lead_accepts_any_shape(self):
        for text in ["9H", "7C 7D"] + FIVE_CARD_LADDER:
            assert check_play(cards(text), None).cards == classify(cards(text)).cards

    def test_invalid_shape(self):
        with pytest.raises(InvalidCombination):
            check_play(cards("3C 4C"), None)
        with pytest.raises(InvalidCombination):
            check_play(cards("3C 3D 3H"), None)

    def test_opening_requires_three_of_clubs(self):
        with pytest.raises(OpeningViolation):
            check_play(cards("3D"), None, is_opening_play=True)
        assert check_play(cards("3C 3D"), None, is_opening_play=True)

    def test_invalid_shape_reported_before_opening(self):
        with pytest.raises(InvalidCombination):
            check_play(cards("3C 4D"), None, is_opening_play=True)

    def test_size_mismatch(self):
        with pytest.raises(IllegalPlay):
            check_play(cards("2S 2H"), cards("3C"))

    def test_must_beat_table(self):
        with pytest.raises(IllegalPlay):
            check_play(cards("4C"), cards("4D"))
        assert check_play(cards("4S"), cards("4D")).power == 43

    def test_full_house_over_straight(self):
        info = check_play(cards("4C 4D 4H 5C 5D"), cards("TC JD QH KS AC"))
        assert info.subtype is FiveCardType.FULL_HOUSE

    def test_flush_disabled_on_table(self):
        rules = RulesConfig(allow_flush=False)
        with pytest.raises(InvalidCombination):
            check_play(cards("3H 5H 7H 9H JH"), cards("3C 4D 5H 6S 7D"), rules=rules)

    def test_unrecognized_table(self):
        with pytest.raises(IllegalPlay):
            check_play(cards("5C"), cards("3C 4C"))


class TestCanPlay:
    def test_matches_check_play(self):
        assert can_play(cards("4S"), cards("4D"))
        assert not can_play(cards("4C"), cards("4D"))
        assert not can_play(cards("3D"), None, is_opening_play=True)

    @pytest.mark.parametrize("candidate", [None, 5, ["3C", None], [object()], [], ["not", "cards"]])
    def test_never_raises_on_garbage(self, candidate):
        assert can_play(candidate, None) is False

    @pytest.mark.parametrize("text", ["3C", "3C 3D", "3C 4D", "3C 4D 5H 6S 7D", "3C 4D 5H 6S 8D", "JC QD KH AS 2C"])
    def test_free_lead_matches_classify(self, text):
        assert can_play(cards(text), None) == (classify(cards(text)) is not None)
