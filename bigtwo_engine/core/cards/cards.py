"""Core card representation and encoding for Big Two."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterable, List, Mapping, Optional, Sequence

import numpy as np

# ============================================================
# Big Two Card System
# ============================================================

# Ranks: 3..10 face value, 11=J, 12=Q, 13=K, 14=A, 15=2 (highest)
RANKS = list(range(3, 16))
MIN_RANK = 3
MAX_RANK = 15

RANK_CHARS = "3456789TJQKA2"
SUIT_CHARS = "CDHS"  # ♣,♦,♥,♠


class Suit(IntEnum):
    """Suits from weakest to strongest; the value is the suit weight."""

    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3

    @property
    def symbol(self) -> str:
        return "♣♦♥♠"[self.value]


SUITS = list(Suit)

_SUIT_NAMES = {suit.name.lower(): suit for suit in Suit}


@dataclass(frozen=True, order=True)
class Card:
    """A single playing card.

    Field order (rank, suit) makes the dataclass ordering identical to the
    ordering by power.
    """

    rank: int
    suit: Suit

    def __post_init__(self) -> None:
        if not MIN_RANK <= self.rank <= MAX_RANK:
            raise ValueError(f"Rank out of range: {self.rank}")
        object.__setattr__(self, "suit", Suit(self.suit))

    @property
    def power(self) -> int:
        """Scalar total order over the deck: rank * 10 + suit weight."""
        return self.rank * 10 + int(self.suit)

    @property
    def index(self) -> int:
        """Dense index 0..51 used for numpy masks."""
        return (self.rank - MIN_RANK) * 4 + int(self.suit)

    @property
    def card_id(self) -> str:
        return f"{self.suit.name.lower()}-{self.rank}"

    def to_dict(self) -> dict:
        return {"suit": self.suit.name.lower(), "rank": self.rank, "id": self.card_id}

    def __str__(self) -> str:
        return card_to_string(self)


# All 52 cards, position == Card.index
ALL_CARDS = tuple(Card(rank, suit) for rank in RANKS for suit in SUITS)

# Special cards
OPENING_CARD = ALL_CARDS[0]  # 3 of clubs


def card_from_index(index: int) -> Card:
    """Look up a card by its dense index."""
    if not 0 <= index < 52:
        raise ValueError(f"Card index out of range: {index}")
    return ALL_CARDS[index]


def card_to_string(card: Card) -> str:
    """Convert card to string like '3C', 'TH', '2S'."""
    return RANK_CHARS[card.rank - MIN_RANK] + SUIT_CHARS[int(card.suit)]


def string_to_card(card_str: str) -> Card:
    """Parse card string like '3C', 'AS' into a Card."""
    text = card_str.strip().upper()
    if text.startswith("10"):
        text = "T" + text[2:]
    if len(text) != 2:
        raise ValueError(f"Invalid card format: {card_str}")

    rank_char, suit_char = text
    if rank_char not in RANK_CHARS or suit_char not in SUIT_CHARS:
        raise ValueError(f"Invalid card: {card_str}")
    return Card(RANK_CHARS.index(rank_char) + MIN_RANK, Suit(SUIT_CHARS.index(suit_char)))


def coerce_card(value: Any) -> Card:
    """Turn a transport payload into a Card.

    Accepts Card instances, strings like '3C', and mappings shaped like
    ``{"suit": "clubs", "rank": 3}``.
    """
    if isinstance(value, Card):
        return value
    if isinstance(value, str):
        return string_to_card(value)
    if isinstance(value, Mapping):
        suit = value.get("suit")
        rank = value.get("rank")
        if isinstance(suit, str):
            if suit.lower() not in _SUIT_NAMES:
                raise ValueError(f"Unknown suit: {suit}")
            suit = _SUIT_NAMES[suit.lower()]
        if suit is None or rank is None:
            raise ValueError(f"Card payload needs suit and rank: {value!r}")
        return Card(int(rank), Suit(suit))
    raise ValueError(f"Cannot interpret {value!r} as a card")


def strings_to_cards(card_strings: Iterable[str]) -> List[Card]:
    """Convert list of card strings to Cards."""
    return [string_to_card(card_str) for card_str in card_strings]


def hand_to_strings(hand: Iterable[Card]) -> List[str]:
    """Convert cards to readable strings, weakest first."""
    return [card_to_string(card) for card in sorted(hand)]


def format_hand(hand: Iterable[Card]) -> str:
    """Format hand for display."""
    return " ".join(hand_to_strings(hand))


def parse_move_input(input_str: str, hand: Optional[Sequence[Card]] = None) -> List[Card]:
    """Parse user input for card play; empty input or 'pass' means pass."""
    if not input_str.strip() or input_str.strip().lower() == "pass":
        return []

    try:
        cards = strings_to_cards(input_str.split())
    except ValueError as e:
        raise ValueError(f"Invalid input: {e}") from e

    if hand is not None:
        for card in cards:
            if card not in hand:
                raise ValueError(f"Invalid input: card {card} not in hand")
    return sorted(cards)


# Numpy array conversion functions


def cards_to_mask(cards: Iterable[Card]) -> np.ndarray:
    """Create a 52-slot boolean mask from cards."""
    mask = np.zeros(52, dtype=bool)
    indices = [card.index for card in cards]
    mask[indices] = True
    return mask


def mask_to_cards(mask: np.ndarray) -> List[Card]:
    """Extract cards, weakest first, from a 52-slot boolean mask."""
    return [ALL_CARDS[i] for i in np.flatnonzero(mask)]


# ============================================================
# Deck
# ============================================================


def generate_deck() -> List[Card]:
    """Return a fresh, ordered 52-card deck."""
    return list(ALL_CARDS)


def deal(num_players: int = 4, seed: Optional[int] = None) -> np.ndarray:
    """Shuffle and deal the deck round-robin.

    Returns:
        Boolean array of shape (num_players, 52); row i is player i's hand.
    """
    if num_players <= 0 or 52 % num_players:
        raise ValueError(f"Cannot deal 52 cards evenly to {num_players} players")

    rng = np.random.default_rng(seed)
    deck = rng.permutation(52)
    hands = np.zeros((num_players, 52), dtype=bool)
    for i in range(num_players):
        hands[i, deck[i::num_players]] = True
    return hands
