"""Core Big Two card system."""

from .cards import (
    ALL_CARDS,
    OPENING_CARD,
    RANKS,
    SUITS,
    Card,
    Suit,
    card_from_index,
    card_to_string,
    cards_to_mask,
    coerce_card,
    deal,
    format_hand,
    generate_deck,
    hand_to_strings,
    mask_to_cards,
    parse_move_input,
    string_to_card,
    strings_to_cards,
)

__all__ = [
    # Constants
    "ALL_CARDS",
    "OPENING_CARD",
    "RANKS",
    "SUITS",
    # Types
    "Card",
    "Suit",
    # Functions
    "card_from_index",
    "card_to_string",
    "cards_to_mask",
    "coerce_card",
    "deal",
    "format_hand",
    "generate_deck",
    "hand_to_strings",
    "mask_to_cards",
    "parse_move_input",
    "string_to_card",
    "strings_to_cards",
]
