"""
Card model for holdem_odds.

Provides:
- Card, create_card, parse_card, compare_cards: card value objects
- Deck, create_deck, shuffle_deck, deal_cards: immutable deck operations
- validate_cards, validate_poker_hand: card set validation
- GameStage: pre-flop / flop / turn / river
"""

from holdem_odds.game.cards import (
    Card,
    ComparisonResult,
    SUITS,
    RANKS,
    create_card,
    parse_card,
    parse_cards,
    compare_cards,
    get_constants,
)
from holdem_odds.game.deck import (
    Deck,
    DealResult,
    create_deck,
    shuffle_deck,
    deal_cards,
    get_remaining_cards,
    simulate_deal,
)
from holdem_odds.game.stages import GameStage, STAGE_RULES
from holdem_odds.game.validation import (
    ValidationError,
    ValidationResult,
    validate_cards,
    validate_poker_hand,
)

__all__ = [
    'Card',
    'ComparisonResult',
    'SUITS',
    'RANKS',
    'create_card',
    'parse_card',
    'parse_cards',
    'compare_cards',
    'get_constants',
    'Deck',
    'DealResult',
    'create_deck',
    'shuffle_deck',
    'deal_cards',
    'get_remaining_cards',
    'simulate_deal',
    'GameStage',
    'STAGE_RULES',
    'ValidationError',
    'ValidationResult',
    'validate_cards',
    'validate_poker_hand',
]
