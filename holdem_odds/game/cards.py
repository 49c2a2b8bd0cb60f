"""
Card representation for Texas Hold'em probability calculations.

Cards are immutable value objects. The canonical id ('AS', '10H') is the
unique key for equality and deduplication; display uses Unicode suit glyphs
('A♠'). Conversion to and from Treys integers is provided so cards can be
handed to the Treys evaluator.
"""

from typing import Dict, List, Tuple
from dataclasses import dataclass
from treys import Card as TreysCard

from holdem_odds.errors import ErrorCode, PokerError


# Canonical orders (deck is built suit-major, ranks in this order)
SUITS: Tuple[str, ...] = ('hearts', 'diamonds', 'clubs', 'spades')
RANKS: Tuple[str, ...] = ('A', '2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K')

SUIT_SYMBOLS: Dict[str, str] = {
    'hearts': '♥',
    'diamonds': '♦',
    'clubs': '♣',
    'spades': '♠',
}

SUIT_ABBREVIATIONS: Dict[str, str] = {
    'hearts': 'H',
    'diamonds': 'D',
    'clubs': 'C',
    'spades': 'S',
}
ABBREVIATION_TO_SUIT: Dict[str, str] = {a: s for s, a in SUIT_ABBREVIATIONS.items()}

# Ace high by default; the low table is used for wheel / ace-low comparisons
CARD_VALUES: Dict[str, int] = {
    'A': 14, '2': 2, '3': 3, '4': 4, '5': 5, '6': 6, '7': 7,
    '8': 8, '9': 9, '10': 10, 'J': 11, 'Q': 12, 'K': 13,
}
CARD_VALUES_ACE_LOW: Dict[str, int] = dict(CARD_VALUES, A=1)

DECK_SIZE = 52

# Treys uses 'T' for ten and lowercase suits
_TREYS_RANK = {r: ('T' if r == '10' else r) for r in RANKS}
_FROM_TREYS_RANK = {t: r for r, t in _TREYS_RANK.items()}


@dataclass(frozen=True)
class Card:
    """
    Immutable playing card.

    All fields are derived from (suit, rank) by create_card(); constructing a
    Card directly skips that derivation, which is how validate_cards() can be
    handed a structurally corrupted card.
    """

    suit: str
    rank: str
    value: int
    display: str
    id: str

    @staticmethod
    def from_string(s: str) -> 'Card':
        """Parse card from canonical id (see parse_card)."""
        return parse_card(s)

    @staticmethod
    def from_treys(treys_card: int) -> 'Card':
        """Create Card from Treys integer representation"""
        card_str = TreysCard.int_to_str(treys_card)
        return create_card(ABBREVIATION_TO_SUIT[card_str[1].upper()], _FROM_TREYS_RANK[card_str[0]])

    def to_treys(self) -> int:
        """Treys integer for this card"""
        return TreysCard.new(_TREYS_RANK[self.rank] + SUIT_ABBREVIATIONS[self.suit].lower())

    def to_dict(self) -> dict:
        return {
            'suit': self.suit,
            'rank': self.rank,
            'value': self.value,
            'display': self.display,
            'id': self.id,
        }

    def __str__(self) -> str:
        """String representation like 'AS', '10H'"""
        return self.id

    def __repr__(self) -> str:
        return f"Card('{self.id}')"

    def __lt__(self, other: 'Card') -> bool:
        """Compare by value first, then suit order"""
        if self.value != other.value:
            return self.value < other.value
        return SUITS.index(self.suit) < SUITS.index(other.suit)


@dataclass(frozen=True)
class ComparisonResult:
    result: int  # -1 if first < second, 0 if equal, 1 if first > second
    reasoning: str


def create_card(suit: str, rank: str) -> Card:
    """
    Create a playing card with all derived properties.

    Args:
        suit: 'hearts', 'diamonds', 'clubs' or 'spades'
        rank: 'A', '2'-'10', 'J', 'Q', 'K'

    Returns:
        Card instance

    Raises:
        PokerError: INVALID_SUIT / INVALID_RANK
    """
    if suit not in SUITS:
        raise PokerError(ErrorCode.INVALID_SUIT, f"Invalid suit: {suit!r}")
    if rank not in RANKS:
        raise PokerError(ErrorCode.INVALID_RANK, f"Invalid rank: {rank!r}")

    return Card(
        suit=suit,
        rank=rank,
        value=CARD_VALUES[rank],
        display=f"{rank}{SUIT_SYMBOLS[suit]}",
        id=f"{rank}{SUIT_ABBREVIATIONS[suit]}",
    )


def parse_card(card_string: str) -> Card:
    """
    Parse card from canonical id.

    Rank token is one of A,2-9,J,Q,K or the two characters '10', followed by
    exactly one suit letter H/D/C/S (suit letter is case-insensitive).

    Examples:
        >>> parse_card('AS')   # Ace of spades
        >>> parse_card('10h')  # Ten of hearts

    Raises:
        PokerError: INVALID_CARD_STRING for any other shape
    """
    if not isinstance(card_string, str) or len(card_string) < 2:
        raise PokerError(ErrorCode.INVALID_CARD_STRING, f"Invalid card string: {card_string!r}")

    if card_string.startswith('10'):
        rank, suit_part = '10', card_string[2:]
    else:
        rank, suit_part = card_string[0], card_string[1:]

    if len(suit_part) != 1:
        raise PokerError(ErrorCode.INVALID_CARD_STRING, f"Invalid card string: {card_string!r}")

    suit = ABBREVIATION_TO_SUIT.get(suit_part.upper())
    if suit is None or rank not in RANKS:
        raise PokerError(ErrorCode.INVALID_CARD_STRING, f"Invalid card string: {card_string!r}")

    return create_card(suit, rank)


def parse_cards(cards: str) -> List[Card]:
    """Parse comma-separated ids like 'AS,KH,10D' (blank input gives [])."""
    return [parse_card(s.strip()) for s in cards.split(',') if s.strip()]


def compare_cards(card1: Card, card2: Card, ace_high: bool = True) -> ComparisonResult:
    """
    Compare two cards by rank.

    Args:
        card1: First card
        card2: Second card
        ace_high: Use Ace=14 (True) or Ace=1 (False)

    Returns:
        ComparisonResult with -1/0/1 and a human-readable reasoning
    """
    values = CARD_VALUES if ace_high else CARD_VALUES_ACE_LOW
    value1 = values[card1.rank]
    value2 = values[card2.rank]

    if value1 < value2:
        result = -1
        reasoning = f"{card1.display} ({value1}) is lower than {card2.display} ({value2})"
    elif value1 > value2:
        result = 1
        reasoning = f"{card1.display} ({value1}) is higher than {card2.display} ({value2})"
    else:
        result = 0
        reasoning = f"{card1.display} and {card2.display} have equal rank ({value1})"

    if 'A' in (card1.rank, card2.rank):
        reasoning += ' (Ace is high)' if ace_high else ' (Ace is low)'

    return ComparisonResult(result, reasoning)


def get_constants() -> dict:
    """Poker-related constants (for CLI / UI consumers)"""
    # Local import: evaluation depends on this module
    from holdem_odds.engine.evaluation import HAND_TYPES

    return {
        'SUITS': list(SUITS),
        'RANKS': list(RANKS),
        'HAND_TYPES': {int(strength): info.name for strength, info in HAND_TYPES.items()},
        'DECK_SIZE': DECK_SIZE,
        'UNICODE_SUITS': dict(SUIT_SYMBOLS),
    }
