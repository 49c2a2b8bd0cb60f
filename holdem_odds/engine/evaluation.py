"""
Poker hand evaluation.

Finds the best 5-card hand out of 5-7 cards. Five cards are classified
directly from rank multiplicities, suits and value runs; six or seven cards
are handled by evaluating every 5-card subset and keeping the maximum.

Every HandEvaluation carries a score tuple (category, then card values in
significance order) so any two hands compare with plain tuple ordering.

HandEvaluator wraps the Treys lookup tables for category-only evaluation,
which is all a Monte Carlo tally needs.
"""

from typing import Dict, List, Sequence, Tuple
from dataclasses import dataclass
from enum import IntEnum
from itertools import combinations
from treys import Evaluator

from holdem_odds.errors import ErrorCode, PokerError
from holdem_odds.game.cards import Card, SUITS


class HandStrength(IntEnum):
    """Hand categories, weakest to strongest"""
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9


@dataclass(frozen=True)
class HandType:
    strength: HandStrength
    name: str
    description: str
    probability: float  # Unconditional 5-card deal probability


HAND_TYPES: Dict[HandStrength, HandType] = {
    HandStrength.HIGH_CARD: HandType(
        HandStrength.HIGH_CARD, 'High Card', 'No pairs, straights, or flushes', 0.501177),
    HandStrength.PAIR: HandType(
        HandStrength.PAIR, 'One Pair', 'Two cards of the same rank', 0.422569),
    HandStrength.TWO_PAIR: HandType(
        HandStrength.TWO_PAIR, 'Two Pair', 'Two different pairs', 0.047539),
    HandStrength.THREE_OF_A_KIND: HandType(
        HandStrength.THREE_OF_A_KIND, 'Three of a Kind', 'Three cards of the same rank', 0.021128),
    HandStrength.STRAIGHT: HandType(
        HandStrength.STRAIGHT, 'Straight', 'Five cards in sequence', 0.003925),
    HandStrength.FLUSH: HandType(
        HandStrength.FLUSH, 'Flush', 'Five cards of the same suit', 0.001965),
    HandStrength.FULL_HOUSE: HandType(
        HandStrength.FULL_HOUSE, 'Full House', 'Three of a kind plus a pair', 0.001441),
    HandStrength.FOUR_OF_A_KIND: HandType(
        HandStrength.FOUR_OF_A_KIND, 'Four of a Kind', 'Four cards of the same rank', 0.000240),
    HandStrength.STRAIGHT_FLUSH: HandType(
        HandStrength.STRAIGHT_FLUSH, 'Straight Flush', 'Five cards in sequence, same suit', 0.000015),
    HandStrength.ROYAL_FLUSH: HandType(
        HandStrength.ROYAL_FLUSH, 'Royal Flush', 'A, K, Q, J, 10 all same suit', 0.000002),
}

ROYAL_RANKS = frozenset(('A', 'K', 'Q', 'J', '10'))
WHEEL_VALUES = [14, 5, 4, 3, 2]

_SUIT_ORDER = {s: i for i, s in enumerate(SUITS)}


@dataclass(frozen=True)
class HandEvaluation:
    """
    Best 5-card hand.

    best_hand is ordered by significance (e.g. trips before kickers, wheel
    as 5-4-3-2-A). kickers are the tie-break cards for the category.
    """

    best_hand: Tuple[Card, ...]
    hand_strength: HandStrength
    kickers: Tuple[Card, ...]
    description: str
    score: Tuple[int, ...]

    @property
    def name(self) -> str:
        return HAND_TYPES[self.hand_strength].name

    def to_dict(self) -> dict:
        return {
            'bestHand': [c.to_dict() for c in self.best_hand],
            'handStrength': int(self.hand_strength),
            'kickers': [c.to_dict() for c in self.kickers],
            'description': self.description,
        }


def _make(best_hand: List[Card], strength: HandStrength, kickers: List[Card], description: str) -> HandEvaluation:
    score = (int(strength),) + tuple(c.value for c in best_hand)
    return HandEvaluation(tuple(best_hand), strength, tuple(kickers), description, score)


def _canonical_order(cards: Sequence[Card]) -> List[Card]:
    """Descending value, ties by suit order; makes results input-order independent."""
    return sorted(cards, key=lambda c: (-c.value, _SUIT_ORDER.get(c.suit, len(SUITS))))


def evaluate_five_card_hand(cards: Sequence[Card]) -> HandEvaluation:
    """
    Classify exactly five cards.

    Categories are tested strongest first and the first match wins.
    """
    ordered = sorted(cards, key=lambda c: c.value, reverse=True)

    # Rank groups: biggest group first, then higher value
    by_value: Dict[int, List[Card]] = {}
    for card in ordered:
        by_value.setdefault(card.value, []).append(card)
    groups = sorted(by_value.values(), key=lambda g: (len(g), g[0].value), reverse=True)
    counts = [len(g) for g in groups]

    is_flush = len({c.suit for c in ordered}) == 1

    unique_values = sorted(by_value, reverse=True)
    straight_cards = None
    is_wheel = False
    if len(unique_values) == 5:
        if unique_values[0] - unique_values[4] == 4:
            straight_cards = ordered
        elif unique_values == WHEEL_VALUES:
            # Ace plays low
            straight_cards = ordered[1:] + ordered[:1]
            is_wheel = True

    if is_flush and straight_cards is not None:
        if {c.rank for c in ordered} == ROYAL_RANKS:
            return _make(ordered, HandStrength.ROYAL_FLUSH, [], f"Royal Flush of {ordered[0].suit}")
        return _make(straight_cards, HandStrength.STRAIGHT_FLUSH, [],
                     f"Straight Flush, {straight_cards[0].display} high")

    if counts[0] == 4:
        quads, kicker = groups[0], groups[1]
        return _make(quads + kicker, HandStrength.FOUR_OF_A_KIND, kicker,
                     f"Four of a Kind, {quads[0].rank}s")

    if counts[:2] == [3, 2]:
        trips, pair = groups[0], groups[1]
        return _make(trips + pair, HandStrength.FULL_HOUSE, [],
                     f"Full House, {trips[0].rank}s over {pair[0].rank}s")

    if is_flush:
        return _make(ordered, HandStrength.FLUSH, ordered[1:], f"Flush, {ordered[0].display} high")

    if straight_cards is not None:
        if is_wheel:
            return _make(straight_cards, HandStrength.STRAIGHT, [], 'Straight, 5 high (wheel)')
        return _make(straight_cards, HandStrength.STRAIGHT, [], f"Straight, {ordered[0].display} high")

    if counts[0] == 3:
        trips = groups[0]
        kickers = groups[1] + groups[2]
        return _make(trips + kickers, HandStrength.THREE_OF_A_KIND, kickers,
                     f"Three of a Kind, {trips[0].rank}s")

    if counts[:2] == [2, 2]:
        high_pair, low_pair, kicker = groups[0], groups[1], groups[2]
        return _make(high_pair + low_pair + kicker, HandStrength.TWO_PAIR, kicker,
                     f"Two Pair, {high_pair[0].rank}s and {low_pair[0].rank}s")

    if counts[0] == 2:
        pair = groups[0]
        kickers = [c for g in groups[1:] for c in g]
        return _make(pair + kickers, HandStrength.PAIR, kickers, f"Pair of {pair[0].rank}s")

    return _make(ordered, HandStrength.HIGH_CARD, ordered[1:], f"High Card, {ordered[0].display} high")


def evaluate_poker_hand(cards: Sequence[Card]) -> HandEvaluation:
    """
    Best 5-card hand from five or more cards.

    For more than five cards every C(n, 5) subset is evaluated; the highest
    score wins and the first of equally scored subsets is kept. Cards are
    put in canonical order first, so the result does not depend on input order.

    Args:
        cards: 5+ cards (Hold'em: 5-7)

    Returns:
        HandEvaluation of the best hand

    Raises:
        PokerError: INSUFFICIENT_CARDS for fewer than 5 cards

    Examples:
        >>> evaluate_poker_hand(parse_cards('AS,AH,AC,KD,KS,2H,7C')).description
        'Full House, As over Ks'
    """
    if len(cards) < 5:
        raise PokerError(
            ErrorCode.INSUFFICIENT_CARDS,
            f"Need at least 5 cards to evaluate, got {len(cards)}"
        )

    ordered = _canonical_order(cards)
    if len(ordered) == 5:
        return evaluate_five_card_hand(ordered)

    best = None
    for combo in combinations(ordered, 5):
        evaluation = evaluate_five_card_hand(combo)
        if best is None or evaluation.score > best.score:
            best = evaluation
    return best


def compare_hands(hand1: HandEvaluation, hand2: HandEvaluation) -> int:
    """
    Compare two evaluated hands.

    Returns:
        1 if hand1 wins, -1 if hand2 wins, 0 if tie
    """
    if hand1.score > hand2.score:
        return 1
    elif hand1.score < hand2.score:
        return -1
    else:
        return 0


def hand_name(strength: int) -> str:
    """Readable category name, 'Unknown' outside 0-9"""
    try:
        return HAND_TYPES[HandStrength(strength)].name
    except ValueError:
        return 'Unknown'


# Treys class strings; royal flush is rank 1 in every Treys release
TREYS_CLASS_TO_STRENGTH: Dict[str, HandStrength] = {
    'Royal Flush': HandStrength.ROYAL_FLUSH,
    'Straight Flush': HandStrength.STRAIGHT_FLUSH,
    'Four of a Kind': HandStrength.FOUR_OF_A_KIND,
    'Full House': HandStrength.FULL_HOUSE,
    'Flush': HandStrength.FLUSH,
    'Straight': HandStrength.STRAIGHT,
    'Three of a Kind': HandStrength.THREE_OF_A_KIND,
    'Two Pair': HandStrength.TWO_PAIR,
    'Pair': HandStrength.PAIR,
    'High Card': HandStrength.HIGH_CARD,
}
TREYS_ROYAL_FLUSH_RANK = 1


class HandEvaluator:
    """
    Category-only evaluation using Treys.

    For tallying many hands where best_hand, kickers and description are not
    needed (Monte Carlo simulation). Treys ranks run 1 (royal flush) to
    7462 (7-high); lower is better.
    """

    _evaluator = None  # Singleton evaluator

    @classmethod
    def _get_evaluator(cls) -> Evaluator:
        """Lazy-load singleton evaluator (loads lookup tables once)"""
        if cls._evaluator is None:
            cls._evaluator = Evaluator()
        return cls._evaluator

    @staticmethod
    def evaluate(cards: Sequence[Card]) -> int:
        """
        Treys rank of 5-7 cards.

        Raises:
            PokerError: INSUFFICIENT_CARDS / TOO_MANY_CARDS outside 5-7
        """
        if len(cards) < 5:
            raise PokerError(ErrorCode.INSUFFICIENT_CARDS, f"Need at least 5 cards to evaluate, got {len(cards)}")
        if len(cards) > 7:
            raise PokerError(ErrorCode.TOO_MANY_CARDS, f"Treys evaluates at most 7 cards, got {len(cards)}")

        treys_cards = [c.to_treys() for c in cards]
        return HandEvaluator._get_evaluator().evaluate(treys_cards[:2], treys_cards[2:])

    @staticmethod
    def rank_to_strength(rank: int) -> HandStrength:
        """Map a Treys rank to its HandStrength"""
        if rank == TREYS_ROYAL_FLUSH_RANK:
            return HandStrength.ROYAL_FLUSH
        evaluator = HandEvaluator._get_evaluator()
        return TREYS_CLASS_TO_STRENGTH[evaluator.class_to_string(evaluator.get_rank_class(rank))]

    @staticmethod
    def hand_strength(cards: Sequence[Card]) -> HandStrength:
        """
        Category of the best 5-card hand.

        Examples:
            >>> HandEvaluator.hand_strength(parse_cards('AS,AH,AC,KD,KS,2H,7C'))
            <HandStrength.FULL_HOUSE: 6>
        """
        return HandEvaluator.rank_to_strength(HandEvaluator.evaluate(cards))
