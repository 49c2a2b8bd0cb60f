"""
Outs calculation.

Exhaustive one-card lookahead: every unseen card is added to the known
cards in turn and the result evaluated. No sampling.
"""

from typing import List, Sequence

from holdem_odds.errors import PokerError
from holdem_odds.game.cards import Card
from holdem_odds.game.deck import get_remaining_cards
from holdem_odds.engine.evaluation import HandStrength, evaluate_poker_hand


def find_outs(
    player_hand: Sequence[Card],
    community_cards: Sequence[Card],
    target_hand: HandStrength
) -> List[Card]:
    """
    Unseen cards that bring the hand to at least target_hand.

    Candidates that fail to evaluate (fewer than 5 cards even with the
    extra card) are skipped, never counted.
    """
    known_cards = list(player_hand) + list(community_cards)
    outs = []

    for card in get_remaining_cards(known_cards):
        try:
            evaluation = evaluate_poker_hand(known_cards + [card])
        except PokerError:
            continue
        if evaluation.hand_strength >= target_hand:
            outs.append(card)

    return outs


def calculate_outs(
    player_hand: Sequence[Card],
    community_cards: Sequence[Card],
    target_hand: HandStrength
) -> int:
    """
    Count the outs to target_hand.

    Examples:
        >>> calculate_outs(parse_cards('AH,KH'), parse_cards('QH,7H,2C'), HandStrength.FLUSH)
        9
    """
    return len(find_outs(player_hand, community_cards, target_hand))
