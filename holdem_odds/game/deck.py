"""
Deck management and sampling.

A Deck is an immutable split of the 52 cards into available and used
sequences. Every operation returns a new Deck; the caller holding the
returned value owns it.

Randomness is injected: any object exposing a NumPy-style permutation(n)
(numpy.random.RandomState, numpy.random.Generator) can be passed as rng.
"""

from typing import Dict, List, Sequence, Tuple
from dataclasses import dataclass
import numpy as np

from holdem_odds.errors import ErrorCode, PokerError
from holdem_odds.game.cards import Card, SUITS, RANKS, DECK_SIZE, create_card


@dataclass(frozen=True)
class Deck:
    """
    Immutable deck state.

    available_cards and used_cards are disjoint; for a deck built from
    create_deck() their union is always the 52 unique cards.
    """

    available_cards: Tuple[Card, ...]
    used_cards: Tuple[Card, ...] = ()
    total_cards: int = DECK_SIZE

    def __len__(self) -> int:
        return len(self.available_cards)

    def to_dict(self) -> dict:
        return {
            'availableCards': [c.to_dict() for c in self.available_cards],
            'usedCards': [c.to_dict() for c in self.used_cards],
            'totalCards': self.total_cards,
        }


@dataclass(frozen=True)
class DealResult:
    dealt_cards: Tuple[Card, ...]
    remaining_deck: Deck


def get_rng(rng=None):
    """Return rng unchanged, or a fresh OS-seeded RandomState when None."""
    return rng if rng is not None else np.random.RandomState()


# Full deck in canonical order, built once
_FULL_DECK: Tuple[Card, ...] = tuple(create_card(suit, rank) for suit in SUITS for rank in RANKS)


def create_deck() -> Deck:
    """
    Create a complete 52-card deck.

    Order is fixed: all ranks of hearts (A, 2..10, J, Q, K), then diamonds,
    clubs, spades. No cards used.
    """
    return Deck(available_cards=_FULL_DECK)


def shuffle_deck(deck: Deck, rng=None) -> Deck:
    """
    Uniformly permute the available cards.

    Args:
        deck: Deck to shuffle (not modified)
        rng: Random source with permutation(n); None for OS-seeded

    Returns:
        New Deck with shuffled available cards, used cards unchanged
    """
    cards = deck.available_cards
    order = get_rng(rng).permutation(len(cards))
    return Deck(
        available_cards=tuple(cards[i] for i in order),
        used_cards=deck.used_cards,
        total_cards=deck.total_cards,
    )


def deal_cards(deck: Deck, count: int) -> DealResult:
    """
    Deal cards from the top of the deck.

    Args:
        deck: Deck to deal from (not modified)
        count: Number of cards to deal

    Returns:
        DealResult with the first `count` available cards and the new deck

    Raises:
        PokerError: INVALID_DEAL_COUNT for a negative count,
            INSUFFICIENT_CARDS if count exceeds available cards
    """
    if count < 0:
        raise PokerError(ErrorCode.INVALID_DEAL_COUNT, f"Cannot deal a negative number of cards: {count}")
    if count > len(deck.available_cards):
        raise PokerError(
            ErrorCode.INSUFFICIENT_CARDS,
            f"Not enough cards in deck: requested {count}, have {len(deck.available_cards)}"
        )

    dealt = deck.available_cards[:count]
    return DealResult(
        dealt_cards=dealt,
        remaining_deck=Deck(
            available_cards=deck.available_cards[count:],
            used_cards=deck.used_cards + dealt,
            total_cards=deck.total_cards,
        ),
    )


def create_shuffled_deck(rng=None) -> Deck:
    """Create a full deck and shuffle it"""
    return shuffle_deck(create_deck(), rng)


def remove_cards_from_deck(deck: Deck, cards_to_remove: Sequence[Card]) -> Deck:
    """Move specific cards (e.g. known hole cards) from available to used."""
    remove_ids = {c.id for c in cards_to_remove}
    removed = tuple(c for c in deck.available_cards if c.id in remove_ids)
    return Deck(
        available_cards=tuple(c for c in deck.available_cards if c.id not in remove_ids),
        used_cards=deck.used_cards + removed,
        total_cards=deck.total_cards,
    )


def get_remaining_cards(known_cards: Sequence[Card]) -> List[Card]:
    """Full deck (canonical order) minus the known cards, matched by id."""
    known_ids = {c.id for c in known_cards}
    return [c for c in _FULL_DECK if c.id not in known_ids]


def deal_hands(deck: Deck, num_hands: int, cards_per_hand: int) -> Tuple[List[Tuple[Card, ...]], Deck]:
    """
    Deal several hands in sequence.

    Returns:
        (hands, remaining_deck)

    Raises:
        PokerError: INSUFFICIENT_CARDS if the deck runs out
    """
    hands = []
    current = deck
    for _ in range(num_hands):
        result = deal_cards(current, cards_per_hand)
        hands.append(result.dealt_cards)
        current = result.remaining_deck
    return hands, current


def simulate_deal(
    known_cards: Sequence[Card],
    num_simulations: int = 1000,
    rng=None,
    target_size: int = 7
) -> List[List[Card]]:
    """
    Random completions of a partial hand for Monte Carlo estimation.

    Every simulation starts fresh from the full pool of unknown cards
    (without replacement inside one deal, with replacement across deals)
    and tops the known cards up to target_size.

    Args:
        known_cards: Hole + community cards already known
        num_simulations: Number of completions to draw
        rng: Random source with permutation(n); None for OS-seeded
        target_size: Hand size to complete to (7 in Hold'em)

    Returns:
        List of completed card lists (known cards first)
    """
    rng = get_rng(rng)
    known = list(known_cards)
    pool = get_remaining_cards(known)
    needed = min(max(target_size - len(known), 0), len(pool))

    if needed == 0:
        return [list(known) for _ in range(num_simulations)]

    simulations = []
    for _ in range(num_simulations):
        order = rng.permutation(len(pool))[:needed]
        simulations.append(known + [pool[i] for i in order])
    return simulations


def get_deck_stats(deck: Deck) -> dict:
    """Counts of available cards per suit and rank."""
    suit_counts: Dict[str, int] = {s: 0 for s in SUITS}
    rank_counts: Dict[str, int] = {r: 0 for r in RANKS}
    for card in deck.available_cards:
        suit_counts[card.suit] += 1
        rank_counts[card.rank] += 1

    return {
        'available_count': len(deck.available_cards),
        'used_count': len(deck.used_cards),
        'available_percentage': len(deck.available_cards) / deck.total_cards * 100,
        'suit_counts': suit_counts,
        'rank_counts': rank_counts,
    }


def can_deal_cards(deck: Deck, count: int) -> bool:
    return len(deck.available_cards) >= count


def reset_deck() -> Deck:
    """Fresh full deck (decks are never refilled in place)"""
    return create_deck()
