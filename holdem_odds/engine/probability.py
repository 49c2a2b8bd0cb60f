"""
Poker hand probability calculations.

Three strategies produce a distribution over the ten hand categories:

- lookup: fixed base distribution, reshaped by a heuristic read of the
  known cards' rank and suit structure. Deterministic, constant time.
- simulation: Monte Carlo completions of the unknown cards, each classified
  with the Treys-backed HandEvaluator and tallied by category.
- exact: simulation with a much larger sample count. Not enumeration.

The heuristic weights are fixed configuration, not derived conditional
probabilities.
"""

from typing import Dict, List, Sequence
from dataclasses import dataclass
import math
import numpy as np

from holdem_odds.config import EngineConfig
from holdem_odds.errors import ErrorCode, PokerError
from holdem_odds.game.cards import Card
from holdem_odds.game.deck import simulate_deal
from holdem_odds.engine.evaluation import HandStrength, HAND_TYPES, HandEvaluator
from holdem_odds.logging_utils import get_logger

logger = get_logger(__name__)

NUM_HAND_TYPES = len(HandStrength)

METHOD_AUTO = 'auto'
METHOD_LOOKUP = 'lookup'
METHOD_SIMULATION = 'simulation'
METHOD_EXACT = 'exact'
CALCULATION_METHODS = (METHOD_LOOKUP, METHOD_SIMULATION, METHOD_EXACT)

# Heuristic tables for hands that already hold a made combination
TRIPS_WEIGHTS = {
    HandStrength.THREE_OF_A_KIND: 0.6,
    HandStrength.FULL_HOUSE: 0.35,
    HandStrength.FOUR_OF_A_KIND: 0.05,
}
TWO_PAIR_WEIGHTS = {
    HandStrength.TWO_PAIR: 0.7,
    HandStrength.FULL_HOUSE: 0.25,
    HandStrength.THREE_OF_A_KIND: 0.03,
    HandStrength.FOUR_OF_A_KIND: 0.02,
}
# Raw weights sum to 0.617101; normalised before use
ONE_PAIR_WEIGHTS = {
    HandStrength.PAIR: 0.18,
    HandStrength.TWO_PAIR: 0.23,
    HandStrength.THREE_OF_A_KIND: 0.12,
    HandStrength.STRAIGHT: 0.04,
    HandStrength.FLUSH: 0.02,
    HandStrength.FULL_HOUSE: 0.025,
    HandStrength.FOUR_OF_A_KIND: 0.002,
    HandStrength.STRAIGHT_FLUSH: 0.0001,
    HandStrength.ROYAL_FLUSH: 0.000001,
}

STRAIGHT_DRAW_MULTIPLIER = 3  # >= 3 adjacent value steps
FLUSH_DRAW_MULTIPLIER = 8  # 4+ cards of one suit
BACKDOOR_FLUSH_MULTIPLIER = 2  # exactly 3 cards of one suit


@dataclass(frozen=True)
class ProbabilityResult:
    hand_type: HandStrength
    probability: float  # 0-1
    percentage: float  # 0-100
    odds: str  # e.g. "2.5:1"
    occurrences: int
    total_outcomes: int

    @property
    def name(self) -> str:
        return HAND_TYPES[self.hand_type].name

    def to_dict(self) -> dict:
        return {
            'handType': int(self.hand_type),
            'probability': self.probability,
            'percentage': self.percentage,
            'odds': self.odds,
            'occurrences': self.occurrences,
            'totalOutcomes': self.total_outcomes,
        }


def format_odds(probability: float) -> str:
    """
    Probability as odds against, e.g. 0.2 -> "4.0:1".

    0 gives "∞:1" and 1 gives "1:1".
    """
    if probability == 0:
        return "∞:1"
    if probability == 1:
        return "1:1"

    odds = (1 - probability) / probability
    return f"{odds:.1f}:1"


def get_base_probabilities() -> List[float]:
    """Unconditional 5-card probabilities indexed by HandStrength"""
    return [HAND_TYPES[s].probability for s in HandStrength]


def _normalise(weights: List[float]) -> List[float]:
    total = sum(weights)
    if total > 0:
        return [w / total for w in weights]
    return weights


def _from_table(table: Dict[HandStrength, float]) -> List[float]:
    return [table.get(s, 0.0) for s in HandStrength]


def adjust_probabilities_for_hand(base: Sequence[float], known_cards: Sequence[Card]) -> List[float]:
    """
    Heuristic distribution for a partial hand.

    Made hands (quads, trips, two pair, one pair) switch to a fixed table;
    otherwise the base distribution is kept with straight and flush draws
    boosted, then renormalised.
    """
    rank_counts: Dict[str, int] = {}
    suit_counts: Dict[str, int] = {}
    for card in known_cards:
        rank_counts[card.rank] = rank_counts.get(card.rank, 0) + 1
        suit_counts[card.suit] = suit_counts.get(card.suit, 0) + 1

    pair_count = sum(1 for n in rank_counts.values() if n == 2)
    trip_count = sum(1 for n in rank_counts.values() if n == 3)
    quad_count = sum(1 for n in rank_counts.values() if n == 4)

    if quad_count > 0:
        return _from_table({HandStrength.FOUR_OF_A_KIND: 1.0})
    if trip_count > 0:
        return _from_table(TRIPS_WEIGHTS)
    if pair_count >= 2:
        return _from_table(TWO_PAIR_WEIGHTS)
    if pair_count == 1:
        return _normalise(_from_table(ONE_PAIR_WEIGHTS))

    # No pair yet: boost draws
    max_suit_count = max(suit_counts.values()) if suit_counts else 0
    values = sorted({c.value for c in known_cards})
    straight_draw = sum(1 for lo, hi in zip(values, values[1:]) if hi - lo == 1)

    adjusted = list(base)
    if straight_draw >= 3:
        adjusted[HandStrength.STRAIGHT] *= STRAIGHT_DRAW_MULTIPLIER
    if max_suit_count >= 4:
        adjusted[HandStrength.FLUSH] *= FLUSH_DRAW_MULTIPLIER
    elif max_suit_count >= 3:
        adjusted[HandStrength.FLUSH] *= BACKDOOR_FLUSH_MULTIPLIER

    return _normalise(adjusted)


def create_probability_results(probabilities: Sequence[float], total_outcomes: int) -> List[ProbabilityResult]:
    """One ProbabilityResult per category; occurrences rounded from probability."""
    results = []
    for hand_type in HandStrength:
        probability = probabilities[hand_type]
        results.append(ProbabilityResult(
            hand_type=hand_type,
            probability=probability,
            percentage=probability * 100,
            odds=format_odds(probability),
            occurrences=math.floor(probability * total_outcomes + 0.5),  # round half up
            total_outcomes=total_outcomes,
        ))
    return results


def calculate_using_lookup(
    player_hand: Sequence[Card],
    community_cards: Sequence[Card],
    total_outcomes: int = 1000
) -> List[ProbabilityResult]:
    """Heuristic lookup; the base distribution is used below two known cards."""
    known_cards = list(player_hand) + list(community_cards)

    probabilities = get_base_probabilities()
    if len(known_cards) >= 2:
        probabilities = adjust_probabilities_for_hand(probabilities, known_cards)

    return create_probability_results(probabilities, total_outcomes)


def calculate_using_simulation(
    player_hand: Sequence[Card],
    community_cards: Sequence[Card],
    num_simulations: int = 10_000,
    rng=None
) -> List[ProbabilityResult]:
    """
    Monte Carlo estimate.

    Each simulation completes the known cards to seven from the full pool of
    unknown cards. Completions that fail to evaluate are skipped, but the
    denominator stays num_simulations.

    Args:
        player_hand: Hole cards
        community_cards: Known board cards
        num_simulations: Number of random completions
        rng: Random source with permutation(n); None for OS-seeded
    """
    known_cards = list(player_hand) + list(community_cards)
    hand_counts = np.zeros(NUM_HAND_TYPES, dtype=np.int64)
    skipped = 0

    for simulated_cards in simulate_deal(known_cards, num_simulations, rng):
        try:
            hand_strength = HandEvaluator.hand_strength(simulated_cards)
        except PokerError:
            skipped += 1
            continue
        hand_counts[hand_strength] += 1

    if skipped:
        logger.debug("Skipped %d of %d simulations that could not be evaluated", skipped, num_simulations)

    results = []
    for hand_type in HandStrength:
        count = int(hand_counts[hand_type])
        probability = count / num_simulations
        results.append(ProbabilityResult(
            hand_type=hand_type,
            probability=probability,
            percentage=probability * 100,
            odds=format_odds(probability),
            occurrences=count,
            total_outcomes=num_simulations,
        ))
    return results


def calculate_using_exact(
    player_hand: Sequence[Card],
    community_cards: Sequence[Card],
    num_simulations: int = 100_000,
    rng=None
) -> List[ProbabilityResult]:
    """High-precision approximation: simulation at a larger sample count."""
    return calculate_using_simulation(player_hand, community_cards, num_simulations, rng)


def calculate_hand_probabilities(
    player_hand: Sequence[Card],
    community_cards: Sequence[Card],
    method: str,
    config: EngineConfig = None,
    rng=None
) -> List[ProbabilityResult]:
    """
    Dispatch to a concrete strategy.

    Raises:
        PokerError: INVALID_METHOD for anything but lookup/simulation/exact
    """
    config = config or EngineConfig()

    if method == METHOD_LOOKUP:
        return calculate_using_lookup(player_hand, community_cards, config.lookup_total_outcomes)
    elif method == METHOD_SIMULATION:
        return calculate_using_simulation(player_hand, community_cards, config.num_simulations, rng)
    elif method == METHOD_EXACT:
        return calculate_using_exact(player_hand, community_cards, config.exact_simulations, rng)
    else:
        raise PokerError(ErrorCode.INVALID_METHOD, f"Unknown calculation method: {method}")
