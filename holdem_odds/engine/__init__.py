"""
Hand evaluation and probability engine.

Usage:
    from holdem_odds.engine import PokerEngine, CalculationRequest
    from holdem_odds.game import parse_cards

    engine = PokerEngine()
    results = engine.calculate_probabilities(CalculationRequest(
        player_hand=parse_cards('AS,AH'),
        community_cards=parse_cards('KS,QH,JD'),
        stage='flop',
    ))
"""

from holdem_odds.engine.evaluation import (
    HandStrength,
    HandEvaluation,
    HAND_TYPES,
    evaluate_poker_hand,
    compare_hands,
)
from holdem_odds.engine.probability import ProbabilityResult, format_odds
from holdem_odds.engine.cache import CalculationCache, create_calculation_key
from holdem_odds.engine.poker_engine import (
    PokerEngine,
    CalculationRequest,
    CalculationResults,
    calculate_probabilities,
    evaluate_hand,
    calculate_outs,
    check_health,
    determine_optimal_method,
)

__all__ = [
    'HandStrength',
    'HandEvaluation',
    'HAND_TYPES',
    'evaluate_poker_hand',
    'compare_hands',
    'ProbabilityResult',
    'format_odds',
    'CalculationCache',
    'create_calculation_key',
    'PokerEngine',
    'CalculationRequest',
    'CalculationResults',
    'calculate_probabilities',
    'evaluate_hand',
    'calculate_outs',
    'check_health',
    'determine_optimal_method',
]
