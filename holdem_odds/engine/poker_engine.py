"""
Poker engine entry points.

calculate_probabilities() validates a request, picks a strategy, runs it
and packages the ten category probabilities with timing metadata.
evaluate_hand() and calculate_outs() expose the evaluator and the outs
calculator with input validation.

PokerEngine bundles the pieces a long-lived caller owns: configuration,
random source, an optional result cache and running performance metrics.
The module-level functions are stateless shortcuts.
"""

from typing import Optional, Sequence, Tuple
from dataclasses import dataclass
import time

from holdem_odds.config import EngineConfig
from holdem_odds.errors import ErrorCode, PokerError
from holdem_odds.game.cards import Card
from holdem_odds.game.validation import validate_cards, validate_poker_hand, validate_hand_for_evaluation
from holdem_odds.engine.cache import CalculationCache, create_calculation_key
from holdem_odds.engine.evaluation import HandEvaluation, HandStrength, HAND_TYPES, evaluate_poker_hand
from holdem_odds.engine.outs import calculate_outs as _count_outs
from holdem_odds.engine.probability import (
    ProbabilityResult,
    calculate_hand_probabilities,
    METHOD_AUTO,
    METHOD_LOOKUP,
    METHOD_SIMULATION,
    CALCULATION_METHODS,
)
from holdem_odds.logging_utils import get_logger, format_cards

logger = get_logger(__name__)

ENGINE_VERSION = '1.0.0'

# Known-card threshold: lookup up to the flop, simulation from the turn on
LOOKUP_MAX_KNOWN_CARDS = 5


@dataclass(frozen=True)
class CalculationRequest:
    player_hand: Tuple[Card, ...]
    community_cards: Tuple[Card, ...] = ()
    stage: str = 'pre-flop'
    preferred_method: str = METHOD_AUTO

    def __post_init__(self):
        # Accept any sequence, store tuples
        object.__setattr__(self, 'player_hand', tuple(self.player_hand))
        object.__setattr__(self, 'community_cards', tuple(self.community_cards))


@dataclass(frozen=True)
class CalculationResults:
    stage: str
    player_hand: Tuple[Card, ...]
    community_cards: Tuple[Card, ...]
    probabilities: Tuple[ProbabilityResult, ...]
    calculation_time: float  # milliseconds
    method: str  # 'lookup' | 'simulation' | 'exact'
    timestamp: int  # epoch milliseconds

    def get(self, hand_type: HandStrength) -> ProbabilityResult:
        return self.probabilities[int(hand_type)]

    def to_dict(self) -> dict:
        return {
            'stage': self.stage,
            'playerHand': [c.to_dict() for c in self.player_hand],
            'communityCards': [c.to_dict() for c in self.community_cards],
            'probabilities': [p.to_dict() for p in self.probabilities],
            'calculationTime': self.calculation_time,
            'method': self.method,
            'timestamp': self.timestamp,
        }


@dataclass
class PerformanceMetrics:
    total_calculations: int = 0
    total_time_ms: float = 0.0
    last_calculation_time: float = 0.0
    cache_hits: int = 0
    over_budget: int = 0

    @property
    def average_calculation_time(self) -> float:
        return self.total_time_ms / self.total_calculations if self.total_calculations > 0 else 0.0

    @property
    def cache_hit_rate(self) -> float:
        requests = self.total_calculations + self.cache_hits
        return self.cache_hits / requests if requests > 0 else 0.0


def determine_optimal_method(request: CalculationRequest) -> str:
    """
    Strategy for a request.

    An explicit method other than 'auto' wins. Otherwise lookup for up to
    five known cards and simulation from six. 'exact' is never chosen
    automatically.

    Raises:
        PokerError: INVALID_METHOD for an unknown preferred method
    """
    preferred = request.preferred_method or METHOD_AUTO
    if preferred != METHOD_AUTO:
        if preferred not in CALCULATION_METHODS:
            raise PokerError(ErrorCode.INVALID_METHOD, f"Unknown calculation method: {preferred}")
        return preferred

    total_cards = len(request.player_hand) + len(request.community_cards)
    if total_cards <= LOOKUP_MAX_KNOWN_CARDS:
        return METHOD_LOOKUP
    return METHOD_SIMULATION


class PokerEngine:
    """
    Stateful front end for probability calculations.

    Args:
        config: Engine configuration (defaults if None)
        rng: Random source for simulations (OS-seeded per call if None)
        cache: Optional caller-owned CalculationCache
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        rng=None,
        cache: Optional[CalculationCache] = None
    ):
        self.config = config or EngineConfig()
        self.rng = rng
        self.cache = cache
        self.metrics = PerformanceMetrics()

    def calculate_probabilities(self, request: CalculationRequest) -> CalculationResults:
        """
        Probability of finishing in each of the ten hand categories.

        Raises:
            PokerError: first validation error code (e.g. DUPLICATE_CARD),
                INVALID_METHOD, or CALCULATION_FAILED if the strategy itself fails
        """
        start = time.perf_counter()

        validation = validate_poker_hand(request.player_hand, request.community_cards, request.stage)
        if not validation.is_valid:
            first = validation.first_error
            raise PokerError(first.code, first.message)

        method = determine_optimal_method(request)
        stage = str(request.stage)

        key = None
        if self.cache is not None:
            key = create_calculation_key(request.player_hand, request.community_cards, stage, method)
            cached = self.cache.get(key)
            if cached is not None:
                self.metrics.cache_hits += 1
                logger.debug("Cache hit for %s", key)
                return cached

        try:
            probabilities = calculate_hand_probabilities(
                request.player_hand,
                request.community_cards,
                method,
                self.config,
                self.rng
            )
        except Exception as exc:
            raise PokerError(ErrorCode.CALCULATION_FAILED, str(exc)) from exc

        elapsed_ms = (time.perf_counter() - start) * 1000
        self._record(elapsed_ms)

        logger.debug(
            "%s [%s | %s] via %s in %.2fms",
            stage, format_cards(request.player_hand), format_cards(request.community_cards),
            method, elapsed_ms
        )
        if elapsed_ms > self.config.time_budget_ms:
            logger.warning(
                "Calculation took %.1fms (budget %.0fms, method %s)",
                elapsed_ms, self.config.time_budget_ms, method
            )

        results = CalculationResults(
            stage=stage,
            player_hand=request.player_hand,
            community_cards=request.community_cards,
            probabilities=tuple(probabilities),
            calculation_time=elapsed_ms,
            method=method,
            timestamp=int(time.time() * 1000),
        )

        if self.cache is not None:
            self.cache.set(key, results)
        return results

    def evaluate_hand(self, cards: Sequence[Card]) -> HandEvaluation:
        return evaluate_hand(cards)

    def calculate_outs(
        self,
        player_hand: Sequence[Card],
        community_cards: Sequence[Card],
        target_hand: HandStrength
    ) -> int:
        return calculate_outs(player_hand, community_cards, target_hand)

    def check_health(self) -> dict:
        """Status, version and running performance figures."""
        return {
            'status': 'healthy',
            'version': ENGINE_VERSION,
            'lookup_tables_loaded': len(HAND_TYPES) == len(HandStrength),
            'performance': {
                'avg_calculation_time': self.metrics.average_calculation_time,
                'cache_hit_rate': self.metrics.cache_hit_rate,
                'total_calculations': self.metrics.total_calculations,
            },
        }

    def _record(self, elapsed_ms: float):
        self.metrics.total_calculations += 1
        self.metrics.total_time_ms += elapsed_ms
        self.metrics.last_calculation_time = elapsed_ms
        if elapsed_ms > self.config.time_budget_ms:
            self.metrics.over_budget += 1


def calculate_probabilities(
    request: CalculationRequest,
    config: Optional[EngineConfig] = None,
    rng=None
) -> CalculationResults:
    """Stateless shortcut for PokerEngine(config, rng).calculate_probabilities()"""
    return PokerEngine(config, rng).calculate_probabilities(request)


def evaluate_hand(cards: Sequence[Card]) -> HandEvaluation:
    """
    Best 5-card hand from 5-7 validated cards.

    Raises:
        PokerError: INSUFFICIENT_CARDS, TOO_MANY_CARDS, DUPLICATE_CARD, ...
    """
    validation = validate_hand_for_evaluation(cards)
    if not validation.is_valid:
        first = validation.first_error
        raise PokerError(first.code, first.message)
    return evaluate_poker_hand(cards)


def calculate_outs(
    player_hand: Sequence[Card],
    community_cards: Sequence[Card],
    target_hand: HandStrength
) -> int:
    """
    Number of unseen cards that bring the hand to at least target_hand.

    Raises:
        PokerError: INVALID_HAND_TYPE for a target outside 0-9,
            DUPLICATE_CARD (or another card error) for bad known cards
    """
    try:
        target = HandStrength(target_hand)
    except ValueError:
        raise PokerError(ErrorCode.INVALID_HAND_TYPE, f"Unknown hand type: {target_hand!r}") from None

    validation = validate_cards(list(player_hand) + list(community_cards))
    if not validation.is_valid:
        first = validation.first_error
        raise PokerError(first.code, first.message)
    return _count_outs(player_hand, community_cards, target)


def check_health() -> dict:
    return PokerEngine().check_health()
