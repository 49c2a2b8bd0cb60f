"""
Error taxonomy for the hand evaluation and probability engine.

Every failure carries a stable code so callers (CLI, UI, tests) can map it
to their own messages. PokerError subclasses ValueError, which is what the
card and evaluator layers have always raised on bad input.
"""

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Distinguishable error kinds"""

    # Card construction / parsing
    INVALID_SUIT = 'INVALID_SUIT'
    INVALID_RANK = 'INVALID_RANK'
    INVALID_CARD_STRING = 'INVALID_CARD_STRING'

    # Card set validation
    DUPLICATE_CARD = 'DUPLICATE_CARD'
    INVALID_VALUE = 'INVALID_VALUE'
    INVALID_DISPLAY = 'INVALID_DISPLAY'
    INVALID_ID = 'INVALID_ID'

    # Stage consistency
    INVALID_PLAYER_HAND_SIZE = 'INVALID_PLAYER_HAND_SIZE'
    INVALID_COMMUNITY_CARDS = 'INVALID_COMMUNITY_CARDS'
    INVALID_STAGE = 'INVALID_STAGE'
    INVALID_STAGE_PROGRESSION = 'INVALID_STAGE_PROGRESSION'
    MISSING_HOLE_CARDS = 'MISSING_HOLE_CARDS'
    MISSING_FLOP_CARDS = 'MISSING_FLOP_CARDS'
    MISSING_TURN_CARD = 'MISSING_TURN_CARD'
    TOO_MANY_HOLE_CARDS = 'TOO_MANY_HOLE_CARDS'
    INSUFFICIENT_COMMUNITY_CARDS = 'INSUFFICIENT_COMMUNITY_CARDS'
    TOO_MANY_COMMUNITY_CARDS = 'TOO_MANY_COMMUNITY_CARDS'
    TOO_MANY_TOTAL_CARDS = 'TOO_MANY_TOTAL_CARDS'

    # Evaluation / dealing
    INSUFFICIENT_CARDS = 'INSUFFICIENT_CARDS'
    TOO_MANY_CARDS = 'TOO_MANY_CARDS'
    INVALID_DEAL_COUNT = 'INVALID_DEAL_COUNT'
    INVALID_HAND_TYPE = 'INVALID_HAND_TYPE'

    # Probability engine
    INVALID_METHOD = 'INVALID_METHOD'
    CALCULATION_FAILED = 'CALCULATION_FAILED'

    def __str__(self) -> str:
        return self.value


class PokerError(ValueError):
    """
    Raised by every engine operation that fails.

    Attributes:
        code: ErrorCode identifying the failure kind
        message: Human-readable detail (may be empty)
    """

    def __init__(self, code: ErrorCode, message: Optional[str] = None):
        self.code = ErrorCode(code)
        self.message = message or ''
        super().__init__(self.code.value if not message else f"{self.code.value}: {message}")
