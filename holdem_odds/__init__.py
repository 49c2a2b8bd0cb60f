"""
holdem_odds: Texas Hold'em hand evaluation and probability engine.

Best 5-card hand from 5-7 cards, and the probability of finishing in each
of the ten hand categories at any stage (pre-flop, flop, turn, river).
"""

from holdem_odds.errors import ErrorCode, PokerError
from holdem_odds.engine.poker_engine import ENGINE_VERSION as __version__

__all__ = ['ErrorCode', 'PokerError', '__version__']
