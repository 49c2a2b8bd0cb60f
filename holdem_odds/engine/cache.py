"""
Result cache for probability calculations.

Owned by the caller and handed to PokerEngine; nothing here is global.
Least-recently-used eviction with an optional time-to-live.
"""

from typing import Callable, Optional, Sequence
from collections import OrderedDict
import json
import time

from holdem_odds.game.cards import Card


def create_calculation_key(
    player_hand: Sequence[Card],
    community_cards: Sequence[Card],
    stage,
    method: str
) -> str:
    """
    Canonical key: sorted ids, so card order does not matter.

    Examples:
        >>> create_calculation_key(parse_cards('AH,AS'), [], 'pre-flop', 'lookup')
        '{"communityCards": [], "method": "lookup", "playerHand": ["AH", "AS"], "stage": "pre-flop"}'
    """
    return json.dumps({
        'playerHand': sorted(c.id for c in player_hand),
        'communityCards': sorted(c.id for c in community_cards),
        'stage': str(stage),
        'method': method,
    }, sort_keys=True)


class CalculationCache:
    """
    LRU cache of CalculationResults.

    Args:
        max_size: Maximum number of entries kept
        ttl_seconds: Entry lifetime (None = never expire)
        clock: Time source in seconds (injectable for tests)
    """

    def __init__(
        self,
        max_size: int = 200,
        ttl_seconds: Optional[float] = 600.0,
        clock: Callable[[], float] = time.monotonic
    ):
        assert max_size > 0, f"max_size must be positive, got {max_size}"
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[str, tuple]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, key: str):
        """Cached value or None; a hit marks the entry most recently used."""
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            return None

        value, stored_at = entry
        if self._expired(stored_at):
            del self._entries[key]
            self.misses += 1
            return None

        self._entries.move_to_end(key)
        self.hits += 1
        return value

    def set(self, key: str, value):
        if key in self._entries:
            self._entries.move_to_end(key)
        self._entries[key] = (value, self._clock())
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)

    def clear(self):
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups > 0 else 0.0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and not self._expired(entry[1])

    def _expired(self, stored_at: float) -> bool:
        return self.ttl_seconds is not None and self._clock() - stored_at > self.ttl_seconds
