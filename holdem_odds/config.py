"""
Engine configuration.

Tunable constants for the probability engine. CLI flags override single
fields.
"""

from dataclasses import dataclass, asdict


@dataclass
class EngineConfig:
    """Probability engine configuration."""
    # Monte Carlo
    num_simulations: int = 10_000  # 'simulation' method draws
    exact_simulations: int = 100_000  # 'exact' is high-sample simulation, not enumeration

    # Lookup / heuristic method
    lookup_total_outcomes: int = 1000  # Nominal denominator for occurrences

    # Soft real-time budget (logged, never enforced)
    time_budget_ms: float = 100.0

    # Result cache
    cache_size: int = 200
    cache_ttl_seconds: float = 600.0  # 10 minutes

    def __post_init__(self):
        assert self.num_simulations > 0, f"num_simulations must be positive, got {self.num_simulations}"
        assert self.exact_simulations > 0, f"exact_simulations must be positive, got {self.exact_simulations}"
        assert self.lookup_total_outcomes > 0, \
            f"lookup_total_outcomes must be positive, got {self.lookup_total_outcomes}"
        assert self.cache_size > 0, f"cache_size must be positive, got {self.cache_size}"

    def to_dict(self) -> dict:
        return asdict(self)
