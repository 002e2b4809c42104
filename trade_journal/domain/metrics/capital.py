"""Capital Tracker: Current account capital.

    current_capital = initial_capital + total_pnl

total_pnl is taken from the stats of the *filtered* collection, so the
displayed capital moves with the active filter.
"""

import math

from trade_journal.domain.models import TradeStats


def validate_initial_capital(amount: float) -> float:
    """Validate a user-set initial capital.

    Raises:
        ValueError: If amount is negative or not finite
    """
    value = float(amount)
    if not math.isfinite(value):
        raise ValueError(f"initial capital must be finite, got: {amount}")
    if value < 0:
        raise ValueError(f"initial capital must be non-negative, got: {amount}")
    return value


def current_capital(initial_capital: float, stats: TradeStats) -> float:
    """Initial capital plus the filtered total PNL."""
    return initial_capital + stats.total_pnl
