"""Trade Statistics: Aggregate performance metrics.

Metrics over a (filtered) trade collection:
- Win/loss counts: pnl > 0 is a win, pnl < 0 a loss, pnl == 0 neither
- Win rate: wins / trades × 100, 1 decimal
- Average PNL: total / trades, 2 decimals
- Profit factor: gross profit / gross loss, 2 decimals
    - no losses but some profit → inf
    - no losses and no profit → 0

Rounding is half away from zero on the shortest decimal representation
of the float, so 0.125 → 0.13 and 66.65 → 66.7.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from trade_journal.domain.models import Trade, TradeStats
from trade_journal.domain.metrics.equity import build_equity_curve


# =============================================================================
# Helpers
# =============================================================================

def round_half_away(value: float, places: int) -> float:
    """Round to a fixed number of decimals, ties away from zero.

    Args:
        value: Finite float to round
        places: Number of decimal places

    Returns:
        Rounded float

    Example:
        >>> round_half_away(2.675, 2)
        2.68
        >>> round_half_away(-0.125, 2)
        -0.13
    """
    # Beyond 1e15 a float carries no fractional digits to round
    if not math.isfinite(value) or abs(value) >= 1e15:
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def gross_profit_and_loss(trades: Sequence[Trade]) -> tuple[float, float]:
    """Sum of winning pnl and sum of absolute losing pnl."""
    gross_profit = 0.0
    gross_loss = 0.0
    for trade in trades:
        if trade.pnl > 0:
            gross_profit += trade.pnl
        elif trade.pnl < 0:
            gross_loss += abs(trade.pnl)
    return gross_profit, gross_loss


def profit_factor(gross_profit: float, gross_loss: float) -> float:
    """Gross profit over gross loss, rounded to 2 decimals."""
    if gross_loss == 0:
        return math.inf if gross_profit > 0 else 0.0
    return round_half_away(gross_profit / gross_loss, 2)


def format_profit_factor(value: float) -> str:
    """Display form of a profit factor ("∞" for infinity)."""
    if math.isinf(value):
        return "∞"
    return f"{value:g}"


# =============================================================================
# Aggregation
# =============================================================================

def compute_stats(trades: Sequence[Trade]) -> TradeStats:
    """Compute TradeStats for a trade collection.

    Recomputed from scratch on every call; the input is never mutated.

    Args:
        trades: Already-filtered trades

    Returns:
        TradeStats (all zeros for an empty collection)
    """
    if not trades:
        return TradeStats()

    count = len(trades)
    wins = 0
    losses = 0
    total_pnl = 0.0
    for trade in trades:
        total_pnl += trade.pnl
        if trade.pnl > 0:
            wins += 1
        elif trade.pnl < 0:
            losses += 1

    gross_profit, gross_loss = gross_profit_and_loss(trades)

    return TradeStats(
        trades=count,
        wins=wins,
        losses=losses,
        win_rate=round_half_away(wins / count * 100, 1),
        total_pnl=total_pnl,
        avg_pnl=round_half_away(total_pnl / count, 2),
        profit_factor=profit_factor(gross_profit, gross_loss),
        max_drawdown=build_equity_curve(trades).max_drawdown,
    )
