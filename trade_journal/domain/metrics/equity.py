"""Equity Curve: Chronological cumulative PNL and maximum drawdown.

The curve walks trades in calendar order, one point per trade:

    cumulative[i] = Σ pnl[0..i]

Drawdown at each point is the decline from the running peak:

    drawdown[i] = max(cumulative[0..i]) - cumulative[i]
    max_drawdown = -max(drawdown)

max_drawdown is reported as zero or negative. Unlike the statistics
aggregator (order-independent sums), drawdown depends on ordering, so
this module sorts its own copy of the input.
"""

from datetime import date
from typing import Sequence

from trade_journal.domain.models import EquityCurve, EquityPoint, Trade


def _date_key(trade: Trade) -> tuple[bool, date]:
    """Sort key: parsed calendar date; unparseable dates sort last."""
    try:
        return False, date.fromisoformat(trade.date)
    except ValueError:
        return True, date.max


def sort_chronologically(trades: Sequence[Trade]) -> list[Trade]:
    """Stable sort by calendar date.

    Trades sharing a date keep their relative input order (the store is
    newest first, so same-day trades stay newest first).
    """
    return sorted(trades, key=_date_key)


def drawdown_series(cumulative: Sequence[float]) -> list[float]:
    """Per-point drawdown magnitudes (peak - value), all >= 0.

    The running peak starts at -inf, so the first point is its own peak.
    """
    peak = float("-inf")
    result = []
    for value in cumulative:
        if value > peak:
            peak = value
        result.append(peak - value)
    return result


def max_drawdown(cumulative: Sequence[float]) -> float:
    """Maximum drawdown of a cumulative series, as a non-positive number.

    Example:
        >>> max_drawdown([100, 50, 250])
        -50.0
    """
    magnitude = max(drawdown_series(cumulative), default=0.0)
    if magnitude <= 0:
        return 0.0
    return -magnitude


def build_equity_curve(trades: Sequence[Trade]) -> EquityCurve:
    """Build the equity curve for a (filtered) trade collection.

    Args:
        trades: Trades in store order (not mutated)

    Returns:
        EquityCurve with one point per trade and its max drawdown
    """
    if not trades:
        return EquityCurve()

    points = []
    running = 0.0
    for trade in sort_chronologically(trades):
        running += trade.pnl
        points.append(EquityPoint(
            date=trade.date,
            cumulative_pnl=running,
            daily_pnl=trade.pnl,
        ))

    return EquityCurve(
        points=tuple(points),
        max_drawdown=max_drawdown([p.cumulative_pnl for p in points]),
    )
