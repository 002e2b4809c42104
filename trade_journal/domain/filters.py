"""Filter Predicate: Narrow the trade store to the working set.

Every downstream computation (statistics, equity curve, capital, AI
context) consumes the same filtered collection. Callers compute it once
per filter state with apply_filter() and pass it along.

Date bounds compare as strings: zero-padded ISO dates order
lexicographically the same as chronologically.
"""

from typing import Iterable

from trade_journal.domain.models import Trade, TradeFilter


def matches_filter(trade: Trade, trade_filter: TradeFilter) -> bool:
    """Check whether a trade passes all active constraints.

    Args:
        trade: Trade to test
        trade_filter: Filter state (empty fields are inactive)

    Returns:
        True if the trade passes every active constraint

    Example:
        >>> matches_filter(trade, TradeFilter(symbol="eur"))  # EURUSD
        True
    """
    if trade_filter.symbol:
        if trade_filter.symbol.lower() not in trade.symbol.lower():
            return False
    if trade_filter.strategy:
        # A trade without a strategy never matches a strategy filter
        if not trade.strategy:
            return False
        if trade_filter.strategy.lower() not in trade.strategy.lower():
            return False
    if trade_filter.date_from and trade.date < trade_filter.date_from:
        return False
    if trade_filter.date_to and trade.date > trade_filter.date_to:
        return False
    return True


def apply_filter(trades: Iterable[Trade], trade_filter: TradeFilter) -> list[Trade]:
    """Return the trades passing the filter, in their original order."""
    return [t for t in trades if matches_filter(t, trade_filter)]
