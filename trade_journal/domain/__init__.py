"""Domain Layer: Core business logic and entities.

This layer contains:
- models.py: Data structures (Trade, TradeFilter, TradeStats, EquityCurve)
- filters.py: Filter predicate for the journal view
- metrics/: Statistics, equity curve, capital and trader profile
- prompts.py: Prompt builders for AI coaching

Nothing in this layer performs I/O.
"""

from trade_journal.domain.models import (
    Trade,
    TradeType,
    TradeFilter,
    TradeStats,
    EquityPoint,
    EquityCurve,
)
from trade_journal.domain.filters import (
    matches_filter,
    apply_filter,
)
from trade_journal.domain.metrics import (
    compute_stats,
    build_equity_curve,
    max_drawdown,
    current_capital,
    validate_initial_capital,
    format_profit_factor,
    TraderProfile,
    analyze_trader_profile,
)

__all__ = [
    # Models
    "Trade",
    "TradeType",
    "TradeFilter",
    "TradeStats",
    "EquityPoint",
    "EquityCurve",
    # Filters
    "matches_filter",
    "apply_filter",
    # Metrics
    "compute_stats",
    "build_equity_curve",
    "max_drawdown",
    "current_capital",
    "validate_initial_capital",
    "format_profit_factor",
    "TraderProfile",
    "analyze_trader_profile",
]
