"""Trading metrics for journal performance analysis.

This package provides the statistics engine:

- Statistics: Win/loss counts, win rate, average PNL, profit factor
- Equity: Chronological cumulative PNL and maximum drawdown
- Capital: Initial capital plus filtered PNL
- Profile: Behavioral summary used as coaching context

Usage:
    from trade_journal.domain.metrics import (
        compute_stats,
        build_equity_curve,
        current_capital,
    )
"""

# Statistics
from trade_journal.domain.metrics.statistics import (
    compute_stats,
    round_half_away,
    gross_profit_and_loss,
    profit_factor,
    format_profit_factor,
)

# Equity
from trade_journal.domain.metrics.equity import (
    build_equity_curve,
    sort_chronologically,
    drawdown_series,
    max_drawdown,
)

# Capital
from trade_journal.domain.metrics.capital import (
    current_capital,
    validate_initial_capital,
)

# Profile
from trade_journal.domain.metrics.profile import (
    TraderProfile,
    analyze_trader_profile,
    recent_trend,
)

__all__ = [
    # Statistics
    "compute_stats",
    "round_half_away",
    "gross_profit_and_loss",
    "profit_factor",
    "format_profit_factor",
    # Equity
    "build_equity_curve",
    "sort_chronologically",
    "drawdown_series",
    "max_drawdown",
    # Capital
    "current_capital",
    "validate_initial_capital",
    # Profile
    "TraderProfile",
    "analyze_trader_profile",
    "recent_trend",
]
