"""Trade Journal: Personal trading journal with performance statistics.

A modular system for logging trades and analyzing performance,
including win rate, profit factor, equity curve and drawdown,
with AI coaching commentary.

Architecture:
- domain/: Core business logic (models, filter, metrics, prompts)
- infrastructure/: I/O and external dependencies
- application/: Use cases and services
- interfaces/: CLI
"""

__version__ = "0.1.0"

from trade_journal.domain import (
    Trade,
    TradeType,
    TradeFilter,
    TradeStats,
    EquityCurve,
)
from trade_journal.infrastructure import (
    DataPaths,
    JournalConfig,
    DEFAULT_PATHS,
    RepositoryError,
)

__all__ = [
    # Version
    "__version__",
    # Domain models
    "Trade",
    "TradeType",
    "TradeFilter",
    "TradeStats",
    "EquityCurve",
    # Infrastructure
    "DataPaths",
    "JournalConfig",
    "DEFAULT_PATHS",
    "RepositoryError",
]
