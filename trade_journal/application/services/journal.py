"""Journal Service: Trade store operations and the computed journal view.

Orchestrates the repositories and the statistics engine:
- CRUD on the trade store (newest first), persisted on every change
- CSV import (prepended) and export
- Initial capital management
- snapshot(): filter once, then stats, equity curve and capital from
  that one filtered collection

The service holds no derived state; every snapshot is recomputed.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from trade_journal.domain.models import (
    EquityCurve,
    Trade,
    TradeFilter,
    TradeStats,
    new_trade_id,
)
from trade_journal.domain.filters import apply_filter
from trade_journal.domain.metrics import (
    build_equity_curve,
    compute_stats,
    current_capital,
    validate_initial_capital,
)
from trade_journal.infrastructure.config import DataPaths, DEFAULT_PATHS
from trade_journal.infrastructure.csv_codec import format_trades_csv, parse_trades_csv
from trade_journal.infrastructure.repositories import (
    RepositoryError,
    SettingsRepository,
    TradeRepository,
)

logger = logging.getLogger(__name__)


class TradeNotFoundError(KeyError):
    """Raised when a trade id is not in the store."""

    def __init__(self, trade_id: str):
        self.trade_id = trade_id
        super().__init__(trade_id)

    def __str__(self) -> str:
        return f"Trade not found: {self.trade_id}"


# =============================================================================
# Snapshot
# =============================================================================

@dataclass(frozen=True, slots=True)
class JournalSnapshot:
    """Everything the journal view shows for one filter state.

    Attributes:
        trade_filter: Filter the snapshot was computed for
        trades: Filtered trades in store order
        stats: Stats of the filtered trades
        equity: Equity curve of the filtered trades
        initial_capital: User-set starting capital
        current_capital: initial_capital + filtered total PNL
    """
    trade_filter: TradeFilter
    trades: tuple[Trade, ...]
    stats: TradeStats
    equity: EquityCurve
    initial_capital: float
    current_capital: float

    def to_dict(self) -> dict:
        """Convert to dictionary (for JSON output)."""
        return {
            "filter": {
                "symbol": self.trade_filter.symbol,
                "strategy": self.trade_filter.strategy,
                "from": self.trade_filter.date_from,
                "to": self.trade_filter.date_to,
            },
            "stats": self.stats.to_dict(),
            "equityCurve": [
                {"date": p.date, "pnl": p.cumulative_pnl, "dailyPnL": p.daily_pnl}
                for p in self.equity.points
            ],
            "initialCapital": self.initial_capital,
            "currentCapital": self.current_capital,
        }


# =============================================================================
# Journal Service
# =============================================================================

class JournalService:
    """Service for managing the trade journal.

    Example:
        >>> journal = JournalService()
        >>> trade = journal.add_trade(date="2024-01-02", symbol="EURUSD",
        ...                           type="Long", pnl=120.0)
        >>> snap = journal.snapshot(TradeFilter(symbol="eur"))
        >>> snap.stats.win_rate
        100.0
    """

    def __init__(
        self,
        paths: DataPaths = DEFAULT_PATHS,
        trade_repo: TradeRepository | None = None,
        settings_repo: SettingsRepository | None = None,
    ):
        """Initialize the service.

        Args:
            paths: Data paths configuration
            trade_repo: Trade store (created from paths if not provided)
            settings_repo: Settings store (created from paths if not provided)
        """
        self._paths = paths
        self._trade_repo = trade_repo or TradeRepository(paths)
        self._settings_repo = settings_repo or SettingsRepository(paths)

    # --- Queries ---

    def list_trades(self) -> list[Trade]:
        """All trades, newest first."""
        return self._trade_repo.get_all()

    def get_trade(self, trade_id: str) -> Trade:
        """Get a trade by id.

        Raises:
            TradeNotFoundError: If no trade has this id
        """
        trade = self._trade_repo.get_by_id(trade_id)
        if trade is None:
            raise TradeNotFoundError(trade_id)
        return trade

    def snapshot(self, trade_filter: TradeFilter | None = None) -> JournalSnapshot:
        """Compute the journal view for a filter state.

        The filtered collection is computed once and feeds stats, the
        equity curve and current capital.
        """
        trade_filter = trade_filter or TradeFilter()
        filtered = apply_filter(self._trade_repo.get_all(), trade_filter)
        stats = compute_stats(filtered)
        initial = self.get_initial_capital()
        return JournalSnapshot(
            trade_filter=trade_filter,
            trades=tuple(filtered),
            stats=stats,
            equity=build_equity_curve(filtered),
            initial_capital=initial,
            current_capital=current_capital(initial, stats),
        )

    # --- Commands ---

    def add_trade(self, **fields: Any) -> Trade:
        """Create a trade with a fresh id and put it first in the store.

        Raises:
            ValueError: If the fields do not form a valid trade
        """
        fields.pop("id", None)
        trade = Trade(id=new_trade_id(), **fields)
        self._trade_repo.save_all([trade, *self._trade_repo.get_all()])
        logger.info("Added trade %s (%s %s)", trade.id, trade.symbol, trade.date)
        return trade

    def update_trade(self, trade_id: str, **fields: Any) -> Trade:
        """Replace a trade's fields, keeping its id and store position.

        Raises:
            TradeNotFoundError: If no trade has this id
            ValueError: If the edited trade is invalid
        """
        return self._replace(trade_id, lambda t: t.with_changes(**fields))

    def attach_analysis(self, trade_id: str, analysis: str) -> Trade:
        """Store AI narrative text on a trade (only ai_analysis changes)."""
        return self._replace(trade_id, lambda t: t.with_changes(ai_analysis=analysis))

    def delete_trade(self, trade_id: str) -> None:
        """Remove a trade.

        Raises:
            TradeNotFoundError: If no trade has this id
        """
        trades = self._trade_repo.get_all()
        remaining = [t for t in trades if t.id != trade_id]
        if len(remaining) == len(trades):
            raise TradeNotFoundError(trade_id)
        self._trade_repo.save_all(remaining)
        logger.info("Deleted trade %s", trade_id)

    def clear(self) -> int:
        """Remove all trades; returns how many were removed."""
        count = len(self._trade_repo.get_all())
        self._trade_repo.save_all([])
        logger.info("Cleared %d trades", count)
        return count

    def _replace(self, trade_id: str, edit) -> Trade:
        trades = self._trade_repo.get_all()
        for i, trade in enumerate(trades):
            if trade.id == trade_id:
                updated = edit(trade)
                trades[i] = updated
                self._trade_repo.save_all(trades)
                return updated
        raise TradeNotFoundError(trade_id)

    # --- Import / Export ---

    def import_csv(self, text: str) -> list[Trade]:
        """Import trades from CSV text.

        Imported rows go in front of the existing trades in reversed file
        order, so the file's first row ends up just before the trades
        that were already in the store.

        Returns:
            Imported trades, in file order
        """
        imported = parse_trades_csv(text)
        if imported:
            existing = self._trade_repo.get_all()
            self._trade_repo.save_all([*reversed(imported), *existing])
        logger.info("Imported %d trades", len(imported))
        return imported

    def import_file(self, path: Path) -> list[Trade]:
        """Import trades from a CSV file.

        Raises:
            RepositoryError: If the file cannot be read
        """
        try:
            text = Path(path).read_text(encoding="utf-8-sig")
        except OSError as e:
            raise RepositoryError(f"Failed to read CSV: {e}", str(path))
        return self.import_csv(text)

    def export_csv(self) -> str:
        """All trades as CSV text, in store order."""
        return format_trades_csv(self._trade_repo.get_all())

    def export_file(self, path: Path) -> Path:
        """Write all trades to a CSV file.

        Raises:
            RepositoryError: If the file cannot be written
        """
        path = Path(path)
        try:
            path.write_text(self.export_csv(), encoding="utf-8")
        except OSError as e:
            raise RepositoryError(f"Failed to write CSV: {e}", str(path))
        return path

    # --- Capital ---

    def get_initial_capital(self) -> float:
        """User-set initial capital (default 1000)."""
        return self._settings_repo.get_initial_capital()

    def set_initial_capital(self, amount: float) -> float:
        """Validate and persist the initial capital.

        Raises:
            ValueError: If amount is negative or not finite
        """
        value = validate_initial_capital(amount)
        self._settings_repo.save_initial_capital(value)
        return value
