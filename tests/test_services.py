"""Integration tests for application services.

Tests verify:
1. JournalService CRUD keeps store order and persists every change
2. Snapshots compute stats, curve and capital from one filtered set
3. CSV import/export through the service
4. ReportService breakdowns and file output
"""

import math

import polars as pl
import pytest

from trade_journal.domain.models import TradeFilter, TradeStats
from trade_journal.infrastructure.config import DataPaths
from trade_journal.infrastructure.repositories import RepositoryError
from trade_journal.application.services import (
    JournalService,
    ReportConfig,
    ReportService,
    TradeNotFoundError,
    equity_frame,
    trades_frame,
)


@pytest.fixture
def paths(tmp_path):
    return DataPaths(root=tmp_path)


@pytest.fixture
def journal(paths):
    """Empty journal in a temporary directory."""
    return JournalService(paths)


@pytest.fixture
def seeded(journal):
    """Journal with three trades added oldest first (store is newest first)."""
    journal.add_trade(date="2024-01-01", symbol="EURUSD", type="Long",
                      pnl=100.0, strategy="Breakout")
    journal.add_trade(date="2024-01-02", symbol="GBPUSD", type="Short",
                      pnl=-50.0)
    journal.add_trade(date="2024-01-03", symbol="EURUSD", type="Short",
                      pnl=200.0, strategy="Reversal")
    return journal


# =============================================================================
# JournalService Tests
# =============================================================================

class TestJournalCrud:
    """Tests for trade store operations."""

    def test_add_prepends(self, seeded):
        """New trades go to the front of the store."""
        assert [t.date for t in seeded.list_trades()] == [
            "2024-01-03", "2024-01-02", "2024-01-01",
        ]

    def test_add_mints_id(self, journal):
        trade = journal.add_trade(id="mine", date="2024-01-01", symbol="X",
                                  type="Long", pnl=1.0)
        assert trade.id != "mine"
        assert journal.get_trade(trade.id) == trade

    def test_add_invalid_raises(self, journal):
        with pytest.raises(ValueError, match="symbol cannot be empty"):
            journal.add_trade(date="2024-01-01", symbol="", type="Long", pnl=1.0)
        assert journal.list_trades() == []

    def test_persisted(self, seeded, paths):
        """A fresh service sees the saved trades."""
        assert len(JournalService(paths).list_trades()) == 3

    def test_update_keeps_position_and_id(self, seeded):
        middle = seeded.list_trades()[1]
        updated = seeded.update_trade(middle.id, pnl=75.0, notes="re-check")
        trades = seeded.list_trades()
        assert trades[1] == updated
        assert updated.id == middle.id
        assert updated.pnl == 75.0
        assert updated.symbol == middle.symbol

    def test_update_missing_raises(self, journal):
        with pytest.raises(TradeNotFoundError, match="missing"):
            journal.update_trade("missing", pnl=1.0)

    def test_attach_analysis(self, seeded):
        trade = seeded.list_trades()[0]
        seeded.attach_analysis(trade.id, "Solid entry.")
        stored = seeded.get_trade(trade.id)
        assert stored.ai_analysis == "Solid entry."
        assert stored.with_changes(ai_analysis=None) == trade

    def test_delete(self, seeded):
        trade = seeded.list_trades()[0]
        seeded.delete_trade(trade.id)
        assert len(seeded.list_trades()) == 2
        with pytest.raises(TradeNotFoundError):
            seeded.get_trade(trade.id)

    def test_delete_missing_raises(self, seeded):
        with pytest.raises(TradeNotFoundError):
            seeded.delete_trade("nope")
        assert len(seeded.list_trades()) == 3

    def test_not_found_message(self):
        assert str(TradeNotFoundError("abc")) == "Trade not found: abc"

    def test_clear_keeps_capital(self, seeded):
        seeded.set_initial_capital(5000)
        assert seeded.clear() == 3
        assert seeded.list_trades() == []
        assert seeded.get_initial_capital() == 5000.0


class TestJournalSnapshot:
    """Tests for the computed journal view."""

    def test_unfiltered(self, seeded):
        snap = seeded.snapshot()
        assert snap.stats.trades == 3
        assert snap.stats.total_pnl == 250
        assert snap.stats.max_drawdown == -50
        assert snap.equity.cumulative == [100, 50, 250]
        assert snap.initial_capital == 1000.0
        assert snap.current_capital == 1250.0

    def test_filtered_capital(self, seeded):
        """Stats, curve and capital all follow the active filter."""
        snap = seeded.snapshot(TradeFilter(symbol="eur"))
        assert len(snap.trades) == 2
        assert snap.stats.total_pnl == 300
        assert snap.equity.cumulative == [100, 300]
        assert snap.current_capital == 1300.0

    def test_strategy_filter(self, seeded):
        snap = seeded.snapshot(TradeFilter(strategy="rev"))
        assert [t.strategy for t in snap.trades] == ["Reversal"]

    def test_empty(self, journal):
        snap = journal.snapshot()
        assert snap.stats == TradeStats()
        assert len(snap.equity) == 0
        assert snap.current_capital == snap.initial_capital

    def test_to_dict(self, seeded):
        d = seeded.snapshot(TradeFilter(date_from="2024-01-02")).to_dict()
        assert d["filter"]["from"] == "2024-01-02"
        assert d["stats"]["totalPnL"] == 150
        assert d["equityCurve"][0] == {"date": "2024-01-02", "pnl": -50, "dailyPnL": -50}
        assert d["currentCapital"] == 1150

    def test_set_initial_capital_validates(self, journal):
        with pytest.raises(ValueError):
            journal.set_initial_capital(-10)
        assert journal.get_initial_capital() == 1000.0


class TestJournalCsv:
    """Tests for CSV import/export through the service."""

    def test_import_prepends_reversed(self, journal):
        """File rows land before existing trades, last row first."""
        existing = journal.add_trade(date="2023-12-31", symbol="OLD",
                                     type="Long", pnl=1.0)
        imported = journal.import_csv(
            "date,symbol,pnl\n2024-01-01,A,1\n2024-01-02,B,2\n"
        )
        assert [t.symbol for t in imported] == ["A", "B"]
        assert [t.symbol for t in journal.list_trades()] == ["B", "A", "OLD"]
        assert journal.list_trades()[-1] == existing

    def test_import_nothing(self, journal):
        assert journal.import_csv("date,symbol,pnl\n") == []
        assert journal.list_trades() == []

    def test_import_file_bom(self, journal, tmp_path):
        path = tmp_path / "trades.csv"
        path.write_text("date,symbol,pnl\n2024-01-01,EURUSD,5\n", encoding="utf-8-sig")
        assert len(journal.import_file(path)) == 1

    def test_import_missing_file(self, journal, tmp_path):
        with pytest.raises(RepositoryError, match="Failed to read CSV"):
            journal.import_file(tmp_path / "nope.csv")

    def test_export_file(self, seeded, tmp_path):
        path = seeded.export_file(tmp_path / "out.csv")
        lines = path.read_text(encoding="utf-8").split("\n")
        assert lines[0].startswith("id,date,symbol,type")
        assert len(lines) == 4
        assert lines[1].split(",")[2] == "EURUSD"


# =============================================================================
# ReportService Tests
# =============================================================================

class TestReportService:
    """Tests for breakdown reports."""

    @pytest.fixture
    def service(self, paths):
        return ReportService(paths)

    def test_breakdown_by_symbol(self, seeded, service):
        df = service.breakdown(seeded.list_trades(), by="symbol")
        assert df.columns == ReportService.REPORT_COLUMNS
        assert df["group"].to_list() == ["EURUSD", "GBPUSD"]
        assert df["rank"].to_list() == [1, 2]
        eur = df.row(0, named=True)
        assert eur["trades"] == 2
        assert eur["total_pnl"] == 300
        assert math.isinf(eur["profit_factor"])
        gbp = df.row(1, named=True)
        assert gbp["max_drawdown"] == 0
        assert gbp["win_rate"] == 0

    def test_breakdown_by_strategy(self, seeded, service):
        """Trades without a strategy are grouped under N/A."""
        df = service.breakdown(seeded.list_trades(), by="strategy")
        assert df["group"].to_list() == ["Reversal", "Breakout", "N/A"]

    def test_breakdown_invalid_field(self, service):
        with pytest.raises(ValueError, match="by must be one of"):
            service.breakdown([], by="emotions")

    def test_breakdown_empty(self, service):
        df = service.breakdown([], by="symbol")
        assert len(df) == 0
        assert df.columns == ReportService.REPORT_COLUMNS

    def test_save_report(self, seeded, paths):
        service = ReportService(paths, ReportConfig(output_dir=paths.reports_dir))
        df = service.breakdown(seeded.list_trades())
        saved = service.save_report(df, "symbols", formats=("csv", "parquet", "xlsx"))
        assert [p.name for p in saved] == ["symbols.csv", "symbols.parquet", "symbols.xlsx"]
        assert all(p.exists() for p in saved)
        assert pl.read_parquet(saved[1])["group"].to_list() == ["EURUSD", "GBPUSD"]

    def test_save_report_unknown_format(self, service):
        with pytest.raises(ValueError, match="Unknown format: pdf"):
            service.save_report(pl.DataFrame(), formats=("pdf",))


class TestFrames:
    """Tests for DataFrame conversions."""

    def test_trades_frame(self, seeded):
        df = trades_frame(seeded.list_trades())
        assert df["pnl"].sum() == 250
        assert df.schema["pnl"] == pl.Float64

    def test_equity_frame(self, seeded):
        df = equity_frame(seeded.snapshot().equity)
        assert df["cumulative_pnl"].to_list() == [100, 50, 250]
        assert df["drawdown"].to_list() == [0, 50, 0]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
