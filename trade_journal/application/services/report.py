"""Report Service: Per-symbol and per-strategy breakdown reports.

Orchestrates the breakdown report generation:
1. Group the (filtered) trades by symbol or strategy
2. Compute TradeStats for each group with the statistics engine
3. Build a ranked polars DataFrame (by total PNL)
4. Export to various formats (CSV, Parquet, Excel)
"""

from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import polars as pl

from trade_journal.domain.models import EquityCurve, Trade
from trade_journal.domain.metrics import compute_stats, drawdown_series
from trade_journal.infrastructure.config import DataPaths, DEFAULT_PATHS, DEFAULT_CONFIG

GROUP_FIELDS = ("symbol", "strategy")
UNASSIGNED = "N/A"


# =============================================================================
# Report Configuration
# =============================================================================

@dataclass(frozen=True)
class ReportConfig:
    """Configuration for breakdown report output.

    Attributes:
        output_dir: Directory for output files
        output_formats: Formats to write ("csv", "parquet", "xlsx")
    """
    output_dir: Path = DEFAULT_PATHS.reports_dir
    output_formats: tuple[str, ...] = DEFAULT_CONFIG.report_formats


# =============================================================================
# Frames
# =============================================================================

TRADES_SCHEMA = {
    "id": pl.String,
    "date": pl.String,
    "symbol": pl.String,
    "type": pl.String,
    "strategy": pl.String,
    "pnl": pl.Float64,
}

BREAKDOWN_SCHEMA = {
    "group": pl.String,
    "trades": pl.Int64,
    "wins": pl.Int64,
    "losses": pl.Int64,
    "win_rate": pl.Float64,
    "total_pnl": pl.Float64,
    "avg_pnl": pl.Float64,
    "profit_factor": pl.Float64,
    "max_drawdown": pl.Float64,
}


def trades_frame(trades: Sequence[Trade]) -> pl.DataFrame:
    """Trades as a polars DataFrame (store order)."""
    return pl.DataFrame(
        {
            "id": [t.id for t in trades],
            "date": [t.date for t in trades],
            "symbol": [t.symbol for t in trades],
            "type": [t.type.value for t in trades],
            "strategy": [t.strategy for t in trades],
            "pnl": [t.pnl for t in trades],
        },
        schema=TRADES_SCHEMA,
    )


def equity_frame(curve: EquityCurve) -> pl.DataFrame:
    """Equity curve as a DataFrame with a per-point drawdown column."""
    cumulative = curve.cumulative
    return pl.DataFrame(
        {
            "date": [p.date for p in curve.points],
            "cumulative_pnl": cumulative,
            "daily_pnl": [p.daily_pnl for p in curve.points],
            "drawdown": drawdown_series(cumulative),
        },
        schema={
            "date": pl.String,
            "cumulative_pnl": pl.Float64,
            "daily_pnl": pl.Float64,
            "drawdown": pl.Float64,
        },
    )


# =============================================================================
# Report Service
# =============================================================================

class ReportService:
    """Service for generating breakdown reports.

    Example:
        >>> service = ReportService()
        >>> df = service.breakdown(snapshot.trades, by="symbol")
        >>> service.save_report(df, "symbol_breakdown")
    """

    # Column order for output
    REPORT_COLUMNS = ["rank", *BREAKDOWN_SCHEMA]

    def __init__(
        self,
        paths: DataPaths = DEFAULT_PATHS,
        config: ReportConfig | None = None,
    ):
        """Initialize the service.

        Args:
            paths: Data paths configuration
            config: Report configuration (defaults to paths.reports_dir)
        """
        self._paths = paths
        self._config = config or ReportConfig(output_dir=paths.reports_dir)

    def breakdown(self, trades: Sequence[Trade], by: str = "symbol") -> pl.DataFrame:
        """Stats per symbol or strategy, ranked by total PNL.

        Trades without a strategy are grouped under "N/A".

        Args:
            trades: Trades to break down (already filtered)
            by: "symbol" or "strategy"

        Returns:
            DataFrame with REPORT_COLUMNS, best group first

        Raises:
            ValueError: If by is not a supported field
        """
        if by not in GROUP_FIELDS:
            raise ValueError(f"by must be one of {GROUP_FIELDS}, got: {by}")

        groups: dict[str, list[Trade]] = defaultdict(list)
        for trade in trades:
            groups[getattr(trade, by) or UNASSIGNED].append(trade)

        results = []
        for name, members in groups.items():
            stats = compute_stats(members)
            results.append({
                "group": name,
                "trades": stats.trades,
                "wins": stats.wins,
                "losses": stats.losses,
                "win_rate": stats.win_rate,
                "total_pnl": stats.total_pnl,
                "avg_pnl": stats.avg_pnl,
                "profit_factor": stats.profit_factor,
                "max_drawdown": stats.max_drawdown,
            })

        df = pl.DataFrame(results, schema=BREAKDOWN_SCHEMA)

        # Sort by total_pnl descending and add rank
        df = df.sort("total_pnl", descending=True, maintain_order=True)
        df = df.with_row_index("rank", offset=1)

        return df.select(self.REPORT_COLUMNS)

    def save_report(
        self,
        df: pl.DataFrame,
        base_name: str = "breakdown",
        formats: tuple[str, ...] | None = None,
    ) -> list[Path]:
        """Save report to specified formats.

        Args:
            df: Report DataFrame
            base_name: Base filename without extension
            formats: Output formats (uses config if not provided)

        Returns:
            List of saved file paths

        Raises:
            ValueError: If a format is not supported
        """
        formats = formats or self._config.output_formats
        unknown = [f for f in formats if f not in ("csv", "parquet", "xlsx")]
        if unknown:
            raise ValueError(f"Unknown format: {', '.join(unknown)}")

        output_dir = self._config.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        saved = []

        for fmt in formats:
            path = output_dir / f"{base_name}.{fmt}"

            if fmt == "csv":
                df.write_csv(path)
            elif fmt == "parquet":
                df.write_parquet(path)
            else:
                self._save_excel(df, path)

            saved.append(path)

        return saved

    def _save_excel(self, df: pl.DataFrame, path: Path) -> None:
        """Save report to Excel with a formatted header row."""
        import xlsxwriter

        workbook = xlsxwriter.Workbook(str(path))
        worksheet = workbook.add_worksheet("Breakdown")

        header_fmt = workbook.add_format({
            "bold": True,
            "bg_color": "#4472C4",
            "font_color": "white",
            "border": 1,
        })
        money_fmt = workbook.add_format({"num_format": "#,##0.00"})

        columns = df.columns
        for col_idx, col_name in enumerate(columns):
            worksheet.write(0, col_idx, col_name, header_fmt)

        for row_idx, row in enumerate(df.iter_rows(named=True), 1):
            for col_idx, col_name in enumerate(columns):
                value = row[col_name]
                if value is None:
                    worksheet.write(row_idx, col_idx, "")
                elif col_name == "profit_factor" and value == float("inf"):
                    # Excel has no infinity
                    worksheet.write(row_idx, col_idx, "∞")
                elif col_name in ("total_pnl", "avg_pnl", "max_drawdown"):
                    worksheet.write(row_idx, col_idx, value, money_fmt)
                else:
                    worksheet.write(row_idx, col_idx, value)

        for col_idx, col_name in enumerate(columns):
            worksheet.set_column(col_idx, col_idx, max(len(col_name), 10))

        workbook.close()
