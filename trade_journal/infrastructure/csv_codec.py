"""CSV Codec: Import and export of trade journal CSV files.

Import rules:
- Every column is read as text; header names are trimmed and unquoted
- pnl, entry, exit, size, stopLoss, takeProfit become float or None
  (empty, unparseable and non-finite values are None); pnl falls back to 0
- Rows with fewer fields than the header are dropped
- date and symbol are trimmed; rows without either are dropped
- Each row gets a freshly minted id; an id column in the file is ignored

Export columns (fixed order):
    id, date, symbol, type, entry, exit, size, pnl,
    strategy, notes, entryReason, emotions

Values containing a comma or newline are quoted with doubled internal
quotes; missing values are written as empty fields.
"""

import io
import logging
from typing import Sequence

import polars as pl

from trade_journal.domain.models import Trade, TradeType, new_trade_id

logger = logging.getLogger(__name__)

NUMERIC_COLUMNS = ("pnl", "entry", "exit", "size", "stopLoss", "takeProfit")

EXPORT_COLUMNS = (
    "id",
    "date",
    "symbol",
    "type",
    "entry",
    "exit",
    "size",
    "pnl",
    "strategy",
    "notes",
    "entryReason",
    "emotions",
)


class CsvFormatError(ValueError):
    """Raised when a CSV file cannot be parsed at all."""


# =============================================================================
# Import
# =============================================================================

def _numeric(column: str) -> pl.Expr:
    """Text column → Float64, with unparseable/non-finite values as null."""
    value = pl.col(column).str.strip_chars().cast(pl.Float64, strict=False)
    return pl.when(value.is_finite()).then(value).otherwise(None).alias(column)


def _blank_to_null(column: str) -> pl.Expr:
    return pl.when(pl.col(column) != "").then(pl.col(column)).alias(column)


def read_trades_frame(text: str) -> pl.DataFrame:
    """Parse CSV text into a frame of coerced, non-dropped rows.

    Empty fields are read as "" and the cells polars pads onto a short
    row as null, so short rows can be told apart and dropped.

    Returns:
        DataFrame with string columns, numeric columns as Float64

    Raises:
        CsvFormatError: If the text is not parseable CSV
    """
    if not text.strip():
        return pl.DataFrame()

    try:
        df = pl.read_csv(
            io.BytesIO(text.encode("utf-8")),
            infer_schema_length=0,
            missing_is_null=False,
            truncate_ragged_lines=True,
        )
    except pl.exceptions.PolarsError as e:
        raise CsvFormatError(f"Failed to parse CSV: {e}") from e

    names = [c.strip().replace('"', "") for c in df.columns]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise CsvFormatError(f"Duplicate CSV columns: {', '.join(duplicates)}")
    df = df.rename(dict(zip(df.columns, names)))

    complete = df.filter(~pl.any_horizontal(pl.all().is_null()))
    short = len(df) - len(complete)
    if short:
        logger.info("Dropped %d CSV rows with fewer fields than the header", short)
    df = complete.with_columns([_blank_to_null(c) for c in complete.columns])

    numeric = [c for c in NUMERIC_COLUMNS if c in df.columns]
    if numeric:
        df = df.with_columns([_numeric(c) for c in numeric])
    if "pnl" in df.columns:
        df = df.with_columns(pl.col("pnl").fill_null(0.0))

    if "date" not in df.columns or "symbol" not in df.columns:
        logger.warning("CSV has no date/symbol column; nothing to import")
        return df.clear()

    df = df.with_columns(
        pl.col("date").str.strip_chars(),
        pl.col("symbol").str.strip_chars(),
    )
    present = (pl.col("date").str.len_chars() > 0) & (pl.col("symbol").str.len_chars() > 0)
    kept = df.filter(present.fill_null(False))

    dropped = len(df) - len(kept)
    if dropped:
        logger.info("Dropped %d CSV rows without date or symbol", dropped)
    return kept


def parse_trades_csv(text: str) -> list[Trade]:
    """Parse CSV text into new trades, in file order.

    Args:
        text: Full CSV file contents (header row first)

    Returns:
        Trades with freshly minted ids

    Raises:
        CsvFormatError: If the text is not parseable CSV
    """
    df = read_trades_frame(text)
    trades = []
    for row_num, row in enumerate(df.iter_rows(named=True), start=1):
        row["id"] = new_trade_id()
        try:
            trades.append(Trade.from_dict(row))
        except ValueError as e:
            logger.warning("Skipping CSV row %d: %s", row_num, e)
    return trades


# =============================================================================
# Export
# =============================================================================

def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _cell(value: object) -> str | None:
    """Export text for one value; None and "" both become an empty field."""
    if value is None:
        return None
    if isinstance(value, TradeType):
        return value.value
    if isinstance(value, float):
        return _format_number(value)
    return str(value) or None


def trades_export_frame(trades: Sequence[Trade]) -> pl.DataFrame:
    """Trades as an all-text frame in export column order."""
    rows = [t.to_dict() for t in trades]
    return pl.DataFrame([
        pl.Series(col, [_cell(r.get(col)) for r in rows], dtype=pl.String)
        for col in EXPORT_COLUMNS
    ])


def format_trades_csv(trades: Sequence[Trade]) -> str:
    """Render trades as CSV text (no trailing newline)."""
    text = trades_export_frame(trades).write_csv(quote_style="necessary")
    return text[:-1] if text.endswith("\n") else text
