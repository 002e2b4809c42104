"""Command Line Interface for the trade journal.

Provides CLI access to journal functions:
- stats: Show statistics for the (filtered) journal
- list: List trades
- add / edit / delete / clear: Manage trades
- import / export: CSV files
- capital: Show or set initial capital
- report: Per-symbol or per-strategy breakdown
- analyze: AI coaching commentary

Usage:
    python -m trade_journal stats --symbol eur --from 2024-01-01
    python -m trade_journal add --symbol EURUSD --pnl 120 --strategy breakout
    python -m trade_journal import trades.csv
    python -m trade_journal report --by strategy --formats csv,xlsx
"""

import argparse
import json
import logging
import math
import sys
from datetime import date
from pathlib import Path

from trade_journal import __version__
from trade_journal.domain.models import TradeFilter, coerce_number, coerce_pnl
from trade_journal.domain.metrics import format_profit_factor
from trade_journal.infrastructure import (
    DataPaths,
    RepositoryError,
    SettingsRepository,
    configure_logging,
)
from trade_journal.application import (
    CoachingService,
    JournalService,
    ReportConfig,
    ReportService,
    TradeNotFoundError,
)

logger = logging.getLogger(__name__)

NUMERIC_OPTIONS = ("entry", "exit", "size", "stop_loss", "take_profit")
TEXT_OPTIONS = ("date", "time", "symbol", "type", "strategy", "notes", "entry_reason", "emotions")


def _paths(args: argparse.Namespace) -> DataPaths:
    return DataPaths(root=Path(args.root)) if args.root else DataPaths.from_env()


def _journal(args: argparse.Namespace) -> JournalService:
    return JournalService(paths=_paths(args))


def _filter(args: argparse.Namespace) -> TradeFilter:
    return TradeFilter(
        symbol=args.symbol or "",
        strategy=args.strategy or "",
        date_from=args.date_from or "",
        date_to=args.date_to or "",
    )


def _money(value: float) -> str:
    return f"${value:,.2f}"


def _trade_fields(args: argparse.Namespace) -> dict:
    """Collect the trade fields given on the command line."""
    fields = {}
    for name in TEXT_OPTIONS:
        value = getattr(args, name, None)
        if value is not None:
            fields[name] = value
    for name in NUMERIC_OPTIONS:
        value = getattr(args, name, None)
        if value is not None:
            fields[name] = coerce_number(value)
    if getattr(args, "pnl", None) is not None:
        fields["pnl"] = coerce_pnl(args.pnl)
    return fields


# =============================================================================
# Commands
# =============================================================================

def cmd_stats(args: argparse.Namespace) -> int:
    """Show statistics for the filtered journal."""
    snap = _journal(args).snapshot(_filter(args))

    if args.json:
        data = snap.to_dict()
        # JSON has no Infinity
        if math.isinf(snap.stats.profit_factor):
            data["stats"]["profitFactor"] = format_profit_factor(snap.stats.profit_factor)
        print(json.dumps(data, ensure_ascii=False, indent=2, allow_nan=False))
        return 0

    stats = snap.stats
    print(f"Trade Journal v{__version__}")
    print("=" * 50)
    if snap.trade_filter.is_active:
        f = snap.trade_filter
        print(f"Filter: symbol={f.symbol!r} strategy={f.strategy!r} "
              f"from={f.date_from!r} to={f.date_to!r}")
        print()

    print("[Performance]")
    print(f"  Trades:         {stats.trades:,}")
    print(f"  Wins / Losses:  {stats.wins:,} / {stats.losses:,}")
    print(f"  Win Rate:       {stats.win_rate:g}%")
    print(f"  Total PnL:      {_money(stats.total_pnl)}")
    print(f"  Avg PnL:        {_money(stats.avg_pnl)}")
    print(f"  Profit Factor:  {format_profit_factor(stats.profit_factor)}")
    print(f"  Max Drawdown:   {_money(stats.max_drawdown)}")
    print()
    print("[Capital]")
    print(f"  Initial:        {_money(snap.initial_capital)}")
    print(f"  Current:        {_money(snap.current_capital)}")

    if args.curve:
        print()
        print("[Equity Curve]")
        print(f"{'Date':<12} {'PnL':>12} {'Cumulative':>14}")
        print("-" * 40)
        for point in snap.equity.points:
            print(f"{point.date:<12} {point.daily_pnl:>12,.2f} {point.cumulative_pnl:>14,.2f}")

    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List trades (newest first)."""
    trades = _journal(args).snapshot(_filter(args)).trades
    if not trades:
        print("No trades")
        return 0

    print(f"{'ID':<34} {'Date':<11} {'Symbol':<10} {'Type':<6} {'PnL':>12}  Strategy")
    print("-" * 90)
    for t in trades[:args.limit] if args.limit else trades:
        print(f"{t.id:<34} {t.date:<11} {t.symbol:<10} {t.type.value:<6} "
              f"{t.pnl:>12,.2f}  {t.strategy}")
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    """Add a trade."""
    fields = _trade_fields(args)
    fields.setdefault("date", date.today().isoformat())
    fields.setdefault("pnl", 0.0)
    fields.setdefault("type", "Long")
    trade = _journal(args).add_trade(**fields)
    print(f"Trade added: {trade.id}")
    return 0


def cmd_edit(args: argparse.Namespace) -> int:
    """Edit a trade."""
    trade = _journal(args).update_trade(args.trade_id, **_trade_fields(args))
    print(f"Trade updated: {trade.id}")
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    """Delete a trade."""
    _journal(args).delete_trade(args.trade_id)
    print(f"Trade deleted: {args.trade_id}")
    return 0


def cmd_clear(args: argparse.Namespace) -> int:
    """Delete all trades."""
    if not args.yes:
        print("Refusing to clear the journal without --yes")
        return 1
    count = _journal(args).clear()
    print(f"Cleared {count} trades")
    return 0


def cmd_import(args: argparse.Namespace) -> int:
    """Import trades from CSV."""
    imported = _journal(args).import_file(Path(args.file))
    print(f"Imported {len(imported)} trades")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Export trades to CSV."""
    output = args.output or f"trades_export_{date.today().isoformat()}.csv"
    path = _journal(args).export_file(Path(output))
    print(f"Exported: {path}")
    return 0


def cmd_capital(args: argparse.Namespace) -> int:
    """Show or set initial capital."""
    journal = _journal(args)
    if args.amount is not None:
        amount = journal.set_initial_capital(args.amount)
        print(f"Initial capital updated: {_money(amount)}")
        return 0
    snap = journal.snapshot()
    print(f"Initial capital: {_money(snap.initial_capital)}")
    print(f"Current capital: {_money(snap.current_capital)}")
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    """Per-symbol or per-strategy breakdown."""
    paths = _paths(args)
    snap = JournalService(paths=paths).snapshot(_filter(args))
    service = ReportService(
        paths=paths,
        config=ReportConfig(
            output_dir=paths.reports_dir,
            output_formats=tuple(args.formats.split(",")),
        ),
    )
    df = service.breakdown(snap.trades, by=args.by)

    print(f"[Breakdown by {args.by}]")
    print(f"{'Rank':<5} {'Group':<16} {'Trades':>7} {'Win%':>7} {'PnL':>14} {'PF':>7}")
    print("-" * 60)
    for row in df.iter_rows(named=True):
        print(f"{row['rank']:<5} {row['group'][:16]:<16} {row['trades']:>7} "
              f"{row['win_rate']:>6.1f}% {row['total_pnl']:>14,.2f} "
              f"{format_profit_factor(row['profit_factor']):>7}")

    if args.save:
        for path in service.save_report(df, args.output or f"{args.by}_breakdown"):
            print(f"Saved: {path}")
    return 0


def cmd_analyze(args: argparse.Namespace) -> int:
    """AI coaching commentary on the journal or one trade."""
    paths = _paths(args)
    journal = JournalService(paths=paths)
    lang = args.lang or SettingsRepository(paths).get_language()
    coach = CoachingService()

    if args.trade_id:
        print(coach.annotate_trade(journal, args.trade_id, lang=lang))
    else:
        print(coach.analyze_log(journal.snapshot(_filter(args)).trades, lang=lang))
    return 0


# =============================================================================
# Parser
# =============================================================================

def _add_filter_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--symbol", help="Symbol contains (case-insensitive)")
    parser.add_argument("--strategy", help="Strategy contains (case-insensitive)")
    parser.add_argument("--from", dest="date_from", help="From date (YYYY-MM-DD)")
    parser.add_argument("--to", dest="date_to", help="To date (YYYY-MM-DD)")


def _add_trade_options(parser: argparse.ArgumentParser, require_symbol: bool) -> None:
    parser.add_argument("--date", help="Trade date (YYYY-MM-DD, default today)")
    parser.add_argument("--time", help="Trade time (HH:mm)")
    parser.add_argument("--symbol", required=require_symbol, help="Instrument (e.g., EURUSD)")
    parser.add_argument("--type", choices=["Long", "Short"], help="Direction")
    parser.add_argument("--pnl", help="Realized profit/loss")
    parser.add_argument("--entry", help="Entry price")
    parser.add_argument("--exit", help="Exit price")
    parser.add_argument("--size", help="Position size")
    parser.add_argument("--stop-loss", dest="stop_loss", help="Stop loss")
    parser.add_argument("--take-profit", dest="take_profit", help="Take profit")
    parser.add_argument("--strategy", help="Strategy name")
    parser.add_argument("--notes", help="Notes")
    parser.add_argument("--entry-reason", dest="entry_reason", help="Reason for entry")
    parser.add_argument("--emotions", help="Emotions (e.g., Calm, Fear)")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="trade_journal",
        description="Trade Journal - Personal Trading Performance",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("--root", help="Journal root directory (default $TRADE_JOURNAL_HOME or .)")
    parser.add_argument("--log-level", help="Logging level (default $LOG_LEVEL or WARNING)")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # stats command
    stats_parser = subparsers.add_parser("stats", help="Show statistics")
    _add_filter_options(stats_parser)
    stats_parser.add_argument("--curve", action="store_true", help="Show equity curve")
    stats_parser.add_argument("--json", action="store_true", help="Output JSON")

    # list command
    list_parser = subparsers.add_parser("list", help="List trades")
    _add_filter_options(list_parser)
    list_parser.add_argument("-n", "--limit", type=int, default=0, help="Max rows (0 = all)")

    # add / edit commands
    add_parser = subparsers.add_parser("add", help="Add a trade")
    _add_trade_options(add_parser, require_symbol=True)

    edit_parser = subparsers.add_parser("edit", help="Edit a trade")
    edit_parser.add_argument("trade_id", help="Trade id")
    _add_trade_options(edit_parser, require_symbol=False)

    # delete / clear commands
    delete_parser = subparsers.add_parser("delete", help="Delete a trade")
    delete_parser.add_argument("trade_id", help="Trade id")

    clear_parser = subparsers.add_parser("clear", help="Delete all trades")
    clear_parser.add_argument("--yes", action="store_true", help="Confirm")

    # import / export commands
    import_parser = subparsers.add_parser("import", help="Import trades from CSV")
    import_parser.add_argument("file", help="CSV file")

    export_parser = subparsers.add_parser("export", help="Export trades to CSV")
    export_parser.add_argument("-o", "--output", help="Output file")

    # capital command
    capital_parser = subparsers.add_parser("capital", help="Show or set initial capital")
    capital_parser.add_argument("amount", nargs="?", type=float, help="New initial capital")

    # report command
    report_parser = subparsers.add_parser("report", help="Breakdown report")
    _add_filter_options(report_parser)
    report_parser.add_argument("--by", choices=["symbol", "strategy"], default="symbol")
    report_parser.add_argument(
        "-f", "--formats",
        default="csv,parquet",
        help="Output formats (comma-separated: csv, parquet, xlsx)",
    )
    report_parser.add_argument("-o", "--output", help="Output filename (without extension)")
    report_parser.add_argument("--save", action="store_true", help="Save output files")

    # analyze command
    analyze_parser = subparsers.add_parser("analyze", help="AI coaching commentary")
    _add_filter_options(analyze_parser)
    analyze_parser.add_argument("--trade", dest="trade_id", help="Analyze one trade and store the result")
    analyze_parser.add_argument("--lang", choices=["en", "ar"], help="Reply language")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "stats": cmd_stats,
        "list": cmd_list,
        "add": cmd_add,
        "edit": cmd_edit,
        "delete": cmd_delete,
        "clear": cmd_clear,
        "import": cmd_import,
        "export": cmd_export,
        "capital": cmd_capital,
        "report": cmd_report,
        "analyze": cmd_analyze,
    }

    try:
        return commands[args.command](args)
    except (RepositoryError, TradeNotFoundError, ValueError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
