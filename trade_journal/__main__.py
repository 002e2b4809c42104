"""Entry point for running trade_journal as a module.

Usage:
    python -m trade_journal [command] [options]

Commands:
    stats       Show statistics for the (filtered) journal
    list        List trades
    add         Add a trade
    edit        Edit a trade
    delete      Delete a trade
    clear       Delete all trades
    import      Import trades from CSV
    export      Export trades to CSV
    capital     Show or set initial capital
    report      Per-symbol or per-strategy breakdown
    analyze     AI coaching commentary

Examples:
    python -m trade_journal stats --symbol eur --curve
    python -m trade_journal import trades.csv
    python -m trade_journal capital 5000
    python -m trade_journal report --by strategy --save -f csv,xlsx
"""

import sys

from trade_journal.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
