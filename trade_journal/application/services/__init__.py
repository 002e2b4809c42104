"""Application Services for the trade journal.

Services orchestrate repository access to implement use cases.

Available services:
- JournalService: Trade store operations and the filtered journal view
- ReportService: Per-symbol/per-strategy breakdown reports
- CoachingService: AI narrative commentary
"""

from trade_journal.application.services.journal import (
    JournalService,
    JournalSnapshot,
    TradeNotFoundError,
)
from trade_journal.application.services.report import (
    ReportService,
    ReportConfig,
    trades_frame,
    equity_frame,
)
from trade_journal.application.services.coaching import (
    CoachingService,
    fallback_message,
)

__all__ = [
    "JournalService",
    "JournalSnapshot",
    "TradeNotFoundError",
    "ReportService",
    "ReportConfig",
    "trades_frame",
    "equity_frame",
    "CoachingService",
    "fallback_message",
]
