"""Application Layer: Use cases and service orchestration.

This layer contains:
- services/: Business logic orchestration
  - journal.py: Trade store operations and journal snapshots
  - report.py: Breakdown report generation
  - coaching.py: AI coaching commentary
"""

from trade_journal.application.services import (
    JournalService,
    JournalSnapshot,
    TradeNotFoundError,
    ReportService,
    ReportConfig,
    CoachingService,
)

__all__ = [
    "JournalService",
    "JournalSnapshot",
    "TradeNotFoundError",
    "ReportService",
    "ReportConfig",
    "CoachingService",
]
