"""Infrastructure layer for the trade journal.

Contains:
- config: Data paths and journal configuration
- repositories: JSON-backed storage
- csv_codec: CSV import/export
- ai_client: Narrative text generation
- logging_setup: Logging configuration
"""

from trade_journal.infrastructure.config import (
    DataPaths,
    JournalConfig,
    DEFAULT_PATHS,
    DEFAULT_CONFIG,
)
from trade_journal.infrastructure.repositories import (
    Repository,
    RepositoryError,
    TradeRepository,
    SettingsRepository,
)
from trade_journal.infrastructure.csv_codec import (
    CsvFormatError,
    parse_trades_csv,
    format_trades_csv,
)
from trade_journal.infrastructure.ai_client import (
    NarrativeClient,
    NarrativeClientError,
    GeminiNarrativeClient,
)
from trade_journal.infrastructure.logging_setup import configure_logging

__all__ = [
    # Config
    "DataPaths",
    "JournalConfig",
    "DEFAULT_PATHS",
    "DEFAULT_CONFIG",
    # Repositories
    "Repository",
    "RepositoryError",
    "TradeRepository",
    "SettingsRepository",
    # CSV
    "CsvFormatError",
    "parse_trades_csv",
    "format_trades_csv",
    # AI
    "NarrativeClient",
    "NarrativeClientError",
    "GeminiNarrativeClient",
    # Logging
    "configure_logging",
]
