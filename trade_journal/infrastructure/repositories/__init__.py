"""Data repositories for the trade journal.

Provides abstracted storage access through the Repository pattern:
- TradeRepository: The persisted trade store
- SettingsRepository: Initial capital and language
"""

from trade_journal.infrastructure.repositories.base import Repository, RepositoryError
from trade_journal.infrastructure.repositories.trade_repo import TradeRepository
from trade_journal.infrastructure.repositories.settings_repo import SettingsRepository

__all__ = [
    "Repository",
    "RepositoryError",
    "TradeRepository",
    "SettingsRepository",
]
