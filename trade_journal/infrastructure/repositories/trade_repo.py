"""Trade Repository: Access to the persisted trade store.

Provides read/write access to data/trades.json, a JSON list of trades
in camelCase wire form, newest first.
"""

import json
import logging

from trade_journal.domain.models import Trade
from trade_journal.infrastructure.repositories.base import Repository, RepositoryError
from trade_journal.infrastructure.config import DataPaths, DEFAULT_PATHS

logger = logging.getLogger(__name__)


class TradeRepository(Repository[list[Trade]]):
    """Repository for the trade store.

    A missing file is an empty journal. Every read returns a fresh list,
    so callers get a snapshot they can iterate while the store changes.

    Example:
        >>> repo = TradeRepository()
        >>> trades = repo.get_all()
        >>> repo.save_all([new_trade, *trades])
    """

    def __init__(self, paths: DataPaths = DEFAULT_PATHS):
        self._paths = paths
        self._cache: list[Trade] | None = None

    def get_all(self) -> list[Trade]:
        """Load all trades.

        Returns:
            Trades in store order (newest first)

        Raises:
            RepositoryError: If the file cannot be read or parsed
        """
        if self._cache is not None:
            return list(self._cache)

        path = self._paths.trades_file
        if not path.exists():
            self._cache = []
            return []

        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise RepositoryError(f"Failed to read trades: {e}", str(path))

        if not isinstance(raw, list):
            raise RepositoryError("Trade store must be a JSON list", str(path))

        try:
            trades = [Trade.from_dict(item) for item in raw]
        except (TypeError, ValueError) as e:
            raise RepositoryError(f"Invalid trade record: {e}", str(path))

        logger.debug("Loaded %d trades from %s", len(trades), path)
        self._cache = trades
        return list(trades)

    def save_all(self, trades: list[Trade]) -> None:
        """Replace the stored trades.

        Raises:
            RepositoryError: If the file cannot be written
        """
        path = self._paths.trades_file
        tmp_path = path.with_suffix(".json.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump([t.to_dict() for t in trades], f, ensure_ascii=False, indent=2)
            tmp_path.replace(path)
        except OSError as e:
            raise RepositoryError(f"Failed to save trades: {e}", str(path))

        logger.debug("Saved %d trades to %s", len(trades), path)
        self._cache = list(trades)

    def get_by_id(self, trade_id: str) -> Trade | None:
        """Get a trade by id, or None if not found."""
        for trade in self.get_all():
            if trade.id == trade_id:
                return trade
        return None

    def clear_cache(self) -> None:
        """Clear cached data."""
        self._cache = None
