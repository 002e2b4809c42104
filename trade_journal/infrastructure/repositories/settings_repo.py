"""Settings Repository: Access to journal settings.

Provides read/write access to data/settings.json:
- initialCapital: user-set starting capital (default 1000)
- language: coaching language, "ar" or "en" (default "ar")

Settings are stored independently of the trade store.
"""

import json
import logging
import math
from typing import Any

from trade_journal.infrastructure.repositories.base import Repository, RepositoryError
from trade_journal.infrastructure.config import (
    DataPaths,
    DEFAULT_PATHS,
    JournalConfig,
    DEFAULT_CONFIG,
    SUPPORTED_LANGUAGES,
)

logger = logging.getLogger(__name__)


class SettingsRepository(Repository[dict[str, Any]]):
    """Repository for journal settings.

    Unreadable or out-of-range values fall back to the configured
    defaults; only write failures raise.

    Example:
        >>> repo = SettingsRepository()
        >>> repo.get_initial_capital()
        1000.0
        >>> repo.save_initial_capital(5000)
    """

    def __init__(
        self,
        paths: DataPaths = DEFAULT_PATHS,
        config: JournalConfig = DEFAULT_CONFIG,
    ):
        self._paths = paths
        self._config = config
        self._cache: dict[str, Any] | None = None

    def get_all(self) -> dict[str, Any]:
        """Load all settings (empty dict if none are stored)."""
        if self._cache is not None:
            return dict(self._cache)

        path = self._paths.settings_file
        settings: dict[str, Any] = {}
        if path.exists():
            try:
                with open(path, encoding="utf-8") as f:
                    loaded = json.load(f)
                if isinstance(loaded, dict):
                    settings = loaded
                else:
                    logger.warning("Ignoring non-object settings file %s", path)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("Ignoring unreadable settings file %s: %s", path, e)

        self._cache = settings
        return dict(settings)

    def save_all(self, settings: dict[str, Any]) -> None:
        """Replace the stored settings.

        Raises:
            RepositoryError: If the file cannot be written
        """
        path = self._paths.settings_file
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(settings, f, ensure_ascii=False, indent=2)
        except OSError as e:
            raise RepositoryError(f"Failed to save settings: {e}", str(path))
        self._cache = dict(settings)

    # --- Initial capital ---

    def get_initial_capital(self) -> float:
        """Stored initial capital, or the configured default."""
        value = self.get_all().get("initialCapital")
        try:
            amount = float(value)
        except (TypeError, ValueError):
            return self._config.default_initial_capital
        if not math.isfinite(amount) or amount < 0:
            return self._config.default_initial_capital
        return amount

    def save_initial_capital(self, amount: float) -> None:
        """Persist the initial capital (caller validates the value)."""
        settings = self.get_all()
        settings["initialCapital"] = amount
        self.save_all(settings)

    # --- Language ---

    def get_language(self) -> str:
        """Stored language, or the configured default."""
        value = self.get_all().get("language")
        if value in SUPPORTED_LANGUAGES:
            return value
        return self._config.default_language

    def save_language(self, lang: str) -> None:
        """Persist the coaching language.

        Raises:
            ValueError: If lang is not supported
        """
        if lang not in SUPPORTED_LANGUAGES:
            raise ValueError(f"language must be one of {SUPPORTED_LANGUAGES}, got: {lang}")
        settings = self.get_all()
        settings["language"] = lang
        self.save_all(settings)

    def clear_cache(self) -> None:
        """Clear cached data."""
        self._cache = None
