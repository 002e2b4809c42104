"""Configuration: Centralized paths and settings.

This module provides:
- DataPaths: File paths for the journal's local storage
- JournalConfig: Defaults for capital, language, AI and reports

Directory Structure:
    <root>/
    └── data/
        ├── trades.json          # Trade store (newest first)
        ├── settings.json        # Initial capital, language
        └── reports/             # Breakdown report output
"""

import os
from dataclasses import dataclass
from pathlib import Path

HOME_ENV_VAR = "TRADE_JOURNAL_HOME"


@dataclass(frozen=True)
class DataPaths:
    """File paths for data sources.

    Attributes:
        root: Journal root directory
    """

    root: Path = Path(".")

    @classmethod
    def from_env(cls) -> "DataPaths":
        """Paths rooted at $TRADE_JOURNAL_HOME, or the current directory."""
        return cls(root=Path(os.getenv(HOME_ENV_VAR, ".")))

    # --- Directories ---

    @property
    def data_dir(self) -> Path:
        """Main data directory."""
        return self.root / "data"

    @property
    def reports_dir(self) -> Path:
        """Breakdown report output."""
        return self.data_dir / "reports"

    # --- Files ---

    @property
    def trades_file(self) -> Path:
        """Trade store (JSON list)."""
        return self.data_dir / "trades.json"

    @property
    def settings_file(self) -> Path:
        """Journal settings (JSON object)."""
        return self.data_dir / "settings.json"

    # --- Helper Methods ---

    def ensure_dirs(self) -> None:
        """Create all required directories."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.reports_dir.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class JournalConfig:
    """Journal-wide defaults.

    Attributes:
        default_initial_capital: Capital used before the user sets one
        default_language: Prompt/reply language ("ar" or "en")
        ai_model: Model name for the narrative client
        ai_api_key_env: Env vars checked, in order, for the AI API key
        report_formats: Default breakdown report formats
    """

    default_initial_capital: float = 1000.0
    default_language: str = "ar"
    ai_model: str = "gemini-2.5-flash"
    ai_api_key_env: tuple[str, ...] = ("GEMINI_API_KEY", "API_KEY")
    report_formats: tuple[str, ...] = ("csv", "parquet")

    def api_key(self) -> str:
        """First non-empty API key from the configured env vars."""
        for name in self.ai_api_key_env:
            value = os.getenv(name)
            if value:
                return value
        return ""


# Default instances
DEFAULT_PATHS = DataPaths()
DEFAULT_CONFIG = JournalConfig()

SUPPORTED_LANGUAGES = ("ar", "en")
