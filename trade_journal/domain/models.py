"""Domain Models: Core data structures for the trade journal.

These models represent the fundamental business entities:
- Trade: A single journal entry with realized PNL
- TradeType: Enum for trade direction
- TradeFilter: Active filter state for the journal view
- TradeStats: Aggregate performance metrics (derived, never persisted)
- EquityPoint / EquityCurve: Chronological cumulative PNL series

Design Principles:
- Immutable (frozen dataclass); edits produce a new Trade via replace()
- Validation in __post_init__ at the data-entry boundary
- camelCase wire mapping in to_dict()/from_dict() for storage and CSV
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class TradeType(str, Enum):
    """Trade direction."""

    LONG = "Long"
    SHORT = "Short"

    @classmethod
    def parse(cls, value: str | TradeType | None) -> TradeType:
        """Parse a direction in any casing; empty defaults to Long.

        Raises:
            ValueError: If value is not a known direction
        """
        if isinstance(value, TradeType):
            return value
        if not value or not value.strip():
            return cls.LONG
        normalized = value.strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        raise ValueError(f"type must be 'Long' or 'Short', got: {value}")


# Optional numeric fields: None is the "missing" marker, distinct from 0
NUMERIC_FIELDS = ("entry", "exit", "size", "stop_loss", "take_profit")

# Python attribute -> wire key (JSON store, CSV)
WIRE_KEYS = {
    "id": "id",
    "date": "date",
    "time": "time",
    "symbol": "symbol",
    "type": "type",
    "entry": "entry",
    "exit": "exit",
    "size": "size",
    "stop_loss": "stopLoss",
    "take_profit": "takeProfit",
    "pnl": "pnl",
    "strategy": "strategy",
    "notes": "notes",
    "entry_reason": "entryReason",
    "emotions": "emotions",
    "screenshot": "screenshot",
    "ai_analysis": "aiAnalysis",
}


def new_trade_id() -> str:
    """Mint a fresh trade id."""
    return uuid.uuid4().hex


def coerce_number(value: Any) -> float | None:
    """Parse user-entered numeric text; empty or malformed input is None.

    Example:
        >>> coerce_number("1.25"), coerce_number("abc"), coerce_number("")
        (1.25, None, None)
    """
    if value is None:
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def coerce_pnl(value: Any) -> float:
    """Parse user-entered PNL; malformed input defaults to 0."""
    number = coerce_number(value)
    return 0.0 if number is None else number


def _optional_float(value: Any, field_name: str) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field_name} must be numeric, got: {value!r}")
    if not math.isfinite(number):
        raise ValueError(f"{field_name} must be finite, got: {value!r}")
    return number


@dataclass(frozen=True, slots=True)
class Trade:
    """A single trade in the journal.

    Only ``pnl`` is consumed by the statistics engine; everything else is
    carried for display, filtering and AI context.

    Attributes:
        id: Unique identifier, assigned at creation
        date: Trade date in YYYY-MM-DD format
        symbol: Instrument identifier (e.g., "EURUSD")
        type: Long or Short
        pnl: Realized profit/loss (always finite)
        time: Optional clock time (HH:mm)
        entry, exit, size, stop_loss, take_profit: Optional prices/size
        strategy, notes, entry_reason, emotions: Free text
        screenshot: Opaque embedded image payload
        ai_analysis: Cached AI narrative

    Example:
        >>> trade = Trade(id="1", date="2024-01-15", symbol="EURUSD",
        ...               type=TradeType.LONG, pnl=120.5)
        >>> trade.is_win
        True
    """

    id: str
    date: str
    symbol: str
    type: TradeType
    pnl: float
    time: str | None = None
    entry: float | None = None
    exit: float | None = None
    size: float | None = None
    stop_loss: float | None = None
    take_profit: float | None = None
    strategy: str = ""
    notes: str = ""
    entry_reason: str = ""
    emotions: str = ""
    screenshot: str | None = None
    ai_analysis: str | None = None

    def __post_init__(self) -> None:
        """Validate all fields after initialization."""
        if not self.id:
            raise ValueError("id cannot be empty")
        if not self.date:
            raise ValueError("date cannot be empty")
        if not self.symbol:
            raise ValueError("symbol cannot be empty")
        object.__setattr__(self, "type", TradeType.parse(self.type))

        if isinstance(self.pnl, bool) or not isinstance(self.pnl, (int, float)):
            raise ValueError(f"pnl must be a number, got: {self.pnl!r}")
        if not math.isfinite(self.pnl):
            raise ValueError(f"pnl must be finite, got: {self.pnl}")
        object.__setattr__(self, "pnl", float(self.pnl))

        for name in NUMERIC_FIELDS:
            object.__setattr__(self, name, _optional_float(getattr(self, name), name))

    @property
    def is_win(self) -> bool:
        """Check if this trade was profitable."""
        return self.pnl > 0

    @property
    def is_loss(self) -> bool:
        """Check if this trade lost money."""
        return self.pnl < 0

    def with_changes(self, **changes: Any) -> Trade:
        """Return an edited copy; the id is never replaced."""
        changes.pop("id", None)
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase wire mapping."""
        result: dict[str, Any] = {}
        for attr, key in WIRE_KEYS.items():
            value = getattr(self, attr)
            result[key] = value.value if isinstance(value, TradeType) else value
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Trade:
        """Build a Trade from the camelCase wire mapping.

        Unknown keys are ignored. Missing text fields default to "".

        Raises:
            ValueError: If required fields are missing or invalid
        """
        kwargs: dict[str, Any] = {}
        for attr, key in WIRE_KEYS.items():
            if key in data:
                kwargs[attr] = data[key]
        for attr in ("strategy", "notes", "entry_reason", "emotions"):
            if kwargs.get(attr) is None:
                kwargs[attr] = ""
        if kwargs.get("pnl") is None:
            kwargs["pnl"] = 0.0
        for attr in ("id", "date", "symbol"):
            if attr not in kwargs:
                raise ValueError(f"{attr} cannot be empty")
        kwargs.setdefault("type", TradeType.LONG)
        return cls(**kwargs)


@dataclass(frozen=True, slots=True)
class TradeFilter:
    """Filter state for the journal view.

    Empty string means "no constraint" for that field.

    Attributes:
        symbol: Case-insensitive substring of the symbol
        strategy: Case-insensitive substring of the strategy
        date_from: Inclusive lower bound (YYYY-MM-DD)
        date_to: Inclusive upper bound (YYYY-MM-DD)
    """

    symbol: str = ""
    strategy: str = ""
    date_from: str = ""
    date_to: str = ""

    @property
    def is_active(self) -> bool:
        """Check if any constraint is set."""
        return bool(self.symbol or self.strategy or self.date_from or self.date_to)


@dataclass(frozen=True, slots=True)
class TradeStats:
    """Aggregate performance metrics for a trade collection.

    profit_factor is math.inf when there are profits but no losses.
    max_drawdown is zero or negative.
    """

    trades: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: float = 0.0
    total_pnl: float = 0.0
    avg_pnl: float = 0.0
    profit_factor: float = 0.0
    max_drawdown: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with camelCase keys."""
        return {
            "trades": self.trades,
            "wins": self.wins,
            "losses": self.losses,
            "winRate": self.win_rate,
            "totalPnL": self.total_pnl,
            "avgPnL": self.avg_pnl,
            "profitFactor": self.profit_factor,
            "maxDrawdown": self.max_drawdown,
        }


@dataclass(frozen=True, slots=True)
class EquityPoint:
    """One point on the equity curve (one per trade)."""

    date: str
    cumulative_pnl: float
    daily_pnl: float


@dataclass(frozen=True, slots=True)
class EquityCurve:
    """Chronological cumulative PNL series with its maximum drawdown."""

    points: tuple[EquityPoint, ...] = ()
    max_drawdown: float = 0.0

    @property
    def cumulative(self) -> list[float]:
        """Cumulative PNL values in curve order."""
        return [p.cumulative_pnl for p in self.points]

    def __len__(self) -> int:
        return len(self.points)
