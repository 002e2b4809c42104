"""Trader Profile: Behavioral summary used as coaching context.

Summarizes a trade collection into the handful of facts a coach needs:
win rate, best and worst symbol by summed PNL, average win/loss size,
and the trend over the five most recent trades.

The store is newest first, so "recent" means the head of the list.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Literal, Sequence

from trade_journal.domain.models import Trade
from trade_journal.domain.metrics.statistics import round_half_away

RecentTrend = Literal["Winning", "Losing", "Neutral"]

RECENT_WINDOW = 5


@dataclass(frozen=True, slots=True)
class TraderProfile:
    """Behavioral profile of a trader.

    Attributes:
        win_rate: Percentage of winning trades, whole number
        total_trades: Number of trades
        best_pair: Symbol with the highest summed PNL
        worst_pair: Symbol with the lowest summed PNL
        avg_win: Mean PNL of winning trades
        avg_loss: Mean absolute PNL of losing trades
        recent_trend: Winning / Losing / Neutral over the last 5 trades
    """
    win_rate: int
    total_trades: int
    best_pair: str
    worst_pair: str
    avg_win: float
    avg_loss: float
    recent_trend: RecentTrend

    def summary(self, lang: str = "en") -> str:
        """One-line profile used in coaching prompts."""
        if lang == "ar":
            return (
                f"ملف المتداول: نسبة الفوز {self.win_rate}%، "
                f"أفضل زوج {self.best_pair}، أسوأ زوج {self.worst_pair}. "
                f"الاتجاه الأخير: {self.recent_trend}."
            )
        return (
            f"Trader Profile: Win Rate {self.win_rate}%, "
            f"Best Pair {self.best_pair}, Worst Pair {self.worst_pair}. "
            f"Recent Trend: {self.recent_trend}."
        )


EMPTY_PROFILE = TraderProfile(
    win_rate=0,
    total_trades=0,
    best_pair="None",
    worst_pair="None",
    avg_win=0.0,
    avg_loss=0.0,
    recent_trend="Neutral",
)


def recent_trend(trades: Sequence[Trade], window: int = RECENT_WINDOW) -> RecentTrend:
    """Classify the most recent trades.

    Winning: at least 4 wins among the last 5.
    Losing: at most 1 win, with at least 3 trades to judge.
    """
    recent = trades[:window]
    recent_wins = sum(1 for t in recent if t.pnl > 0)
    if recent_wins >= 4:
        return "Winning"
    if recent_wins <= 1 and len(recent) >= 3:
        return "Losing"
    return "Neutral"


def analyze_trader_profile(trades: Sequence[Trade]) -> TraderProfile:
    """Build a TraderProfile from trades in store order (newest first)."""
    if not trades:
        return EMPTY_PROFILE

    wins = [t.pnl for t in trades if t.pnl > 0]
    losses = [t.pnl for t in trades if t.pnl < 0]

    pair_pnl: dict[str, float] = defaultdict(float)
    for trade in trades:
        pair_pnl[trade.symbol] += trade.pnl
    # Stable sort keeps first-seen order among equal totals
    ranked = sorted(pair_pnl.items(), key=lambda item: item[1], reverse=True)

    return TraderProfile(
        win_rate=int(round_half_away(len(wins) / len(trades) * 100, 0)),
        total_trades=len(trades),
        best_pair=ranked[0][0],
        worst_pair=ranked[-1][0],
        avg_win=sum(wins) / len(wins) if wins else 0.0,
        avg_loss=abs(sum(losses) / len(losses)) if losses else 0.0,
        recent_trend=recent_trend(trades),
    )
