"""Unit tests for domain/metrics and domain/filters.

Tests verify:
1. Filter predicate semantics (substring, strategy, inclusive dates)
2. Aggregate statistics and rounding
3. Equity curve ordering and maximum drawdown
4. Capital coupling to the filtered total
"""

import math
import random

import pytest

from trade_journal.domain.models import Trade, TradeFilter, TradeStats
from trade_journal.domain.filters import apply_filter, matches_filter
from trade_journal.domain.metrics import (
    build_equity_curve,
    compute_stats,
    current_capital,
    drawdown_series,
    format_profit_factor,
    gross_profit_and_loss,
    max_drawdown,
    profit_factor,
    round_half_away,
    sort_chronologically,
    validate_initial_capital,
)


def make_trade(pnl, date="2024-01-01", symbol="EURUSD", strategy="", trade_id=None):
    """Build a minimal trade for metric tests."""
    make_trade.counter += 1
    return Trade(
        id=trade_id or f"t{make_trade.counter}",
        date=date,
        symbol=symbol,
        type="Long",
        pnl=pnl,
        strategy=strategy,
    )


make_trade.counter = 0


@pytest.fixture
def scenario_a():
    """Three trades: +100, -50, +200 on consecutive days."""
    return [
        make_trade(100, "2024-01-01"),
        make_trade(-50, "2024-01-02"),
        make_trade(200, "2024-01-03"),
    ]


# =============================================================================
# Filter Tests
# =============================================================================

class TestFilter:
    """Tests for matches_filter / apply_filter."""

    def test_symbol_substring_case_insensitive(self):
        """Symbol 'eur' matches EURUSD only."""
        trades = [make_trade(1, symbol="EURUSD"), make_trade(1, symbol="GBPUSD")]
        result = apply_filter(trades, TradeFilter(symbol="eur"))
        assert [t.symbol for t in result] == ["EURUSD"]

    def test_empty_filter_passes_all(self):
        trades = [make_trade(1), make_trade(-1)]
        assert apply_filter(trades, TradeFilter()) == trades

    def test_strategy_requires_trade_strategy(self):
        """Trades without a strategy never match a strategy filter."""
        trades = [make_trade(1, strategy=""), make_trade(1, strategy="Breakout")]
        result = apply_filter(trades, TradeFilter(strategy="break"))
        assert [t.strategy for t in result] == ["Breakout"]

    def test_date_bounds_inclusive(self):
        """Both date bounds are inclusive."""
        trades = [
            make_trade(1, "2024-01-01"),
            make_trade(1, "2024-01-02"),
            make_trade(1, "2024-01-03"),
        ]
        result = apply_filter(
            trades, TradeFilter(date_from="2024-01-02", date_to="2024-01-03")
        )
        assert [t.date for t in result] == ["2024-01-02", "2024-01-03"]

    def test_all_constraints_combined(self):
        """A trade must pass every active constraint."""
        trade = make_trade(1, "2024-02-01", symbol="XAUUSD", strategy="Trend")
        assert matches_filter(trade, TradeFilter(symbol="xau", strategy="trend"))
        assert not matches_filter(
            trade, TradeFilter(symbol="xau", date_to="2024-01-31")
        )

    def test_idempotent(self):
        """Re-applying a filter to its own output changes nothing."""
        trades = [
            make_trade(1, "2024-01-01", symbol="EURUSD", strategy="Trend"),
            make_trade(1, "2024-01-05", symbol="EURGBP", strategy=""),
            make_trade(1, "2024-01-09", symbol="GBPUSD", strategy="trend"),
        ]
        trade_filter = TradeFilter(symbol="usd", strategy="TREND", date_to="2024-01-31")
        once = apply_filter(trades, trade_filter)
        assert apply_filter(once, trade_filter) == once
        assert len(once) == 2

    def test_preserves_order(self):
        """Filtered output keeps store order."""
        trades = [make_trade(i, "2024-01-0%d" % (9 - i)) for i in range(5)]
        assert apply_filter(trades, TradeFilter()) == trades


# =============================================================================
# Rounding Tests
# =============================================================================

class TestRounding:
    """Characterization of half-value tie-breaking."""

    @pytest.mark.parametrize("value,places,expected", [
        (0.125, 2, 0.13),
        (-0.125, 2, -0.13),
        (2.675, 2, 2.68),
        (66.65, 1, 66.7),
        (66.66666666666667, 1, 66.7),
        (83.33333333333333, 2, 83.33),
        (0.5, 0, 1.0),
        (2.5, 0, 3.0),
    ])
    def test_half_away_from_zero(self, value, places, expected):
        assert round_half_away(value, places) == expected

    def test_large_values_untouched(self):
        assert round_half_away(1e16, 2) == 1e16


# =============================================================================
# Statistics Tests
# =============================================================================

class TestComputeStats:
    """Tests for compute_stats."""

    def test_scenario_a(self, scenario_a):
        """Mixed wins and losses."""
        stats = compute_stats(scenario_a)
        assert stats.trades == 3
        assert stats.total_pnl == 250
        assert stats.wins == 2
        assert stats.losses == 1
        assert stats.win_rate == 66.7
        assert stats.avg_pnl == 83.33
        assert stats.profit_factor == 6
        assert stats.max_drawdown == -50

    def test_gross_profit_and_loss(self, scenario_a):
        assert gross_profit_and_loss(scenario_a) == (300, 50)

    def test_scenario_b_empty(self):
        """Empty collection yields all-zero stats."""
        stats = compute_stats([])
        assert stats == TradeStats()
        assert stats.max_drawdown == 0

    def test_scenario_c_all_losses(self):
        """All-losing trades: profit factor 0, win rate 0."""
        stats = compute_stats([make_trade(-10), make_trade(-20)])
        assert stats.profit_factor == 0
        assert stats.win_rate == 0
        assert stats.losses == 2
        assert stats.max_drawdown == -20

    def test_all_wins_infinite_profit_factor(self):
        """Profit with no losses gives an infinite profit factor."""
        stats = compute_stats([make_trade(10), make_trade(5)])
        assert math.isinf(stats.profit_factor)
        assert format_profit_factor(stats.profit_factor) == "∞"
        assert stats.max_drawdown == 0

    def test_break_even_only(self):
        """Zero-PNL trades are neither wins nor losses."""
        stats = compute_stats([make_trade(0), make_trade(0)])
        assert stats.wins == 0
        assert stats.losses == 0
        assert stats.win_rate == 0
        assert stats.profit_factor == 0

    def test_profit_factor_rounding(self):
        assert profit_factor(100, 30) == 3.33
        assert profit_factor(0, 0) == 0
        assert format_profit_factor(3.33) == "3.33"

    def test_order_independent(self, scenario_a):
        """Store order does not change the stats."""
        shuffled = list(reversed(scenario_a))
        assert compute_stats(shuffled) == compute_stats(scenario_a)

    def test_invariants_random(self):
        """wins + losses <= trades and max_drawdown <= 0."""
        rng = random.Random(7)
        for _ in range(50):
            trades = [
                make_trade(rng.choice([-1, 0, 1]) * rng.randint(0, 500),
                           f"2024-01-{rng.randint(1, 28):02d}")
                for _ in range(rng.randint(1, 20))
            ]
            stats = compute_stats(trades)
            assert stats.wins + stats.losses <= stats.trades
            assert stats.max_drawdown <= 0
            assert 0 <= stats.win_rate <= 100
            assert stats.total_pnl == pytest.approx(sum(t.pnl for t in trades))

    def test_wins_plus_losses_equal_without_zero_pnl(self, scenario_a):
        stats = compute_stats(scenario_a)
        assert stats.wins + stats.losses == stats.trades

    def test_does_not_mutate_input(self, scenario_a):
        before = list(scenario_a)
        compute_stats(scenario_a)
        assert scenario_a == before


# =============================================================================
# Equity Curve Tests
# =============================================================================

class TestEquityCurve:
    """Tests for build_equity_curve and drawdown helpers."""

    def test_scenario_a_curve(self, scenario_a):
        curve = build_equity_curve(scenario_a)
        assert curve.cumulative == [100, 50, 250]
        assert [p.daily_pnl for p in curve.points] == [100, -50, 200]
        assert curve.max_drawdown == -50

    def test_drawdown_series(self):
        assert drawdown_series([100, 50, 250]) == [0, 50, 0]

    def test_max_drawdown_never_negative_zero(self):
        result = max_drawdown([10, 20, 30])
        assert result == 0.0
        assert math.copysign(1.0, result) == 1.0

    def test_first_point_is_its_own_peak(self):
        """A leading loss is not a drawdown from zero."""
        assert max_drawdown([-100, -150]) == -50

    def test_sorted_chronologically(self):
        """Store order (newest first) is sorted to calendar order."""
        trades = [
            make_trade(200, "2024-01-03"),
            make_trade(-50, "2024-01-02"),
            make_trade(100, "2024-01-01"),
        ]
        curve = build_equity_curve(trades)
        assert [p.date for p in curve.points] == [
            "2024-01-01", "2024-01-02", "2024-01-03",
        ]
        assert curve.cumulative == [100, 50, 250]

    def test_same_date_stable(self):
        """Same-day trades keep their relative input order."""
        first = make_trade(-30, "2024-01-01", trade_id="first")
        second = make_trade(10, "2024-01-01", trade_id="second")
        ordered = sort_chronologically([first, second])
        assert [t.id for t in ordered] == ["first", "second"]

    def test_unparseable_dates_last(self):
        trades = [make_trade(1, "someday"), make_trade(2, "2024-01-01")]
        assert [t.date for t in sort_chronologically(trades)] == [
            "2024-01-01", "someday",
        ]

    def test_zero_drawdown_iff_non_decreasing(self):
        """max_drawdown is 0 exactly when the curve never falls."""
        rng = random.Random(11)
        for _ in range(100):
            cumulative = [float(rng.randint(-50, 50)) for _ in range(rng.randint(1, 12))]
            non_decreasing = all(a <= b for a, b in zip(cumulative, cumulative[1:]))
            assert (max_drawdown(cumulative) == 0) == non_decreasing
            assert max_drawdown(cumulative) <= 0

    def test_empty(self):
        curve = build_equity_curve([])
        assert len(curve) == 0
        assert curve.max_drawdown == 0

    def test_input_not_mutated(self):
        trades = [make_trade(1, "2024-01-02"), make_trade(2, "2024-01-01")]
        before = list(trades)
        build_equity_curve(trades)
        assert trades == before


# =============================================================================
# Capital Tests
# =============================================================================

class TestCapital:
    """Tests for capital tracking."""

    def test_current_capital(self, scenario_a):
        assert current_capital(1000, compute_stats(scenario_a)) == 1250

    def test_follows_filter(self):
        """Capital uses the filtered total, not the all-time total."""
        trades = [
            make_trade(100, symbol="EURUSD"),
            make_trade(-300, symbol="GBPUSD"),
        ]
        filtered = apply_filter(trades, TradeFilter(symbol="eur"))
        assert current_capital(1000, compute_stats(filtered)) == 1100
        assert current_capital(1000, compute_stats(trades)) == 800

    def test_validate_initial_capital(self):
        assert validate_initial_capital(0) == 0.0
        assert validate_initial_capital("2500") == 2500.0

    def test_validate_rejects_negative(self):
        with pytest.raises(ValueError, match="non-negative"):
            validate_initial_capital(-1)

    def test_validate_rejects_non_finite(self):
        with pytest.raises(ValueError, match="finite"):
            validate_initial_capital(math.inf)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
