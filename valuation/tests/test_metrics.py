"""
Tests for valuation/metrics.py.

Covers:
  1. Totals over positions (market value, cost, P/L, P/L percent)
  2. Empty and zero-cost portfolios (no division by zero)
  3. Value distribution colours and percentages
  4. Synthetic history series
  5. Health label boundaries
  6. Allocation total / gap and the summary bundle
"""

import math

import pytest

from models.config import DEFAULT_PALETTE
from models.portfolio import Position
from valuation.metrics import (
    DistributionSlice,
    allocation_gap,
    distribution_percent_of,
    health_label,
    history_series,
    summarize,
    total_cost_value,
    total_market_value,
    total_target_allocation,
    total_unrealized_pl,
    total_unrealized_pl_percent,
    value_distribution,
)


# =============================================================================
# FIXTURES
# =============================================================================


def _position(symbol: str, price: float, qty: float, buy: float, allocation: float = 10.0) -> Position:
    return Position(
        symbol=symbol,
        name=f"{symbol} Corp",
        market_price=price,
        quantity=qty,
        cost_basis_price=buy,
        target_allocation_percent=allocation,
    )


@pytest.fixture
def aapl() -> Position:
    return _position("AAPL", 182.52, 50, 150.00, allocation=30)


@pytest.fixture
def portfolio() -> list[Position]:
    return [
        _position("AAPL", 182.52, 50, 150.00, allocation=30),
        _position("TSLA", 175.05, 20, 190.00, allocation=25),
        _position("NVDA", 822.79, 15, 450.00, allocation=20),
        _position("XOM", 110.20, 100, 95.50, allocation=15),
        _position("JPM", 188.45, 40, 165.20, allocation=10),
    ]


# =============================================================================
# 1. TOTALS
# =============================================================================


class TestTotals:

    def test_single_position_end_to_end(self, aapl):
        positions = [aapl]
        assert aapl.market_value == pytest.approx(9126.00)
        assert aapl.cost_value == pytest.approx(7500.00)
        assert aapl.unrealized_pl == pytest.approx(1626.00)
        assert aapl.unrealized_pl_percent == pytest.approx(21.68)
        assert total_unrealized_pl_percent(positions) == pytest.approx(21.68)
        assert health_label(total_unrealized_pl_percent(positions)) == "Excellent"

    def test_totals_are_sums(self, portfolio):
        expected_value = sum(p.market_price * p.quantity for p in portfolio)
        expected_cost = sum(p.cost_basis_price * p.quantity for p in portfolio)
        assert total_market_value(portfolio) == pytest.approx(expected_value)
        assert total_cost_value(portfolio) == pytest.approx(expected_cost)
        assert total_unrealized_pl(portfolio) == pytest.approx(expected_value - expected_cost)

    def test_totals_ignore_order(self, portfolio):
        reversed_portfolio = list(reversed(portfolio))
        assert total_market_value(reversed_portfolio) == pytest.approx(total_market_value(portfolio))
        assert total_cost_value(reversed_portfolio) == pytest.approx(total_cost_value(portfolio))

    def test_pl_percent_relative_to_cost(self, portfolio):
        cost = total_cost_value(portfolio)
        expected = (total_market_value(portfolio) - cost) / cost * 100
        assert total_unrealized_pl_percent(portfolio) == pytest.approx(expected)

    def test_losing_position(self):
        tsla = _position("TSLA", 175.05, 20, 190.00)
        assert tsla.unrealized_pl == pytest.approx(-299.0)
        assert tsla.unrealized_pl_percent < 0


# =============================================================================
# 2. EMPTY / ZERO COST
# =============================================================================


class TestZeroGuards:

    def test_empty_portfolio(self):
        assert total_market_value([]) == 0
        assert total_cost_value([]) == 0
        assert total_unrealized_pl([]) == 0
        assert total_unrealized_pl_percent([]) == 0

    def test_zero_cost_basis(self):
        gift = _position("GIFT", 100.0, 10, 0.0)
        assert gift.unrealized_pl_percent == 0
        assert total_unrealized_pl_percent([gift]) == 0
        assert total_unrealized_pl([gift]) == pytest.approx(1000.0)

    def test_zero_quantity_positions(self):
        positions = [_position("AAA", 10.0, 0, 5.0), _position("BBB", 20.0, 0, 8.0)]
        assert total_market_value(positions) == 0
        assert total_unrealized_pl_percent(positions) == 0


# =============================================================================
# 3. DISTRIBUTION
# =============================================================================


class TestDistribution:

    def test_follows_input_order(self, portfolio):
        slices = value_distribution(portfolio)
        assert [s.symbol for s in slices] == [p.symbol for p in portfolio]
        assert [s.value for s in slices] == pytest.approx([p.market_value for p in portfolio])

    def test_colours_cycle_through_palette(self):
        positions = [_position(f"S{i}", 10.0, 1, 1.0) for i in range(len(DEFAULT_PALETTE) + 2)]
        slices = value_distribution(positions)
        assert slices[0].color == DEFAULT_PALETTE[0]
        assert slices[len(DEFAULT_PALETTE)].color == DEFAULT_PALETTE[0]
        assert slices[len(DEFAULT_PALETTE) + 1].color == DEFAULT_PALETTE[1]

    def test_custom_palette(self, portfolio):
        slices = value_distribution(portfolio, palette=["#000", "#fff"])
        assert [s.color for s in slices] == ["#000", "#fff", "#000", "#fff", "#000"]

    def test_percentages_sum_to_100(self, portfolio):
        slices = value_distribution(portfolio)
        total = sum(distribution_percent_of(s, portfolio) for s in slices)
        assert total == pytest.approx(100.0)

    def test_percent_accepts_position(self, portfolio, aapl):
        expected = aapl.market_value / total_market_value(portfolio) * 100
        assert distribution_percent_of(aapl, portfolio) == pytest.approx(expected)

    def test_percent_is_zero_when_total_is_zero(self):
        positions = [_position("AAA", 0.0, 10, 5.0), _position("BBB", 12.0, 0, 8.0)]
        slices = value_distribution(positions)
        percents = [distribution_percent_of(s, positions) for s in slices]
        assert percents == [0.0, 0.0]
        assert not any(math.isnan(p) for p in percents)

    def test_percent_of_slice_with_empty_portfolio(self):
        item = DistributionSlice(symbol="X", value=10.0, color="#000")
        assert distribution_percent_of(item, []) == 0.0


# =============================================================================
# 4. HISTORY
# =============================================================================


class TestHistorySeries:

    def test_default_length_and_labels(self):
        series = history_series(1000.0)
        assert len(series) == 7
        assert [p.label for p in series] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

    def test_ends_at_current_value(self):
        series = history_series(12345.0, points=10)
        assert series[-1].value == pytest.approx(12345.0)
        assert series[-1].label == "Sun"

    def test_strictly_increasing(self):
        values = [p.value for p in history_series(5000.0, points=12)]
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_starts_at_floor(self):
        series = history_series(2000.0, points=5, floor=0.9)
        assert series[0].value == pytest.approx(1800.0)

    def test_degenerate_lengths(self):
        assert history_series(100.0, points=0) == []
        single = history_series(100.0, points=1)
        assert len(single) == 1
        assert single[0].value == pytest.approx(100.0)

    def test_zero_value_portfolio(self):
        assert all(p.value == 0 for p in history_series(0.0))


# =============================================================================
# 5. HEALTH
# =============================================================================


class TestHealthLabel:

    @pytest.mark.parametrize(
        "pl_percent,expected",
        [
            (10.0001, "Excellent"),
            (50.0, "Excellent"),
            (10.0, "Good"),
            (0.0001, "Good"),
            (0.0, "At Risk"),
            (-3.5, "At Risk"),
        ],
    )
    def test_boundaries(self, pl_percent, expected):
        assert health_label(pl_percent) == expected


# =============================================================================
# 6. ALLOCATION / SUMMARY
# =============================================================================


class TestAllocationAndSummary:

    def test_allocation_total_and_gap(self, portfolio):
        assert total_target_allocation(portfolio) == pytest.approx(100.0)
        assert allocation_gap(portfolio) == pytest.approx(0.0)

    def test_allocation_gap_is_reported_not_fixed(self, portfolio):
        portfolio[0].target_allocation_percent = 45
        assert allocation_gap(portfolio) == pytest.approx(15.0)
        assert portfolio[0].target_allocation_percent == 45

    def test_summary_matches_functions(self, portfolio):
        summary = summarize(portfolio)
        assert summary.total_market_value == pytest.approx(total_market_value(portfolio))
        assert summary.total_cost_value == pytest.approx(total_cost_value(portfolio))
        assert summary.total_unrealized_pl_percent == pytest.approx(total_unrealized_pl_percent(portfolio))
        assert summary.health == health_label(summary.total_unrealized_pl_percent)

    def test_empty_summary(self):
        summary = summarize([])
        assert summary.total_market_value == 0
        assert summary.health == "At Risk"
        assert summary.allocation_gap == pytest.approx(-100.0)
