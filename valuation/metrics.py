"""Portfolio valuation: totals, P/L, value distribution and health.

Every function here is pure and total over a list of ``Position`` objects.
Division by a zero total is guarded explicitly and yields 0, never NaN.
Inputs are not validated; negative prices or quantities simply flow through
the arithmetic.
"""

from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel

from models.config import DEFAULT_PALETTE
from models.portfolio import Position

_DAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

HEALTH_EXCELLENT = "Excellent"
HEALTH_GOOD = "Good"
HEALTH_AT_RISK = "At Risk"


class DistributionSlice(BaseModel):
    """Market value of one position with its chart colour."""

    symbol: str
    value: float
    color: str


class HistoryPoint(BaseModel):
    label: str
    value: float


class PortfolioSummary(BaseModel):
    """Headline figures for the dashboard stat cards."""

    total_market_value: float
    total_cost_value: float
    total_unrealized_pl: float
    total_unrealized_pl_percent: float
    health: str
    total_target_allocation: float
    allocation_gap: float


# ------------------------------------------------------------------
# Totals
# ------------------------------------------------------------------

def total_market_value(positions: Sequence[Position]) -> float:
    return sum((p.market_value for p in positions), 0.0)


def total_cost_value(positions: Sequence[Position]) -> float:
    return sum((p.cost_value for p in positions), 0.0)


def total_unrealized_pl(positions: Sequence[Position]) -> float:
    return total_market_value(positions) - total_cost_value(positions)


def total_unrealized_pl_percent(positions: Sequence[Position]) -> float:
    """Unrealized P/L relative to cost; 0 when nothing has been paid."""
    cost = total_cost_value(positions)
    if cost > 0:
        return total_unrealized_pl(positions) / cost * 100
    return 0.0


# ------------------------------------------------------------------
# Distribution
# ------------------------------------------------------------------

def value_distribution(
    positions: Sequence[Position],
    palette: Sequence[str] = DEFAULT_PALETTE,
) -> list[DistributionSlice]:
    """Pair each position's market value with a colour, in input order.

    Colours are assigned cyclically by index, so they repeat once the
    portfolio outgrows the palette.
    """
    return [
        DistributionSlice(
            symbol=p.symbol,
            value=p.market_value,
            color=palette[i % len(palette)],
        )
        for i, p in enumerate(positions)
    ]


def distribution_percent_of(
    item: DistributionSlice | Position,
    positions: Sequence[Position],
) -> float:
    """Share (%) of the portfolio's market value held by *item*."""
    total = total_market_value(positions)
    if total == 0:
        return 0.0
    value = item.market_value if isinstance(item, Position) else item.value
    return value / total * 100


# ------------------------------------------------------------------
# Synthetic history
# ------------------------------------------------------------------

def history_series(
    total_value: float,
    points: int = 7,
    floor: float = 0.95,
) -> list[HistoryPoint]:
    """Build a smoothed run-up to *total_value* for the performance chart.

    This is a display approximation, not recorded history: the current value
    is scaled by strictly increasing fractions that start at *floor* and end
    at exactly 1.0 (quadratic ease-out). Labels are weekdays ending on Sunday.
    """
    if points <= 0:
        return []

    series: list[HistoryPoint] = []
    for i in range(points):
        if points == 1:
            fraction = 1.0
        else:
            t = i / (points - 1)
            fraction = 1.0 - (1.0 - floor) * (1.0 - t) ** 2
        series.append(
            HistoryPoint(
                label=_DAY_LABELS[(i - points) % len(_DAY_LABELS)],
                value=total_value * fraction,
            )
        )
    return series


# ------------------------------------------------------------------
# Health and allocation
# ------------------------------------------------------------------

def health_label(pl_percent: float) -> str:
    """Classify P/L percent: above 10 is Excellent, (0, 10] Good, else At Risk."""
    if pl_percent > 10:
        return HEALTH_EXCELLENT
    if pl_percent > 0:
        return HEALTH_GOOD
    return HEALTH_AT_RISK


def total_target_allocation(positions: Sequence[Position]) -> float:
    """Sum of target weights. Not required to equal 100."""
    return sum((p.target_allocation_percent for p in positions), 0.0)


def allocation_gap(positions: Sequence[Position]) -> float:
    """How far the target weights are from 100% (positive = over-allocated)."""
    return total_target_allocation(positions) - 100.0


def summarize(positions: Sequence[Position]) -> PortfolioSummary:
    pl_percent = total_unrealized_pl_percent(positions)
    return PortfolioSummary(
        total_market_value=total_market_value(positions),
        total_cost_value=total_cost_value(positions),
        total_unrealized_pl=total_unrealized_pl(positions),
        total_unrealized_pl_percent=pl_percent,
        health=health_label(pl_percent),
        total_target_allocation=total_target_allocation(positions),
        allocation_gap=allocation_gap(positions),
    )
