"""Derived portfolio metrics."""

from valuation.metrics import (
    DistributionSlice,
    HistoryPoint,
    PortfolioSummary,
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

__all__ = [
    "DistributionSlice",
    "HistoryPoint",
    "PortfolioSummary",
    "allocation_gap",
    "distribution_percent_of",
    "health_label",
    "history_series",
    "summarize",
    "total_cost_value",
    "total_market_value",
    "total_target_allocation",
    "total_unrealized_pl",
    "total_unrealized_pl_percent",
    "value_distribution",
]
