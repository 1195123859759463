#!/usr/bin/env python3
"""CLI entrypoint for a headless dashboard session.

Usage::

    python run_dashboard.py
    python run_dashboard.py --config config/example.yaml --ticks 10
    python run_dashboard.py --provider mock --advise --message "Should I trim NVDA?"

The session seeds the portfolio and agents, logs the portfolio valuation,
runs the telemetry loop for a number of ticks, and optionally asks the
advisory service for portfolio advice or a chat reply.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import random
import sys

from dotenv import load_dotenv

from advisor.registry import available_services, create_advisory_service
from advisor.session import AdvisorSession
from models.config import DashboardConfig
from simulation.portfolio_book import PortfolioBook
from simulation.runner import TelemetryLoop
from simulation.telemetry import seed_agents
from valuation.metrics import (
    distribution_percent_of,
    history_series,
    summarize,
    value_distribution,
)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run a headless portfolio dashboard session.",
    )
    parser.add_argument(
        "--config",
        default=None,
        type=str,
        help="Path to a YAML configuration file (defaults are used when omitted).",
    )
    parser.add_argument(
        "--ticks",
        default=5,
        type=int,
        help="Number of telemetry ticks to run (default: 5, 0 disables the loop).",
    )
    parser.add_argument(
        "--provider",
        default=None,
        choices=available_services(),
        help="Override the configured advisory service.",
    )
    parser.add_argument(
        "--advise",
        action="store_true",
        help="Ask the advisory service for portfolio advice.",
    )
    parser.add_argument(
        "--message",
        default=None,
        type=str,
        help="Send one chat message to the advisor.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO).",
    )
    return parser.parse_args()


def _setup_logging(level: str) -> None:
    """Configure root logger with a clean format."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


def _log_valuation(logger: logging.Logger, book: PortfolioBook, config: DashboardConfig) -> None:
    positions = book.positions
    summary = summarize(positions)
    logger.info(
        "Market value $%.2f, cost $%.2f, unrealized P/L $%.2f (%+.2f%%), health: %s",
        summary.total_market_value,
        summary.total_cost_value,
        summary.total_unrealized_pl,
        summary.total_unrealized_pl_percent,
        summary.health,
    )
    if summary.allocation_gap != 0:
        logger.info(
            "Target allocation totals %.1f%% (recommended: 100%%).",
            summary.total_target_allocation,
        )

    for item in value_distribution(positions, config.valuation.palette):
        logger.info(
            "  %-6s $%12.2f  %5.1f%%  %s",
            item.symbol,
            item.value,
            distribution_percent_of(item, positions),
            item.color,
        )

    history = history_series(
        summary.total_market_value,
        points=config.valuation.history_points,
        floor=config.valuation.history_floor,
    )
    logger.info(
        "Synthetic history: %s",
        ", ".join(f"{p.label}=${p.value:,.0f}" for p in history),
    )


async def _main() -> None:
    args = _parse_args()
    _setup_logging(args.log_level)
    load_dotenv()

    logger = logging.getLogger(__name__)

    if args.config is not None:
        logger.info("Loading config from '%s'...", args.config)
        config = DashboardConfig.from_yaml(args.config)
    else:
        config = DashboardConfig()
    if args.provider is not None:
        config.advisor.service = args.provider

    rng = random.Random(config.telemetry.seed)
    book = PortfolioBook(config.portfolio, rng=rng)
    _log_valuation(logger, book, config)

    agents = seed_agents(rng, window=config.telemetry.trend_window)
    if args.ticks > 0:
        loop = TelemetryLoop(agents, config.telemetry, rng=rng)
        await loop.run(max_ticks=args.ticks)
    for agent in agents:
        logger.info(
            "Agent %-15s %-9s %+7.2f%%  %s",
            agent.name,
            agent.status,
            agent.performance,
            agent.last_event_text,
        )

    if args.advise or args.message:
        service = create_advisory_service(config.advisor)
        session = AdvisorSession(service)
        if args.advise:
            advice = await session.ask_for_advice(book.snapshot())
            logger.info("Advisor: %s", advice)
        if args.message:
            reply = await session.send_message(args.message)
            logger.info("Advisor reply: %s", reply)


if __name__ == "__main__":
    asyncio.run(_main())
