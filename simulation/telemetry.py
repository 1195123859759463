"""Agent telemetry simulator.

Agents are display-only: nothing is executed. Each ``tick`` nudges the
performance of every ``running`` agent by bounded uniform noise and pushes the
new value into its fixed-size trend window. Status changes only through an
explicit user toggle; the simulator never enters ``completed`` or ``error``,
which exist purely as seed data.

Randomness is always injected as a ``random.Random`` so runs can be seeded.
"""

from __future__ import annotations

import logging
import random
from typing import Sequence

from models.agents import Agent

logger = logging.getLogger(__name__)

DEFAULT_TREND_WINDOW = 15
DEFAULT_MAX_DELTA = 0.5

# (id, name, role, status, last event, performance)
_SEED_AGENTS: list[tuple[str, str, str, str, str, float]] = [
    ("1", "Macro-Bot 01", "Global Sentiment Analysis", "running", "Scanning Reuters API...", 12.4),
    ("2", "TechScraper", "NASDAQ Data Mining", "running", "Parsing NVDA quarterly reports...", 18.2),
    ("3", "RiskGuard", "Hedge Orchestrator", "idle", "Standby for market volatility", 4.1),
    ("4", "OpenClaw-Prime", "Main Strategy Engine", "running", "Rebalancing portfolio weights...", 22.8),
    ("5", "Ethos-Analyzer", "ESG Scoring Agent", "error", "Connection timeout: SEC database", -2.4),
]


def initial_trend(base: float, rng: random.Random, window: int = DEFAULT_TREND_WINDOW) -> list[float]:
    """Return *window* samples scattered uniformly within +/-2 of *base*."""
    return [base + rng.uniform(-2.0, 2.0) for _ in range(window)]


def seed_agents(rng: random.Random, window: int = DEFAULT_TREND_WINDOW) -> list[Agent]:
    """Create the fixed set of agents present at session start."""
    return [
        Agent(
            id=agent_id,
            name=name,
            role=role,
            status=status,
            last_event_text=last_event,
            performance=performance,
            trend=initial_trend(performance, rng, window),
        )
        for agent_id, name, role, status, last_event, performance in _SEED_AGENTS
    ]


def tick(
    agents: Sequence[Agent],
    rng: random.Random,
    max_delta: float = DEFAULT_MAX_DELTA,
) -> list[Agent]:
    """Advance every running agent by one step, in place.

    Performance moves by ``uniform(-max_delta, max_delta)`` rounded to two
    decimals and is pushed onto the trend while the oldest sample is dropped,
    so the trend keeps whatever length it was seeded with. An empty trend
    stays empty. Returns the agents that were updated.
    """
    updated: list[Agent] = []
    for agent in agents:
        if agent.status != "running":
            continue

        delta = rng.uniform(-max_delta, max_delta)
        agent.performance = round(agent.performance + delta, 2)

        if agent.trend:
            agent.trend = [*agent.trend[1:], agent.performance]
        updated.append(agent)

    if updated:
        logger.debug("Tick updated %d agent(s).", len(updated))
    return updated


def find_agent(agents: Sequence[Agent], agent_id: str) -> Agent | None:
    for agent in agents:
        if agent.id == agent_id:
            return agent
    return None


def toggle_status(agents: Sequence[Agent], agent_id: str) -> Agent | None:
    """Flip one agent between running and idle.

    A running agent becomes idle; any other status becomes running. The trend
    is left untouched, so a resumed agent continues from where it paused.
    Returns ``None`` if no agent has *agent_id*.
    """
    agent = find_agent(agents, agent_id)
    if agent is None:
        logger.warning("Toggle ignored: unknown agent id %r.", agent_id)
        return None

    previous = agent.status
    agent.status = "idle" if previous == "running" else "running"
    logger.info("Agent %s (%s): %s -> %s", agent.id, agent.name, previous, agent.status)
    return agent
