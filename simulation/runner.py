"""Async telemetry loop: drives ``tick`` on a fixed wall-clock period.

Lifecycle:
    1. Build the loop around the session's agent list and random source.
    2. ``run`` awaits one tick, then sleeps for the configured interval,
       until ``stop`` is called or ``max_ticks`` is reached.

Ticks are strictly sequential: the next sleep only starts after the previous
tick has returned, so two ticks can never be in flight at once.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Callable, Sequence

from models.agents import Agent
from models.config import TelemetryConfig
from simulation.telemetry import tick

logger = logging.getLogger(__name__)


class TelemetryLoop:
    """Periodic driver for the telemetry simulator."""

    def __init__(
        self,
        agents: Sequence[Agent],
        config: TelemetryConfig | None = None,
        rng: random.Random | None = None,
        on_tick: Callable[[list[Agent]], None] | None = None,
    ) -> None:
        self._agents = agents
        self._config = config or TelemetryConfig()
        self._rng = rng or random.Random(self._config.seed)
        self._on_tick = on_tick
        self._stop_event = asyncio.Event()
        self._tick_count = 0
        self._running = False

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def running(self) -> bool:
        return self._running

    def step(self) -> list[Agent]:
        """Apply a single tick immediately."""
        updated = tick(
            self._agents,
            self._rng,
            max_delta=self._config.max_delta,
        )
        self._tick_count += 1
        if self._on_tick is not None:
            self._on_tick(updated)
        return updated

    async def run(self, max_ticks: int | None = None) -> None:
        """Tick every ``tick_interval_seconds`` until stopped or *max_ticks* ticks have run."""
        if self._running:
            raise RuntimeError("TelemetryLoop is already running.")

        self._running = True
        interval = self._config.tick_interval_seconds
        ticks_this_run = 0
        logger.info("Telemetry loop started (interval %.2fs).", interval)
        try:
            while not self._stop_event.is_set():
                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=interval)
                except asyncio.TimeoutError:
                    pass
                if self._stop_event.is_set():
                    break

                updated = self.step()
                ticks_this_run += 1
                logger.debug("Tick %d: %d agent(s) updated.", self._tick_count, len(updated))

                if max_ticks is not None and ticks_this_run >= max_ticks:
                    break
        finally:
            self._running = False
            self._stop_event.clear()
            logger.info("Telemetry loop stopped after %d tick(s).", self._tick_count)

    def stop(self) -> None:
        """Ask the loop to exit before its next tick.

        Calling this before ``run`` makes that run return without ticking.
        """
        self._stop_event.set()
