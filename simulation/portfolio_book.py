"""In-process portfolio book: the single owner of the session's positions.

The book adds, removes and re-weights positions. Invalid input (blank symbol
or name, a symbol already held) is ignored rather than reported: the call is
a no-op and returns ``None`` / ``False``.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Iterable

from models.portfolio import Position

logger = logging.getLogger(__name__)

DEFAULT_POSITIONS: list[Position] = [
    Position(symbol="AAPL", name="Apple Inc.", market_price=182.52, price_change_percent=1.2,
             target_allocation_percent=30, quantity=50, cost_basis_price=150.00),
    Position(symbol="TSLA", name="Tesla Inc.", market_price=175.05, price_change_percent=-2.4,
             target_allocation_percent=25, quantity=20, cost_basis_price=190.00),
    Position(symbol="NVDA", name="Nvidia", market_price=822.79, price_change_percent=4.5,
             target_allocation_percent=20, quantity=15, cost_basis_price=450.00),
    Position(symbol="XOM", name="Exxon Mobil", market_price=110.20, price_change_percent=0.5,
             target_allocation_percent=15, quantity=100, cost_basis_price=95.50),
    Position(symbol="JPM", name="JPMorgan Chase", market_price=188.45, price_change_percent=-0.2,
             target_allocation_percent=10, quantity=40, cost_basis_price=165.20),
]


class PortfolioBook:
    """Ordered, symbol-unique collection of positions for one session.

    Valuation functions read ``positions`` directly; hand ``snapshot()`` to
    anything that might hold on to the data across edits.
    """

    def __init__(
        self,
        positions: Iterable[Position] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._positions: list[Position] = []
        seed = DEFAULT_POSITIONS if positions is None else positions
        for position in seed:
            if self.get_position(position.symbol) is not None:
                logger.warning("Skipping duplicate seed position %s.", position.symbol)
                continue
            self._positions.append(position.model_copy(deep=True))

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    @property
    def positions(self) -> list[Position]:
        return self._positions

    def snapshot(self) -> list[Position]:
        """Return deep copies of the current positions, in order."""
        return [p.model_copy(deep=True) for p in self._positions]

    def get_position(self, symbol: str) -> Position | None:
        for position in self._positions:
            if position.symbol == symbol:
                return position
        return None

    def add_position(
        self,
        symbol: str,
        name: str,
        quantity: float = 0.0,
        cost_basis_price: float = 0.0,
        target_allocation_percent: float = 10.0,
        market_price: float | None = None,
        price_change_percent: float | None = None,
    ) -> Position | None:
        """Append a new position and return it.

        *symbol* is stripped and upper-cased. Without a quoted *market_price*
        a mock price in [50, 549] and a change in [-5, 5) are drawn from the
        book's random source.
        """
        symbol = symbol.strip().upper()
        name = name.strip()
        if not symbol or not name:
            logger.debug("Ignoring add: symbol and name are required.")
            return None
        if self.get_position(symbol) is not None:
            logger.debug("Ignoring add: %s is already held.", symbol)
            return None

        if market_price is None:
            market_price = float(math.floor(self._rng.random() * 500) + 50)
        if price_change_percent is None:
            price_change_percent = self._rng.random() * 10 - 5

        position = Position(
            symbol=symbol,
            name=name,
            market_price=market_price,
            price_change_percent=price_change_percent,
            target_allocation_percent=target_allocation_percent,
            quantity=quantity,
            cost_basis_price=cost_basis_price,
        )
        self._positions.append(position)
        logger.info("Added %s (%s), %s @ %.2f.", symbol, name, quantity, cost_basis_price)
        return position

    def remove_position(self, symbol: str) -> bool:
        """Drop the position held under *symbol*. Returns whether one was removed."""
        before = len(self._positions)
        self._positions = [p for p in self._positions if p.symbol != symbol]
        removed = len(self._positions) != before
        if removed:
            logger.info("Removed %s.", symbol)
        return removed

    def update_allocation(self, symbol: str, value: float) -> bool:
        """Set the target weight of *symbol* in place."""
        position = self.get_position(symbol)
        if position is None:
            return False
        position.target_allocation_percent = value
        return True
