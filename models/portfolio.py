"""Portfolio position models."""

from pydantic import BaseModel, Field


class Position(BaseModel):
    """One held asset.

    Only the inputs are stored; market value, cost value and unrealized P/L
    are recomputed from them on every access. Range checks on prices and
    quantities belong to whoever builds the position, not to this model.
    """

    symbol: str = Field(description="Short identifier, unique within a portfolio.")
    name: str = Field(description="Display label.")
    market_price: float = Field(description="Current per-unit price.")
    price_change_percent: float = 0.0
    target_allocation_percent: float = Field(
        default=0.0,
        description="User-specified target weight (%). Portfolio-wide sum is advisory only.",
    )
    quantity: float = 0.0
    cost_basis_price: float = Field(default=0.0, description="Per-unit price at acquisition.")

    @property
    def market_value(self) -> float:
        return self.market_price * self.quantity

    @property
    def cost_value(self) -> float:
        return self.cost_basis_price * self.quantity

    @property
    def unrealized_pl(self) -> float:
        return self.market_value - self.cost_value

    @property
    def unrealized_pl_percent(self) -> float:
        if self.cost_basis_price > 0:
            return (self.market_price - self.cost_basis_price) / self.cost_basis_price * 100
        return 0.0
