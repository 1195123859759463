"""Simulated agent models."""

from typing import Literal

from pydantic import BaseModel, Field

AgentStatus = Literal["idle", "running", "completed", "error"]


class Agent(BaseModel):
    """A display-only background worker with a rolling performance series.

    ``completed`` and ``error`` only ever come from seed data; the simulator
    never moves an agent into either state.
    """

    id: str
    name: str
    role: str
    status: AgentStatus = "idle"
    last_event_text: str = ""
    performance: float = Field(default=0.0, description="Current cumulative metric (%).")
    trend: list[float] = Field(
        default_factory=list,
        description="Recent performance samples, oldest first (fixed-size window).",
    )
