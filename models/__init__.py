"""Data models for the portfolio dashboard.

Valuation, telemetry and the advisory services all import from models.
"""

from models.agents import Agent, AgentStatus
from models.chat import ChatMessage, ChatRole
from models.config import AdvisorConfig, DashboardConfig, TelemetryConfig, ValuationConfig
from models.portfolio import Position

__all__ = [
    # agents
    "Agent",
    "AgentStatus",
    # chat
    "ChatMessage",
    "ChatRole",
    # config
    "AdvisorConfig",
    "DashboardConfig",
    "TelemetryConfig",
    "ValuationConfig",
    # portfolio
    "Position",
]
