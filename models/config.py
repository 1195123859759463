"""Dashboard configuration models, loaded from YAML.

These live in ``models/`` because they are shared by the CLI entrypoint, the
telemetry loop, the valuation helpers and the advisory services.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from models.portfolio import Position

DEFAULT_PALETTE: list[str] = [
    "#6366f1",
    "#f59e0b",
    "#10b981",
    "#ef4444",
    "#8b5cf6",
    "#06b6d4",
    "#ec4899",
]


class AdvisorConfig(BaseModel):
    """Configuration for the advisory service."""

    service: str = Field(
        default="langchain",
        description="Registered advisory service name, e.g. 'langchain', 'mock'.",
    )
    llm_provider: str = Field(
        default="openai",
        description="LLM provider identifier, e.g. 'openai', 'anthropic'.",
    )
    advice_model: str = Field(
        default="gpt-4o-mini",
        description="Model used for one-shot portfolio advice.",
    )
    chat_model: str = Field(
        default="gpt-4o",
        description="Model used for the chat assistant.",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for portfolio advice.",
    )
    top_p: float = Field(
        default=0.8,
        gt=0.0,
        le=1.0,
        description="Nucleus sampling cutoff for portfolio advice.",
    )
    tts_model: str = Field(
        default="gpt-4o-mini-tts",
        description="Text-to-speech model (OpenAI provider only).",
    )
    tts_voice: str = Field(default="coral", description="Text-to-speech voice name.")
    system_prompt_override: str | None = Field(
        default=None,
        description="Optional override for the chat assistant's system prompt.",
    )


class TelemetryConfig(BaseModel):
    """Configuration for the agent telemetry simulator."""

    tick_interval_seconds: float = Field(
        default=3.0,
        gt=0,
        description="Wall-clock period between ticks.",
    )
    trend_window: int = Field(
        default=15,
        ge=1,
        description="Number of samples each seeded agent trend holds; ticks keep that length.",
    )
    max_delta: float = Field(
        default=0.5,
        ge=0,
        description="Bound of the uniform per-tick performance change.",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the telemetry random source; unseeded when omitted.",
    )


class ValuationConfig(BaseModel):
    """Display settings for derived portfolio series."""

    history_points: int = Field(default=7, ge=0)
    history_floor: float = Field(
        default=0.95,
        gt=0.0,
        le=1.0,
        description="Fraction of current value the synthetic history starts from.",
    )
    palette: list[str] = Field(default_factory=lambda: list(DEFAULT_PALETTE), min_length=1)


class DashboardConfig(BaseModel):
    """Top-level configuration for a dashboard session, loaded from YAML."""

    advisor: AdvisorConfig = Field(default_factory=AdvisorConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)
    valuation: ValuationConfig = Field(default_factory=ValuationConfig)
    portfolio: list[Position] | None = Field(
        default=None,
        description="Seed positions; the built-in demo portfolio is used when omitted.",
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> DashboardConfig:
        """Load and validate a ``DashboardConfig`` from a YAML file.

        Raises ``FileNotFoundError`` if the file does not exist and
        ``ValueError`` if the content is not a valid YAML mapping.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open(encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ValueError(
                f"Expected a YAML mapping in {path}, got {type(raw).__name__}."
            )

        return cls(**raw)
