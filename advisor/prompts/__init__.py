"""Prompt templates for the advisory services.

Templates are ``.txt`` files in this package directory rendered via Jinja2.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader

from models.portfolio import Position
from valuation.metrics import allocation_gap, total_target_allocation

# ---------------------------------------------------------------------------
# Jinja2 environment: templates live next to this __init__.py
# ---------------------------------------------------------------------------

_TEMPLATE_DIR = Path(__file__).resolve().parent
_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_DIR)),
    keep_trailing_newline=True,
)


def _load(name: str) -> str:
    """Return the raw text of a template file (no rendering)."""
    return (_TEMPLATE_DIR / name).read_text(encoding="utf-8")


CHAT_SYSTEM_PROMPT: str = _load("chat_system.txt").strip()
SPEECH_INSTRUCTIONS: str = _load("speech_instructions.txt").strip()


def portfolio_payload(positions: Sequence[Position]) -> list[dict]:
    """Holdings as plain dicts, with market value and P/L filled in."""
    payload = []
    for p in positions:
        item = p.model_dump()
        item["market_value"] = round(p.market_value, 2)
        item["unrealized_pl"] = round(p.unrealized_pl, 2)
        item["unrealized_pl_percent"] = round(p.unrealized_pl_percent, 2)
        payload.append(item)
    return payload


def build_advice_prompt(positions: Sequence[Position]) -> str:
    template = _env.get_template("portfolio_advice.txt")
    return template.render(
        portfolio_json=json.dumps(portfolio_payload(positions), indent=2),
        total_allocation=total_target_allocation(positions),
        allocation_gap=allocation_gap(positions),
    )
