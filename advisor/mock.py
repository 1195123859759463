"""Deterministic offline advisory service (no API calls, for tests and demos)."""

from __future__ import annotations

from typing import Sequence

from advisor.base import AdvisoryService
from advisor.registry import register
from models.chat import ChatMessage
from models.portfolio import Position
from valuation.metrics import summarize


@register("mock")
class MockAdvisor(AdvisoryService):
    """Canned responses derived from the request contents."""

    async def request_portfolio_advice(self, positions: Sequence[Position]) -> str:
        if not positions:
            return "[mock] The portfolio is empty; add holdings before asking for advice."

        summary = summarize(positions)
        largest = max(positions, key=lambda p: p.market_value)
        lines = [
            f"[mock] {len(positions)} holding(s) worth ${summary.total_market_value:,.2f}.",
            f"Unrealized P/L {summary.total_unrealized_pl_percent:+.2f}% ({summary.health}).",
            f"Largest position by value: {largest.symbol}.",
        ]
        if summary.allocation_gap != 0:
            lines.append(
                f"Target weights total {summary.total_target_allocation:.1f}%; "
                f"consider rebalancing toward 100%."
            )
        return " ".join(lines)

    async def request_chat_reply(
        self,
        message: str,
        history: Sequence[ChatMessage],
        image: bytes | None = None,
        image_mime_type: str = "image/png",
    ) -> str:
        reply = f"[mock] ({len(history)} prior turn(s)) You said: {message}"
        if image is not None:
            reply += f" [attached {image_mime_type}, {len(image)} bytes]"
        return reply

    async def request_spoken_audio(self, text: str) -> bytes:
        # One silent 16-bit sample per character.
        return b"\x00\x00" * len(text)
