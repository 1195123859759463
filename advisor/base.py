"""Abstract base class for advisory services.

Every advisory backend (LangChain chat models, the offline mock, ...)
implements this interface so the session can use them interchangeably.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from models.chat import ChatMessage
from models.config import AdvisorConfig
from models.portfolio import Position


class AdvisoryError(RuntimeError):
    """Raised when the provider cannot produce a result (transport, auth, quota...)."""


class AdvisoryService(ABC):
    """Common interface for generative advisory backends.

    Each request is a single round trip: no retries and no cancellation.
    Implementations raise ``AdvisoryError`` on any failure and leave fallback
    handling to the caller.
    """

    def __init__(self, config: AdvisorConfig) -> None:
        self.config = config

    @abstractmethod
    async def request_portfolio_advice(self, positions: Sequence[Position]) -> str:
        """Return free-text optimisation advice for *positions*."""

    @abstractmethod
    async def request_chat_reply(
        self,
        message: str,
        history: Sequence[ChatMessage],
        image: bytes | None = None,
        image_mime_type: str = "image/png",
    ) -> str:
        """Continue the transcript *history* with a reply to *message*.

        *history* holds the turns before *message*, oldest first.
        """

    @abstractmethod
    async def request_spoken_audio(self, text: str) -> bytes:
        """Synthesize *text* and return the raw audio payload."""
