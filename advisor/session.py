"""Advisor session: the boundary between the dashboard and an advisory service.

The session owns the chat transcript and the busy flags. A request is only
issued when the previous one of the same kind has settled; a call made while
busy is refused and returns ``None``. Provider failures never propagate: they
are logged and replaced by fixed fallback text (or, for speech, by ``None`` so
playback is skipped). Nothing is retried and nothing can be cancelled.
"""

from __future__ import annotations

import logging
from typing import Sequence

from advisor.base import AdvisoryService
from models.chat import ChatMessage
from models.portfolio import Position

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Welcome to OpenClaw Intelligence. I'm your strategic advisor. "
    "How can I help you optimize your portfolio today?"
)
ADVICE_EMPTY_FALLBACK = "No advice received."
ADVICE_ERROR_FALLBACK = "Error analyzing portfolio. Check the advisory service."
CHAT_EMPTY_FALLBACK = "I'm sorry, I couldn't process that request."
CHAT_ERROR_FALLBACK = "Error connecting to the advisory service. Please check your API key."


class AdvisorSession:
    """Per-session state for portfolio advice, chat and speech."""

    def __init__(self, service: AdvisoryService, welcome_message: str = WELCOME_MESSAGE) -> None:
        self._service = service
        self._messages: list[ChatMessage] = []
        if welcome_message:
            self._messages.append(ChatMessage(role="model", text=welcome_message))
        self._advising = False
        self._chatting = False
        self._advice: str | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def advice(self) -> str | None:
        """Most recent advice text (or fallback), ``None`` before the first request."""
        return self._advice

    @property
    def advising(self) -> bool:
        return self._advising

    @property
    def chatting(self) -> bool:
        return self._chatting

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def ask_for_advice(self, positions: Sequence[Position]) -> str | None:
        """Request advice for *positions*; returns the advice or a fallback."""
        if self._advising:
            logger.warning("Advice request ignored: a previous request is still in flight.")
            return None

        self._advising = True
        try:
            result = await self._service.request_portfolio_advice(list(positions))
            self._advice = result or ADVICE_EMPTY_FALLBACK
        except Exception as exc:
            logger.warning("Portfolio advice failed: %s", exc, exc_info=True)
            self._advice = ADVICE_ERROR_FALLBACK
        finally:
            self._advising = False
        return self._advice

    async def send_message(
        self,
        text: str,
        image: bytes | None = None,
        image_mime_type: str = "image/png",
    ) -> str | None:
        """Append a user turn, fetch the reply and append it to the transcript.

        A blank message without an image is ignored. Returns the reply text
        (or fallback), or ``None`` if nothing was sent.
        """
        if not text.strip() and image is None:
            return None
        if self._chatting:
            logger.warning("Chat message ignored: waiting for the previous reply.")
            return None

        history = list(self._messages)
        self._messages.append(
            ChatMessage(role="user", text=text, image=image, image_mime_type=image_mime_type)
        )

        self._chatting = True
        try:
            reply = await self._service.request_chat_reply(
                text, history, image=image, image_mime_type=image_mime_type
            )
            reply = reply or CHAT_EMPTY_FALLBACK
        except Exception as exc:
            logger.warning("Chat request failed: %s", exc, exc_info=True)
            reply = CHAT_ERROR_FALLBACK
        finally:
            self._chatting = False

        self._messages.append(ChatMessage(role="model", text=reply))
        return reply

    async def speak(self, text: str) -> bytes | None:
        """Fetch spoken audio for *text*; ``None`` means skip playback."""
        try:
            audio = await self._service.request_spoken_audio(text)
        except Exception as exc:
            logger.error("Speech request failed: %s", exc)
            return None
        return audio or None
