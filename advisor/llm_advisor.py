"""LangChain-backed advisory service.

Portfolio advice and chat replies go through a LangChain chat model chosen by
``AdvisorConfig.llm_provider``; speech goes through the OpenAI audio API.
Every provider exception is re-raised as ``AdvisoryError``.
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Any, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from advisor.base import AdvisoryError, AdvisoryService
from advisor.prompts import CHAT_SYSTEM_PROMPT, SPEECH_INSTRUCTIONS, build_advice_prompt
from advisor.registry import register
from models.chat import ChatMessage
from models.config import AdvisorConfig
from models.portfolio import Position

logger = logging.getLogger(__name__)


def _create_llm(config: AdvisorConfig, model: str, *, sampling: bool):
    """Instantiate the appropriate LangChain chat model from config.

    *sampling* applies the configured temperature/top_p; chat replies use the
    provider defaults.
    """
    provider = config.llm_provider.lower()
    kwargs: dict[str, Any] = {"model": model}

    if provider == "openai":
        from langchain_openai import ChatOpenAI

        if sampling:
            kwargs.update(temperature=config.temperature, top_p=config.top_p)
        return ChatOpenAI(**kwargs)
    elif provider == "anthropic":
        from langchain_anthropic import ChatAnthropic

        # Anthropic rejects temperature and top_p together.
        if sampling:
            kwargs.update(temperature=config.temperature)
        return ChatAnthropic(**kwargs)
    else:
        raise ValueError(
            f"Unsupported LLM provider '{provider}'. "
            f"Supported: 'openai', 'anthropic'."
        )


@register("langchain")
class LangChainAdvisor(AdvisoryService):
    """Advisory service using LangChain chat models."""

    def __init__(self, config: AdvisorConfig) -> None:
        super().__init__(config)
        self._system_prompt = config.system_prompt_override or CHAT_SYSTEM_PROMPT
        self._advice_llm = None
        self._chat_llm = None

    async def request_portfolio_advice(self, positions: Sequence[Position]) -> str:
        if self._advice_llm is None:
            self._advice_llm = self._build_llm(self.config.advice_model, sampling=True)

        prompt = build_advice_prompt(positions)
        response = await self._ainvoke(self._advice_llm, [HumanMessage(content=prompt)])
        logger.info("Received portfolio advice for %d position(s).", len(positions))
        return response

    async def request_chat_reply(
        self,
        message: str,
        history: Sequence[ChatMessage],
        image: bytes | None = None,
        image_mime_type: str = "image/png",
    ) -> str:
        if self._chat_llm is None:
            self._chat_llm = self._build_llm(self.config.chat_model, sampling=False)

        messages = build_chat_messages(
            self._system_prompt, message, history, image, image_mime_type
        )
        return await self._ainvoke(self._chat_llm, messages)

    async def request_spoken_audio(self, text: str) -> bytes:
        """Return 16-bit mono PCM at 24 kHz from the OpenAI speech endpoint."""
        if self.config.llm_provider.lower() != "openai":
            raise AdvisoryError(
                f"Speech is not available for provider '{self.config.llm_provider}'."
            )

        try:
            from openai import AsyncOpenAI

            client = AsyncOpenAI()
            response = await client.audio.speech.create(
                model=self.config.tts_model,
                voice=self.config.tts_voice,
                input=text,
                instructions=SPEECH_INSTRUCTIONS,
                response_format="pcm",
            )
            audio = response.content
        except Exception as exc:
            raise AdvisoryError(f"Speech request failed: {exc}") from exc

        logger.debug("Received %d byte(s) of speech audio.", len(audio))
        return audio

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _build_llm(self, model: str, *, sampling: bool):
        try:
            return _create_llm(self.config, model, sampling=sampling)
        except Exception as exc:
            raise AdvisoryError(f"Could not create chat model '{model}': {exc}") from exc

    @staticmethod
    async def _ainvoke(llm, messages: list[BaseMessage]) -> str:
        try:
            response = await llm.ainvoke(messages)
        except Exception as exc:
            raise AdvisoryError(f"{type(exc).__name__}: {exc}") from exc
        return message_text(response)


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def build_chat_messages(
    system_prompt: str,
    message: str,
    history: Sequence[ChatMessage],
    image: bytes | None = None,
    image_mime_type: str = "image/png",
) -> list[BaseMessage]:
    """Convert a transcript plus the new user turn into LangChain messages.

    Only the text of earlier turns is sent; an image travels with the new
    turn as a base64 data URL.
    """
    messages: list[BaseMessage] = [SystemMessage(content=system_prompt)]
    for turn in history:
        if turn.role == "user":
            messages.append(HumanMessage(content=turn.text))
        else:
            messages.append(AIMessage(content=turn.text))

    if image is None:
        messages.append(HumanMessage(content=message))
    else:
        encoded = base64.b64encode(image).decode("ascii")
        messages.append(
            HumanMessage(
                content=[
                    {"type": "text", "text": message},
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:{image_mime_type};base64,{encoded}"},
                    },
                ]
            )
        )
    return messages


def message_text(message: BaseMessage) -> str:
    """Flatten a chat model response into plain text."""
    content = message.content
    if isinstance(content, str):
        return content

    parts: list[str] = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
        else:
            logger.debug("Skipping non-text content block: %s", json.dumps(block, default=str)[:80])
    return "".join(parts)
