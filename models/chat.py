"""Chat transcript models shared by the advisor session and services."""

from typing import Literal

from pydantic import BaseModel

ChatRole = Literal["user", "model"]


class ChatMessage(BaseModel):
    """One transcript entry. ``image`` is an opaque payload attached by the user."""

    role: ChatRole
    text: str
    image: bytes | None = None
    image_mime_type: str = "image/png"
